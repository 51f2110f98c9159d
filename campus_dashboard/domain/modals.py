"""Confirmation modals - closed -> open -> (confirm | cancel) -> closed"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from campus_dashboard.domain.exceptions import ConfirmationRequiredError, InvalidModalTransitionError
from campus_dashboard.domain.models import Employee, StockCategory, Student


class ModalState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass(frozen=True)
class SalaryAdjustment:
    """Pending salary change for one employee"""

    employee: Employee
    new_salary: float
    reason: str
    kind: str = "salary_adjustment"


@dataclass(frozen=True)
class StudentArchive:
    student: Student
    kind: str = "student_archive"


@dataclass(frozen=True)
class CategoryRemoval:
    category: StockCategory
    kind: str = "category_removal"


ModalSubject = Union[SalaryAdjustment, StudentArchive, CategoryRemoval]


def describe(subject: ModalSubject) -> str:
    """Prompt shown to the user before a destructive action"""
    if isinstance(subject, SalaryAdjustment):
        return (
            f"Change salary of {subject.employee.full_name} from "
            f"{subject.employee.salary:,.2f} to {subject.new_salary:,.2f}?"
        )
    if isinstance(subject, StudentArchive):
        return f"Archive {subject.student.full_name}? This hides the record from the overview list."
    if isinstance(subject, CategoryRemoval):
        return f"Delete category '{subject.category.name}'?"
    raise TypeError(f"Unsupported modal subject: {type(subject).__name__}")


class ModalController:
    """One modal per page; only one subject can be open at a time"""

    def __init__(self):
        self.state = ModalState.CLOSED
        self.subject: Optional[ModalSubject] = None

    @property
    def is_open(self) -> bool:
        return self.state == ModalState.OPEN

    def open(self, subject: ModalSubject) -> None:
        if self.is_open:
            raise InvalidModalTransitionError("A modal is already open")
        self.state = ModalState.OPEN
        self.subject = subject

    def confirm(self) -> ModalSubject:
        """Close the modal and hand back the confirmed subject"""
        if not self.is_open:
            raise InvalidModalTransitionError("Cannot confirm a closed modal")
        subject = self.subject
        self._close()
        return subject

    def cancel(self) -> None:
        if not self.is_open:
            raise InvalidModalTransitionError("Cannot cancel a closed modal")
        self._close()

    def _close(self) -> None:
        self.state = ModalState.CLOSED
        self.subject = None


def run_confirmation(subject: ModalSubject, confirmed: bool) -> ModalSubject:
    """
    Drive a modal through one open/decide cycle.

    Raises:
        ConfirmationRequiredError: The user did not confirm the action
    """
    modal = ModalController()
    modal.open(subject)
    if not confirmed:
        modal.cancel()
        raise ConfirmationRequiredError(describe(subject))
    return modal.confirm()
