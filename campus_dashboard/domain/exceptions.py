"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataIngestionError(DomainException):
    """Seed data is malformed or carries an unknown enum value"""

    pass


class UnknownRecordError(DomainException):
    """Referenced record does not exist in its collection"""

    pass


class ConfirmationRequiredError(DomainException):
    """Destructive action submitted without explicit confirmation"""

    pass


class InvalidModalTransitionError(DomainException):
    """Modal action does not apply to the modal's current state"""

    pass


class AuthenticationError(DomainException):
    """Login rejected by the mock authenticator"""

    pass
