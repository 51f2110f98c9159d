"""Route surface - page titles, sidebar sections and login redirects"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
from urllib.parse import quote, unquote

LOGIN_PATH = "/login"
HOME_PATH = "/dashboard"
NOT_FOUND_TITLE = "Not found"

# Protected pages: path -> window/breadcrumb title
ROUTE_TITLES: Dict[str, str] = {
    "/dashboard": "Executive Dashboard",
    "/students": "Student Overview",
    "/students/register": "Student Registration",
    "/students/class": "Class Management",
    "/students/deadline": "Deadlines & Compliance",
    "/students/payment": "Student Payments",
    "/students/books": "Books Distribution",
    "/students/graduated": "Graduated Students",
    "/stock/categories": "Stock Categories",
    "/stock/products": "Product Catalogue",
    "/stock/pos": "Point of Sale",
    "/stock/reports": "Inventory Reports",
    "/employees": "Employee Directory",
    "/employees/attendance": "Attendance Tracking",
    "/employees/salary": "Salary Management",
    "/employees/schedule": "Scheduling",
    "/investment/members": "Investment Members",
    "/investment/payments": "Investment Payments",
    "/investment/table": "Investment Performance",
}

PUBLIC_TITLES: Dict[str, str] = {LOGIN_PATH: "Login"}


@dataclass(frozen=True)
class NavItem:
    label: str
    to: str


@dataclass(frozen=True)
class NavSection:
    label: str
    icon: str
    to: Optional[str] = None
    items: List[NavItem] = field(default_factory=list)


NAV_SECTIONS: List[NavSection] = [
    NavSection(label="Dashboard", icon="layout-dashboard", to="/dashboard"),
    NavSection(
        label="Student Management",
        icon="graduation-cap",
        items=[
            NavItem("Overview", "/students"),
            NavItem("Registration", "/students/register"),
            NavItem("Classes", "/students/class"),
            NavItem("Deadlines", "/students/deadline"),
            NavItem("Payments", "/students/payment"),
            NavItem("Books", "/students/books"),
            NavItem("Graduated", "/students/graduated"),
        ],
    ),
    NavSection(
        label="Stock Management",
        icon="warehouse",
        items=[
            NavItem("Categories", "/stock/categories"),
            NavItem("Products", "/stock/products"),
            NavItem("Point of Sale", "/stock/pos"),
            NavItem("Reports", "/stock/reports"),
        ],
    ),
    NavSection(
        label="Employee Management",
        icon="users",
        items=[
            NavItem("Directory", "/employees"),
            NavItem("Attendance", "/employees/attendance"),
            NavItem("Salary", "/employees/salary"),
            NavItem("Schedules", "/employees/schedule"),
        ],
    ),
    NavSection(
        label="Investment",
        icon="piggy-bank",
        items=[
            NavItem("Members", "/investment/members"),
            NavItem("Payments", "/investment/payments"),
            NavItem("Performance Table", "/investment/table"),
        ],
    ),
]


@dataclass(frozen=True)
class RouteResolution:
    path: str
    title: str
    found: bool
    redirect_to: Optional[str] = None


def normalize_path(path: str) -> str:
    path = "/" + path.strip().strip("/")
    return path


def login_redirect(path: str) -> str:
    """Login path carrying the originally requested path as continuation"""
    return f"{LOGIN_PATH}?next={quote(path, safe='/')}"


def post_login_redirect(next_path: Optional[str]) -> str:
    """Where to send the user after login: the requested page if known, else the dashboard"""
    if not next_path:
        return HOME_PATH
    path = normalize_path(unquote(next_path).split("?", 1)[0])
    return path if path in ROUTE_TITLES else HOME_PATH


def resolve_route(path: str, authenticated: bool) -> RouteResolution:
    """
    Resolve a page path to its title, or to the redirect the shell performs.

    - "/" goes to the dashboard (after login when unauthenticated)
    - protected pages redirect to login when unauthenticated
    - unknown paths resolve to "Not found" without a redirect
    """
    path = normalize_path(path)

    if path in PUBLIC_TITLES:
        return RouteResolution(path=path, title=PUBLIC_TITLES[path], found=True)

    if path == "/":
        if not authenticated:
            return RouteResolution(path=path, title="Login", found=True, redirect_to=login_redirect(path))
        return RouteResolution(path=path, title="Redirecting", found=True, redirect_to=HOME_PATH)

    title = ROUTE_TITLES.get(path)
    if title is None:
        return RouteResolution(path=path, title=NOT_FOUND_TITLE, found=False)

    if not authenticated:
        return RouteResolution(path=path, title="Login", found=True, redirect_to=login_redirect(path))

    return RouteResolution(path=path, title=title, found=True)
