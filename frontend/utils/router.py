"""
Path-based routing with an authentication gate.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    AUTHENTICATED_ADMIN = "authenticated-admin"


class Access(str, Enum):
    PUBLIC = "public"        # login / signup: only when logged out
    PROTECTED = "protected"  # any authenticated identity
    ADMIN = "admin"          # authenticated identity with the admin role


@dataclass(frozen=True)
class Route:
    path: str
    screen: str
    label: str
    access: Access
    icon: str = ""


LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
DASHBOARD_PATH = "/dashboard"
ADMIN_PATH = "/admin"

ROUTES: dict[str, Route] = {
    r.path: r
    for r in (
        Route(LOGIN_PATH, "login", "Login", Access.PUBLIC),
        Route(SIGNUP_PATH, "signup", "Sign up", Access.PUBLIC),
        Route(DASHBOARD_PATH, "dashboard", "Dashboard", Access.PROTECTED, "speedometer2"),
        Route("/trading", "trading", "Trading", Access.PROTECTED, "graph-up"),
        Route("/portfolio", "portfolio", "Portfolio", Access.PROTECTED, "wallet"),
        Route("/transactions", "transactions", "Transactions", Access.PROTECTED, "clock-history"),
        Route("/profile", "profile", "Profile", Access.PROTECTED, "person-circle"),
        Route(ADMIN_PATH, "admin", "Admin Panel", Access.ADMIN, "shield-lock"),
    )
}


@dataclass(frozen=True)
class RouteDecision:
    """Either a route to render or a path to redirect to."""
    route: Optional[Route] = None
    redirect: Optional[str] = None


def auth_state(session) -> AuthState:
    """Derive the gate state from a Session."""
    if not session.is_authenticated:
        return AuthState.UNAUTHENTICATED
    if session.is_admin():
        return AuthState.AUTHENTICATED_ADMIN
    return AuthState.AUTHENTICATED


def home_path(state: AuthState) -> str:
    return LOGIN_PATH if state == AuthState.UNAUTHENTICATED else DASHBOARD_PATH


def normalize_path(path: Optional[str]) -> str:
    path = (path or "/").strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path.lower()


def resolve(path: Optional[str], state: AuthState) -> RouteDecision:
    """Apply the access rules to ``path`` for the given gate state."""
    route = ROUTES.get(normalize_path(path))
    if route is None:
        return RouteDecision(redirect=home_path(state))

    if route.access == Access.PUBLIC:
        if state != AuthState.UNAUTHENTICATED:
            return RouteDecision(redirect=DASHBOARD_PATH)
        return RouteDecision(route=route)

    if state == AuthState.UNAUTHENTICATED:
        return RouteDecision(redirect=LOGIN_PATH)
    if route.access == Access.ADMIN and state != AuthState.AUTHENTICATED_ADMIN:
        return RouteDecision(redirect=DASHBOARD_PATH)
    return RouteDecision(route=route)


def navigation_routes(state: AuthState) -> list[Route]:
    """Routes shown in the sidebar for this state."""
    if state == AuthState.UNAUTHENTICATED:
        return []
    return [
        r for r in ROUTES.values()
        if r.access == Access.PROTECTED
        or (r.access == Access.ADMIN and state == AuthState.AUTHENTICATED_ADMIN)
    ]
