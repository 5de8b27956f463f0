"""Role-based access policy for inbound request paths.

``authorize`` is a pure function of the caller's role and the request
path. The Starlette middleware in ``api.middleware.role_access`` turns its
decision into a response; nothing here touches the request or the session.

Role hierarchy is expressed as data: each rule lists the path prefixes it
guards and the full set of roles admitted there. Adding a role or a prefix
means adding a row to ``ACCESS_RULES``.
"""

from dataclasses import dataclass
from enum import StrEnum

from domain.entities.user import UserRole


class AccessOutcome(StrEnum):
    """Result of evaluating a request against the access policy."""

    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_UNAUTHORIZED = "redirect_unauthorized"
    REDIRECT_DASHBOARD = "redirect_dashboard"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessRule:
    """Roles admitted under a group of path prefixes."""

    prefixes: tuple[str, ...]
    allowed_roles: frozenset[UserRole]

    def matches(self, path: str) -> bool:
        return path.startswith(self.prefixes)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of ``authorize`` plus the redirect target, if any."""

    outcome: AccessOutcome
    location: str | None = None
    rule: AccessRule | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome == AccessOutcome.ALLOW


ACCESS_RULES: tuple[AccessRule, ...] = (
    AccessRule(
        prefixes=("/admin/", "/api/admin/"),
        allowed_roles=frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN}),
    ),
    AccessRule(
        prefixes=("/super/", "/api/super/"),
        allowed_roles=frozenset({UserRole.SUPER_ADMIN}),
    ),
    AccessRule(
        prefixes=("/teacher/",),
        allowed_roles=frozenset({UserRole.TEACHER, UserRole.ADMIN, UserRole.SUPER_ADMIN}),
    ),
    AccessRule(
        prefixes=("/student/",),
        allowed_roles=frozenset(
            {UserRole.STUDENT, UserRole.TEACHER, UserRole.ADMIN, UserRole.SUPER_ADMIN}
        ),
    ),
    AccessRule(
        prefixes=("/parent/",),
        allowed_roles=frozenset({UserRole.PARENT, UserRole.ADMIN, UserRole.SUPER_ADMIN}),
    ),
)

DASHBOARD_PATHS: dict[UserRole, str] = {
    UserRole.SUPER_ADMIN: "/super/dashboard",
    UserRole.ADMIN: "/admin/dashboard",
    UserRole.TEACHER: "/teacher/dashboard",
    UserRole.STUDENT: "/student/dashboard",
    UserRole.PARENT: "/parent/dashboard",
}

# Generic entry points resolved to the caller's own dashboard
DASHBOARD_ENTRY_PATHS: frozenset[str] = frozenset({"/dashboard"})

PUBLIC_PATHS: frozenset[str] = frozenset(
    {
        "/",
        "/about",
        "/contact",
        "/pricing",
        "/features",
        "/onboard",
        "/unauthorized",
        "/health",
        "/favicon.ico",
        "/docs",
        "/redoc",
        "/openapi.json",
    }
)

PUBLIC_PREFIXES: tuple[str, ...] = (
    "/auth/",
    "/api/auth/",
    "/_next/static/",
    "/static/",
    "/health/",
)

# Public as an exact path or a parent segment
PUBLIC_SEGMENTS: tuple[str, ...] = (
    "/login",
    "/register",
    "/api/register",
    "/api/teachers/onboard",
    "/_next/image",
)

STATIC_SUFFIXES: tuple[str, ...] = (".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp", ".ico")


def is_public_path(path: str) -> bool:
    """Paths on the allow-list skip authorization entirely."""
    return (
        path in PUBLIC_PATHS
        or path.startswith(PUBLIC_PREFIXES)
        or any(path == seg or path.startswith(seg + "/") for seg in PUBLIC_SEGMENTS)
        or path.lower().endswith(STATIC_SUFFIXES)
    )


def is_api_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


def dashboard_path_for(role: UserRole | None) -> str | None:
    """Landing page for a role, or None for an unmapped role."""
    if role is None:
        return None
    return DASHBOARD_PATHS.get(role)


def authorize(
    role: UserRole | None,
    path: str,
    *,
    authenticated: bool,
    login_path: str = "/auth/signin",
    unauthorized_path: str = "/unauthorized",
) -> AccessDecision:
    """Decide whether a caller may reach ``path``.

    Args:
        role: The caller's role, or None if the session carries no known role.
        path: The request path (no query string).
        authenticated: Whether a valid session was presented.
        login_path: Redirect target for anonymous page requests.
        unauthorized_path: Redirect target for rejected page requests.

    Returns:
        An AccessDecision. Page paths are rejected with redirects; API
        paths are rejected with UNAUTHENTICATED or FORBIDDEN.
    """
    if is_public_path(path):
        return AccessDecision(AccessOutcome.ALLOW)

    api = is_api_path(path)

    if not authenticated:
        if api:
            return AccessDecision(AccessOutcome.UNAUTHENTICATED)
        return AccessDecision(AccessOutcome.REDIRECT_LOGIN, location=login_path)

    if path in DASHBOARD_ENTRY_PATHS:
        target = dashboard_path_for(role)
        if target is None:
            return AccessDecision(
                AccessOutcome.REDIRECT_UNAUTHORIZED, location=unauthorized_path
            )
        return AccessDecision(AccessOutcome.REDIRECT_DASHBOARD, location=target)

    for rule in ACCESS_RULES:
        if rule.matches(path) and role not in rule.allowed_roles:
            if api:
                return AccessDecision(AccessOutcome.FORBIDDEN, rule=rule)
            return AccessDecision(
                AccessOutcome.REDIRECT_UNAUTHORIZED,
                location=unauthorized_path,
                rule=rule,
            )

    return AccessDecision(AccessOutcome.ALLOW)
