"""
Role-scoped visibility gate.

Every role decision in the application goes through this module: the
tagged Role variant, the pure access decision functions, the route table
and the capability checks used by the API layer.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Pattern, Tuple
import enum
import re


class Role(str, enum.Enum):
    """Caller role. ANONYMOUS covers unauthenticated and unreadable identities."""
    ADMIN = "admin"
    AGENT = "agent"
    USER = "user"
    ANONYMOUS = "anonymous"


class AccessState(str, enum.Enum):
    UNRESOLVED = "unresolved"
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of one gate evaluation."""
    state: AccessState
    redirect_to: Optional[str] = None
    
    @property
    def allowed(self) -> bool:
        return self.state == AccessState.ALLOWED


SIGN_IN_ROUTE = "/signin"

DASHBOARD_ROUTES = {
    Role.ADMIN: "/admin",
    Role.AGENT: "/agent",
    Role.USER: "/user",
}

_CLAIM_ROLES = {
    "admin": Role.ADMIN,
    "agent": Role.AGENT,
    "user": Role.USER,
}


def role_from_claim(claim: Any) -> Role:
    """
    Map a role claim to a Role.
    Anything that is not exactly admin, agent or user (ignoring case and
    surrounding space) fails closed to ANONYMOUS, including a missing claim.
    """
    if not isinstance(claim, str):
        return Role.ANONYMOUS
    return _CLAIM_ROLES.get(claim.strip().lower(), Role.ANONYMOUS)


def role_for_record(stored_role: Optional[str]) -> Role:
    """
    Role of a stored user record.
    Legacy records without a role, or with a blank one, are treated as USER
    straight away; a malformed stored value still fails closed.
    """
    if not stored_role or not stored_role.strip():
        return Role.USER
    return role_from_claim(stored_role)


def dashboard_route_for(role: Role) -> str:
    """Dashboard canonically associated with a role; sign-in for anything else."""
    return DASHBOARD_ROUTES.get(role, SIGN_IN_ROUTE)


def evaluate_access(
    current_role: Role,
    required_role: Optional[Role] = None,
    auth_resolved: bool = True
) -> AccessDecision:
    """
    Decide whether protected content may be shown.
    
    Pure function of its inputs; callers re-evaluate on every role or
    auth change instead of caching the result.
    
    Args:
        current_role: Role of the caller
        required_role: Role the target requires, None for any signed-in caller
        auth_resolved: False while the identity is still loading
        
    Returns:
        AccessDecision with a redirect target when denied
    """
    if not auth_resolved:
        return AccessDecision(AccessState.UNRESOLVED)
    
    if current_role == Role.ANONYMOUS:
        return AccessDecision(AccessState.DENIED, SIGN_IN_ROUTE)
    
    if required_role is not None and current_role != required_role:
        return AccessDecision(AccessState.DENIED, dashboard_route_for(current_role))
    
    return AccessDecision(AccessState.ALLOWED)


def evaluate_public_access(current_role: Role, auth_resolved: bool = True) -> AccessDecision:
    """Sign-in and sign-up pages send an already signed-in caller to their dashboard."""
    if not auth_resolved:
        return AccessDecision(AccessState.UNRESOLVED)
    if current_role == Role.ANONYMOUS:
        return AccessDecision(AccessState.ALLOWED)
    return AccessDecision(AccessState.DENIED, dashboard_route_for(current_role))


class RouteKind(str, enum.Enum):
    PROTECTED = "protected"
    PUBLIC_AUTH = "public_auth"
    PUBLIC = "public"


def _compile(pattern: str) -> Pattern:
    escaped = re.escape(pattern).replace(r"\{id\}", r"[^/]+")
    return re.compile(f"^{escaped}/?$")


# Order matters: /properties/add must win over /properties/{id}
ROUTE_TABLE: List[Tuple[str, RouteKind, Optional[Role]]] = [
    ("/agent", RouteKind.PROTECTED, Role.AGENT),
    ("/agent/properties", RouteKind.PROTECTED, Role.AGENT),
    ("/properties/add", RouteKind.PROTECTED, Role.AGENT),
    ("/properties/{id}/edit", RouteKind.PROTECTED, Role.AGENT),
    ("/user", RouteKind.PROTECTED, Role.USER),
    ("/profile", RouteKind.PROTECTED, Role.USER),
    ("/admin", RouteKind.PROTECTED, Role.ADMIN),
    ("/admin/users", RouteKind.PROTECTED, Role.ADMIN),
    ("/admin/tools", RouteKind.PROTECTED, Role.ADMIN),
    ("/dashboard", RouteKind.PROTECTED, None),
    ("/signin", RouteKind.PUBLIC_AUTH, None),
    ("/signup", RouteKind.PUBLIC_AUTH, None),
    ("/agent-signup", RouteKind.PUBLIC_AUTH, None),
    ("/admin-signin", RouteKind.PUBLIC_AUTH, None),
    ("/forgot-password", RouteKind.PUBLIC_AUTH, None),
]

_COMPILED_ROUTES = [(_compile(pattern), kind, role) for pattern, kind, role in ROUTE_TABLE]


def resolve_route(path: str) -> Tuple[RouteKind, Optional[Role]]:
    """Kind and required role of a concrete path. Unlisted paths are public."""
    for regex, kind, role in _COMPILED_ROUTES:
        if regex.match(path):
            return kind, role
    return RouteKind.PUBLIC, None


def decide_route(path: str, current_role: Role, auth_resolved: bool = True) -> AccessDecision:
    """Gate decision for navigating to path."""
    kind, required_role = resolve_route(path)
    if kind == RouteKind.PROTECTED:
        return evaluate_access(current_role, required_role, auth_resolved)
    if kind == RouteKind.PUBLIC_AUTH:
        return evaluate_public_access(current_role, auth_resolved)
    return AccessDecision(AccessState.ALLOWED)


# Capabilities for API actions

def can_manage_listings(role: Role) -> bool:
    """Create listings, open the dashboard and see inquiries addressed to them."""
    return role in (Role.ADMIN, Role.AGENT)


def can_manage_any_listing(role: Role) -> bool:
    """Edit or delete listings created by someone else."""
    return role == Role.ADMIN


def can_moderate(role: Role) -> bool:
    """Moderate reviews, run admin tools and change site settings."""
    return role == Role.ADMIN


@dataclass(frozen=True)
class SessionContext:
    """
    Identity of the current request.
    Built once per request from the bearer token and only read afterwards.
    """
    user: Optional[Any] = None
    role: Role = Role.ANONYMOUS
    resolved: bool = True
    
    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.role != Role.ANONYMOUS
    
    @property
    def user_id(self) -> Optional[str]:
        return str(self.user.id) if self.user is not None else None
    
    def decide(self, required_role: Optional[Role] = None) -> AccessDecision:
        return evaluate_access(self.role, required_role, self.resolved)


ANONYMOUS_SESSION = SessionContext()
