"""
Tests for the role-scoped visibility gate and the route protection dependencies.
"""

import pytest
from itertools import product

from rural_properties.services.access import (
    AccessState,
    Role,
    RouteKind,
    SessionContext,
    can_manage_any_listing,
    can_manage_listings,
    can_moderate,
    dashboard_route_for,
    decide_route,
    evaluate_access,
    evaluate_public_access,
    resolve_route,
    role_for_record,
    role_from_claim,
)
from rural_properties.utils.dependencies import require_authenticated, require_role
from rural_properties.utils.exceptions import ForbiddenError, UnauthorizedError


class TestRoleMapping:
    """Claims and stored values to roles."""

    @pytest.mark.parametrize("claim,role", [
        ("admin", Role.ADMIN),
        ("agent", Role.AGENT),
        ("user", Role.USER),
        ("ADMIN", Role.ADMIN),
        (" Agent ", Role.AGENT),
        ("superuser", Role.ANONYMOUS),
        ("", Role.ANONYMOUS),
        (None, Role.ANONYMOUS),
        (42, Role.ANONYMOUS),
    ])
    def test_role_from_claim(self, claim, role):
        assert role_from_claim(claim) == role

    @pytest.mark.parametrize("stored", [None, "", "   "])
    def test_missing_stored_role_is_user(self, stored):
        assert role_for_record(stored) == Role.USER

    def test_malformed_stored_role_fails_closed(self):
        assert role_for_record("owner") == Role.ANONYMOUS

    def test_dashboards(self):
        assert dashboard_route_for(Role.ADMIN) == "/admin"
        assert dashboard_route_for(Role.AGENT) == "/agent"
        assert dashboard_route_for(Role.USER) == "/user"
        assert dashboard_route_for(Role.ANONYMOUS) == "/signin"


class TestEvaluateAccess:
    """Decision rules."""

    def test_unresolved_identity(self):
        decision = evaluate_access(Role.ADMIN, Role.ADMIN, auth_resolved=False)
        assert decision.state == AccessState.UNRESOLVED
        assert decision.redirect_to is None

    def test_anonymous_goes_to_signin(self):
        for required in (None, Role.ADMIN, Role.AGENT, Role.USER):
            decision = evaluate_access(Role.ANONYMOUS, required)
            assert decision.state == AccessState.DENIED
            assert decision.redirect_to == "/signin"

    def test_matching_role_allowed(self):
        for role in (Role.ADMIN, Role.AGENT, Role.USER):
            assert evaluate_access(role, role).allowed

    def test_any_signed_in_role_allowed_without_requirement(self):
        for role in (Role.ADMIN, Role.AGENT, Role.USER):
            assert evaluate_access(role, None).allowed

    def test_mismatch_redirects_to_own_dashboard(self):
        decision = evaluate_access(Role.USER, Role.AGENT)
        assert decision.state == AccessState.DENIED
        assert decision.redirect_to == "/user"

        decision = evaluate_access(Role.AGENT, Role.ADMIN)
        assert decision.redirect_to == "/agent"

    def test_admin_does_not_pass_agent_pages(self):
        decision = evaluate_access(Role.ADMIN, Role.AGENT)
        assert decision.state == AccessState.DENIED
        assert decision.redirect_to == "/admin"

    def test_decision_is_idempotent(self):
        roles = [Role.ADMIN, Role.AGENT, Role.USER, Role.ANONYMOUS]
        for current, required, resolved in product(roles, roles[:3] + [None], [True, False]):
            assert evaluate_access(current, required, resolved) == evaluate_access(current, required, resolved)

    def test_public_auth_pages(self):
        assert evaluate_public_access(Role.ANONYMOUS).allowed
        decision = evaluate_public_access(Role.AGENT)
        assert decision.state == AccessState.DENIED
        assert decision.redirect_to == "/agent"


class TestRouteTable:
    """Concrete paths against the route table."""

    def test_resolve_protected_routes(self):
        assert resolve_route("/agent") == (RouteKind.PROTECTED, Role.AGENT)
        assert resolve_route("/properties/add") == (RouteKind.PROTECTED, Role.AGENT)
        assert resolve_route("/properties/abc-123/edit") == (RouteKind.PROTECTED, Role.AGENT)
        assert resolve_route("/admin/tools") == (RouteKind.PROTECTED, Role.ADMIN)
        assert resolve_route("/profile/") == (RouteKind.PROTECTED, Role.USER)
        assert resolve_route("/dashboard") == (RouteKind.PROTECTED, None)

    def test_public_routes(self):
        assert resolve_route("/properties/abc-123") == (RouteKind.PUBLIC, None)
        assert resolve_route("/") == (RouteKind.PUBLIC, None)
        assert resolve_route("/signin") == (RouteKind.PUBLIC_AUTH, None)

    def test_decide_route(self):
        assert decide_route("/admin/users", Role.USER).redirect_to == "/user"
        assert decide_route("/properties/xyz/edit", Role.AGENT).allowed
        assert decide_route("/properties", Role.ANONYMOUS).allowed
        assert decide_route("/signup", Role.USER).redirect_to == "/user"
        assert decide_route("/dashboard", Role.ANONYMOUS).redirect_to == "/signin"


class TestCapabilities:

    def test_capabilities(self):
        assert can_manage_listings(Role.ADMIN) and can_manage_listings(Role.AGENT)
        assert not can_manage_listings(Role.USER)
        assert not can_manage_listings(Role.ANONYMOUS)
        assert can_manage_any_listing(Role.ADMIN)
        assert not can_manage_any_listing(Role.AGENT)
        assert can_moderate(Role.ADMIN)
        assert not can_moderate(Role.AGENT)


class TestRouteDependencies:
    """require_role and require_authenticated."""

    @pytest.mark.asyncio
    async def test_anonymous_gets_unauthorized(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            await require_authenticated(SessionContext())
        assert exc_info.value.redirect_to == "/signin"

    @pytest.mark.asyncio
    async def test_wrong_role_gets_forbidden(self, test_user):
        dependency = require_role(Role.ADMIN)
        with pytest.raises(ForbiddenError) as exc_info:
            await dependency(SessionContext(user=test_user, role=Role.USER))
        assert exc_info.value.redirect_to == "/user"

    @pytest.mark.asyncio
    async def test_matching_role_passes(self, test_agent):
        session = SessionContext(user=test_agent, role=Role.AGENT)
        assert await require_role(Role.AGENT)(session) is session
