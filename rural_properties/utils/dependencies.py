"""
FastAPI dependency injection utilities for sessions, services and route protection.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.database import get_db
from rural_properties.services.access import Role, SessionContext
from rural_properties.services.auth import AuthService
from rural_properties.services.agent import AgentService
from rural_properties.services.catalog import CatalogService
from rural_properties.services.inquiry import InquiryService
from rural_properties.services.property import PropertyService
from rural_properties.services.review import ReviewService
from rural_properties.services.saved_search import SavedSearchService
from rural_properties.services.seeding import SeedingService
from rural_properties.services.system_settings import SystemSettingsService
from rural_properties.services.user import UserService
from rural_properties.utils.exceptions import ForbiddenError, UnauthorizedError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_agent_service(db: AsyncSession = Depends(get_db)) -> AgentService:
    return AgentService(db)


async def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> InquiryService:
    return InquiryService(db)


async def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


async def get_saved_search_service(db: AsyncSession = Depends(get_db)) -> SavedSearchService:
    return SavedSearchService(db)


async def get_settings_service(db: AsyncSession = Depends(get_db)) -> SystemSettingsService:
    return SystemSettingsService(db)


async def get_seeding_service(db: AsyncSession = Depends(get_db)) -> SeedingService:
    return SeedingService(db)


async def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> SessionContext:
    """
    Identity of the caller. Missing or bad tokens give the anonymous session.
    """
    token = credentials.credentials if credentials else None
    return await auth_service.resolve_session(token)


def _enforce(session: SessionContext, required_role: Optional[Role]) -> SessionContext:
    decision = session.decide(required_role)
    if decision.allowed:
        return session
    if not session.is_authenticated:
        raise UnauthorizedError("Authentication required", redirect_to=decision.redirect_to)
    raise ForbiddenError(
        f"This area requires the {required_role.value} role",
        redirect_to=decision.redirect_to
    )


async def require_authenticated(
    session: SessionContext = Depends(get_session_context)
) -> SessionContext:
    """
    Any signed-in caller.
    
    Raises:
        UnauthorizedError: For anonymous callers, with redirect_to the sign-in page
    """
    return _enforce(session, None)


def require_role(required_role: Role):
    """
    Create a dependency that admits exactly one role.
    
    Anonymous callers get 401 with redirect_to the sign-in page; signed-in
    callers with another role get 403 with redirect_to their own dashboard.
    """
    async def role_dependency(
        session: SessionContext = Depends(get_session_context)
    ) -> SessionContext:
        return _enforce(session, required_role)
    
    return role_dependency


require_admin = require_role(Role.ADMIN)
