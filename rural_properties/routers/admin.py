"""
Admin tools: fixture seeding, collection clearing, role maintenance,
user management, statistics and site settings.
"""

from fastapi import APIRouter, Depends, Path, Query
from typing import Optional
import math
from rural_properties.config import settings
from rural_properties.models.user import UserRole
from rural_properties.schemas.admin import (
    SeedReportResponse,
    ClearReportResponse,
    RoleChangeRequest,
    RoleChangeResponse,
    BackfillResponse,
    CollectionStatsResponse,
    SystemSettingsResponse,
    SystemSettingsUpdate
)
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.user import UserResponse, UserListResponse
from rural_properties.services.access import SessionContext
from rural_properties.services.seeding import SeedingService
from rural_properties.services.system_settings import SystemSettingsService
from rural_properties.utils.dependencies import get_seeding_service, get_settings_service, require_admin
from rural_properties.utils.exceptions import ForbiddenError, NotFoundError
import logging

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/admin", tags=["Admin"], responses=get_error_responses(401, 403))


def _refuse_in_production(action: str) -> None:
    if settings.is_production:
        raise ForbiddenError(f"{action} is disabled in production")


@router.post("/seed", response_model=SeedReportResponse, summary="Insert fixture data")
async def seed_database(
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> SeedReportResponse:
    """
    Insert the fixture collections. Failed collections are listed in errors
    and do not stop the others.
    """
    _refuse_in_production("Seeding")
    logger.info(f"Seed run requested by {session.user.email}")
    report = await seeding_service.seed_all()
    return SeedReportResponse.model_validate(report.to_dict())


@router.post("/clear", response_model=ClearReportResponse, summary="Delete all fixture collections")
async def clear_database(
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> ClearReportResponse:
    _refuse_in_production("Clearing collections")
    logger.warning(f"Clear requested by {session.user.email}")
    report = await seeding_service.clear_all()
    return ClearReportResponse.model_validate(report.to_dict())


@router.post(
    "/users/role",
    response_model=RoleChangeResponse,
    summary="Set a user's role by email",
    responses=get_error_responses(404, 422)
)
async def change_user_role(
    request: RoleChangeRequest,
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> RoleChangeResponse:
    result = await seeding_service.promote_user_role(request.email, request.role)
    if result.outcome == "not_found":
        raise NotFoundError("User", request.email)
    return RoleChangeResponse.model_validate(result.to_dict())


@router.post("/users/backfill-roles", response_model=BackfillResponse, summary="Give role-less users the default role")
async def backfill_roles(
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> BackfillResponse:
    return BackfillResponse(updated=await seeding_service.backfill_role_field())


@router.get("/users", response_model=UserListResponse, summary="List users")
async def list_users(
    role: Optional[UserRole] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> UserListResponse:
    users, total = await seeding_service.list_users(role, page, page_size)
    total_pages = math.ceil(total / page_size) if total else 0
    return UserListResponse(
        users=[UserResponse.model_validate(u.to_dict()) for u in users],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_previous=page > 1
    )


@router.post(
    "/users/{user_id}/deactivate",
    response_model=UserResponse,
    summary="Deactivate a user",
    responses=get_error_responses(404)
)
async def deactivate_user(
    user_id: str = Path(...),
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> UserResponse:
    if user_id == session.user_id:
        raise ForbiddenError("Administrators cannot deactivate their own account")
    user = await seeding_service.set_user_active(user_id, False)
    return UserResponse.model_validate(user.to_dict())


@router.post(
    "/users/{user_id}/activate",
    response_model=UserResponse,
    summary="Reactivate a user",
    responses=get_error_responses(404)
)
async def activate_user(
    user_id: str = Path(...),
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> UserResponse:
    user = await seeding_service.set_user_active(user_id, True)
    return UserResponse.model_validate(user.to_dict())


@router.get("/stats", response_model=CollectionStatsResponse, summary="Collection statistics")
async def collection_stats(
    session: SessionContext = Depends(require_admin),
    seeding_service: SeedingService = Depends(get_seeding_service)
) -> CollectionStatsResponse:
    return CollectionStatsResponse.model_validate(await seeding_service.collection_stats())


@router.put("/settings", response_model=SystemSettingsResponse, summary="Update site settings")
async def update_settings(
    update: SystemSettingsUpdate,
    session: SessionContext = Depends(require_admin),
    settings_service: SystemSettingsService = Depends(get_settings_service)
) -> SystemSettingsResponse:
    return SystemSettingsResponse.model_validate(await settings_service.update_settings(update, session))
