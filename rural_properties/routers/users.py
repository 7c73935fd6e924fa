"""
Endpoints for the signed-in user's own profile.
"""

from fastapi import APIRouter, Depends, Path, status
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.user import (
    UserResponse,
    UserProfileUpdate,
    PreferencesUpdate,
    SavedPropertiesResponse,
    ViewedPropertiesResponse
)
from rural_properties.services.access import SessionContext
from rural_properties.services.user import UserService
from rural_properties.utils.dependencies import get_user_service, require_authenticated


router = APIRouter(prefix="/users/me", tags=["Users"], responses=get_error_responses(401))


@router.get("", response_model=UserResponse, summary="Get own profile")
async def get_profile(
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.get_profile(session)
    return UserResponse.model_validate(user.to_dict())


@router.patch(
    "",
    response_model=UserResponse,
    summary="Update own profile",
    responses=get_error_responses(422)
)
async def update_profile(
    profile: UserProfileUpdate,
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.update_profile(session, profile)
    return UserResponse.model_validate(user.to_dict())


@router.put("/preferences", response_model=UserResponse, summary="Replace notification preferences")
async def update_preferences(
    preferences: PreferencesUpdate,
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    user = await user_service.update_preferences(session, preferences)
    return UserResponse.model_validate(user.to_dict())


@router.get("/saved-properties", response_model=SavedPropertiesResponse, summary="Saved listing ids")
async def get_saved_properties(
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> SavedPropertiesResponse:
    return SavedPropertiesResponse(saved_properties=await user_service.get_saved_properties(session))


@router.put(
    "/saved-properties/{property_id}",
    response_model=SavedPropertiesResponse,
    summary="Save a listing",
    responses=get_error_responses(404)
)
async def save_property(
    property_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> SavedPropertiesResponse:
    return SavedPropertiesResponse(saved_properties=await user_service.save_property(session, property_id))


@router.delete(
    "/saved-properties/{property_id}",
    response_model=SavedPropertiesResponse,
    status_code=status.HTTP_200_OK,
    summary="Unsave a listing"
)
async def unsave_property(
    property_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> SavedPropertiesResponse:
    return SavedPropertiesResponse(saved_properties=await user_service.unsave_property(session, property_id))


@router.get("/viewed-properties", response_model=ViewedPropertiesResponse, summary="Recently viewed listing ids")
async def get_viewed_properties(
    session: SessionContext = Depends(require_authenticated),
    user_service: UserService = Depends(get_user_service)
) -> ViewedPropertiesResponse:
    return ViewedPropertiesResponse(viewed_properties=await user_service.get_viewed_properties(session))
