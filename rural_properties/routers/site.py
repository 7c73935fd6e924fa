"""
Public site configuration.
"""

from fastapi import APIRouter, Depends
from rural_properties.config import settings
from rural_properties.schemas.admin import MapsConfigResponse, SystemSettingsResponse
from rural_properties.services.system_settings import SystemSettingsService
from rural_properties.utils.dependencies import get_settings_service


router = APIRouter(tags=["Site"])


@router.get("/config/maps", response_model=MapsConfigResponse, summary="Map provider configuration")
async def get_maps_config() -> MapsConfigResponse:
    """Interactive maps when a provider key is configured, static maps otherwise."""
    return MapsConfigResponse(mode=settings.maps_mode, api_key=settings.maps_api_key)


@router.get("/settings", response_model=SystemSettingsResponse, summary="Public site settings")
async def get_site_settings(
    settings_service: SystemSettingsService = Depends(get_settings_service)
) -> SystemSettingsResponse:
    return SystemSettingsResponse.model_validate(await settings_service.get_settings())
