"""
Saved search endpoints for the signed-in user.
"""

from fastapi import APIRouter, Depends, Path, status
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.saved_search import (
    SavedSearchCreate,
    SavedSearchUpdate,
    SavedSearchResponse,
    SavedSearchListResponse,
    SavedSearchRunResponse
)
from rural_properties.services.access import SessionContext
from rural_properties.services.saved_search import SavedSearchService
from rural_properties.routers.properties import to_property_response
from rural_properties.utils.dependencies import get_saved_search_service, require_authenticated


router = APIRouter(prefix="/saved-searches", tags=["Saved Searches"], responses=get_error_responses(401))


@router.post(
    "",
    response_model=SavedSearchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a search",
    responses=get_error_responses(422)
)
async def create_saved_search(
    search_data: SavedSearchCreate,
    session: SessionContext = Depends(require_authenticated),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchResponse:
    saved = await search_service.create(search_data, session)
    return SavedSearchResponse.model_validate(saved.to_dict())


@router.get("", response_model=SavedSearchListResponse, summary="List own saved searches")
async def list_saved_searches(
    session: SessionContext = Depends(require_authenticated),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchListResponse:
    searches = await search_service.list_for_user(session)
    return SavedSearchListResponse(
        saved_searches=[SavedSearchResponse.model_validate(s.to_dict()) for s in searches],
        total=len(searches)
    )


@router.get(
    "/{search_id}",
    response_model=SavedSearchResponse,
    summary="Get saved search",
    responses=get_error_responses(403, 404)
)
async def get_saved_search(
    search_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchResponse:
    saved = await search_service.get(search_id, session)
    return SavedSearchResponse.model_validate(saved.to_dict())


@router.patch(
    "/{search_id}",
    response_model=SavedSearchResponse,
    summary="Update saved search",
    responses=get_error_responses(403, 404, 422)
)
async def update_saved_search(
    search_data: SavedSearchUpdate,
    search_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchResponse:
    saved = await search_service.update(search_id, search_data, session)
    return SavedSearchResponse.model_validate(saved.to_dict())


@router.delete(
    "/{search_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete saved search",
    responses=get_error_responses(403, 404)
)
async def delete_saved_search(
    search_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> None:
    await search_service.delete(search_id, session)


@router.post(
    "/{search_id}/run",
    response_model=SavedSearchRunResponse,
    summary="Run a saved search",
    responses=get_error_responses(403, 404, 503)
)
async def run_saved_search(
    search_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchRunResponse:
    saved, page = await search_service.run(search_id, session)
    return SavedSearchRunResponse(
        saved_search=SavedSearchResponse.model_validate(saved.to_dict()),
        items=[to_property_response(item) for item in page.items],
        count=page.count,
        new_properties_count=saved.new_properties_count
    )
