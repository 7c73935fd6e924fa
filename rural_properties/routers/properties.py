"""
Listing endpoints: the filtered catalog query plus listing management.
"""

from fastapi import APIRouter, Depends, Query, Path, status
from decimal import Decimal
from typing import List, Optional

from rural_properties.config import settings
from rural_properties.models.property import Property, PropertyStatus
from rural_properties.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    FilterOptionsResponse
)
from rural_properties.schemas.error import get_crud_error_responses, get_error_responses
from rural_properties.services.access import SessionContext
from rural_properties.services.catalog import (
    ALL_TYPES,
    ALL_PROVINCES,
    ANY_PRICE,
    PRICE_RANGES,
    PROPERTY_TYPE_OPTIONS,
    PROVINCE_OPTIONS,
    CatalogService,
    ListingFilters,
    bucket_for_price
)
from rural_properties.services.property import PropertyService
from rural_properties.utils.dependencies import (
    get_catalog_service,
    get_property_service,
    get_session_context,
    require_authenticated
)


router = APIRouter(prefix="/properties", tags=["Properties"])


def to_property_response(property_obj: Property) -> PropertyResponse:
    """Response body for a listing, including its price range label."""
    return PropertyResponse.model_validate({
        **property_obj.to_dict(),
        "price_range": bucket_for_price(property_obj.price),
    })


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="Query listings",
    description="Filter listings by type, province, price range label and free text, newest first.",
    responses=get_error_responses(422, 503)
)
async def list_properties(
    property_type: str = Query(ALL_TYPES, alias="type", description="Property type label or 'All'"),
    province: str = Query(ALL_PROVINCES, description="Province or 'All Provinces'"),
    price: str = Query(ANY_PRICE, description="Price range label, e.g. 'R1M - R3M'"),
    search: str = Query("", max_length=200, description="Case-insensitive text matched against title and location"),
    listing_status: Optional[PropertyStatus] = Query(None, alias="status"),
    featured: Optional[bool] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0, description="Overrides the lower bound of the price label"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Overrides the upper bound of the price label"),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    cursor: Optional[str] = Query(None, description="next_cursor from the previous page"),
    catalog_service: CatalogService = Depends(get_catalog_service)
) -> PropertyListResponse:
    """
    Run a listing query.
    
    A failed store read is reported as 503 QUERY_ERROR, never as an empty page.
    """
    filters = ListingFilters(
        type=property_type,
        province=province,
        price=price,
        search=search,
        status=listing_status,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
        page_size=page_size,
        cursor=cursor,
    )
    page = await catalog_service.query(filters)
    return PropertyListResponse(
        items=[to_property_response(item) for item in page.items],
        count=page.count,
        next_cursor=page.next_cursor,
        filters=filters.to_dict()
    )


@router.get(
    "/filters",
    response_model=FilterOptionsResponse,
    summary="Filter choices"
)
async def get_filter_options() -> FilterOptionsResponse:
    return FilterOptionsResponse(
        property_types=PROPERTY_TYPE_OPTIONS,
        provinces=PROVINCE_OPTIONS,
        price_ranges=[
            {"label": label, "min_price": low, "max_price": high}
            for label, (low, high) in PRICE_RANGES.items()
        ]
    )


@router.get(
    "/featured",
    response_model=List[PropertyResponse],
    summary="Featured listings"
)
async def get_featured_properties(
    limit: int = Query(6, ge=1, le=24),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.get_featured_properties(limit)
    return [to_property_response(p) for p in properties]


@router.get(
    "/mine",
    response_model=List[PropertyResponse],
    summary="Listings created by the caller",
    responses=get_error_responses(401, 403)
)
async def get_my_properties(
    session: SessionContext = Depends(require_authenticated),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.get_my_properties(session)
    return [to_property_response(p) for p in properties]


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    description="Create a listing. Requires the agent or admin role.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    session: SessionContext = Depends(require_authenticated),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data, session)
    return to_property_response(property_obj)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get listing",
    responses=get_error_responses(404)
)
async def get_property(
    property_id: str = Path(..., description="Listing id"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return to_property_response(property_obj)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update listing",
    description="Partial update. Only the listing agent or an admin may edit.",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: str = Path(..., description="Listing id"),
    session: SessionContext = Depends(require_authenticated),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, property_data, session)
    return to_property_response(property_obj)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete listing",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: str = Path(..., description="Listing id"),
    session: SessionContext = Depends(require_authenticated),
    property_service: PropertyService = Depends(get_property_service)
) -> None:
    await property_service.delete_property(property_id, session)


@router.post(
    "/{property_id}/view",
    response_model=PropertyResponse,
    summary="Record a listing view",
    responses=get_error_responses(404)
)
async def record_property_view(
    property_id: str = Path(..., description="Listing id"),
    session: SessionContext = Depends(get_session_context),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.record_view(property_id, session)
    return to_property_response(property_obj)
