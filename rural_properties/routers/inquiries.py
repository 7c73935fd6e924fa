"""
Inquiry endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional
from rural_properties.models.inquiry import InquiryStatus
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.inquiry import (
    InquiryCreate,
    InquiryReply,
    InquiryStatusUpdate,
    InquiryResponse,
    InquiryListResponse
)
from rural_properties.services.access import SessionContext
from rural_properties.services.inquiry import InquiryService
from rural_properties.utils.dependencies import get_inquiry_service, require_authenticated


router = APIRouter(prefix="/inquiries", tags=["Inquiries"], responses=get_error_responses(401))


@router.post(
    "",
    response_model=InquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Ask about a listing",
    responses=get_error_responses(404, 422)
)
async def create_inquiry(
    inquiry_data: InquiryCreate,
    session: SessionContext = Depends(require_authenticated),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryResponse:
    inquiry = await inquiry_service.create_inquiry(inquiry_data, session)
    return InquiryResponse.model_validate(inquiry.to_dict())


@router.get("", response_model=InquiryListResponse, summary="Inquiries visible to the caller")
async def list_inquiries(
    inquiry_status: Optional[InquiryStatus] = Query(None, alias="status"),
    property_id: Optional[str] = Query(None),
    session: SessionContext = Depends(require_authenticated),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryListResponse:
    """
    Buyers see their own inquiries, agents those on their listings, admins all.
    """
    inquiries = await inquiry_service.list_inquiries(session, inquiry_status, property_id)
    return InquiryListResponse(
        inquiries=[InquiryResponse.model_validate(i.to_dict()) for i in inquiries],
        total=len(inquiries)
    )


@router.get(
    "/{inquiry_id}",
    response_model=InquiryResponse,
    summary="Get inquiry",
    responses=get_error_responses(403, 404)
)
async def get_inquiry(
    inquiry_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryResponse:
    inquiry = await inquiry_service.get_inquiry(inquiry_id, session)
    return InquiryResponse.model_validate(inquiry.to_dict())


@router.post(
    "/{inquiry_id}/responses",
    response_model=InquiryResponse,
    summary="Reply to an inquiry",
    responses=get_error_responses(403, 404, 422)
)
async def respond_to_inquiry(
    reply: InquiryReply,
    inquiry_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryResponse:
    inquiry = await inquiry_service.respond(inquiry_id, reply.message, session)
    return InquiryResponse.model_validate(inquiry.to_dict())


@router.patch(
    "/{inquiry_id}/status",
    response_model=InquiryResponse,
    summary="Change inquiry status",
    responses=get_error_responses(403, 404, 422)
)
async def set_inquiry_status(
    update: InquiryStatusUpdate,
    inquiry_id: str = Path(...),
    session: SessionContext = Depends(require_authenticated),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> InquiryResponse:
    inquiry = await inquiry_service.set_status(inquiry_id, update.status, session)
    return InquiryResponse.model_validate(inquiry.to_dict())
