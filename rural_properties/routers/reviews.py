"""
Review endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional
from rural_properties.models.review import ReviewStatus
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.review import (
    ReviewCreate,
    ReviewStatusUpdate,
    ReviewResponse,
    ReviewListResponse
)
from rural_properties.services.access import Role, SessionContext
from rural_properties.services.review import ReviewService
from rural_properties.utils.dependencies import get_review_service, require_authenticated, require_role


router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review an agent",
    responses=get_error_responses(401, 404, 422)
)
async def create_review(
    review_data: ReviewCreate,
    session: SessionContext = Depends(require_authenticated),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    review = await review_service.create_review(review_data, session)
    return ReviewResponse.model_validate(review.to_dict())


@router.get("", response_model=ReviewListResponse, summary="List approved reviews")
async def list_reviews(
    agent_id: Optional[str] = Query(None),
    property_id: Optional[str] = Query(None),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewListResponse:
    reviews = await review_service.list_reviews(agent_id=agent_id, property_id=property_id)
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r.to_dict()) for r in reviews],
        total=len(reviews)
    )


@router.get(
    "/moderation",
    response_model=ReviewListResponse,
    summary="Reviews by moderation status",
    responses=get_error_responses(401, 403)
)
async def list_reviews_for_moderation(
    review_status: ReviewStatus = Query(ReviewStatus.PENDING, alias="status"),
    session: SessionContext = Depends(require_role(Role.ADMIN)),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewListResponse:
    reviews = await review_service.list_reviews(status=review_status)
    return ReviewListResponse(
        reviews=[ReviewResponse.model_validate(r.to_dict()) for r in reviews],
        total=len(reviews)
    )


@router.patch(
    "/{review_id}/status",
    response_model=ReviewResponse,
    summary="Moderate a review",
    responses=get_error_responses(401, 403, 404, 422)
)
async def set_review_status(
    update: ReviewStatusUpdate,
    review_id: str = Path(...),
    session: SessionContext = Depends(require_role(Role.ADMIN)),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    review = await review_service.set_status(review_id, update.status, session)
    return ReviewResponse.model_validate(review.to_dict())


@router.post(
    "/{review_id}/helpful",
    response_model=ReviewResponse,
    summary="Mark a review helpful",
    responses=get_error_responses(404)
)
async def mark_review_helpful(
    review_id: str = Path(...),
    review_service: ReviewService = Depends(get_review_service)
) -> ReviewResponse:
    review = await review_service.mark_helpful(review_id)
    return ReviewResponse.model_validate(review.to_dict())
