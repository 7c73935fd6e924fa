"""
Pydantic schemas for reviews.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from rural_properties.models.review import ReviewStatus


class ReviewCreate(BaseModel):
    agent_id: str
    property_id: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=255)
    comment: str = Field("", max_length=5000)
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)
    would_recommend: bool = True


class ReviewStatusUpdate(BaseModel):
    status: ReviewStatus


class ReviewResponse(BaseModel):
    id: str
    property_id: Optional[str] = None
    user_id: Optional[str] = None
    agent_id: str
    rating: int
    title: str
    comment: str
    pros: List[str]
    cons: List[str]
    would_recommend: bool
    verified_purchase: bool
    status: ReviewStatus
    helpful: int
    created_at: datetime
    updated_at: datetime


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    total: int
