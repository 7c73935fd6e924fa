"""
Pydantic schemas for saved searches.
The filters block mirrors the listing query parameters.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from rural_properties.models.property import PropertyStatus
from rural_properties.models.saved_search import SearchFrequency
from rural_properties.schemas.property import PropertyResponse


class SearchFilters(BaseModel):
    type: str = Field("All", examples=["Farm"])
    province: str = Field("All Provinces", examples=["Limpopo"])
    price: str = Field("Any Price", examples=["R1M - R3M"])
    search: str = ""
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)


class SavedSearchCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    frequency: SearchFrequency = SearchFrequency.WEEKLY
    is_active: bool = True


class SavedSearchUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    filters: Optional[SearchFilters] = None
    frequency: Optional[SearchFrequency] = None
    is_active: Optional[bool] = None


class SavedSearchResponse(BaseModel):
    id: str
    user_id: str
    name: str
    filters: dict
    frequency: SearchFrequency
    is_active: bool
    last_run: Optional[datetime] = None
    new_properties_count: int
    created_at: datetime
    updated_at: datetime


class SavedSearchListResponse(BaseModel):
    saved_searches: List[SavedSearchResponse]
    total: int


class SavedSearchRunResponse(BaseModel):
    saved_search: SavedSearchResponse
    items: List[PropertyResponse]
    count: int
    new_properties_count: int
