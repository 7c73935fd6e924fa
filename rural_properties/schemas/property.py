"""
Pydantic schemas for property requests and responses.
Handles listing CRUD payloads, nested location/size blocks and query results.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal
from rural_properties.models.property import PropertyType, PropertyStatus


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class LocationSchema(BaseModel):
    """Where the property is."""
    
    address: str = Field("", max_length=255, examples=["Farm 123, Rietfontein Road"])
    city: str = Field(..., min_length=1, max_length=100, examples=["Tzaneen"])
    province: str = Field(..., min_length=1, max_length=100, examples=["Limpopo"])
    postal_code: Optional[str] = Field(None, max_length=20)
    coordinates: Optional[Coordinates] = None
    
    @field_validator("city", "province")
    @classmethod
    def strip_required(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class SizeSchema(BaseModel):
    """Sizes as entered, with their own units."""
    
    land_size: Optional[str] = Field(None, max_length=50, examples=["15 hectares"])
    building_size: Optional[str] = Field(None, max_length=50, examples=["450 sqm"])
    total_size: Optional[str] = Field(None, max_length=50)


class PropertyFeatures(BaseModel):
    """Room counts and amenity flags. Extra flags are kept as given."""
    
    model_config = ConfigDict(extra="allow")
    
    bedrooms: int = Field(0, ge=0, le=100)
    bathrooms: int = Field(0, ge=0, le=100)
    garages: int = Field(0, ge=0, le=100)
    parking_spaces: int = Field(0, ge=0, le=100)
    swimming_pool: bool = False
    garden: bool = False
    security: bool = False
    electricity: bool = False
    water: bool = False
    internet: bool = False
    phone_line: bool = False


class OwnerSchema(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class PropertyBase(BaseModel):
    """Base property schema with common fields."""
    
    title: str = Field(..., min_length=5, max_length=255, examples=["Beautiful Farm with River Access"])
    description: str = Field(..., min_length=10, max_length=10000)
    location: LocationSchema
    price: Decimal = Field(..., ge=0, description="Asking price in ZAR", examples=[2450000])
    size: SizeSchema = Field(default_factory=SizeSchema)
    features: PropertyFeatures = Field(default_factory=PropertyFeatures)
    property_type: PropertyType = Field(..., examples=["farm"])
    status: PropertyStatus = PropertyStatus.ACTIVE
    featured: bool = False
    images: List[str] = Field(default_factory=list, max_length=30)
    owner: Optional[OwnerSchema] = None
    tags: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    zoning: Optional[str] = Field(None, max_length=50)
    water_rights: bool = False
    electricity: bool = False
    road_access: Optional[str] = Field(None, max_length=50)
    
    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v):
        """Validate and clean text fields."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()
    
    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        """Validate price value."""
        if v < 0:
            raise ValueError("Price cannot be negative")
        if v > Decimal("999999999999.99"):
            raise ValueError("Price exceeds maximum allowed value")
        return v


class PropertyCreate(PropertyBase):
    """Schema for creating a new listing."""


class PropertyUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    
    title: Optional[str] = Field(None, min_length=5, max_length=255)
    description: Optional[str] = Field(None, min_length=10, max_length=10000)
    location: Optional[LocationSchema] = None
    price: Optional[Decimal] = Field(None, ge=0)
    size: Optional[SizeSchema] = None
    features: Optional[PropertyFeatures] = None
    property_type: Optional[PropertyType] = None
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None
    images: Optional[List[str]] = None
    owner: Optional[OwnerSchema] = None
    tags: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    zoning: Optional[str] = None
    water_rights: Optional[bool] = None
    electricity: Optional[bool] = None
    road_access: Optional[str] = None
    
    @model_validator(mode="after")
    def validate_not_empty(self):
        """At least one field must be set."""
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class PropertyResponse(BaseModel):
    """Schema for property response data."""
    
    id: str
    title: str
    description: str
    location: Dict[str, Any]
    price: float
    price_formatted: str
    size: Dict[str, Any]
    features: Dict[str, Any]
    property_type: PropertyType
    status: PropertyStatus
    featured: bool
    images: List[str]
    agent: Dict[str, Any]
    agent_id: Optional[str] = None
    listed_by: Optional[str] = None
    owner: Optional[Dict[str, Any]] = None
    tags: List[str]
    amenities: List[str]
    zoning: Optional[str] = None
    water_rights: bool
    electricity: bool
    road_access: Optional[str] = None
    views: int
    inquiries: int
    price_range: str = Field(..., description="Price range label the price falls in")
    created_at: datetime
    updated_at: datetime


class PropertyListResponse(BaseModel):
    """One page of listing results."""
    
    items: List[PropertyResponse]
    count: int
    next_cursor: Optional[str] = Field(None, description="Pass back as cursor for the next page")
    filters: Dict[str, Any]


class FilterOptionsResponse(BaseModel):
    """Choices offered by the listing filters."""
    
    property_types: List[str]
    provinces: List[str]
    price_ranges: List[Dict[str, Any]]
