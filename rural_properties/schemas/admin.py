"""
Pydantic schemas for admin tools, system settings and access checks.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict, Any, Literal


class SeedReportResponse(BaseModel):
    """Per-collection insert counts of a seed run."""
    
    properties: int
    users: int
    agents: int
    inquiries: int
    reviews: int
    saved_searches: int
    system_settings: bool
    errors: List[str]


class ClearReportResponse(BaseModel):
    cleared: int
    per_collection: Dict[str, int]
    errors: List[str]


class RoleChangeRequest(BaseModel):
    email: EmailStr
    role: Literal["admin", "agent", "user"]
    
    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class RoleChangeResponse(BaseModel):
    success: bool
    outcome: Literal["updated", "not_found", "write_failed"]
    message: str


class BackfillResponse(BaseModel):
    updated: int


class CollectionStatsResponse(BaseModel):
    collections: Dict[str, int]
    users_by_role: Dict[str, int]
    properties_by_type: Dict[str, int]
    properties_by_status: Dict[str, int]


class SystemSettingsResponse(BaseModel):
    site: Dict[str, Any] = Field(default_factory=dict)
    features: Dict[str, Any] = Field(default_factory=dict)
    pricing: Dict[str, Any] = Field(default_factory=dict)
    maintenance: Dict[str, Any] = Field(default_factory=dict)


class SystemSettingsUpdate(BaseModel):
    site: Optional[Dict[str, Any]] = None
    features: Optional[Dict[str, Any]] = None
    pricing: Optional[Dict[str, Any]] = None
    maintenance: Optional[Dict[str, Any]] = None


class MapsConfigResponse(BaseModel):
    mode: Literal["interactive", "static"]
    api_key: Optional[str] = None


class AccessCheckResponse(BaseModel):
    """Gate decision for a route and the caller's role."""
    
    path: str
    role: str
    state: Literal["unresolved", "allowed", "denied"]
    redirect_to: Optional[str] = None
