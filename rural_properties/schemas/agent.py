"""
Pydantic schemas for agent profiles.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime


class AgentResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    email: str
    display_name: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    license_number: Optional[str] = None
    agency: Dict[str, Any] = Field(default_factory=dict)
    specializations: List[str] = Field(default_factory=list)
    areas: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    experience: int = 0
    rating: float = 0.0
    total_reviews: int = 0
    properties: List[str] = Field(default_factory=list)
    is_active: bool = True
    bio: str = ""
    social_media: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class AgentListResponse(BaseModel):
    agents: List[AgentResponse]
    total: int


class AgentProfileUpdate(BaseModel):
    """Fields an agent may change on their own profile."""
    
    phone: Optional[str] = Field(None, max_length=50)
    profile_image: Optional[str] = Field(None, max_length=500)
    license_number: Optional[str] = Field(None, max_length=50)
    agency: Optional[Dict[str, Any]] = None
    specializations: Optional[List[str]] = None
    areas: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    experience: Optional[int] = Field(None, ge=0, le=80)
    bio: Optional[str] = Field(None, max_length=5000)
    social_media: Optional[Dict[str, str]] = None
