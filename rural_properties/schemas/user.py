"""
Pydantic schemas for user profile requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime


class UserResponse(BaseModel):
    """Schema for user response data (password excluded)."""
    
    id: str
    email: str
    display_name: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    role: Optional[str] = Field(None, description="Stored role; absent on legacy records")
    is_active: Optional[bool] = None
    is_email_verified: bool = False
    is_phone_verified: bool = False
    preferences: Dict[str, Any] = Field(default_factory=dict)
    saved_properties: List[str] = Field(default_factory=list)
    viewed_properties: List[str] = Field(default_factory=list)
    auth_provider: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserListResponse(BaseModel):
    """Schema for paginated user list response."""
    
    users: List[UserResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool


class UserProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""
    
    display_name: Optional[str] = Field(None, min_length=1, max_length=255)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50, examples=["+27 83 123 4567"])
    profile_image: Optional[str] = Field(None, max_length=500)
    
    @field_validator("display_name", "first_name", "last_name")
    @classmethod
    def strip_names(cls, v):
        """Names cannot be blank."""
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Name cannot be empty")
        return v


class NotificationPreferences(BaseModel):
    email: bool = True
    sms: bool = False
    push: bool = True


class PropertyAlertPreferences(BaseModel):
    new_properties: bool = True
    price_changes: bool = True
    similar_properties: bool = False


class PreferencesUpdate(BaseModel):
    """Replacement notification and alert preferences."""
    
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    property_alerts: PropertyAlertPreferences = Field(default_factory=PropertyAlertPreferences)


class SavedPropertiesResponse(BaseModel):
    saved_properties: List[str]


class ViewedPropertiesResponse(BaseModel):
    viewed_properties: List[str]
