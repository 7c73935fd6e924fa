"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    SignUpRequest,
    SignInRequest,
    FederatedSignInRequest,
    TokenResponse,
    AuthResponse,
    RefreshTokenRequest,
    AccessTokenResponse,
    PasswordResetRequest,
    PasswordResetConfirm,
    MessageResponse
)

# User schemas
from .user import (
    UserResponse,
    UserListResponse,
    UserProfileUpdate,
    PreferencesUpdate,
    SavedPropertiesResponse,
    ViewedPropertiesResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    FilterOptionsResponse
)

from .agent import AgentResponse, AgentListResponse, AgentProfileUpdate
from .inquiry import InquiryCreate, InquiryReply, InquiryStatusUpdate, InquiryResponse, InquiryListResponse
from .review import ReviewCreate, ReviewStatusUpdate, ReviewResponse, ReviewListResponse
from .saved_search import (
    SavedSearchCreate,
    SavedSearchUpdate,
    SavedSearchResponse,
    SavedSearchListResponse,
    SavedSearchRunResponse
)

# Administration schemas
from .admin import (
    SeedReportResponse,
    ClearReportResponse,
    RoleChangeRequest,
    RoleChangeResponse,
    BackfillResponse,
    CollectionStatsResponse,
    SystemSettingsResponse,
    SystemSettingsUpdate,
    MapsConfigResponse,
    AccessCheckResponse
)

__all__ = [
    # Authentication
    "SignUpRequest",
    "SignInRequest",
    "FederatedSignInRequest",
    "TokenResponse",
    "AuthResponse",
    "RefreshTokenRequest",
    "AccessTokenResponse",
    "PasswordResetRequest",
    "PasswordResetConfirm",
    "MessageResponse",

    # User
    "UserResponse",
    "UserListResponse",
    "UserProfileUpdate",
    "PreferencesUpdate",
    "SavedPropertiesResponse",
    "ViewedPropertiesResponse",

    # Property
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyListResponse",
    "FilterOptionsResponse",

    # Agents, inquiries, reviews
    "AgentResponse",
    "AgentListResponse",
    "AgentProfileUpdate",
    "InquiryCreate",
    "InquiryReply",
    "InquiryStatusUpdate",
    "InquiryResponse",
    "InquiryListResponse",
    "ReviewCreate",
    "ReviewStatusUpdate",
    "ReviewResponse",
    "ReviewListResponse",

    # Saved searches
    "SavedSearchCreate",
    "SavedSearchUpdate",
    "SavedSearchResponse",
    "SavedSearchListResponse",
    "SavedSearchRunResponse",

    # Administration
    "SeedReportResponse",
    "ClearReportResponse",
    "RoleChangeRequest",
    "RoleChangeResponse",
    "BackfillResponse",
    "CollectionStatsResponse",
    "SystemSettingsResponse",
    "SystemSettingsUpdate",
    "MapsConfigResponse",
    "AccessCheckResponse"
]
