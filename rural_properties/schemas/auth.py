"""
Pydantic schemas for identity requests and responses.
Handles sign-up, sign-in, federated sign-in, token refresh and password reset.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Literal, Optional
from rural_properties.schemas.user import UserResponse


class SignUpRequest(BaseModel):
    """Self-service sign-up. Admin accounts are never created this way."""
    
    email: EmailStr = Field(..., examples=["buyer@example.com"])
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    account_type: Literal["user", "agent"] = Field("user", description="Requested account type")
    
    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()
    
    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Validate password strength."""
        has_letter = any(c.isalpha() for c in v)
        has_number = any(c.isdigit() for c in v)
        
        if not has_letter:
            raise ValueError("Password must contain at least one letter")
        
        if not has_number:
            raise ValueError("Password must contain at least one number")
        
        return v
    
    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class SignInRequest(BaseModel):
    """Email and password sign-in."""
    
    email: EmailStr = Field(..., examples=["agent@example.com"])
    password: str = Field(..., min_length=1, max_length=128)
    
    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class FederatedSignInRequest(BaseModel):
    """Identity assertion issued by a configured federated provider."""
    
    provider: str = Field(..., min_length=1, max_length=50, examples=["google"])
    id_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Token response schema."""
    
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiration time in seconds", examples=[1800])


class AuthResponse(BaseModel):
    """Signed-in user with tokens."""
    
    user: UserResponse
    tokens: TokenResponse
    dashboard: str = Field(..., description="Dashboard route for the account's role", examples=["/user"])


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PasswordResetRequest(BaseModel):
    email: EmailStr
    
    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str = Field(..., min_length=8, max_length=128)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    
    message: str
