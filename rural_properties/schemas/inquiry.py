"""
Pydantic schemas for inquiries.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from rural_properties.models.inquiry import InquiryStatus, InquiryType


class ContactInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class InquiryCreate(BaseModel):
    """New inquiry about a listing."""
    
    property_id: str
    type: InquiryType = InquiryType.GENERAL
    message: str = Field(..., min_length=5, max_length=5000)
    contact_info: Optional[ContactInfo] = Field(None, description="Defaults to the caller's profile")
    preferred_contact: str = Field("email", pattern="^(email|phone|sms)$")
    priority: str = Field("normal", pattern="^(low|normal|high)$")
    
    @field_validator("message")
    @classmethod
    def strip_message(cls, v):
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()


class InquiryReply(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus


class InquiryResponse(BaseModel):
    id: str
    property_id: str
    user_id: Optional[str] = None
    agent_id: Optional[str] = None
    type: InquiryType
    message: str
    contact_info: Dict[str, Any]
    preferred_contact: str
    status: InquiryStatus
    priority: str
    responses: List[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime


class InquiryListResponse(BaseModel):
    inquiries: List[InquiryResponse]
    total: int
