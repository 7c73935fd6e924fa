"""
Inquiry model for buyer questions and viewing requests on a listing.
"""

from sqlalchemy import String, Text, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base, enum_values
import enum
from typing import Any, Dict, List, Optional


class InquiryStatus(str, enum.Enum):
    """Inquiry status. Any status may follow any other."""
    PENDING = "pending"
    RESPONDED = "responded"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CLOSED = "closed"


class InquiryType(str, enum.Enum):
    GENERAL = "general"
    VIEWING = "viewing"
    OFFER = "offer"
    FINANCING = "financing"


class Inquiry(Base):
    """
    Inquiry document.
    Property, user and agent are weak references; responses are kept in arrival order.
    """
    
    __tablename__ = "inquiries"
    
    property_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    agent_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    
    type: Mapped[InquiryType] = mapped_column(SQLEnum(InquiryType, native_enum=False, values_callable=enum_values), nullable=False, default=InquiryType.GENERAL)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    contact_info: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    preferred_contact: Mapped[str] = mapped_column(String(20), nullable=False, default="email")
    status: Mapped[InquiryStatus] = mapped_column(
        SQLEnum(InquiryStatus, native_enum=False, values_callable=enum_values),
        nullable=False,
        default=InquiryStatus.PENDING,
        index=True
    )
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    responses: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": self.property_id,
            "user_id": self.user_id,
            "agent_id": self.agent_id,
            "type": self.type.value,
            "message": self.message,
            "contact_info": dict(self.contact_info or {}),
            "preferred_contact": self.preferred_contact,
            "status": self.status.value,
            "priority": self.priority,
            "responses": list(self.responses or []),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
