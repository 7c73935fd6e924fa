"""
Agent profile model.
Holds licensing, agency and specialization details plus the derived review rating.
"""

from sqlalchemy import String, Text, Integer, Float, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base
from typing import Any, Dict, List, Optional


class Agent(Base):
    """
    Agent profile document.
    References its user account by id only; rating and total_reviews are
    recomputed from approved reviews.
    """
    
    __tablename__ = "agents"
    
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    
    license_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    agency: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    specializations: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    areas: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    languages: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, index=True)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    properties: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    social_media: Mapped[Dict[str, str]] = mapped_column(JSON, nullable=False, default=dict)
    
    def snapshot(self) -> Dict[str, Any]:
        """Contact snapshot copied onto listings."""
        return {
            "id": str(self.id),
            "name": self.display_name,
            "email": self.email,
            "phone": self.phone,
            "profile_image": self.profile_image,
        }
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "email": self.email,
            "display_name": self.display_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "profile_image": self.profile_image,
            "license_number": self.license_number,
            "agency": dict(self.agency or {}),
            "specializations": list(self.specializations or []),
            "areas": list(self.areas or []),
            "languages": list(self.languages or []),
            "experience": self.experience,
            "rating": self.rating,
            "total_reviews": self.total_reviews,
            "properties": list(self.properties or []),
            "is_active": self.is_active,
            "bio": self.bio,
            "social_media": dict(self.social_media or {}),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
