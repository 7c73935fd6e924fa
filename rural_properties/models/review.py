"""
Review model for agent and listing feedback.
"""

from sqlalchemy import String, Text, Integer, Boolean, JSON, Enum as SQLEnum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base, enum_values
import enum
from typing import List, Optional


class ReviewStatus(str, enum.Enum):
    """Moderation status. Only approved reviews count toward agent ratings."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Review(Base):
    """Review document with a 1-5 rating."""
    
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )
    
    property_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    agent_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pros: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    cons: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    would_recommend: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    verified_purchase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[ReviewStatus] = mapped_column(
        SQLEnum(ReviewStatus, native_enum=False, values_callable=enum_values),
        nullable=False,
        default=ReviewStatus.PENDING,
        index=True
    )
    helpful: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "property_id": self.property_id,
            "user_id": self.user_id,
            "agent_id": self.agent_id,
            "rating": self.rating,
            "title": self.title,
            "comment": self.comment,
            "pros": list(self.pros or []),
            "cons": list(self.cons or []),
            "would_recommend": self.would_recommend,
            "verified_purchase": self.verified_purchase,
            "status": self.status.value,
            "helpful": self.helpful,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
