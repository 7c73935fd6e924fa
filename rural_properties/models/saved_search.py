"""
Saved search model.
The filters object has the same shape the listing query consumes.
"""

from sqlalchemy import String, Integer, Boolean, JSON, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base, enum_values
from datetime import datetime
import enum
from typing import Any, Dict, Optional


class SearchFrequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    NEVER = "never"


class SavedSearch(Base):
    """Saved search document owned by a user (weak reference)."""
    
    __tablename__ = "saved_searches"
    
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    filters: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    frequency: Mapped[SearchFrequency] = mapped_column(
        SQLEnum(SearchFrequency, native_enum=False, values_callable=enum_values),
        nullable=False,
        default=SearchFrequency.WEEKLY
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_run: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    new_properties_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "name": self.name,
            "filters": dict(self.filters or {}),
            "frequency": self.frequency.value,
            "is_active": self.is_active,
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "new_properties_count": self.new_properties_count,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
