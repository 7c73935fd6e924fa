"""
System settings singleton document.
"""

from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base
from typing import Any, Dict

SETTINGS_KEY = "settings"


class SystemSettings(Base):
    """Site-wide settings. Exactly one row, addressed by SETTINGS_KEY."""
    
    __tablename__ = "system_settings"
    
    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, default=SETTINGS_KEY)
    site: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    features: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    pricing: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    maintenance: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    
    def to_dict(self) -> dict:
        return {
            "site": dict(self.site or {}),
            "features": dict(self.features or {}),
            "pricing": dict(self.pricing or {}),
            "maintenance": dict(self.maintenance or {}),
            "updated_at": self.updated_at.isoformat(),
        }
