"""
Property model for rural and peri-urban listings.
Handles location, pricing, size, amenity flags and engagement counters.
"""

from sqlalchemy import String, Text, Integer, Numeric, Float, Boolean, JSON, Enum as SQLEnum, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base, enum_values
from decimal import Decimal
import enum
from typing import Any, Dict, List, Optional


class PropertyType(str, enum.Enum):
    """Kinds of listing offered in the catalog."""
    FARM = "farm"
    SMALLHOLDING = "smallholding"
    PLOT = "plot"
    HOUSE = "house"


class PropertyStatus(str, enum.Enum):
    """Listing status. Transitions are caller-driven and unconstrained."""
    ACTIVE = "active"
    PENDING = "pending"
    SOLD = "sold"
    RENTED = "rented"


def format_price(price: Decimal) -> str:
    """Display form of a ZAR amount, e.g. R2,450,000."""
    amount = Decimal(price)
    if amount == amount.to_integral_value():
        return f"R{int(amount):,}"
    return f"R{amount:,.2f}"


class Property(Base):
    """
    Property listing document.
    The agent snapshot is denormalized at creation time and is not kept in sync with the agent profile.
    """
    
    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_properties_price_non_negative"),
    )
    
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    
    # Location
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    province: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    
    # Pricing in ZAR
    price: Mapped[Decimal] = mapped_column(Numeric(precision=14, scale=2), nullable=False, index=True)
    price_formatted: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    
    # Size, free-text units
    land_size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    building_size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    total_size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    
    # Room counts and amenity flags
    features: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    
    property_type: Mapped[PropertyType] = mapped_column(SQLEnum(PropertyType, native_enum=False, values_callable=enum_values), nullable=False, index=True)
    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus, native_enum=False, values_callable=enum_values),
        nullable=False,
        default=PropertyStatus.ACTIVE,
        index=True
    )
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    
    # Denormalized agent snapshot: id, name, email, phone, profile_image
    agent: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    agent_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    # User id of the account that listed the property
    listed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    owner: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    zoning: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    water_rights: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    electricity: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    road_access: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    
    # Counters, only ever changed through atomic increments
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    inquiries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}..., price={self.price})>"
    
    @property
    def location_text(self) -> str:
        """Location string used for free-text matching."""
        return f"{self.city}, {self.province}"
    
    def to_dict(self) -> dict:
        """
        Convert property to dictionary.
        
        Returns:
            Dictionary representation of property
        """
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "location": {
                "address": self.address,
                "city": self.city,
                "province": self.province,
                "postal_code": self.postal_code,
                "coordinates": (
                    {"lat": self.latitude, "lng": self.longitude}
                    if self.latitude is not None and self.longitude is not None else None
                ),
            },
            "price": float(self.price),
            "price_formatted": self.price_formatted,
            "size": {
                "land_size": self.land_size,
                "building_size": self.building_size,
                "total_size": self.total_size,
            },
            "features": dict(self.features or {}),
            "property_type": self.property_type.value,
            "status": self.status.value,
            "featured": self.featured,
            "images": list(self.images or []),
            "agent": dict(self.agent or {}),
            "agent_id": self.agent_id,
            "listed_by": self.listed_by,
            "owner": self.owner,
            "tags": list(self.tags or []),
            "amenities": list(self.amenities or []),
            "zoning": self.zoning,
            "water_rights": self.water_rights,
            "electricity": self.electricity,
            "road_access": self.road_access,
            "views": self.views,
            "inquiries": self.inquiries,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


# Composite index for the listing filters, newest first
catalog_filter_index = Index(
    "idx_properties_type_province_price",
    Property.property_type,
    Property.province,
    Property.price,
    Property.created_at.desc()
)

# Composite index for the featured strip
featured_status_index = Index(
    "idx_properties_featured_status",
    Property.featured,
    Property.status,
    Property.created_at.desc()
)
