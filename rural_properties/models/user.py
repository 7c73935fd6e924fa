"""
User model with authentication and role management.
Handles buyer, agent and administrator accounts.
"""

from sqlalchemy import String, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from rural_properties.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
from typing import Any, Dict, List, Optional

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserRole(str, enum.Enum):
    """Roles that can be stored on a user record."""
    ADMIN = "admin"
    AGENT = "agent"
    USER = "user"


def default_preferences() -> Dict[str, Any]:
    """Notification preferences for a new account."""
    return {
        "notifications": {"email": True, "sms": False, "push": True},
        "property_alerts": {"new_properties": True, "price_changes": True, "similar_properties": False},
    }


class User(Base):
    """
    User account and profile.
    
    The role column is nullable: legacy records may have no role until the
    backfill runs. Role decisions go through the access service, never
    through direct comparisons on this column.
    """
    
    __tablename__ = "users"
    
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )
    
    # Federated-only accounts have no password
    hashed_password: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Bcrypt hashed password"
    )
    
    display_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    profile_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    
    role: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        index=True,
        comment="admin, agent or user; absent on legacy records"
    )
    
    is_active: Mapped[Optional[bool]] = mapped_column(
        Boolean,
        nullable=True,
        default=True,
        index=True
    )
    
    is_email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_phone_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    
    preferences: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=default_preferences)
    
    # Sets of property ids, not enforced by the store
    saved_properties: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    viewed_properties: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    
    # Federated identity
    auth_provider: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    provider_subject: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    
    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
    
    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.
        
        Args:
            email: Email address to validate
            
        Returns:
            Normalized email address
            
        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")
    
    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password using bcrypt.
        
        Args:
            password: Plain text password
            
        Returns:
            Hashed password string
        """
        if not password or len(password) < 8:
            raise ValueError("Password must be at least 8 characters long")
        
        return pwd_context.hash(password)
    
    def verify_password(self, password: str) -> bool:
        """
        Verify a password against the stored hash.
        
        Returns:
            True if password matches, False otherwise (including accounts without a password)
        """
        if not self.hashed_password:
            return False
        return pwd_context.verify(password, self.hashed_password)
    
    @property
    def full_name(self) -> str:
        """First and last name, falling back to the display name."""
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.display_name
    
    def to_dict(self) -> dict:
        """
        Convert user to dictionary (excluding sensitive data).
        
        Returns:
            Dictionary representation of user
        """
        return {
            "id": str(self.id),
            "email": self.email,
            "display_name": self.display_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "profile_image": self.profile_image,
            "role": self.role,
            "is_active": self.is_active,
            "is_email_verified": self.is_email_verified,
            "is_phone_verified": self.is_phone_verified,
            "preferences": dict(self.preferences or {}),
            "saved_properties": list(self.saved_properties or []),
            "viewed_properties": list(self.viewed_properties or []),
            "auth_provider": self.auth_provider,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
