"""
Authentication utilities for JWT token management.
Provides access, refresh and password-reset tokens plus federated assertion checks.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, ExpiredSignatureError, jwt
from rural_properties.config import settings
import uuid


class TokenPayload:
    """JWT token payload structure."""
    
    def __init__(self, user_id: str, email: str, role: Optional[str], exp: datetime, token_type: str = "access"):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.exp = exp
        self.token_type = token_type
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from dictionary."""
        return cls(
            user_id=data["sub"],
            email=data["email"],
            role=data.get("role"),  # Absent on refresh and reset tokens
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc),
            token_type=data.get("type", "access"),
        )


def _encode(claims: Dict[str, Any], expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        **claims,
        "exp": now + expires_delta,
        "iat": now,
    }
    if settings.project_id:
        to_encode["iss"] = settings.project_id
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: Optional[str],
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.
    
    Args:
        user_id: User's UUID
        email: User's email address
        role: Stored role value, None for legacy records
        expires_delta: Optional custom expiration time
        
    Returns:
        Encoded JWT token string
    """
    return _encode(
        {"sub": str(user_id), "email": email, "role": role, "type": "access"},
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(
    user_id: uuid.UUID,
    email: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT refresh token."""
    return _encode(
        {"sub": str(user_id), "email": email, "type": "refresh"},
        expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days),
    )


def create_password_reset_token(user_id: uuid.UUID, email: str) -> str:
    """Short-lived token mailed to the account owner."""
    return _encode(
        {"sub": str(user_id), "email": email, "type": "reset"},
        timedelta(minutes=settings.password_reset_expire_minutes),
    )


def verify_token(token: str, token_type: str = "access") -> TokenPayload:
    """
    Verify and decode JWT token.
    
    Args:
        token: JWT token string
        token_type: Expected token type ("access", "refresh" or "reset")
        
    Returns:
        Decoded TokenPayload
        
    Raises:
        JWTError: If token is invalid or expired (ExpiredSignatureError for expiry)
    """
    try:
        options = {"verify_iss": bool(settings.project_id)}
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.project_id,
            options=options,
        )
        
        if payload.get("type") != token_type:
            raise JWTError(f"Invalid token type. Expected {token_type}")
        
        if not payload.get("sub") or not payload.get("email"):
            raise JWTError("Invalid token payload")
        
        return TokenPayload.from_dict(payload)
    except (JWTError, ExpiredSignatureError):
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {str(e)}")


def verify_federated_assertion(id_token: str, secret: str) -> Dict[str, Any]:
    """
    Decode an identity assertion signed by a federated provider.
    
    Returns:
        Claims with at least sub and email
        
    Raises:
        JWTError: If the signature, expiry or claims are invalid
    """
    claims = jwt.decode(
        id_token,
        secret,
        algorithms=["HS256"],
        options={"verify_aud": False},
    )
    if not claims.get("sub") or not claims.get("email"):
        raise JWTError("Identity assertion is missing sub or email")
    return claims
