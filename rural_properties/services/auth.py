"""
Identity service: sign-up, sign-in, federated sign-in, sign-out, token
refresh, password reset and per-request session resolution.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.config import settings
from rural_properties.repositories.user import UserRepository
from rural_properties.repositories.agent import AgentRepository
from rural_properties.models.user import User, UserRole
from rural_properties.schemas.auth import SignUpRequest
from rural_properties.services.access import (
    ANONYMOUS_SESSION,
    SessionContext,
    role_for_record,
)
from rural_properties.utils.auth import (
    create_access_token,
    create_refresh_token,
    create_password_reset_token,
    verify_token,
    verify_federated_assertion,
)
from rural_properties.utils.exceptions import (
    APIException,
    AuthError,
    BadRequestError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    ValidationError,
)
from jose import JWTError, ExpiredSignatureError
import uuid
import logging

logger = logging.getLogger(__name__)


class PasswordResetMailer:
    """
    Hands password reset tokens to the account owner.
    The default transport only logs the dispatch; the token itself is
    neither logged nor kept in memory.
    """
    
    async def send_reset(self, email: str, token: str) -> None:
        logger.info(f"Password reset dispatched to {email}")


password_reset_mailer = PasswordResetMailer()


class AuthService:
    """
    Identity provider backed by the users collection and signed JWTs.
    """
    
    def __init__(self, db_session: AsyncSession, mailer: Optional[PasswordResetMailer] = None):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        self.mailer = mailer or password_reset_mailer
    
    def create_tokens(self, user: User) -> Tuple[str, str]:
        """
        Create access and refresh tokens for user.
        
        Returns:
            Tuple of (access_token, refresh_token)
        """
        access_token = create_access_token(user_id=user.id, email=user.email, role=user.role)
        refresh_token = create_refresh_token(user_id=user.id, email=user.email)
        return access_token, refresh_token
    
    async def sign_up(self, data: SignUpRequest) -> Tuple[User, str, str]:
        """
        Register a user or agent account.
        Agent sign-ups also get an agent profile.
        
        Raises:
            ConflictError: If the email is already registered
            ValidationError: If the account data is invalid
        """
        role = UserRole.AGENT if data.account_type == "agent" else UserRole.USER
        try:
            user = await self.user_repo.create_user({
                "email": data.email,
                "password": data.password,
                "first_name": data.first_name,
                "last_name": data.last_name,
                "phone": data.phone,
                "role": role.value,
            })
        except ValueError as e:
            if "already exists" in str(e):
                raise ConflictError(f"An account with email {data.email} already exists")
            raise ValidationError(str(e))
        
        if role == UserRole.AGENT:
            await self.agent_repo.create({
                "user_id": str(user.id),
                "email": user.email,
                "display_name": user.display_name,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "phone": user.phone,
            })
            logger.info(f"Created agent profile for {user.email}")
        
        access_token, refresh_token = self.create_tokens(user)
        logger.info(f"New {role.value} account signed up: {user.email}")
        return user, access_token, refresh_token
    
    async def sign_in(self, email: str, password: str) -> Tuple[User, str, str]:
        """
        Authenticate with email and password.
        
        Raises:
            AuthError: For unknown accounts, wrong passwords and inactive accounts
        """
        try:
            user = await self.user_repo.get_by_email(email)
            if not user or not user.verify_password(password):
                logger.warning(f"Failed sign-in attempt for email: {email}")
                raise InvalidCredentialsError()
            
            if user.is_active is False:
                logger.warning(f"Sign-in refused for inactive account: {email}")
                raise AuthError("User account is inactive")
            
            access_token, refresh_token = self.create_tokens(user)
            logger.info(f"User signed in: {user.email}")
            return user, access_token, refresh_token
        except AuthError:
            raise
        except Exception as e:
            logger.error(f"Sign-in error for {email}: {e}")
            raise AuthError("Sign-in failed, please try again")
    
    async def sign_in_federated(self, provider: str, id_token: str) -> Tuple[User, str, str]:
        """
        Sign in with an identity assertion from a configured provider.
        The first sign-in creates a user account without a password.
        
        Raises:
            AuthError: For unknown providers, bad assertions and inactive accounts
        """
        secret = settings.federated_providers.get(provider)
        if not secret:
            raise AuthError(f"Unsupported identity provider: {provider}")
        
        try:
            claims = verify_federated_assertion(id_token, secret)
        except JWTError as e:
            logger.warning(f"Rejected {provider} identity assertion: {e}")
            raise AuthError("Invalid identity assertion")
        
        subject = str(claims["sub"])
        user = await self.user_repo.get_by_provider_subject(provider, subject)
        if user is None:
            user = await self.user_repo.get_by_email(claims["email"])
            if user is None:
                try:
                    user = await self.user_repo.create_user({
                        "email": claims["email"],
                        "display_name": claims.get("name") or "",
                        "profile_image": claims.get("picture"),
                        "auth_provider": provider,
                        "provider_subject": subject,
                        "is_email_verified": bool(claims.get("email_verified", True)),
                        "role": UserRole.USER.value,
                    })
                except ValueError as e:
                    raise AuthError(str(e))
                logger.info(f"Created account for {provider} identity {user.email}")
            else:
                user = await self.user_repo.update(user.id, {"auth_provider": provider, "provider_subject": subject})
                logger.info(f"Linked {provider} identity to {user.email}")
        
        if user.is_active is False:
            raise AuthError("User account is inactive")
        
        access_token, refresh_token = self.create_tokens(user)
        return user, access_token, refresh_token
    
    def sign_out(self, session: SessionContext) -> str:
        """Tokens are stateless; the client discards them."""
        if session.is_authenticated:
            logger.info(f"User signed out: {session.user.email}")
        return "Signed out"
    
    async def refresh_access_token(self, refresh_token: str) -> str:
        """
        Create new access token from refresh token.
        
        Raises:
            InvalidTokenError: If refresh token is invalid
            TokenExpiredError: If refresh token is expired
        """
        try:
            token_payload = verify_token(refresh_token, token_type="refresh")
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(str(e))
        
        user = await self._load_user(token_payload.user_id)
        if user is None or user.is_active is False:
            raise InvalidTokenError("Account is no longer available")
        
        return create_access_token(user_id=user.id, email=user.email, role=user.role)
    
    async def resolve_session(self, token: Optional[str]) -> SessionContext:
        """
        Build the session context for a bearer token.
        Missing, invalid or expired tokens and inactive accounts give an anonymous session.
        """
        if not token:
            return ANONYMOUS_SESSION
        
        try:
            token_payload = verify_token(token, token_type="access")
        except JWTError as e:
            logger.debug(f"Ignoring unusable access token: {e}")
            return ANONYMOUS_SESSION
        
        user = await self._load_user(token_payload.user_id)
        if user is None or user.is_active is False:
            return ANONYMOUS_SESSION
        
        return SessionContext(user=user, role=role_for_record(user.role))
    
    async def request_password_reset(self, email: str) -> None:
        """
        Send a reset token when the account exists.
        Callers get the same acknowledgement either way.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or user.is_active is False:
            logger.info(f"Password reset requested for unknown or inactive email: {email}")
            return
        
        token = create_password_reset_token(user.id, user.email)
        await self.mailer.send_reset(user.email, token)
    
    async def confirm_password_reset(self, token: str, new_password: str) -> User:
        """
        Set a new password using a reset token.
        
        Raises:
            InvalidTokenError: If the token is invalid
            TokenExpiredError: If the token is expired
            ValidationError: If the password is too weak
        """
        try:
            token_payload = verify_token(token, token_type="reset")
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(str(e))
        
        user = await self._load_user(token_payload.user_id)
        if user is None:
            raise InvalidTokenError("Account is no longer available")
        
        try:
            updated = await self.user_repo.update_password(user.id, new_password)
        except ValueError as e:
            raise ValidationError(str(e))
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to reset password for {user.email}: {e}")
            raise BadRequestError("Failed to reset password")
        
        logger.info(f"Password reset completed for {user.email}")
        return updated
    
    async def _load_user(self, user_id: str) -> Optional[User]:
        try:
            return await self.user_repo.get_by_id(uuid.UUID(user_id))
        except ValueError:
            return None
