"""
User repository for authentication and account management operations.
Provides secure user operations with password handling and role lookups.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, func, desc
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.user import User, UserRole
from typing import Optional, List, Dict, Any, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Role values are stored as plain strings; interpreting them is the access service's job.
    """
    
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)
    
    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and optional password hashing.
        
        Args:
            user_data: Dictionary containing user information
                      Must include: email
                      Optional: password (federated and fixture accounts have none), role
            
        Returns:
            Created user instance
            
        Raises:
            ValueError: If validation fails or the email is taken
        """
        try:
            data = dict(user_data)
            email = User.validate_email_format(data.pop("email"))
            
            existing_user = await self.get_by_email(email)
            if existing_user:
                raise ValueError(f"User with email {email} already exists")
            
            password = data.pop("password", None)
            create_data = {
                **data,
                "email": email,
                "hashed_password": User.hash_password(password) if password else None,
                "role": data.get("role", UserRole.USER.value),
                "is_active": data.get("is_active", True),
            }
            if not create_data.get("display_name"):
                name = f"{create_data.get('first_name', '')} {create_data.get('last_name', '')}".strip()
                create_data["display_name"] = name or email.split("@")[0]
            
            created_user = await self.create(create_data)
            logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
            return created_user
        except ValueError as e:
            logger.error(f"User validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.
        
        Args:
            email: Email address to search for
            
        Returns:
            User instance if found, None otherwise
        """
        normalized_email = email.lower().strip()
        return await self.get_by_field("email", normalized_email)
    
    async def get_by_provider_subject(self, provider: str, subject: str) -> Optional[User]:
        """Find the account linked to a federated identity."""
        try:
            query = (
                select(User)
                .where(and_(User.auth_provider == provider, User.provider_subject == subject))
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Failed to get user by {provider} subject {subject}: {e}")
            raise
    
    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.
        
        Returns:
            User instance if authentication successful, None otherwise
        """
        try:
            user = await self.get_by_email(email)
            
            if not user:
                logger.debug(f"Authentication failed: user {email} not found")
                return None
            
            if user.is_active is False:
                logger.debug(f"Authentication failed: user {email} is inactive")
                return None
            
            if not user.verify_password(password):
                logger.debug(f"Authentication failed: invalid password for {email}")
                return None
            
            logger.info(f"User authenticated successfully: {email}")
            return user
        except Exception as e:
            logger.error(f"Failed to authenticate user {email}: {e}")
            raise
    
    async def update_password(self, user_id: uuid.UUID, new_password: str) -> Optional[User]:
        """
        Update user's password with proper hashing.
        
        Raises:
            ValueError: If password validation fails
        """
        try:
            hashed_password = User.hash_password(new_password)
            updated_user = await self.update(user_id, {"hashed_password": hashed_password})
            
            if updated_user:
                logger.info(f"Password updated for user: {updated_user.email}")
            
            return updated_user
        except ValueError as e:
            logger.error(f"Password validation failed for user {user_id}: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to update password for user {user_id}: {e}")
            raise
    
    async def update_user_status(self, user_id: uuid.UUID, is_active: bool) -> Optional[User]:
        """Update user's active status."""
        try:
            updated_user = await self.update(user_id, {"is_active": is_active})
            
            if updated_user:
                status = "activated" if is_active else "deactivated"
                logger.info(f"User {updated_user.email} {status}")
            
            return updated_user
        except Exception as e:
            logger.error(f"Failed to update user status {user_id}: {e}")
            raise
    
    async def update_user_role(self, user_id: uuid.UUID, new_role: UserRole) -> Optional[User]:
        """
        Set the role and reactivate the account.
        
        Returns:
            Updated user instance or None if not found
        """
        try:
            updated_user = await self.update(user_id, {"role": new_role.value, "is_active": True})
            
            if updated_user:
                logger.info(f"User {updated_user.email} role updated to {new_role.value}")
            
            return updated_user
        except Exception as e:
            logger.error(f"Failed to update user role {user_id}: {e}")
            raise
    
    async def get_users_by_role(
        self,
        role: Optional[UserRole] = None,
        skip: int = 0,
        limit: int = 50,
        include_inactive: bool = False
    ) -> Tuple[List[User], int]:
        """
        Get users by role with pagination.
        
        Args:
            role: User role to filter by, None for every role
            skip: Number of records to skip
            limit: Maximum number of records to return
            include_inactive: Whether to include inactive users
            
        Returns:
            Tuple of (users list, total count)
        """
        try:
            conditions = []
            if role is not None:
                conditions.append(User.role == role.value)
            if not include_inactive:
                conditions.append(User.is_active.is_not(False))
            
            query = select(User)
            count_query = select(func.count(User.id))
            if conditions:
                query = query.where(and_(*conditions))
                count_query = count_query.where(and_(*conditions))
            
            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar()
            
            query = query.order_by(desc(User.created_at), desc(User.id)).offset(skip).limit(limit)
            result = await self.db.execute(query)
            users = result.scalars().all()
            
            logger.debug(f"Retrieved {len(users)} users with role {role.value if role else 'any'}")
            return list(users), total_count
        except Exception as e:
            logger.error(f"Failed to get users by role {role}: {e}")
            raise
    
    async def get_users_missing_role(self) -> List[User]:
        """Legacy records stored without a role, or with a blank one."""
        try:
            query = (
                select(User)
                .where(or_(User.role.is_(None), func.trim(User.role) == ""))
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            users = list(result.scalars().all())
            logger.debug(f"Found {len(users)} users without a role")
            return users
        except Exception as e:
            logger.error(f"Failed to scan users for missing roles: {e}")
            raise
    
    async def get_role_counts(self) -> Dict[str, int]:
        """
        Count users grouped by stored role.
        
        Returns:
            Mapping of role value (or "unset") to count
        """
        try:
            query = select(User.role, func.count(User.id)).group_by(User.role)
            result = await self.db.execute(query)
            return {(row[0] or "unset"): row[1] for row in result.all()}
        except Exception as e:
            logger.error(f"Failed to count users by role: {e}")
            raise
