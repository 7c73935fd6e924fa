"""
Profile service: profile edits, notification preferences and the saved
and viewed listing sets kept on the user record.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.models.user import User
from rural_properties.repositories.user import UserRepository
from rural_properties.repositories.property import PropertyRepository
from rural_properties.schemas.user import UserProfileUpdate, PreferencesUpdate
from rural_properties.services.access import SessionContext
from rural_properties.utils.exceptions import (
    APIException,
    BadRequestError,
    NotFoundError,
    PropertyNotFoundError,
    UnauthorizedError,
)
from rural_properties.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Operations a signed-in user performs on their own record."""
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
    
    def _require_user(self, session: SessionContext) -> User:
        if not session.is_authenticated:
            raise UnauthorizedError()
        return session.user
    
    async def get_profile(self, session: SessionContext) -> User:
        user = self._require_user(session)
        fresh = await self.user_repo.get_by_id(user.id)
        if fresh is None:
            raise NotFoundError("User", str(user.id))
        return fresh
    
    async def update_profile(self, session: SessionContext, profile: UserProfileUpdate) -> User:
        """
        Update name, phone and picture. Email and role are not editable here.
        """
        user = self._require_user(session)
        update_data = profile.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_profile(session)
        
        try:
            updated = await self.user_repo.update(user.id, update_data)
            if updated is None:
                raise NotFoundError("User", str(user.id))
            logger.info(f"Profile updated for {updated.email}: {sorted(update_data)}")
            return updated
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update profile for {user.id}: {e}")
            raise BadRequestError(f"Failed to update profile: {str(e)}")
    
    async def update_preferences(self, session: SessionContext, preferences: PreferencesUpdate) -> User:
        user = self._require_user(session)
        updated = await self.user_repo.update(user.id, {"preferences": preferences.model_dump()})
        if updated is None:
            raise NotFoundError("User", str(user.id))
        return updated
    
    async def save_property(self, session: SessionContext, property_id: str) -> List[str]:
        """
        Add a listing to the saved set. Saving twice keeps one entry.
        
        Raises:
            PropertyNotFoundError: If the listing does not exist
        """
        user = self._require_user(session)
        property_uuid = ValidationUtils.parse_id(property_id, "Property")
        if await self.property_repo.get_by_id(property_uuid) is None:
            raise PropertyNotFoundError(property_id)
        updated = await self.user_repo.add_to_set(user.id, "saved_properties", str(property_uuid))
        if updated is None:
            raise NotFoundError("User", str(user.id))
        return list(updated.saved_properties or [])
    
    async def unsave_property(self, session: SessionContext, property_id: str) -> List[str]:
        """Remove a listing from the saved set. Removing an absent entry is a no-op."""
        user = self._require_user(session)
        property_uuid = ValidationUtils.parse_id(property_id, "Property")
        updated = await self.user_repo.remove_from_set(user.id, "saved_properties", str(property_uuid))
        if updated is None:
            raise NotFoundError("User", str(user.id))
        return list(updated.saved_properties or [])
    
    async def get_saved_properties(self, session: SessionContext) -> List[str]:
        user = await self.get_profile(session)
        return list(user.saved_properties or [])
    
    async def get_viewed_properties(self, session: SessionContext) -> List[str]:
        user = await self.get_profile(session)
        return list(user.viewed_properties or [])
