"""
Site-wide settings stored as a single document.
"""

from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.repositories.system_settings import SystemSettingsRepository
from rural_properties.schemas.admin import SystemSettingsUpdate
from rural_properties.services.access import SessionContext, can_moderate
from rural_properties.utils.exceptions import InsufficientPermissionsError
import logging

logger = logging.getLogger(__name__)


class SystemSettingsService:
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.settings_repo = SystemSettingsRepository(db_session)
    
    async def get_settings(self) -> Dict[str, Any]:
        """Current settings; empty sections before the first write."""
        document = await self.settings_repo.get_settings()
        if document is None:
            return {"site": {}, "features": {}, "pricing": {}, "maintenance": {}}
        return document.to_dict()
    
    async def update_settings(self, update: SystemSettingsUpdate, session: SessionContext) -> Dict[str, Any]:
        """
        Replace the given sections. Admin only.
        
        Raises:
            InsufficientPermissionsError: If the caller is not an admin
        """
        if not can_moderate(session.role):
            raise InsufficientPermissionsError("change system settings")
        document = await self.settings_repo.upsert(update.model_dump(exclude_none=True))
        logger.info(f"System settings changed by {session.user.email}")
        return document.to_dict()
