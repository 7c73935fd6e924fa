"""
System settings repository for the singleton settings document.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.system_settings import SystemSettings, SETTINGS_KEY
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class SystemSettingsRepository(BaseRepository[SystemSettings]):
    """Repository for the settings singleton."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(SystemSettings, db)
    
    async def get_settings(self) -> Optional[SystemSettings]:
        return await self.get_by_field("key", SETTINGS_KEY)
    
    async def upsert(self, payload: Dict[str, Any]) -> SystemSettings:
        """
        Write the singleton, creating it on first use.
        Sections missing from payload are left unchanged.
        """
        sections = {k: v for k, v in payload.items() if k in ("site", "features", "pricing", "maintenance")}
        existing = await self.get_settings()
        if existing is None:
            created = await self.create({"key": SETTINGS_KEY, **sections})
            logger.info("Created system settings")
            return created
        updated = await self.update(existing.id, sections)
        logger.info(f"Updated system settings sections: {sorted(sections)}")
        return updated
