"""
Property repository for listing data access.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.property import Property, PropertyStatus
from typing import Dict, List
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)
    
    async def get_featured(self, limit: int = 6) -> List[Property]:
        """Active featured listings, newest first."""
        records, _ = await self.query(
            [("featured", "==", True), ("status", "==", PropertyStatus.ACTIVE)],
            limit=limit
        )
        return records
    
    async def get_by_lister(self, user_id: str) -> List[Property]:
        """Listings created by one account, newest first."""
        return await self.list_all([("listed_by", "==", user_id)])
    
    async def get_type_counts(self) -> Dict[str, int]:
        """
        Count listings grouped by property type.
        
        Returns:
            Mapping of type value to count
        """
        try:
            query = select(Property.property_type, func.count(Property.id)).group_by(Property.property_type)
            result = await self.db.execute(query)
            return {row[0].value: row[1] for row in result.all()}
        except Exception as e:
            logger.error(f"Failed to count properties by type: {e}")
            raise
    
    async def get_status_counts(self) -> Dict[str, int]:
        """Count listings grouped by status."""
        try:
            query = select(Property.status, func.count(Property.id)).group_by(Property.status)
            result = await self.db.execute(query)
            return {row[0].value: row[1] for row in result.all()}
        except Exception as e:
            logger.error(f"Failed to count properties by status: {e}")
            raise
