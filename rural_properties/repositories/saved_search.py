"""
Saved search repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.saved_search import SavedSearch
from typing import List


class SavedSearchRepository(BaseRepository[SavedSearch]):
    """Repository for saved searches."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(SavedSearch, db)
    
    async def get_for_user(self, user_id: str) -> List[SavedSearch]:
        return await self.list_all([("user_id", "==", user_id)])
