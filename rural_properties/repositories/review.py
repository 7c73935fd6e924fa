"""
Review repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.review import Review, ReviewStatus
from typing import List
import logging

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    """Repository for reviews."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Review, db)
    
    async def get_approved_ratings(self, agent_id: str) -> List[int]:
        """Ratings of every approved review for an agent."""
        try:
            query = select(Review.rating).where(
                and_(Review.agent_id == agent_id, Review.status == ReviewStatus.APPROVED)
            )
            result = await self.db.execute(query)
            ratings = list(result.scalars().all())
            logger.debug(f"Agent {agent_id} has {len(ratings)} approved reviews")
            return ratings
        except Exception as e:
            logger.error(f"Failed to read approved ratings for agent {agent_id}: {e}")
            raise
