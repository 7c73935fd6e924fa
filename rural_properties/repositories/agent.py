"""
Agent repository for profile lookups and rating updates.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.agent import Agent
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class AgentRepository(BaseRepository[Agent]):
    """Repository for agent profiles."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Agent, db)
    
    async def get_by_email(self, email: str) -> Optional[Agent]:
        return await self.get_by_field("email", email.lower().strip())
    
    async def get_by_user_id(self, user_id: str) -> Optional[Agent]:
        return await self.get_by_field("user_id", user_id)
    
    async def list_agents(self, active_only: bool = True, area: Optional[str] = None) -> List[Agent]:
        """
        Agents ordered by rating, highest first.
        
        Args:
            active_only: Skip inactive profiles
            area: Only agents covering this province
        """
        predicates = [("is_active", "==", True)] if active_only else []
        agents, _ = await self.query(predicates, order_by="rating", descending=True)
        if area:
            wanted = area.lower()
            agents = [agent for agent in agents if wanted in (a.lower() for a in agent.areas or [])]
        logger.debug(f"Listed {len(agents)} agents (area={area})")
        return agents
    
    async def get_top_rated(self, limit: int = 3) -> List[Agent]:
        agents, _ = await self.query([("is_active", "==", True)], order_by="rating", descending=True, limit=limit)
        return agents
    
    async def update_rating(self, agent_id: uuid.UUID, rating: float, total_reviews: int) -> Optional[Agent]:
        """Store a recomputed rating aggregate."""
        agent = await self.update(agent_id, {"rating": rating, "total_reviews": total_reviews})
        if agent:
            logger.info(f"Agent {agent_id} rating set to {rating} over {total_reviews} reviews")
        return agent
