"""
Agent directory service.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.models.agent import Agent
from rural_properties.repositories.agent import AgentRepository
from rural_properties.schemas.agent import AgentProfileUpdate
from rural_properties.services.access import Role, SessionContext
from rural_properties.utils.exceptions import (
    APIException,
    BadRequestError,
    InsufficientPermissionsError,
    NotFoundError,
)
from rural_properties.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


class AgentService:
    """Reads the agent directory and lets agents edit their own profile."""
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.agent_repo = AgentRepository(db_session)
    
    async def list_agents(self, area: Optional[str] = None) -> List[Agent]:
        return await self.agent_repo.list_agents(active_only=True, area=area)
    
    async def get_top_agents(self, limit: int = 3) -> List[Agent]:
        return await self.agent_repo.get_top_rated(limit)
    
    async def get_agent(self, agent_id: str) -> Agent:
        agent = await self.agent_repo.get_by_id(ValidationUtils.parse_id(agent_id, "Agent"))
        if agent is None:
            raise NotFoundError("Agent", agent_id)
        return agent
    
    async def get_own_profile(self, session: SessionContext) -> Agent:
        """
        Agent profile linked to the signed-in account.
        
        Raises:
            InsufficientPermissionsError: If the caller is not an agent
            NotFoundError: If no profile is linked to the account
        """
        if session.role != Role.AGENT:
            raise InsufficientPermissionsError("manage an agent profile")
        agent = await self.agent_repo.get_by_user_id(session.user_id)
        if agent is None:
            # Seeded profiles are linked by email only
            agent = await self.agent_repo.get_by_email(session.user.email)
        if agent is None:
            raise NotFoundError("Agent profile")
        return agent
    
    async def update_own_profile(self, session: SessionContext, profile: AgentProfileUpdate) -> Agent:
        agent = await self.get_own_profile(session)
        update_data = profile.model_dump(exclude_unset=True)
        if not update_data:
            return agent
        try:
            if agent.user_id is None:
                update_data["user_id"] = session.user_id
            updated = await self.agent_repo.update(agent.id, update_data)
            logger.info(f"Agent profile {agent.id} updated: {sorted(update_data)}")
            return updated
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update agent profile {agent.id}: {e}")
            raise BadRequestError(f"Failed to update agent profile: {str(e)}")
