"""
Review service with agent rating aggregation.

The agent's rating is recomputed from approved reviews after every create
and moderation change. The recompute is a plain read-then-write, so two
concurrent reviews may leave a rating that reflects only one of them until
the next recompute.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.models.review import Review, ReviewStatus
from rural_properties.repositories.review import ReviewRepository
from rural_properties.repositories.agent import AgentRepository
from rural_properties.schemas.review import ReviewCreate
from rural_properties.services.access import SessionContext, can_moderate
from rural_properties.utils.exceptions import (
    APIException,
    BadRequestError,
    InsufficientPermissionsError,
    NotFoundError,
    UnauthorizedError,
)
from rural_properties.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


def average_rating(ratings: List[int]) -> float:
    """Mean rating rounded to one decimal place."""
    return round(sum(ratings) / len(ratings), 1)


class ReviewService:
    """Review submission, moderation and listing."""
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.review_repo = ReviewRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
    
    async def create_review(self, review_data: ReviewCreate, session: SessionContext) -> Review:
        """
        Submit a review for an agent.
        
        Reviews from users wait for moderation; admin reviews are approved
        immediately.
        
        Raises:
            UnauthorizedError: If the caller is not signed in
            NotFoundError: If the agent does not exist
        """
        if not session.is_authenticated:
            raise UnauthorizedError()
        agent = await self.agent_repo.get_by_id(ValidationUtils.parse_id(review_data.agent_id, "Agent"))
        if agent is None:
            raise NotFoundError("Agent", review_data.agent_id)
        
        status = ReviewStatus.APPROVED if can_moderate(session.role) else ReviewStatus.PENDING
        try:
            review = await self.review_repo.create({
                **review_data.model_dump(),
                "agent_id": str(agent.id),
                "user_id": session.user_id,
                "status": status,
                "helpful": 0,
                "verified_purchase": False,
            })
            logger.info(f"Review {review.id} for agent {agent.id} created with status {status.value}")
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create review for agent {agent.id}: {e}")
            raise BadRequestError(f"Failed to create review: {str(e)}")
        
        await self.recompute_agent_rating(str(agent.id))
        return review
    
    async def recompute_agent_rating(self, agent_id: str, reset_when_empty: bool = False) -> Optional[float]:
        """
        Set the agent's rating to the average of approved reviews.
        
        With no approved reviews the stored rating is left alone, so fixture
        ratings survive a pending submission. Moderation passes
        reset_when_empty so that rejecting the last approved review clears
        the aggregate to 0 over 0 reviews.
        
        Returns:
            The new rating, or None when nothing was written
        """
        try:
            agent_uuid = ValidationUtils.parse_id(agent_id, "Agent")
        except NotFoundError:
            logger.warning(f"Skipping rating recompute for non-document agent id {agent_id}")
            return None
        if await self.agent_repo.get_by_id(agent_uuid) is None:
            logger.warning(f"Skipping rating recompute for missing agent {agent_id}")
            return None
        
        ratings = await self.review_repo.get_approved_ratings(agent_id)
        if not ratings:
            if not reset_when_empty:
                return None
            await self.agent_repo.update_rating(agent_uuid, 0.0, 0)
            return 0.0
        rating = average_rating(ratings)
        await self.agent_repo.update_rating(agent_uuid, rating, len(ratings))
        return rating
    
    async def set_status(self, review_id: str, status: ReviewStatus, session: SessionContext) -> Review:
        """Moderate a review and refresh the agent aggregate."""
        if not can_moderate(session.role):
            raise InsufficientPermissionsError("moderate reviews")
        review = await self.get_review(review_id)
        updated = await self.review_repo.update(review.id, {"status": status})
        logger.info(f"Review {review_id} moved to {status.value} by {session.user.email}")
        await self.recompute_agent_rating(review.agent_id, reset_when_empty=True)
        return updated
    
    async def mark_helpful(self, review_id: str) -> Review:
        review = await self.get_review(review_id)
        await self.review_repo.increment(review.id, "helpful")
        return await self.review_repo.get_by_id(review.id)
    
    async def get_review(self, review_id: str) -> Review:
        review = await self.review_repo.get_by_id(ValidationUtils.parse_id(review_id, "Review"))
        if review is None:
            raise NotFoundError("Review", review_id)
        return review
    
    async def list_reviews(
        self,
        agent_id: Optional[str] = None,
        property_id: Optional[str] = None,
        status: Optional[ReviewStatus] = ReviewStatus.APPROVED,
    ) -> List[Review]:
        predicates = []
        if agent_id:
            predicates.append(("agent_id", "==", agent_id))
        if property_id:
            predicates.append(("property_id", "==", property_id))
        if status is not None:
            predicates.append(("status", "==", status))
        return await self.review_repo.list_all(predicates)
