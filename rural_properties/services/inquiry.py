"""
Inquiry service: buyers ask about listings, agents answer.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.models.inquiry import Inquiry, InquiryStatus
from rural_properties.repositories.inquiry import InquiryRepository
from rural_properties.repositories.property import PropertyRepository
from rural_properties.repositories.agent import AgentRepository
from rural_properties.schemas.inquiry import InquiryCreate
from rural_properties.services.access import Role, SessionContext, can_moderate
from rural_properties.utils.exceptions import (
    APIException,
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    PropertyNotFoundError,
    UnauthorizedError,
)
from rural_properties.utils.validators import ValidationUtils
from rural_properties.database import utcnow
import logging

logger = logging.getLogger(__name__)


class InquiryService:
    """
    Inquiry workflow.
    
    Buyers see their own inquiries, agents see inquiries on their listings
    and admins see everything.
    """
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.inquiry_repo = InquiryRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
    
    async def create_inquiry(self, inquiry_data: InquiryCreate, session: SessionContext) -> Inquiry:
        """
        Record an inquiry and bump the listing's inquiry counter.
        
        Raises:
            UnauthorizedError: If the caller is not signed in
            PropertyNotFoundError: If the listing does not exist
        """
        if not session.is_authenticated:
            raise UnauthorizedError()
        property_uuid = ValidationUtils.parse_id(inquiry_data.property_id, "Property")
        property_obj = await self.property_repo.get_by_id(property_uuid)
        if property_obj is None:
            raise PropertyNotFoundError(inquiry_data.property_id)
        
        user = session.user
        contact_info = (
            inquiry_data.contact_info.model_dump()
            if inquiry_data.contact_info
            else {"name": user.full_name, "email": user.email, "phone": user.phone}
        )
        try:
            inquiry = await self.inquiry_repo.create({
                "property_id": str(property_obj.id),
                "user_id": session.user_id,
                "agent_id": property_obj.agent_id,
                "type": inquiry_data.type,
                "message": inquiry_data.message,
                "contact_info": contact_info,
                "preferred_contact": inquiry_data.preferred_contact,
                "priority": inquiry_data.priority,
                "status": InquiryStatus.PENDING,
                "responses": [],
            })
            await self.property_repo.increment(property_obj.id, "inquiries")
            logger.info(f"Inquiry {inquiry.id} created on property {property_obj.id} by {user.email}")
            return inquiry
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create inquiry on property {property_obj.id}: {e}")
            raise BadRequestError(f"Failed to create inquiry: {str(e)}")
    
    async def list_inquiries(
        self,
        session: SessionContext,
        status: Optional[InquiryStatus] = None,
        property_id: Optional[str] = None,
    ) -> List[Inquiry]:
        if not session.is_authenticated:
            raise UnauthorizedError()
        predicates = []
        if status is not None:
            predicates.append(("status", "==", status))
        if property_id:
            predicates.append(("property_id", "==", property_id))
        
        if session.role == Role.AGENT:
            predicates.append(("agent_id", "in", await self._agent_ids(session)))
        elif not can_moderate(session.role):
            predicates.append(("user_id", "==", session.user_id))
        return await self.inquiry_repo.list_all(predicates)
    
    async def get_inquiry(self, inquiry_id: str, session: SessionContext) -> Inquiry:
        if not session.is_authenticated:
            raise UnauthorizedError()
        inquiry = await self.inquiry_repo.get_by_id(ValidationUtils.parse_id(inquiry_id, "Inquiry"))
        if inquiry is None:
            raise NotFoundError("Inquiry", inquiry_id)
        if can_moderate(session.role) or inquiry.user_id == session.user_id:
            return inquiry
        if session.role == Role.AGENT and inquiry.agent_id in await self._agent_ids(session):
            return inquiry
        raise ForbiddenError("You cannot access this inquiry")
    
    async def respond(self, inquiry_id: str, message: str, session: SessionContext) -> Inquiry:
        """
        Append a reply from the listing agent or an admin and mark the inquiry responded.
        """
        inquiry = await self.get_inquiry(inquiry_id, session)
        if not (can_moderate(session.role) or session.role == Role.AGENT):
            raise ForbiddenError("Only the listing agent can respond")
        
        response = {
            "message": message,
            "responder_id": session.user_id,
            "responder_name": session.user.full_name,
            "created_at": utcnow().isoformat(),
        }
        updated = await self.inquiry_repo.append_response(inquiry.id, response)
        if updated is None:
            raise NotFoundError("Inquiry", inquiry_id)
        logger.info(f"Inquiry {inquiry_id} answered by {session.user.email}")
        return updated
    
    async def set_status(self, inquiry_id: str, status: InquiryStatus, session: SessionContext) -> Inquiry:
        inquiry = await self.get_inquiry(inquiry_id, session)
        if not (can_moderate(session.role) or session.role == Role.AGENT):
            raise ForbiddenError("Only the listing agent can change the status")
        return await self.inquiry_repo.update(inquiry.id, {"status": status})
    
    async def _agent_ids(self, session: SessionContext) -> List[str]:
        """Ids a listing's agent_id may hold for the signed-in agent."""
        ids = [session.user_id]
        agent = await self.agent_repo.get_by_user_id(session.user_id)
        if agent is None:
            agent = await self.agent_repo.get_by_email(session.user.email)
        if agent is not None:
            ids.append(str(agent.id))
        return ids
