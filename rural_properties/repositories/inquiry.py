"""
Inquiry repository including the ordered response log.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from rural_properties.repositories.base import BaseRepository
from rural_properties.models.inquiry import Inquiry, InquiryStatus
from typing import Any, Dict, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class InquiryRepository(BaseRepository[Inquiry]):
    """Repository for inquiries."""
    
    def __init__(self, db: AsyncSession):
        super().__init__(Inquiry, db)
    
    async def append_response(self, inquiry_id: uuid.UUID, response: Dict[str, Any]) -> Optional[Inquiry]:
        """
        Append a response and mark the inquiry responded, in one locked transaction.
        
        Returns:
            Updated inquiry or None if not found
        """
        try:
            query = (
                select(Inquiry)
                .where(Inquiry.id == inquiry_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            inquiry = result.scalar_one_or_none()
            if inquiry is None:
                await self.db.rollback()
                return None
            
            inquiry.responses = list(inquiry.responses or []) + [response]
            inquiry.status = InquiryStatus.RESPONDED
            await self.db.commit()
            await self.db.refresh(inquiry)
            logger.debug(f"Appended response to inquiry {inquiry_id}")
            return inquiry
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to append response to inquiry {inquiry_id}: {e}")
            raise
