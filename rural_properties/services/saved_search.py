"""
Saved search service.

Stored filters use the same shape the listing query accepts, so running a
saved search goes straight through the catalog service.
"""

from datetime import timezone
from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.models.saved_search import SavedSearch
from rural_properties.repositories.saved_search import SavedSearchRepository
from rural_properties.schemas.saved_search import SavedSearchCreate, SavedSearchUpdate
from rural_properties.services.access import SessionContext
from rural_properties.services.catalog import CatalogPage, CatalogService, ListingFilters, compose_predicates
from rural_properties.utils.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from rural_properties.utils.validators import ValidationUtils
from rural_properties.database import utcnow
import logging

logger = logging.getLogger(__name__)


class SavedSearchService:
    """CRUD and execution of a user's saved searches."""
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.search_repo = SavedSearchRepository(db_session)
        self.catalog = CatalogService(db_session)
    
    async def create(self, search_data: SavedSearchCreate, session: SessionContext) -> SavedSearch:
        if not session.is_authenticated:
            raise UnauthorizedError()
        # Unknown labels are rejected before they are stored
        compose_predicates(ListingFilters.from_dict(search_data.filters.model_dump(mode="json")))
        saved = await self.search_repo.create({
            "user_id": session.user_id,
            "name": search_data.name,
            "filters": search_data.filters.model_dump(mode="json", exclude_none=True),
            "frequency": search_data.frequency,
            "is_active": search_data.is_active,
            "new_properties_count": 0,
        })
        logger.info(f"Saved search {saved.id} created for {session.user.email}")
        return saved
    
    async def list_for_user(self, session: SessionContext) -> List[SavedSearch]:
        if not session.is_authenticated:
            raise UnauthorizedError()
        return await self.search_repo.get_for_user(session.user_id)
    
    async def get(self, search_id: str, session: SessionContext) -> SavedSearch:
        if not session.is_authenticated:
            raise UnauthorizedError()
        saved = await self.search_repo.get_by_id(ValidationUtils.parse_id(search_id, "Saved search"))
        if saved is None:
            raise NotFoundError("Saved search", search_id)
        if saved.user_id != session.user_id:
            raise ForbiddenError("You don't own this saved search")
        return saved
    
    async def update(self, search_id: str, search_data: SavedSearchUpdate, session: SessionContext) -> SavedSearch:
        saved = await self.get(search_id, session)
        update_data = search_data.model_dump(exclude_unset=True)
        if search_data.filters is not None:
            compose_predicates(ListingFilters.from_dict(search_data.filters.model_dump(mode="json")))
            update_data["filters"] = search_data.filters.model_dump(mode="json", exclude_none=True)
        if not update_data:
            return saved
        return await self.search_repo.update(saved.id, update_data)
    
    async def delete(self, search_id: str, session: SessionContext) -> bool:
        saved = await self.get(search_id, session)
        return await self.search_repo.delete(saved.id)
    
    async def run(self, search_id: str, session: SessionContext) -> Tuple[SavedSearch, CatalogPage]:
        """
        Execute the stored filters.
        
        new_properties_count is the number of matches created since the
        previous run; the first run counts every match.
        """
        saved = await self.get(search_id, session)
        filters = ListingFilters.from_dict(saved.filters or {})
        page = await self.catalog.query(filters)
        
        previous_run = saved.last_run
        if previous_run is None:
            new_count = page.count
        else:
            new_count = sum(1 for item in page.items if _as_aware(item.created_at) > _as_aware(previous_run))
        
        updated = await self.search_repo.update(saved.id, {
            "last_run": utcnow(),
            "new_properties_count": new_count,
        })
        logger.info(f"Saved search {saved.id} ran: {page.count} matches, {new_count} new")
        return updated, page


def _as_aware(value):
    """SQLite returns naive datetimes for timezone-aware columns."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
