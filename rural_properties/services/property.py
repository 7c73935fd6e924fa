"""
Property service for listing management.
Handles creation with an agent snapshot, ownership-checked edits, view
recording and the featured strip.
"""

import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.repositories.property import PropertyRepository
from rural_properties.repositories.agent import AgentRepository
from rural_properties.repositories.user import UserRepository
from rural_properties.models.property import Property, format_price
from rural_properties.schemas.property import PropertyCreate, PropertyUpdate
from rural_properties.services.access import (
    SessionContext,
    can_manage_listings,
    can_manage_any_listing,
)
from rural_properties.utils.exceptions import (
    APIException,
    BadRequestError,
    InsufficientPermissionsError,
    PropertyNotFoundError,
    PropertyOwnershipError,
)
from rural_properties.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


def flatten_listing_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map the nested location and size blocks onto property columns."""
    flat = dict(data)
    location = flat.pop("location", None)
    if location is not None:
        coordinates = location.get("coordinates") or {}
        flat.update({
            "address": location.get("address") or "",
            "city": location["city"],
            "province": location["province"],
            "postal_code": location.get("postal_code"),
            "latitude": coordinates.get("lat"),
            "longitude": coordinates.get("lng"),
        })
    size = flat.pop("size", None)
    if size is not None:
        flat.update({
            "land_size": size.get("land_size"),
            "building_size": size.get("building_size"),
            "total_size": size.get("total_size"),
        })
    if flat.get("price") is not None:
        flat["price_formatted"] = format_price(flat["price"])
    return flat


class PropertyService:
    """
    Service for property business logic with permission checks.
    """
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        self.user_repo = UserRepository(db_session)
    
    async def create_property(self, property_data: PropertyCreate, session: SessionContext) -> Property:
        """
        Create a listing on behalf of an agent or admin.
        
        Raises:
            InsufficientPermissionsError: If the caller cannot list properties
        """
        if not can_manage_listings(session.role):
            raise InsufficientPermissionsError("create properties")
        
        try:
            create_data = flatten_listing_payload(property_data.model_dump(mode="python"))
            user = session.user
            agent = await self.agent_repo.get_by_user_id(session.user_id)
            if agent is not None:
                create_data["agent"] = agent.snapshot()
                create_data["agent_id"] = str(agent.id)
            else:
                create_data["agent"] = {
                    "id": session.user_id,
                    "name": user.full_name,
                    "email": user.email,
                    "phone": user.phone,
                    "profile_image": user.profile_image,
                }
                create_data["agent_id"] = session.user_id
            create_data["listed_by"] = session.user_id
            
            property_obj = await self.property_repo.create(create_data)
            
            if agent is not None:
                await self.agent_repo.add_to_set(agent.id, "properties", str(property_obj.id))
            
            logger.info(f"Property created by {user.email}: {property_obj.title} (ID: {property_obj.id})")
            return property_obj
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to create property for user {session.user_id}: {e}")
            raise BadRequestError(f"Failed to create property: {str(e)}")
    
    async def get_property(self, property_id: str) -> Property:
        """
        Get a listing by id.
        
        Raises:
            PropertyNotFoundError: If the listing does not exist
        """
        property_obj = await self.property_repo.get_by_id(ValidationUtils.parse_id(property_id, "Property"))
        if not property_obj:
            raise PropertyNotFoundError(property_id)
        return property_obj
    
    async def update_property(self, property_id: str, property_data: PropertyUpdate, session: SessionContext) -> Property:
        """
        Update a listing. Only the listing agent or an admin may edit.
        
        Raises:
            PropertyNotFoundError: If the listing does not exist
            PropertyOwnershipError: If the caller does not own the listing
        """
        property_obj = await self.get_property(property_id)
        self._check_manage(property_obj, session)
        
        try:
            update_data = flatten_listing_payload(property_data.model_dump(mode="python", exclude_unset=True))
            updated = await self.property_repo.update(property_obj.id, update_data)
            logger.info(f"Property {property_id} updated by {session.user.email}: {sorted(update_data)}")
            return updated
        except APIException:
            raise
        except Exception as e:
            logger.error(f"Failed to update property {property_id}: {e}")
            raise BadRequestError(f"Failed to update property: {str(e)}")
    
    async def delete_property(self, property_id: str, session: SessionContext) -> bool:
        """
        Delete a listing outright. There is no archive.
        
        Raises:
            PropertyNotFoundError: If the listing does not exist
            PropertyOwnershipError: If the caller does not own the listing
        """
        property_obj = await self.get_property(property_id)
        self._check_manage(property_obj, session)
        
        deleted = await self.property_repo.delete(property_obj.id)
        if deleted and property_obj.agent_id:
            agent_uuid = _as_uuid(property_obj.agent_id)
            if agent_uuid is not None:
                await self.agent_repo.remove_from_set(agent_uuid, "properties", str(property_obj.id))
        logger.info(f"Property {property_id} deleted by {session.user.email}")
        return deleted
    
    async def record_view(self, property_id: str, session: SessionContext) -> Property:
        """
        Count a view and remember it on the viewer's profile.
        
        Raises:
            PropertyNotFoundError: If the listing does not exist
        """
        property_obj = await self.get_property(property_id)
        await self.property_repo.increment(property_obj.id, "views")
        if session.is_authenticated:
            await self.user_repo.add_to_set(session.user.id, "viewed_properties", str(property_obj.id))
        return await self.property_repo.get_by_id(property_obj.id)
    
    async def get_featured_properties(self, limit: int = 6) -> List[Property]:
        return await self.property_repo.get_featured(limit)
    
    async def get_my_properties(self, session: SessionContext) -> List[Property]:
        """Listings the caller created."""
        if not can_manage_listings(session.role):
            raise InsufficientPermissionsError("view agent listings")
        return await self.property_repo.get_by_lister(session.user_id)
    
    def _check_manage(self, property_obj: Property, session: SessionContext) -> None:
        if can_manage_any_listing(session.role):
            return
        if not can_manage_listings(session.role):
            raise InsufficientPermissionsError("manage properties")
        if property_obj.listed_by != session.user_id:
            raise PropertyOwnershipError()


def _as_uuid(value: str) -> Optional[uuid.UUID]:
    """Seeded listings may carry a symbolic agent key instead of an id."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
