"""
Seeding and admin utility.

Bulk-populates or bulk-clears the fixture collections and performs the
role maintenance tasks used by administrators. None of the bulk operations
are transactional across collections: each collection is handled on its
own and a failure is recorded without stopping the rest of the run.
"""

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
from sqlalchemy.ext.asyncio import AsyncSession
from rural_properties.models.property import format_price
from rural_properties.models.user import User, UserRole
from rural_properties.repositories.agent import AgentRepository
from rural_properties.repositories.base import BaseRepository
from rural_properties.repositories.inquiry import InquiryRepository
from rural_properties.repositories.property import PropertyRepository
from rural_properties.repositories.review import ReviewRepository
from rural_properties.repositories.saved_search import SavedSearchRepository
from rural_properties.repositories.system_settings import SystemSettingsRepository
from rural_properties.repositories.user import UserRepository
from rural_properties.services import fixtures
from rural_properties.utils.exceptions import NotFoundError, PartialSeedFailure
from rural_properties.utils.validators import ValidationUtils
import logging

logger = logging.getLogger(__name__)


@dataclass
class SeedReport:
    """Per-collection insert counts and the errors of a seed run."""
    properties: int = 0
    users: int = 0
    agents: int = 0
    inquiries: int = 0
    reviews: int = 0
    saved_searches: int = 0
    system_settings: bool = False
    errors: List[str] = field(default_factory=list)
    
    @property
    def succeeded(self) -> bool:
        return not self.errors
    
    def raise_for_errors(self) -> None:
        """
        Raises:
            PartialSeedFailure: If any insert loop failed
        """
        if self.errors:
            raise PartialSeedFailure(self.errors)
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ClearReport:
    cleared: int = 0
    per_collection: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RoleChangeResult:
    """
    Outcome of a role promotion.
    outcome is one of "updated", "not_found" or "write_failed".
    """
    success: bool
    outcome: str
    message: str
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SeedingService:
    """
    Fixture seeding plus admin maintenance of user records.
    """
    
    def __init__(self, db_session: AsyncSession, rng: Optional[random.Random] = None):
        self.db = db_session
        self.rng = rng or random.Random()
        self.property_repo = PropertyRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        self.inquiry_repo = InquiryRepository(db_session)
        self.review_repo = ReviewRepository(db_session)
        self.search_repo = SavedSearchRepository(db_session)
        self.settings_repo = SystemSettingsRepository(db_session)
    
    def _collections(self) -> List[Tuple[str, BaseRepository]]:
        """Collections emptied by clear_all. System settings are kept."""
        return [
            ("properties", self.property_repo),
            ("users", self.user_repo),
            ("agents", self.agent_repo),
            ("inquiries", self.inquiry_repo),
            ("reviews", self.review_repo),
            ("saved_searches", self.search_repo),
        ]
    
    async def seed_all(self) -> SeedReport:
        """
        Insert every fixture collection.
        
        Users and agents go first so later fixtures can point at their ids.
        A reference that cannot be resolved keeps its symbolic key.
        
        Returns:
            SeedReport with counts and "<Collection>: <message>" errors
        """
        logger.info("Starting database seeding")
        report = SeedReport()
        user_ids: Dict[str, str] = {}
        agent_ids: Dict[str, str] = {}
        property_ids: Dict[str, str] = {}
        
        try:
            for fixture in fixtures.USERS:
                user = await self.user_repo.create_user({
                    **fixture,
                    "saved_properties": [],
                    "viewed_properties": [],
                })
                user_ids[user.email] = str(user.id)
                report.users += 1
                logger.info(f"Added user: {user.display_name} (ID: {user.id})")
        except Exception as e:
            report.errors.append(f"Users: {e}")
        
        try:
            for fixture in fixtures.AGENTS:
                agent = await self.agent_repo.create({
                    **fixture,
                    "user_id": user_ids.get(fixture["email"]),
                    "agency": dict(fixtures.AGENCY),
                    "properties": [],
                    "is_active": True,
                })
                agent_ids[agent.email] = str(agent.id)
                report.agents += 1
                logger.info(f"Added agent: {agent.display_name} (ID: {agent.id})")
        except Exception as e:
            report.errors.append(f"Agents: {e}")
        
        try:
            for fixture in fixtures.PROPERTIES:
                data = dict(fixture)
                key = data.pop("key")
                agent_email = data.pop("agent_email")
                agent = await self._agent_snapshot(agent_email, agent_ids)
                property_obj = await self.property_repo.create({
                    **data,
                    "price_formatted": format_price(data["price"]),
                    "agent": agent,
                    "agent_id": agent["id"],
                    "listed_by": user_ids.get(agent_email),
                    "views": self.rng.randint(0, 199),
                    "inquiries": self.rng.randint(0, 19),
                })
                property_ids[key] = str(property_obj.id)
                report.properties += 1
                if agent_email in agent_ids:
                    await self.agent_repo.add_to_set(
                        ValidationUtils.parse_id(agent_ids[agent_email], "Agent"),
                        "properties",
                        str(property_obj.id)
                    )
                logger.info(f"Added property: {property_obj.title} (ID: {property_obj.id})")
        except Exception as e:
            report.errors.append(f"Properties: {e}")
        
        try:
            for fixture in fixtures.INQUIRIES:
                data = dict(fixture)
                inquiry = await self.inquiry_repo.create({
                    "property_id": property_ids.get(data["property_key"], data["property_key"]),
                    "user_id": user_ids.get(data["user_email"], data["user_email"]),
                    "agent_id": agent_ids.get(data["agent_email"], data["agent_email"]),
                    "type": data["type"],
                    "message": data["message"],
                    "contact_info": dict(data["contact_info"]),
                    "preferred_contact": data["preferred_contact"],
                    "status": data["status"],
                    "priority": data["priority"],
                    "responses": [],
                })
                report.inquiries += 1
                logger.info(f"Added inquiry for property: {inquiry.property_id} (ID: {inquiry.id})")
        except Exception as e:
            report.errors.append(f"Inquiries: {e}")
        
        try:
            for fixture in fixtures.REVIEWS:
                data = dict(fixture)
                property_key = data.pop("property_key")
                user_email = data.pop("user_email")
                agent_email = data.pop("agent_email")
                review = await self.review_repo.create({
                    **data,
                    "property_id": property_ids.get(property_key, property_key),
                    "user_id": user_ids.get(user_email, user_email),
                    "agent_id": agent_ids.get(agent_email, agent_email),
                    "helpful": 0,
                })
                report.reviews += 1
                logger.info(f"Added review for agent: {review.agent_id} (ID: {review.id})")
        except Exception as e:
            report.errors.append(f"Reviews: {e}")
        
        try:
            for fixture in fixtures.SAVED_SEARCHES:
                saved = await self.search_repo.create({
                    "user_id": user_ids.get(fixture["user_email"], fixture["user_email"]),
                    "name": fixture["name"],
                    "filters": dict(fixture["filters"]),
                    "frequency": fixture["frequency"],
                    "is_active": fixture["is_active"],
                    "new_properties_count": 0,
                })
                report.saved_searches += 1
                logger.info(f"Added saved search: {saved.name} (ID: {saved.id})")
        except Exception as e:
            report.errors.append(f"Saved Searches: {e}")
        
        try:
            await self.settings_repo.upsert(fixtures.SYSTEM_SETTINGS)
            report.system_settings = True
            logger.info("Added system settings")
        except Exception as e:
            report.errors.append(f"System Settings: {e}")
        
        if report.errors:
            logger.warning(f"Database seeding finished with errors: {report.errors}")
        else:
            logger.info(f"Database seeding completed: {report.to_dict()}")
        return report
    
    async def _agent_snapshot(self, email: str, agent_ids: Dict[str, str]) -> Dict[str, Any]:
        if email in agent_ids:
            agent = await self.agent_repo.get_by_id(ValidationUtils.parse_id(agent_ids[email], "Agent"))
            if agent is not None:
                return agent.snapshot()
        fixture = next(a for a in fixtures.AGENTS if a["email"] == email)
        return {
            "id": email,
            "name": fixture["display_name"],
            "email": email,
            "phone": fixture["phone"],
            "profile_image": fixture["profile_image"],
        }
    
    async def clear_all(self) -> ClearReport:
        """
        Empty every fixture collection, one batched delete per collection.
        Deletions already made stay in place when a later collection fails.
        """
        logger.info("Clearing all collections")
        report = ClearReport()
        for name, repository in self._collections():
            try:
                deleted = await repository.delete_all()
                report.per_collection[name] = deleted
                report.cleared += deleted
                logger.info(f"Cleared {deleted} documents from {name}")
            except Exception as e:
                report.errors.append(f"{name}: {e}")
        return report
    
    async def promote_user_role(self, email: str, target_role: Union[UserRole, str]) -> RoleChangeResult:
        """
        Set the role of the user with this email and reactivate the account.
        
        Never raises: a missing user and a failed write are reported as
        distinct outcomes.
        """
        try:
            role = UserRole(target_role)
        except ValueError:
            return RoleChangeResult(False, "write_failed", f"Unknown role '{target_role}'")
        
        try:
            user = await self.user_repo.get_by_email(email)
        except Exception as e:
            logger.error(f"Role change lookup failed for {email}: {e}")
            return RoleChangeResult(False, "write_failed", f"Lookup failed: {e}")
        if user is None:
            return RoleChangeResult(False, "not_found", f"No user found with email {email}")
        
        try:
            updated = await self.user_repo.update_user_role(user.id, role)
        except Exception as e:
            logger.error(f"Role change write failed for {email}: {e}")
            return RoleChangeResult(False, "write_failed", f"Update failed: {e}")
        if updated is None:
            return RoleChangeResult(False, "not_found", f"No user found with email {email}")
        
        logger.info(f"User {email} promoted to {role.value}")
        return RoleChangeResult(True, "updated", f"User {email} now has role {role.value}")
    
    async def backfill_role_field(self) -> int:
        """
        Give every user without a role the default role and mark it active.
        Running it again after a complete pass updates nothing.
        
        Returns:
            Number of users updated
        """
        updated = 0
        for user in await self.user_repo.get_users_missing_role():
            result = await self.user_repo.update(user.id, {"role": UserRole.USER.value, "is_active": True})
            if result is not None:
                updated += 1
        logger.info(f"Backfilled role on {updated} users")
        return updated
    
    async def list_users(
        self,
        role: Optional[UserRole] = None,
        page: int = 1,
        page_size: int = 20,
        include_inactive: bool = True
    ) -> Tuple[List[User], int]:
        page, page_size = ValidationUtils.validate_pagination(page, page_size)
        return await self.user_repo.get_users_by_role(
            role=role,
            skip=(page - 1) * page_size,
            limit=page_size,
            include_inactive=include_inactive
        )
    
    async def set_user_active(self, user_id: str, is_active: bool) -> User:
        user = await self.user_repo.update_user_status(ValidationUtils.parse_id(user_id, "User"), is_active)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
    
    async def collection_stats(self) -> Dict[str, Any]:
        """Document counts per collection plus role, type and status breakdowns."""
        counts = {name: await repository.count() for name, repository in self._collections()}
        counts["system_settings"] = await self.settings_repo.count()
        return {
            "collections": counts,
            "users_by_role": await self.user_repo.get_role_counts(),
            "properties_by_type": await self.property_repo.get_type_counts(),
            "properties_by_status": await self.property_repo.get_status_counts(),
        }
