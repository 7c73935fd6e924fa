"""
Test configuration and fixtures for the rural properties API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Settings are read at import time, so the test environment goes first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["PROJECT_ID"] = "rural-properties-test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-rural-properties-0123456789"
os.environ["FEDERATED_PROVIDERS"] = '{"google": "google-test-secret-key-0123456789abcdef"}'
os.environ.pop("MAPS_API_KEY", None)

import pytest
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from rural_properties.main import app
from rural_properties.database import Base, get_db
from rural_properties.models.agent import Agent
from rural_properties.models.property import Property, PropertyType, PropertyStatus, format_price
from rural_properties.models.user import User, UserRole
from rural_properties.repositories.agent import AgentRepository
from rural_properties.repositories.property import PropertyRepository
from rural_properties.repositories.user import UserRepository
from rural_properties.services.access import Role, SessionContext
from rural_properties.services.auth import AuthService, PasswordResetMailer
from rural_properties.services.catalog import CatalogService
from rural_properties.services.property import PropertyService
from rural_properties.services.seeding import SeedingService
from rural_properties.utils.auth import create_access_token
import rural_properties.models  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory catalog per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()

    await engine.dispose()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def agent_repository(db_session: AsyncSession) -> AgentRepository:
    return AgentRepository(db_session)


class RecordingMailer(PasswordResetMailer):
    """Keeps dispatched reset tokens so tests can complete the reset."""

    def __init__(self):
        self.outbox: List[Dict[str, str]] = []

    async def send_reset(self, email: str, token: str) -> None:
        self.outbox.append({"email": email, "token": token})
        await super().send_reset(email, token)


# Service fixtures
@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def auth_service(db_session: AsyncSession, mailer: RecordingMailer) -> AuthService:
    return AuthService(db_session, mailer=mailer)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def catalog_service(db_session: AsyncSession) -> CatalogService:
    return CatalogService(db_session)


@pytest.fixture
def seeding_service(db_session: AsyncSession) -> SeedingService:
    return SeedingService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: str = None,
        password: Optional[str] = TEST_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User",
        role: Optional[str] = UserRole.USER.value,
        is_active: bool = True
    ) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "role": role,
            "is_active": is_active
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class AgentFactory:
    """Factory for agent profiles linked to a user account."""

    @staticmethod
    async def create_agent(agent_repo: AgentRepository, user: User, **overrides) -> Agent:
        data = {
            "user_id": str(user.id),
            "email": user.email,
            "display_name": user.full_name,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone": "+27 82 000 0000",
            "areas": ["Limpopo"],
            "is_active": True,
        }
        data.update(overrides)
        return await agent_repo.create(data)


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Test Farm Listing",
        property_type: PropertyType = PropertyType.FARM,
        price: Decimal = Decimal("1500000"),
        city: str = "Tzaneen",
        province: str = "Limpopo",
        status: PropertyStatus = PropertyStatus.ACTIVE,
        featured: bool = False,
        listed_by: Optional[str] = None,
        agent_id: Optional[str] = None
    ) -> dict:
        """Create property column data."""
        return {
            "title": title,
            "description": "A test listing with enough description text",
            "address": "1 Test Road",
            "city": city,
            "province": province,
            "price": price,
            "price_formatted": format_price(price),
            "property_type": property_type,
            "status": status,
            "featured": featured,
            "features": {"bedrooms": 3, "bathrooms": 2},
            "images": [],
            "agent": {"id": agent_id, "name": "Test Agent"},
            "agent_id": agent_id,
            "listed_by": listed_by,
        }

    @staticmethod
    async def create_property(property_repo: PropertyRepository, **kwargs) -> Property:
        """Create a test property in the database."""
        return await property_repo.create(PropertyFactory.create_property_data(**kwargs))


def listing_payload(**overrides) -> dict:
    """Request body for POST /properties."""
    payload = {
        "title": "Citrus Farm near Tzaneen",
        "description": "Working citrus farm with packhouse and borehole",
        "location": {
            "address": "Farm 12, Agatha Road",
            "city": "Tzaneen",
            "province": "Limpopo",
            "coordinates": {"lat": -23.83, "lng": 30.16},
        },
        "price": 2450000,
        "size": {"land_size": "40 hectares"},
        "features": {"bedrooms": 4, "bathrooms": 2, "water": True},
        "property_type": "farm",
        "featured": False,
        "images": ["https://example.com/farm.jpg"],
    }
    payload.update(overrides)
    return payload


def auth_headers(user: User) -> Dict[str, str]:
    """Bearer header for a user."""
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}


# Common test fixtures
@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@test.com",
        first_name="Test",
        last_name="Admin",
        role=UserRole.ADMIN.value
    )


@pytest.fixture
async def test_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="agent@test.com",
        first_name="Test",
        last_name="Agent",
        role=UserRole.AGENT.value
    )


@pytest.fixture
async def test_agent_profile(agent_repository: AgentRepository, test_agent: User) -> Agent:
    return await AgentFactory.create_agent(agent_repository, test_agent)


@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="buyer@test.com",
        first_name="Test",
        last_name="Buyer",
        role=UserRole.USER.value
    )


@pytest.fixture
async def test_inactive_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="inactive@test.com",
        is_active=False
    )


@pytest.fixture
def admin_session(test_admin: User) -> SessionContext:
    return SessionContext(user=test_admin, role=Role.ADMIN)


@pytest.fixture
def agent_session(test_agent: User) -> SessionContext:
    return SessionContext(user=test_agent, role=Role.AGENT)


@pytest.fixture
def user_session(test_user: User) -> SessionContext:
    return SessionContext(user=test_user, role=Role.USER)


@pytest.fixture
def admin_headers(test_admin: User) -> Dict[str, str]:
    return auth_headers(test_admin)


@pytest.fixture
def agent_headers(test_agent: User) -> Dict[str, str]:
    return auth_headers(test_agent)


@pytest.fixture
def user_headers(test_user: User) -> Dict[str, str]:
    return auth_headers(test_user)


@pytest.fixture
async def test_property(
    property_repository: PropertyRepository,
    test_agent: User,
    test_agent_profile: Agent
) -> Property:
    """Listing owned by the test agent."""
    return await PropertyFactory.create_property(
        property_repository,
        title="Agent Owned Farm",
        listed_by=str(test_agent.id),
        agent_id=str(test_agent_profile.id)
    )
