"""
Tests for the catalog store repositories.
Covers CRUD, predicate queries, keyset cursors, counters and set-valued fields.
"""

import pytest
import uuid
from decimal import Decimal

from rural_properties.models.inquiry import InquiryStatus
from rural_properties.models.property import PropertyType, PropertyStatus
from rural_properties.repositories.base import decode_cursor, encode_cursor
from rural_properties.repositories.inquiry import InquiryRepository
from rural_properties.repositories.property import PropertyRepository
from rural_properties.repositories.system_settings import SystemSettingsRepository
from rural_properties.repositories.user import UserRepository
from rural_properties.utils.exceptions import ValidationError
from tests.conftest import PropertyFactory, UserFactory, TEST_PASSWORD


class TestBaseRepository:
    """Generic document operations through PropertyRepository."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, property_repository: PropertyRepository):
        created = await PropertyFactory.create_property(property_repository, title="River Farm")

        fetched = await property_repository.get_by_id(created.id)

        assert fetched.title == "River Farm"
        assert fetched.property_type == PropertyType.FARM
        assert fetched.status == PropertyStatus.ACTIVE
        assert fetched.views == 0

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, property_repository: PropertyRepository):
        assert await property_repository.get_by_id(uuid.uuid4()) is None

    @pytest.mark.asyncio
    async def test_update(self, property_repository: PropertyRepository):
        created = await PropertyFactory.create_property(property_repository)

        updated = await property_repository.update(created.id, {"status": PropertyStatus.SOLD, "featured": True})

        assert updated.status == PropertyStatus.SOLD
        assert updated.featured is True

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, property_repository: PropertyRepository):
        assert await property_repository.update(uuid.uuid4(), {"featured": True}) is None

    @pytest.mark.asyncio
    async def test_delete(self, property_repository: PropertyRepository):
        created = await PropertyFactory.create_property(property_repository)

        assert await property_repository.delete(created.id) is True
        assert await property_repository.delete(created.id) is False
        assert await property_repository.get_by_id(created.id) is None

    @pytest.mark.asyncio
    async def test_query_operators(self, property_repository: PropertyRepository):
        await PropertyFactory.create_property(property_repository, title="Cheap Plot", property_type=PropertyType.PLOT, price=Decimal("300000"))
        await PropertyFactory.create_property(property_repository, title="Mid House", property_type=PropertyType.HOUSE, price=Decimal("900000"))
        await PropertyFactory.create_property(property_repository, title="Big Farm", price=Decimal("6000000"))

        cheap, _ = await property_repository.query([("price", "<", Decimal("500000"))])
        assert [p.title for p in cheap] == ["Cheap Plot"]

        not_farms, _ = await property_repository.query([("property_type", "!=", PropertyType.FARM)])
        assert {p.title for p in not_farms} == {"Cheap Plot", "Mid House"}

        chosen, _ = await property_repository.query([("property_type", "in", [PropertyType.PLOT, PropertyType.FARM])])
        assert {p.title for p in chosen} == {"Cheap Plot", "Big Farm"}

        both, _ = await property_repository.query([
            ("price", ">=", Decimal("300000")),
            ("price", "<=", Decimal("900000")),
        ])
        assert len(both) == 2

    @pytest.mark.asyncio
    async def test_query_rejects_unknown_field_and_operator(self, property_repository: PropertyRepository):
        with pytest.raises(ValueError):
            await property_repository.query([("acreage", "==", 5)])
        with pytest.raises(ValueError):
            await property_repository.query([("price", "~", 5)])

    @pytest.mark.asyncio
    async def test_query_orders_by_price_with_cursor(self, property_repository: PropertyRepository):
        for price in ("100000", "200000", "300000", "400000"):
            await PropertyFactory.create_property(property_repository, price=Decimal(price))

        first, cursor = await property_repository.query(order_by="price", descending=False, limit=3)
        second, end = await property_repository.query(order_by="price", descending=False, limit=3, cursor=cursor)

        assert [int(p.price) for p in first] == [100000, 200000, 300000]
        assert [int(p.price) for p in second] == [400000]
        assert end is None

    @pytest.mark.asyncio
    async def test_increment_is_relative(self, property_repository: PropertyRepository):
        created = await PropertyFactory.create_property(property_repository)

        await property_repository.increment(created.id, "views")
        await property_repository.increment(created.id, "views", 4)

        assert (await property_repository.get_by_id(created.id)).views == 5
        assert await property_repository.increment(uuid.uuid4(), "views") is False

    @pytest.mark.asyncio
    async def test_set_semantics(self, user_repository: UserRepository, test_user):
        await user_repository.add_to_set(test_user.id, "saved_properties", "p1")
        await user_repository.add_to_set(test_user.id, "saved_properties", "p1")
        updated = await user_repository.add_to_set(test_user.id, "saved_properties", "p2")
        assert updated.saved_properties == ["p1", "p2"]

        updated = await user_repository.remove_from_set(test_user.id, "saved_properties", "missing")
        assert updated.saved_properties == ["p1", "p2"]

        updated = await user_repository.remove_from_set(test_user.id, "saved_properties", "p1")
        assert updated.saved_properties == ["p2"]

    @pytest.mark.asyncio
    async def test_delete_all_returns_count(self, property_repository: PropertyRepository):
        for _ in range(3):
            await PropertyFactory.create_property(property_repository)

        assert await property_repository.delete_all() == 3
        assert await property_repository.count() == 0

    @pytest.mark.asyncio
    async def test_count_with_predicates(self, property_repository: PropertyRepository):
        await PropertyFactory.create_property(property_repository, featured=True)
        await PropertyFactory.create_property(property_repository)

        assert await property_repository.count() == 2
        assert await property_repository.count([("featured", "==", True)]) == 1


class TestCursorCodec:

    def test_cursor_is_opaque_and_decodable(self):
        record_id = uuid.uuid4()
        cursor = encode_cursor(Decimal("1250000.50"), record_id)

        assert "=" not in cursor
        assert decode_cursor(cursor) == (Decimal("1250000.50"), record_id)

    @pytest.mark.parametrize("cursor", ["", "abc", "eyJ0IjoiZHQifQ", "!!!"])
    def test_garbage_cursor_is_validation_error(self, cursor):
        with pytest.raises(ValidationError):
            decode_cursor(cursor)


class TestUserRepository:

    @pytest.mark.asyncio
    async def test_create_user_hashes_password(self, user_repository: UserRepository):
        user = await UserFactory.create_user(user_repository, email="Hash.Me@Example.com")

        assert user.email == "hash.me@example.com"
        assert user.hashed_password != TEST_PASSWORD
        assert user.verify_password(TEST_PASSWORD)
        assert user.display_name == "Test User"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, user_repository: UserRepository, test_user):
        with pytest.raises(ValueError, match="already exists"):
            await UserFactory.create_user(user_repository, email=test_user.email)

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, user_repository: UserRepository):
        with pytest.raises(ValueError):
            await UserFactory.create_user(user_repository, email="not-an-email")

    @pytest.mark.asyncio
    async def test_passwordless_account_cannot_sign_in(self, user_repository: UserRepository):
        await UserFactory.create_user(user_repository, email="federated@example.com", password=None)

        assert await user_repository.authenticate_user("federated@example.com", "anything123") is None

    @pytest.mark.asyncio
    async def test_role_counts(self, user_repository: UserRepository, test_admin, test_user):
        await UserFactory.create_user(user_repository, role=None)

        counts = await user_repository.get_role_counts()

        assert counts == {"admin": 1, "user": 1, "unset": 1}


class TestInquiryRepository:

    @pytest.mark.asyncio
    async def test_append_response_keeps_order(self, db_session):
        repo = InquiryRepository(db_session)
        inquiry = await repo.create({
            "property_id": "prop",
            "user_id": "user",
            "message": "Is the borehole working?",
        })

        await repo.append_response(inquiry.id, {"message": "first"})
        updated = await repo.append_response(inquiry.id, {"message": "second"})

        assert [r["message"] for r in updated.responses] == ["first", "second"]
        assert updated.status == InquiryStatus.RESPONDED


class TestSystemSettingsRepository:

    @pytest.mark.asyncio
    async def test_upsert_keeps_missing_sections(self, db_session):
        repo = SystemSettingsRepository(db_session)

        await repo.upsert({"site": {"name": "Rural Properties"}, "features": {"reviews": True}})
        updated = await repo.upsert({"site": {"name": "Rural Homes"}})

        assert updated.site == {"name": "Rural Homes"}
        assert updated.features == {"reviews": True}
        assert await repo.count() == 1
