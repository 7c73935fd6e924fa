"""
Base repository class implementing the catalog store contract with async SQLAlchemy.
Provides single-document CRUD, predicate queries with keyset continuation,
atomic counters, set-valued field updates and batched collection deletes.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, and_, or_
from rural_properties.database import Base
from rural_properties.utils.exceptions import ValidationError
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Tuple, Sequence
from datetime import datetime
from decimal import Decimal
import base64
import binascii
import json
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

# (field, operator, value)
Predicate = Tuple[str, str, Any]

OPERATORS = {
    "==": lambda column, value: column == value,
    "!=": lambda column, value: column != value,
    "<": lambda column, value: column < value,
    "<=": lambda column, value: column <= value,
    ">": lambda column, value: column > value,
    ">=": lambda column, value: column >= value,
    "in": lambda column, value: column.in_(list(value)),
}


def encode_cursor(order_value: Any, record_id: uuid.UUID) -> str:
    """Opaque continuation token for the last row of a page."""
    if isinstance(order_value, datetime):
        payload = {"t": "dt", "v": order_value.isoformat()}
    elif isinstance(order_value, Decimal):
        payload = {"t": "dec", "v": str(order_value)}
    else:
        payload = {"t": "raw", "v": order_value}
    payload["id"] = str(record_id)
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> Tuple[Any, uuid.UUID]:
    """
    Decode a continuation token.
    
    Raises:
        ValidationError: If the token was not produced by encode_cursor
    """
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
        kind = payload["t"]
        if kind == "dt":
            value = datetime.fromisoformat(payload["v"])
        elif kind == "dec":
            value = Decimal(payload["v"])
        else:
            value = payload["v"]
        return value, uuid.UUID(payload["id"])
    except (ValueError, KeyError, TypeError, binascii.Error, UnicodeError) as e:
        raise ValidationError(f"Invalid continuation cursor: {cursor}") from e


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing the catalog store operations.
    Uses async SQLAlchemy for all database operations with proper error handling.
    """
    
    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.
        
        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db
    
    def _column(self, field: str):
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")
        return getattr(self.model, field)
    
    def build_conditions(self, predicates: Optional[Sequence[Predicate]]) -> List[Any]:
        """
        Translate predicates into SQLAlchemy conditions.
        
        Args:
            predicates: Sequence of (field, operator, value)
            
        Returns:
            List of conditions to be AND-combined
        """
        conditions = []
        for field, op, value in predicates or ():
            if op not in OPERATORS:
                raise ValueError(f"Unsupported operator '{op}'")
            conditions.append(OPERATORS[op](self._column(field), value))
        return conditions
    
    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.
        
        Args:
            obj_in: Dictionary of field values for the new record
            
        Returns:
            Created model instance
            
        Raises:
            Exception: If database operation fails
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise
    
    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Get a record by its ID.
        
        Args:
            id: UUID of the record to retrieve
            
        Returns:
            Model instance if found, None otherwise
        """
        try:
            query = (
                select(self.model)
                .where(self.model.id == id)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()
            
            if obj:
                logger.debug(f"Retrieved {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found")
            
            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by id {id}: {e}")
            raise
    
    async def query(
        self,
        predicates: Optional[Sequence[Predicate]] = None,
        order_by: str = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
        cursor: Optional[str] = None
    ) -> Tuple[List[ModelType], Optional[str]]:
        """
        Query the collection with AND-combined predicates.
        
        Ties on the order field are broken by id, so a continuation cursor
        always resumes exactly after the last row returned.
        
        Args:
            predicates: Sequence of (field, operator, value)
            order_by: Field to order by
            descending: Order direction
            limit: Optional page size
            cursor: Continuation token from a previous page
            
        Returns:
            Tuple of (records, next cursor or None when exhausted)
        """
        try:
            order_column = self._column(order_by)
            conditions = self.build_conditions(predicates)
            
            if cursor:
                last_value, last_id = decode_cursor(cursor)
                if descending:
                    conditions.append(or_(
                        order_column < last_value,
                        and_(order_column == last_value, self.model.id < last_id)
                    ))
                else:
                    conditions.append(or_(
                        order_column > last_value,
                        and_(order_column == last_value, self.model.id > last_id)
                    ))
            
            query = select(self.model).execution_options(populate_existing=True)
            if conditions:
                query = query.where(and_(*conditions))
            
            if descending:
                query = query.order_by(order_column.desc(), self.model.id.desc())
            else:
                query = query.order_by(order_column.asc(), self.model.id.asc())
            
            if limit is not None:
                # One extra row tells us whether another page exists
                query = query.limit(limit + 1)
            
            result = await self.db.execute(query)
            objects = list(result.scalars().all())
            
            next_cursor = None
            if limit is not None and len(objects) > limit:
                objects = objects[:limit]
                last = objects[-1]
                next_cursor = encode_cursor(getattr(last, order_by), last.id)
            
            logger.debug(f"Queried {len(objects)} {self.model.__name__} records")
            return objects, next_cursor
        except ValidationError:
            raise
        except Exception as e:
            logger.error(f"Failed to query {self.model.__name__} records: {e}")
            raise
    
    async def list_all(self, predicates: Optional[Sequence[Predicate]] = None) -> List[ModelType]:
        """All matching records, newest first."""
        records, _ = await self.query(predicates)
        return records
    
    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Update a record by its ID.
        
        Args:
            id: UUID of the record to update
            obj_in: Dictionary of field values to update
            
        Returns:
            Updated model instance if found, None otherwise
            
        Raises:
            Exception: If database operation fails
        """
        try:
            update_data = {k: v for k, v in obj_in.items() if v is not None}
            
            if not update_data:
                logger.warning(f"No valid data provided for updating {self.model.__name__} {id}")
                return await self.get_by_id(id)
            
            stmt = (
                update(self.model)
                .where(self.model.id == id)
                .values(**update_data)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            
            if result.rowcount == 0:
                await self.db.rollback()
                logger.debug(f"{self.model.__name__} with id {id} not found for update")
                return None
            
            await self.db.commit()
            
            updated_obj = await self.get_by_id(id)
            logger.debug(f"Updated {self.model.__name__} with id: {id}")
            return updated_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {id}: {e}")
            raise
    
    async def delete(self, id: uuid.UUID) -> bool:
        """
        Delete a record by its ID.
        
        Returns:
            True if record was deleted, False if not found
        """
        try:
            stmt = delete(self.model).where(self.model.id == id).execution_options(synchronize_session=False)
            result = await self.db.execute(stmt)
            await self.db.commit()
            
            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found for deletion")
            
            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise
    
    async def delete_all(self) -> int:
        """
        Delete every record of the collection in one batched statement.
        
        Returns:
            Number of records deleted
        """
        try:
            stmt = delete(self.model).execution_options(synchronize_session=False)
            result = await self.db.execute(stmt)
            await self.db.commit()
            
            deleted_count = result.rowcount
            logger.debug(f"Cleared {deleted_count} {self.model.__name__} records")
            return deleted_count
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to clear {self.model.__name__} records: {e}")
            raise
    
    async def increment(self, id: uuid.UUID, field: str, amount: int = 1) -> bool:
        """
        Atomically add to a numeric field.
        
        Returns:
            True if the record exists and was updated
        """
        try:
            column = self._column(field)
            stmt = (
                update(self.model)
                .where(self.model.id == id)
                .values({field: column + amount})
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
            
            updated = result.rowcount > 0
            logger.debug(f"Incremented {self.model.__name__}.{field} by {amount} for {id}: {updated}")
            return updated
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to increment {self.model.__name__}.{field} for {id}: {e}")
            raise
    
    async def _modify_set(self, id: uuid.UUID, field: str, value: Any, add: bool) -> Optional[ModelType]:
        try:
            query = (
                select(self.model)
                .where(self.model.id == id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()
            if obj is None:
                await self.db.rollback()
                return None
            
            current = list(getattr(obj, field) or [])
            if add and value not in current:
                current.append(value)
            elif not add and value in current:
                current.remove(value)
            
            # Assign a new list so the JSON column is flagged dirty
            setattr(obj, field, current)
            await self.db.commit()
            await self.db.refresh(obj)
            return obj
        except Exception as e:
            await self.db.rollback()
            action = "add to" if add else "remove from"
            logger.error(f"Failed to {action} {self.model.__name__}.{field} for {id}: {e}")
            raise
    
    async def add_to_set(self, id: uuid.UUID, field: str, value: Any) -> Optional[ModelType]:
        """Add value to a set-valued field. Adding an existing member is a no-op."""
        return await self._modify_set(id, field, value, add=True)
    
    async def remove_from_set(self, id: uuid.UUID, field: str, value: Any) -> Optional[ModelType]:
        """Remove value from a set-valued field. Removing an absent member is a no-op."""
        return await self._modify_set(id, field, value, add=False)
    
    async def count(self, predicates: Optional[Sequence[Predicate]] = None) -> int:
        """
        Count records matching the predicates.
        
        Returns:
            Number of matching records
        """
        try:
            query = select(func.count(self.model.id))
            conditions = self.build_conditions(predicates)
            if conditions:
                query = query.where(and_(*conditions))
            
            result = await self.db.execute(query)
            count = result.scalar()
            
            logger.debug(f"Counted {count} {self.model.__name__} records")
            return count
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise
    
    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get the first record matching a field value.
        
        Args:
            field: Field name to search by
            value: Value to search for
            
        Returns:
            Model instance if found, None otherwise
        """
        try:
            query = (
                select(self.model)
                .where(self._column(field) == value)
                .order_by(self.model.created_at.asc())
                .limit(1)
                .execution_options(populate_existing=True)
            )
            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()
            
            if obj:
                logger.debug(f"Retrieved {self.model.__name__} by {field}: {value}")
            else:
                logger.debug(f"{self.model.__name__} with {field}={value} not found")
            
            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise
