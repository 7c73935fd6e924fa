"""
Listing query composition.

Translates filter selections (type, province, price range label, status,
featured, free text) into catalog store predicates, runs the read and
applies the free-text refinement. Price ranges are half-open: the lower
bound is inclusive and the upper bound exclusive, so every price falls in
exactly one bucket.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from rural_properties.models.property import Property, PropertyType, PropertyStatus
from rural_properties.repositories.base import Predicate
from rural_properties.repositories.property import PropertyRepository
from rural_properties.utils.exceptions import QueryError, ValidationError
from typing import Any, Dict, List, Optional, Tuple
import enum
import logging
import re

logger = logging.getLogger(__name__)

ALL_TYPES = "All"
ALL_PROVINCES = "All Provinces"
ANY_PRICE = "Any Price"

PROPERTY_TYPE_OPTIONS = [ALL_TYPES, "Farm", "Smallholding", "Plot", "House"]

PROVINCES = [
    "Limpopo",
    "Mpumalanga",
    "KwaZulu-Natal",
    "Eastern Cape",
    "North West",
    "Free State",
    "Gauteng",
    "Western Cape",
    "Northern Cape",
]
PROVINCE_OPTIONS = [ALL_PROVINCES] + PROVINCES

# label -> [min, max); None means unbounded
PRICE_RANGES: Dict[str, Tuple[Optional[int], Optional[int]]] = {
    ANY_PRICE: (None, None),
    "Under R500K": (0, 500_000),
    "R500K - R1M": (500_000, 1_000_000),
    "R1M - R3M": (1_000_000, 3_000_000),
    "R3M - R5M": (3_000_000, 5_000_000),
    "Over R5M": (5_000_000, None),
}

_PRICE_LOOKUP = {label.lower(): label for label in PRICE_RANGES}
_TYPE_LOOKUP = {member.value: member for member in PropertyType}
_PROVINCE_LOOKUP = {province.lower(): province for province in PROVINCES}


def normalize_price_label(label: str) -> str:
    """Canonical spelling of a price label; dashes and spacing are not significant."""
    return re.sub(r"\s*[-–—]\s*", " - ", label.strip())


def price_bounds(label: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """
    Bounds of a price range label.
    
    Raises:
        ValidationError: If the label is not one of PRICE_RANGES
    """
    if not label:
        return PRICE_RANGES[ANY_PRICE]
    canonical = _PRICE_LOOKUP.get(normalize_price_label(label).lower())
    if canonical is None:
        raise ValidationError(f"Unknown price range '{label}'. Expected one of: {', '.join(PRICE_RANGES)}")
    return PRICE_RANGES[canonical]


def bucket_for_price(price: Any) -> str:
    """The single price range label a price belongs to."""
    amount = Decimal(str(price))
    if amount < 0:
        raise ValidationError("Price cannot be negative")
    for label, (low, high) in PRICE_RANGES.items():
        if low is None and high is None:
            continue
        if (low is None or amount >= low) and (high is None or amount < high):
            return label
    raise ValidationError(f"No price range covers {price}")


def resolve_property_type(label: Optional[str]) -> Optional[PropertyType]:
    """
    PropertyType for a type label, None for "All".
    
    Raises:
        ValidationError: If the label is unknown
    """
    if not label or label.strip().lower() == ALL_TYPES.lower():
        return None
    property_type = _TYPE_LOOKUP.get(label.strip().lower())
    if property_type is None:
        raise ValidationError(f"Unknown property type '{label}'. Expected one of: {', '.join(PROPERTY_TYPE_OPTIONS)}")
    return property_type


def resolve_province(label: Optional[str]) -> Optional[str]:
    """Canonical province name, None for "All Provinces"."""
    if not label or label.strip().lower() == ALL_PROVINCES.lower():
        return None
    province = _PROVINCE_LOOKUP.get(label.strip().lower())
    if province is None:
        raise ValidationError(f"Unknown province '{label}'")
    return province


def _optional_decimal(value: Any, name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number")
    if amount < 0:
        raise ValidationError(f"{name} cannot be negative")
    return amount


@dataclass
class ListingFilters:
    """
    Filter selections for a listing query.
    Explicit min_price/max_price override the bounds of the price label.
    """
    type: str = ALL_TYPES
    province: str = ALL_PROVINCES
    price: str = ANY_PRICE
    search: str = ""
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    page_size: Optional[int] = None
    cursor: Optional[str] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListingFilters":
        """Build filters from a stored saved-search filters object."""
        status = data.get("status")
        return cls(
            type=data.get("type") or ALL_TYPES,
            province=data.get("province") or ALL_PROVINCES,
            price=data.get("price") or ANY_PRICE,
            search=data.get("search") or "",
            status=PropertyStatus(status) if status else None,
            featured=data.get("featured"),
            min_price=_optional_decimal(data.get("min_price"), "min_price"),
            max_price=_optional_decimal(data.get("max_price"), "max_price"),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Storable form, without paging state."""
        return {
            "type": self.type,
            "province": self.province,
            "price": self.price,
            "search": self.search,
            "status": self.status.value if self.status else None,
            "featured": self.featured,
            "min_price": float(self.min_price) if self.min_price is not None else None,
            "max_price": float(self.max_price) if self.max_price is not None else None,
        }


def compose_predicates(filters: ListingFilters) -> List[Predicate]:
    """
    Store predicates for the server-side part of a query, AND-combined.
    
    Raises:
        ValidationError: For unknown type, province or price labels
    """
    predicates: List[Predicate] = []
    
    property_type = resolve_property_type(filters.type)
    if property_type is not None:
        predicates.append(("property_type", "==", property_type))
    
    province = resolve_province(filters.province)
    if province is not None:
        predicates.append(("province", "==", province))
    
    low, high = price_bounds(filters.price)
    if filters.min_price is not None:
        low = filters.min_price
    if filters.max_price is not None:
        high = filters.max_price
    if low is not None:
        predicates.append(("price", ">=", low))
    if high is not None:
        predicates.append(("price", "<", high))
    
    if filters.status is not None:
        predicates.append(("status", "==", filters.status))
    
    if filters.featured is not None:
        predicates.append(("featured", "==", filters.featured))
    
    return predicates


def matches_search_text(listing: Property, text: Optional[str]) -> bool:
    """Case-insensitive substring match on the title and the "city, province" string."""
    if not text or not text.strip():
        return True
    needle = text.strip().lower()
    return needle in listing.title.lower() or needle in listing.location_text.lower()


def refine(listings: List[Property], text: Optional[str]) -> List[Property]:
    return [listing for listing in listings if matches_search_text(listing, text)]


@dataclass
class CatalogPage:
    """One page of query results. next_cursor is None once the result set is exhausted."""
    items: List[Property] = field(default_factory=list)
    next_cursor: Optional[str] = None
    
    @property
    def count(self) -> int:
        return len(self.items)


class CatalogService:
    """
    Runs listing queries against the catalog store.
    A failed read raises QueryError and is never reported as an empty page.
    """
    
    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repository = PropertyRepository(db_session)
    
    async def query(self, filters: ListingFilters) -> CatalogPage:
        """
        Execute a listing query.
        
        Free-text search is applied after the store read, so a page can
        hold fewer than page_size items while next_cursor is still set.
        
        Raises:
            ValidationError: For invalid filter labels or cursor
            QueryError: If the store read fails
        """
        predicates = compose_predicates(filters)
        try:
            records, next_cursor = await self.property_repository.query(
                predicates,
                limit=filters.page_size,
                cursor=filters.cursor,
            )
        except ValidationError:
            raise
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            logger.error(f"Listing query failed: {e}")
            raise QueryError() from e
        
        items = refine(records, filters.search)
        logger.info(f"Listing query returned {len(items)} of {len(records)} records (filters={filters.to_dict()})")
        return CatalogPage(items=items, next_cursor=next_cursor)


class QueryState(str, enum.Enum):
    LOADED = "loaded"
    EMPTY = "empty"
    LOAD_FAILURE = "load_failure"
    STALE = "stale"


@dataclass
class QueryOutcome:
    state: QueryState
    generation: int
    page: Optional[CatalogPage] = None
    error: Optional[str] = None


class ListingQuerySession:
    """
    Tracks the queries issued by one listing view.
    
    Each submission gets a generation number. A response whose generation
    is older than the latest submission is reported as STALE and never
    replaces the current outcome. Once closed, all late responses are
    discarded.
    """
    
    def __init__(self, catalog_service: Any):
        self.catalog_service = catalog_service
        self.generation = 0
        self.latest: Optional[QueryOutcome] = None
        self.closed = False
    
    def is_current(self, generation: int) -> bool:
        return not self.closed and generation == self.generation
    
    async def submit(self, filters: ListingFilters) -> QueryOutcome:
        """Issue a query and settle its outcome against the current generation."""
        self.generation += 1
        generation = self.generation
        
        try:
            page = await self.catalog_service.query(filters)
            state = QueryState.LOADED if page.items else QueryState.EMPTY
            outcome = QueryOutcome(state, generation, page=page)
        except QueryError as e:
            outcome = QueryOutcome(QueryState.LOAD_FAILURE, generation, error=e.detail)
        
        return self._settle(outcome)
    
    def _settle(self, outcome: QueryOutcome) -> QueryOutcome:
        if not self.is_current(outcome.generation):
            logger.debug(f"Discarding stale listing response for generation {outcome.generation}")
            return replace(outcome, state=QueryState.STALE, page=None)
        self.latest = outcome
        return outcome
    
    def close(self) -> None:
        """Stop accepting responses, e.g. when the view goes away."""
        self.closed = True
