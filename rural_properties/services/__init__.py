"""
Service layer for business logic implementation.
Contains the catalog query composer, the access gate, identity, listing
management, seeding and error handling services.
"""

from .access import Role, SessionContext, evaluate_access, decide_route
from .auth import AuthService
from .catalog import CatalogService, ListingFilters, ListingQuerySession
from .property import PropertyService
from .seeding import SeedingService, SeedReport, ClearReport, RoleChangeResult
from .error_handler import ErrorHandlerService

__all__ = [
    "Role",
    "SessionContext",
    "evaluate_access",
    "decide_route",
    "AuthService",
    "CatalogService",
    "ListingFilters",
    "ListingQuerySession",
    "PropertyService",
    "SeedingService",
    "SeedReport",
    "ClearReport",
    "RoleChangeResult",
    "ErrorHandlerService",
]
