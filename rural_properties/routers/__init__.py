"""
API route handlers for the Rural Properties API.
"""

from .access import router as access_router
from .admin import router as admin_router
from .agents import router as agents_router
from .auth import router as auth_router
from .inquiries import router as inquiries_router
from .properties import router as properties_router
from .reviews import router as reviews_router
from .saved_searches import router as saved_searches_router
from .site import router as site_router
from .users import router as users_router

__all__ = [
    "access_router",
    "admin_router",
    "agents_router",
    "auth_router",
    "inquiries_router",
    "properties_router",
    "reviews_router",
    "saved_searches_router",
    "site_router",
    "users_router",
]
