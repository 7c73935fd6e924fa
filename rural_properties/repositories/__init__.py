"""
Repository layer for catalog store access.
Provides the store operations with proper error handling and logging.
"""

from rural_properties.repositories.base import BaseRepository, encode_cursor, decode_cursor
from rural_properties.repositories.user import UserRepository
from rural_properties.repositories.property import PropertyRepository
from rural_properties.repositories.agent import AgentRepository
from rural_properties.repositories.inquiry import InquiryRepository
from rural_properties.repositories.review import ReviewRepository
from rural_properties.repositories.saved_search import SavedSearchRepository
from rural_properties.repositories.system_settings import SystemSettingsRepository

__all__ = [
    "BaseRepository",
    "encode_cursor",
    "decode_cursor",
    "UserRepository",
    "PropertyRepository",
    "AgentRepository",
    "InquiryRepository",
    "ReviewRepository",
    "SavedSearchRepository",
    "SystemSettingsRepository",
]
