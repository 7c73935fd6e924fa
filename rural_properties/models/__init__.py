"""
Catalog document models for the Rural Properties API.
Includes properties, users, agents, inquiries, reviews, saved searches and system settings.
"""

from rural_properties.models.user import User, UserRole
from rural_properties.models.property import Property, PropertyType, PropertyStatus
from rural_properties.models.agent import Agent
from rural_properties.models.inquiry import Inquiry, InquiryStatus, InquiryType
from rural_properties.models.review import Review, ReviewStatus
from rural_properties.models.saved_search import SavedSearch, SearchFrequency
from rural_properties.models.system_settings import SystemSettings, SETTINGS_KEY

__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyType",
    "PropertyStatus",
    "Agent",
    "Inquiry",
    "InquiryStatus",
    "InquiryType",
    "Review",
    "ReviewStatus",
    "SavedSearch",
    "SearchFrequency",
    "SystemSettings",
    "SETTINGS_KEY",
]
