"""
Rural Properties API.
Listing catalog, role-scoped access and seeding utilities for rural and peri-urban real estate.
"""

__version__ = "1.0.0"
