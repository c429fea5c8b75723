"""
Repository layer for data access operations.
"""

from property_desk.repositories.base import BaseRepository
from property_desk.repositories.property import PropertyRepository, PropertySearchFilters
from property_desk.repositories.user import UserRepository
from property_desk.repositories.media import ImageRepository, DocumentRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "UserRepository",
    "ImageRepository",
    "DocumentRepository",
]
