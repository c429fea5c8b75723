"""
Database models for the Property Desk API.
Includes User, Property, PropertyImage and PropertyDocument.
"""

from property_desk.models.user import User, UserRole
from property_desk.models.property import Property, PropertyStatus, PropertyType
from property_desk.models.media import PropertyImage, PropertyDocument

# Export all models for easy importing
__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "PropertyImage",
    "PropertyDocument",
]
