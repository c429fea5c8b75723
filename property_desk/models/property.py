"""
Property model for sale and rental listings.
Handles address, pricing, classification and soft-delete state.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, DateTime, Enum as SQLEnum, Index, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from property_desk.database import Base, utcnow
from datetime import datetime
from decimal import Decimal
import enum
import json
import uuid
from typing import List, Optional


class PropertyStatus(str, enum.Enum):
    """Listing status of a property."""
    FOR_SALE = "for_sale"
    FOR_RENT = "for_rent"
    SOLD = "sold"


class PropertyType(str, enum.Enum):
    """Property classification."""
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def encode_tags(tags: Optional[List[str]]) -> Optional[str]:
    """Serialize a tag list for storage in the text column."""
    if tags is None:
        return None
    return json.dumps(list(tags))


def decode_tags(raw: Optional[str]) -> Optional[List[str]]:
    """Parse a stored tag column back into a list."""
    if raw is None or raw == "":
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        return [raw]
    return value if isinstance(value, list) else [str(value)]


class Property(Base):
    """
    Property model for managing listings.
    Rows are never physically removed; ``is_deleted`` hides them from every read.
    """

    __tablename__ = "properties"

    # Owner
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this listing"
    )

    # Basic property information
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    # Address
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    latitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=8),
        nullable=True,
        comment="Property latitude coordinate"
    )

    longitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=11, scale=8),
        nullable=True,
        comment="Property longitude coordinate"
    )

    # Pricing and classification
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Property price in local currency"
    )

    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus, name="property_status", values_callable=_enum_values),
        nullable=False,
        index=True,
        comment="for_sale, for_rent or sold"
    )

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type", values_callable=_enum_values),
        nullable=False,
        index=True,
        comment="residential or commercial"
    )

    # Property specifications
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    square_footage: Mapped[int] = mapped_column(Integer, nullable=False)

    additional_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    tags: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="JSON-encoded list of tag strings"
    )

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Soft-delete flag"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    @property
    def tag_list(self) -> Optional[List[str]]:
        """Tags decoded from their stored form."""
        return decode_tags(self.tags)

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def to_dict(self, images: Optional[list] = None, documents: Optional[list] = None) -> dict:
        """
        Convert property to dictionary.

        Args:
            images: Image rows to attach, in display order
            documents: Document rows to attach, in creation order

        Returns:
            Dictionary representation of property with its media
        """
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "title": self.title,
            "description": self.description,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "country": self.country,
            "latitude": float(self.latitude) if self.latitude is not None else None,
            "longitude": float(self.longitude) if self.longitude is not None else None,
            "price": float(self.price),
            "status": PropertyStatus(self.status).value,
            "property_type": PropertyType(self.property_type).value,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "square_footage": self.square_footage,
            "additional_notes": self.additional_notes,
            "tags": self.tag_list,
            "is_deleted": self.is_deleted,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "images": [image.to_dict() for image in images or []],
            "documents": [document.to_dict() for document in documents or []],
        }


# Composite indexes for the listing query: visible rows filtered by status/type
status_type_index = Index(
    'idx_properties_status_type_deleted',
    Property.status,
    Property.property_type,
    Property.is_deleted
)

owner_index = Index(
    'idx_properties_owner_deleted',
    Property.user_id,
    Property.is_deleted
)
