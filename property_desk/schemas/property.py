"""
Pydantic schemas for property requests and responses.
Handles property create/update payloads, listing query parameters and responses.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
import uuid
from property_desk.config import settings
from property_desk.models.property import PropertyStatus, PropertyType
from property_desk.schemas.media import PropertyImageResponse, PropertyDocumentResponse

# Columns that accept an explicit null on update
NULLABLE_FIELDS = {"latitude", "longitude", "additional_notes", "tags"}

TEXT_FIELDS = ("title", "description", "street", "city", "state", "zip_code", "country")


def _clean_tags(tags):
    if tags is None:
        return None
    cleaned = [tag.strip() for tag in tags if tag and tag.strip()]
    return cleaned


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(..., min_length=1, max_length=255, description="Property listing title")
    description: str = Field(..., min_length=1, max_length=10000, description="Detailed property description")

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)

    latitude: Optional[Decimal] = Field(None, ge=-90, le=90, description="Latitude coordinate")
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180, description="Longitude coordinate")

    price: Decimal = Field(..., ge=0, le=Decimal("9999999999.99"), description="Price in local currency")
    status: PropertyStatus = Field(..., description="for_sale, for_rent or sold")
    property_type: PropertyType = Field(..., description="residential or commercial")

    bedrooms: int = Field(..., ge=0, le=1000)
    bathrooms: int = Field(..., ge=0, le=1000)
    square_footage: int = Field(..., ge=0)

    additional_notes: Optional[str] = Field(None, max_length=10000)
    tags: Optional[List[str]] = Field(None, description="Free-form labels")

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def validate_text(cls, v):
        """Strip surrounding whitespace and reject blank values."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return _clean_tags(v)


class PropertyCreate(PropertyBase):
    """Schema for creating a new property. The owner is always the caller."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Lakeview Cabin",
                "description": "Two-bedroom cabin with a private dock.",
                "street": "12 Shore Rd",
                "city": "Tahoe City",
                "state": "CA",
                "zip_code": "96145",
                "country": "USA",
                "price": 450000,
                "status": "for_sale",
                "property_type": "residential",
                "bedrooms": 2,
                "bathrooms": 1,
                "square_footage": 900,
                "tags": ["lakefront"]
            }
        }
    }


class PropertyUpdate(BaseModel):
    """
    Schema for partially updating a property.

    Only keys present in the request body are written. Explicit null is accepted
    for nullable columns only.
    """

    id: Optional[uuid.UUID] = Field(None, description="Must match the path id when supplied")
    user_id: Optional[uuid.UUID] = Field(None, description="New owner (admins only)")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1, max_length=10000)
    street: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    country: Optional[str] = Field(None, min_length=1, max_length=100)

    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)

    price: Optional[Decimal] = Field(None, ge=0, le=Decimal("9999999999.99"))
    status: Optional[PropertyStatus] = None
    property_type: Optional[PropertyType] = None

    bedrooms: Optional[int] = Field(None, ge=0, le=1000)
    bathrooms: Optional[int] = Field(None, ge=0, le=1000)
    square_footage: Optional[int] = Field(None, ge=0)

    additional_notes: Optional[str] = Field(None, max_length=10000)
    tags: Optional[List[str]] = None

    @field_validator(*TEXT_FIELDS)
    @classmethod
    def validate_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip() if v is not None else v

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return _clean_tags(v)

    @model_validator(mode='after')
    def reject_null_for_required_columns(self):
        """Explicit null is only meaningful for nullable columns."""
        for field in self.model_fields_set:
            if field == "id" or field in NULLABLE_FIELDS:
                continue
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        """Supplied fields other than ``id``, in storage-ready form."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class PropertySearchParams(BaseModel):
    """Listing query parameters."""

    query: Optional[str] = Field(None, max_length=255, description="Text matched against title, description, street and city")
    status: Optional[PropertyStatus] = None
    property_type: Optional[PropertyType] = None
    user_id: Optional[uuid.UUID] = Field(None, description="Only properties owned by this user")
    limit: int = Field(settings.default_page_size, gt=0, le=settings.max_page_size)
    offset: int = Field(0, ge=0)
    sort_by: str = Field("created_at", description="Unknown columns fall back to created_at")
    sort_order: str = Field("desc", description="asc or desc; anything other than desc means asc")

    @field_validator('query')
    @classmethod
    def clean_query(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v or None


class PropertyResponse(BaseModel):
    """Property with its media as returned by the API."""

    id: str
    user_id: str
    title: str
    description: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    price: float
    status: PropertyStatus
    property_type: PropertyType
    bedrooms: int
    bathrooms: int
    square_footage: int
    additional_notes: Optional[str] = None
    tags: Optional[List[str]] = None
    is_deleted: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    images: List[PropertyImageResponse] = []
    documents: List[PropertyDocumentResponse] = []


class PropertyListResponse(BaseModel):
    """One page of listing results."""

    properties: List[PropertyResponse]
    total_count: int = Field(..., description="Matching rows ignoring pagination")
    limit: int
    offset: int
