"""
Pydantic schemas for property images and documents.
Media are stored as URL references; only http(s) URLs are accepted.
"""

from pydantic import BaseModel, Field, HttpUrl, field_validator
from typing import Optional
from datetime import datetime


class PropertyImageCreate(BaseModel):
    """Schema for attaching an image to a property."""

    image_url: HttpUrl = Field(..., description="Public URL of the image")
    alt_text: Optional[str] = Field(None, max_length=255, description="Alternative text")
    display_order: int = Field(0, ge=0, description="Position in the image gallery")


class PropertyImageUpdate(BaseModel):
    """Schema for updating an image; only supplied fields change."""

    image_url: Optional[HttpUrl] = None
    alt_text: Optional[str] = Field(None, max_length=255)
    display_order: Optional[int] = Field(None, ge=0)

    @field_validator('image_url', 'display_order')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class PropertyImageResponse(BaseModel):
    """Image as returned by the API."""

    id: str
    property_id: str
    image_url: str
    alt_text: Optional[str] = None
    display_order: int
    created_at: Optional[datetime] = None


class PropertyDocumentCreate(BaseModel):
    """Schema for attaching a document to a property."""

    document_url: HttpUrl = Field(..., description="Public URL of the document")
    document_name: str = Field(..., min_length=1, max_length=255, description="Display name")
    document_type: str = Field(..., min_length=1, max_length=100, description="Document category")


class PropertyDocumentUpdate(BaseModel):
    """Schema for updating a document; only supplied fields change."""

    document_url: Optional[HttpUrl] = None
    document_name: Optional[str] = Field(None, min_length=1, max_length=255)
    document_type: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator('document_url', 'document_name', 'document_type')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class PropertyDocumentResponse(BaseModel):
    """Document as returned by the API."""

    id: str
    property_id: str
    document_url: str
    document_name: str
    document_type: str
    created_at: Optional[datetime] = None
