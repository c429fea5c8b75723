"""
Media models attached to a property: image references and document references.
Both are stored as URLs; files themselves live outside this service.
"""

from sqlalchemy import String, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from property_desk.database import Base
from typing import Optional
import uuid


class PropertyImage(Base):
    """Image reference belonging to one property, read in display order."""

    __tablename__ = "property_images"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    image_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="Public URL of the image"
    )

    alt_text: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Alternative text for accessibility"
    )

    display_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order for image gallery"
    )

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, property_id={self.property_id}, order={self.display_order})>"

    def to_dict(self) -> dict:
        """Convert image to dictionary."""
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "image_url": self.image_url,
            "alt_text": self.alt_text,
            "display_order": self.display_order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class PropertyDocument(Base):
    """Document reference (floor plan, contract, disclosure) belonging to one property."""

    __tablename__ = "property_documents"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this document belongs to"
    )

    document_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        comment="Public URL of the document"
    )

    document_name: Mapped[str] = mapped_column(String(255), nullable=False)

    document_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Free-form document category, e.g. floor_plan"
    )

    def __repr__(self) -> str:
        return f"<PropertyDocument(id={self.id}, property_id={self.property_id}, name={self.document_name})>"

    def to_dict(self) -> dict:
        """Convert document to dictionary."""
        return {
            "id": str(self.id),
            "property_id": str(self.property_id),
            "document_url": self.document_url,
            "document_name": self.document_name,
            "document_type": self.document_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
