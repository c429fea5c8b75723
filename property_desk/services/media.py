"""
Services for the image and document sub-resources of a property.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
from property_desk.models.property import Property
from property_desk.repositories.media import ImageRepository, DocumentRepository
from property_desk.utils.exceptions import ImageNotFoundError, DocumentNotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyMediaService:
    """
    Add, update and remove media on a property the caller may manage.

    Updates and deletes only match media attached to the given property;
    any other pairing is reported as not found.
    """

    repository_class = None
    not_found_error = None

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.repo = self.repository_class(db_session)

    async def add(self, property_obj: Property, data: BaseModel) -> dict:
        """Attach a new media item and return it."""
        created = await self.repo.add_to_property(property_obj.id, data.model_dump(mode="json"))
        return created.to_dict()

    async def update(self, property_obj: Property, media_id: uuid.UUID, data: BaseModel) -> dict:
        """
        Change the supplied fields of a media item.

        Raises:
            NotFoundError: If the item does not belong to the property
        """
        changes = data.model_dump(mode="json", exclude_unset=True)
        updated = await self.repo.update_for_property(media_id, property_obj.id, changes)
        if updated is None:
            raise self.not_found_error()
        return updated.to_dict()

    async def delete(self, property_obj: Property, media_id: uuid.UUID) -> None:
        """
        Remove a media item.

        Raises:
            NotFoundError: If the item does not belong to the property
        """
        deleted = await self.repo.delete_for_property(media_id, property_obj.id)
        if not deleted:
            raise self.not_found_error()


class ImageService(PropertyMediaService):
    """Image references of a property."""

    repository_class = ImageRepository
    not_found_error = ImageNotFoundError


class DocumentService(PropertyMediaService):
    """Document references of a property."""

    repository_class = DocumentRepository
    not_found_error = DocumentNotFoundError
