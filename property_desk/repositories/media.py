"""
Repositories for property images and documents.
Every mutation is scoped by both the media id and its parent property id.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_, asc
from property_desk.database import utcnow
from property_desk.repositories.base import BaseRepository, ModelType
from property_desk.models.media import PropertyImage, PropertyDocument
from typing import Optional, List, Dict, Any, Iterable
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyMediaRepository(BaseRepository[ModelType]):
    """Shared operations for media rows that belong to a property."""

    # Columns a caller may change on update
    updatable_fields: tuple = ()

    def _ordering(self) -> list:
        return [asc(self.model.created_at), asc(self.model.id)]

    async def get_for_properties(self, property_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, List[ModelType]]:
        """
        Fetch media for many properties in a single query.

        Args:
            property_ids: Properties to fetch media for

        Returns:
            Mapping of property id to its media in read order; every requested
            id is present, with an empty list when it has no media
        """
        ids = list(dict.fromkeys(property_ids))
        grouped: Dict[uuid.UUID, List[ModelType]] = {property_id: [] for property_id in ids}
        if not ids:
            return grouped

        try:
            query = (
                select(self.model)
                .where(self.model.property_id.in_(ids))
                .order_by(*self._ordering())
            )
            result = await self.db.execute(query)

            for item in result.scalars().all():
                grouped.setdefault(item.property_id, []).append(item)

            logger.debug(f"Loaded {self.model.__name__} rows for {len(ids)} properties")
            return grouped
        except Exception as e:
            logger.error(f"Failed to load {self.model.__name__} rows for properties: {e}")
            raise

    async def get_for_property(self, property_id: uuid.UUID) -> List[ModelType]:
        """Media of one property, using the same query as the batch fetch."""
        grouped = await self.get_for_properties([property_id])
        return grouped[property_id]

    async def add_to_property(self, property_id: uuid.UUID, data: Dict[str, Any]) -> ModelType:
        """
        Attach a new media row to a property.

        Args:
            property_id: Parent property
            data: Validated media fields

        Returns:
            Created media instance
        """
        create_data = {**data, "id": uuid.uuid4(), "property_id": property_id, "created_at": utcnow()}
        created = await self.create(create_data)
        logger.info(f"Added {self.model.__name__} {created.id} to property {property_id}")
        return created

    async def update_for_property(
        self,
        media_id: uuid.UUID,
        property_id: uuid.UUID,
        changes: Dict[str, Any]
    ) -> Optional[ModelType]:
        """
        Update a media row only if it belongs to the given property.

        Returns:
            Updated instance, or None when the id/property pair does not match
        """
        condition = and_(self.model.id == media_id, self.model.property_id == property_id)
        values = {field: value for field, value in changes.items() if field in self.updatable_fields}

        try:
            if values:
                stmt = (
                    update(self.model)
                    .where(condition)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                result = await self.db.execute(stmt)
                await self.db.commit()
                if result.rowcount == 0:
                    return None

            query = select(self.model).where(condition).execution_options(populate_existing=True)
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {media_id}: {e}")
            raise

    async def delete_for_property(self, media_id: uuid.UUID, property_id: uuid.UUID) -> bool:
        """
        Delete a media row only if it belongs to the given property.

        Returns:
            True if a row was removed
        """
        try:
            stmt = delete(self.model).where(
                and_(self.model.id == media_id, self.model.property_id == property_id)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.info(f"Deleted {self.model.__name__} {media_id} from property {property_id}")
            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {media_id}: {e}")
            raise


class ImageRepository(PropertyMediaRepository[PropertyImage]):
    """Repository for PropertyImage rows, read in display order."""

    updatable_fields = ("image_url", "alt_text", "display_order")

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyImage, db)

    def _ordering(self) -> list:
        return [asc(PropertyImage.display_order), asc(PropertyImage.created_at), asc(PropertyImage.id)]


class DocumentRepository(PropertyMediaRepository[PropertyDocument]):
    """Repository for PropertyDocument rows, read in creation order."""

    updatable_fields = ("document_url", "document_name", "document_type")

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyDocument, db)
