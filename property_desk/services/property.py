"""
Property service for listing, detail and mutation business logic.
Ownership is enforced before these methods run; this layer handles the
remaining rules (owner stamping, admin-only reassignment, media enrichment).
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from property_desk.models.property import Property
from property_desk.repositories.property import PropertyRepository, PropertySearchFilters
from property_desk.repositories.media import ImageRepository, DocumentRepository
from property_desk.schemas.property import PropertyCreate, PropertyUpdate, PropertySearchParams
from property_desk.utils.auth import TokenPayload
from property_desk.utils.exceptions import (
    BadRequestError,
    InsufficientPermissionsError,
    PropertyNotFoundError,
)
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for business logic implementation.
    Returns plain dictionaries ready for the response schemas.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.image_repo = ImageRepository(db_session)
        self.document_repo = DocumentRepository(db_session)

    async def _with_media(self, properties: List[Property]) -> List[dict]:
        """
        Attach images and documents to each property.

        Media for the whole page are loaded with one query per media kind.
        """
        ids = [prop.id for prop in properties]
        images = await self.image_repo.get_for_properties(ids)
        documents = await self.document_repo.get_for_properties(ids)
        return [
            prop.to_dict(images=images.get(prop.id, []), documents=documents.get(prop.id, []))
            for prop in properties
        ]

    async def list_properties(self, params: PropertySearchParams) -> Tuple[List[dict], int]:
        """
        Search properties and enrich the page with media.

        Args:
            params: Validated listing query parameters

        Returns:
            Tuple of (property dictionaries, total matching count)
        """
        filters = PropertySearchFilters(
            query=params.query,
            status=params.status,
            property_type=params.property_type,
            user_id=params.user_id,
            limit=params.limit,
            offset=params.offset,
            sort_by=params.sort_by,
            sort_order=params.sort_order,
        )
        properties, total_count = await self.property_repo.search_properties(filters)
        return await self._with_media(properties), total_count

    async def get_property_detail(self, property_id: uuid.UUID) -> dict:
        """
        Get one non-deleted property with its media.

        Raises:
            PropertyNotFoundError: If the property is missing or deleted
        """
        property_obj = await self.property_repo.get_active(property_id)
        if not property_obj:
            raise PropertyNotFoundError()

        enriched = await self._with_media([property_obj])
        return enriched[0]

    async def create_property(self, property_data: PropertyCreate, current_user: TokenPayload) -> dict:
        """
        Create a property owned by the caller.

        Args:
            property_data: Validated property fields
            current_user: Authenticated identity, recorded as owner

        Returns:
            The stored property with empty media lists
        """
        created = await self.property_repo.create_property(
            property_data.model_dump(),
            owner_id=current_user.user_id
        )
        logger.info(f"Property {created.id} created by user {current_user.user_id}")
        return created.to_dict(images=[], documents=[])

    async def update_property(
        self,
        property_obj: Property,
        update_data: PropertyUpdate,
        current_user: TokenPayload
    ) -> dict:
        """
        Apply a partial update to a property the caller may manage.

        Args:
            property_obj: Property loaded by the ownership check
            update_data: Supplied fields
            current_user: Authenticated identity

        Returns:
            The updated property with its media

        Raises:
            BadRequestError: If the body id contradicts the path id
            InsufficientPermissionsError: If a non-admin tries to change the owner
            PropertyNotFoundError: If the property vanished before the write
        """
        if update_data.id is not None and update_data.id != property_obj.id:
            raise BadRequestError("Property id in body does not match the URL")

        changes = update_data.changes()
        new_owner = changes.get("user_id")
        if new_owner is not None and new_owner != property_obj.user_id and not current_user.is_admin:
            raise InsufficientPermissionsError("reassign property ownership")

        updated = await self.property_repo.update_property(property_obj.id, changes)
        if not updated:
            raise PropertyNotFoundError()

        logger.info(f"Property {updated.id} updated by user {current_user.user_id}")
        enriched = await self._with_media([updated])
        return enriched[0]

    async def delete_property(self, property_obj: Property, current_user: TokenPayload) -> None:
        """
        Soft-delete a property the caller may manage.

        Raises:
            PropertyNotFoundError: If the property was already deleted
        """
        deleted = await self.property_repo.soft_delete(property_obj.id)
        if not deleted:
            raise PropertyNotFoundError()

        logger.info(f"Property {property_obj.id} deleted by user {current_user.user_id}")
