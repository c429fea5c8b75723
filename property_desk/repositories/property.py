"""
Property repository for managing listings with search, sorting and soft delete.
Every read here excludes soft-deleted rows.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_, or_, func, desc, asc
from property_desk.database import utcnow
from property_desk.repositories.base import BaseRepository
from property_desk.models.property import Property, PropertyStatus, PropertyType, encode_tags
from typing import Optional, List, Dict, Any, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)

DEFAULT_SORT_COLUMN = "created_at"

# Columns a caller may sort by; anything else falls back to DEFAULT_SORT_COLUMN
SORTABLE_COLUMNS = {
    "created_at": Property.created_at,
    "updated_at": Property.updated_at,
    "price": Property.price,
    "title": Property.title,
    "bedrooms": Property.bedrooms,
    "bathrooms": Property.bathrooms,
    "square_footage": Property.square_footage,
}

# Request field name -> column written by a partial update
UPDATABLE_COLUMNS = {
    "user_id": Property.user_id,
    "title": Property.title,
    "description": Property.description,
    "street": Property.street,
    "city": Property.city,
    "state": Property.state,
    "zip_code": Property.zip_code,
    "country": Property.country,
    "latitude": Property.latitude,
    "longitude": Property.longitude,
    "price": Property.price,
    "status": Property.status,
    "property_type": Property.property_type,
    "bedrooms": Property.bedrooms,
    "bathrooms": Property.bathrooms,
    "square_footage": Property.square_footage,
    "additional_notes": Property.additional_notes,
    "tags": Property.tags,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PropertySearchFilters:
    """Data class for property listing filters, sorting and pagination."""

    def __init__(
        self,
        query: Optional[str] = None,
        status: Optional[PropertyStatus] = None,
        property_type: Optional[PropertyType] = None,
        user_id: Optional[uuid.UUID] = None,
        limit: int = 10,
        offset: int = 0,
        sort_by: Optional[str] = DEFAULT_SORT_COLUMN,
        sort_order: Optional[str] = "desc"
    ):
        self.query = query
        self.status = status
        self.property_type = property_type
        self.user_id = user_id
        self.limit = limit
        self.offset = offset
        self.sort_by = sort_by
        self.sort_order = sort_order

    @property
    def sort_column(self):
        """Allow-listed column to order by."""
        return SORTABLE_COLUMNS.get(self.sort_by or "", SORTABLE_COLUMNS[DEFAULT_SORT_COLUMN])

    @property
    def descending(self) -> bool:
        return (self.sort_order or "").lower() == "desc"


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Search, counts and lookups only ever see rows where ``is_deleted`` is false.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any], owner_id: uuid.UUID) -> Property:
        """
        Create a new property owned by ``owner_id``.

        Args:
            property_data: Validated property fields (tags as a list)
            owner_id: Caller who becomes the owner

        Returns:
            Created property instance
        """
        try:
            now = utcnow()
            create_data = {
                **property_data,
                "id": uuid.uuid4(),
                "user_id": owner_id,
                "tags": encode_tags(property_data.get("tags")),
                "is_deleted": False,
                "created_at": now,
                "updated_at": now,
            }

            created_property = await self.create(create_data)
            logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
            return created_property
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise

    async def get_active(self, property_id: uuid.UUID, refresh: bool = False) -> Optional[Property]:
        """
        Get a property unless it is soft-deleted.

        Args:
            property_id: UUID of the property
            refresh: Overwrite any copy already held by the session

        Returns:
            Property or None if missing or deleted
        """
        try:
            query = select(Property).where(
                and_(Property.id == property_id, Property.is_deleted == False)  # noqa: E712
            )
            if refresh:
                query = query.execution_options(populate_existing=True)

            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get property {property_id}: {e}")
            raise

    async def search_properties(self, filters: PropertySearchFilters) -> Tuple[List[Property], int]:
        """
        Search properties with filtering, ordering and pagination.

        Args:
            filters: PropertySearchFilters instance with search criteria

        Returns:
            Tuple of (properties on the requested page, total matching count)
        """
        try:
            conditions = self._build_filter_conditions(filters)

            count_query = select(func.count(Property.id)).where(and_(*conditions))
            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar() or 0

            direction = desc if filters.descending else asc
            query = (
                select(Property)
                .where(and_(*conditions))
                # id breaks ties so pages never overlap
                .order_by(direction(filters.sort_column), asc(Property.id))
                .offset(filters.offset)
                .limit(filters.limit)
            )

            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            logger.debug(f"Property search returned {len(properties)} of {total_count} results")
            return properties, total_count
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> List:
        """
        Build SQLAlchemy filter conditions from search filters.

        Args:
            filters: PropertySearchFilters instance

        Returns:
            List of SQLAlchemy conditions, always including the soft-delete guard
        """
        conditions = [Property.is_deleted == False]  # noqa: E712

        if filters.query:
            pattern = f"%{_escape_like(filters.query)}%"
            conditions.append(
                or_(
                    Property.title.ilike(pattern, escape="\\"),
                    Property.description.ilike(pattern, escape="\\"),
                    Property.street.ilike(pattern, escape="\\"),
                    Property.city.ilike(pattern, escape="\\"),
                )
            )

        if filters.status is not None:
            conditions.append(Property.status == PropertyStatus(filters.status))

        if filters.property_type is not None:
            conditions.append(Property.property_type == PropertyType(filters.property_type))

        if filters.user_id is not None:
            conditions.append(Property.user_id == filters.user_id)

        return conditions

    async def update_property(self, property_id: uuid.UUID, changes: Dict[str, Any]) -> Optional[Property]:
        """
        Write the supplied fields of a non-deleted property.

        Only keys listed in UPDATABLE_COLUMNS are written; ``updated_at`` is
        always refreshed, so an empty ``changes`` only bumps the timestamp.

        Args:
            property_id: UUID of the property
            changes: Field name to new value

        Returns:
            The updated property, or None if no non-deleted row matched
        """
        try:
            values = {}
            for field, value in changes.items():
                column = UPDATABLE_COLUMNS.get(field)
                if column is None:
                    continue
                if field == "tags":
                    value = encode_tags(value)
                values[column.key] = value
            values["updated_at"] = utcnow()

            stmt = (
                update(Property)
                .where(and_(Property.id == property_id, Property.is_deleted == False))  # noqa: E712
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)

            await self.db.commit()

            if result.rowcount == 0:
                logger.debug(f"Property {property_id} not found for update")
                return None

            logger.info(f"Updated property {property_id}: {sorted(k for k in values if k != 'updated_at')}")
            return await self.get_active(property_id, refresh=True)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update property {property_id}: {e}")
            raise

    async def soft_delete(self, property_id: uuid.UUID) -> bool:
        """
        Mark a property as deleted.

        Returns:
            True if a non-deleted row was flagged, False otherwise
        """
        try:
            stmt = (
                update(Property)
                .where(and_(Property.id == property_id, Property.is_deleted == False))  # noqa: E712
                .values(is_deleted=True, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.info(f"Soft-deleted property {property_id}")
            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete property {property_id}: {e}")
            raise

    async def count_active(self, status: Optional[PropertyStatus] = None) -> int:
        """Number of non-deleted properties, optionally only those with ``status``."""
        conditions = [Property.is_deleted == False]  # noqa: E712
        if status is not None:
            conditions.append(Property.status == status)
        return await self.count(*conditions)

    async def recent_titles(self, limit: int = 5) -> List[str]:
        """Titles of the most recently created non-deleted properties, newest first."""
        try:
            query = (
                select(Property.title)
                .where(Property.is_deleted == False)  # noqa: E712
                .order_by(desc(Property.created_at), desc(Property.id))
                .limit(limit)
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to load recent property titles: {e}")
            raise
