"""
Dashboard service computing global listing metrics.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from property_desk.models.property import PropertyStatus
from property_desk.repositories.property import PropertyRepository
import logging

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5


class DashboardService:
    """Aggregates counts over all non-deleted properties."""

    def __init__(self, db_session: AsyncSession):
        self.property_repo = PropertyRepository(db_session)

    async def get_summary(self) -> dict:
        """
        Build the dashboard summary.

        Returns:
            Dictionary with total and per-status counts plus the newest titles
        """
        total = await self.property_repo.count_active()
        for_sale = await self.property_repo.count_active(PropertyStatus.FOR_SALE)
        for_rent = await self.property_repo.count_active(PropertyStatus.FOR_RENT)
        sold = await self.property_repo.count_active(PropertyStatus.SOLD)
        recent = await self.property_repo.recent_titles(RECENT_ACTIVITY_LIMIT)

        logger.debug(f"Dashboard summary computed over {total} properties")
        return {
            "total_properties": total,
            "for_sale_properties": for_sale,
            "for_rent_properties": for_rent,
            "sold_properties": sold,
            "recent_activity": recent,
        }
