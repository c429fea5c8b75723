"""
Pydantic schema for the dashboard metrics summary.
"""

from pydantic import BaseModel, Field
from typing import List


class DashboardResponse(BaseModel):
    """Counts over non-deleted properties plus the newest titles."""

    total_properties: int = Field(..., ge=0)
    for_sale_properties: int = Field(..., ge=0)
    for_rent_properties: int = Field(..., ge=0)
    sold_properties: int = Field(..., ge=0)
    recent_activity: List[str] = Field(
        default_factory=list,
        description="Titles of the five most recently created properties, newest first"
    )
