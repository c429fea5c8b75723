"""
Property management API endpoints for listing, detail, create, update and delete.
Reads are open to any authenticated user; writes require ownership or admin.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional
from uuid import UUID

from property_desk.config import settings
from property_desk.models.property import Property, PropertyStatus, PropertyType
from property_desk.services.property import PropertyService
from property_desk.schemas.auth import MessageResponse
from property_desk.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    PropertySearchParams,
)
from property_desk.schemas.error import COMMON_ERROR_RESPONSES, OWNERSHIP_ERROR_RESPONSES
from property_desk.utils.auth import TokenPayload
from property_desk.utils.dependencies import (
    get_current_user,
    get_owned_property,
    get_property_service,
)


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List properties",
    description="Filter, sort and paginate non-deleted properties; each result includes its images and documents",
    responses=COMMON_ERROR_RESPONSES
)
async def list_properties(
    query: Optional[str] = Query(None, max_length=255, description="Matches title, description, street or city"),
    status_filter: Optional[PropertyStatus] = Query(None, alias="status", description="Listing status"),
    property_type: Optional[PropertyType] = Query(None, description="residential or commercial"),
    user_id: Optional[UUID] = Query(None, description="Only properties owned by this user"),
    limit: int = Query(settings.default_page_size, gt=0, le=settings.max_page_size, description="Page size"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    sort_by: str = Query("created_at", description="created_at, updated_at, price, title, bedrooms, bathrooms or square_footage"),
    sort_order: str = Query("desc", description="asc or desc; newest first by default"),
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    """
    Get a page of properties plus the total number of matches.

    Results default to newest first. Unknown ``sort_by`` values fall back to
    ``created_at``; an explicit ``sort_order`` other than ``desc`` sorts ascending.
    """
    params = PropertySearchParams(
        query=query,
        status=status_filter,
        property_type=property_type,
        user_id=user_id,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    properties, total_count = await property_service.list_properties(params)

    return PropertyListResponse(
        properties=[PropertyResponse.model_validate(item) for item in properties],
        total_count=total_count,
        limit=limit,
        offset=offset
    )


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a property owned by the caller",
    responses=COMMON_ERROR_RESPONSES
)
async def create_property(
    property_data: PropertyCreate,
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new property listing.

    Any owner supplied in the body is ignored; the caller becomes the owner.
    """
    created = await property_service.create_property(property_data, current_user)
    return PropertyResponse.model_validate(created)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get property details",
    description="A single non-deleted property with its images and documents",
    responses={**COMMON_ERROR_RESPONSES, 404: OWNERSHIP_ERROR_RESPONSES[404]}
)
async def get_property(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    detail = await property_service.get_property_detail(property_id)
    return PropertyResponse.model_validate(detail)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Partially update a property. Only the owner or an admin may do this.",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def update_property(
    update_data: PropertyUpdate,
    property_obj: Property = Depends(get_owned_property),
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Update the supplied fields of a property.

    Raises:
        BadRequestError: If a body id contradicts the URL
        InsufficientPermissionsError: If a non-admin changes the owner
    """
    updated = await property_service.update_property(property_obj, update_data, current_user)
    return PropertyResponse.model_validate(updated)


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete property",
    description="Soft-delete a property. Only the owner or an admin may do this.",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def delete_property(
    property_obj: Property = Depends(get_owned_property),
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(property_obj, current_user)
    return MessageResponse(message="Property deleted successfully")
