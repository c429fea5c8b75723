"""
Property image API endpoints.
Every route requires ownership of the parent property (or admin).
"""

from fastapi import APIRouter, Depends, status, Path
from uuid import UUID

from property_desk.models.property import Property
from property_desk.services.media import ImageService
from property_desk.schemas.auth import MessageResponse
from property_desk.schemas.media import PropertyImageCreate, PropertyImageUpdate, PropertyImageResponse
from property_desk.schemas.error import OWNERSHIP_ERROR_RESPONSES
from property_desk.utils.dependencies import get_owned_property, get_image_service


router = APIRouter(prefix="/properties/{property_id}/images", tags=["Images"])


@router.post(
    "",
    response_model=PropertyImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add image",
    description="Attach an image URL to a property",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def add_image(
    image_data: PropertyImageCreate,
    property_obj: Property = Depends(get_owned_property),
    image_service: ImageService = Depends(get_image_service)
) -> PropertyImageResponse:
    created = await image_service.add(property_obj, image_data)
    return PropertyImageResponse.model_validate(created)


@router.put(
    "/{image_id}",
    response_model=PropertyImageResponse,
    summary="Update image",
    description="Change the URL, alt text or display order of an image on this property",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def update_image(
    image_data: PropertyImageUpdate,
    image_id: UUID = Path(..., description="Image ID"),
    property_obj: Property = Depends(get_owned_property),
    image_service: ImageService = Depends(get_image_service)
) -> PropertyImageResponse:
    """
    Update an image.

    Raises:
        ImageNotFoundError: If the image does not belong to this property
    """
    updated = await image_service.update(property_obj, image_id, image_data)
    return PropertyImageResponse.model_validate(updated)


@router.delete(
    "/{image_id}",
    response_model=MessageResponse,
    summary="Delete image",
    description="Remove an image from this property",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def delete_image(
    image_id: UUID = Path(..., description="Image ID"),
    property_obj: Property = Depends(get_owned_property),
    image_service: ImageService = Depends(get_image_service)
) -> MessageResponse:
    await image_service.delete(property_obj, image_id)
    return MessageResponse(message="Image deleted successfully")
