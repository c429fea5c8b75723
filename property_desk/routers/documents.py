"""
Property document API endpoints.
Every route requires ownership of the parent property (or admin).
"""

from fastapi import APIRouter, Depends, status, Path
from uuid import UUID

from property_desk.models.property import Property
from property_desk.services.media import DocumentService
from property_desk.schemas.auth import MessageResponse
from property_desk.schemas.media import (
    PropertyDocumentCreate,
    PropertyDocumentUpdate,
    PropertyDocumentResponse,
)
from property_desk.schemas.error import OWNERSHIP_ERROR_RESPONSES
from property_desk.utils.dependencies import get_owned_property, get_document_service


router = APIRouter(prefix="/properties/{property_id}/documents", tags=["Documents"])


@router.post(
    "",
    response_model=PropertyDocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add document",
    description="Attach a document URL to a property",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def add_document(
    document_data: PropertyDocumentCreate,
    property_obj: Property = Depends(get_owned_property),
    document_service: DocumentService = Depends(get_document_service)
) -> PropertyDocumentResponse:
    created = await document_service.add(property_obj, document_data)
    return PropertyDocumentResponse.model_validate(created)


@router.put(
    "/{document_id}",
    response_model=PropertyDocumentResponse,
    summary="Update document",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def update_document(
    document_data: PropertyDocumentUpdate,
    document_id: UUID = Path(..., description="Document ID"),
    property_obj: Property = Depends(get_owned_property),
    document_service: DocumentService = Depends(get_document_service)
) -> PropertyDocumentResponse:
    updated = await document_service.update(property_obj, document_id, document_data)
    return PropertyDocumentResponse.model_validate(updated)


@router.delete(
    "/{document_id}",
    response_model=MessageResponse,
    summary="Delete document",
    responses=OWNERSHIP_ERROR_RESPONSES
)
async def delete_document(
    document_id: UUID = Path(..., description="Document ID"),
    property_obj: Property = Depends(get_owned_property),
    document_service: DocumentService = Depends(get_document_service)
) -> MessageResponse:
    """
    Delete a document.

    Raises:
        DocumentNotFoundError: If the document does not belong to this property
    """
    await document_service.delete(property_obj, document_id)
    return MessageResponse(message="Document deleted successfully")
