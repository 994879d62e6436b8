"""Clinic document endpoints.

Mounted under ``/api/employer``. Every route is scoped by the ``clinic_id``
path parameter; errors are rendered as ``{"success": false, "error": msg}``.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ServiceError
from ..schemas.document import (
    DocumentUploadRequest,
    DocumentResponse,
    DocumentEnvelope,
    DocumentListEnvelope,
    DownloadUrlResponse,
    MessageResponse,
)
from ..services.documents import DocumentService
from ..storage import ObjectStoreBase, get_object_store

router = APIRouter(prefix="/api/employer", tags=["documents"])


def get_document_service(
    db: Session = Depends(get_db),
    store: ObjectStoreBase = Depends(get_object_store),
) -> DocumentService:
    return DocumentService(db, store)


def _error_response(error: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"success": False, "error": error.message})


@router.get("/{clinic_id}/documents", response_model=DocumentListEnvelope)
def list_documents(
    clinic_id: str,
    category: Optional[str] = Query(None, description="Filter by category; 'all' disables the filter"),
    service: DocumentService = Depends(get_document_service),
):
    """List a clinic's documents, newest first."""
    try:
        documents = service.list_documents(clinic_id, category)
    except ServiceError as e:
        return _error_response(e)
    return DocumentListEnvelope(documents=[DocumentResponse.model_validate(d) for d in documents])


@router.post("/{clinic_id}/documents", response_model=DocumentEnvelope)
def upload_document(
    clinic_id: str,
    request: DocumentUploadRequest,
    service: DocumentService = Depends(get_document_service),
):
    """Store a base64 payload and record its metadata."""
    try:
        document = service.upload_document(clinic_id, request)
    except ServiceError as e:
        return _error_response(e)
    return DocumentEnvelope(document=DocumentResponse.model_validate(document))


@router.get("/{clinic_id}/documents/{document_id}", response_model=DocumentEnvelope)
def get_document(
    clinic_id: str,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
):
    try:
        document = service.get_document(clinic_id, document_id)
    except ServiceError as e:
        return _error_response(e)
    return DocumentEnvelope(document=DocumentResponse.model_validate(document))


@router.get("/{clinic_id}/documents/{document_id}/download", response_model=DownloadUrlResponse)
def get_download_url(
    clinic_id: str,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
):
    """Issue a signed URL valid for one hour."""
    try:
        result = service.get_download_url(clinic_id, document_id)
    except ServiceError as e:
        return _error_response(e)
    return DownloadUrlResponse(**result)


@router.delete("/{clinic_id}/documents/{document_id}", response_model=MessageResponse)
def delete_document(
    clinic_id: str,
    document_id: str,
    service: DocumentService = Depends(get_document_service),
):
    try:
        service.delete_document(clinic_id, document_id)
    except ServiceError as e:
        return _error_response(e)
    return MessageResponse(message="Document deleted successfully")
