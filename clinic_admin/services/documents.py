import base64
import binascii
import logging
import re
import time
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import NotFoundError, PersistenceError, StoreError, UploadError, ValidationError
from ..models.document import ClinicDocument, DocumentCategory, DEFAULT_CONTENT_TYPE, DEFAULT_UPLOADER_NAME
from ..repository import TenantScopedRepository
from ..schemas.document import DocumentUploadRequest
from ..storage.base import ObjectStoreBase, ObjectStoreError
from .compensation import with_compensation

logger = logging.getLogger(__name__)

SIGNED_URL_EXPIRY_SECONDS = 3600
ALL_CATEGORIES = "all"

DATA_URI_PREFIX = re.compile(r"^data:[^;]+;base64,")
UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def strip_data_uri_prefix(file_data: str) -> str:
    return DATA_URI_PREFIX.sub("", file_data, count=1)


def sanitize_file_name(file_name: str) -> str:
    return UNSAFE_FILENAME_CHARS.sub("_", file_name)


def build_file_path(clinic_id: str, file_name: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{clinic_id}/{timestamp_ms}_{sanitize_file_name(file_name)}"


def decode_file_data(file_data: str) -> bytes:
    """Decode a base64 payload, with or without a ``data:<mime>;base64,`` prefix."""
    encoded = "".join(strip_data_uri_prefix(file_data).split())
    encoded += "=" * (-len(encoded) % 4)
    try:
        return base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise ValidationError("fileData is not valid base64") from e


class DocumentService:
    """Clinic document storage: blob in the object store, metadata in ``clinic_documents``."""

    def __init__(self, db: Session, store: ObjectStoreBase):
        self.db = db
        self.store = store

    def _documents(self, clinic_id: str) -> TenantScopedRepository[ClinicDocument]:
        return TenantScopedRepository(self.db, ClinicDocument, clinic_id)

    def list_documents(self, clinic_id: str, category: Optional[str] = None) -> List[ClinicDocument]:
        query = self._documents(clinic_id).query()
        if category and category != ALL_CATEGORIES:
            query = query.filter(ClinicDocument.category == category)
        try:
            return query.order_by(ClinicDocument.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list documents for clinic {clinic_id}: {e}")
            raise StoreError(str(e)) from e

    def get_document(self, clinic_id: str, document_id: str) -> ClinicDocument:
        try:
            document = self._documents(clinic_id).get(document_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch document {document_id} for clinic {clinic_id}: {e}")
            raise StoreError(str(e)) from e
        if not document:
            raise NotFoundError("Document not found")
        return document

    def upload_document(self, clinic_id: str, request: DocumentUploadRequest) -> ClinicDocument:
        if not request.name or not request.file_name or not request.file_data:
            raise ValidationError("Missing required fields: name, fileName, fileData")

        content = decode_file_data(request.file_data)
        file_path = build_file_path(clinic_id, request.file_name)
        content_type = request.file_type or DEFAULT_CONTENT_TYPE

        try:
            self.store.upload(file_path, content, content_type=content_type, upsert=False)
        except ObjectStoreError as e:
            logger.error(f"Storage upload error for {file_path}: {e}")
            raise UploadError(f"Failed to upload file: {e}") from e

        documents = self._documents(clinic_id)

        def insert_metadata() -> ClinicDocument:
            try:
                return documents.add(
                    name=request.name,
                    file_name=request.file_name,
                    file_path=file_path,
                    file_size=request.file_size or len(content),
                    file_type=content_type,
                    category=request.category or DocumentCategory.OTHER.value,
                    uploaded_by=request.uploaded_by or None,
                    uploaded_by_name=request.uploaded_by_name or DEFAULT_UPLOADER_NAME,
                )
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Metadata insert failed for {file_path}: {e}")
                raise PersistenceError(str(e)) from e

        def remove_orphan_blob() -> None:
            logger.warning(f"Removing orphaned upload {file_path} after failed metadata insert")
            self.store.remove([file_path])

        document = with_compensation(insert_metadata, remove_orphan_blob)
        logger.info(f"Uploaded document {document.id} for clinic {clinic_id} at {file_path} ({document.file_size} bytes)")
        return document

    def get_download_url(self, clinic_id: str, document_id: str) -> dict:
        document = self.get_document(clinic_id, document_id)
        try:
            signed_url = self.store.create_signed_url(document.file_path, SIGNED_URL_EXPIRY_SECONDS)
        except ObjectStoreError as e:
            logger.error(f"Failed to sign download URL for {document.file_path}: {e}")
            raise StoreError(str(e)) from e
        return {"downloadUrl": signed_url, "fileName": document.file_name}

    def delete_document(self, clinic_id: str, document_id: str) -> None:
        document = self.get_document(clinic_id, document_id)
        file_path = document.file_path

        try:
            self.store.remove([file_path])
        except ObjectStoreError as e:
            # the metadata row is the system of record; carry on
            logger.error(f"Storage delete error for {file_path}: {e}")

        try:
            self._documents(clinic_id).delete(document_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete document {document_id} for clinic {clinic_id}: {e}")
            raise PersistenceError(str(e)) from e

        logger.info(f"Deleted document {document_id} for clinic {clinic_id}")
