from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class DocumentUploadRequest(BaseModel):
    """Upload body as sent by the dashboard (camelCase keys).

    Every field is optional at the schema level; the service reports
    missing required fields as a 400 with its own message.
    """
    name: Optional[str] = None
    file_name: Optional[str] = Field(None, alias="fileName")
    file_data: Optional[str] = Field(None, alias="fileData")
    file_type: Optional[str] = Field(None, alias="fileType")
    file_size: Optional[int] = Field(None, alias="fileSize")
    category: Optional[str] = None
    uploaded_by: Optional[str] = Field(None, alias="uploadedBy")
    uploaded_by_name: Optional[str] = Field(None, alias="uploadedByName")

    class Config:
        populate_by_name = True


class DocumentResponse(BaseModel):
    id: str
    clinic_id: str
    name: str
    file_name: str
    file_path: str
    file_size: int
    file_type: str
    category: str
    uploaded_by: Optional[str] = None
    uploaded_by_name: str
    created_at: datetime

    class Config:
        from_attributes = True


class DocumentEnvelope(BaseModel):
    success: bool = True
    document: DocumentResponse


class DocumentListEnvelope(BaseModel):
    success: bool = True
    documents: List[DocumentResponse]


class DownloadUrlResponse(BaseModel):
    success: bool = True
    downloadUrl: str
    fileName: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str
