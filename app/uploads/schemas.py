"""Uploads domain schemas."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Response schema for a stored file."""

    url: str
    file_name: str
    bucket: str
