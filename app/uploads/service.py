"""Upload validation and object naming."""

import re
import uuid

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.uploads.exceptions import InvalidFileError
from app.uploads.storage import StorageService, UploadResult

IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
FILE_CONTENT_TYPES: dict[str, str] = {
    **IMAGE_CONTENT_TYPES,
    "image/gif": "gif",
    "application/pdf": "pdf",
}

PROFILE_PICTURE_FOLDER = "profiles"
PROFILE_PICTURE_CACHE_CONTROL = "public, max-age=31536000"

FOLDER_PATTERN = r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_-]+)*$"
FILE_NAME_PATTERN = r"^[A-Za-z0-9_-]{1,100}$"


def _file_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    position = file.file.tell()
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(position)
    return size


def validate_upload(
    file: UploadFile, allowed_types: dict[str, str], max_bytes: int
) -> str:
    """Check type and size of an uploaded file and return its extension.

    Raises:
        InvalidFileError: If the file is empty, too large or not allowed
    """
    content_type = (file.content_type or "").lower()
    if content_type not in allowed_types:
        allowed = ", ".join(sorted(allowed_types))
        raise InvalidFileError(f"Invalid file type. Allowed types: {allowed}")

    size = _file_size(file)
    if size == 0:
        raise InvalidFileError("No file provided")
    if size > max_bytes:
        raise InvalidFileError(
            f"File size too large. Maximum size: {max_bytes // (1024 * 1024)}MB"
        )
    return allowed_types[content_type]


def build_object_path(
    folder: str, owner_id: uuid.UUID, extension: str, file_name: str | None = None
) -> str:
    """``{folder}/{owner_id}/{file_name or random}.{extension}``."""
    if not re.fullmatch(FOLDER_PATTERN, folder):
        raise InvalidFileError(
            "Folder may only contain letters, digits, '-', '_' and '/'"
        )
    if file_name is not None and not re.fullmatch(FILE_NAME_PATTERN, file_name):
        raise InvalidFileError(
            "File name may only contain letters, digits, '-' and '_'"
        )
    stem = file_name or uuid.uuid4().hex
    return f"{folder}/{owner_id}/{stem}.{extension}"


async def store_upload(
    storage: StorageService,
    file: UploadFile,
    path: str,
    *,
    public: bool = True,
    cache_control: str | None = None,
) -> UploadResult:
    """Run the blocking upload in a worker thread."""
    return await run_in_threadpool(
        storage.upload,
        file.file,
        path,
        file.content_type or "application/octet-stream",
        public=public,
        cache_control=cache_control,
    )
