"""Uploads domain router.

Generic file uploads to Cloud Storage for authenticated users.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.auth.dependencies import CurrentUserDep
from app.core.constants import CommonResponses, Routes
from app.core.deps import SettingsDep
from app.uploads.schemas import UploadResponse
from app.uploads.service import (
    FILE_CONTENT_TYPES,
    build_object_path,
    store_upload,
    validate_upload,
)
from app.uploads.storage import StorageService, get_storage_service

StorageDep = Annotated[StorageService, Depends(get_storage_service)]

router = APIRouter(
    prefix=Routes.UPLOADS.prefix,
    tags=[Routes.UPLOADS.tag],
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.post(
    "/file",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    user: CurrentUserDep,
    storage: StorageDep,
    settings: SettingsDep,
    file: Annotated[UploadFile, File()],
    folder: Annotated[str, Form(min_length=1, max_length=100)],
    custom_file_name: Annotated[str | None, Form()] = None,
    make_public: Annotated[bool, Form()] = True,
    cache_control: Annotated[str | None, Form(max_length=200)] = None,
):
    """Upload a file under ``{folder}/{user id}/``.

    Images (jpeg, png, webp, gif) and PDFs up to the configured size limit.
    """
    extension = validate_upload(file, FILE_CONTENT_TYPES, settings.max_upload_bytes)
    path = build_object_path(folder, user.id, extension, custom_file_name)
    result = await store_upload(
        storage, file, path, public=make_public, cache_control=cache_control
    )
    return UploadResponse(
        url=result.url, file_name=result.file_name, bucket=result.bucket
    )
