"""User domain router.

Self-service profile routes for the current account.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, File, UploadFile

from app.auth.dependencies import CurrentUserDep, require_auth
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep, SettingsDep
from app.uploads.router import StorageDep
from app.uploads.service import (
    IMAGE_CONTENT_TYPES,
    PROFILE_PICTURE_CACHE_CONTROL,
    PROFILE_PICTURE_FOLDER,
    build_object_path,
    store_upload,
    validate_upload,
)
from app.user.profile import get_profile, set_profile_image, update_profile
from app.user.schemas import AccountRead, ProfileRead, to_account_read

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("/profile", response_model=ProfileRead)
async def read_profile(user: CurrentUserDep):
    """Get the current customer or creator profile."""
    return get_profile(user)


@router.put("/profile", response_model=ProfileRead)
async def write_profile(
    user: CurrentUserDep,
    session: SessionDep,
    payload: Annotated[dict[str, Any], Body()],
):
    """Update the current profile.

    Accepted fields depend on the caller's role. Customers may change
    display_name, phone and preferred_language; creators display_name, phone,
    business_name, business_description and social_media_links. Any other
    field is rejected.
    """
    return update_profile(session, user, payload)


@router.post("/profile/picture", response_model=AccountRead)
async def upload_profile_picture(
    user: CurrentUserDep,
    session: SessionDep,
    settings: SettingsDep,
    storage: StorageDep,
    file: Annotated[UploadFile, File()],
):
    """Upload a new profile picture, replacing (and deleting) the previous one."""
    extension = validate_upload(file, IMAGE_CONTENT_TYPES, settings.max_upload_bytes)
    path = build_object_path(PROFILE_PICTURE_FOLDER, user.id, extension)
    result = await store_upload(
        storage, file, path, cache_control=PROFILE_PICTURE_CACHE_CONTROL
    )

    previous_url = user.profile_image_url
    set_profile_image(session, user, result.url)
    if previous_url and previous_url != result.url:
        storage.delete_by_url(previous_url)
    logger.info("Profile picture updated for user %s", user.id)
    return to_account_read(user)


@router.delete("/profile/picture", response_model=AccountRead)
async def delete_profile_picture(
    user: CurrentUserDep,
    session: SessionDep,
    storage: StorageDep,
):
    """Remove the current profile picture."""
    previous_url = user.profile_image_url
    set_profile_image(session, user, None)
    storage.delete_by_url(previous_url)
    return to_account_read(user)
