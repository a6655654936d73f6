"""Role-scoped self-service profile operations.

Only customers and creators have an editable profile. Profile completion is a
derived, informational percentage recomputed whenever profile fields change.
"""

import logging
import math
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session

from app.core.exception_handlers import format_validation_errors
from app.core.exceptions import ValidationError
from app.user.exceptions import ProfileRoleError
from app.user.models import User, UserRole
from app.user.schemas import (
    CreatorProfileUpdate,
    CreatorRead,
    CustomerProfileUpdate,
    CustomerRead,
    to_account_read,
)

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _filled(value: Any) -> bool:
    return value is not None and value != "" and value != {} and value != []


def compute_profile_completion(user: User) -> int:
    """Percentage of profile fields filled in, for customers and creators.

    Customers: five equally weighted fields. Creators: required fields are
    worth 70%, optional ones 30%. Other roles always score 0.
    """
    match user.role:
        case UserRole.customer:
            fields = [
                user.display_name,
                user.email,
                user.phone,
                user.profile_image_url,
                user.preferred_language,
            ]
            filled = sum(1 for value in fields if _filled(value))
            return _round_half_up(filled / len(fields) * 100)
        case UserRole.creator:
            required = [user.display_name, user.email, user.business_name]
            optional = [
                user.phone,
                user.profile_image_url,
                user.business_description,
                user.social_media_links,
            ]
            required_score = sum(1 for v in required if _filled(v)) / len(required)
            optional_score = sum(1 for v in optional if _filled(v)) / len(optional)
            return _round_half_up(required_score * 70 + optional_score * 30)
        case _:
            return 0


def refresh_profile_completion(user: User) -> None:
    user.profile_completion = compute_profile_completion(user)


def get_profile(user: User) -> CustomerRead | CreatorRead:
    """Return the caller's role-shaped profile.

    Raises:
        ProfileRoleError: If the role has no self-service profile
    """
    if user.role not in (UserRole.customer, UserRole.creator):
        raise ProfileRoleError()
    profile = to_account_read(user)
    assert isinstance(profile, CustomerRead | CreatorRead)
    return profile


def _parse_update(
    role: UserRole, payload: dict[str, Any]
) -> CustomerProfileUpdate | CreatorProfileUpdate:
    schema: type[CustomerProfileUpdate] | type[CreatorProfileUpdate]
    match role:
        case UserRole.customer:
            schema = CustomerProfileUpdate
        case UserRole.creator:
            schema = CreatorProfileUpdate
        case _:
            raise ProfileRoleError()
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors())) from e


def update_profile(
    session: Session, user: User, payload: dict[str, Any]
) -> CustomerRead | CreatorRead:
    """Apply a partial profile update validated against the caller's role.

    Fields belonging to another role are rejected rather than ignored.

    Raises:
        ProfileRoleError: If the role has no self-service profile
        ValidationError: If the payload does not fit the role's schema
    """
    update = _parse_update(user.role, payload)
    changes = update.model_dump(exclude_unset=True, exclude={"social_media_links"})

    social_links = getattr(update, "social_media_links", None)
    if social_links is not None:
        merged = dict(user.social_media_links or {})
        merged.update(social_links.model_dump(mode="json", exclude_none=True))
        user.social_media_links = merged

    for key, value in changes.items():
        setattr(user, key, value)

    refresh_profile_completion(user)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Profile updated for user %s", user.id)
    return get_profile(user)


def set_profile_image(session: Session, user: User, url: str | None) -> User:
    """Store (or clear) the account's profile image URL."""
    user.profile_image_url = url
    refresh_profile_completion(user)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
