"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- external_id (Firebase UID) is internal-only, never exposed in responses
- Read schemas are discriminated on ``role``; each only carries the fields
  that are meaningful for that role
- Profile updates are restricted to the caller's own role fields and forbid
  anything else to prevent privilege escalation
"""

import uuid
from datetime import UTC, datetime
from typing import Annotated, Any, Literal, TypeVar, assert_never

from pydantic import ConfigDict, EmailStr, Field, HttpUrl, field_serializer
from sqlmodel import SQLModel

from app.user.models import (
    AdminLevel,
    PreferredLanguage,
    User,
    UserRole,
    UserStatus,
    VerificationStatus,
)

PHONE_PATTERN = r"^\+[1-9]\d{7,14}$"


def serialize_utc(value: datetime) -> str:
    """Format datetime as ISO 8601 string in UTC.

    Converts datetime to UTC timezone and formats with Z suffix
    (e.g. 2026-01-19T12:34:56Z).
    """
    # Naive datetimes come from TimestampMixin and are already UTC
    if value.tzinfo is not None:
        utc_value = value.astimezone(UTC)
    else:
        utc_value = value.replace(tzinfo=UTC)

    return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


# JSON column shapes


class ShippingAddress(SQLModel):
    label: str | None = Field(default=None, max_length=50)
    recipient_name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    address_line1: str = Field(min_length=1, max_length=200)
    address_line2: str | None = Field(default=None, max_length=200)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str = Field(min_length=2, max_length=100)
    is_default: bool = False


class MarketingPreferences(SQLModel):
    email_marketing: bool = False
    sms_marketing: bool = False
    push_notifications: bool = False
    product_recommendations: bool = False


class SocialMediaLinks(SQLModel):
    model_config = ConfigDict(extra="forbid")

    instagram: HttpUrl | None = None
    facebook: HttpUrl | None = None
    twitter: HttpUrl | None = None
    tiktok: HttpUrl | None = None
    youtube: HttpUrl | None = None
    website: HttpUrl | None = None


class FactoryLocation(SQLModel):
    address_line1: str
    address_line2: str | None = None
    city: str
    region: str
    postal_code: str | None = None
    country: str
    latitude: float | None = None
    longitude: float | None = None


class ManufacturingCapabilities(SQLModel):
    printing_methods: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    product_types: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    finishing_options: list[str] = Field(default_factory=list)
    max_capacity_per_day: int | None = None


# Read schemas


class AccountBase(SQLModel):
    """Fields safe for all API responses, shared by every role.

    This class should ONLY contain fields that are safe to expose
    to any user. Never add internal fields like external_id here.
    """

    id: uuid.UUID
    email: EmailStr
    display_name: str | None
    status: UserStatus
    email_verified: bool
    profile_image_url: str | None
    last_login_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        return serialize_utc(value)

    @field_serializer("last_login_at")
    def serialize_last_login(self, value: datetime | None) -> str | None:
        return serialize_utc(value) if value is not None else None


class CustomerRead(AccountBase):
    role: Literal[UserRole.customer]
    phone: str | None
    preferred_language: PreferredLanguage | None
    shipping_addresses: list[ShippingAddress] = []
    marketing_preferences: MarketingPreferences = MarketingPreferences()
    profile_completion: int


class CreatorRead(AccountBase):
    role: Literal[UserRole.creator]
    phone: str | None
    business_name: str | None
    business_description: str | None
    social_media_links: dict[str, Any] = {}
    verification_status: VerificationStatus | None
    profile_completion: int


class FactoryRead(AccountBase):
    role: Literal[UserRole.factory]
    company_name: str | None
    company_description: str | None
    contact_person: str | None
    phone: str | None
    location: FactoryLocation | None
    capabilities: ManufacturingCapabilities | None
    business_license: str | None
    tax_id: str | None
    verification_status: VerificationStatus | None


class AdminRead(AccountBase):
    role: Literal[UserRole.admin]
    employee_id: str | None
    admin_level: AdminLevel | None
    permissions: list[str] = []
    department: str | None
    position: str | None
    phone: str | None


AccountRead = Annotated[
    CustomerRead | CreatorRead | FactoryRead | AdminRead,
    Field(discriminator="role"),
]
ProfileRead = Annotated[CustomerRead | CreatorRead, Field(discriminator="role")]


T = TypeVar("T")


def _json_or_empty(value: T | None, empty: T) -> T:
    return value if value is not None else empty


def to_account_read(user: User) -> CustomerRead | CreatorRead | FactoryRead | AdminRead:
    """Project a stored account onto the read schema for its role."""
    common = {name: getattr(user, name) for name in AccountBase.model_fields}
    match user.role:
        case UserRole.customer:
            return CustomerRead(
                **common,
                role=UserRole.customer,
                phone=user.phone,
                preferred_language=user.preferred_language,
                shipping_addresses=_json_or_empty(user.shipping_addresses, []),
                marketing_preferences=_json_or_empty(user.marketing_preferences, {}),
                profile_completion=user.profile_completion,
            )
        case UserRole.creator:
            return CreatorRead(
                **common,
                role=UserRole.creator,
                phone=user.phone,
                business_name=user.business_name,
                business_description=user.business_description,
                social_media_links=_json_or_empty(user.social_media_links, {}),
                verification_status=user.verification_status,
                profile_completion=user.profile_completion,
            )
        case UserRole.factory:
            return FactoryRead(
                **common,
                role=UserRole.factory,
                company_name=user.company_name,
                company_description=user.company_description,
                contact_person=user.contact_person,
                phone=user.phone,
                location=user.location,
                capabilities=user.capabilities,
                business_license=user.business_license,
                tax_id=user.tax_id,
                verification_status=user.verification_status,
            )
        case UserRole.admin:
            return AdminRead(
                **common,
                role=UserRole.admin,
                employee_id=user.employee_id,
                admin_level=user.admin_level,
                permissions=_json_or_empty(user.permissions, []),
                department=user.department,
                position=user.position,
                phone=user.phone,
            )
        case _:
            assert_never(user.role)


# Profile updates


class CustomerProfileUpdate(SQLModel):
    """Fields a customer may change on their own profile."""

    model_config = ConfigDict(extra="forbid")

    display_name: str | None = Field(default=None, min_length=2, max_length=100)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    preferred_language: PreferredLanguage | None = None


class CreatorProfileUpdate(SQLModel):
    """Fields a creator may change on their own profile.

    social_media_links is merged into the stored links, key by key.
    """

    model_config = ConfigDict(extra="forbid")

    display_name: str | None = Field(default=None, min_length=2, max_length=100)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    business_name: str | None = Field(default=None, min_length=2, max_length=150)
    business_description: str | None = Field(
        default=None, min_length=10, max_length=500
    )
    social_media_links: SocialMediaLinks | None = None
