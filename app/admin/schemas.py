"""Admin domain schemas.

Request schemas for provisioning factory and admin accounts and for status
changes, plus the paginated user listing response.
"""

from pydantic import BaseModel, EmailStr, Field

from app.user.models import AdminLevel, AdminPermission, UserStatus
from app.user.schemas import PHONE_PATTERN, AccountRead


class FactoryLocationCreate(BaseModel):
    city: str = Field(min_length=2, max_length=100)
    region: str = Field(min_length=2, max_length=100)
    country: str = Field(min_length=2, max_length=3)
    full_address: str | None = Field(default=None, max_length=500)
    postal_code: str | None = Field(default=None, max_length=20)


class FactoryCapabilitiesCreate(BaseModel):
    max_capacity_per_day: int | None = Field(default=None, ge=1)
    print_methods: list[str] | None = None
    material_types: list[str] | None = None
    product_categories: list[str] | None = None


class FactoryCreate(BaseModel):
    """Request schema for provisioning a factory account."""

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    business_name: str = Field(min_length=2, max_length=200)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    business_description: str | None = Field(default=None, max_length=1000)
    location: FactoryLocationCreate
    capabilities: FactoryCapabilitiesCreate | None = None
    business_registration_number: str | None = Field(default=None, max_length=50)
    tax_id: str | None = Field(default=None, max_length=50)


class AdminCreate(BaseModel):
    """Request schema for provisioning an admin account.

    permissions defaults to the admin_role's standard set; employee_id is
    generated when omitted.
    """

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    admin_role: AdminLevel
    permissions: list[AdminPermission] | None = None
    department: str | None = Field(default=None, max_length=100)
    job_title: str | None = Field(default=None, max_length=100)
    employee_id: str | None = Field(default=None, min_length=1, max_length=50)
    notes: str | None = Field(default=None, max_length=500)


class UserStatusUpdate(BaseModel):
    """Request schema for changing an account's status."""

    status: UserStatus
    reason: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=1000)


class UserListResponse(BaseModel):
    """One page of accounts, newest first."""

    users: list[AccountRead]
    total: int
    page: int
    limit: int
    total_pages: int
