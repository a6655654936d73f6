"""Auth domain dependencies.

Authentication dependencies for FastAPI routes. The guard chain is:
verify bearer token -> load account -> require active -> require admin ->
require super admin. Each step is a dependency building on the previous one.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.exceptions import (
    AdminRequiredError,
    InvalidCredentialsError,
    SuperAdminRequiredError,
    UnregisteredAccountError,
)
from app.auth.resolution import get_account_by_external_id
from app.auth.service import (
    FirebaseAuthService,
    VerifiedIdentity,
    get_firebase_auth_service,
)
from app.core.deps import SessionDep
from app.user.exceptions import UserInactiveError
from app.user.models import User, UserRole

security = HTTPBearer(auto_error=False)

FirebaseAuthDep = Annotated[FirebaseAuthService, Depends(get_firebase_auth_service)]


def verify_bearer_token(
    firebase_auth: FirebaseAuthDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(security)
    ] = None,
) -> VerifiedIdentity:
    """Verify the bearer ID token and return the asserted identity.

    Raises:
        InvalidCredentialsError: If no bearer token was sent
        InvalidTokenError: If the token does not verify
    """
    if credentials is None or not credentials.credentials:
        raise InvalidCredentialsError()
    return firebase_auth.verify_id_token(credentials.credentials)


IdentityDep = Annotated[VerifiedIdentity, Depends(verify_bearer_token)]


def get_current_account(identity: IdentityDep, session: SessionDep) -> User:
    """Load the local account bound to the verified identity, in any status.

    Raises:
        UnregisteredAccountError: If no account is bound to the identity
    """
    user = get_account_by_external_id(session, identity.uid)
    if user is None:
        raise UnregisteredAccountError()
    return user


def get_current_user(user: Annotated[User, Depends(get_current_account)]) -> User:
    """Return the current account, requiring it to be active.

    Raises:
        UserInactiveError: If the account is pending, suspended or deleted
    """
    if not user.is_active:
        raise UserInactiveError()
    return user


# Type aliases for dependency injection
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_auth(_user: CurrentUserDep) -> None:
    """Require an active account without injecting it into the path operation.

    Use as a router-level dependency when all routes require auth:
        router = APIRouter(dependencies=[Depends(require_auth)])

    For endpoints that need the user object, still use CurrentUserDep directly.
    FastAPI caches dependencies, so there's no duplicate auth overhead.
    """


def get_admin_user(user: CurrentUserDep) -> User:
    """Verify the current user is an active admin (any level).

    Raises:
        AdminRequiredError: If user is not an admin
    """
    if user.role != UserRole.admin:
        raise AdminRequiredError()
    return user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def require_admin(_user: AdminUserDep) -> None:
    """Require admin privileges without injecting user into path operation.

    Use as a router-level or endpoint-level dependency:
        router = APIRouter(dependencies=[Depends(require_admin)])
        @router.get("/", dependencies=[Depends(require_admin)])
    """


def get_super_admin_user(user: AdminUserDep) -> User:
    """Verify the current user is an active super admin.

    Raises:
        SuperAdminRequiredError: If the admin is not a super admin
    """
    if not user.is_super_admin:
        raise SuperAdminRequiredError()
    return user


SuperAdminUserDep = Annotated[User, Depends(get_super_admin_user)]
