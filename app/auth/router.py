"""Auth domain router.

Authentication routes for token verification, the current account, and
claiming admin-provisioned invitations. Thin HTTP handlers that delegate to
app.auth.resolution for business logic.
"""

from fastapi import APIRouter

from app.auth.dependencies import CurrentUserDep, FirebaseAuthDep
from app.auth.resolution import complete_pending_registration, resolve_account
from app.auth.schemas import CompleteRegistrationRequest, VerifyTokenRequest
from app.core.constants import CommonResponses, Routes
from app.core.deps import SessionDep
from app.user.schemas import AccountRead, to_account_read

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.UNAUTHORIZED},
)


@router.post(
    "/verify",
    response_model=AccountRead,
    responses={**CommonResponses.FORBIDDEN, **CommonResponses.CONFLICT},
)
async def verify_token(
    body: VerifyTokenRequest,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
):
    """Verify a Firebase ID token and return the synced local account.

    Existing accounts are refreshed from the token, pending invitations for
    the token's verified email are claimed, and anyone else gets a new
    customer (or creator, when requested) account.
    """
    identity = firebase_auth.verify_id_token(body.token)
    user = resolve_account(session, identity, body.role)
    return to_account_read(user)


@router.get(
    "/me",
    response_model=AccountRead,
    responses={**CommonResponses.FORBIDDEN},
)
async def get_me(user: CurrentUserDep):
    """Get the current authenticated account."""
    return to_account_read(user)


@router.post(
    "/complete-registration",
    response_model=AccountRead,
    responses={
        **CommonResponses.FORBIDDEN,
        **CommonResponses.NOT_FOUND,
        **CommonResponses.CONFLICT,
    },
)
async def complete_registration(
    body: CompleteRegistrationRequest,
    session: SessionDep,
    firebase_auth: FirebaseAuthDep,
):
    """Claim the pending invitation for the token's email.

    The submitted email must match the token's email, and the identity must
    not be bound to an account yet.
    """
    identity = firebase_auth.verify_id_token(body.token)
    user = complete_pending_registration(session, identity, body.email)
    return to_account_read(user)
