"""Firebase Authentication Service.

This module provides a thin abstraction over the Firebase Admin SDK for the
operations the backend needs: verifying ID tokens and looking up provider
user records.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol

from firebase_admin import auth as firebase_admin_auth
from firebase_admin.exceptions import FirebaseError

from app.auth.exceptions import InvalidTokenError
from app.core.exceptions import ProviderError
from app.user.exceptions import UserNotFoundError


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity asserted by a verified Firebase ID token."""

    uid: str
    email: str | None = None
    email_verified: bool = False
    name: str | None = None
    picture: str | None = None


@dataclass(frozen=True)
class FirebaseUserRecord:
    """Represents full Firebase user record data."""

    uid: str
    email: str | None = None
    email_verified: bool = False
    display_name: str | None = None


class FirebaseAuthServiceProtocol(Protocol):
    """Protocol for Firebase authentication operations.

    Enables dependency inversion - code depends on this protocol,
    not the concrete implementation.
    """

    def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        """Verify ID token and return the asserted identity."""
        ...

    def get_user_by_email(self, email: str) -> FirebaseUserRecord:
        """Get Firebase user record by email."""
        ...


class FirebaseAuthService:
    """Firebase Authentication Service implementation.

    Requires the Firebase Admin SDK to be initialized (see
    app.core.firebase.init_firebase).
    """

    @staticmethod
    def _extract_identity(decoded: dict[str, Any]) -> VerifiedIdentity:
        """Build a VerifiedIdentity from decoded token claims.

        Raises:
            InvalidTokenError: If uid is missing
        """
        uid = decoded.get("uid") or decoded.get("sub")
        if not uid:
            raise InvalidTokenError("Invalid token: missing uid")

        email = decoded.get("email")
        return VerifiedIdentity(
            uid=uid,
            email=email.lower() if email else None,
            email_verified=bool(decoded.get("email_verified", False)),
            name=decoded.get("name"),
            picture=decoded.get("picture"),
        )

    def verify_id_token(self, id_token: str) -> VerifiedIdentity:
        """Verify ID token and return the asserted identity.

        Args:
            id_token: Firebase ID token

        Returns:
            VerifiedIdentity with uid, email and profile claims

        Raises:
            InvalidTokenError: If the token is malformed, expired or revoked
        """
        try:
            decoded = firebase_admin_auth.verify_id_token(id_token)
        except (ValueError, FirebaseError) as e:
            raise InvalidTokenError() from e
        return self._extract_identity(decoded)

    def get_user_by_email(self, email: str) -> FirebaseUserRecord:
        """Get Firebase user record by email.

        Raises:
            UserNotFoundError: If no Firebase user has this email
            ProviderError: For other Firebase errors
        """
        try:
            user = firebase_admin_auth.get_user_by_email(email)
        except firebase_admin_auth.UserNotFoundError as e:
            raise UserNotFoundError("Firebase user not found") from e
        except (ValueError, FirebaseError) as e:
            raise ProviderError("Failed to get Firebase user") from e
        return FirebaseUserRecord(
            uid=user.uid,
            email=user.email,
            email_verified=user.email_verified,
            display_name=user.display_name,
        )


@lru_cache
def get_firebase_auth_service() -> FirebaseAuthService:
    """Get cached Firebase Auth Service instance.

    The service is cached for the application lifetime since
    its configuration doesn't change at runtime.
    """
    return FirebaseAuthService()
