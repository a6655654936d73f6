import inspect
import os
import uuid
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

# Settings are read at import time (engine, console auth); provide test values
# before anything from app is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET_KEY", "test-session-secret")
os.environ.setdefault("ADMIN_USERNAME", "console-admin")
os.environ.setdefault("ADMIN_PASSWORD", "console-password")
os.environ.setdefault("RESEND_API_KEY", "")

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402, F401
from app.auth.exceptions import InvalidTokenError  # noqa: E402
from app.auth.service import (  # noqa: E402
    FirebaseAuthService,
    VerifiedIdentity,
    get_firebase_auth_service,
)
from app.db.engine import enable_sqlite_foreign_keys, get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.uploads.storage import (  # noqa: E402
    StorageService,
    UploadResult,
    get_storage_service,
)
from app.user.models import (  # noqa: E402
    AdminLevel,
    User,
    UserRole,
    UserStatus,
    new_account,
)

TEST_BUCKET = "labsy-test.appspot.com"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


@pytest.fixture(name="session")
def session_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


# --- Accounts ---


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session) -> Callable[..., User]:
    """Factory that persists an account with its role's defaults."""

    def _make(
        role: UserRole = UserRole.customer,
        *,
        email: str | None = None,
        status: UserStatus = UserStatus.active,
        external_id: str | None = None,
        **fields: Any,
    ) -> User:
        suffix = uuid.uuid4().hex[:8]
        if external_id is None:
            external_id = "" if status == UserStatus.pending else f"uid-{suffix}"
        user = new_account(
            role,
            email=email or f"{role.value}-{suffix}@example.com",
            external_id=external_id,
            status=status,
            email_verified=True,
            **fields,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture(name="customer")
def customer_fixture(make_user) -> User:
    return make_user(UserRole.customer, display_name="Casey Customer")


@pytest.fixture(name="creator")
def creator_fixture(make_user) -> User:
    return make_user(UserRole.creator, display_name="Cleo Creator")


@pytest.fixture(name="admin_user")
def admin_user_fixture(make_user) -> User:
    return make_user(
        UserRole.admin, display_name="Ada Admin", admin_level=AdminLevel.admin
    )


@pytest.fixture(name="super_admin")
def super_admin_fixture(make_user) -> User:
    return make_user(
        UserRole.admin, display_name="Sam Super", admin_level=AdminLevel.super_admin
    )


# --- External services ---


@pytest.fixture(name="identities")
def identities_fixture() -> dict[str, VerifiedIdentity]:
    """ID token -> identity the mocked Firebase service accepts."""
    return {}


@pytest.fixture(name="mock_firebase_auth")
def mock_firebase_auth_fixture(identities: dict[str, VerifiedIdentity]):
    """Mock FirebaseAuthService that only accepts tokens in ``identities``."""
    mock_service = MagicMock(spec=FirebaseAuthService)

    def verify(token: str) -> VerifiedIdentity:
        if token not in identities:
            raise InvalidTokenError()
        return identities[token]

    mock_service.verify_id_token.side_effect = verify
    return mock_service


@pytest.fixture(name="mock_storage")
def mock_storage_fixture():
    """Mock StorageService that reports uploads under a fixed test bucket."""
    mock_service = MagicMock(spec=StorageService)
    mock_service.bucket_name = TEST_BUCKET

    def upload(_fileobj, path, _content_type, **_kwargs) -> UploadResult:
        return UploadResult(
            url=f"https://storage.googleapis.com/{TEST_BUCKET}/{path}",
            file_name=path,
            bucket=TEST_BUCKET,
        )

    mock_service.upload.side_effect = upload
    return mock_service


@pytest.fixture(name="login")
def login_fixture(
    identities: dict[str, VerifiedIdentity],
) -> Callable[[User], dict[str, str]]:
    """Return bearer headers whose token verifies as ``user``'s identity."""

    def _login(user: User) -> dict[str, str]:
        token = f"token-{user.external_id}"
        identities[token] = VerifiedIdentity(
            uid=user.external_id, email=user.email, email_verified=True
        )
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture(name="client")
def client_fixture(
    session: Session,
    mock_firebase_auth: MagicMock,
    mock_storage: MagicMock,
):
    """Create a test client with overridden dependencies."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_firebase_auth_service] = lambda: mock_firebase_auth
    app.dependency_overrides[get_storage_service] = lambda: mock_storage

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
