import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from app.core.settings import get_settings

SESSION_KEY = "console_operator"


class AdminAuth(AuthenticationBackend):
    """Back-office console login against the configured operator credentials.

    This is separate from Firebase auth: the console is an internal tool and
    its operator is not a row in the users table.
    """

    def __init__(self) -> None:
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username", form.get("email", ""))).strip()
        password = str(form.get("password", ""))

        settings = get_settings()
        ok = secrets.compare_digest(
            username, settings.admin_username
        ) and secrets.compare_digest(password, settings.admin_password)
        if ok:
            request.session[SESSION_KEY] = username
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get(SESSION_KEY))
