"""Route layout, shared OpenAPI responses and email template locations.

Routers read their prefix and tag from ``Routes`` so the URL map of the
API is defined in one place.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


@dataclass(frozen=True)
class RouteConfig:
    prefix: str
    tag: str


class Routes:
    """Prefix and OpenAPI tag per domain router."""

    HEALTH = RouteConfig(prefix="/health", tag="health")
    AUTH = RouteConfig(prefix="/auth", tag="auth")
    USER = RouteConfig(prefix="/users", tag="users")
    ADMIN = RouteConfig(prefix="/admin", tag="admin")
    CATALOG = RouteConfig(prefix="/catalog", tag="catalog")
    UPLOADS = RouteConfig(prefix="/uploads", tag="uploads")


# Back-office console mount point (kept off /admin, which hosts the REST API)
CONSOLE_BASE_URL = "/console"


class CommonResponses:
    """Error responses documented on routers and endpoints.

    Every error body has the shape ``{"type": ..., "message": ...}``.
    """

    BAD_REQUEST: dict[int, dict[str, Any]] = {
        400: {"description": "Malformed input or a rejected business rule"}
    }
    UNAUTHORIZED: dict[int, dict[str, Any]] = {
        401: {"description": "Missing, invalid or unlinked bearer token"}
    }
    FORBIDDEN: dict[int, dict[str, Any]] = {
        403: {"description": "Account is not active or lacks the required role"}
    }
    NOT_FOUND: dict[int, dict[str, Any]] = {404: {"description": "Entity not found"}}
    CONFLICT: dict[int, dict[str, Any]] = {
        409: {"description": "Email, title/brand or other unique value taken"}
    }


# Source templates live in templates/emails; scripts/compile_emails.py writes
# the inlined, minified copies that are rendered at runtime.
EmailTemplatesDir = Path(__file__).parent.parent / "templates" / "emails"
CompiledEmailTemplatesDir = EmailTemplatesDir / "compiled"

JinjaCompiledEmailTemplatesEnv = Environment(
    loader=FileSystemLoader(str(CompiledEmailTemplatesDir)),
    autoescape=select_autoescape(["html", "xml"]),
)
