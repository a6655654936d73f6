from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.request_logging import REQUEST_ID_HEADER
from app.core.settings import get_settings


def add_cors_middleware(app: FastAPI) -> None:
    """Allow the configured web clients to call the API with bearer tokens."""
    origins = get_settings().cors_origins_list

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
