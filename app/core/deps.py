"""Centralized dependency type aliases for FastAPI routes.

Import shared dependencies from this module:
    from app.core.deps import SessionDep, SettingsDep
Auth-related aliases live in app.auth.dependencies.
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.settings import Settings, get_settings
from app.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
