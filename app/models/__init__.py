"""
Table model registry.

Alembic autogenerate compares against `SQLModel.metadata`, which only knows
the tables whose modules have been imported. `app/alembic/env.py` imports this
package, so every `table=True` model must be imported here.
"""

from app.catalog.models import BaseProduct, PrintableArea
from app.user.models import User

__all__ = ["BaseProduct", "PrintableArea", "User"]
