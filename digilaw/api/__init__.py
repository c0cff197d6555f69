"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from digilaw.api import app

    uvicorn digilaw.api:app --reload
"""

from digilaw.api.app import app

__all__ = ["app"]
