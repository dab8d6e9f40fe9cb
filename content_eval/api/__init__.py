"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from content_eval.api import app

    uvicorn content_eval.api:app --reload
"""

from content_eval.api.app import app

__all__ = ["app"]
