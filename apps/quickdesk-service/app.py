"""
App assembly entry point.

Re-exports the FastAPI `app` from `quickdesk.api.main` so servers can
target `app:app` from the service directory.
"""

from quickdesk.api.main import app  # noqa: F401
