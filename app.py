"""
App assembly entry point.

Re-exports the FastAPI `app` from `portfolio.api.main`; run with
``uvicorn app:app``.
"""

from portfolio.api.main import app  # noqa: F401
