"""
API Module for the lead qualification service.

FastAPI application with routes for:
- Lead scoring and per-negotiation qualification records
- Admin management of the target tier
"""

from .main import create_app, app

__all__ = ["create_app", "app"]
