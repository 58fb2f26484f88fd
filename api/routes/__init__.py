"""
API Routes for the lead qualification service.
"""

from . import qualification, admin

__all__ = ["qualification", "admin"]
