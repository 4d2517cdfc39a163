"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import health, report

__all__ = ["health", "report"]
