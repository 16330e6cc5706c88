"""
HTTP API for sentibench.
"""

from .main import app

__all__ = ["app"]
