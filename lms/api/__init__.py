"""
API module for the REST boundary.
"""

from .rest_api import LMSRestAPI

__all__ = [
    "LMSRestAPI",
]
