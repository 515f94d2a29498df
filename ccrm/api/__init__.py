"""
API module for the REST adapter.
"""

from .rest_api import CCRMRestAPI

__all__ = [
    "CCRMRestAPI",
]
