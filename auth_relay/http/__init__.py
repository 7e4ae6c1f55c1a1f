"""
HTTP adapters for the auth relay.
"""

from .adapter import HTTPAdapter
from .requests_adapter import RequestsAdapter

__all__ = ["HTTPAdapter", "RequestsAdapter"]
