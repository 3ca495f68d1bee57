"""Data models for session state and fetched pages."""

from .token import SessionToken
from .result import FetchResult

__all__ = ["SessionToken", "FetchResult"]
