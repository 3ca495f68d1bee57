"""Utility functions and configurations."""

from .logging_config import setup_logging, get_logger
from .exceptions import (
    ScraperException,
    RequestBuildError,
    InvalidURLError,
    TransportError,
    ReadError,
    AuthenticationError,
    NoCredentialsError,
    ReloginError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "ScraperException",
    "RequestBuildError",
    "InvalidURLError",
    "TransportError",
    "ReadError",
    "AuthenticationError",
    "NoCredentialsError",
    "ReloginError",
]
