"""Session-aware HTTP scraping client."""

from .target import TargetServer
from .models import FetchResult, SessionToken
from .scraper.request_builder import HttpMethod

__version__ = "1.0.0"

__all__ = ["TargetServer", "FetchResult", "SessionToken", "HttpMethod"]
