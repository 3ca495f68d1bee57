"""Scraper module for building requests and fetching pages."""

from .request_builder import HttpMethod, ParamEncoding, build_request, build_url
from .page_fetcher import PageFetcher

__all__ = ["HttpMethod", "ParamEncoding", "build_request", "build_url", "PageFetcher"]
