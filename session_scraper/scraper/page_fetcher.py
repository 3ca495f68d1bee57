"""Page fetching with periodic relogin for a target server."""

from typing import TYPE_CHECKING, Optional

import requests

from ..config import ReloginFailurePolicy
from ..models.result import FetchResult
from ..utils.logging_config import get_logger
from ..utils.exceptions import (
    ReadError,
    ReloginError,
    ScraperException,
    TransportError,
)
from .request_builder import HttpMethod, Params

if TYPE_CHECKING:
    from ..auth.form_login import FormAuthenticator
    from ..target import TargetServer

logger = get_logger()


class PageFetcher:
    """Fetches pages and keeps the session fresh by relogging in every N fetches."""

    def __init__(self, target: "TargetServer", authenticator: "FormAuthenticator"):
        """
        Initialize page fetcher.

        Args:
            target: Session context to fetch from
            authenticator: Authenticator used for automatic relogin
        """
        self.target = target
        self.authenticator = authenticator

    def fetch(self, path: str, query: Optional[Params] = None) -> FetchResult:
        """
        GET a page and return its body as text.

        Every fetch counts as a connection whether or not it succeeds.
        When the count reaches a multiple of ``connections_per_login`` a
        relogin runs before this method returns. A failed relogin never
        discards a page that was fetched successfully: it is attached to
        the result, or raised with the result attached, depending on the
        target's relogin failure policy. When the fetch itself failed, its
        error propagates with the relogin failure on ``relogin_error``.

        Args:
            path: Page path relative to the host
            query: Query parameters

        Returns:
            FetchResult with the decoded body

        Raises:
            RequestBuildError: If the request cannot be built
            TransportError: If the request fails
            ReadError: If the body cannot be read
            ReloginError: If relogin fails under the ``raise`` policy
        """
        try:
            result = self._get(path, query)
        except Exception as e:
            relogin_error = self.count_connection()
            if relogin_error is not None:
                logger.warning(f"{relogin_error} (after failed fetch of {path})")
                if isinstance(e, ScraperException):
                    e.relogin_error = relogin_error
            raise

        relogin_error = self.count_connection()
        if relogin_error is None:
            return result

        result.relogin_error = relogin_error
        if self.target.relogin_failure is ReloginFailurePolicy.RAISE:
            relogin_error.result = result
            raise relogin_error

        logger.warning(f"{relogin_error}; returning page fetched from {result.url}")
        return result

    def count_connection(self) -> Optional[ReloginError]:
        """
        Record a connection and relogin if the threshold is reached.

        Returns:
            ReloginError if a triggered relogin failed, otherwise None
        """
        connections = self.target.count_connection()
        limit = self.target.connections_per_login

        if limit <= 0 or connections % limit != 0:
            return None

        logger.info(f"Reached {connections} connections (limit {limit}), relogging in")
        try:
            self.authenticator.relogin()
        except ScraperException as e:
            error = ReloginError(
                f"Conditional login failed at {connections} connections "
                f"with limit of {limit}: {e}",
                connections=connections,
                limit=limit,
            )
            error.__cause__ = e
            return error

        return None

    def _get(self, path: str, query: Optional[Params]) -> FetchResult:
        request = self.target.request(HttpMethod.GET, path, query)
        logger.debug(f"Fetching {request.url}")

        try:
            response = self.target.http.send(
                request, allow_redirects=True, stream=True, timeout=self.target.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {request.url}: {e}")
            raise TransportError(f"Unable to make request to {request.url}: {e}") from e

        try:
            # Reads the whole stream
            response.content
        except requests.RequestException as e:
            logger.error(f"Failed to read body from {request.url}: {e}")
            raise ReadError(f"Unable to read body from {request.url}: {e}") from e
        finally:
            response.close()

        return FetchResult(
            url=response.url or request.url,
            status_code=response.status_code,
            text=response.text,
        )
