"""Session context for a single target server."""

from typing import Iterable, List, Optional, Union

import requests

from .config import ReloginFailurePolicy, ScraperConfig
from .auth.form_login import FormAuthenticator
from .auth.session_store import replace_by_prefix
from .models.result import FetchResult
from .models.token import SessionToken
from .scraper.page_fetcher import PageFetcher
from .scraper.request_builder import (
    HttpMethod,
    Params,
    build_request,
    build_url,
    detach_cookie_store,
)


class TargetServer:
    """
    A server to be scraped together with its session state.

    Holds the cookie jar, the credentials of the last successful login and
    the connection counter. Not safe for concurrent use: every login and
    fetch mutates this state in place.
    """

    def __init__(
        self,
        host: str,
        agent_name: str = "",
        session_cookie_name: str = "",
        connections_per_login: int = 0,
        jar: Optional[Iterable[SessionToken]] = None,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = 30,
        relogin_failure: Union[ReloginFailurePolicy, str] = ReloginFailurePolicy.WARN,
        reset_count_on_login: bool = False,
    ):
        """
        Initialize target server.

        Args:
            host: Fully qualified base URL, e.g. ``http://example.com:8080``
            agent_name: User-Agent sent with every request
            session_cookie_name: Prefix of the cookie that proves a login worked
            connections_per_login: Fetches between relogins, 0 to never relogin
            jar: Initial session tokens
            http: Transport to use, a new requests.Session if omitted. Its
                own cookie jar is emptied and stops storing cookies, so
                requests carry only the tokens in ``jar``
            timeout: Timeout handed to the transport for each request
            relogin_failure: Whether a failed automatic relogin warns or raises
            reset_count_on_login: Restart the connection count at every login
        """
        if connections_per_login < 0:
            raise ValueError("connections_per_login must not be negative")

        self._host = host
        self.agent_name = agent_name
        self.session_cookie_name = session_cookie_name
        self.connections_per_login = connections_per_login
        self.jar: List[SessionToken] = list(jar or [])
        self.timeout = timeout
        self.relogin_failure = ReloginFailurePolicy(relogin_failure)
        self.reset_count_on_login = reset_count_on_login

        self._owns_http = http is None
        self.http = http if http is not None else requests.Session()
        detach_cookie_store(self.http)
        self._num_connections = 0

        self.authenticator = FormAuthenticator(self)
        self.fetcher = PageFetcher(self, self.authenticator)

    @classmethod
    def from_config(cls, config: ScraperConfig, **overrides) -> "TargetServer":
        """Create a target server from configuration, overriding selected fields."""
        settings = {
            "host": config.target.host,
            "agent_name": config.target.agent_name,
            "session_cookie_name": config.target.session_cookie_name,
            "connections_per_login": config.session.connections_per_login,
            "timeout": config.session.request_timeout,
            "relogin_failure": config.session.relogin_failure,
            "reset_count_on_login": config.session.reset_count_on_login,
        }
        settings.update(overrides)
        return cls(**settings)

    @property
    def host(self) -> str:
        return self._host

    @property
    def num_connections(self) -> int:
        """Number of fetches made so far."""
        return self._num_connections

    def count_connection(self) -> int:
        self._num_connections += 1
        return self._num_connections

    def reset_connections(self) -> None:
        self._num_connections = 0

    def replace_jar(self, tokens: Iterable[SessionToken]) -> None:
        self.jar = list(tokens)

    def swap_tokens(self, found: Iterable[SessionToken], prefix: str) -> None:
        """Replace the jar's tokens under a prefix with those found."""
        self.jar = replace_by_prefix(self.jar, found, prefix)

    def url(self, path: str) -> str:
        """Absolute URL for a path on this server."""
        return build_url(self.host, path)

    def request(
        self,
        method: Union[HttpMethod, str],
        path: str,
        params: Optional[Params] = None,
    ) -> requests.PreparedRequest:
        """Build a request for this server carrying the current jar."""
        return build_request(
            self.host,
            method,
            path,
            params,
            agent_name=self.agent_name,
            jar=self.jar,
        )

    def login(self, path: str, form: Optional[Params] = None) -> None:
        """Log in by posting a form. See FormAuthenticator.login."""
        self.authenticator.login(path, form)

    def relogin(self) -> None:
        """Replay the last successful login."""
        self.authenticator.relogin()

    def fetch(self, path: str, query: Optional[Params] = None) -> FetchResult:
        """Fetch a page. See PageFetcher.fetch."""
        return self.fetcher.fetch(path, query)

    def close(self) -> None:
        """Close the transport if it was created here."""
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TargetServer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
