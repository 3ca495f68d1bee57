"""Form based login and relogin against a target server."""

from typing import TYPE_CHECKING, Dict, List, Optional, Union

import requests

from ..scraper.request_builder import HttpMethod, Params
from ..utils.logging_config import get_logger
from ..utils.exceptions import AuthenticationError, NoCredentialsError, TransportError
from .session_store import has_token, tokens_from_response

if TYPE_CHECKING:
    from ..target import TargetServer

logger = get_logger()


def _copy_form(form: Optional[Params]) -> Dict[str, Union[str, List[str]]]:
    if not form:
        return {}
    return {
        key: value if isinstance(value, str) else list(value)
        for key, value in form.items()
    }


class FormAuthenticator:
    """Logs into a target server by posting an HTML form."""

    def __init__(self, target: "TargetServer"):
        """
        Initialize authenticator.

        Args:
            target: Session context whose jar and credentials are updated
        """
        self.target = target
        self._login_path: Optional[str] = None
        self._login_form: Optional[Dict[str, Union[str, List[str]]]] = None

    @property
    def has_credentials(self) -> bool:
        """Whether a successful login can be replayed."""
        return self._login_path is not None

    def login(self, path: str, form: Optional[Params] = None) -> None:
        """
        Post the login form and store the returned cookies.

        Redirects are not followed: servers commonly answer a successful
        login with a 302 and the session cookie is only on that response.

        If the target has a session cookie name, a cookie starting with it
        must be present in the response, otherwise the credentials are
        considered rejected and the jar is left untouched. On success the
        whole jar is replaced and the path and form are remembered.

        Args:
            path: Login form action, relative to the host
            form: Form fields to post

        Raises:
            RequestBuildError: If the request cannot be built
            TransportError: If the request fails
            AuthenticationError: If the session cookie is missing
        """
        request = self.target.request(HttpMethod.POST, path, form)
        logger.info(f"Logging in at {request.url}")

        try:
            response = self.target.http.send(
                request, allow_redirects=False, timeout=self.target.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Login request to {request.url} failed: {e}")
            raise TransportError(
                f"Unable to make login request to {request.url}: {e}"
            ) from e

        try:
            tokens = tokens_from_response(response)
        finally:
            response.close()

        cookie_name = self.target.session_cookie_name
        if cookie_name and not has_token(tokens, cookie_name):
            logger.warning(
                f"Session cookie '{cookie_name}' not in login response "
                f"(status {response.status_code})"
            )
            raise AuthenticationError(
                f"Session cookie '{cookie_name}' not found after login, "
                "possibly bad username or password"
            )

        self.target.replace_jar(tokens)
        self._login_path = path
        self._login_form = _copy_form(form)

        if self.target.reset_count_on_login:
            self.target.reset_connections()

        logger.info(f"Login successful, received {len(tokens)} cookies")
        logger.debug(f"Cookies after login: {[token.name for token in tokens]}")

    def relogin(self) -> None:
        """
        Log in again with the path and form of the last successful login.

        Raises:
            NoCredentialsError: If no login has succeeded yet
        """
        if not self.has_credentials:
            raise NoCredentialsError("Relogin requested before any successful login")

        logger.info(f"Relogging in at {self._login_path}")
        self.login(self._login_path, self._login_form)
