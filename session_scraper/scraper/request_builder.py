"""Request construction for a target server."""

from enum import Enum
from http.cookiejar import DefaultCookiePolicy
from typing import Iterable, Mapping, Optional, Sequence, Union
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests
from requests.cookies import RequestsCookieJar

from ..config import DEFAULT_AGENT_NAME
from ..models.token import SessionToken
from ..utils.exceptions import InvalidURLError, RequestBuildError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

Params = Mapping[str, Union[str, Sequence[str]]]


class HttpMethod(str, Enum):
    """Methods a request can be built for."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"


class ParamEncoding(Enum):
    """Where encoded parameters are placed."""

    QUERY = "query"
    BODY = "body"


METHOD_ENCODING = {
    HttpMethod.GET: ParamEncoding.QUERY,
    HttpMethod.HEAD: ParamEncoding.QUERY,
    HttpMethod.POST: ParamEncoding.BODY,
    HttpMethod.PUT: ParamEncoding.BODY,
}


def build_url(host: str, path: str) -> str:
    """
    Resolve a path against the host URL.

    Args:
        host: Absolute base URL, e.g. ``http://example.com:8080``
        path: Path relative to the host

    Returns:
        Absolute URL with exactly one slash between host and path

    Raises:
        InvalidURLError: If the host is not an absolute URL
    """
    try:
        parts = urlsplit(host)
        # Accessing port validates the authority
        parts.port
    except ValueError as e:
        raise InvalidURLError(f"URL for host {host!r} unable to be parsed: {e}") from e

    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(
            f"URL for host {host!r} unable to be parsed: scheme and host are required"
        )

    full_path = parts.path.rstrip("/") + "/" + path.lstrip("/")
    return urlunsplit((parts.scheme, parts.netloc, full_path, "", ""))


def encode_params(params: Optional[Params]) -> str:
    """URL-form-encode parameters with keys in sorted order."""
    if not params:
        return ""
    return urlencode(sorted(params.items()), doseq=True)


class SendOnlyCookiePolicy(DefaultCookiePolicy):
    """Cookie policy that sends stored cookies but never accepts new ones."""

    def set_ok(self, cookie, request):
        return False


def detach_cookie_store(http: requests.Session) -> None:
    """
    Empty a transport's own cookie jar and stop it storing cookies.

    ``requests.Session`` records every Set-Cookie it sees and merges that
    jar into redirected requests, so a target's tokens would otherwise
    not be the only cookies on the wire.
    """
    http.cookies.clear()
    http.cookies.set_policy(SendOnlyCookiePolicy())


def _cookie_jar(jar: Iterable[SessionToken]) -> RequestsCookieJar:
    # Set-Cookie on a redirect hop must not reach the next hop either
    cookies = RequestsCookieJar(policy=SendOnlyCookiePolicy())
    for token in jar:
        cookies.set(token.name, token.value, domain=token.domain, path=token.path)
    return cookies


def build_request(
    host: str,
    method: Union[HttpMethod, str],
    path: str,
    params: Optional[Params] = None,
    agent_name: str = "",
    jar: Sequence[SessionToken] = (),
) -> requests.PreparedRequest:
    """
    Build a request carrying the session cookies.

    GET and HEAD place the encoded parameters in the query string,
    POST and PUT send them as a form-encoded body.

    Args:
        host: Absolute base URL of the target server
        method: HTTP method
        path: Path relative to the host
        params: Parameters, each value a string or a list of strings
        agent_name: User-Agent value, the default name if empty
        jar: Session tokens to attach, in order

    Returns:
        Prepared request ready to send

    Raises:
        InvalidURLError: If the URL cannot be composed
        RequestBuildError: If the request cannot be constructed
    """
    try:
        method = HttpMethod(method.upper() if isinstance(method, str) else method)
    except ValueError as e:
        raise RequestBuildError(f"Unsupported request method: {method!r}") from e

    url = build_url(host, path)
    encoded = encode_params(params)
    encoding = METHOD_ENCODING[method]

    headers = {
        "Accept": "*/*",
        "User-Agent": agent_name or DEFAULT_AGENT_NAME,
    }
    if encoding is ParamEncoding.BODY:
        headers["Content-Type"] = FORM_CONTENT_TYPE
    if jar:
        headers["Cookie"] = "; ".join(token.header_value() for token in jar)

    request = requests.Request(
        method=method.value,
        url=url,
        headers=headers,
        params=encoded if encoding is ParamEncoding.QUERY else None,
        data=encoded if encoding is ParamEncoding.BODY else None,
        cookies=_cookie_jar(jar),
    )

    try:
        return request.prepare()
    except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
        raise InvalidURLError(f"Invalid request URL {url}: {e}") from e
    except (requests.RequestException, ValueError) as e:
        raise RequestBuildError(f"Invalid request, unable to construct: {e}") from e
