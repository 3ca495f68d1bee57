"""Shared fixtures for session scraper tests."""

import sys
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path

import pytest
import requests
from requests.cookies import cookiejar_from_dict

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from session_scraper.config import ScraperConfig, TargetConfig, SessionConfig
from session_scraper.models.token import SessionToken
from session_scraper.target import TargetServer


# --- Configuration Fixtures ---


@pytest.fixture
def mock_config(tmp_path):
    """Create a ScraperConfig pointing at a test host."""
    return ScraperConfig(
        target=TargetConfig(
            host="http://example.com",
            agent_name="TestAgent/0.1",
            session_cookie_name="session",
            login_path="login.php",
        ),
        session=SessionConfig(connections_per_login=3, request_timeout=5.0),
        log_level="DEBUG",
        log_file=tmp_path / "test.log",
    )


# --- HTTP Mocking Fixtures ---


@pytest.fixture
def mock_http(mocker):
    """Create a mock requests.Session used as transport."""
    session = mocker.MagicMock(spec=requests.Session)
    session.cookies = mocker.MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def mock_response_factory(mocker):
    """Factory for creating mock HTTP responses."""
    def _create_response(
        status_code=200,
        text="",
        content=None,
        cookies=None,
        headers=None,
        url="http://example.com/page.php",
    ):
        response = mocker.MagicMock()
        response.status_code = status_code
        response.text = text
        response.content = content if content is not None else text.encode()
        response.url = url
        response.headers = headers or {}
        response.cookies = cookiejar_from_dict(cookies or {})
        return response
    return _create_response


@pytest.fixture
def target(mock_http):
    """Create a TargetServer using the mocked transport."""
    return TargetServer(
        "http://example.com",
        session_cookie_name="session",
        http=mock_http,
    )


# --- Cookie Fixtures ---


@pytest.fixture
def sample_tokens():
    """Sample jar contents."""
    return [
        SessionToken(name="session_a1", value="abc123", domain="example.com"),
        SessionToken(name="lang", value="en"),
        SessionToken(name="tracking", value="xyz789", path="/app"),
    ]


# --- Live Server Fixtures ---


class _CookieSiteHandler(BaseHTTPRequestHandler):
    """Small site that sets cookies, redirects and echoes the Cookie header."""

    def _reply(self, status, cookies=(), location=None, body=b""):
        self.send_response(status)
        for cookie in cookies:
            self.send_header("Set-Cookie", f"{cookie}; Path=/")
        if location:
            self.send_header("Location", location)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        if self.path == "/login":
            self._reply(200, cookies=("zeta=1", "session=abc", "alpha=2"))
        else:
            self._reply(200, cookies=("rejected=1",))

    def do_GET(self):
        if self.path == "/echo":
            self._reply(200, body=self.headers.get("Cookie", "").encode())
        elif self.path == "/redir":
            self._reply(302, cookies=("hop=1",), location="/echo")
        elif self.path == "/set":
            self._reply(200, cookies=("extra=5",), body=b"ok")
        else:
            self._reply(404)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def cookie_site():
    """Run the cookie site on a free local port and yield its base URL."""
    server = HTTPServer(("127.0.0.1", 0), _CookieSiteHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()
    thread.join()
