"""Session token data model."""

from http.cookiejar import Cookie
from typing import Optional
from pydantic import BaseModel, Field


class SessionToken(BaseModel):
    """A server-issued cookie held in a session jar."""

    name: str = Field(..., description="Cookie name")
    value: str = Field(default="", description="Cookie value")
    domain: str = Field(default="", description="Domain attribute, empty if host-only")
    path: str = Field(default="/", description="Path attribute")
    secure: bool = Field(default=False, description="Only sent over HTTPS")
    expires: Optional[int] = Field(default=None, description="Expiry as a Unix timestamp")

    @classmethod
    def from_cookie(cls, cookie: Cookie) -> "SessionToken":
        """Build a token from a cookie parsed by the HTTP client."""
        return cls(
            name=cookie.name,
            value=cookie.value or "",
            domain=cookie.domain or "",
            path=cookie.path or "/",
            secure=bool(cookie.secure),
            expires=cookie.expires,
        )

    def has_prefix(self, prefix: str) -> bool:
        return self.name.startswith(prefix)

    def header_value(self) -> str:
        """Render as a ``name=value`` pair for the Cookie header."""
        return f"{self.name}={self.value}"
