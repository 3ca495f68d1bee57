"""Authentication module for form login and session cookies."""

from .form_login import FormAuthenticator
from .session_store import has_token, replace_by_prefix, tokens_from_response

__all__ = ["FormAuthenticator", "has_token", "replace_by_prefix", "tokens_from_response"]
