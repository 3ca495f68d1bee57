"""Prefix-based lookup and replacement over session token jars."""

from typing import Iterable, List

import requests

from ..models.token import SessionToken


def has_token(tokens: Iterable[SessionToken], prefix: str) -> bool:
    """
    Check whether any token name starts with a prefix.

    Servers often suffix session cookie names with an instance id, so
    lookups match on prefix rather than on the exact name.

    Args:
        tokens: Tokens to search
        prefix: Name prefix to look for

    Returns:
        True if at least one token matches
    """
    return any(token.has_prefix(prefix) for token in tokens)


def replace_by_prefix(
    jar: Iterable[SessionToken],
    found: Iterable[SessionToken],
    prefix: str,
) -> List[SessionToken]:
    """
    Build a new jar with the tokens under a prefix swapped for fresh ones.

    Every jar entry matching the prefix is dropped, even when ``found``
    holds no replacement for it. Entries outside the prefix keep their
    order and the matching entries from ``found`` are appended.

    Args:
        jar: Current tokens
        found: Candidate tokens, usually from a response
        prefix: Name prefix being refreshed

    Returns:
        New list of tokens; inputs are not modified
    """
    new_jar = [token for token in jar if not token.has_prefix(prefix)]
    new_jar.extend(token for token in found if token.has_prefix(prefix))
    return new_jar


def tokens_from_response(response: requests.Response) -> List[SessionToken]:
    """Collect the tokens set by a response's Set-Cookie headers."""
    return [SessionToken.from_cookie(cookie) for cookie in response.cookies]
