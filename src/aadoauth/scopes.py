from __future__ import annotations

from typing import Final, Iterable
from urllib.parse import urlparse

OPENID_DEFAULT_SCOPE: Final[tuple[str, ...]] = ("openid", "offline_access")


def authority_from_url(url: str) -> str:
    """Return the URL authority (scheme + host).

    Args:
        url: Absolute URL (e.g., "https://login.microsoftonline.com/common").

    Returns:
        The "<scheme>://<host>" portion of the URL.

    Raises:
        ValueError: If ``url`` is not absolute or lacks a host.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("url must be an absolute URL")
    return f"{parsed.scheme}://{parsed.netloc}"


def resource_scope_from_url(url: str) -> str:
    return f"{authority_from_url(url)}/.default"


def normalize_scope(scope: str | Iterable[str] | None) -> tuple[str, ...]:
    """Turn a scope value into an ordered tuple of unique scope strings.

    Strings are split on whitespace, as in the OAuth2 ``scope`` parameter,
    whether given alone or as entries of an iterable, so ``"openid profile"``
    and ``["openid", "profile"]`` normalize alike.

    Raises:
        ValueError: If an iterable contains an empty or non-string entry.
    """
    if scope is None:
        return ()
    if isinstance(scope, str):
        scope = [scope] if scope.strip() else []

    result: list[str] = []
    for item in scope:
        if not isinstance(item, str) or not item.strip():
            raise ValueError(f"Scope entries must be non-empty strings, got {item!r}")
        for token in item.split():
            if token not in result:
                result.append(token)
    return tuple(result)
