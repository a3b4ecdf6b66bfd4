"""Azure AD (Microsoft identity platform v2.0) provider descriptors.

Azure provides multiple endpoints which can be used depending on the type of
end user you wish to authenticate. See
https://learn.microsoft.com/en-us/entra/identity-platform/v2-protocols-oidc
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Final
from urllib.parse import urlparse

from .scopes import (
    OPENID_DEFAULT_SCOPE,
    authority_from_url,
    normalize_scope,
    resource_scope_from_url,
)

DEFAULT_AUTHORITY_HOST: Final[str] = "https://login.microsoftonline.com"

_GUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_DOMAIN_RE = re.compile(
    r"^(?=.{1,253}$)(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$",
    re.IGNORECASE,
)


class Audience(str, Enum):
    """Which accounts may sign in through a descriptor."""

    COMMON = "common"
    ORGANIZATIONS = "organizations"
    CONSUMERS = "consumers"
    TENANT = "tenant"


def _require_https_url(value: str, what: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme != "https" or not parsed.netloc:
        raise ValueError(f"{what} must be an absolute https URL, got {value!r}")


@dataclass(frozen=True)
class Provider:
    """Fixed endpoint metadata handed to an OAuth2 client.

    Instances are immutable and compare by value, so one descriptor can be
    shared by any number of clients and threads.
    """

    name: str
    authorization_endpoint: str
    token_endpoint: str
    default_scope: tuple[str, ...] = OPENID_DEFAULT_SCOPE

    def __post_init__(self) -> None:
        _require_https_url(self.authorization_endpoint, "authorization_endpoint")
        _require_https_url(self.token_endpoint, "token_endpoint")
        if self.authorization_endpoint == self.token_endpoint:
            raise ValueError("authorization_endpoint and token_endpoint must differ")
        object.__setattr__(self, "default_scope", normalize_scope(self.default_scope))

    @property
    def authority(self) -> str:
        """``<host>/<tenant segment>``, the prefix shared by both endpoints."""
        return self.authorization_endpoint.rsplit("/oauth2/", 1)[0]

    @property
    def openid_configuration_url(self) -> str:
        return f"{self.authority}/v2.0/.well-known/openid-configuration"

    def with_scope(self, *scopes: str) -> "Provider":
        """Return a copy requesting ``scopes`` by default."""
        return replace(self, default_scope=normalize_scope(scopes))

    def with_resource_scope(self, resource_url: str) -> "Provider":
        """Return a copy requesting the static permissions of a resource.

        The OpenID sign-in scopes are kept and ``<resource>/.default`` is
        added, e.g. ``with_resource_scope("https://graph.microsoft.com")``.
        """
        return self.with_scope(
            *OPENID_DEFAULT_SCOPE, resource_scope_from_url(resource_url)
        )


def normalize_authority_host(authority_host: str) -> str:
    _require_https_url(authority_host, "authority_host")
    host = authority_from_url(authority_host)
    if authority_host.rstrip("/").lower() != host.lower():
        raise ValueError(f"authority_host must not carry a path, got {authority_host!r}")
    return host


def _build(segment: str, authority_host: str = DEFAULT_AUTHORITY_HOST) -> Provider:
    base = f"{normalize_authority_host(authority_host)}/{segment}/oauth2/v2.0"
    return Provider(
        name=segment,
        authorization_endpoint=f"{base}/authorize",
        token_endpoint=f"{base}/token",
    )


# Users with either a personal or organisation Microsoft account can sign in.
AZURE_COMMON: Final[Provider] = _build(Audience.COMMON.value)
# Only users with a work or school account can sign in.
AZURE_ORGANIZATIONS: Final[Provider] = _build(Audience.ORGANIZATIONS.value)
# Only users with a personal Microsoft account can sign in.
AZURE_CONSUMERS: Final[Provider] = _build(Audience.CONSUMERS.value)


def azure_common() -> Provider:
    return AZURE_COMMON


def azure_organizations() -> Provider:
    return AZURE_ORGANIZATIONS


def azure_consumers() -> Provider:
    return AZURE_CONSUMERS


def validate_tenant_id(tenant_id: str) -> str:
    """Return the stripped tenant id, or raise ``ValueError``.

    Either the tenant's GUID or its domain name is accepted, e.g.
    ``8eaef023-2b34-4da1-9baa-8bc8c9d6a490`` or ``contoso.onmicrosoft.com``.
    """
    value = (tenant_id or "").strip()
    if not value:
        raise ValueError("tenant_id must not be empty")
    if not (_GUID_RE.match(value) or _DOMAIN_RE.match(value)):
        raise ValueError(
            f"tenant_id must be a GUID or a domain name, got {tenant_id!r}"
        )
    return value


def azure_tenant(
    tenant_id: str, *, authority_host: str = DEFAULT_AUTHORITY_HOST
) -> Provider:
    """Descriptor for a single Azure AD tenant.

    Only users with a work or school account from that tenant can sign in.

    Raises:
        ValueError: If ``tenant_id`` or ``authority_host`` is malformed.
    """
    return _build(validate_tenant_id(tenant_id), authority_host)


def provider_for(
    audience: Audience | str,
    tenant_id: str | None = None,
    *,
    authority_host: str = DEFAULT_AUTHORITY_HOST,
) -> Provider:
    """Return the descriptor for ``audience``.

    The shared constants are returned for the default authority host.
    """
    audience = Audience(audience)
    if audience is Audience.TENANT:
        if tenant_id is None:
            raise ValueError("tenant audience requires tenant_id")
        return azure_tenant(tenant_id, authority_host=authority_host)
    if normalize_authority_host(authority_host) == DEFAULT_AUTHORITY_HOST:
        return {
            Audience.COMMON: AZURE_COMMON,
            Audience.ORGANIZATIONS: AZURE_ORGANIZATIONS,
            Audience.CONSUMERS: AZURE_CONSUMERS,
        }[audience]
    return _build(audience.value, authority_host)
