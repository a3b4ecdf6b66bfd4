"""Azure Active Directory (OpenID Connect) provider descriptors for OAuth2 clients.

Public API:
- Provider (descriptor), Audience (enum of sign-in audiences)
- azure_common(), azure_organizations(), azure_consumers(), azure_tenant()
- ProviderConfig (settings), get_provider() → Provider
- AzureOAuth2Client, build_client() (Authlib session bound to a descriptor)
- OPENID_DEFAULT_SCOPE (default OpenID sign-in scope)
"""

from .client import AzureOAuth2Client, build_client
from .config import ProviderConfig
from .factory import get_provider
from .providers import (
    AZURE_COMMON,
    AZURE_CONSUMERS,
    AZURE_ORGANIZATIONS,
    Audience,
    Provider,
    azure_common,
    azure_consumers,
    azure_organizations,
    azure_tenant,
)
from .scopes import OPENID_DEFAULT_SCOPE

__all__ = [
    "AZURE_COMMON",
    "AZURE_CONSUMERS",
    "AZURE_ORGANIZATIONS",
    "Audience",
    "AzureOAuth2Client",
    "OPENID_DEFAULT_SCOPE",
    "Provider",
    "ProviderConfig",
    "azure_common",
    "azure_consumers",
    "azure_organizations",
    "azure_tenant",
    "build_client",
    "get_provider",
]
