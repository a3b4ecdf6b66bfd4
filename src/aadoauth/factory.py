from __future__ import annotations

from .config import ProviderConfig
from .providers import Audience, Provider, azure_tenant, provider_for
from .scopes import normalize_scope


def get_provider(config: ProviderConfig | None = None) -> Provider:
    """Construct a :class:`Provider` based on :class:`ProviderConfig`.

    Args:
        config: Provider configuration. If ``None``, it is read from the
            environment.

    Returns:
        The descriptor for the configured audience, carrying the configured
        scope when one is set.
    """
    cfg = config or ProviderConfig()
    host = cfg.authority_host

    match cfg.audience:
        case Audience.TENANT:
            provider = azure_tenant(cfg.tenant_id, authority_host=host)
        case _:
            provider = provider_for(cfg.audience, authority_host=host)

    scope = normalize_scope(cfg.scope)
    if scope:
        provider = provider.with_scope(*scope)
    return provider
