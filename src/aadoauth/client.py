from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from authlib.integrations.requests_client import OAuth2Session

from .factory import get_provider
from .providers import Provider
from .scopes import normalize_scope

if TYPE_CHECKING:
    from .config import ProviderConfig

logger = logging.getLogger(__name__)


class AzureOAuth2Client:
    """OAuth2 client bound to an Azure AD provider descriptor.

    Token exchange, refresh and transport are handled by Authlib's
    ``OAuth2Session``; this class only points it at the descriptor's
    endpoints.
    """

    def __init__(
        self,
        provider: Provider,
        client_id: str,
        client_secret: str | None,
        redirect_uri: str | None = None,
        *,
        scope: str | Iterable[str] | None = None,
        **session_kwargs: Any,
    ):
        """Initialize the client.

        Args:
            provider: Descriptor supplying the endpoints and default scope.
            client_id: Application (client) ID of the app registration.
            client_secret: Client secret, or ``None`` for public clients.
            redirect_uri: Redirect URI registered for the application.
            scope: Scope to request instead of ``provider.default_scope``.
            **session_kwargs: Passed through to ``OAuth2Session``.
        """
        self.provider = provider
        requested = normalize_scope(scope) if scope is not None else provider.default_scope
        self.scope: tuple[str, ...] = requested

        self.session = OAuth2Session(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scope=" ".join(requested) or None,
            token_endpoint=provider.token_endpoint,
            **session_kwargs,
        )
        logger.debug(
            "Configured OAuth2 client %s for provider %s.", client_id, provider.name
        )

    @classmethod
    def from_config(
        cls, config: "ProviderConfig", **session_kwargs: Any
    ) -> "AzureOAuth2Client":
        """Build a client from :class:`ProviderConfig`."""
        if not config.client_id:
            raise ValueError("client_id is required to build an OAuth2 client.")
        return cls(
            get_provider(config),
            config.client_id,
            (
                config.client_secret.get_secret_value()
                if config.client_secret
                else None
            ),
            config.redirect_uri,
            **session_kwargs,
        )

    @property
    def authorization_url(self) -> str:
        return self.provider.authorization_endpoint

    @property
    def token_url(self) -> str:
        return self.provider.token_endpoint

    @property
    def client_id(self) -> str:
        return self.session.client_id

    @property
    def redirect_uri(self) -> str | None:
        return self.session.redirect_uri

    def create_authorization_url(
        self, state: str | None = None, **kwargs: Any
    ) -> tuple[str, str]:
        """Return ``(url, state)`` to redirect the user agent to."""
        return self.session.create_authorization_url(
            self.authorization_url, state=state, **kwargs
        )

    def fetch_token(
        self,
        authorization_response: str | None = None,
        *,
        code: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Exchange an authorization code at the token endpoint."""
        if authorization_response is not None:
            kwargs["authorization_response"] = authorization_response
        if code is not None:
            kwargs["code"] = code
        logger.debug("Requesting token from %s.", self.token_url)
        return self.session.fetch_token(self.token_url, **kwargs)

    def refresh_token(
        self, refresh_token: str | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        logger.debug("Refreshing token at %s.", self.token_url)
        return self.session.refresh_token(
            self.token_url, refresh_token=refresh_token, **kwargs
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "AzureOAuth2Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_client(
    provider: Provider,
    client_id: str,
    client_secret: str | None,
    redirect_uri: str | None = None,
    *,
    scope: str | Iterable[str] | None = None,
    **session_kwargs: Any,
) -> AzureOAuth2Client:
    """Construct an :class:`AzureOAuth2Client` for ``provider``.

    Example:
        >>> client = build_client(
        ...     azure_common(), "client-id", "client-secret", "redirect-uri"
        ... )
    """
    return AzureOAuth2Client(
        provider,
        client_id,
        client_secret,
        redirect_uri,
        scope=scope,
        **session_kwargs,
    )
