from __future__ import annotations

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .providers import (
    DEFAULT_AUTHORITY_HOST,
    Audience,
    normalize_authority_host,
    validate_tenant_id,
)


class ProviderConfig(BaseSettings):
    """Configuration for selecting an Azure AD provider and OAuth2 client.

    This model reads environment variables automatically and performs
    cross-field validation based on the selected :class:`Audience`.

    Environment variables (the field name is accepted as well):
        - AUDIENCE
        - TENANT_ID
        - CLIENT_ID
        - CLIENT_SECRET
        - REDIRECT_URI
        - AUTHORITY_HOST
        - SCOPE (space separated, as in the OAuth2 ``scope`` parameter)
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # With validation_alias set, the field name is only read from input when
    # it is listed in the alias choices too.

    audience: Audience = Field(
        default=Audience.COMMON,
        validation_alias=AliasChoices("audience", "AUDIENCE"),
    )
    tenant_id: str | None = Field(
        default=None, validation_alias=AliasChoices("tenant_id", "TENANT_ID")
    )
    client_id: str | None = Field(
        default=None, validation_alias=AliasChoices("client_id", "CLIENT_ID")
    )
    client_secret: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("client_secret", "CLIENT_SECRET"),
    )
    redirect_uri: str | None = Field(
        default=None,
        validation_alias=AliasChoices("redirect_uri", "REDIRECT_URI"),
    )
    authority_host: str = Field(
        default=DEFAULT_AUTHORITY_HOST,
        validation_alias=AliasChoices("authority_host", "AUTHORITY_HOST"),
    )
    scope: str | None = Field(
        default=None, validation_alias=AliasChoices("scope", "SCOPE")
    )

    @field_validator("tenant_id")
    @classmethod
    def _check_tenant_id(cls, v: str | None) -> str | None:
        return v if v is None else validate_tenant_id(v)

    @field_validator("authority_host")
    @classmethod
    def _check_authority_host(cls, v: str) -> str:
        """Ensure the host is a bare https URL; trailing slashes are dropped."""
        return normalize_authority_host(v)

    @model_validator(mode="after")
    def _cross_field_validation(self) -> "ProviderConfig":
        """Validate required fields for the selected audience."""
        if self.audience is Audience.TENANT and not self.tenant_id:
            raise ValueError("tenant audience requires tenant_id.")
        if self.audience is not Audience.TENANT and self.tenant_id:
            raise ValueError(
                f"tenant_id is only used by the tenant audience, not {self.audience.value}."
            )
        return self
