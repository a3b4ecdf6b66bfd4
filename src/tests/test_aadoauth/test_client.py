from __future__ import annotations

from unittest import mock
from urllib.parse import parse_qs, urlparse

import pytest
from pydantic import SecretStr

from aadoauth.client import AzureOAuth2Client, build_client
from aadoauth.config import ProviderConfig
from aadoauth.providers import Audience, azure_common, azure_tenant


def _token_response(payload: dict) -> mock.MagicMock:
    resp = mock.MagicMock()
    resp.status_code = 200
    resp.json.return_value = payload
    return resp


def test_build_client__end_to_end() -> None:
    """A client built from the descriptor points at its authorization endpoint."""
    provider = azure_common()
    client = build_client(provider, "client-id", "client-secret", "redirect-uri")

    assert client.authorization_url == provider.authorization_endpoint
    assert client.token_url == provider.token_endpoint
    assert client.client_id == "client-id"
    assert client.redirect_uri == "redirect-uri"
    assert client.scope == provider.default_scope


def test_create_authorization_url__query_parameters() -> None:
    provider = azure_common()
    with build_client(provider, "client-id", "client-secret", "redirect-uri") as client:
        url, state = client.create_authorization_url(state="xyz")

    assert state == "xyz"
    assert url.startswith(provider.authorization_endpoint + "?")
    query = parse_qs(urlparse(url).query)
    assert query["client_id"] == ["client-id"]
    assert query["redirect_uri"] == ["redirect-uri"]
    assert query["response_type"] == ["code"]
    assert query["scope"] == ["openid offline_access"]
    assert query["state"] == ["xyz"]


def test_scope_override__used_in_authorization_url() -> None:
    client = build_client(
        azure_common(), "client-id", None, "redirect-uri", scope="User.Read"
    )
    url, _ = client.create_authorization_url()
    assert parse_qs(urlparse(url).query)["scope"] == ["User.Read"]
    assert client.scope == ("User.Read",)


def test_fetch_token__posts_to_token_endpoint() -> None:
    client = build_client(azure_common(), "client-id", "client-secret", "redirect-uri")
    payload = {"access_token": "at", "token_type": "Bearer", "refresh_token": "rt"}

    with mock.patch.object(
        client.session, "post", return_value=_token_response(payload)
    ) as post:
        token = client.fetch_token(code="the-code")

    assert token["access_token"] == "at"
    assert post.call_count == 1
    assert post.call_args.args[0] == azure_common().token_endpoint
    data = post.call_args.kwargs["data"]
    assert data["code"] == "the-code"
    assert data["grant_type"] == "authorization_code"
    assert data["redirect_uri"] == "redirect-uri"


def test_refresh_token__posts_to_token_endpoint() -> None:
    client = build_client(azure_common(), "client-id", "client-secret")
    payload = {"access_token": "at2", "token_type": "Bearer"}

    with mock.patch.object(
        client.session, "post", return_value=_token_response(payload)
    ) as post:
        token = client.refresh_token("rt")

    assert token["access_token"] == "at2"
    assert post.call_args.args[0] == azure_common().token_endpoint
    data = post.call_args.kwargs["data"]
    assert data["grant_type"] == "refresh_token"
    assert data["refresh_token"] == "rt"


def test_from_config__unwraps_secret(tenant_guid: str) -> None:
    cfg = ProviderConfig(
        audience=Audience.TENANT,
        tenant_id=tenant_guid,
        client_id="client-id",
        client_secret=SecretStr("sekrit"),
        redirect_uri="http://localhost:8400",
    )
    client = AzureOAuth2Client.from_config(cfg)

    assert client.provider == azure_tenant(tenant_guid)
    assert client.session.client_secret == "sekrit"
    assert client.redirect_uri == "http://localhost:8400"


def test_from_config__requires_client_id() -> None:
    with pytest.raises(ValueError, match="client_id is required"):
        AzureOAuth2Client.from_config(ProviderConfig())


def test_from_config__configured_scope_reaches_client(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("CLIENT_ID", "client-id")
    monkeypatch.setenv("SCOPE", "openid User.Read openid")

    client = AzureOAuth2Client.from_config(ProviderConfig())
    url, _ = client.create_authorization_url()

    assert client.scope == ("openid", "User.Read")
    assert client.provider.default_scope == ("openid", "User.Read")
    assert parse_qs(urlparse(url).query)["scope"] == ["openid User.Read"]
