from __future__ import annotations

from typing import Iterator

import pytest

_SETTINGS_ENV = [
    "AUDIENCE",
    "TENANT_ID",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "REDIRECT_URI",
    "AUTHORITY_HOST",
    "SCOPE",
]


@pytest.fixture(autouse=True)
def clear_settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove settings variables to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)
    yield


@pytest.fixture()
def tenant_guid() -> str:
    return "8eaef023-2b34-4da1-9baa-8bc8c9d6a490"
