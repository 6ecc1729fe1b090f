"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from dune_provisioner.core import DuneProvider
from dune_provisioner.engine.handlers import EngineContext

if TYPE_CHECKING:
    from pathlib import Path

_DUNE_ENV_VARS = (
    "DUNE_API_KEY",
    "DUNE_API_URL",
    "DUNE_TEAM",
    "DUNE_NAMESPACE",
    "DUNE_TIMEOUT",
    "DUNE_READ_RETRIES",
    "DUNE_LOG",
)


@pytest.fixture(autouse=True)
def _clean_dune_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove DUNE_* env vars and any local .env so unit tests don't leak host config."""
    for var in _DUNE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def ctx(mock_client: MagicMock) -> EngineContext:
    provider = DuneProvider.from_client(mock_client, team="acme")
    return EngineContext(provider=provider)


@pytest.fixture
def no_cred_ctx() -> EngineContext:
    return EngineContext(provider=DuneProvider())
