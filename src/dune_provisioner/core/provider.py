"""Dune Provider - Connection configuration for the Dune API."""

from functools import cached_property
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, SecretStr

from dune_provisioner.core.client import DEFAULT_API_URL, DuneClient
from dune_provisioner.engine.errors import CredentialError


class ApiKeyAuth(BaseModel):
    """API key authentication for Dune."""

    api_key: SecretStr


class DuneProvider(BaseModel):
    """Connection configuration for the Dune API.

    The provider is the only place a credential lives; handlers receive it
    through an ``EngineContext`` and never look at the process environment.

    Examples:
        # With an API key
        provider = DuneProvider(auth=ApiKeyAuth(api_key="my-api-key"), team="acme")

        # With an injected client (testing)
        provider = DuneProvider.from_client(MagicMock(), team="acme")
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    api_url: str = DEFAULT_API_URL
    auth: ApiKeyAuth | None = None
    team: str | None = None
    namespace: str = "dune"
    timeout: float = 30.0
    read_retries: int = 2

    # Injected client (for testing)
    _injected_client: Any = None

    @classmethod
    def from_client(cls, client: Any, **fields: Any) -> Self:
        """Create a provider with an injected client.

        An injected client counts as a configured credential.

        Args:
            client: Any object exposing ``post_json`` and ``get_json``
            **fields: Other provider fields (``team``, ``namespace``)
        """
        provider = cls(**fields)
        provider._injected_client = client
        return provider

    @property
    def has_credential(self) -> bool:
        """Whether credentialed calls can be made."""
        if self._injected_client is not None:
            return True
        return self.auth is not None and bool(self.auth.api_key.get_secret_value())

    @cached_property
    def client(self) -> DuneClient:
        """Get the Dune client.

        Raises:
            CredentialError: If no API key is configured.
        """
        if self._injected_client is not None:
            return self._injected_client

        if self.auth is None or not self.auth.api_key.get_secret_value():
            raise CredentialError

        return DuneClient(
            self.auth.api_key.get_secret_value(),
            base_url=self.api_url,
            timeout=self.timeout,
            read_retries=self.read_retries,
        )
