"""Provider settings resolved from the environment."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from dune_provisioner.core.client import DEFAULT_API_URL
from dune_provisioner.core.provider import ApiKeyAuth, DuneProvider


class ProviderConfig(BaseSettings):
    """Dune provider connection settings.

    Fields can be set via constructor kwargs, environment variables with the
    ``DUNE_`` prefix, or a ``.env`` file in the working directory. Constructor
    kwargs take precedence.

    ``api_key`` is typically provided via the ``DUNE_API_KEY`` environment
    variable to avoid committing secrets to version control.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNE_",
        env_file=".env",
        env_file_encoding="utf-8-sig",
        extra="ignore",
    )

    api_key: SecretStr | None = None
    api_url: str = DEFAULT_API_URL
    team: str | None = None
    namespace: str = "dune"
    timeout: float = 30.0
    read_retries: int = 2

    def to_provider(self) -> DuneProvider:
        """Build the provider handed to the engine.

        An empty ``DUNE_API_KEY`` counts as unset.
        """
        auth = None
        if self.api_key is not None and self.api_key.get_secret_value():
            auth = ApiKeyAuth(api_key=self.api_key)
        return DuneProvider(
            api_url=self.api_url,
            auth=auth,
            team=self.team or None,
            namespace=self.namespace,
            timeout=self.timeout,
            read_retries=self.read_retries,
        )
