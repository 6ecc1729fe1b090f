"""Engine-facing handler interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from dune_provisioner.engine.errors import CredentialError, ValidationError
from dune_provisioner.resources.base import Resource

if TYPE_CHECKING:
    from dune_provisioner.core import DuneProvider
    from dune_provisioner.core.client import DuneClient

R = TypeVar("R", bound=Resource)


@dataclass(frozen=True)
class EngineContext:
    """Context passed to handlers."""

    provider: DuneProvider

    def require_client(self) -> DuneClient:
        """Return the API client, failing fast when no credential is set."""
        if not self.provider.has_credential:
            raise CredentialError
        return self.provider.client


class ResourceHandler(Generic[R]):
    """Base class for resource handlers.

    Handlers translate resources into Dune API calls. They hold no state, so
    one handler instance may serve many resources concurrently.
    """

    def validate(self, ctx: EngineContext, desired: R) -> list[str]:
        """Single-resource validation.

        Return list of error messages (empty = valid).
        """
        _ = ctx
        return [f"{field} is required" for field in desired.missing_fields()]

    def check(self, ctx: EngineContext, desired: R) -> None:
        """Raise ``ValidationError`` if :meth:`validate` reports anything."""
        errors = self.validate(ctx, desired)
        if errors:
            raise ValidationError(errors)
