"""Engine error types."""

from __future__ import annotations


class ProvisionerError(Exception):
    """Base exception for reconciliation errors."""


class ValidationError(ProvisionerError):
    """One or more required fields are missing or malformed."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        msg = "Validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(msg)


class CredentialError(ProvisionerError):
    """Raised when a credentialed call is attempted without an API key."""

    def __init__(self, message: str = "Dune API key is not configured") -> None:
        super().__init__(message)


class RemoteRejected(ProvisionerError):
    """The API answered with an explicit error payload.

    ``str(exc)`` is the remote message, unmodified.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MissingIdentifier(ProvisionerError):
    """A success-shaped response carried no recognized identifier field."""

    def __init__(self, resource_type: str, payload: object) -> None:
        super().__init__(f"Failed to extract {resource_type} id from response: {payload!r}")
        self.resource_type = resource_type
        self.payload = payload


class TransportFailure(ProvisionerError):
    """Network or connection-level failure.

    Distinct from a remote rejection and from a resource being absent. The
    original exception is chained via ``__cause__``.
    """

    def __init__(self, method: str, url: str, message: str) -> None:
        super().__init__(f"{method} {url} failed: {message}")
        self.method = method
        self.url = url
