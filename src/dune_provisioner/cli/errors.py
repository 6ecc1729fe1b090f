"""Map exceptions to JSON error payloads on stderr and exit codes."""

from __future__ import annotations

import json

import pydantic
import typer


def _emit(message: str) -> None:
    typer.echo(json.dumps({"error": message}), err=True)


def handle_error(exc: Exception) -> int:
    """Print ``{"error": ...}`` to stderr and return an exit code.

    All errors map to exit code 1.  No tracebacks are printed.
    """
    from dune_provisioner.engine.errors import RemoteRejected, ValidationError

    if isinstance(exc, ValidationError):
        _emit("; ".join(exc.errors))
    elif isinstance(exc, RemoteRejected):
        _emit(exc.message)
    elif isinstance(exc, pydantic.ValidationError):
        _emit("; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()))
    elif isinstance(exc, json.JSONDecodeError):
        _emit(f"Invalid JSON input: {exc}")
    else:
        _emit(str(exc))

    return 1
