"""CLI application for dune-provisioner.

Stdout is a JSON channel read by other tooling, so diagnostics always go to
stderr through a handler owned by the package logger.
"""

from __future__ import annotations

import logging
import os
import sys

import typer

from dune_provisioner import __version__

app = typer.Typer(
    name="dune-provisioner",
    no_args_is_help=True,
    add_completion=False,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "dune-provisioner-stderr"
_PACKAGE_LOGGER = "dune_provisioner"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dune-provisioner {__version__}")
        raise typer.Exit


def _log_level(verbose: int) -> int | None:
    """Level from ``DUNE_LOG`` (wins) or the ``-v`` count; ``None`` leaves logging alone."""
    name = os.environ.get("DUNE_LOG", "").strip().upper()
    if name:
        level = logging.getLevelName(name)
        if isinstance(level, int):
            return level
        typer.echo(f"WARNING: unknown DUNE_LOG level '{name}', using INFO", err=True)
        return logging.INFO
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return None


def _configure_logging(verbose: int) -> logging.Handler | None:
    """Attach one stderr handler to the package logger and return it."""
    level = _log_level(verbose)
    if level is None:
        return None

    pkg = logging.getLogger(_PACKAGE_LOGGER)
    for old in [h for h in pkg.handlers if h.get_name() == _HANDLER_NAME]:
        pkg.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    pkg.addHandler(handler)
    pkg.setLevel(level)
    # Root handlers may write to stdout; keep records off them.
    pkg.propagate = False
    return handler


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Log to stderr (-v info, -vv debug). DUNE_LOG=<level> overrides.",
    ),
) -> None:
    """Reconcile Dune queries and materialized views (JSON on stdin/stdout)."""
    _ = version
    _configure_logging(verbose)


# Register commands after app is created to avoid circular imports.
from dune_provisioner.cli import commands as _commands  # noqa: E402, F401
