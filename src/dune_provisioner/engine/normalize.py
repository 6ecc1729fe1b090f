"""Canonical field extraction from heterogeneous API responses.

The Dune API is not consistent about where it puts things: query creation
may answer ``{"query_id": 1}`` or ``{"base": {"query_id": 1}}`` depending on
the endpoint version, and identifiers come back as numbers or strings. Every
reply is funneled through here so the rest of the engine only ever sees one
canonical identifier type (``str``) and typed errors instead of ``None``.
"""

from __future__ import annotations

from typing import Any

from dune_provisioner.engine.errors import MissingIdentifier, RemoteRejected

# Known locations of an identifier, tried in order.
QUERY_ID_SHAPES: tuple[tuple[str, ...], ...] = (
    ("query_id",),
    ("base", "query_id"),
)

_NULL_IDS = frozenset({"", "0", "null", "none"})


def canonical_id(value: Any) -> str | None:
    """Convert an identifier from either JSON type to its canonical ``str`` form.

    Returns ``None`` for values that do not identify anything (``None``,
    empty, ``"null"``, ``0``). Integral floats lose their fraction.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    if text.lower() in _NULL_IDS:
        return None
    return text


def is_blank(value: Any) -> bool:
    """True for values a caller did not really provide."""
    return value is None or (isinstance(value, str) and value.strip() in {"", "null"})


def extract_error(payload: dict[str, Any]) -> str | None:
    """Return the explicit error message of *payload*, if any."""
    error = payload.get("error")
    if error is None or error == "":
        return None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)


def raise_for_error(payload: dict[str, Any], *, status_code: int | None = None) -> None:
    """Raise ``RemoteRejected`` if *payload* carries an error.

    An HTTP error status without an ``error`` field is still a rejection.
    """
    message = extract_error(payload)
    if message is not None:
        raise RemoteRejected(message, status_code=status_code)
    if status_code is not None and status_code >= 400:
        raise RemoteRejected(f"HTTP {status_code}: {payload}", status_code=status_code)


def _dig(payload: dict[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def extract_id(
    payload: dict[str, Any],
    *,
    shapes: tuple[tuple[str, ...], ...] = QUERY_ID_SHAPES,
    resource_type: str = "query",
    status_code: int | None = None,
) -> str:
    """Extract the canonical identifier from *payload*.

    An explicit error payload wins over a missing identifier.

    Raises:
        RemoteRejected: If the payload carries an ``error``.
        MissingIdentifier: If no known shape yields an identifier.
    """
    raise_for_error(payload, status_code=status_code)
    for path in shapes:
        found = canonical_id(_dig(payload, path))
        if found is not None:
            return found
    raise MissingIdentifier(resource_type, payload)


def extract_name(payload: dict[str, Any]) -> str | None:
    """Return the ``name`` field of *payload* if it is a usable string."""
    name = payload.get("name")
    if is_blank(name):
        return None
    return str(name)
