"""Connection details of a controller and their JSON form."""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from dataclasses import dataclass

_FIELDS = (
    ("main_address", "mainAddress"),
    ("additional_address", "additionalAddress"),
    ("password", "password"),
)


@dataclass(frozen=True)
class ConnectionInfo:
    """A main address, an additional address and a password."""

    main_address: str = ""
    additional_address: str = ""
    password: str = ""


def to_json(info: ConnectionInfo) -> str:
    """Encode as a JSON object indented by four spaces, keys sorted."""
    document = {key: getattr(info, attribute) for attribute, key in _FIELDS}
    return json.dumps(document, indent=4, sort_keys=True, ensure_ascii=False)


def from_json(text: str) -> ConnectionInfo:
    """Decode the text produced by :func:`to_json`.

    Raises ValueError on malformed JSON, TypeError when the document is not an
    object or a field is not a string, and KeyError when a field is missing.
    """
    document = json.loads(text)
    if not isinstance(document, dict):
        raise TypeError("connection info JSON must be an object")
    values = {}
    for attribute, key in _FIELDS:
        if key not in document:
            raise KeyError(f"missing field {key!r}")
        value = document[key]
        if not isinstance(value, str):
            raise TypeError(f"field {key!r} must be a string")
        values[attribute] = value
    return ConnectionInfo(**values)


def main(argv: Sequence[str] | None = None) -> int:
    """Print a sample connection info as JSON and whether it survives a round trip."""
    del argv
    password = "password"
    info = ConnectionInfo("10.10.10.10", "10.10.10.11", password)
    text = to_json(info)
    sys.stdout.write(text + "\n")
    sys.stdout.write(("true" if from_json(text) == info else "false") + "\n")
    return 0