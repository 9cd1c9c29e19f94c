"""
Provides lightweight I/O helpers for serializing catalog data in compositelab.

These helpers cover JSON encoding of exported documents and deterministic ordering of identifiers.
They are not tied to any specific page or rendering logic.
"""

import json
from pathlib import Path
from typing import Any, Iterable

from natsort import natsorted

from compositelab.utils.validation import validate_path

EXPORT_INDENT = 2


def sorted_identifiers(identifiers: Iterable[str]) -> list[str]:
    """Return identifiers in natural order (``T300`` before ``T1000``)."""
    return natsorted(identifiers)


def to_json_bytes(payload: Any) -> bytes:
    """Serialize ``payload`` as an indented UTF-8 JSON document."""
    return json.dumps(payload, indent=EXPORT_INDENT, ensure_ascii=False).encode("utf-8")


def parse_json_bytes(payload: bytes | str) -> Any:
    """
    Decode a JSON document from raw bytes or text.

    Raises
    ------
    ValueError
        If the payload is not valid UTF-8 JSON or nests too deeply to decode.
    """
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        return json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise ValueError(f"Invalid JSON document: {e}") from e


def write_bytes(directory: str | Path, filename: str, payload: bytes) -> Path:
    """
    Write ``payload`` as ``filename`` inside an existing ``directory``.

    Parameters
    ----------
    directory : str or Path
        Destination directory; must exist and be readable.
    filename : str
        Bare file name (no directory components).
    payload : bytes
        Content to write.

    Returns
    -------
    Path
        Path of the written file.
    """
    directory = validate_path(directory)
    if Path(filename).name != filename:
        raise ValueError(f"Export file name must not contain directories: {filename!r}")

    target = directory / filename
    target.write_bytes(payload)
    return target
