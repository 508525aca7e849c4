"""Load analyzer output (SourceKitten ``doc`` JSON) into symbol records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import orjson

from symbols.keys import SymbolKey

if TYPE_CHECKING:
    from pathlib import Path

    from symbols.record import SymbolRecord

logger = logging.getLogger(__name__)

_ANALYZER_KEY_PREFIX = "key."


class InputError(Exception):
    """Raised when analyzer output cannot be read or has an unknown shape."""


@dataclass(frozen=True)
class SymbolDocument:
    """One source file's record tree (or one project-wide tree)."""

    source: str
    root: SymbolRecord


def _looks_like_record(value: Mapping[str, Any]) -> bool:
    """A {file path: record} map has only Mapping values and no analyzer keys.

    Anything else is a record, including one without kind or children (an
    empty source file).
    """
    if SymbolKey.KIND.value in value or SymbolKey.SUBSTRUCTURE.value in value:
        return True
    if not value:
        return False
    return any(
        str(key).startswith(_ANALYZER_KEY_PREFIX) or not isinstance(item, Mapping)
        for key, item in value.items()
    )


def _documents_from_entry(entry: object, origin: str) -> list[SymbolDocument]:
    if not isinstance(entry, Mapping):
        msg = f"{origin}: expected a JSON object, got {type(entry).__name__}"
        raise InputError(msg)

    if _looks_like_record(entry):
        return [SymbolDocument(source=origin, root=entry)]

    # {"<file path>": {record}} as emitted per source file.
    documents: list[SymbolDocument] = []
    for file_path, record in entry.items():
        documents.append(SymbolDocument(source=str(file_path), root=record))
    return documents


def parse_symbol_documents(payload: object, origin: str) -> list[SymbolDocument]:
    """Normalize decoded analyzer output into a list of documents.

    Accepts either a module result (a JSON array of per-file objects or of
    bare records) or a single project-wide record tree.
    """
    if isinstance(payload, list):
        documents: list[SymbolDocument] = []
        for entry in payload:
            documents.extend(_documents_from_entry(entry, origin))
        return documents

    if isinstance(payload, Mapping):
        return _documents_from_entry(payload, origin)

    msg = f"{origin}: unsupported analyzer output ({type(payload).__name__})"
    raise InputError(msg)


def load_symbol_documents(path: Path) -> list[SymbolDocument]:
    """Read one analyzer output file."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Failed to read analyzer output {path}: {exc}"
        raise InputError(msg) from exc

    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in analyzer output {path}: {exc}"
        raise InputError(msg) from exc

    documents = parse_symbol_documents(payload, str(path))
    logger.debug("Loaded %d symbol document(s) from %s", len(documents), path)
    return documents


__all__ = [
    "InputError",
    "SymbolDocument",
    "load_symbol_documents",
    "parse_symbol_documents",
]
