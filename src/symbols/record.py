"""Read-only accessors over raw symbol records.

A symbol record is whatever mapping the analyzer produced for one
declaration. Values are not trusted: a wrong-typed value reads as missing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from symbols.keys import AccessLevel, SymbolKey, SymbolKind

SymbolRecord = Mapping[str, Any]


def record_str(record: SymbolRecord, key: SymbolKey) -> str | None:
    value = record.get(key.value)
    return value if isinstance(value, str) else None


def record_int(record: SymbolRecord, key: SymbolKey) -> int | None:
    value = record.get(key.value)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def record_kind(record: SymbolRecord) -> SymbolKind | None:
    return SymbolKind.parse(record_str(record, SymbolKey.KIND))


def record_access_level(record: SymbolRecord) -> AccessLevel | None:
    return AccessLevel.from_accessibility_key(
        record_str(record, SymbolKey.ACCESSIBILITY)
    )


def record_children(record: SymbolRecord) -> list[SymbolRecord]:
    """Return child records in declaration order, skipping non-mappings."""
    value = record.get(SymbolKey.SUBSTRUCTURE.value)
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return []
    return [child for child in value if isinstance(child, Mapping)]


__all__ = [
    "SymbolRecord",
    "record_access_level",
    "record_children",
    "record_int",
    "record_kind",
    "record_str",
]
