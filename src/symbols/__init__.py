"""Symbol record access for sourcedocs."""

from symbols.keys import AccessLevel, SymbolKey, SymbolKind
from symbols.loader import (
    InputError,
    SymbolDocument,
    load_symbol_documents,
    parse_symbol_documents,
)
from symbols.record import (
    SymbolRecord,
    record_access_level,
    record_children,
    record_int,
    record_kind,
    record_str,
)

__all__ = [
    "AccessLevel",
    "InputError",
    "SymbolDocument",
    "SymbolKey",
    "SymbolKind",
    "SymbolRecord",
    "load_symbol_documents",
    "parse_symbol_documents",
    "record_access_level",
    "record_children",
    "record_int",
    "record_kind",
    "record_str",
]
