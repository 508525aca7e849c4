"""Key, kind and access-level vocabularies of the analyzer output.

The analyzer (SourceKitten ``doc``) emits one dictionary per declaration.
Only the keys and kind tags listed here are understood; everything else is
ignored.
"""

from __future__ import annotations

from enum import Enum

ACCESSIBILITY_PREFIX = "source.lang.swift.accessibility."


class SymbolKey(str, Enum):
    """Dictionary keys read from a symbol record."""

    KIND = "key.kind"
    NAME = "key.name"
    PARSED_DECLARATION = "key.parsed_declaration"
    TYPENAME = "key.typename"
    DOC_COMMENT = "key.doc.comment"
    ACCESSIBILITY = "key.accessibility"
    SUBSTRUCTURE = "key.substructure"
    DOC_FILE = "key.doc.file"
    DOC_LINE = "key.doc.line"


class SymbolKind(str, Enum):
    """Declaration kind tags (``key.kind`` values)."""

    STRUCT = "source.lang.swift.decl.struct"
    CLASS = "source.lang.swift.decl.class"
    ENUM = "source.lang.swift.decl.enum"
    PROTOCOL = "source.lang.swift.decl.protocol"
    TYPEALIAS = "source.lang.swift.decl.typealias"
    EXTENSION = "source.lang.swift.decl.extension"
    EXTENSION_STRUCT = "source.lang.swift.decl.extension.struct"
    EXTENSION_CLASS = "source.lang.swift.decl.extension.class"
    EXTENSION_ENUM = "source.lang.swift.decl.extension.enum"
    EXTENSION_PROTOCOL = "source.lang.swift.decl.extension.protocol"
    ENUM_CASE = "source.lang.swift.decl.enumcase"
    ENUM_ELEMENT = "source.lang.swift.decl.enumelement"
    METHOD_INSTANCE = "source.lang.swift.decl.function.method.instance"
    METHOD_STATIC = "source.lang.swift.decl.function.method.static"
    METHOD_CLASS = "source.lang.swift.decl.function.method.class"
    CONSTRUCTOR = "source.lang.swift.decl.function.constructor"
    SUBSCRIPT = "source.lang.swift.decl.function.subscript"
    OPERATOR = "source.lang.swift.decl.function.operator"
    VAR_INSTANCE = "source.lang.swift.decl.var.instance"
    VAR_STATIC = "source.lang.swift.decl.var.static"
    VAR_CLASS = "source.lang.swift.decl.var.class"

    @classmethod
    def parse(cls, value: str | None) -> SymbolKind | None:
        """Return the kind for a raw tag, or None for tags we do not know."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


TYPE_KINDS = frozenset({SymbolKind.STRUCT, SymbolKind.CLASS})

EXTENSION_KINDS = frozenset(
    {
        SymbolKind.EXTENSION,
        SymbolKind.EXTENSION_STRUCT,
        SymbolKind.EXTENSION_CLASS,
        SymbolKind.EXTENSION_ENUM,
        SymbolKind.EXTENSION_PROTOCOL,
    }
)

METHOD_KINDS = frozenset(
    {
        SymbolKind.METHOD_INSTANCE,
        SymbolKind.METHOD_STATIC,
        SymbolKind.METHOD_CLASS,
        SymbolKind.CONSTRUCTOR,
        SymbolKind.SUBSCRIPT,
        SymbolKind.OPERATOR,
    }
)

PROPERTY_KINDS = frozenset(
    {
        SymbolKind.VAR_INSTANCE,
        SymbolKind.VAR_STATIC,
        SymbolKind.VAR_CLASS,
    }
)


class AccessLevel(str, Enum):
    """Declared visibility, ordered from least to most visible."""

    PRIVATE = "private"
    FILEPRIVATE = "fileprivate"
    INTERNAL = "internal"
    PUBLIC = "public"
    OPEN = "open"

    @property
    def priority(self) -> int:
        return _ACCESS_ORDER.index(self)

    @property
    def accessibility_key(self) -> str:
        return f"{ACCESSIBILITY_PREFIX}{self.value}"

    @classmethod
    def from_accessibility_key(cls, value: str | None) -> AccessLevel | None:
        """Parse ``source.lang.swift.accessibility.<level>`` (or a bare level)."""
        if not value:
            return None
        level = value.removeprefix(ACCESSIBILITY_PREFIX).lower()
        try:
            return cls(level)
        except ValueError:
            return None

    # str comparison would order by spelling, so all four are overridden.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.priority < other.priority

    def __le__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.priority <= other.priority

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.priority > other.priority

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, AccessLevel):
            return NotImplemented
        return self.priority >= other.priority


_ACCESS_ORDER = (
    AccessLevel.PRIVATE,
    AccessLevel.FILEPRIVATE,
    AccessLevel.INTERNAL,
    AccessLevel.PUBLIC,
    AccessLevel.OPEN,
)


__all__ = [
    "ACCESSIBILITY_PREFIX",
    "EXTENSION_KINDS",
    "METHOD_KINDS",
    "PROPERTY_KINDS",
    "TYPE_KINDS",
    "AccessLevel",
    "SymbolKey",
    "SymbolKind",
]
