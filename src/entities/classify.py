"""Classification of symbol records into documentation entities."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from entities.models import (
    AliasEntity,
    EnumEntity,
    ExtensionEntity,
    Member,
    MemberKind,
    ProtocolEntity,
    SourceLocation,
    TypeEntity,
)
from symbols.keys import (
    EXTENSION_KINDS,
    METHOD_KINDS,
    PROPERTY_KINDS,
    TYPE_KINDS,
    AccessLevel,
    SymbolKey,
    SymbolKind,
)
from symbols.record import (
    record_access_level,
    record_children,
    record_int,
    record_kind,
    record_str,
)

if TYPE_CHECKING:
    from entities.models import Entity
    from symbols.record import SymbolRecord

_WHERE_CLAUSE = re.compile(r"\s+where\s+.*$", re.DOTALL)
_CASE_KINDS = frozenset({SymbolKind.ENUM_CASE, SymbolKind.ENUM_ELEMENT})


class MalformedRecordError(ValueError):
    """A record of a documentable kind lacks a required field."""

    def __init__(self, kind: SymbolKind, message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind


def extension_base_name(name: str) -> str:
    """Strip conformance list, generic clause and where clause from a name.

    >>> extension_base_name("Array: Equatable where Element: Equatable")
    'Array'
    """
    base = _WHERE_CLAUSE.sub("", name)
    base = base.split(":", 1)[0]
    base = base.split("<", 1)[0]
    return base.strip()


def _declaration(record: SymbolRecord, name: str) -> str:
    return (
        record_str(record, SymbolKey.PARSED_DECLARATION)
        or record_str(record, SymbolKey.TYPENAME)
        or name
    )


def _source_location(record: SymbolRecord) -> SourceLocation | None:
    file = record_str(record, SymbolKey.DOC_FILE)
    line = record_int(record, SymbolKey.DOC_LINE)
    if file is None and line is None:
        return None
    return SourceLocation(file=file, line=line)


def _is_visible(record: SymbolRecord, min_access_level: AccessLevel | None) -> bool:
    if min_access_level is None:
        return True
    level = record_access_level(record) or AccessLevel.INTERNAL
    return level >= min_access_level


def _required_name(record: SymbolRecord, kind: SymbolKind) -> str:
    name = record_str(record, SymbolKey.NAME)
    if name is None or not name.strip():
        raise MalformedRecordError(kind, "missing required 'key.name'")
    return name.strip()


def _build_member(
    record: SymbolRecord, kind: MemberKind, access_level: AccessLevel | None
) -> Member | None:
    name = record_str(record, SymbolKey.NAME)
    if name is None or not name.strip():
        return None
    return Member(
        name=name.strip(),
        kind=kind,
        declaration=_declaration(record, name.strip()),
        documentation_comment=record_str(record, SymbolKey.DOC_COMMENT),
        access_level=access_level,
        source_location=_source_location(record),
    )


def _collect_cases(record: SymbolRecord) -> list[Member]:
    """Cases of one ``enumcase`` wrapper or a bare ``enumelement``."""
    if record_kind(record) is SymbolKind.ENUM_ELEMENT:
        case = _build_member(record, "case", None)
        return [case] if case is not None else []

    # `case a, b` wraps its elements; the wrapper holds the comment.
    cases: list[Member] = []
    for element in record_children(record):
        if record_kind(element) is not SymbolKind.ENUM_ELEMENT:
            continue
        case = _build_member(element, "case", None)
        if case is None:
            continue
        if case.documentation_comment is None:
            case.documentation_comment = record_str(record, SymbolKey.DOC_COMMENT)
        cases.append(case)
    return cases


def collect_members(
    record: SymbolRecord,
    *,
    include_cases: bool = False,
    min_access_level: AccessLevel | None = None,
) -> list[Member]:
    """Build member descriptors from the record's immediate children.

    Nested type declarations are not members; traversal documents them on
    their own.
    """
    members: list[Member] = []
    for child in record_children(record):
        child_kind = record_kind(child)
        if child_kind in _CASE_KINDS:
            if include_cases:
                members.extend(_collect_cases(child))
            continue
        if child_kind in METHOD_KINDS:
            member_kind: MemberKind = "method"
        elif child_kind in PROPERTY_KINDS:
            member_kind = "property"
        else:
            continue
        if not _is_visible(child, min_access_level):
            continue
        member = _build_member(child, member_kind, record_access_level(child))
        if member is not None:
            members.append(member)
    return members


def classify(
    record: SymbolRecord, *, min_access_level: AccessLevel | None = None
) -> Entity | None:
    """Classify one symbol record.

    Returns None when the record is not a documentable top-level declaration
    (or is hidden by ``min_access_level``). Raises MalformedRecordError when
    the kind matches but a required field is missing. Does not look at the
    record's children beyond its immediate members.
    """
    kind = record_kind(record)
    if kind is None:
        return None

    if kind in TYPE_KINDS:
        name = _required_name(record, kind)
        if not _is_visible(record, min_access_level):
            return None
        return TypeEntity(
            name=name,
            type_kind="struct" if kind is SymbolKind.STRUCT else "class",
            members=collect_members(record, min_access_level=min_access_level),
            **_common_fields(record, name),
        )

    if kind in EXTENSION_KINDS:
        base_name = extension_base_name(_required_name(record, kind))
        if not base_name:
            raise MalformedRecordError(kind, "cannot resolve extended type name")
        # Extensions have no access level of their own worth filtering on.
        return ExtensionEntity(
            name=base_name,
            members=collect_members(record, min_access_level=min_access_level),
            **_common_fields(record, base_name),
        )

    if kind is SymbolKind.ENUM:
        name = _required_name(record, kind)
        if not _is_visible(record, min_access_level):
            return None
        return EnumEntity(
            name=name,
            members=collect_members(
                record, include_cases=True, min_access_level=min_access_level
            ),
            **_common_fields(record, name),
        )

    if kind is SymbolKind.PROTOCOL:
        name = _required_name(record, kind)
        if not _is_visible(record, min_access_level):
            return None
        return ProtocolEntity(
            name=name,
            members=collect_members(record, min_access_level=min_access_level),
            **_common_fields(record, name),
        )

    if kind is SymbolKind.TYPEALIAS:
        name = _required_name(record, kind)
        if not _is_visible(record, min_access_level):
            return None
        return AliasEntity(name=name, **_common_fields(record, name))

    return None


def _common_fields(record: SymbolRecord, name: str) -> dict[str, object]:
    return {
        "declaration": _declaration(record, name),
        "documentation_comment": record_str(record, SymbolKey.DOC_COMMENT),
        "access_level": record_access_level(record),
        "source_location": _source_location(record),
    }


__all__ = [
    "MalformedRecordError",
    "classify",
    "collect_members",
    "extension_base_name",
]
