from __future__ import annotations

from typing import Any

import pytest

from entities.classify import MalformedRecordError, classify, extension_base_name
from entities.models import (
    AliasEntity,
    EnumEntity,
    ExtensionEntity,
    ProtocolEntity,
    TypeEntity,
)
from symbols.keys import AccessLevel

DECL = "source.lang.swift.decl."
PUBLIC = "source.lang.swift.accessibility.public"
PRIVATE = "source.lang.swift.accessibility.private"


def _record(kind: str, name: str | None, **extra: Any) -> dict[str, Any]:
    record: dict[str, Any] = {"key.kind": DECL + kind}
    if name is not None:
        record["key.name"] = name
    for key, value in extra.items():
        record[f"key.{key}"] = value
    return record


def test_struct_becomes_type_entity_with_members_in_source_order() -> None:
    record = _record(
        "struct",
        "Foo",
        parsed_declaration="public struct Foo",
        accessibility=PUBLIC,
        substructure=[
            _record("var.instance", "zeta", parsed_declaration="var zeta: Int"),
            _record("function.method.instance", "alpha()"),
            _record("var.static", "beta", parsed_declaration="static var beta: Int"),
        ],
    )

    entity = classify(record)

    assert isinstance(entity, TypeEntity)
    assert entity.type_kind == "struct"
    assert entity.name == "Foo"
    assert entity.declaration == "public struct Foo"
    assert entity.access_level is AccessLevel.PUBLIC
    assert [m.name for m in entity.members] == ["zeta", "alpha()", "beta"]
    assert [m.kind for m in entity.members] == ["property", "method", "property"]


def test_class_becomes_type_entity() -> None:
    entity = classify(_record("class", "Canvas"))

    assert isinstance(entity, TypeEntity)
    assert entity.type_kind == "class"
    assert entity.declaration == "Canvas"


def test_nested_types_are_not_members() -> None:
    record = _record(
        "class",
        "Outer",
        substructure=[
            _record("struct", "Inner"),
            _record("enum", "Mode"),
            _record("function.method.instance", "go()"),
        ],
    )

    entity = classify(record)

    assert entity is not None
    assert [m.name for m in entity.members] == ["go()"]


def test_extension_strips_conformance_list() -> None:
    record = _record(
        "extension.struct",
        "Foo: Equatable, Hashable",
        substructure=[_record("function.method.static", "==(_:_:)")],
    )

    entity = classify(record)

    assert isinstance(entity, ExtensionEntity)
    assert entity.name == "Foo"
    assert [m.name for m in entity.members] == ["==(_:_:)"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Foo", "Foo"),
        ("Foo: Codable", "Foo"),
        ("Array<Element>", "Array"),
        ("Array where Element: Equatable", "Array"),
        ("  Outer.Inner : P ", "Outer.Inner"),
    ],
)
def test_extension_base_name(raw: str, expected: str) -> None:
    assert extension_base_name(raw) == expected


def test_enum_collects_cases_from_case_wrappers_and_bare_elements() -> None:
    record = _record(
        "enum",
        "Shape",
        substructure=[
            _record(
                "enumcase",
                None,
                substructure=[
                    _record("enumelement", "circle", accessibility=PUBLIC),
                    _record("enumelement", "square"),
                ],
            ),
            _record("function.method.instance", "area()"),
            _record("enumelement", "triangle"),
        ],
    )

    entity = classify(record)

    assert isinstance(entity, EnumEntity)
    assert [(m.kind, m.name) for m in entity.members] == [
        ("case", "circle"),
        ("case", "square"),
        ("method", "area()"),
        ("case", "triangle"),
    ]
    assert all(m.access_level is None for m in entity.members if m.kind == "case")


def test_enum_case_inherits_wrapper_comment() -> None:
    wrapper = _record(
        "enumcase",
        None,
        substructure=[_record("enumelement", "on")],
    )
    wrapper["key.doc.comment"] = "Switched on."
    entity = classify(_record("enum", "Power", substructure=[wrapper]))

    assert entity is not None
    assert entity.members[0].documentation_comment == "Switched on."


def test_protocol_and_typealias() -> None:
    protocol = classify(
        _record(
            "protocol",
            "Drawable",
            substructure=[_record("function.method.instance", "draw()")],
        )
    )
    alias = classify(
        _record("typealias", "Point", parsed_declaration="typealias Point = (Int, Int)")
    )

    assert isinstance(protocol, ProtocolEntity)
    assert protocol.documentation_comment is None
    assert [m.name for m in protocol.members] == ["draw()"]
    assert isinstance(alias, AliasEntity)
    assert alias.members == []
    assert alias.declaration == "typealias Point = (Int, Int)"


@pytest.mark.parametrize(
    "record",
    [
        {"key.kind": DECL + "var.parameter", "key.name": "x"},
        {"key.kind": DECL + "function.free", "key.name": "main()"},
        {"key.kind": DECL + "var.instance", "key.name": "bar"},
        {"key.kind": "source.lang.swift.syntaxtype.comment.mark"},
        {"key.name": "NoKind"},
        {"key.kind": 42},
        {},
    ],
)
def test_non_documentable_records_return_none(record: dict[str, Any]) -> None:
    assert classify(record) is None


@pytest.mark.parametrize("kind", ["struct", "class", "enum", "protocol", "typealias"])
def test_missing_name_is_malformed(kind: str) -> None:
    with pytest.raises(MalformedRecordError, match="key.name"):
        classify(_record(kind, None))


def test_extension_with_blank_base_name_is_malformed() -> None:
    with pytest.raises(MalformedRecordError):
        classify(_record("extension", ": Equatable"))


def test_doc_comment_and_source_location_are_kept() -> None:
    record = _record("struct", "Foo")
    record["key.doc.comment"] = "  Keeps *markdown* and   spacing.\n- item"
    record["key.doc.file"] = "/src/Foo.swift"
    record["key.doc.line"] = 12

    entity = classify(record)

    assert entity is not None
    assert entity.documentation_comment == "  Keeps *markdown* and   spacing.\n- item"
    assert entity.source_location is not None
    assert entity.source_location.file == "/src/Foo.swift"
    assert entity.source_location.line == 12


def test_min_access_level_filters_entities_and_members() -> None:
    record = _record(
        "struct",
        "Foo",
        accessibility=PUBLIC,
        substructure=[
            _record("var.instance", "shown", accessibility=PUBLIC),
            _record("var.instance", "hidden", accessibility=PRIVATE),
            _record("var.instance", "implicit"),
        ],
    )

    entity = classify(record, min_access_level=AccessLevel.PUBLIC)
    hidden = classify(
        _record("struct", "Secret", accessibility=PRIVATE),
        min_access_level=AccessLevel.INTERNAL,
    )

    assert entity is not None
    assert [m.name for m in entity.members] == ["shown"]
    assert hidden is None


def test_classify_does_not_mutate_record() -> None:
    record = _record(
        "struct",
        "Foo",
        substructure=[_record("var.instance", "bar")],
    )
    snapshot = repr(record)

    classify(record)

    assert repr(record) == snapshot
