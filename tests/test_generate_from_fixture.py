from __future__ import annotations

import shutil
from pathlib import Path

import pytest

import artifacts.write
from artifacts.write import (
    build_index,
    clean_documentation,
    generate_documentation,
    load_modules,
    render_contents,
    render_documents,
)
from contract.validation import validate_documentation
from docindex.index import DocumentIndex
from entities.models import TypeEntity
from render.markdown import RenderError, RenderOptions, render
from settings.config import DocsConfig
from symbols.loader import InputError

FIXTURE = Path(__file__).parent / "fixtures" / "sample_module.json"


def _copy_fixture(tmp_path: Path) -> Path:
    target = tmp_path / "sample_module.json"
    shutil.copyfile(FIXTURE, target)
    return target


def test_fixture_buckets_after_merge_and_sort() -> None:
    index, report = build_index(load_modules([FIXTURE]))

    assert report.entity_count == 8
    assert report.skipped == []
    buckets = ("classes", "enums", "extensions", "protocols", "structs", "typealiases")
    assert {b: [e.name for e in index.bucket(b)] for b in buckets} == {
        "classes": ["Canvas"],
        "enums": ["Shape"],
        "extensions": ["String"],
        "protocols": ["Drawable"],
        "structs": ["Foo", "Inner"],
        "typealiases": ["Point"],
    }
    foo = index.bucket("structs")[0]
    assert [m.name for m in foo.members] == ["bar", "baz()"]
    shape = index.bucket("enums")[0]
    assert [m.name for m in shape.members] == ["circle", "square", "area()"]


def test_contents_document_lists_buckets_in_order() -> None:
    index, _ = build_index(load_modules([FIXTURE]))

    contents = render_contents(index)

    assert contents.startswith("# Reference Documentation\n")
    assert "- [Foo](structs/Foo.md)\n- [Inner](structs/Inner.md)" in contents
    assert "- [String](extensions/String.md)" in contents
    headings = [line for line in contents.splitlines() if line.startswith("## ")]
    assert headings == [
        "## Classes",
        "## Enums",
        "## Extensions",
        "## Protocols",
        "## Structs",
        "## Typealiases",
    ]


def test_generate_writes_tree_that_validates(tmp_path: Path) -> None:
    docs_path = tmp_path / "docs"
    config = DocsConfig(table_of_contents=True, collapsible_sections=True)

    summary = generate_documentation(
        inputs=[_copy_fixture(tmp_path)], docs_path=docs_path, config=config
    )

    assert summary["skipped_count"] == 0
    assert summary["entity_counts"] == {
        "classes": 1,
        "enums": 1,
        "extensions": 1,
        "protocols": 1,
        "structs": 2,
        "typealiases": 1,
    }
    assert (docs_path / "README.md").is_file()
    assert (docs_path / "structs" / "Foo.md").is_file()
    assert (docs_path / "extensions" / "String.md").is_file()
    assert not (docs_path / "extensions" / "Foo.md").exists()

    foo = (docs_path / "structs" / "Foo.md").read_text(encoding="utf-8")
    assert "### `baz()`" in foo
    assert "Does the baz." in foo

    validation = validate_documentation(docs_path)
    assert validation.errors == [], [m.to_dict() for m in validation.errors]
    assert validation.warnings == []


def test_custom_contents_filename(tmp_path: Path) -> None:
    docs_path = tmp_path / "docs"
    config = DocsConfig(contents_filename="Index.md")

    generate_documentation(inputs=[FIXTURE], docs_path=docs_path, config=config)

    assert (docs_path / "Index.md").is_file()
    assert not (docs_path / "README.md").exists()
    assert validate_documentation(docs_path, "Index.md").ok


def test_unreadable_input_writes_nothing(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    docs_path = tmp_path / "docs"

    with pytest.raises(InputError, match="Invalid JSON"):
        generate_documentation(inputs=[FIXTURE, broken], docs_path=docs_path)

    assert not docs_path.exists()


def test_clean_removes_only_generated_files(tmp_path: Path) -> None:
    docs_path = tmp_path / "docs"
    generate_documentation(inputs=[FIXTURE], docs_path=docs_path)
    keep = docs_path / "notes.txt"
    keep.write_text("mine", encoding="utf-8")

    removed = clean_documentation(docs_path, "README.md")

    assert docs_path / "README.md" in removed
    assert not (docs_path / "structs").exists()
    assert keep.read_text(encoding="utf-8") == "mine"


def test_generate_with_clean_drops_stale_documents(tmp_path: Path) -> None:
    docs_path = tmp_path / "docs"
    stale = docs_path / "classes" / "Gone.md"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    generate_documentation(
        inputs=[FIXTURE], docs_path=docs_path, config=DocsConfig(clean=True)
    )

    assert not stale.exists()
    assert (docs_path / "classes" / "Canvas.md").is_file()


def test_validation_reports_broken_link(tmp_path: Path) -> None:
    docs_path = tmp_path / "docs"
    generate_documentation(inputs=[FIXTURE], docs_path=docs_path)
    (docs_path / "structs" / "Inner.md").unlink()

    result = validate_documentation(docs_path)

    assert not result.ok
    assert any("structs/Inner.md" in m.message for m in result.errors)


def test_contents_omits_entities_that_failed_to_render(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    index, _ = build_index(load_modules([FIXTURE]))

    def failing_render(entity, options=None):
        if entity.name == "Inner":
            raise RenderError("Inner: cannot render")
        return render(entity, options)

    monkeypatch.setattr(artifacts.write, "render", failing_render)

    documents = render_documents(index, RenderOptions(), "README.md")

    assert "structs/Inner.md" not in documents
    assert "structs/Foo.md" in documents
    contents = documents["README.md"]
    assert "structs/Inner.md" not in contents
    assert "- [Foo](structs/Foo.md)" in contents


def test_colliding_filenames_log_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    index = DocumentIndex()
    for name in ("A B", "A/B"):
        index.append(
            TypeEntity(name=name, type_kind="struct", declaration=f"struct {name}")
        )
    index.finalize()

    with caplog.at_level("WARNING", logger="artifacts.write"):
        documents = render_documents(index, RenderOptions(), "README.md")

    assert "structs/A_B.md" in documents
    assert "overwrites another entity at structs/A_B.md" in caplog.text
