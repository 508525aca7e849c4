from __future__ import annotations

from pathlib import Path

import pytest

from artifacts.write import generate_documentation
from settings.config import DocsConfig
from verify.verify import DeterminismResult, verify_determinism

FIXTURE = Path(__file__).parent / "fixtures" / "sample_module.json"


def test_verify_determinism_requires_docs_dir(tmp_path: Path) -> None:
    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Documentation directory does not exist"):
        verify_determinism(inputs=[FIXTURE], docs_dir=missing_dir)


def test_regenerated_fixture_is_byte_identical(tmp_path: Path) -> None:
    docs_dir = tmp_path / "docs"
    generate_documentation(inputs=[FIXTURE], docs_path=docs_dir)

    result = verify_determinism(inputs=[FIXTURE], docs_dir=docs_dir)

    assert result == DeterminismResult(ok=True)


def test_verify_reports_render_option_drift(tmp_path: Path) -> None:
    docs_dir = tmp_path / "docs"
    generate_documentation(inputs=[FIXTURE], docs_path=docs_dir)

    result = verify_determinism(
        inputs=[FIXTURE],
        docs_dir=docs_dir,
        config=DocsConfig(table_of_contents=True),
    )

    assert not result.ok
    assert "structs/Foo.md" in result.mismatches
    assert "README.md" not in result.mismatches


def test_verify_determinism_relative_paths_and_sorted_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()

    for rel_path, content in (
        ("b.md", "b-original"),
        ("a.md", "a-original"),
        ("old.md", "old"),
    ):
        path = docs_dir / rel_path
        path.write_text(content, encoding="utf-8")

    def _fake_generate_documentation(
        *, inputs: list[Path], docs_path: Path, config: object
    ) -> dict[str, object]:
        (docs_path / "a.md").write_text("a-original", encoding="utf-8")
        (docs_path / "b.md").write_text("b-regenerated", encoding="utf-8")
        (docs_path / "new.md").write_text("new", encoding="utf-8")
        return {"documents": []}

    monkeypatch.setattr(
        "verify.verify.generate_documentation",
        _fake_generate_documentation,
    )

    result = verify_determinism(inputs=[], docs_dir=docs_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("b.md",),
        missing=("old.md",),
        extra=("new.md",),
    )
