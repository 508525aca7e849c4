"""Determinism verification for generated documentation."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.write import generate_documentation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from settings.config import DocsConfig


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _list_files(root: Path) -> set[Path]:
    return {path for path in root.rglob("*") if path.is_file()}


def _list_relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in _list_files(root)}


def verify_determinism(
    *,
    inputs: Sequence[Path],
    docs_dir: Path,
    config: DocsConfig | None = None,
) -> DeterminismResult:
    """Verify that generated documentation matches a fresh regeneration.

    Regenerates documentation from ``inputs`` into a temporary directory and
    compares it byte-for-byte against ``docs_dir``. File sets are compared on
    relative paths.

    Args:
        inputs: Analyzer output files the documentation was generated from.
        docs_dir: Directory containing the existing documentation.
        config: Configuration used for generation (render options matter).

    Returns:
        DeterminismResult with ok status and lists of missing, extra, and
        mismatched relative paths.

    Raises:
        FileNotFoundError: If docs_dir does not exist.
        NotADirectoryError: If docs_dir is not a directory.
    """
    if not docs_dir.exists():
        msg = f"Documentation directory does not exist: {docs_dir}"
        raise FileNotFoundError(msg)
    if not docs_dir.is_dir():
        msg = f"Documentation path is not a directory: {docs_dir}"
        raise NotADirectoryError(msg)

    if config is not None and config.clean:
        config = config.model_copy(update={"clean": False})

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_documentation(inputs=inputs, docs_path=temp_path, config=config)

        original_files = _list_relative_files(docs_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(str(path) for path in original_files - regenerated_files)
        extra = sorted(str(path) for path in regenerated_files - original_files)

        mismatches: list[str] = []
        for path in sorted(original_files & regenerated_files):
            regenerated_path = temp_path / path
            original_path = docs_dir / path
            if not filecmp.cmp(original_path, regenerated_path, shallow=False):
                mismatches.append(str(path))

    ok = not missing and not extra and not mismatches
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )
