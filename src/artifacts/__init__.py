"""Documentation generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from settings.config import DocsConfig


def generate_documentation(
    *,
    inputs: Sequence[Path],
    docs_path: Path,
    config: DocsConfig | None = None,
) -> dict[str, object]:
    """Generate documentation via lazy import to avoid package import cycles."""
    from artifacts.write import generate_documentation as _generate_documentation

    return _generate_documentation(inputs=inputs, docs_path=docs_path, config=config)


__all__ = ["generate_documentation"]
