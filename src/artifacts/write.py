"""Documentation generation pipeline: load, index, render, write."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from contract.layout import BUCKET_SPECS, CONTENTS_TITLE, document_path
from docindex.index import DocumentIndex
from docindex.traverse import TraversalReport, collect_modules
from render.markdown import RenderError, RenderOptions, render
from settings.config import DocsConfig
from symbols.loader import load_symbol_documents

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping, Sequence
    from pathlib import Path

    from symbols.record import SymbolRecord

logger = logging.getLogger(__name__)


def load_modules(inputs: Sequence[Path]) -> list[list[SymbolRecord]]:
    """Load every analyzer output file; one module per file.

    Raises InputError on the first unreadable file, before anything is
    written.
    """
    return [[doc.root for doc in load_symbol_documents(path)] for path in inputs]


def build_index(
    modules: Sequence[Sequence[SymbolRecord]], config: DocsConfig | None = None
) -> tuple[DocumentIndex, TraversalReport]:
    """Traverse all modules into one finalized index."""
    if config is None:
        config = DocsConfig()
    index = DocumentIndex()
    report = collect_modules(
        modules, index, min_access_level=config.min_access_level
    )
    index.finalize()
    return index, report


def render_contents(
    index: DocumentIndex, rendered: Collection[str] | None = None
) -> str:
    """Render the root contents document listing every bucket's entities.

    With ``rendered``, only entities whose document path is in it are listed.
    """
    sections = [f"# {CONTENTS_TITLE}"]
    for name, spec in BUCKET_SPECS.items():
        entries = [
            (entity.name, document_path(name, entity.name))
            for entity in index.bucket(name)
        ]
        if rendered is not None:
            entries = [entry for entry in entries if entry[1] in rendered]
        if not entries:
            continue
        links = "\n".join(f"- [{title}]({path})" for title, path in entries)
        sections.append(f"## {spec.title}\n\n{links}")
    return "\n\n".join(sections) + "\n"


def render_documents(
    index: DocumentIndex,
    options: RenderOptions,
    contents_filename: str,
) -> dict[str, str]:
    """Render the whole index in memory as ``{relative path: markdown}``.

    Entities that fail to render are logged and left out.
    """
    documents: dict[str, str] = {}
    for bucket, entity in index.entities():
        try:
            text = render(entity, options)
        except RenderError as exc:
            logger.warning("Skipping %s document: %s", bucket, exc)
            continue
        path = document_path(bucket, entity.name)
        if path in documents:
            logger.warning(
                "%s document for %r overwrites another entity at %s",
                bucket,
                entity.name,
                path,
            )
        documents[path] = text

    documents[contents_filename] = render_contents(index, documents.keys())
    return documents


def write_documents(documents: Mapping[str, str], docs_path: Path) -> list[Path]:
    """Write rendered documents below ``docs_path`` in sorted path order."""
    written: list[Path] = []
    for relative_path in sorted(documents):
        path = docs_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(documents[relative_path])
        written.append(path)
    return written


def clean_documentation(docs_path: Path, contents_filename: str) -> list[Path]:
    """Remove previously generated bucket directories and the contents file.

    Anything else in ``docs_path`` is left untouched.
    """
    removed: list[Path] = []
    for spec in BUCKET_SPECS.values():
        bucket_dir = docs_path / spec.directory
        if bucket_dir.is_dir():
            shutil.rmtree(bucket_dir)
            removed.append(bucket_dir)

    contents_path = docs_path / contents_filename
    if contents_path.is_file():
        contents_path.unlink()
        removed.append(contents_path)

    for path in removed:
        logger.debug("Removed %s", path)
    return removed


def generate_documentation(
    *,
    inputs: Sequence[Path],
    docs_path: Path,
    config: DocsConfig | None = None,
) -> dict[str, object]:
    """Generate Markdown reference documentation from analyzer output.

    Args:
        inputs: Analyzer output files, one module result per file
        docs_path: Directory the documentation tree is written to
        config: Optional configuration (render options, clean, filtering)

    Returns:
        Dictionary with per-bucket entity counts, skipped record count and
        the list of written document paths.
    """
    if config is None:
        config = DocsConfig()

    modules = load_modules(inputs)
    index, report = build_index(modules, config)
    documents = render_documents(
        index, config.render_options, config.contents_filename
    )

    if config.clean:
        clean_documentation(docs_path, config.contents_filename)

    written = write_documents(documents, docs_path)
    logger.info(
        "Wrote %d document(s) for %d entity(ies) to %s",
        len(written),
        len(index),
        docs_path,
    )

    return {
        "entity_counts": {name: len(index.bucket(name)) for name in BUCKET_SPECS},
        "skipped_count": len(report.skipped),
        "documents": [str(path) for path in written],
    }
