"""Depth-first traversal of symbol record trees into the document index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from entities.classify import MalformedRecordError, classify
from symbols.keys import SymbolKey
from symbols.record import record_children, record_kind, record_str

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from docindex.index import DocumentIndex
    from entities.models import Entity
    from symbols.keys import AccessLevel
    from symbols.record import SymbolRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedRecord:
    """A record of a documentable kind that could not be classified."""

    kind: str
    name: str | None
    reason: str


@dataclass
class TraversalReport:
    entity_count: int = 0
    skipped: list[SkippedRecord] = field(default_factory=list)


Discovery = Union["Entity", SkippedRecord]


def walk(
    record: SymbolRecord, *, min_access_level: AccessLevel | None = None
) -> Iterator[Discovery]:
    """Yield discoveries for ``record`` and its descendants, pre-order.

    Children are always visited, whether or not the parent classified.
    """
    try:
        entity = classify(record, min_access_level=min_access_level)
    except MalformedRecordError as exc:
        kind = record_kind(record)
        yield SkippedRecord(
            kind=kind.value if kind is not None else "",
            name=record_str(record, SymbolKey.NAME),
            reason=str(exc),
        )
    else:
        if entity is not None:
            yield entity

    for child in record_children(record):
        yield from walk(child, min_access_level=min_access_level)


def _collect(
    roots: Iterable[SymbolRecord],
    index: DocumentIndex,
    report: TraversalReport,
    min_access_level: AccessLevel | None,
) -> None:
    for root in roots:
        for discovery in walk(root, min_access_level=min_access_level):
            if isinstance(discovery, SkippedRecord):
                logger.warning(
                    "Skipping malformed record %s: %s",
                    discovery.name or "<unnamed>",
                    discovery.reason,
                )
                report.skipped.append(discovery)
                continue
            index.append(discovery)
            report.entity_count += 1


def collect_modules(
    modules: Iterable[Sequence[SymbolRecord]],
    index: DocumentIndex,
    *,
    min_access_level: AccessLevel | None = None,
) -> TraversalReport:
    """Traverse module results (each a sequence of per-file root records)."""
    report = TraversalReport()
    for module in modules:
        _collect(module, index, report, min_access_level)
    return report


def collect_tree(
    root: SymbolRecord,
    index: DocumentIndex,
    *,
    min_access_level: AccessLevel | None = None,
) -> TraversalReport:
    """Traverse a single project-wide record tree."""
    report = TraversalReport()
    _collect([root], index, report, min_access_level)
    return report


__all__ = [
    "Discovery",
    "SkippedRecord",
    "TraversalReport",
    "collect_modules",
    "collect_tree",
    "walk",
]
