"""Document index and the traversal that fills it."""

from docindex.index import (
    MERGE_PRIORITY,
    DocumentIndex,
    IndexState,
    IndexStateError,
    bucket_for,
)
from docindex.traverse import (
    SkippedRecord,
    TraversalReport,
    collect_modules,
    collect_tree,
    walk,
)

__all__ = [
    "MERGE_PRIORITY",
    "DocumentIndex",
    "IndexState",
    "IndexStateError",
    "SkippedRecord",
    "TraversalReport",
    "bucket_for",
    "collect_modules",
    "collect_tree",
    "walk",
]
