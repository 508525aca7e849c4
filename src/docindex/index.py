"""Document index: bucketed entities with merge-then-sort finalization."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from contract.layout import BUCKET_SPECS
from entities.models import (
    AliasEntity,
    EnumEntity,
    ExtensionEntity,
    ProtocolEntity,
    TypeEntity,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from contract.layout import BucketName
    from entities.models import Entity

logger = logging.getLogger(__name__)

# Extensions are folded into the first base entity found in this order.
MERGE_PRIORITY: tuple[BucketName, ...] = ("structs", "classes", "enums", "protocols")


class IndexState(str, Enum):
    OPEN = "open"
    MERGED = "merged"
    SORTED = "sorted"


class IndexStateError(RuntimeError):
    """Raised when the index is used out of its open -> merged -> sorted order."""


def bucket_for(entity: Entity) -> BucketName:
    """Return the output bucket an entity belongs to."""
    if isinstance(entity, TypeEntity):
        return "structs" if entity.type_kind == "struct" else "classes"
    if isinstance(entity, ExtensionEntity):
        return "extensions"
    if isinstance(entity, EnumEntity):
        return "enums"
    if isinstance(entity, ProtocolEntity):
        return "protocols"
    if isinstance(entity, AliasEntity):
        return "typealiases"
    msg = f"Unknown entity variant: {type(entity).__name__}"
    raise TypeError(msg)


class DocumentIndex:
    """Entities discovered during one generation run, grouped by bucket.

    ``append`` is only allowed while the index is open. ``finalize_merges``
    must run before ``finalize_sort``; both are no-ops when repeated.
    """

    def __init__(self) -> None:
        self._buckets: dict[BucketName, list[Entity]] = {
            name: [] for name in BUCKET_SPECS
        }
        self._state = IndexState.OPEN

    @property
    def state(self) -> IndexState:
        return self._state

    def __len__(self) -> int:
        return sum(len(entities) for entities in self._buckets.values())

    def bucket(self, name: BucketName) -> tuple[Entity, ...]:
        return tuple(self._buckets[name])

    def entities(self) -> Iterator[tuple[BucketName, Entity]]:
        """Yield ``(bucket, entity)`` pairs in bucket order, then index order."""
        for name, entities in self._buckets.items():
            for entity in entities:
                yield name, entity

    def find(self, bucket: BucketName, name: str) -> Entity | None:
        for entity in self._buckets[bucket]:
            if entity.name == name:
                return entity
        return None

    def append(self, entity: Entity) -> None:
        """Add an entity to its bucket.

        A type, enum or protocol whose name is already present has its
        members appended to the existing entity (a declaration split across
        files). Extensions and aliases are always added; extensions are
        resolved by ``finalize_merges``.
        """
        if self._state is not IndexState.OPEN:
            msg = f"Cannot append {entity.name!r}: index is already {self._state.value}"
            raise IndexStateError(msg)

        bucket = bucket_for(entity)
        if bucket in MERGE_PRIORITY:
            existing = self.find(bucket, entity.name)
            if existing is not None:
                existing.merge_members(entity.members)
                if existing.documentation_comment is None:
                    existing.documentation_comment = entity.documentation_comment
                logger.debug("Merged partial declaration of %s", entity.name)
                return

        self._buckets[bucket].append(entity)

    def _merge_target(self, name: str) -> Entity | None:
        for bucket in MERGE_PRIORITY:
            target = self.find(bucket, name)
            if target is not None:
                return target
        return None

    def finalize_merges(self) -> None:
        """Fold extensions into their base entities.

        Extensions without a base entity stay standalone; several standalone
        extensions of the same name are coalesced into the first one.
        """
        if self._state is not IndexState.OPEN:
            return

        standalone: list[Entity] = []
        by_name: dict[str, Entity] = {}
        for extension in self._buckets["extensions"]:
            target = self._merge_target(extension.name)
            if target is not None:
                added = target.merge_members(extension.members)
                logger.debug(
                    "Merged extension of %s (%d member(s))", extension.name, added
                )
                continue

            previous = by_name.get(extension.name)
            if previous is not None:
                previous.merge_members(extension.members)
                continue
            by_name[extension.name] = extension
            standalone.append(extension)

        self._buckets["extensions"] = standalone
        self._state = IndexState.MERGED

    def finalize_sort(self) -> None:
        """Sort every bucket by name (case-sensitive, ascending, stable)."""
        if self._state is IndexState.OPEN:
            msg = "finalize_merges() must run before finalize_sort()"
            raise IndexStateError(msg)
        if self._state is IndexState.SORTED:
            return

        for entities in self._buckets.values():
            entities.sort(key=lambda entity: entity.name)
        self._state = IndexState.SORTED

    def finalize(self) -> None:
        self.finalize_merges()
        self.finalize_sort()


__all__ = [
    "MERGE_PRIORITY",
    "DocumentIndex",
    "IndexState",
    "IndexStateError",
    "bucket_for",
]
