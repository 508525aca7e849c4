"""Output layout contract for generated documentation.

The bucket directory names and the contents document are the stable surface
other tooling links against. Bucket order here is the section order of the
contents document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

BucketName = Literal[
    "classes", "enums", "extensions", "protocols", "structs", "typealiases"
]

DEFAULT_OUTPUT_DIR = "Documentation/Reference"
DEFAULT_CONTENTS_FILENAME = "README.md"
CONTENTS_TITLE = "Reference Documentation"
DOCUMENT_SUFFIX = ".md"


@dataclass(frozen=True)
class BucketSpec:
    """One variant-specific output directory."""

    name: BucketName
    title: str
    label: str

    @property
    def directory(self) -> str:
        return self.name


BUCKET_SPECS: dict[BucketName, BucketSpec] = {
    "classes": BucketSpec(name="classes", title="Classes", label="CLASS"),
    "enums": BucketSpec(name="enums", title="Enums", label="ENUM"),
    "extensions": BucketSpec(
        name="extensions", title="Extensions", label="EXTENSION"
    ),
    "protocols": BucketSpec(name="protocols", title="Protocols", label="PROTOCOL"),
    "structs": BucketSpec(name="structs", title="Structs", label="STRUCT"),
    "typealiases": BucketSpec(
        name="typealiases", title="Typealiases", label="TYPEALIAS"
    ),
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|\s]+")


def safe_filename(name: str) -> str:
    """Map an entity name to a file stem that is valid on common filesystems."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", name.strip())
    return stem or "_"


def document_path(bucket: BucketName, name: str) -> str:
    """Relative POSIX path of an entity's document: ``<bucket>/<name>.md``."""
    return f"{BUCKET_SPECS[bucket].directory}/{safe_filename(name)}{DOCUMENT_SUFFIX}"


__all__ = [
    "BUCKET_SPECS",
    "CONTENTS_TITLE",
    "DEFAULT_CONTENTS_FILENAME",
    "DEFAULT_OUTPUT_DIR",
    "DOCUMENT_SUFFIX",
    "BucketName",
    "BucketSpec",
    "document_path",
    "safe_filename",
]
