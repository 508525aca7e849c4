"""Validation helpers for a generated documentation tree."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.layout import BUCKET_SPECS, DEFAULT_CONTENTS_FILENAME, DOCUMENT_SUFFIX

if TYPE_CHECKING:
    from pathlib import Path

_LINK = re.compile(r"\[[^\]]*\]\(([^)\s]+)\)")
_ANCHOR = re.compile(r'<a id="([^"]+)"></a>')


@dataclass(frozen=True)
class ValidationMessage:
    document: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "document": self.document,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_documentation(
    docs_path: Path, contents_filename: str = DEFAULT_CONTENTS_FILENAME
) -> ValidationResult:
    """Check that the contents document and every entity document link up.

    Every link in the contents document must point at an existing file, and
    every in-page ``#anchor`` link in an entity document must have a
    matching ``<a id>`` in that document.
    """
    result = ValidationResult()

    if not docs_path.exists():
        result.errors.append(
            ValidationMessage(
                document="docs_dir",
                path=docs_path,
                message="Documentation directory does not exist.",
            )
        )
        return result

    if not docs_path.is_dir():
        result.errors.append(
            ValidationMessage(
                document="docs_dir",
                path=docs_path,
                message="Documentation path is not a directory.",
            )
        )
        return result

    contents_path = docs_path / contents_filename
    if not contents_path.is_file():
        result.errors.append(
            ValidationMessage(
                document="contents",
                path=contents_path,
                message="Contents document is missing.",
            )
        )
        return result

    linked = _validate_contents(contents_path, docs_path, result)

    for spec in BUCKET_SPECS.values():
        bucket_dir = docs_path / spec.directory
        if not bucket_dir.is_dir():
            continue
        for document_path in sorted(bucket_dir.glob(f"*{DOCUMENT_SUFFIX}")):
            relative = document_path.relative_to(docs_path).as_posix()
            if relative not in linked:
                result.warnings.append(
                    ValidationMessage(
                        document=relative,
                        path=document_path,
                        message="Document is not listed in the contents document.",
                    )
                )
            _validate_anchors(relative, document_path, result)

    return result


def _read_lines(
    document: str, path: Path, result: ValidationResult
) -> list[str] | None:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as exc:
        message = f"Failed to read file: invalid UTF-8 ({exc})."
    except OSError as exc:
        message = f"Failed to read file: {exc}."
    result.errors.append(
        ValidationMessage(document=document, path=path, message=message)
    )
    return None


def _validate_contents(
    contents_path: Path, docs_path: Path, result: ValidationResult
) -> set[str]:
    linked: set[str] = set()
    lines = _read_lines("contents", contents_path, result)
    if lines is None:
        return linked

    for line_number, line in enumerate(lines, 1):
        for target in _LINK.findall(line):
            linked.add(target)
            if not (docs_path / target).is_file():
                result.errors.append(
                    ValidationMessage(
                        document="contents",
                        path=contents_path,
                        line=line_number,
                        message=f"Link target does not exist: {target}.",
                    )
                )
    return linked


def _validate_anchors(document: str, path: Path, result: ValidationResult) -> None:
    lines = _read_lines(document, path, result)
    if lines is None:
        return

    anchors = {anchor for line in lines for anchor in _ANCHOR.findall(line)}
    for line_number, line in enumerate(lines, 1):
        for target in _LINK.findall(line):
            if not target.startswith("#"):
                continue
            if target[1:] not in anchors:
                result.errors.append(
                    ValidationMessage(
                        document=document,
                        path=path,
                        line=line_number,
                        message=f"Anchor does not resolve: {target}.",
                    )
                )


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_documentation",
]
