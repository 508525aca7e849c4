"""Stable output contract for generated documentation.

Bucket directory names, the default contents file name and document paths
are the surface other tooling links against.
"""

from contract.layout import (
    BUCKET_SPECS,
    CONTENTS_TITLE,
    DEFAULT_CONTENTS_FILENAME,
    DEFAULT_OUTPUT_DIR,
    BucketName,
    BucketSpec,
    document_path,
    safe_filename,
)


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_documentation"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_documentation,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_documentation": validate_documentation,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "BUCKET_SPECS",
    "CONTENTS_TITLE",
    "DEFAULT_CONTENTS_FILENAME",
    "DEFAULT_OUTPUT_DIR",
    "BucketName",
    "BucketSpec",
    "ValidationMessage",
    "ValidationResult",
    "document_path",
    "safe_filename",
    "validate_documentation",
]
