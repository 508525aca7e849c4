"""Shared utilities for sourcedocs."""

from __future__ import annotations

import hashlib
import re

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ``text`` and collapse every non-alphanumeric run to ``-``.

    Examples:
        >>> slugify("init(name:)")
        'init-name'
        >>> slugify("Foo Bar")
        'foo-bar'
    """
    return _NON_SLUG_CHARS.sub("-", text.lower()).strip("-")


def member_anchor(name: str, declaration: str) -> str:
    """Anchor for a member heading, stable across runs.

    The declaration hash keeps overloads that share a name apart.

    Examples:
        >>> member_anchor("bar", "var bar: Int").startswith("bar-")
        True
    """
    digest = hashlib.sha1(declaration.encode("utf-8")).hexdigest()[:8]
    slug = slugify(name) or "member"
    return f"{slug}-{digest}"
