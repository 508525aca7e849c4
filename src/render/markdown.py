"""Markdown rendering of documentation entities.

Rendering is pure: an entity and options in, Markdown text out. Documentation
comments are emitted exactly as written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from contract.layout import BUCKET_SPECS
from docindex.index import bucket_for
from entities.models import member_groups
from symbols.keys import AccessLevel
from utils import member_anchor, slugify

if TYPE_CHECKING:
    from entities.models import Entity, Member, MemberGroup

CODE_LANGUAGE = "swift"


class RenderError(ValueError):
    """Raised when an entity lacks a field required to render it."""


class RenderOptions(BaseModel):
    """Presentation options for entity documents."""

    model_config = ConfigDict(frozen=True)

    collapsible_sections: bool = False
    table_of_contents: bool = False


def _code_block(text: str) -> str:
    fence = "```"
    while fence in text:
        fence += "`"
    return f"{fence}{CODE_LANGUAGE}\n{text}\n{fence}"


def _code_span(text: str) -> str:
    if "`" in text:
        return f"`` {text} ``"
    return f"`{text}`"


def _access_badge(member: Member) -> str | None:
    level = member.access_level
    if level is None or level is AccessLevel.INTERNAL:
        return None
    return f"**Access:** {level.value}"


def _render_member(member: Member) -> str:
    parts = [
        f'<a id="{member_anchor(member.name, member.declaration)}"></a>\n'
        f"### {_code_span(member.name)}",
        _code_block(member.declaration),
    ]
    badge = _access_badge(member)
    if badge is not None:
        parts.append(badge)
    if member.documentation_comment:
        parts.append(member.documentation_comment)
    return "\n\n".join(parts)


def _render_contents(groups: list[MemberGroup]) -> str:
    lines = ["## Contents", ""]
    for group in groups:
        lines.append(f"- [{group.title}](#{slugify(group.title)})")
        for member in group.members:
            anchor = member_anchor(member.name, member.declaration)
            lines.append(f"  - [{_code_span(member.name)}](#{anchor})")
    return "\n".join(lines)


def _render_group(group: MemberGroup, options: RenderOptions) -> str:
    body = "\n\n".join(_render_member(member) for member in group.members)
    heading = f'<a id="{slugify(group.title)}"></a>\n## {group.title}'
    if not options.collapsible_sections:
        return f"{heading}\n\n{body}"
    return (
        f"{heading}\n\n<details><summary>{group.title}</summary>\n\n"
        f"{body}\n\n</details>"
    )


def render(entity: Entity, options: RenderOptions | None = None) -> str:
    """Render one entity to a Markdown document."""
    if options is None:
        options = RenderOptions()
    if not entity.name or not entity.name.strip():
        msg = f"Cannot render {entity.variant} entity without a name"
        raise RenderError(msg)

    label = BUCKET_SPECS[bucket_for(entity)].label
    sections = [
        f"**{label}**",
        f"# {_code_span(entity.name)}",
        _code_block(entity.declaration),
    ]
    if entity.documentation_comment:
        sections.append(entity.documentation_comment)

    groups = member_groups(entity)
    if groups and options.table_of_contents:
        sections.append(_render_contents(groups))
    sections.extend(_render_group(group, options) for group in groups)

    return "\n\n".join(sections) + "\n"


__all__ = ["CODE_LANGUAGE", "RenderError", "RenderOptions", "render"]
