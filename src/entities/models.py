"""Documentation entity models.

Each documentable declaration becomes exactly one of the entity variants
below. The raw symbol record is never kept on an entity.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from symbols.keys import AccessLevel

MemberKind = Literal["case", "property", "method"]
TypeKind = Literal["struct", "class"]

MEMBER_GROUP_TITLES: dict[MemberKind, str] = {
    "case": "Cases",
    "property": "Properties",
    "method": "Methods",
}


class SourceLocation(BaseModel):
    """Where a declaration was found, when the analyzer reports it."""

    file: str | None = None
    line: int | None = None


class Member(BaseModel):
    """A property, method or enumeration case of an entity."""

    name: str
    kind: MemberKind
    declaration: str
    documentation_comment: str | None = None
    access_level: AccessLevel | None = None
    source_location: SourceLocation | None = None

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.kind, self.name, self.declaration)


class MemberGroup(BaseModel):
    """Members of one kind, in source order."""

    kind: MemberKind
    title: str
    members: list[Member]


class _EntityBase(BaseModel):
    name: str
    declaration: str
    documentation_comment: str | None = None
    access_level: AccessLevel | None = None
    source_location: SourceLocation | None = None
    members: list[Member] = Field(default_factory=list)

    def merge_members(self, members: list[Member]) -> int:
        """Append members in order, skipping ones already present.

        Returns the number of members added.
        """
        seen = {member.identity for member in self.members}
        added = 0
        for member in members:
            if member.identity in seen:
                continue
            self.members.append(member)
            seen.add(member.identity)
            added += 1
        return added


class TypeEntity(_EntityBase):
    """A struct or class."""

    variant: Literal["type"] = "type"
    type_kind: TypeKind


class ExtensionEntity(_EntityBase):
    """An extension; ``name`` is the extended type's name."""

    variant: Literal["extension"] = "extension"


class EnumEntity(_EntityBase):
    variant: Literal["enum"] = "enum"


class ProtocolEntity(_EntityBase):
    variant: Literal["protocol"] = "protocol"


class AliasEntity(_EntityBase):
    """A type alias. Aliases carry no members."""

    variant: Literal["alias"] = "alias"


Entity = Annotated[
    Union[TypeEntity, ExtensionEntity, EnumEntity, ProtocolEntity, AliasEntity],
    Field(discriminator="variant"),
]


def member_groups(entity: Entity) -> list[MemberGroup]:
    """Return the entity's non-empty member groups: cases, properties, methods."""
    groups: list[MemberGroup] = []
    for kind, title in MEMBER_GROUP_TITLES.items():
        members = [member for member in entity.members if member.kind == kind]
        if members:
            groups.append(MemberGroup(kind=kind, title=title, members=members))
    return groups


__all__ = [
    "MEMBER_GROUP_TITLES",
    "AliasEntity",
    "EnumEntity",
    "Entity",
    "ExtensionEntity",
    "Member",
    "MemberGroup",
    "MemberKind",
    "ProtocolEntity",
    "SourceLocation",
    "TypeEntity",
    "TypeKind",
    "member_groups",
]
