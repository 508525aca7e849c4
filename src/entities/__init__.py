"""Documentation entities and the record classifier."""

from entities.classify import MalformedRecordError, classify, extension_base_name
from entities.models import (
    AliasEntity,
    EnumEntity,
    Entity,
    ExtensionEntity,
    Member,
    MemberGroup,
    ProtocolEntity,
    SourceLocation,
    TypeEntity,
    member_groups,
)

__all__ = [
    "AliasEntity",
    "EnumEntity",
    "Entity",
    "ExtensionEntity",
    "MalformedRecordError",
    "Member",
    "MemberGroup",
    "ProtocolEntity",
    "SourceLocation",
    "TypeEntity",
    "classify",
    "extension_base_name",
    "member_groups",
]
