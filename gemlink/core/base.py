"""Immutable gem template definitions."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from gemlink.models import GemKind, GemRequirements, SocketColor


@dataclass(frozen=True, slots=True, eq=False)
class GemTemplate:
    """Catalog definition of a gem, shared by every instance cloned from it.

    Attributes:
        id: Unique identifier (e.g., "fireball", "added_fire_damage")
        name: Display name (e.g., "Fireball")
        kind: Active skill or support
        requirements: Level and attribute requirements
        base_stats: Level 1, quality 0 stats (read-only mapping)
        description: Tooltip text
        tags: Category labels in catalog order (e.g., ("spell", "fire"))
        socket_color: Derived from requirements once, at creation
    """
    id: str
    name: str
    kind: GemKind
    requirements: GemRequirements
    base_stats: Mapping[str, float]
    description: str = ""
    tags: tuple[str, ...] = ()
    socket_color: SocketColor = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_stats", MappingProxyType(dict(self.base_stats)))
        object.__setattr__(self, "tags", tuple(dict.fromkeys(self.tags)))
        object.__setattr__(self, "socket_color", self.requirements.socket_color())

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)

    @property
    def is_active(self) -> bool:
        return self.kind is GemKind.ACTIVE

    @property
    def is_support(self) -> bool:
        return self.kind is GemKind.SUPPORT

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, description or any tag."""
        needle = query.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )
