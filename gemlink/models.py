"""Data models shared across the gem engine."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class GemKind(Enum):
    """What a gem does when socketed."""
    ACTIVE = "active"     # Grants a skill
    SUPPORT = "support"   # Modifies linked active gems


class SocketColor(Enum):
    """Socket and gem colors."""
    RED = "red"       # Strength
    GREEN = "green"   # Dexterity
    BLUE = "blue"     # Intelligence
    WHITE = "white"   # Accepts any gem (sockets only)


@dataclass(frozen=True, slots=True)
class GemRequirements:
    """Minimum character level and attributes to use a gem."""
    level: int = 1
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0

    def socket_color(self) -> SocketColor:
        """Pick the socket color from the dominant attribute.

        Ties resolve strength first, then dexterity, then intelligence.
        """
        if self.strength >= self.dexterity and self.strength >= self.intelligence:
            return SocketColor.RED
        if self.dexterity >= self.intelligence:
            return SocketColor.GREEN
        return SocketColor.BLUE


@dataclass(frozen=True, slots=True)
class CharacterSnapshot:
    """Read-only view of a character at the moment of a query.

    Attributes:
        level: Character level
        strength: Strength attribute
        dexterity: Dexterity attribute
        intelligence: Intelligence attribute
        modifiers: Percentage modifiers keyed "<tag>:<target>" (e.g. "spell:damage")
        mana: Current mana
        max_mana: Mana pool size
    """
    level: int = 1
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    modifiers: Mapping[str, float] = field(default_factory=dict)
    mana: float = 0.0
    max_mana: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CharacterSnapshot":
        """Build a snapshot from a character sheet mapping.

        Unknown keys are ignored; missing keys take the defaults above and
        max_mana defaults to mana.

        Raises:
            LoadoutError: If a field has the wrong type or is out of range
        """
        from gemlink.schemas import CharacterRow, parse_row

        return parse_row(CharacterRow, data).to_snapshot()

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "strength": self.strength,
            "dexterity": self.dexterity,
            "intelligence": self.intelligence,
            "modifiers": dict(self.modifiers),
            "mana": self.mana,
            "max_mana": self.max_mana,
        }


def parse_kind(value: Optional[str]) -> Optional[GemKind]:
    """Map "active"/"support"/"all"/None to a gem kind filter."""
    if value is None or value == "all":
        return None
    return GemKind(value)
