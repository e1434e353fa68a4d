"""Per-character skill gem instances.

A SkillGem wraps an immutable GemTemplate with the mutable state a player
builds up: level, experience and quality.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Optional

from gemlink.config import (
    EXPERIENCE_BASE,
    EXPERIENCE_GROWTH,
    LEVEL_SCALING_PER_LEVEL,
    MAX_GEM_LEVEL,
    MAX_QUALITY,
    MIN_GEM_LEVEL,
    MIN_QUALITY,
    QUALITY_STAT_MARKER,
    TIME_EXEMPT_MARKERS,
)
from gemlink.errors import ErrorKind, OperationResult
from gemlink.models import CharacterSnapshot, GemKind, GemRequirements, SocketColor
from gemlink.schemas import GemRow, parse_row

if TYPE_CHECKING:
    from gemlink.core.base import GemTemplate
    from gemlink.core.registry import GemRegistry

logger = logging.getLogger(__name__)

# Float products are rounded to this many places before ceil/floor so that
# 100 × 1.06 lands on 106, not 107
_ROUNDING_GUARD = 9


def cost_to_next(level: int) -> int:
    """Experience needed to go from `level` to `level + 1`."""
    return math.floor(round(EXPERIENCE_BASE * EXPERIENCE_GROWTH ** (level - 1), _ROUNDING_GUARD))


def _is_time_exempt(key: str) -> bool:
    return any(marker in key for marker in TIME_EXEMPT_MARKERS)


def _check_int(name: str, value: object, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValueError(f"{name} must be an integer in [{low}, {high}], got {value!r}")


@dataclass(frozen=True, slots=True)
class LevelUpResult:
    """Result of an experience award."""
    success: bool
    starting_level: int
    ending_level: int
    error: Optional[ErrorKind] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.success

    @property
    def levels_gained(self) -> int:
        return self.ending_level - self.starting_level


@dataclass(slots=True, eq=False)
class SkillGem:
    """A gem owned by one character.

    Socket color is computed once from the template requirements when the
    instance is created and never changes afterwards. Construction raises
    ValueError for a level outside [1, max_level], a quality outside
    [0, 100] or a negative or non-finite experience total.
    """
    template: "GemTemplate"
    level: int = MIN_GEM_LEVEL
    experience: float = 0
    quality: int = 0
    max_level: int = MAX_GEM_LEVEL
    tags: tuple[str, ...] = field(init=False)
    _socket_color: SocketColor = field(init=False, repr=False)

    def __post_init__(self) -> None:
        _check_int("max_level", self.max_level, MIN_GEM_LEVEL, MAX_GEM_LEVEL)
        _check_int("level", self.level, MIN_GEM_LEVEL, self.max_level)
        _check_int("quality", self.quality, MIN_QUALITY, MAX_QUALITY)
        if isinstance(self.experience, bool) or not isinstance(self.experience, (int, float)) \
                or not math.isfinite(self.experience) or self.experience < 0:
            raise ValueError(f"experience must be finite and non-negative, got {self.experience!r}")

        self.tags = tuple(self.template.tags)
        self._socket_color = self.template.socket_color

    @property
    def socket_color(self) -> SocketColor:
        return self._socket_color

    # Template passthroughs

    @property
    def id(self) -> str:
        return self.template.id

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def kind(self) -> GemKind:
        return self.template.kind

    @property
    def is_active(self) -> bool:
        return self.template.is_active

    @property
    def is_support(self) -> bool:
        return self.template.is_support

    @property
    def requirements(self) -> GemRequirements:
        return self.template.requirements

    @property
    def description(self) -> str:
        return self.template.description

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)

    # Progression

    def experience_to_next(self) -> int:
        return cost_to_next(self.level)

    def can_level_up(self) -> bool:
        return self.level < self.max_level and self.experience >= cost_to_next(self.level)

    def add_experience(self, amount: float) -> LevelUpResult:
        """Award experience, levelling up as many times as it pays for.

        Negative or non-finite awards are rejected and leave the gem as is.
        Experience keeps accumulating at max level.
        """
        starting_level = self.level
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) \
                or not math.isfinite(amount) or amount < 0:
            logger.debug("Rejected experience award %r for %s", amount, self.id)
            return LevelUpResult(
                success=False,
                starting_level=starting_level,
                ending_level=starting_level,
                error=ErrorKind.INVALID_VALUE,
                message=f"Experience must be a non-negative number, got {amount!r}",
            )

        self.experience += amount
        while self.can_level_up():
            self.experience -= cost_to_next(self.level)
            self.level += 1

        if self.level != starting_level:
            logger.debug("%s levelled %d -> %d", self.id, starting_level, self.level)
        return LevelUpResult(
            success=True,
            starting_level=starting_level,
            ending_level=self.level,
        )

    def set_quality(self, value: int) -> OperationResult:
        """Set quality within [MIN_QUALITY, MAX_QUALITY]."""
        if isinstance(value, bool) or not isinstance(value, int) \
                or not MIN_QUALITY <= value <= MAX_QUALITY:
            logger.debug("Rejected quality %r for %s", value, self.id)
            return OperationResult.fail(
                ErrorKind.INVALID_VALUE,
                f"Quality must be an integer in [{MIN_QUALITY}, {MAX_QUALITY}], got {value!r}",
            )
        self.quality = value
        return OperationResult.ok()

    # Stats

    def current_stats(self) -> dict[str, float]:
        """Stats at the current level and quality.

        Level scaling rounds up and skips time stats; quality then scales
        only "damage" keys and rounds down.
        """
        stats = dict(self.template.base_stats)

        if self.level > MIN_GEM_LEVEL:
            factor = 1 + LEVEL_SCALING_PER_LEVEL * (self.level - 1)
            for key, value in stats.items():
                if not _is_time_exempt(key):
                    stats[key] = math.ceil(round(value * factor, _ROUNDING_GUARD))

        if self.quality > 0:
            multiplier = 1 + self.quality / 100
            for key, value in stats.items():
                if QUALITY_STAT_MARKER in key:
                    stats[key] = math.floor(round(value * multiplier, _ROUNDING_GUARD))

        return stats

    def meets_requirements(self, character: CharacterSnapshot) -> bool:
        req = self.template.requirements
        return (
            character.level >= req.level
            and character.strength >= req.strength
            and character.dexterity >= req.dexterity
            and character.intelligence >= req.intelligence
        )

    # Copy and serialization

    def clone(self) -> "SkillGem":
        """Independent copy sharing only the immutable template."""
        return SkillGem(
            template=self.template,
            level=self.level,
            experience=self.experience,
            quality=self.quality,
            max_level=self.max_level,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "level": self.level,
            "experience": self.experience,
            "quality": self.quality,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], registry: "GemRegistry") -> Optional["SkillGem"]:
        """Rebuild a gem saved with `to_dict`.

        Returns None if the template id is no longer in the catalog.

        Raises:
            LoadoutError: If the entry has no id, or level, experience or
                quality are out of range
        """
        return cls.from_row(parse_row(GemRow, data), registry)

    @classmethod
    def from_row(cls, row: GemRow, registry: "GemRegistry") -> Optional["SkillGem"]:
        template = registry.template(row.id)
        if template is None:
            logger.warning("Saved gem references unknown template %r", row.id)
            return None
        return cls(template=template, level=row.level, experience=row.experience, quality=row.quality)
