"""Typed skill stats and support modifiers.

Gems describe themselves with flat stat maps ({"damage": 15, "castTime": 0.75}).
Before composition those maps are split into typed fields, and each support stat
becomes a modifier whose merge rule is fixed by its type:

    DamageMultiplier    multiplies damage
    AddedDamage         adds a share of base damage
    SpeedMultiplier     divides cast/attack time
    CostMultiplier      multiplies mana cost
    CriticalMultiplier  multiplies the running value or a default
    MechanicOverride    overwrites a count (last support wins)
    SecondaryEffect     overwrites anything else (last support wins)
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from gemlink.config import (
    ADDED_DAMAGE_PREFIX,
    ADDED_DAMAGE_SUFFIX,
    COST_MULTIPLIER_KEY,
    CRITICAL_MULTIPLIER_KEYS,
    DAMAGE_KEY,
    DAMAGE_MULTIPLIER_KEYS,
    DEFAULT_DAMAGE,
    DEFAULT_PIERCE_COUNT,
    DEFAULT_TIMING,
    MANA_COST_KEY,
    MECHANIC_KEYS,
    SPEED_MULTIPLIER_KEYS,
    TIMING_KEYS,
)

_CRITICAL_FIELDS = tuple(name for name, _ in CRITICAL_MULTIPLIER_KEYS.values())


def added_damage_label(key: str) -> Optional[str]:
    """Label recorded for an added-damage key.

    Example: addedFireDamagePercent -> addedFireDamage. None for other keys.
    """
    if key.startswith(ADDED_DAMAGE_PREFIX) and key.endswith(ADDED_DAMAGE_SUFFIX) \
            and len(key) > len(ADDED_DAMAGE_PREFIX) + len(ADDED_DAMAGE_SUFFIX):
        return key[: -len("Percent")]
    return None


@dataclass(slots=True)
class SkillStats:
    """Composed stats of one skill, split by category.

    `damage` is None when the active gem has no flat damage (weapon attacks);
    a damage multiplier then starts from 1.0.
    """
    tags: tuple[str, ...] = ()
    damage: Optional[float] = None
    added_damage: dict[str, float] = field(default_factory=dict)
    timing: dict[str, float] = field(default_factory=dict)
    mana_cost: float = 0.0
    critical: dict[str, float] = field(default_factory=dict)
    mechanics: dict[str, float] = field(default_factory=dict)
    secondary: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_gem_stats(cls, stats: Mapping[str, float], tags: Iterable[str] = ()) -> "SkillStats":
        """Split an active gem's flat stat map into categories."""
        result = cls(tags=tuple(tags))
        for key, value in stats.items():
            if key == DAMAGE_KEY:
                result.damage = value
            elif key in TIMING_KEYS:
                result.timing[key] = value
            elif key == MANA_COST_KEY:
                result.mana_cost = value
            elif key in _CRITICAL_FIELDS:
                result.critical[key] = value
            elif key in MECHANIC_KEYS:
                result.mechanics[key] = value
            else:
                result.secondary[key] = value
        return result

    @property
    def cast_time(self) -> Optional[float]:
        return self.timing.get("castTime")

    @property
    def attack_time(self) -> Optional[float]:
        return self.timing.get("attackTime")

    @property
    def critical_chance(self) -> Optional[float]:
        return self.critical.get("criticalChance")

    @property
    def critical_multiplier(self) -> Optional[float]:
        return self.critical.get("criticalMultiplier")

    @property
    def total_added_damage(self) -> float:
        return sum(self.added_damage.values())

    def as_dict(self) -> dict[str, Any]:
        """Flat stat map using gem stat keys, plus "tags"."""
        flat: dict[str, Any] = dict(self.secondary)
        if self.damage is not None:
            flat[DAMAGE_KEY] = self.damage
        flat.update(self.added_damage)
        flat.update(self.timing)
        flat[MANA_COST_KEY] = self.mana_cost
        flat.update(self.critical)
        flat.update(self.mechanics)
        flat["tags"] = list(self.tags)
        return flat


# Support modifiers. Each applies one support stat to the running SkillStats;
# `base_damage` is the active gem's damage before any support.


@dataclass(frozen=True, slots=True)
class DamageMultiplier:
    key: str
    factor: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        current = stats.damage if stats.damage is not None else DEFAULT_DAMAGE
        stats.damage = current * self.factor


@dataclass(frozen=True, slots=True)
class SpeedMultiplier:
    key: str
    timing_key: str
    factor: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        stats.timing[self.timing_key] = stats.timing.get(self.timing_key, DEFAULT_TIMING) / self.factor


@dataclass(frozen=True, slots=True)
class CostMultiplier:
    key: str
    factor: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        stats.mana_cost = stats.mana_cost * self.factor


@dataclass(frozen=True, slots=True)
class AddedDamage:
    """Adds `percent` of base damage. Never compounds with other supports."""
    key: str
    label: str
    percent: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        if base_damage is None:
            stats.added_damage.setdefault(self.label, 0.0)
            return
        amount = base_damage * (self.percent / 100)
        stats.added_damage[self.label] = stats.added_damage.get(self.label, 0.0) + amount
        stats.damage = (stats.damage if stats.damage is not None else 0.0) + amount


@dataclass(frozen=True, slots=True)
class CriticalMultiplier:
    key: str
    stat: str
    default: float
    factor: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        stats.critical[self.stat] = stats.critical.get(self.stat, self.default) * self.factor


@dataclass(frozen=True, slots=True)
class MechanicOverride:
    key: str
    value: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        stats.mechanics[self.key] = self.value


@dataclass(frozen=True, slots=True)
class SecondaryEffect:
    key: str
    value: float

    def apply(self, stats: SkillStats, base_damage: Optional[float]) -> None:
        stats.secondary[self.key] = self.value


SupportModifier = Union[
    DamageMultiplier,
    SpeedMultiplier,
    CostMultiplier,
    AddedDamage,
    CriticalMultiplier,
    MechanicOverride,
    SecondaryEffect,
]

# Order modifiers of one support are applied in. Multipliers run before
# added damage, so added damage is not scaled by the same support.
_APPLY_ORDER: tuple[type, ...] = (
    DamageMultiplier,
    SpeedMultiplier,
    CostMultiplier,
    AddedDamage,
    CriticalMultiplier,
    MechanicOverride,
    SecondaryEffect,
)


def _to_modifier(key: str, value: float) -> SupportModifier:
    if key in DAMAGE_MULTIPLIER_KEYS:
        return DamageMultiplier(key, value)
    if key in SPEED_MULTIPLIER_KEYS:
        return SpeedMultiplier(key, SPEED_MULTIPLIER_KEYS[key], value)
    if key == COST_MULTIPLIER_KEY:
        return CostMultiplier(key, value)
    label = added_damage_label(key)
    if label:
        return AddedDamage(key, label, value)
    if key in CRITICAL_MULTIPLIER_KEYS:
        stat, default = CRITICAL_MULTIPLIER_KEYS[key]
        return CriticalMultiplier(key, stat, default, value)
    if key in MECHANIC_KEYS:
        return MechanicOverride(key, value)
    return SecondaryEffect(key, value)


def parse_support_modifiers(stats: Mapping[str, float]) -> list[SupportModifier]:
    """Turn a support gem's stat map into ordered modifiers.

    Zero-valued stats are dropped. A pierce chance without a pierce count
    implies a count of DEFAULT_PIERCE_COUNT.
    """
    modifiers = [_to_modifier(key, value) for key, value in stats.items() if value]
    if stats.get("pierceChance") and not stats.get("pierceCount"):
        modifiers.append(MechanicOverride("pierceCount", DEFAULT_PIERCE_COUNT))
    modifiers.sort(key=lambda m: _APPLY_ORDER.index(type(m)))
    return modifiers
