"""Compose final skill stats from a skill setup.

Pipeline, in order:
1. Active gem stats at its level and quality
2. Each linked support, in link order (multipliers compound)
3. Character percentage modifiers that match the active gem's tags,
   summed per target before a single multiply
"""

import logging
from typing import Mapping, Optional, Union

from gemlink.config import (
    CHARACTER_MODIFIER_ALIASES,
    DEFAULT_DAMAGE,
    DEFAULT_TIMING,
    MODIFIER_TARGETS,
)
from gemlink.models import CharacterSnapshot
from gemlink.resolver import SkillSetup
from gemlink.stats import SkillStats, parse_support_modifiers

logger = logging.getLogger(__name__)

CharacterStats = Union[CharacterSnapshot, Mapping[str, float], None]


def parse_modifier_key(key: str) -> Optional[tuple[str, str]]:
    """Split "<tag>:<target>" (or a legacy alias) into (tag, target)."""
    if key in CHARACTER_MODIFIER_ALIASES:
        return CHARACTER_MODIFIER_ALIASES[key]
    tag, sep, target = key.partition(":")
    if not sep or not tag or target not in MODIFIER_TARGETS:
        return None
    return tag, target


def collect_character_bonuses(modifiers: Mapping[str, float], tags: tuple[str, ...]) -> dict[str, float]:
    """Sum percentage bonuses per target for modifiers whose tag the skill has."""
    bonuses: dict[str, float] = {}
    for key, value in modifiers.items():
        parsed = parse_modifier_key(key)
        if parsed is None:
            logger.debug("Ignoring unknown character modifier %r", key)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.debug("Ignoring non-numeric character modifier %r=%r", key, value)
            continue
        tag, target = parsed
        if tag in tags:
            bonuses[target] = bonuses.get(target, 0.0) + value
    return bonuses


def apply_character_modifiers(stats: SkillStats, modifiers: Mapping[str, float]) -> None:
    """Apply tag-filtered character bonuses to `stats` in place."""
    bonuses = collect_character_bonuses(modifiers, stats.tags)

    damage = bonuses.get("damage")
    if damage:
        current = stats.damage if stats.damage is not None else DEFAULT_DAMAGE
        stats.damage = current * (1 + damage / 100)

    for target, timing_key in (("cast_speed", "castTime"), ("attack_speed", "attackTime")):
        speed = bonuses.get(target)
        if not speed:
            continue
        divisor = 1 + speed / 100
        if divisor <= 0:
            logger.debug("Ignoring %s bonus of %s%%", target, speed)
            continue
        stats.timing[timing_key] = stats.timing.get(timing_key, DEFAULT_TIMING) / divisor

    cost = bonuses.get("mana_cost")
    if cost:
        stats.mana_cost = max(0.0, stats.mana_cost * (1 + cost / 100))


def _modifier_map(character_stats: CharacterStats) -> Mapping[str, float]:
    if character_stats is None:
        return {}
    if isinstance(character_stats, CharacterSnapshot):
        return character_stats.modifiers
    return character_stats


def fold_supports(setup: SkillSetup) -> SkillStats:
    """Steps 1 and 2: active gem stats with every linked support applied."""
    active = setup.active_gem
    stats = SkillStats.from_gem_stats(active.current_stats(), active.tags)
    base_damage = stats.damage

    for support in setup.support_gems:
        for modifier in parse_support_modifiers(support.current_stats()):
            modifier.apply(stats, base_damage)
    return stats


def calculate_skill_damage(setup: SkillSetup, character_stats: CharacterStats = None) -> SkillStats:
    """Final stats for a skill setup.

    Args:
        setup: Active gem and its linked supports
        character_stats: Snapshot or modifier map; None skips character bonuses

    Returns:
        A new SkillStats. Gem instances are never modified.
    """
    stats = fold_supports(setup)
    modifiers = _modifier_map(character_stats)
    if modifiers:
        apply_character_modifiers(stats, modifiers)

    logger.debug(
        "Composed %s with %d supports: damage=%s manaCost=%s",
        setup.active_gem.id, len(setup.support_gems), stats.damage, stats.mana_cost,
    )
    return stats
