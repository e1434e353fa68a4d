"""Shared fixtures for the gem engine tests."""

import pytest

from gemlink.core import GemRegistry, get_registry
from gemlink.models import CharacterSnapshot, GemRequirements
from gemlink.sockets import SocketGroup

INT = GemRequirements(level=1, intelligence=10)


@pytest.fixture
def registry() -> GemRegistry:
    """The built-in, frozen catalog."""
    return get_registry()


@pytest.fixture
def custom_registry() -> GemRegistry:
    """Small catalog with round numbers for arithmetic checks."""
    reg = GemRegistry()
    reg.register_active(
        "frostfire", "Frostfire", INT,
        {"damage": 100, "manaCost": 10, "castTime": 1.0},
        "Hurls fire and ice", ["spell", "fire", "cold"],
    )
    reg.register_active(
        "plain_bolt", "Plain Bolt", INT,
        {"damage": 100, "manaCost": 10, "criticalChance": 0.1},
        "An untagged bolt", [],
    )
    reg.register_support("added_fire", "Added Fire", INT, {"addedFireDamagePercent": 50}, "", ["fire"])
    reg.register_support("added_cold", "Added Cold", INT, {"addedColdDamagePercent": 50}, "", ["cold"])
    reg.register_support("more_damage", "More Damage", INT, {"damageMultiplier": 2}, "", [])
    reg.register_support("two_projectiles", "Two", INT, {"projectileCount": 2}, "", [])
    reg.register_support("five_projectiles", "Five", INT, {"projectileCount": 5}, "", [])
    reg.register_support("lucky_pierce", "Lucky Pierce", INT, {"pierceChance": 50}, "", [])
    reg.register_support("crit", "Crit", INT, {"criticalChanceMultiplier": 1.9}, "", [])
    return reg


@pytest.fixture
def white_group():
    """Factory: a group of `size` white sockets with the given links."""
    def make(size, links=()):
        return SocketGroup.from_layout(["white"] * size, links)
    return make


@pytest.fixture
def caster() -> CharacterSnapshot:
    return CharacterSnapshot(level=10, strength=10, dexterity=10, intelligence=20, mana=50, max_mana=50)
