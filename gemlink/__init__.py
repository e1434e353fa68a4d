"""Skill gem socket-link and stat composition engine.

Typical flow:

    registry = get_registry()
    group = SocketGroup.from_layout(["blue", "red"], [(0, 1)])
    group.socket_gem(0, registry.lookup("fireball"))
    group.socket_gem(1, registry.lookup("added_fire_damage"))
    for setup in active_skill_setups(group):
        stats = calculate_skill_damage(setup, character)
"""

from .compositor import calculate_skill_damage
from .core import GemRegistry, GemTemplate, get_registry
from .eligibility import EligibilityResult, can_use_skill, check_skill_use
from .errors import ConfigurationError, ErrorKind, GemlinkError, LoadoutError, OperationResult
from .gems import LevelUpResult, SkillGem, cost_to_next
from .models import CharacterSnapshot, GemKind, GemRequirements, SocketColor
from .resolver import SkillSetup, active_skill_setups, linked_supports, support_can_modify
from .sockets import Socket, SocketGroup
from .stats import SkillStats

__all__ = [
    # Registry
    "GemRegistry",
    "GemTemplate",
    "get_registry",
    # Gems and sockets
    "SkillGem",
    "LevelUpResult",
    "cost_to_next",
    "Socket",
    "SocketGroup",
    # Resolution and composition
    "SkillSetup",
    "active_skill_setups",
    "linked_supports",
    "support_can_modify",
    "SkillStats",
    "calculate_skill_damage",
    "EligibilityResult",
    "can_use_skill",
    "check_skill_use",
    # Models
    "CharacterSnapshot",
    "GemKind",
    "GemRequirements",
    "SocketColor",
    # Errors
    "ConfigurationError",
    "ErrorKind",
    "GemlinkError",
    "LoadoutError",
    "OperationResult",
]
