"""Pre-invocation checks for skill setups.

The mana cost checked here is computed without character modifiers, so
cost reductions on the character sheet do not make a skill usable early.
Nothing here deducts mana; that happens when the skill actually fires.
"""

from dataclasses import dataclass
from typing import Optional

from gemlink.compositor import calculate_skill_damage
from gemlink.errors import ErrorKind
from gemlink.models import CharacterSnapshot
from gemlink.resolver import SkillSetup


@dataclass(frozen=True, slots=True)
class EligibilityResult:
    """Whether a setup can be used now, and why not."""
    usable: bool
    mana_cost: float
    reasons: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.usable

    @property
    def error(self) -> Optional[ErrorKind]:
        return None if self.usable else ErrorKind.INELIGIBLE_SKILL_USE


def check_skill_use(setup: SkillSetup, character: CharacterSnapshot) -> EligibilityResult:
    cost = calculate_skill_damage(setup, None).mana_cost
    reasons = []
    if character.mana < cost:
        reasons.append(f"Needs {cost:g} mana, has {character.mana:g}")
    if not setup.active_gem.meets_requirements(character):
        req = setup.active_gem.requirements
        reasons.append(
            f"Requires level {req.level}, {req.strength} str, "
            f"{req.dexterity} dex, {req.intelligence} int"
        )
    return EligibilityResult(usable=not reasons, mana_cost=cost, reasons=tuple(reasons))


def can_use_skill(setup: SkillSetup, character: CharacterSnapshot) -> bool:
    return check_skill_use(setup, character).usable
