import dataclasses

import pytest

from gemlink.eligibility import can_use_skill, check_skill_use
from gemlink.errors import ErrorKind
from gemlink.resolver import active_skill_setups


@pytest.fixture
def fireball_setup(registry, white_group):
    """Fireball linked to Added Fire Damage: mana cost 7.2."""
    group = white_group(2, [(0, 1)])
    group.socket_gem(0, registry.lookup("fireball"))
    group.socket_gem(1, registry.lookup("added_fire_damage"))
    [setup] = active_skill_setups(group)
    return setup


class TestSkillUse:

    def test_enough_mana_and_requirements(self, fireball_setup, caster):
        result = check_skill_use(fireball_setup, caster)
        assert result
        assert result.mana_cost == pytest.approx(7.2)
        assert result.reasons == ()
        assert result.error is None

    @pytest.mark.parametrize("mana,usable", [(8, True), (7.2, True), (7, False), (0, False)])
    def test_mana_threshold(self, fireball_setup, caster, mana, usable):
        # 6 × 1.2 lands just under 7.2 in floating point
        character = dataclasses.replace(caster, mana=mana)
        assert can_use_skill(fireball_setup, character) is usable

    def test_cost_reduction_on_character_is_ignored(self, fireball_setup, caster):
        character = dataclasses.replace(caster, mana=4, modifiers={"spell:mana_cost": -50})
        result = check_skill_use(fireball_setup, character)
        assert not result
        assert result.mana_cost == pytest.approx(7.2)
        assert result.error is ErrorKind.INELIGIBLE_SKILL_USE

    def test_active_requirements_checked(self, fireball_setup, caster):
        character = dataclasses.replace(caster, intelligence=0)
        result = check_skill_use(fireball_setup, character)
        assert not result
        assert len(result.reasons) == 1
        assert "12 int" in result.reasons[0]

    def test_support_requirements_not_checked(self, fireball_setup, caster):
        # Added Fire Damage asks for level 8 and 14 strength
        assert caster.level < 8 or caster.strength < 14
        assert can_use_skill(fireball_setup, caster)

    def test_reports_every_reason(self, fireball_setup, caster):
        character = dataclasses.replace(caster, intelligence=0, mana=0)
        result = check_skill_use(fireball_setup, character)
        assert len(result.reasons) == 2
        assert result.reasons[0].startswith("Needs 7.2 mana")

    def test_check_does_not_spend_mana(self, fireball_setup, caster):
        check_skill_use(fireball_setup, caster)
        assert caster.mana == 50
