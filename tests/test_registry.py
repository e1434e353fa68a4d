import dataclasses

import pytest

from gemlink.core import GemRegistry
from gemlink.errors import ConfigurationError
from gemlink.models import GemKind, GemRequirements, SocketColor


class TestDefaultCatalog:

    def test_catalog_is_loaded_and_frozen(self, registry):
        assert len(registry) == 15
        assert "fireball" in registry
        assert "added_fire_damage" in registry
        assert registry.frozen

    def test_frozen_catalog_rejects_registration(self, registry):
        with pytest.raises(ConfigurationError):
            registry.register_active("new_gem", "New", GemRequirements(), {"damage": 1})

    def test_template_colors_follow_requirements(self, registry):
        assert registry.template("fireball").socket_color is SocketColor.BLUE
        assert registry.template("heavy_strike").socket_color is SocketColor.RED
        assert registry.template("split_arrow").socket_color is SocketColor.GREEN
        # 8 str / 8 dex tie goes to red
        assert registry.template("double_strike").socket_color is SocketColor.RED


class TestLookup:

    def test_lookup_returns_fresh_instances(self, registry):
        first = registry.lookup("fireball")
        second = registry.lookup("fireball")
        assert first is not second

        first.add_experience(5000)
        first.set_quality(20)
        assert second.level == 1
        assert second.experience == 0
        assert second.quality == 0

    def test_lookup_shares_only_the_immutable_template(self, registry):
        gem = registry.lookup("fireball")
        assert gem.template is registry.template("fireball")
        with pytest.raises(TypeError):
            gem.template.base_stats["damage"] = 999
        with pytest.raises(dataclasses.FrozenInstanceError):
            gem.template.name = "Iceball"

    def test_unknown_id_is_none(self, registry):
        assert registry.lookup("does_not_exist") is None
        assert registry.template("does_not_exist") is None


class TestRegistration:

    def test_duplicate_id_raises(self):
        reg = GemRegistry()
        reg.register_active("bolt", "Bolt", GemRequirements(), {"damage": 1})
        with pytest.raises(ConfigurationError, match="Duplicate"):
            reg.register_support("bolt", "Bolt Support", GemRequirements(), {"damageMultiplier": 1.1})

    def test_empty_id_raises(self):
        with pytest.raises(ConfigurationError):
            GemRegistry().register_active("", "Nameless", GemRequirements(), {})

    def test_negative_requirement_raises(self):
        with pytest.raises(ConfigurationError):
            GemRegistry().register_active("bolt", "Bolt", GemRequirements(strength=-1), {})

    def test_non_numeric_stat_raises(self):
        with pytest.raises(ConfigurationError, match="not a number"):
            GemRegistry().register_active("bolt", "Bolt", GemRequirements(), {"damage": "lots"})

    def test_freeze_blocks_registration(self):
        reg = GemRegistry()
        reg.freeze()
        with pytest.raises(ConfigurationError, match="frozen"):
            reg.register_active("bolt", "Bolt", GemRequirements(), {})

    def test_class_gems_must_exist(self):
        reg = GemRegistry()
        with pytest.raises(ConfigurationError, match="unknown gems"):
            reg.set_class_gems("Witch", ["fireball"])

    def test_duplicate_tags_are_dropped(self):
        reg = GemRegistry()
        template = reg.register_active("bolt", "Bolt", GemRequirements(), {}, "", ["spell", "fire", "spell"])
        assert template.tags == ("spell", "fire")


class TestSearch:

    def test_matches_name_description_and_tags(self, registry):
        ids = [gem.id for gem in registry.search("fire")]
        # "Fires multiple arrows" matches on description alone
        assert ids == ["fireball", "burning_arrow", "split_arrow", "added_fire_damage"]

    def test_is_case_insensitive(self, registry):
        assert [g.id for g in registry.search("FIRE")] == [g.id for g in registry.search("fire")]

    def test_kind_filter(self, registry):
        assert [g.id for g in registry.search("fire", GemKind.SUPPORT)] == ["added_fire_damage"]
        assert all(g.is_active for g in registry.search("fire", GemKind.ACTIVE))

    def test_no_match(self, registry):
        assert registry.search("necromancy") == []


class TestClassGems:

    def test_witch_starter_gems(self, registry):
        ids = [gem.id for gem in registry.gems_for_class("Witch")]
        assert ids == ["fireball", "ice_nova", "lightning_bolt", "faster_casting", "added_cold_damage"]

    def test_starter_gems_are_fresh(self, registry):
        first = registry.gems_for_class("Ranger")
        second = registry.gems_for_class("Ranger")
        assert all(a is not b for a, b in zip(first, second))

    def test_unknown_class_is_empty(self, registry):
        assert registry.gems_for_class("Necromancer") == []
