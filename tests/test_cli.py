import json

import pytest

from gemlink.cli import evaluate_loadout, main
from gemlink.loadout import loadout_from_dict

LOADOUT = {
    "character": {"level": 12, "intelligence": 30, "mana": 40, "modifiers": {"spell:damage": 20}},
    "groups": [
        {
            "name": "Body Armour",
            "sockets": [
                {"color": "blue", "gem": {"id": "fireball", "level": 3, "quality": 5}},
                {"color": "white", "gem": {"id": "added_fire_damage"}},
                {"color": "blue", "gem": {"id": "ice_nova"}},
            ],
            "links": [[0, 1], [1, 2]],
        },
    ],
}


@pytest.fixture
def loadout_file(tmp_path):
    path = tmp_path / "witch.json"
    path.write_text(json.dumps(LOADOUT), encoding="utf-8")
    return path


def run_json(capsys, *argv):
    assert main([*argv, "--json"]) == 0
    return json.loads(capsys.readouterr().out)


class TestGemCommands:

    def test_gem_stats_at_level(self, capsys):
        data = run_json(capsys, "--gem", "fireball", "--level", "2")
        assert data["id"] == "fireball"
        assert data["color"] == "blue"
        assert data["stats"]["damage"] == 16
        assert data["stats"]["castTime"] == 0.75

    def test_gem_quality(self, capsys):
        data = run_json(capsys, "--gem", "fireball", "--quality", "10")
        assert data["quality"] == 10
        assert data["stats"]["damage"] == 16

    @pytest.mark.parametrize("argv,message", [
        (["--gem", "frostbolt"], "unknown gem"),
        (["--gem", "fireball", "--level", "25"], "level must be between"),
        (["--gem", "fireball", "--quality", "150"], "Quality"),
    ])
    def test_gem_errors(self, capsys, argv, message):
        assert main(argv) == 1
        assert message.lower() in capsys.readouterr().out.lower()

    def test_gem_table(self, capsys):
        assert main(["--gem", "ice_nova"]) == 0
        out = capsys.readouterr().out
        assert "Ice Nova" in out
        assert "radius" in out


class TestCatalogCommands:

    def test_search_by_kind(self, capsys):
        data = run_json(capsys, "--search", "fire", "--kind", "support")
        assert [gem["id"] for gem in data] == ["added_fire_damage"]

    def test_class_starter_gems(self, capsys):
        data = run_json(capsys, "--class", "Ranger")
        assert [gem["id"] for gem in data] == ["burning_arrow", "split_arrow", "pierce", "critical_strikes"]

    def test_unknown_class(self, capsys):
        assert main(["--class", "Necromancer"]) == 1
        assert "Witch" in capsys.readouterr().out

    def test_list(self, capsys):
        assert main(["--list"]) == 0
        assert "Gem catalog" in capsys.readouterr().out

    def test_list_json_has_every_gem(self, capsys, registry):
        assert len(run_json(capsys, "--list")) == len(registry)

    def test_empty_search(self, capsys):
        assert main(["--search", "necromancy"]) == 0
        assert "No gems found" in capsys.readouterr().out

    def test_no_arguments_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestLoadoutCommand:

    def test_evaluate_loadout(self, registry):
        rows = evaluate_loadout(loadout_from_dict(LOADOUT, registry))
        assert [(r["active"], r["supports"]) for r in rows] == [
            ("fireball", ["added_fire_damage"]),
            ("ice_nova", []),
        ]

        fireball = rows[0]
        # level 3 quality 5: damage 17; +44% of 17; then +20% spell damage
        assert fireball["stats"]["damage"] == pytest.approx((17 + 17 * 0.44) * 1.2)
        assert fireball["stats"]["manaCost"] == pytest.approx(7 * 1.2)
        assert fireball["usable"]

    def test_added_fire_skips_ice_nova(self, registry):
        # the support is linked to ice_nova too but shares no tag with it
        rows = evaluate_loadout(loadout_from_dict(LOADOUT, registry))
        assert rows[1]["stats"]["damage"] == pytest.approx(20 * 1.2)

    def test_loadout_json(self, capsys, loadout_file):
        rows = run_json(capsys, "--loadout", str(loadout_file))
        assert [row["socket"] for row in rows] == [0, 2]
        assert all(row["group"] == "Body Armour" for row in rows)

    def test_loadout_table(self, capsys, loadout_file):
        assert main(["--loadout", str(loadout_file)]) == 0
        assert "Usable" in capsys.readouterr().out

    def test_unusable_skill_lists_reasons(self, capsys, tmp_path):
        document = {**LOADOUT, "character": {"level": 1, "intelligence": 0, "mana": 0}}
        path = tmp_path / "broke.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        rows = run_json(capsys, "--loadout", str(path))
        assert not rows[0]["usable"]
        assert len(rows[0]["reasons"]) == 2

    def test_bad_loadout_file(self, capsys, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[1, 2", encoding="utf-8")
        assert main(["--loadout", str(path)]) == 1
        assert "Error" in capsys.readouterr().out

    def test_schema_errors_are_reported(self, capsys, tmp_path):
        path = tmp_path / "odd.json"
        path.write_text(json.dumps({"groups": 5}), encoding="utf-8")
        assert main(["--loadout", str(path)]) == 1
        out = capsys.readouterr().out
        assert "Malformed LoadoutRow" in out
        assert "groups" in out
