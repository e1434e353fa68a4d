"""Plain-dict codec for a character's gem loadout.

A loadout document looks like:

    {
        "character": {"level": 12, "intelligence": 30, "mana": 40,
                      "modifiers": {"spell:damage": 20}},
        "groups": [
            {"name": "Body Armour",
             "sockets": [{"color": "blue", "gem": {"id": "fireball", "level": 3,
                                                   "experience": 120, "quality": 5}},
                         {"color": "red", "gem": null}],
             "links": [[0, 1]]}
        ]
    }

Gem fields and link pairs round-trip verbatim. Storage is the caller's job;
read_loadout() exists for the CLI.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from gemlink.core import GemRegistry, get_registry
from gemlink.errors import LoadoutError
from gemlink.models import CharacterSnapshot
from gemlink.schemas import LoadoutRow, group_name, parse_row
from gemlink.sockets import SocketGroup

logger = logging.getLogger(__name__)


@dataclass
class Loadout:
    """A character snapshot and its named socket groups."""
    character: CharacterSnapshot = field(default_factory=CharacterSnapshot)
    groups: dict[str, SocketGroup] = field(default_factory=dict)


def loadout_from_dict(data: Mapping[str, Any], registry: Optional[GemRegistry] = None) -> Loadout:
    """Decode a loadout document.

    Raises:
        LoadoutError: If the document is malformed
    """
    registry = registry or get_registry()
    row = parse_row(LoadoutRow, data)

    snapshot = row.character.to_snapshot()
    groups = {
        group_name(group_row, position): SocketGroup.from_row(group_row, registry)
        for position, group_row in enumerate(row.groups)
    }

    logger.debug("Decoded loadout with %d groups", len(groups))
    return Loadout(character=snapshot, groups=groups)


def loadout_to_dict(loadout: Loadout) -> dict[str, Any]:
    return {
        "character": loadout.character.to_dict(),
        "groups": [
            {"name": name, **group.to_dict()}
            for name, group in loadout.groups.items()
        ],
    }


def read_loadout(path: Union[str, Path], registry: Optional[GemRegistry] = None) -> Loadout:
    """Read a loadout JSON file.

    Raises:
        LoadoutError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoadoutError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadoutError(f"{path} is not valid JSON: {e}") from e
    return loadout_from_dict(data, registry)
