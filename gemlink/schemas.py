"""Pydantic models for saved loadout documents.

Every document is validated once against these rows before any engine
object is built; the builders in gems, sockets and loadout trust them.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator, model_validator

from gemlink.config import MAX_GEM_LEVEL, MAX_QUALITY, MIN_GEM_LEVEL, MIN_QUALITY
from gemlink.errors import LoadoutError
from gemlink.models import CharacterSnapshot, SocketColor

RowT = TypeVar("RowT", bound=BaseModel)


class CharacterRow(BaseModel):
    """Character sheet fields the engine reads. Other sheet keys are ignored."""
    model_config = ConfigDict(extra="ignore")

    level: int = Field(default=1, ge=1)
    strength: int = Field(default=0, ge=0)
    dexterity: int = Field(default=0, ge=0)
    intelligence: int = Field(default=0, ge=0)
    modifiers: Dict[str, float] = Field(default_factory=dict)
    mana: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    max_mana: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    def to_snapshot(self) -> CharacterSnapshot:
        return CharacterSnapshot(
            level=self.level,
            strength=self.strength,
            dexterity=self.dexterity,
            intelligence=self.intelligence,
            modifiers=dict(self.modifiers),
            mana=self.mana,
            max_mana=self.max_mana if self.max_mana is not None else self.mana,
        )


class GemRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    level: StrictInt = Field(default=MIN_GEM_LEVEL, ge=MIN_GEM_LEVEL, le=MAX_GEM_LEVEL)
    experience: Union[StrictInt, float] = 0
    quality: StrictInt = Field(default=MIN_QUALITY, ge=MIN_QUALITY, le=MAX_QUALITY)

    @field_validator("experience", mode="before")
    @classmethod
    def _experience_is_number(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"experience must be a number, got {value!r}")
        return value

    @field_validator("experience")
    @classmethod
    def _experience_in_range(cls, value: Union[int, float]) -> Union[int, float]:
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"experience must be finite and non-negative, got {value!r}")
        return value


class SocketRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    color: SocketColor
    gem: Optional[GemRow] = None


class GroupRow(BaseModel):
    """One item's sockets and link pairs, in the order they were made."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    sockets: List[SocketRow]
    links: List[Tuple[StrictInt, StrictInt]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _links_in_range(self) -> "GroupRow":
        size = len(self.sockets)
        for i, j in self.links:
            if i == j:
                raise ValueError(f"socket {i} cannot link to itself")
            if not (0 <= i < size and 0 <= j < size):
                raise ValueError(f"link ({i}, {j}) out of range for {size} sockets")
        return self


class LoadoutRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    character: CharacterRow = Field(default_factory=CharacterRow)
    groups: List[GroupRow] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_group_names(self) -> "LoadoutRow":
        seen = set()
        for position, group in enumerate(self.groups):
            name = group_name(group, position)
            if name in seen:
                raise ValueError(f"duplicate group name {name!r}")
            seen.add(name)
        return self


def group_name(row: GroupRow, position: int) -> str:
    """Saved name of a group, or a positional one for unnamed groups."""
    return row.name if row.name is not None else f"group-{position}"


def parse_row(model: Type[RowT], data: Any) -> RowT:
    """Validate `data` against a row model.

    Raises:
        LoadoutError: If validation fails
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise LoadoutError(f"Malformed {model.__name__}: {e}") from e
