"""Sockets and socket link graphs.

A SocketGroup is an arena of Socket records addressed by index. Links are
kept twice: as sorted neighbor index lists on each socket for graph walks,
and as the pair list in the order the links were made, for saving.
"""

import bisect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Optional, Union

from gemlink.errors import ErrorKind, LoadoutError, OperationResult
from gemlink.gems import SkillGem
from gemlink.models import SocketColor
from gemlink.schemas import GroupRow, parse_row

if TYPE_CHECKING:
    from gemlink.core.registry import GemRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Socket:
    """A color-constrained slot holding at most one gem."""
    color: SocketColor
    gem: Optional[SkillGem] = None
    links: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.gem is None

    def can_accept(self, gem: SkillGem) -> bool:
        """Empty, and either white or the same color as the gem."""
        if self.gem is not None:
            return False
        return self.color is SocketColor.WHITE or self.color is gem.socket_color

    def socket(self, gem: SkillGem) -> OperationResult:
        if self.gem is not None:
            return OperationResult.fail(
                ErrorKind.INVALID_SOCKET_OPERATION,
                f"Socket already holds {self.gem.id!r}",
            )
        if not self.can_accept(gem):
            return OperationResult.fail(
                ErrorKind.INVALID_SOCKET_OPERATION,
                f"{gem.socket_color.value} gem {gem.id!r} does not fit a {self.color.value} socket",
            )
        self.gem = gem
        return OperationResult.ok()

    def unsocket(self) -> Optional[SkillGem]:
        """Remove and return the held gem (None if empty)."""
        gem = self.gem
        self.gem = None
        return gem


class SocketGroup:
    """The sockets of one equippable item and the links between them.

    The graph may be cyclic, disconnected and of any degree.
    """

    def __init__(self, sockets: Optional[Iterable[Socket]] = None) -> None:
        """Adopt existing sockets.

        Neighbor lists already on the sockets are replayed through add_link,
        so every link ends up symmetric and saved; invalid ones are dropped
        with a warning.
        """
        self.sockets: list[Socket] = list(sockets or [])
        self._link_pairs: list[tuple[int, int]] = []

        pending = []
        for index, socket in enumerate(self.sockets):
            pending.extend((index, other) for other in socket.links)
            socket.links = []
        for i, j in pending:
            result = self.add_link(i, j)
            if not result:
                logger.warning("Dropping link (%s, %s): %s", i, j, result.message)

    @classmethod
    def from_layout(
        cls,
        colors: Iterable[Union[SocketColor, str]],
        links: Iterable[tuple[int, int]] = (),
    ) -> "SocketGroup":
        """Build an empty group from an item's socket colors and link pairs.

        Invalid link pairs are skipped with a warning.
        """
        group = cls()
        for color in colors:
            group.add_socket(color)
        for i, j in links:
            result = group.add_link(i, j)
            if not result:
                logger.warning("Skipping link (%s, %s): %s", i, j, result.message)
        return group

    def add_socket(self, color: Union[SocketColor, str]) -> int:
        """Append an empty socket and return its index."""
        self.sockets.append(Socket(color=SocketColor(color)))
        return len(self.sockets) - 1

    def __len__(self) -> int:
        return len(self.sockets)

    def __iter__(self) -> Iterator[Socket]:
        return iter(self.sockets)

    def __getitem__(self, index: int) -> Socket:
        return self.sockets[index]

    def _in_range(self, index: object) -> bool:
        return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self.sockets)

    def _bad_indices(self, i: object, j: object) -> OperationResult:
        return OperationResult.fail(
            ErrorKind.INVALID_SOCKET_OPERATION,
            f"Socket indices ({i}, {j}) out of range for {len(self.sockets)} sockets",
        )

    # Links

    @property
    def links(self) -> list[tuple[int, int]]:
        """Link pairs in the order they were added."""
        return list(self._link_pairs)

    def neighbors(self, index: int) -> list[int]:
        """Indices linked to `index`, ascending."""
        if not self._in_range(index):
            return []
        return list(self.sockets[index].links)

    def is_linked(self, i: int, j: int) -> bool:
        if not (self._in_range(i) and self._in_range(j)):
            return False
        return j in self.sockets[i].links

    def add_link(self, i: int, j: int) -> OperationResult:
        """Link two sockets in both directions. Linking twice is a no-op."""
        if not (self._in_range(i) and self._in_range(j)):
            logger.debug("add_link(%r, %r) rejected: out of range", i, j)
            return self._bad_indices(i, j)
        if i == j:
            return OperationResult.fail(
                ErrorKind.INVALID_SOCKET_OPERATION,
                f"Cannot link socket {i} to itself",
            )
        if self.is_linked(i, j):
            return OperationResult.ok()

        bisect.insort(self.sockets[i].links, j)
        bisect.insort(self.sockets[j].links, i)
        self._link_pairs.append((i, j))
        return OperationResult.ok()

    def remove_link(self, i: int, j: int) -> OperationResult:
        """Unlink two sockets in both directions."""
        if not (self._in_range(i) and self._in_range(j)):
            logger.debug("remove_link(%r, %r) rejected: out of range", i, j)
            return self._bad_indices(i, j)
        if not self.is_linked(i, j):
            return OperationResult.ok()

        self.sockets[i].links.remove(j)
        self.sockets[j].links.remove(i)
        self._link_pairs = [pair for pair in self._link_pairs if pair not in ((i, j), (j, i))]
        return OperationResult.ok()

    # Gems

    def socket_gem(self, index: int, gem: SkillGem) -> OperationResult:
        if not self._in_range(index):
            return OperationResult.fail(
                ErrorKind.INVALID_SOCKET_OPERATION,
                f"Socket index {index} out of range for {len(self.sockets)} sockets",
            )
        result = self.sockets[index].socket(gem)
        if not result:
            logger.debug("socket_gem(%d, %s) rejected: %s", index, gem.id, result.message)
        return result

    def unsocket_gem(self, index: int) -> Optional[SkillGem]:
        if not self._in_range(index):
            return None
        return self.sockets[index].unsocket()

    def gems(self) -> list[tuple[int, SkillGem]]:
        """(index, gem) for every occupied socket, ascending."""
        return [(i, s.gem) for i, s in enumerate(self.sockets) if s.gem is not None]

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        return {
            "sockets": [
                {
                    "color": s.color.value,
                    "gem": s.gem.to_dict() if s.gem is not None else None,
                }
                for s in self.sockets
            ],
            "links": [list(pair) for pair in self._link_pairs],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], registry: "GemRegistry") -> "SocketGroup":
        """Rebuild a group saved with `to_dict`.

        Gems whose template is gone leave their socket empty.

        Raises:
            LoadoutError: On unknown colors, bad links or gems that do not fit
        """
        return cls.from_row(parse_row(GroupRow, data), registry)

    @classmethod
    def from_row(cls, row: GroupRow, registry: "GemRegistry") -> "SocketGroup":
        """Build a group from a validated row, replaying links in saved order.

        Raises:
            LoadoutError: If a saved gem does not fit its socket's color
        """
        group = cls.from_layout([socket.color for socket in row.sockets], row.links)
        for index, socket_row in enumerate(row.sockets):
            if socket_row.gem is None:
                continue
            gem = SkillGem.from_row(socket_row.gem, registry)
            if gem is None:
                continue
            result = group.socket_gem(index, gem)
            if not result:
                raise LoadoutError(f"Socket {index}: {result.message}")
        return group
