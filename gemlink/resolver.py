"""Resolve socket groups into skill setups."""

from dataclasses import dataclass

from gemlink.gems import SkillGem
from gemlink.sockets import SocketGroup


@dataclass(frozen=True, slots=True)
class SkillSetup:
    """One active gem and the supports that currently modify it.

    Derived from a SocketGroup on demand; never stored.
    """
    active_gem: SkillGem
    support_gems: tuple[SkillGem, ...]
    socket_index: int
    support_indices: tuple[int, ...] = ()


def support_can_modify(support: SkillGem, active: SkillGem) -> bool:
    """Untagged supports fit anything; tagged ones need a shared tag."""
    if not support.tags:
        return True
    return not support.tag_set.isdisjoint(active.tag_set)


def linked_supports(group: SocketGroup, active_index: int) -> list[tuple[int, SkillGem]]:
    """(index, gem) of compatible supports directly linked to an active socket.

    Empty if the socket is out of range or does not hold an active gem.
    """
    if not 0 <= active_index < len(group):
        return []
    active = group[active_index].gem
    if active is None or not active.is_active:
        return []

    supports = []
    for index in group.neighbors(active_index):
        gem = group[index].gem
        if gem is not None and gem.is_support and support_can_modify(gem, active):
            supports.append((index, gem))
    return supports


def active_skill_setups(group: SocketGroup) -> list[SkillSetup]:
    """One SkillSetup per socketed active gem, by ascending socket index.

    Each active gem is resolved on its own, so a support linked to two
    actives shows up in both setups.
    """
    setups = []
    for index, gem in group.gems():
        if not gem.is_active:
            continue
        supports = linked_supports(group, index)
        setups.append(SkillSetup(
            active_gem=gem,
            support_gems=tuple(g for _, g in supports),
            socket_index=index,
            support_indices=tuple(i for i, _ in supports),
        ))
    return setups
