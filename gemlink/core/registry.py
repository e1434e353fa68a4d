"""Registry of gem templates."""

import logging
import math
from typing import Dict, Iterable, Mapping, Optional

from gemlink.errors import ConfigurationError
from gemlink.gems import SkillGem
from gemlink.models import GemKind, GemRequirements

from .base import GemTemplate

logger = logging.getLogger(__name__)


class GemRegistry:
    """Catalog of every active and support gem template.

    Templates are immutable. Lookups hand out a fresh SkillGem per call, so
    two characters never share level, experience or quality state.

    The process-wide catalog comes from get_registry() and is frozen once
    loaded. Build a separate GemRegistry for tests or tools that need their
    own gems.

    Example:
        registry = GemRegistry()
        registry.register_active("fireball", "Fireball", GemRequirements(intelligence=12),
                                 {"damage": 15}, "Casts a fiery projectile", ["spell", "fire"])
        gem = registry.lookup("fireball")
    """

    def __init__(self) -> None:
        self._templates: Dict[str, GemTemplate] = {}
        self._class_gems: Dict[str, list[str]] = {}
        self._frozen = False

    def register_active(
        self,
        gem_id: str,
        name: str,
        requirements: GemRequirements,
        base_stats: Mapping[str, float],
        description: str = "",
        tags: Iterable[str] = (),
    ) -> GemTemplate:
        """Register an active skill gem.

        Raises:
            ConfigurationError: On duplicate id or invalid definition
        """
        return self._register(GemKind.ACTIVE, gem_id, name, requirements, base_stats, description, tags)

    def register_support(
        self,
        gem_id: str,
        name: str,
        requirements: GemRequirements,
        base_stats: Mapping[str, float],
        description: str = "",
        tags: Iterable[str] = (),
    ) -> GemTemplate:
        """Register a support gem.

        Raises:
            ConfigurationError: On duplicate id or invalid definition
        """
        return self._register(GemKind.SUPPORT, gem_id, name, requirements, base_stats, description, tags)

    def _register(
        self,
        kind: GemKind,
        gem_id: str,
        name: str,
        requirements: GemRequirements,
        base_stats: Mapping[str, float],
        description: str,
        tags: Iterable[str],
    ) -> GemTemplate:
        if self._frozen:
            raise ConfigurationError(f"Registry is frozen; cannot register {gem_id!r}")
        if not gem_id or not isinstance(gem_id, str):
            raise ConfigurationError(f"Gem id must be a non-empty string, got {gem_id!r}")
        if gem_id in self._templates:
            raise ConfigurationError(f"Duplicate gem id {gem_id!r}")
        if min(requirements.level, requirements.strength,
               requirements.dexterity, requirements.intelligence) < 0:
            raise ConfigurationError(f"Gem {gem_id!r} has negative requirements: {requirements}")
        for key, value in base_stats.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigurationError(f"Gem {gem_id!r} stat {key!r} is not a number: {value!r}")

        template = GemTemplate(
            id=gem_id,
            name=name,
            kind=kind,
            requirements=requirements,
            base_stats=base_stats,
            description=description,
            tags=tuple(tags),
        )
        self._templates[gem_id] = template
        return template

    def set_class_gems(self, class_name: str, gem_ids: Iterable[str]) -> None:
        """Set the starter gem list for a character class.

        Raises:
            ConfigurationError: If frozen or an id is not registered
        """
        if self._frozen:
            raise ConfigurationError(f"Registry is frozen; cannot set gems for {class_name!r}")
        ids = list(gem_ids)
        unknown = [gem_id for gem_id in ids if gem_id not in self._templates]
        if unknown:
            raise ConfigurationError(f"Class {class_name!r} lists unknown gems: {unknown}")
        self._class_gems[class_name] = ids

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def template(self, gem_id: str) -> Optional[GemTemplate]:
        """Shared catalog definition behind `gem_id`, or None when not registered.

        Use lookup() for a gem a character can own; the template itself is
        read-only and shared by every instance.
        """
        return self._templates.get(gem_id)

    def lookup(self, gem_id: str) -> Optional[SkillGem]:
        """Hand out a new, unlevelled gem for a character to own.

        Args:
            gem_id: Catalog id, e.g. "fireball"

        Returns:
            A fresh level 1 SkillGem, or None if the id is unknown
        """
        template = self._templates.get(gem_id)
        if template is None:
            logger.debug("Gem lookup miss: %r", gem_id)
            return None
        return SkillGem(template=template)

    def all_active(self) -> list[SkillGem]:
        return [SkillGem(template=t) for t in self._templates.values() if t.is_active]

    def all_support(self) -> list[SkillGem]:
        return [SkillGem(template=t) for t in self._templates.values() if t.is_support]

    def search(self, query: str, kind: Optional[GemKind] = None) -> list[SkillGem]:
        """Find gems by name, description or tag.

        Args:
            query: Case-insensitive substring
            kind: Restrict to active or support gems (None for both)

        Returns:
            Fresh gem instances, active gems first, each in catalog order
        """
        results = []
        for wanted in (GemKind.ACTIVE, GemKind.SUPPORT):
            if kind is not None and kind is not wanted:
                continue
            results.extend(
                SkillGem(template=t) for t in self._templates.values()
                if t.kind is wanted and t.matches(query)
            )
        return results

    def gems_for_class(self, class_name: str) -> list[SkillGem]:
        """Starter gems for a character class (empty for unknown classes)."""
        return [
            SkillGem(template=self._templates[gem_id])
            for gem_id in self._class_gems.get(class_name, [])
            if gem_id in self._templates
        ]

    def class_names(self) -> list[str]:
        return list(self._class_gems)

    def __contains__(self, gem_id: object) -> bool:
        return gem_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)


def build_default_registry() -> GemRegistry:
    """Load the built-in catalog into a new, frozen registry."""
    from gemlink.gem_data import ACTIVE_GEMS, CLASS_STARTER_GEMS, SUPPORT_GEMS

    registry = GemRegistry()
    for gem_id, name, (level, strength, dexterity, intelligence), stats, description, tags in ACTIVE_GEMS:
        registry.register_active(
            gem_id, name, GemRequirements(level, strength, dexterity, intelligence),
            stats, description, tags,
        )
    for gem_id, name, (level, strength, dexterity, intelligence), stats, description, tags in SUPPORT_GEMS:
        registry.register_support(
            gem_id, name, GemRequirements(level, strength, dexterity, intelligence),
            stats, description, tags,
        )
    for class_name, gem_ids in CLASS_STARTER_GEMS.items():
        registry.set_class_gems(class_name, gem_ids)
    registry.freeze()

    logger.info("Loaded gem catalog: %d gems, %d classes", len(registry), len(CLASS_STARTER_GEMS))
    return registry


_DEFAULT_REGISTRY: Optional[GemRegistry] = None


def get_registry() -> GemRegistry:
    """Return the process-wide catalog, loading it on first use."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = build_default_registry()
    return _DEFAULT_REGISTRY
