"""Gem progression and stat composition tuning.

Values follow the live gem rules:
- Level scaling and the experience curve are per-level multipliers
- Quality is a flat percentage on damage stats
- Critical defaults apply only when a support touches critical stats

Changing any value here changes balance for every character.
"""

# Gem level range
MIN_GEM_LEVEL: int = 1
MAX_GEM_LEVEL: int = 20

# Stat scaling per level above 1 (ADDITIVE per level, then one multiply)
# Example: level 5 → 1 + 0.06 × 4 = ×1.24, rounded up
LEVEL_SCALING_PER_LEVEL: float = 0.06

# Stats whose key contains one of these markers never scale with level
TIME_EXEMPT_MARKERS: tuple[str, ...] = ("Time",)

# Quality only touches stats whose key contains this marker
QUALITY_STAT_MARKER: str = "damage"
MIN_QUALITY: int = 0
MAX_QUALITY: int = 100

# Experience to next level: floor(EXPERIENCE_BASE × EXPERIENCE_GROWTH^(level-1))
EXPERIENCE_BASE: int = 1000
EXPERIENCE_GROWTH: float = 1.1

# Critical strike defaults used when a support multiplies a missing value
DEFAULT_CRITICAL_CHANCE: float = 0.05
DEFAULT_CRITICAL_MULTIPLIER: float = 1.5

# Fallbacks for multiplicative folds on missing running values
DEFAULT_DAMAGE: float = 1.0
DEFAULT_TIMING: float = 1.0
DEFAULT_MANA_COST: float = 0.0

# Support stat key → running stat it multiplies
DAMAGE_MULTIPLIER_KEYS: tuple[str, ...] = (
    "damageMultiplier",
    "physicalDamageMultiplier",
)

# Support speed key → timing field it divides
SPEED_MULTIPLIER_KEYS: dict[str, str] = {
    "castSpeedMultiplier": "castTime",
    "attackSpeedMultiplier": "attackTime",
}

COST_MULTIPLIER_KEY: str = "manaCostMultiplier"

# Support critical key → (running field, default when missing)
CRITICAL_MULTIPLIER_KEYS: dict[str, tuple[str, float]] = {
    "criticalChanceMultiplier": ("criticalChance", DEFAULT_CRITICAL_CHANCE),
    "criticalMultiplierMultiplier": ("criticalMultiplier", DEFAULT_CRITICAL_MULTIPLIER),
}

# "added<Element>DamagePercent" supports record "added<Element>Damage"
ADDED_DAMAGE_PREFIX: str = "added"
ADDED_DAMAGE_SUFFIX: str = "DamagePercent"

# Mechanic counts overwrite (last linked support wins)
MECHANIC_KEYS: tuple[str, ...] = (
    "pierceChance",
    "pierceCount",
    "projectileCount",
    "attackRepeatCount",
    "spellRepeatCount",
    "chainCount",
    "attackCount",
)
DEFAULT_PIERCE_COUNT: int = 1

# Gem stat keys that land in typed fields of the composed skill stats
TIMING_KEYS: tuple[str, ...] = ("castTime", "attackTime")
MANA_COST_KEY: str = "manaCost"
DAMAGE_KEY: str = "damage"

# Character modifier targets (key format "<tag>:<target>")
MODIFIER_TARGETS: tuple[str, ...] = ("damage", "cast_speed", "attack_speed", "mana_cost")

# Older flat modifier keys still sent by the character sheet
CHARACTER_MODIFIER_ALIASES: dict[str, tuple[str, str]] = {
    "spellDamageInc": ("spell", "damage"),
    "attackDamageInc": ("attack", "damage"),
    "castSpeedInc": ("spell", "cast_speed"),
    "attackSpeedInc": ("attack", "attack_speed"),
}

# Environment variable read by the CLI for its default log level
LOG_LEVEL_ENV: str = "GEMLINK_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"
