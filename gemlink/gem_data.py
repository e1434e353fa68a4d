"""Built-in gem catalog and class starter lists.

Each entry is (id, name, requirements, base_stats, description, tags).
Requirements are (level, strength, dexterity, intelligence).

The catalog is loaded once into the process-wide registry; edit these
tables rather than registering gems at runtime.
"""

GemRow = tuple[str, str, tuple[int, int, int, int], dict[str, float], str, tuple[str, ...]]

# Active skill gems
ACTIVE_GEMS: list[GemRow] = [
    (
        "fireball", "Fireball", (1, 0, 0, 12),
        {"damage": 15, "projectileSpeed": 200, "manaCost": 6, "castTime": 0.75, "radius": 15},
        "Casts a fiery projectile that explodes on impact",
        ("spell", "projectile", "fire", "aoe"),
    ),
    (
        "ice_nova", "Ice Nova", (1, 0, 0, 12),
        {"damage": 20, "manaCost": 8, "castTime": 0.7, "radius": 25},
        "Creates an expanding ring of ice around the caster",
        ("spell", "aoe", "cold"),
    ),
    (
        "lightning_bolt", "Lightning Bolt", (1, 0, 0, 12),
        {"damage": 12, "manaCost": 5, "castTime": 0.5, "chainCount": 3},
        "Casts a bolt of lightning that chains between enemies",
        ("spell", "projectile", "lightning", "chaining"),
    ),
    (
        "heavy_strike", "Heavy Strike", (1, 12, 0, 0),
        {"damageMultiplier": 1.44, "manaCost": 6, "attackTime": 1.0},
        "Attacks with increased damage and knockback",
        ("attack", "melee"),
    ),
    (
        "double_strike", "Double Strike", (1, 8, 8, 0),
        {"damageMultiplier": 0.91, "attackCount": 2, "manaCost": 5, "attackTime": 0.8},
        "Performs two quick strikes in succession",
        ("attack", "melee"),
    ),
    (
        "burning_arrow", "Burning Arrow", (1, 0, 12, 0),
        {"damageMultiplier": 1.2, "burnDamage": 10, "burnDuration": 4, "manaCost": 4},
        "Fires an arrow that burns enemies over time",
        ("attack", "projectile", "bow", "fire"),
    ),
    (
        "split_arrow", "Split Arrow", (1, 0, 12, 0),
        {"damageMultiplier": 0.7, "projectileCount": 3, "manaCost": 6},
        "Fires multiple arrows in a spread",
        ("attack", "projectile", "bow"),
    ),
]

# Support gems
SUPPORT_GEMS: list[GemRow] = [
    (
        "added_fire_damage", "Added Fire Damage Support", (8, 14, 0, 0),
        {"addedFireDamagePercent": 44, "manaCostMultiplier": 1.2},
        "Supported skills have added fire damage",
        ("fire",),
    ),
    (
        "added_cold_damage", "Added Cold Damage Support", (8, 0, 0, 14),
        {"addedColdDamagePercent": 39, "freezeChance": 10, "manaCostMultiplier": 1.2},
        "Supported skills have added cold damage and freeze chance",
        ("cold",),
    ),
    (
        "faster_casting", "Faster Casting Support", (8, 0, 0, 14),
        {"castSpeedMultiplier": 1.44, "manaCostMultiplier": 1.2},
        "Supported skills cast faster",
        ("spell",),
    ),
    (
        "melee_physical_damage", "Melee Physical Damage Support", (8, 14, 0, 0),
        {"physicalDamageMultiplier": 1.49, "manaCostMultiplier": 1.25},
        "Supported skills deal more physical damage",
        ("attack", "melee"),
    ),
    (
        "pierce", "Pierce Support", (8, 0, 14, 0),
        {"pierceChance": 100, "pierceCount": 3, "damageMultiplier": 0.9, "manaCostMultiplier": 1.15},
        "Supported projectiles pierce through enemies",
        ("projectile",),
    ),
    (
        "multistrike", "Multistrike Support", (38, 14, 14, 0),
        {"attackRepeatCount": 2, "damageMultiplier": 0.7, "attackSpeedMultiplier": 1.94,
         "manaCostMultiplier": 1.6},
        "Supported skills repeat twice more",
        ("attack", "melee"),
    ),
    (
        "spell_echo", "Spell Echo Support", (38, 0, 0, 25),
        {"spellRepeatCount": 1, "damageMultiplier": 0.7, "castSpeedMultiplier": 1.69,
         "manaCostMultiplier": 1.4},
        "Supported spells repeat an additional time",
        ("spell",),
    ),
    (
        "critical_strikes", "Increased Critical Strikes Support", (8, 0, 14, 0),
        {"criticalChanceMultiplier": 1.9, "criticalMultiplierMultiplier": 1.3,
         "manaCostMultiplier": 1.2},
        "Supported skills have increased critical strike chance and multiplier",
        (),
    ),
]

# Starter gems handed out at character creation
# Format: {class_name: [gem_id, ...]}
CLASS_STARTER_GEMS: dict[str, list[str]] = {
    "Marauder": ["heavy_strike", "double_strike", "melee_physical_damage", "added_fire_damage"],
    "Ranger": ["burning_arrow", "split_arrow", "pierce", "critical_strikes"],
    "Witch": ["fireball", "ice_nova", "lightning_bolt", "faster_casting", "added_cold_damage"],
    "Duelist": ["heavy_strike", "double_strike", "melee_physical_damage", "critical_strikes"],
    "Templar": ["heavy_strike", "fireball", "added_fire_damage", "faster_casting"],
    "Shadow": ["lightning_bolt", "burning_arrow", "critical_strikes", "faster_casting"],
    "Scion": ["fireball", "heavy_strike", "burning_arrow", "faster_casting"],
}
