"""Command-line interface for inspecting gems and loadouts."""
import argparse
import json
import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, MAX_GEM_LEVEL, MAX_QUALITY, MIN_GEM_LEVEL, MIN_QUALITY
from .core import GemRegistry, get_registry
from .compositor import calculate_skill_damage
from .eligibility import check_skill_use
from .errors import LoadoutError
from .gems import SkillGem
from .loadout import Loadout, read_loadout
from .models import SocketColor, parse_kind
from .resolver import active_skill_setups
from .utils import format_requirements, format_stat, format_tags

logger = logging.getLogger(__name__)

COLOR_STYLES = {
    SocketColor.RED: "red",
    SocketColor.GREEN: "green",
    SocketColor.BLUE: "blue",
    SocketColor.WHITE: "white",
}


def gem_table(title: str, gems: list[SkillGem]) -> Table:
    """Table of gems with kind, color, requirements and tags."""
    table = Table(title=title)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Color")
    table.add_column("Requires")
    table.add_column("Tags")
    for gem in gems:
        table.add_row(
            gem.id,
            gem.name,
            gem.kind.value,
            Text(gem.socket_color.value, style=COLOR_STYLES[gem.socket_color]),
            format_requirements(gem.requirements),
            format_tags(gem.tags),
        )
    return table


def stats_table(title: str, stats: dict) -> Table:
    table = Table(title=title)
    table.add_column("Stat")
    table.add_column("Value", justify="right")
    for key, value in stats.items():
        if key == "tags":
            continue
        table.add_row(key, format_stat(value))
    return table


def gem_summary(gem: SkillGem) -> dict:
    return {
        **gem.to_dict(),
        "name": gem.name,
        "kind": gem.kind.value,
        "color": gem.socket_color.value,
        "tags": list(gem.tags),
    }


def show_gem(console: Console, registry: GemRegistry, gem_id: str,
             level: int, quality: int, as_json: bool) -> int:
    """Print one gem's stats at a level and quality."""
    template = registry.template(gem_id)
    if template is None:
        console.print(f"[red]Error:[/red] unknown gem {escape(repr(gem_id))}")
        return 1
    if not MIN_GEM_LEVEL <= level <= MAX_GEM_LEVEL:
        console.print(f"[red]Error:[/red] level must be between {MIN_GEM_LEVEL} and {MAX_GEM_LEVEL}")
        return 1

    gem = SkillGem(template=template, level=level)
    result = gem.set_quality(quality)
    if not result:
        console.print(f"[red]Error:[/red] {escape(result.message)}")
        return 1

    stats = gem.current_stats()
    if as_json:
        print(json.dumps({**gem_summary(gem), "stats": stats}, indent=2))
        return 0

    console.print(Text(f"{gem.name} ({format_tags(gem.tags)})", style="bold"))
    console.print(template.description)
    console.print(stats_table(f"Level {level}, quality {quality}", stats))
    return 0


def evaluate_loadout(loadout: Loadout) -> list[dict]:
    """Every skill setup in a loadout with composed stats and eligibility."""
    rows = []
    for group_name, group in loadout.groups.items():
        for setup in active_skill_setups(group):
            stats = calculate_skill_damage(setup, loadout.character)
            eligibility = check_skill_use(setup, loadout.character)
            rows.append({
                "group": group_name,
                "socket": setup.socket_index,
                "active": setup.active_gem.id,
                "supports": [gem.id for gem in setup.support_gems],
                "stats": stats.as_dict(),
                "usable": eligibility.usable,
                "reasons": list(eligibility.reasons),
            })
    return rows


def show_loadout(console: Console, path: str, as_json: bool) -> int:
    try:
        loadout = read_loadout(path)
    except LoadoutError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    rows = evaluate_loadout(loadout)
    if as_json:
        print(json.dumps(rows, indent=2))
        return 0

    if not rows:
        console.print("No active gems socketed.")
        return 0

    for row in rows:
        supports = ", ".join(row["supports"]) or "no supports"
        title = f"{row['group']} #{row['socket']}: {row['active']} + {supports}"
        console.print(stats_table(title, row["stats"]))
        if row["usable"]:
            console.print(Text("Usable", style="green"))
        else:
            for reason in row["reasons"]:
                console.print(Text(f"Not usable: {reason}", style="red"))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="gemlink",
        description="Skill gem link and stat inspector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --list                          # All gems in the catalog
  %(prog)s --search fire --kind support    # Support gems matching "fire"
  %(prog)s --class Witch                   # Witch starter gems
  %(prog)s --gem fireball --level 10 --quality 20
  %(prog)s --loadout build.json            # Evaluate every linked skill
        """,
    )

    parser.add_argument("--list", action="store_true", help="List every gem")
    parser.add_argument("--search", metavar="QUERY", help="Search names, descriptions and tags")
    parser.add_argument(
        "--kind",
        choices=["all", "active", "support"],
        default="all",
        help="Restrict --search to active or support gems",
    )
    parser.add_argument("--class", dest="class_name", metavar="NAME", help="Show starter gems for a class")
    parser.add_argument("--gem", metavar="ID", help="Show a gem's stats")
    parser.add_argument(
        "--level", "-l",
        type=int,
        default=MIN_GEM_LEVEL,
        help=f"Gem level for --gem ({MIN_GEM_LEVEL}-{MAX_GEM_LEVEL}, default: {MIN_GEM_LEVEL})",
    )
    parser.add_argument(
        "--quality", "-q",
        type=int,
        default=MIN_QUALITY,
        help=f"Gem quality for --gem ({MIN_QUALITY}-{MAX_QUALITY}, default: {MIN_QUALITY})",
    )
    parser.add_argument("--loadout", metavar="FILE", help="Evaluate a loadout JSON file")
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or {DEFAULT_LOG_LEVEL})",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    console = Console()
    registry = get_registry()

    if args.gem:
        return show_gem(console, registry, args.gem, args.level, args.quality, args.json)

    if args.loadout:
        return show_loadout(console, args.loadout, args.json)

    if args.search is not None:
        gems = registry.search(args.search, parse_kind(args.kind))
        title = f"Gems matching {args.search!r}"
    elif args.class_name:
        gems = registry.gems_for_class(args.class_name)
        if not gems:
            known = ", ".join(registry.class_names())
            console.print(f"[red]Error:[/red] unknown class {escape(repr(args.class_name))} (known: {known})")
            return 1
        title = f"{args.class_name} starter gems"
    elif args.list:
        gems = registry.all_active() + registry.all_support()
        title = "Gem catalog"
    else:
        parser.print_help()
        return 0

    if args.json:
        print(json.dumps([gem_summary(gem) for gem in gems], indent=2))
    elif gems:
        console.print(gem_table(title, gems))
    else:
        console.print("No gems found.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
