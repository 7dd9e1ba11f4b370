"""Rich terminal display for volunteer-rank."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

_RARITY_COLORS: dict[str, str] = {
    "common": "white",
    "rare": "blue",
    "epic": "magenta",
    "legendary": "yellow",
}

# (smallest value abbreviated, divisor, suffix), largest first
_ABBREVIATIONS = ((1_000_000, 1_000_000, "M"), (10_000, 1_000, "K"))


def format_number(n: int) -> str:
    """Shorten a points total for table columns: 1850 -> '1,850', 12500 -> '12.5K'."""
    for threshold, divisor, suffix in _ABBREVIATIONS:
        if n >= threshold:
            return f"{n / divisor:.1f}{suffix}"
    return f"{n:,}"


def format_hours(hours: float) -> str:
    """Format hours: 0.5 -> '30 min', 185 -> '185.0h'."""
    if hours < 1:
        return f"{round(hours * 60)} min"
    return f"{hours:.1f}h"


def _progress_bar(current: float, total: float, width: int = 20) -> str:
    """Render a progress bar as text: [████████░░░░░░░░░░░░]."""
    if total <= 0:
        return "[" + "█" * width + "]"
    ratio = max(0.0, min(current / total, 1.0))
    filled = int(ratio * width)
    empty = width - filled
    return "[" + "█" * filled + "░" * empty + "]"


def print_tier_card(data: dict) -> None:
    """Print tier, points and progress for one hours value."""
    tier_label = data.get("tier_label", "Bronze")
    tier_color = data.get("tier_color", "white")
    icon = data.get("tier_icon", "")
    percent = data.get("percent", 0.0)
    next_label = data.get("next_tier_label")

    lines: list[str] = []
    lines.append("")
    lines.append(f"  [bold {tier_color}]{icon} {tier_label}[/]")
    lines.append(f"  Hours:  [bold]{format_hours(data.get('hours', 0.0))}[/]")
    lines.append(f"  Points: [bold]{format_number(data.get('points', 0))}[/]")
    lines.append("")

    bar = _progress_bar(percent, 100)
    if next_label:
        lines.append(f"  {bar} {percent:.0f}%")
        lines.append(f"  {format_hours(data.get('hours_needed', 0))} until {next_label}")
    else:
        lines.append(f"  {bar} MAX TIER")

    benefits = data.get("benefits", [])
    if benefits:
        lines.append("")
        lines.append("  [bold]Benefits:[/]")
        for benefit in benefits:
            lines.append(f"  • {benefit}")
    lines.append("")

    panel = Panel(
        "\n".join(lines),
        title="[bold]VOLUNTEER TIER[/]",
        box=box.ROUNDED,
        border_style=tier_color,
        width=50,
    )
    console.print(panel)


def print_tier_table(tiers: list[dict]) -> None:
    """Print the active tier thresholds."""
    table = Table(title="Tiers", box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("", width=2)
    table.add_column("Tier", min_width=10)
    table.add_column("Min Hours", justify="right")
    table.add_column("Min Points", justify="right")
    table.add_column("Benefits")

    for tier in tiers:
        color = tier.get("color", "white")
        table.add_row(
            tier.get("icon", ""),
            f"[bold {color}]{tier['label']}[/]",
            f"{tier['min_hours']:g}",
            format_number(tier["min_points"]),
            "\n".join(tier.get("benefits", [])),
        )
    console.print(table)


def print_badges(badges: list[dict], newly_unlocked: list[str] | None = None) -> None:
    """Print all badges with progress bars.

    Each dict has: id, name, description, icon, rarity, category, progress
    (0.0-1.0), unlocked (bool), auto (bool).
    """
    unlocked = [b for b in badges if b.get("unlocked")]
    locked = [b for b in badges if not b.get("unlocked")]
    locked.sort(key=lambda b: b.get("progress", 0), reverse=True)
    new_ids = set(newly_unlocked or [])

    table = Table(title="Badges", box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("", width=2)
    table.add_column("Badge", min_width=20)
    table.add_column("Rarity", width=10)
    table.add_column("Progress", min_width=18)

    for badge in unlocked + locked:
        if badge.get("unlocked"):
            status = "✅"
        elif not badge.get("auto", True):
            status = "➖"
        else:
            status = "⏳"
        rarity = badge.get("rarity", "common")
        color = _RARITY_COLORS.get(rarity, "white")

        name = f"{badge.get('icon', '')} [bold]{badge['name']}[/]"
        if badge["id"] in new_ids:
            name += " [green]NEW[/]"
        name_text = f"{name}\n{badge.get('description', '')}"
        rarity_text = f"[{color}]{rarity.upper()}[/{color}]"

        if not badge.get("auto", True) and not badge.get("unlocked"):
            progress_text = "awarded manually"
        else:
            progress = badge.get("progress", 0.0)
            progress_text = f"{_progress_bar(progress, 1.0, width=10)} {int(progress * 100)}%"

        table.add_row(status, name_text, rarity_text, progress_text)

    console.print(table)


def print_leaderboard(entries: list[dict], distribution: dict[str, int] | None = None) -> None:
    """Print ranked volunteers and the tier distribution."""
    if not entries:
        console.print("[yellow]No volunteers in roster.[/]")
        return

    table = Table(title="Leaderboard", box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("#", justify="right", width=4)
    table.add_column("Volunteer", min_width=16)
    table.add_column("Tier", width=10)
    table.add_column("Hours", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Projects", justify="right")

    for entry in entries:
        table.add_row(
            str(entry.get("rank", "")),
            entry.get("name", ""),
            entry.get("tier", ""),
            format_hours(entry.get("hours", 0)),
            format_number(entry.get("points", 0)),
            str(entry.get("projects", 0)),
        )
    console.print(table)

    if distribution:
        parts = [f"{tier.title()}: {count}" for tier, count in distribution.items()]
        console.print("  " + "  |  ".join(parts))


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]{message}[/]")
