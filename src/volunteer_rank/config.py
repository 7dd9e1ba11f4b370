"""Configuration file management for volunteer-rank.

Reads and writes ~/.volunteer-rank/config.json. Optional keys:

- "log_level": logging level name, default "WARNING".
- "tiers": list of {"tier", "min_hours", "min_points"} overriding the default
  thresholds. The result is validated like any TierTable, so a bad override
  fails at startup.
"""
from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

from volunteer_rank.tiers import DEFAULT_TIERS, TIER_TABLE, Tier, TierConfigError, TierTable

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: Path = Path.home() / ".volunteer-rank" / "config.json"
DEFAULT_LOG_LEVEL = "WARNING"


def load_config(config_path: Path | None = None) -> dict:
    """Read the settings object, or {} when there is nothing usable.

    A missing file is the normal case and is silent. An unreadable file or a
    top level that is not an object is logged and treated as no settings, so
    the default log level and tier table still apply.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    try:
        settings = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring malformed config %s: %s", path, exc)
        return {}
    if not isinstance(settings, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return {}
    return settings


def save_config(settings: dict, config_path: Path | None = None) -> None:
    """Write settings as sorted, indented JSON, creating ~/.volunteer-rank if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def get_log_level(config_path: Path | None = None) -> str:
    """Return the configured log level name."""
    return str(load_config(config_path).get("log_level", DEFAULT_LOG_LEVEL)).upper()


def load_tier_table(config_path: Path | None = None) -> TierTable:
    """Return the tier table, applying threshold overrides from config.

    Raises TierConfigError if the overrides are malformed or break ordering.
    """
    overrides = load_config(config_path).get("tiers")
    if overrides is None:
        return TIER_TABLE
    if not isinstance(overrides, list):
        raise TierConfigError("'tiers' must be a list of tier threshold objects")

    by_tier: dict[Tier, dict] = {}
    for item in overrides:
        if not isinstance(item, dict):
            raise TierConfigError(f"Tier override must be an object, got {item!r}")
        try:
            tier = Tier(str(item.get("tier", "")).upper())
        except ValueError:
            raise TierConfigError(f"Unknown tier {item.get('tier')!r}") from None
        by_tier[tier] = item

    tiers = []
    for info in DEFAULT_TIERS:
        item = by_tier.get(info.tier)
        if item is None:
            tiers.append(info)
            continue
        try:
            tiers.append(
                replace(
                    info,
                    min_hours=float(item.get("min_hours", info.min_hours)),
                    min_points=int(item.get("min_points", info.min_points)),
                )
            )
        except (TypeError, ValueError):
            raise TierConfigError(f"Non-numeric threshold for {info.label}: {item!r}") from None

    table = TierTable(tiers)
    logger.info("Using tier thresholds from config: %r", table)
    return table
