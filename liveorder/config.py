"""Configuration management for liveorder.

Config resolution order (highest priority first):
1. Programmatic (LiveorderConfig constructed in code, or CLI flags)
2. Environment variables (LIVEORDER_STYLES, LIVEORDER_OUTPUT_FORMAT, ...)
3. Config file (~/.config/liveorder/config.json, managed by `liveorder config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict, replace
from pathlib import Path
from typing import Any

from .style import ArchetypePolicy, DEFAULT_POLICIES, policy_for


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "liveorder"
CONFIG_FILE = CONFIG_DIR / "config.json"

OUTPUT_FORMATS = ("yaml", "json")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class StylesConfig:
    """Which archetype styles run, and how.

    - enabled: archetype tags (live_view, live_component)
    - synthesize_moduledoc: add `@moduledoc false` to components that open
      with their `use` declaration and have no moduledoc
    """

    enabled: list[str] = field(
        default_factory=lambda: [p.sentinel for p in DEFAULT_POLICIES]
    )
    synthesize_moduledoc: bool = True


@dataclass
class OutputConfig:
    """Document output settings."""

    format: str = "yaml"


@dataclass
class LiveorderConfig:
    """Top-level liveorder configuration.

    Examples:
        # Package use, no files needed
        config = LiveorderConfig(styles=StylesConfig(enabled=["live_view"]))

        # CLI use: loads from ~/.config/liveorder/config.json
        config = LiveorderConfig.load()
    """

    styles: StylesConfig = field(default_factory=StylesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def load(cls) -> "LiveorderConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("LIVEORDER_STYLES"):
            config.styles.enabled = _parse_list(val)
        if val := os.environ.get("LIVEORDER_SYNTHESIZE_MODULEDOC"):
            flag = _parse_bool(val)
            if flag is None:
                logger.warning(
                    "Invalid LIVEORDER_SYNTHESIZE_MODULEDOC=%r, ignoring", val
                )
            else:
                config.styles.synthesize_moduledoc = flag
        if val := os.environ.get("LIVEORDER_OUTPUT_FORMAT"):
            if val in OUTPUT_FORMATS:
                config.output.format = val
            else:
                logger.warning("Invalid LIVEORDER_OUTPUT_FORMAT=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/liveorder/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "styles": asdict(self.styles),
            "output": asdict(self.output),
        }


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: LiveorderConfig, data: dict) -> None:
    """Apply a dict of values onto a LiveorderConfig."""
    if "styles" in data and isinstance(data["styles"], dict):
        styles = data["styles"]
        if isinstance(styles.get("enabled"), list):
            config.styles.enabled = [str(name) for name in styles["enabled"]]
        if isinstance(styles.get("synthesize_moduledoc"), bool):
            config.styles.synthesize_moduledoc = styles["synthesize_moduledoc"]
    if "output" in data and isinstance(data["output"], dict):
        fmt = data["output"].get("format")
        if fmt in OUTPUT_FORMATS:
            config.output.format = fmt


def _parse_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


# =============================================================================
# Policy construction
# =============================================================================


def build_policies(config: LiveorderConfig) -> tuple[ArchetypePolicy, ...]:
    """Turn the styles config into the immutable policies the engine takes.

    Raises:
        ValueError: If an enabled style name is not a known archetype.
    """
    policies = []
    for name in config.styles.enabled:
        policy = policy_for(name)
        if policy.synthesize_moduledoc and not config.styles.synthesize_moduledoc:
            policy = replace(policy, synthesize_moduledoc=False)
        policies.append(policy)
    return tuple(policies)


# =============================================================================
# Global config instance
# =============================================================================

_config: LiveorderConfig | None = None


def get_config() -> LiveorderConfig:
    """Get the global LiveorderConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = LiveorderConfig.load()
    return _config


def configure(config: LiveorderConfig) -> None:
    """Set the global LiveorderConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
