"""Configuration management for registered attributes.

Config resolution order (highest priority first):
1. Programmatic (AttributesConfig constructed in code, installed via configure())
2. Environment variables (REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS, ...)
3. Config file (~/.config/registered-attributes/config.json, managed by
   `registered-attributes config`)
4. Hardcoded defaults

unknown_options is read when a class declares its attributes, so changing it
only affects classes defined afterwards. strip_whitespace is read on every
write to a multi-valued attribute.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "registered-attributes"
CONFIG_FILE = CONFIG_DIR / "config.json"

UNKNOWN_OPTION_POLICIES = ("reject", "ignore")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a bool-ish env/config string.

    Raises:
        ValueError: If the string is not a recognized boolean spelling.
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class RegistrationConfig:
    """Declaration-time policy.

    - unknown_options: "reject" raises InvalidOptionError for an unrecognized
      option key, "ignore" drops it with a warning
    - strip_whitespace: treat whitespace-only strings as blank when filtering
      multi-valued input
    """

    unknown_options: str = "reject"
    strip_whitespace: bool = True


@dataclass
class AttributesConfig:
    """Top-level configuration.

    Examples:
        # Package use
        configure(AttributesConfig(registration=RegistrationConfig(unknown_options="ignore")))

        # CLI use, loads from ~/.config/registered-attributes/config.json
        config = AttributesConfig.load()
    """

    registration: RegistrationConfig = field(default_factory=RegistrationConfig)

    @classmethod
    def load(cls) -> "AttributesConfig":
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
        if val := os.environ.get("REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS"):
            if val in UNKNOWN_OPTION_POLICIES:
                config.registration.unknown_options = val
            else:
                logger.warning(
                    "Invalid REGISTERED_ATTRIBUTES_UNKNOWN_OPTIONS=%r, ignoring", val
                )
        if val := os.environ.get("REGISTERED_ATTRIBUTES_STRIP_WHITESPACE"):
            try:
                config.registration.strip_whitespace = parse_bool(val)
            except ValueError:
                logger.warning(
                    "Invalid REGISTERED_ATTRIBUTES_STRIP_WHITESPACE=%r, ignoring", val
                )

        return config

    def save(self) -> None:
        """Save config to ~/.config/registered-attributes/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {"registration": asdict(self.registration)}

    # ── Convenience properties ──

    @property
    def reject_unknown_options(self) -> bool:
        return self.registration.unknown_options == "reject"

    @property
    def strip_whitespace(self) -> bool:
        return self.registration.strip_whitespace


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: AttributesConfig, data: dict) -> None:
    """Apply a dict of values onto an AttributesConfig."""
    registration = data.get("registration")
    if not isinstance(registration, dict):
        return

    policy = registration.get("unknown_options")
    if policy is not None:
        if policy in UNKNOWN_OPTION_POLICIES:
            config.registration.unknown_options = policy
        else:
            logger.warning("Invalid unknown_options=%r in config file, ignoring", policy)

    strip = registration.get("strip_whitespace")
    if isinstance(strip, bool):
        config.registration.strip_whitespace = strip
    elif isinstance(strip, str):
        try:
            config.registration.strip_whitespace = parse_bool(strip)
        except ValueError:
            logger.warning("Invalid strip_whitespace=%r in config file, ignoring", strip)


# =============================================================================
# Global config singleton
# =============================================================================

_config: AttributesConfig | None = None


def get_config() -> AttributesConfig:
    """Get the global AttributesConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = AttributesConfig.load()
    return _config


def configure(config: AttributesConfig) -> None:
    """Set the global AttributesConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
