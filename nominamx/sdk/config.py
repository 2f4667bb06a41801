"""Configuration management for NominaMX.

Settings live in a single settings.json file holding defaults for the CLI
and where to find tax rules:

- tax_year: default tax year for calculations (e.g. 2024)
- tax_rules_dir: extra directory searched for <year>.yaml rule files
- payroll_tax_rate: default state payroll tax (ISN) percent
- bonus_days: default aguinaldo days
- ai_timeout: seconds to wait for the AI advisor

Config directory resolution:
1. NOMINAMX_CONFIG_PATH environment variable (if set)
2. ~/.config/nominamx/ (XDG_CONFIG_HOME fallback)
"""

import json
import os
from pathlib import Path
from typing import Any


APP_NAME = "nominamx"
SETTINGS_FILENAME = "settings.json"

# key -> (type, description)
KNOWN_SETTINGS = {
    "tax_year": (int, "Default tax year for calculations"),
    "tax_rules_dir": (str, "Extra directory with <year>.yaml tax rule files"),
    "payroll_tax_rate": (float, "Default state payroll tax (ISN) percent"),
    "bonus_days": (float, "Default aguinaldo days"),
    "ai_timeout": (int, "Seconds to wait for the AI advisor"),
}


class SettingsError(ValueError):
    """Raised when a setting key or value is invalid."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. NOMINAMX_CONFIG_PATH environment variable
    2. ~/.config/nominamx/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    # 1. Check environment variable
    env_path = os.environ.get("NOMINAMX_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    # 2. Fall back to XDG config path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "tax_year")
        default: Default value if key not found
    """
    settings = load_settings()
    return settings.get(key, default)


def coerce_setting(key: str, value: str) -> Any:
    """Convert a raw string value to the type registered for ``key``.

    Raises:
        SettingsError: If the key is unknown or the value doesn't convert
    """
    if key not in KNOWN_SETTINGS:
        known = ", ".join(sorted(KNOWN_SETTINGS))
        raise SettingsError(f"Unknown setting '{key}'. Known settings: {known}")

    value_type, _ = KNOWN_SETTINGS[key]
    try:
        return value_type(value)
    except (TypeError, ValueError):
        raise SettingsError(
            f"Invalid value for '{key}': {value!r} (expected {value_type.__name__})"
        )


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True
