"""Tax rules loading.

Year-specific rules live in YAML files named ``<year>.yaml``. The packaged
tables ship in ``nominamx/tax_rules/``; a ``tax_rules_dir`` setting points to
an extra directory that is searched first, so a new year can be added
without touching the package.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..config import SettingsError, get_setting
from .schemas import TaxYearRules

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = 2024


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no rules file exists for a requested year."""
    pass


class TaxRulesValidationError(ValueError):
    """Raised when a rules file does not match the TaxYearRules schema."""
    pass


def _get_packaged_rules_dir() -> Path:
    """Get the tax_rules directory shipped with the package."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> nominamx


def _get_rules_dirs() -> list[Path]:
    """Directories searched for rules files, in priority order."""
    dirs = []
    custom = get_setting("tax_rules_dir")
    if custom:
        dirs.append(Path(custom).expanduser())
    dirs.append(_get_packaged_rules_dir())
    return dirs


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    years = set()
    for rules_dir in _get_rules_dirs():
        if rules_dir.is_dir():
            years.update(int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit())
    return sorted(years, reverse=True)


def find_rules_file(year: int) -> Optional[Path]:
    """Return the first rules file for ``year`` or None."""
    for rules_dir in _get_rules_dirs():
        candidate = rules_dir / f"{year}.yaml"
        if candidate.exists():
            return candidate
    return None


def get_default_year() -> int:
    """Tax year from settings, falling back to DEFAULT_TAX_YEAR.

    Raises:
        SettingsError: If the tax_year setting is not an integer
    """
    value = get_setting("tax_year", DEFAULT_TAX_YEAR)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise SettingsError(f"Invalid tax_year setting: {value!r} (expected int)")


@lru_cache(maxsize=None)
def _load_rules_file(path: Path) -> TaxYearRules:
    logger.debug(f"loading tax rules from {path}")
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    try:
        return TaxYearRules.model_validate(raw)
    except ValidationError as e:
        raise TaxRulesValidationError(f"Invalid tax rules in {path}:\n{e}") from e


def load_tax_rules(year: Optional[int] = None) -> TaxYearRules:
    """Load tax rules for a specific year.

    Args:
        year: Tax year (e.g., 2024). Defaults to the ``tax_year`` setting.

    Returns:
        Validated TaxYearRules

    Raises:
        TaxRulesNotFoundError: If no rules file exists for the year
        TaxRulesValidationError: If the file fails schema validation
    """
    if year is None:
        year = get_default_year()
    year = int(year)

    config_file = find_rules_file(year)
    if config_file is None:
        available = ", ".join(str(y) for y in get_available_years()) or "none"
        raise TaxRulesNotFoundError(
            f"Tax rules file not found for year {year} (available: {available})"
        )

    rules = _load_rules_file(config_file.resolve())
    if rules.year != year:
        raise TaxRulesValidationError(
            f"{config_file} declares year {rules.year}, expected {year}"
        )
    return rules
