"""Settings CLI commands for NominaMX.

Manages settings.json - default tax year, rules directory, input defaults.
"""

import click

from nominamx.sdk import (
    KNOWN_SETTINGS,
    SettingsError,
    coerce_setting,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - tax_year: default tax year
    - tax_rules_dir: extra directory with <year>.yaml rule files
    - payroll_tax_rate: default ISN percent
    - bonus_days: default aguinaldo days
    - ai_timeout: seconds to wait for the AI advisor
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        nominamx settings set tax_year 2024
        nominamx settings set payroll_tax_rate 4
    """
    try:
        typed = coerce_setting(key, value)
    except SettingsError as e:
        raise click.BadParameter(str(e), param_hint="VALUE")

    path = set_setting(key, typed)
    click.echo(f"Set {key}: {typed}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key):
    """Remove KEY, reverting to the default."""
    if unset_setting(key):
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
