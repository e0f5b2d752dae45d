"""Settings CLI commands for Cukai.

Manages settings.json - organization name, category rules override, data directory.
"""

import click
from pathlib import Path

from cukai.sdk import (
    KNOWN_SETTINGS,
    get_categories_override_path,
    get_data_path,
    get_settings_path,
    load_settings,
    save_settings,
    set_setting,
)
from cukai.sdk.taxes import CategoryRulesError, load_categories


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - organization: business name printed on SST-02 exports
    - categories_file: path to a categories.yaml overriding the built-in rules
    - data_dir: custom data directory path
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
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  data_dir: {get_data_path()}")
    override = get_categories_override_path()
    click.echo(f"  categories: {override if override else '(built-in)'}")


@settings.command("set")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
@click.argument("value")
def settings_set(key: str, value: str):
    """Set a setting value.

    \b
    Examples:
      cukai settings set organization "Kedai Runcit Sdn Bhd"
      cukai settings set categories_file ~/tax/categories-2025.yaml
    """
    if key in ("categories_file", "data_dir"):
        path = Path(value).expanduser().resolve()
        if key == "categories_file":
            try:
                rules = load_categories(path)
            except CategoryRulesError as e:
                raise click.ClickException(str(e))
            click.echo(f"Validated {len(rules)} category rule(s)")
        elif path.exists() and not path.is_dir():
            raise click.ClickException(f"Path exists but is not a directory: {path}")
        value = str(path)

    set_setting(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("unset")
@click.argument("key", type=click.Choice(KNOWN_SETTINGS))
def settings_unset(key: str):
    """Clear a setting, reverting to its default."""
    current = load_settings()
    if key not in current:
        click.echo(f"{key} was not set.")
        return

    del current[key]
    save_settings(current)
    click.echo(f"Cleared {key} setting.")
