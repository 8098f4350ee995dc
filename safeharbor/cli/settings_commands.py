"""Settings CLI commands for Safe Harbor.

Manages settings.json - default tax year, output format, data directory.
"""

import click

from safeharbor.sdk import (
    DEFAULT_TAX_YEAR,
    get_available_years,
    get_data_path,
    get_setting,
    get_settings_path,
    load_settings,
    save_settings,
    set_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_year: default tax year for calculations
    - default_output_format: text or json
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
    click.echo("Effective values:")
    click.echo(f"  tax_year: {get_setting('tax_year', DEFAULT_TAX_YEAR)}")
    click.echo(f"  data_dir: {get_data_path()}")


@settings.command("tax-year")
@click.argument("year", required=False, type=int)
@click.option("--clear", is_flag=True, help="Clear custom tax_year, revert to default")
def settings_tax_year(year, clear):
    """Set or clear the default tax year.

    Examples:
        safe-harbor settings tax-year 2025
        safe-harbor settings tax-year --clear
    """
    if clear:
        current = load_settings()
        if "tax_year" in current:
            del current["tax_year"]
            save_settings(current)
            click.echo("Cleared tax_year setting.")
        else:
            click.echo("tax_year was not set.")
        return

    if year is None:
        click.echo(f"Current tax_year: {get_setting('tax_year', DEFAULT_TAX_YEAR)}")
        return

    available = get_available_years()
    if year not in available:
        raise click.BadParameter(
            f"No tax rules for {year}. Available: {', '.join(str(y) for y in available)}"
        )

    set_setting("tax_year", year)
    click.echo(f"Set tax_year: {year}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("format")
@click.argument("output_format", type=click.Choice(["text", "json"]))
def settings_format(output_format):
    """Set the default output format."""
    set_setting("default_output_format", output_format)
    click.echo(f"Set default_output_format: {output_format}")
