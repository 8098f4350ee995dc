"""Safe Harbor CLI - Command-line interface for estimated tax payments."""

import json
import logging
import os

import click
from rich.console import Console

from safeharbor import __version__
from safeharbor.sdk import (
    DEFAULT_TAX_YEAR,
    InputStore,
    build_payment_plan,
    calculate_taxes,
    compare_penalty_exposure,
    explain_calculation,
    format_quarterly_division,
    get_setting,
    load_payment_schedule,
    load_tax_rules,
    render_vouchers,
)

from .inputs_commands import inputs as inputs_group, resolve_inputs
from .renderers.summary_renderer import render_payment_plan, render_summary
from .settings_commands import settings as settings_group

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


def input_options(f):
    """Shared options for the four calculation inputs."""
    options = [
        click.option("--filing-status", "filing_status", type=click.Choice(["single", "married"]),
                     help="single or married (filing jointly)"),
        click.option("--prior-year-tax", "prior_year_tax",
                     help="Prior year total tax liability, e.g. '$25,000'"),
        click.option("--prior-year-agi", "prior_year_agi",
                     help="Prior year adjusted gross income"),
        click.option("--current-year-profit", "--profit", "current_year_profit",
                     help="Projected net profit for this year"),
        click.option("--year", type=int, default=None,
                     help="Tax year (default: settings tax_year, else latest rules)"),
        click.option("--save/--no-save", default=False,
                     help="Save these inputs for later runs"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _load_rules(year):
    """Load tax rules for the requested or configured year."""
    year = year or get_setting("tax_year", DEFAULT_TAX_YEAR)
    try:
        return load_tax_rules(year)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="safe-harbor")
def cli():
    """Safe Harbor - Estimated tax payments for the self-employed.

    Computes self-employment tax and federal income tax on projected
    profit, compares 90% of that against the prior-year Safe Harbor
    minimum, and recommends the lesser as your quarterly payment.

    Inputs not given as options are read from saved inputs
    (see 'safe-harbor inputs show').

    \b
    Settings are loaded from (in order):
    1. SAFE_HARBOR_CONFIG_PATH environment variable
    2. ~/.config/safe-harbor-tax/settings.json (XDG default)
    """
    pass


cli.add_command(inputs_group)
cli.add_command(settings_group)


@cli.command("calc")
@input_options
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default=None,
              help="Output format (default: settings default_output_format, else text)")
@click.option("--explain", is_flag=True, help="Show the step-by-step calculation")
def calc(filing_status, prior_year_tax, prior_year_agi, current_year_profit, year, save,
         output_format, explain):
    """Calculate the required annual and quarterly estimated payment.

    \b
    Examples:
      safe-harbor calc --filing-status single --prior-year-tax 25000 \\
          --prior-year-agi 140000 --profit 200000 --save
      safe-harbor calc --explain
      safe-harbor calc --format json
    """
    rules = _load_rules(year)
    inputs = resolve_inputs(
        InputStore(), save=save,
        filing_status=filing_status,
        prior_year_tax=prior_year_tax,
        prior_year_agi=prior_year_agi,
        current_year_profit=current_year_profit,
    )

    result = calculate_taxes(inputs, rules)
    steps = explain_calculation(result, rules) if explain else None
    penalty = compare_penalty_exposure(result)

    try:
        plan = build_payment_plan(result, load_payment_schedule(rules.year))
    except (FileNotFoundError, KeyError) as e:
        logger.warning(f"No payment schedule for {rules.year}: {e}")
        plan = None

    output_format = output_format or get_setting("default_output_format", "text")
    if output_format == "json":
        output = result.model_dump(mode="json")
        output["recommended_method"] = result.recommended_method
        if plan:
            output["payment_plan"] = [p.model_dump(mode="json") for p in plan]
        if penalty:
            output["penalty_comparison"] = penalty.model_dump(mode="json")
        if steps:
            output["steps"] = [s.model_dump(mode="json") for s in steps]
        click.echo(json.dumps(output, indent=2))
        return

    render_summary(
        Console(),
        result,
        plan=plan,
        steps=steps,
        division=format_quarterly_division(result) if explain else None,
        penalty=penalty,
    )


@cli.command("schedule")
@input_options
@click.option("--vouchers", is_flag=True, help="Print the four 1040-ES payment vouchers")
def schedule(filing_status, prior_year_tax, prior_year_agi, current_year_profit, year, save, vouchers):
    """Show the quarterly payment schedule with due dates.

    \b
    Examples:
      safe-harbor schedule
      safe-harbor schedule --vouchers > vouchers.txt
    """
    rules = _load_rules(year)
    inputs = resolve_inputs(
        InputStore(), save=save,
        filing_status=filing_status,
        prior_year_tax=prior_year_tax,
        prior_year_agi=prior_year_agi,
        current_year_profit=current_year_profit,
    )

    try:
        payment_schedule = load_payment_schedule(rules.year)
    except (FileNotFoundError, KeyError) as e:
        raise click.ClickException(str(e))

    result = calculate_taxes(inputs, rules)

    if vouchers:
        click.echo(render_vouchers(result, payment_schedule))
        return

    plan = build_payment_plan(result, payment_schedule)
    render_payment_plan(Console(), plan, result.required_annual_payment)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
