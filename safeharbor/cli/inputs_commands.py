"""Stored input CLI commands for Safe Harbor.

Raw input strings are kept in inputs.json so a later run can reuse them,
the way the calculator form repopulates itself on reload.
"""

from typing import Optional

import click
from pydantic import ValidationError

from safeharbor.sdk import InputStore, TaxInputs, parse_currency

# TaxInputs field -> stored key
INPUT_KEYS = {
    "filing_status": "filing-status",
    "prior_year_tax": "prior-year-tax",
    "prior_year_agi": "prior-year-agi",
    "current_year_profit": "current-year-profit",
}

CURRENCY_FIELDS = ("prior_year_tax", "prior_year_agi", "current_year_profit")


def resolve_inputs(
    store: InputStore,
    save: bool = False,
    **raw: Optional[str],
) -> TaxInputs:
    """Build TaxInputs from CLI options, falling back to stored values.

    Args:
        store: Where saved inputs live
        save: Persist the raw strings after they validate
        **raw: One raw string (or None) per TaxInputs field

    Raises:
        click.UsageError: If a value is neither passed nor stored
        click.ClickException: If the values fail validation
    """
    stored = store.load_all()
    values = {
        name: raw.get(name) if raw.get(name) is not None else stored.get(key)
        for name, key in INPUT_KEYS.items()
    }

    missing = [f"--{key}" for name, key in INPUT_KEYS.items() if values[name] is None]
    if missing:
        raise click.UsageError(
            f"Missing input(s): {', '.join(missing)}\n"
            f"Pass them as options, or save them once with --save."
        )

    parsed = {name: parse_currency(values[name]) for name in CURRENCY_FIELDS}
    try:
        inputs = TaxInputs(filing_status=values["filing_status"], **parsed)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise click.ClickException(f"Invalid inputs: {details}")

    if save:
        for name, key in INPUT_KEYS.items():
            store.save(key, str(values[name]))

    return inputs


@click.group()
def inputs():
    """Manage saved inputs (inputs.json)."""
    pass


@inputs.command("show")
def inputs_show():
    """Show saved input values."""
    store = InputStore()
    stored = store.load_all()

    click.echo(f"Inputs file: {store.path}")
    if not stored:
        click.echo("No inputs saved.")
        return

    for key in INPUT_KEYS.values():
        if key in stored:
            click.echo(f"  {key}: {stored[key]}")


@inputs.command("clear")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def inputs_clear(force):
    """Delete all saved input values."""
    store = InputStore()
    if not force:
        click.confirm("Clear all saved inputs?", abort=True)

    removed = store.clear()
    click.echo(f"Cleared {removed} saved input(s).")
