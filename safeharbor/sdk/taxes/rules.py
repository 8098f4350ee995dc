"""Tax rules loading from tax_rules/YYYY.yaml."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Union

import yaml

from .schemas import PaymentSchedule, TaxYearRules

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = 2025


def _get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> safeharbor


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def _read_rules_file(year: int) -> dict:
    config_file = _get_tax_rules_dir() / f"{year}.yaml"
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found for year {year}: {config_file}")

    logger.debug(f"loading tax rules from {config_file}")
    with open(config_file, "r") as f:
        return yaml.safe_load(f)


@lru_cache(maxsize=None)
def _load_tax_rules(year: int) -> TaxYearRules:
    return TaxYearRules.model_validate(_read_rules_file(year))


@lru_cache(maxsize=None)
def _load_payment_schedule(year: int) -> PaymentSchedule:
    raw = _read_rules_file(year)
    if "estimated_payments" not in raw:
        raise KeyError(f"Tax rule 'estimated_payments' not defined for year {year}")
    return PaymentSchedule.model_validate({"year": year, "quarters": raw["estimated_payments"]})


def load_tax_rules(year: Union[int, str] = DEFAULT_TAX_YEAR) -> TaxYearRules:
    """Load tax rules for a specific year.

    The result is frozen and cached, so every caller for the same year
    shares one instance.

    Raises:
        FileNotFoundError: If no rules file exists for the year
        pydantic.ValidationError: If the rules file is malformed
    """
    return _load_tax_rules(int(year))


def load_payment_schedule(year: Union[int, str] = DEFAULT_TAX_YEAR) -> PaymentSchedule:
    """Load the quarterly estimated payment due dates for a tax year.

    Kept separate from TaxYearRules: the calculators never see due dates.
    """
    return _load_payment_schedule(int(year))
