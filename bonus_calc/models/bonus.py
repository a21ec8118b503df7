"""
Bonus calculation engine for the pharmacy marketing program.

Turns base parameters and the marketing event catalog into derived
financial metrics:
- Total purchase volume over the period and all pharmacies
- Per-event attributed purchase amount and bonus
- Complex letter surcharge (10% of the per-event bonus sum)
- Bonus share of purchase volume and bonus per pharmacy-month

The engine is a pure function: no I/O, no mutation of its input.

Example usage:
    >>> events = (MarketingEvent('cv', 'CV', True, 20, 1),)
    >>> result = compute_bonus(CalculationInput(2_500_000, 3, 1, events))
    >>> round(result.total_bonus)
    16500
"""
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from bonus_calc.access.tiers import ScenarioData
from bonus_calc.constants import COMPLEX_LETTER_RATE
from bonus_calc.models.events import MarketingEvent, ensure_unique_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationInput:
    """Per-computation business parameters"""
    soz: float                  # Quarterly purchase volume
    months: int
    pharmacies: int
    events: Tuple[MarketingEvent, ...]


@dataclass(frozen=True)
class EventCalculation:
    """Derived row for one enabled event"""
    id: str
    name: str
    purchase_amount: float
    bonus: float
    profitability: float


@dataclass(frozen=True)
class CalculationResult:
    total_soz: float
    total_bonus: float
    bonus_percentage: float
    bonus_per_month: float
    total_marketing_share: float
    event_calculations: Tuple[EventCalculation, ...]
    complex_letter_bonus: float

    @property
    def base_bonus(self) -> float:
        """Per-event bonus sum before the complex letter surcharge."""
        return self.total_bonus - self.complex_letter_bonus

    def to_scenario(self) -> ScenarioData:
        """Project the result into the baseline shape used for tier comparison."""
        return ScenarioData(
            total_bonus=self.total_bonus,
            monthly_bonus=self.bonus_per_month,
            bonus_percentage=self.bonus_percentage,
            marketing_percentage=self.total_marketing_share,
        )


def compute_bonus(calc_input: CalculationInput) -> CalculationResult:
    """
    Compute the bonus breakdown for one set of inputs.

    Args:
        calc_input: Base parameters and event catalog

    Returns:
        CalculationResult: Totals and one row per enabled event, catalog order

    Disabled events contribute nothing and do not appear in the rows.
    Negative inputs propagate through the arithmetic unchanged; use
    validate_input() beforehand to reject them.
    """
    total_soz = calc_input.soz * calc_input.months * calc_input.pharmacies

    total_bonus = 0.0
    total_marketing_share = 0.0
    rows = []

    for event in calc_input.events:
        if not event.enabled:
            continue
        purchase_amount = total_soz * (event.share_of_purchase / 100)
        bonus = purchase_amount * (event.profitability / 100)
        total_bonus += bonus
        total_marketing_share += event.share_of_purchase
        rows.append(EventCalculation(
            id=event.id,
            name=event.name,
            purchase_amount=purchase_amount,
            bonus=bonus,
            profitability=event.profitability,
        ))

    # Surcharge on the per-event sum only
    complex_letter_bonus = total_bonus * COMPLEX_LETTER_RATE
    total_bonus += complex_letter_bonus

    bonus_percentage = (total_bonus / total_soz) * 100 if total_soz > 0 else 0.0

    pharmacy_months = calc_input.months * calc_input.pharmacies
    bonus_per_month = total_bonus / pharmacy_months if pharmacy_months != 0 else 0.0

    logger.debug(f"Computed bonus {total_bonus:.2f} over {len(rows)} events")

    return CalculationResult(
        total_soz=total_soz,
        total_bonus=total_bonus,
        bonus_percentage=bonus_percentage,
        bonus_per_month=bonus_per_month,
        total_marketing_share=total_marketing_share,
        event_calculations=tuple(rows),
        complex_letter_bonus=complex_letter_bonus,
    )


def _is_count(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def validate_input(calc_input: CalculationInput) -> None:
    """
    Validation pre-pass for user-supplied inputs.

    The engine itself never raises; callers run this first so that
    nonsense values are reported instead of propagating.

    Raises:
        ValueError: If any parameter is out of valid range
    """
    if not math.isfinite(calc_input.soz):
        raise ValueError("Purchase volume (soz) must be a finite number")
    if calc_input.soz < 0:
        raise ValueError("Purchase volume (soz) cannot be negative")
    if not _is_count(calc_input.months) or calc_input.months <= 0:
        raise ValueError("Months must be a positive integer")
    if not _is_count(calc_input.pharmacies) or calc_input.pharmacies <= 0:
        raise ValueError("Pharmacies must be a positive integer")

    ensure_unique_ids(calc_input.events)

    for event in calc_input.events:
        for field_name in ('share_of_purchase', 'profitability'):
            value = getattr(event, field_name)
            if not math.isfinite(value):
                raise ValueError(f"{field_name} of event '{event.id}' must be finite")
            if value < 0:
                raise ValueError(f"{field_name} of event '{event.id}' cannot be negative")
        if event.share_of_purchase > 100:
            raise ValueError(f"share_of_purchase of event '{event.id}' cannot exceed 100")


def calculate(soz: float, months: int, pharmacies: int,
              events: Iterable[MarketingEvent]) -> CalculationResult:
    """
    Build, validate and compute in one call.

    Example:
        >>> result = calculate(2_500_000, 3, 1, default_event_catalog())
        >>> round(result.total_marketing_share, 2)
        85.86
    """
    calc_input = CalculationInput(
        soz=soz, months=months, pharmacies=pharmacies, events=tuple(events)
    )
    validate_input(calc_input)
    return compute_bonus(calc_input)
