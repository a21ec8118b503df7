"""
Deep integration tiers and scenario comparison.

Core concept: alternate_bonus = baseline_bonus × multiplier / 5.4
All deep integration payout logic flows through this single module.

Tiers (percentage of purchase volume paid under deep integration):
- 1.5: SUPER LITE - entry level, also the fallback for unknown keys
- 3:   LITE
- 4:   ADVANTAGE
- 5:   INCOME

Example usage:
    >>> baseline = ScenarioData(1_000_000, 333_333.33, 5.94, 85.86)
    >>> comparison = compare_scenarios(baseline, "5")
    >>> round(comparison.alternate.total_bonus, 2)
    925925.93
"""
import logging
from dataclasses import dataclass
from typing import Dict

from bonus_calc.constants import (
    DEEP_INTEGRATION_NORMALIZER, DEFAULT_TIER_KEY, DEFAULT_COMPARISON_MONTHS
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrationTier:
    """Deep integration payout tier"""
    key: str
    multiplier: float       # Nominal bonus percentage of purchase volume
    name: str
    description: str = ""


TIERS: Dict[str, IntegrationTier] = {
    "1.5": IntegrationTier(
        key="1.5",
        multiplier=1.5,
        name="SUPER LITE",
        description="Base level"
    ),
    "3": IntegrationTier(
        key="3",
        multiplier=3.0,
        name="LITE",
        description="Light integration"
    ),
    "4": IntegrationTier(
        key="4",
        multiplier=4.0,
        name="ADVANTAGE",
        description="Advantageous integration"
    ),
    "5": IntegrationTier(
        key="5",
        multiplier=5.0,
        name="INCOME",
        description="Maximum payout level"
    ),
}


@dataclass(frozen=True)
class ScenarioData:
    """Summary of one payout scenario"""
    total_bonus: float
    monthly_bonus: float
    bonus_percentage: float
    marketing_percentage: float


@dataclass(frozen=True)
class ScenarioDelta:
    bonus_difference: float
    bonus_difference_percent: float
    monthly_difference: float
    percentage_point_difference: float


@dataclass(frozen=True)
class ScenarioComparison:
    baseline: ScenarioData
    alternate: ScenarioData
    difference: ScenarioDelta
    tier: IntegrationTier


def get_tier(tier_key: str) -> IntegrationTier:
    """
    Look up a tier by key, falling back to the base tier.

    Args:
        tier_key: Tier selector ('1.5', '3', '4', '5')

    Returns:
        IntegrationTier: Matching tier, or the '1.5' tier for unknown keys
    """
    tier = TIERS.get(str(tier_key))
    if tier is None:
        logger.debug(f"Unknown tier {tier_key!r}, using {DEFAULT_TIER_KEY}")
        return TIERS[DEFAULT_TIER_KEY]
    return tier


def multiplier_from_tier(tier_key: str) -> float:
    """Return the tier multiplier; unknown keys get the base tier's."""
    return get_tier(tier_key).multiplier


def compare_scenarios(baseline: ScenarioData, tier_key: str,
                      period_months: int = DEFAULT_COMPARISON_MONTHS) -> ScenarioComparison:
    """
    Project a baseline scenario into the deep integration scenario.

    Args:
        baseline: Baseline scenario (usually CalculationResult.to_scenario())
        tier_key: Deep integration tier selector
        period_months: Divisor for the alternate monthly bonus. Defaults to
            a quarter regardless of the months used for the baseline.

    Returns:
        ScenarioComparison: Baseline, alternate scenario and differences

    Raises:
        ValueError: If period_months is not positive
    """
    if period_months <= 0:
        raise ValueError("period_months must be positive")

    tier = get_tier(tier_key)
    multiplier = tier.multiplier

    alternate_total = baseline.total_bonus * (multiplier / DEEP_INTEGRATION_NORMALIZER)
    alternate = ScenarioData(
        total_bonus=alternate_total,
        monthly_bonus=alternate_total / period_months,
        bonus_percentage=multiplier,
        marketing_percentage=baseline.marketing_percentage,
    )

    bonus_difference = alternate.total_bonus - baseline.total_bonus
    if baseline.total_bonus != 0:
        bonus_difference_percent = (bonus_difference / baseline.total_bonus) * 100
    else:
        bonus_difference_percent = 0.0

    difference = ScenarioDelta(
        bonus_difference=bonus_difference,
        bonus_difference_percent=bonus_difference_percent,
        monthly_difference=alternate.monthly_bonus - baseline.monthly_bonus,
        percentage_point_difference=alternate.bonus_percentage - baseline.bonus_percentage,
    )

    return ScenarioComparison(
        baseline=baseline,
        alternate=alternate,
        difference=difference,
        tier=tier,
    )
