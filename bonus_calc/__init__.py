"""
Pharmacy marketing bonus calculator.

Computes expected bonuses from a catalog of marketing events and compares
the baseline payout against the deep integration tiers.
"""
from bonus_calc.models.events import MarketingEvent
from bonus_calc.models.bonus import (
    CalculationInput, CalculationResult, EventCalculation,
    calculate, compute_bonus, validate_input
)
from bonus_calc.access.tiers import (
    ScenarioData, ScenarioDelta, ScenarioComparison, TIERS,
    compare_scenarios, multiplier_from_tier
)

__version__ = "0.1.0"
