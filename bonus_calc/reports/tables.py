"""
Tabular projections of calculation results for the CLI and the Streamlit app.

These only read documented result fields; nothing here feeds back into
the engine or the comparator.
"""
from typing import Dict, Optional

import numpy as np
import pandas as pd

from bonus_calc.constants import (
    COMPLEX_LETTER_RATE, CURRENCY_FORMAT, PERCENTAGE_FORMAT,
    BAR_LABEL_WIDTH, PIE_LABEL_WIDTH, DEFAULT_LABELS
)
from bonus_calc.models.bonus import CalculationResult
from bonus_calc.access.tiers import ScenarioComparison

BREAKDOWN_COLUMNS = ['event_id', 'event', 'purchase_amount', 'profitability', 'bonus']


def round_half_up(values):
    """Round to whole roubles, halves away from zero like the web UI."""
    values = np.asarray(values, dtype=float)
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def format_currency(value: float) -> str:
    """Format an amount as rounded roubles with space-grouped thousands."""
    return CURRENCY_FORMAT.format(float(round_half_up(value)) + 0.0).replace(",", " ")


def format_percent(value: float, digits: int = 2) -> str:
    if digits == 2:
        return PERCENTAGE_FORMAT.format(value)
    return f"{value:.{digits}f}%"


def event_breakdown_frame(result: CalculationResult,
                          labels: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """
    Detailed per-event table with the surcharge and total rows appended.

    Args:
        result: Engine output
        labels: Row labels keyed complex_letter and total (see load_labels)

    Returns:
        pd.DataFrame: Columns event_id, event, purchase_amount, profitability, bonus
    """
    labels = {**DEFAULT_LABELS, **(labels or {})}
    rows = [
        {
            'event_id': e.id,
            'event': e.name,
            'purchase_amount': e.purchase_amount,
            'profitability': e.profitability,
            'bonus': e.bonus,
        }
        for e in result.event_calculations
    ]
    rows.append({
        'event_id': 'complex_letter',
        'event': labels['complex_letter'],
        'purchase_amount': np.nan,
        'profitability': COMPLEX_LETTER_RATE * 100,
        'bonus': result.complex_letter_bonus,
    })
    rows.append({
        'event_id': 'total',
        'event': labels['total'],
        'purchase_amount': np.nan,
        'profitability': np.nan,
        'bonus': result.total_bonus,
    })
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def bonus_chart_frame(result: CalculationResult,
                      name_width: int = BAR_LABEL_WIDTH) -> pd.DataFrame:
    """
    Bar chart data: positive-bonus events, largest bonus first.

    Returns:
        pd.DataFrame: Columns name, bonus (rounded), profitability
    """
    frame = pd.DataFrame(
        [
            {'name': e.name[:name_width], 'bonus': e.bonus, 'profitability': e.profitability}
            for e in result.event_calculations
            if e.bonus > 0
        ],
        columns=['name', 'bonus', 'profitability'],
    )
    frame['bonus'] = round_half_up(frame['bonus'])
    frame = frame.sort_values('bonus', ascending=False, kind='stable')
    return frame.reset_index(drop=True)


def bonus_share_frame(result: CalculationResult,
                      name_width: int = PIE_LABEL_WIDTH) -> pd.DataFrame:
    """Pie chart data: positive-bonus events in catalog order."""
    frame = pd.DataFrame(
        [
            {'name': e.name[:name_width], 'value': e.bonus}
            for e in result.event_calculations
            if e.bonus > 0
        ],
        columns=['name', 'value'],
    )
    frame['value'] = round_half_up(frame['value'])
    return frame


def comparison_frame(comparison: ScenarioComparison) -> pd.DataFrame:
    """
    Baseline vs deep integration table.

    Returns:
        pd.DataFrame indexed by metric with baseline, deep_integration, difference
    """
    baseline = comparison.baseline
    alternate = comparison.alternate
    frame = pd.DataFrame(
        {
            'baseline': [baseline.total_bonus, baseline.monthly_bonus, baseline.bonus_percentage],
            'deep_integration': [alternate.total_bonus, alternate.monthly_bonus, alternate.bonus_percentage],
        },
        index=pd.Index(['total_bonus', 'monthly_bonus', 'bonus_percentage'], name='metric'),
    )
    frame['difference'] = frame['deep_integration'] - frame['baseline']
    return frame
