"""
Chart generation for the Streamlit app.

All matplotlib/plotting code isolated here.
Charts take the pandas projections from reports.tables, never raw results.
"""
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import streamlit as st

from bonus_calc.models.bonus import CalculationResult
from bonus_calc.access.tiers import ScenarioComparison
from bonus_calc.reports.tables import format_currency, format_percent

PALETTE = ['#f97316', '#7c3aed', '#06b6d4', '#8b5cf6', '#ec4899', '#14b8a6', '#f59e0b', '#ef4444']


def create_bonus_bar_chart(chart_data: pd.DataFrame):
    """
    Bonus per event, largest first.

    Args:
        chart_data: Output of bonus_chart_frame()

    Returns:
        matplotlib figure
    """
    fig, ax = plt.subplots(figsize=(6, 4))
    positions = np.arange(len(chart_data))
    ax.bar(positions, chart_data['bonus'], color=PALETTE[0])
    ax.set_xticks(positions)
    ax.set_xticklabels(chart_data['name'], rotation=45, ha='right', fontsize=8)
    ax.set_title('Бонусы по мероприятиям')
    ax.grid(True, axis='y', alpha=0.3)
    plt.tight_layout()
    return fig


def create_bonus_pie_chart(share_data: pd.DataFrame):
    """Distribution of bonus across events."""
    fig, ax = plt.subplots(figsize=(6, 4))
    if share_data.empty:
        ax.text(0.5, 0.5, 'Нет данных', ha='center', va='center')
        ax.axis('off')
        return fig

    colors = [PALETTE[i % len(PALETTE)] for i in range(len(share_data))]
    ax.pie(share_data['value'], labels=share_data['name'], colors=colors,
           textprops={'fontsize': 7})
    ax.set_title('Распределение бонусов')
    plt.tight_layout()
    return fig


def create_comparison_chart(table: pd.DataFrame):
    """
    Baseline vs deep integration bars for total and monthly bonus.

    Args:
        table: Output of comparison_frame()
    """
    metrics = ['total_bonus', 'monthly_bonus']
    positions = np.arange(len(metrics))
    width = 0.35

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(positions - width / 2, table.loc[metrics, 'baseline'], width,
           color=PALETTE[1], label='Базовый режим')
    ax.bar(positions + width / 2, table.loc[metrics, 'deep_integration'], width,
           color=PALETTE[0], label='Глубокая интеграция')
    ax.set_xticks(positions)
    ax.set_xticklabels(['Общий бонус', 'Бонус в месяц'])
    ax.legend()
    ax.grid(True, axis='y', alpha=0.3)
    plt.tight_layout()
    return fig


def display_key_metrics(result: CalculationResult):
    """Display headline totals."""
    st.metric("Общий бонус (квартал)", format_currency(result.total_bonus))
    st.metric("Бонус в месяц", format_currency(result.bonus_per_month))
    st.metric("Доля бонуса в СОЗ", format_percent(result.bonus_percentage))
    st.metric("Доля маркетинга в СОЗ", format_percent(result.total_marketing_share))


def display_comparison_metrics(comparison: ScenarioComparison):
    """Display deep integration differences in columns."""
    delta = comparison.difference
    cols = st.columns(3)
    with cols[0]:
        st.metric("Разница в общем бонусе", format_currency(delta.bonus_difference),
                  f"{delta.bonus_difference_percent:.1f}% от базового")
    with cols[1]:
        st.metric("Бонус в месяц", format_currency(comparison.alternate.monthly_bonus),
                  format_currency(delta.monthly_difference))
    with cols[2]:
        st.metric("Доля бонуса в СОЗ", format_percent(comparison.alternate.bonus_percentage, 1),
                  format_percent(delta.percentage_point_difference, 1))
