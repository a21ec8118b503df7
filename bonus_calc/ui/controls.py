"""
UI controls and parameter widgets for the Streamlit app.

Handles the sidebar inputs, the event catalog editor and the tier selector.
The edited catalog lives in session state; the engine only ever sees a copy.
"""
import streamlit as st
from typing import Dict, Any, Tuple

from bonus_calc.access.tiers import TIERS
from bonus_calc.models.events import (
    MarketingEvent, set_event_enabled, update_event_share, update_event_profitability
)

EVENTS_STATE_KEY = "events"


def render_sidebar_controls(defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Render the base parameter inputs.

    Args:
        defaults: Default soz/months/pharmacies from configuration

    Returns:
        Dict with soz, months and pharmacies
    """
    st.sidebar.header("Основные параметры")

    soz = st.sidebar.number_input(
        "СОЗ в квартал (руб.)",
        value=float(defaults['soz']),
        min_value=0.0,
        step=100_000.0,
        help="Quarterly purchase volume"
    )
    months = st.sidebar.number_input(
        "Количество месяцев",
        value=int(defaults['months']),
        min_value=1,
        step=1
    )
    pharmacies = st.sidebar.number_input(
        "Количество аптек",
        value=int(defaults['pharmacies']),
        min_value=1,
        step=1
    )

    return {
        'soz': soz,
        'months': int(months),
        'pharmacies': int(pharmacies),
    }


def render_event_editor(default_events: Tuple[MarketingEvent, ...]) -> Tuple[MarketingEvent, ...]:
    """Toggle and tune each marketing event; returns the edited catalog."""
    if EVENTS_STATE_KEY not in st.session_state:
        st.session_state[EVENTS_STATE_KEY] = tuple(default_events)

    events = st.session_state[EVENTS_STATE_KEY]
    st.subheader("Маркетинговые мероприятия")

    for event in tuple(events):
        col_toggle, col_share, col_profit = st.columns([3, 1, 1])
        with col_toggle:
            enabled = st.toggle(event.name, value=event.enabled, key=f"enabled_{event.id}")
        with col_share:
            share = st.number_input(
                "Доля (%)", value=float(event.share_of_purchase), min_value=0.0, max_value=100.0, step=0.1,
                disabled=not enabled, key=f"share_{event.id}"
            )
        with col_profit:
            profitability = st.number_input(
                "Доходность (%)", value=float(event.profitability), step=0.1,
                disabled=not enabled, key=f"profit_{event.id}"
            )

        events = set_event_enabled(events, event.id, enabled)
        events = update_event_share(events, event.id, share)
        events = update_event_profitability(events, event.id, profitability)

    st.session_state[EVENTS_STATE_KEY] = events
    return events


def render_tier_selector(default_tier: str) -> str:
    """Select the deep integration tier."""
    keys = list(TIERS.keys())
    index = keys.index(default_tier) if default_tier in keys else 0
    return st.selectbox(
        "Уровень вознаграждения (% от СОЗ)",
        options=keys,
        index=index,
        format_func=lambda key: f"{key}% - {TIERS[key].name}",
    )
