"""
Streamlit app for the ProApteka bonus calculator.

Every widget change reruns the script: the engine recomputes the baseline,
the comparator derives the deep integration scenario from it.
"""
import streamlit as st
from typing import Dict, Any

from bonus_calc.models.bonus import calculate
from bonus_calc.access.tiers import compare_scenarios
from bonus_calc.data.etl import (
    load_config, load_event_catalog, load_default_inputs, load_deep_integration, load_labels
)
from bonus_calc.reports.tables import (
    event_breakdown_frame, bonus_chart_frame, bonus_share_frame, comparison_frame
)
from bonus_calc.ui.controls import (
    render_sidebar_controls, render_event_editor, render_tier_selector
)
from bonus_calc.ui.charts import (
    create_bonus_bar_chart, create_bonus_pie_chart, create_comparison_chart,
    display_key_metrics, display_comparison_metrics
)

st.set_page_config(
    page_title="Калькулятор бонусов ПроАптека",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_data
def load_default_config() -> Dict[str, Any]:
    """Load default configuration."""
    return load_config()


def main() -> None:
    """Main application entry point."""
    st.title("Калькулятор бонусов ПроАптека")
    st.markdown("Расчет ожидаемых бонусов при сотрудничестве с ООО \"ПроАптека\"")

    config = load_default_config()
    try:
        default_events = load_event_catalog(config)
        default_inputs = load_default_inputs(config)
        deep_integration = load_deep_integration(config)
        labels = load_labels(config)
    except ValueError as e:
        st.error(f"Invalid configuration: {e}")
        st.stop()

    params = render_sidebar_controls(default_inputs)

    col1, col2 = st.columns([1, 2])

    with col2:
        events = render_event_editor(default_events)

    try:
        result = calculate(params['soz'], params['months'], params['pharmacies'], events)
    except ValueError as e:
        st.error(f"Некорректные параметры: {e}")
        st.stop()

    with col1:
        st.header("Итоговые показатели")
        display_key_metrics(result)

    chart_col1, chart_col2 = st.columns(2)
    with chart_col1:
        st.pyplot(create_bonus_bar_chart(bonus_chart_frame(result)))
    with chart_col2:
        st.pyplot(create_bonus_pie_chart(bonus_share_frame(result)))

    st.header("Детальный расчет по мероприятиям")
    st.dataframe(event_breakdown_frame(result, labels), hide_index=True, use_container_width=True)

    st.header("Глубокая интеграция")
    tier_key = render_tier_selector(deep_integration['default_tier'])
    comparison = compare_scenarios(
        result.to_scenario(), tier_key, deep_integration['period_months']
    )
    table = comparison_frame(comparison)

    display_comparison_metrics(comparison)
    st.pyplot(create_comparison_chart(table))
    st.dataframe(table, use_container_width=True)

    if deep_integration['requirements']:
        st.markdown(f"**Уровень {comparison.tier.key}% - Обязательные условия:**")
        st.markdown("\n".join(f"- {item}" for item in deep_integration['requirements']))

    st.markdown("---")
    st.caption(
        "* Данный расчет ориентировочный, при участии во всех заявленных мероприятиях. "
        "Размеры бонусов и доли мероприятий в обороте аптеки не являются гарантированными."
    )


if __name__ == "__main__":
    main()
