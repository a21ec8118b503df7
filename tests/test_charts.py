"""
Smoke tests for chart generation.
"""
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest

from bonus_calc.access.tiers import compare_scenarios
from bonus_calc.data.etl import default_event_catalog
from bonus_calc.models.bonus import calculate
from bonus_calc.models.events import set_event_enabled
from bonus_calc.reports.tables import bonus_chart_frame, bonus_share_frame, comparison_frame
from bonus_calc.ui.charts import (
    create_bonus_bar_chart, create_bonus_pie_chart, create_comparison_chart
)


@pytest.fixture
def result():
    return calculate(2_500_000, 3, 1, default_event_catalog())


class TestCharts:
    """Test figures are built from the projections."""

    def teardown_method(self):
        plt.close('all')

    def test_bar_chart(self, result):
        fig = create_bonus_bar_chart(bonus_chart_frame(result))
        assert len(fig.axes[0].patches) == 10

    def test_pie_chart(self, result):
        fig = create_bonus_pie_chart(bonus_share_frame(result))
        assert len(fig.axes[0].patches) == 10

    def test_pie_chart_empty(self):
        """Test the pie chart copes with no positive bonuses."""
        events = default_event_catalog()
        for event in events:
            events = set_event_enabled(events, event.id, False)
        empty = calculate(2_500_000, 3, 1, events)

        fig = create_bonus_pie_chart(bonus_share_frame(empty))
        assert fig is not None

    def test_comparison_chart(self, result):
        table = comparison_frame(compare_scenarios(result.to_scenario(), "4"))
        fig = create_comparison_chart(table)
        assert len(fig.axes[0].patches) == 4
