"""
Test suite for the bonus calculation engine.
Tests totals, surcharge ordering, disabled events and division guards.
"""
import pytest
import numpy as np
from dataclasses import replace

from bonus_calc.models.bonus import (
    CalculationInput, CalculationResult, compute_bonus, validate_input, calculate
)
from bonus_calc.models.events import MarketingEvent, set_event_enabled, toggle_event
from bonus_calc.data.etl import default_event_catalog


@pytest.fixture
def catalog():
    return default_event_catalog()


def make_input(events, soz=2_500_000, months=3, pharmacies=1):
    return CalculationInput(soz=soz, months=months, pharmacies=pharmacies, events=tuple(events))


class TestDefaultScenario:
    """Ten default events, 2.5M quarterly volume, one pharmacy."""

    def test_totals(self, catalog):
        """Test totals against the hand-computed weighted sum."""
        result = compute_bonus(make_input(catalog))

        # sum(share_i * profitability_i) / 10000 over the ten defaults
        weighted_rate = 540.158 / 10_000

        assert result.total_soz == 7_500_000
        assert result.total_marketing_share == pytest.approx(85.86)
        assert result.total_bonus == pytest.approx(7_500_000 * weighted_rate * 1.10)
        assert result.total_bonus == pytest.approx(445_630.35)
        assert result.bonus_per_month == pytest.approx(148_543.45)
        assert result.bonus_percentage == pytest.approx(5.941738)

    def test_event_rows(self, catalog):
        """Test per-event purchase amounts and bonuses."""
        result = compute_bonus(make_input(catalog))

        assert len(result.event_calculations) == 10
        assert [row.id for row in result.event_calculations] == [e.id for e in catalog]

        vmt = result.event_calculations[1]
        assert vmt.id == 'vmt'
        assert vmt.purchase_amount == pytest.approx(450_000)
        assert vmt.bonus == pytest.approx(99_000)
        assert vmt.profitability == 22

    def test_to_scenario(self, catalog):
        """Test projection into the comparison baseline."""
        result = compute_bonus(make_input(catalog))
        scenario = result.to_scenario()

        assert scenario.total_bonus == result.total_bonus
        assert scenario.monthly_bonus == result.bonus_per_month
        assert scenario.bonus_percentage == result.bonus_percentage
        assert scenario.marketing_percentage == result.total_marketing_share


class TestSurcharge:
    """Test complex letter surcharge."""

    def test_surcharge_is_ten_percent_of_event_sum(self, catalog):
        """Test surcharge computed on per-event bonuses only."""
        result = compute_bonus(make_input(catalog, soz=1_234_567, months=5, pharmacies=3))
        event_sum = sum(row.bonus for row in result.event_calculations)

        assert result.complex_letter_bonus == pytest.approx(0.10 * event_sum)
        assert result.total_bonus == pytest.approx(1.10 * event_sum)
        assert result.base_bonus == pytest.approx(event_sum)

    def test_single_event(self):
        """Test one event end to end."""
        events = [MarketingEvent('cv', 'CV', True, 20, 1)]
        result = compute_bonus(make_input(events))

        assert result.event_calculations[0].purchase_amount == pytest.approx(1_500_000)
        assert result.event_calculations[0].bonus == pytest.approx(15_000)
        assert result.complex_letter_bonus == pytest.approx(1_500)
        assert result.total_bonus == pytest.approx(16_500)


class TestDisabledEvents:
    """Test that disabled events leave no trace."""

    def test_disable_one_event(self, catalog):
        """Test disabling equals removing the event."""
        disabled = set_event_enabled(catalog, 'vmt', False)
        without = tuple(e for e in catalog if e.id != 'vmt')

        result_disabled = compute_bonus(make_input(disabled))
        result_without = compute_bonus(make_input(without))

        assert 'vmt' not in [row.id for row in result_disabled.event_calculations]
        assert result_disabled == result_without

    def test_all_disabled(self, catalog):
        """Test every event disabled gives an empty result."""
        events = catalog
        for event in catalog:
            events = toggle_event(events, event.id)

        result = compute_bonus(make_input(events))

        assert result.total_bonus == 0
        assert result.complex_letter_bonus == 0
        assert result.total_marketing_share == 0
        assert result.event_calculations == ()
        assert result.bonus_percentage == 0
        assert result.total_soz == 7_500_000

    def test_disabled_event_values_ignored(self):
        """Test that share/profitability of a disabled event are never read into sums."""
        events = [
            MarketingEvent('a', 'A', True, 10, 10),
            MarketingEvent('b', 'B', False, 90, 500),
        ]
        result = compute_bonus(make_input(events, soz=1000, months=1, pharmacies=1))

        assert result.total_marketing_share == 10
        assert result.total_bonus == pytest.approx(11.0)


class TestEdgeCases:
    """Test zero and negative inputs."""

    def test_zero_soz(self, catalog):
        """Test bonus percentage guard when total volume is zero."""
        result = compute_bonus(make_input(catalog, soz=0))

        assert result.total_soz == 0
        assert result.total_bonus == 0
        assert result.bonus_percentage == 0
        assert not np.isnan(result.bonus_percentage)
        assert len(result.event_calculations) == 10

    def test_zero_months_guard(self, catalog):
        """Test bonus per month guard for zero pharmacy-months."""
        result = compute_bonus(make_input(catalog, months=0))

        assert result.bonus_per_month == 0.0
        assert result.bonus_percentage == 0

    def test_negative_soz_propagates(self):
        """Test negative volume flows through arithmetic unchanged."""
        events = [MarketingEvent('a', 'A', True, 50, 10)]
        result = compute_bonus(make_input(events, soz=-1000, months=1, pharmacies=1))

        assert result.total_soz == -1000
        assert result.total_bonus == pytest.approx(-55.0)
        assert result.bonus_percentage == 0  # Guard applies to non-positive volume

    def test_marketing_share_not_clamped(self):
        """Test share totals above 100 are reported as is."""
        events = [
            MarketingEvent('a', 'A', True, 80, 1),
            MarketingEvent('b', 'B', True, 70, 1),
        ]
        result = compute_bonus(make_input(events))
        assert result.total_marketing_share == 150

    def test_profitability_above_hundred(self):
        """Test profitability above 100% is allowed."""
        events = [MarketingEvent('a', 'A', True, 10, 150)]
        result = compute_bonus(make_input(events, soz=1000, months=1, pharmacies=1))
        assert result.event_calculations[0].bonus == pytest.approx(150)

    def test_empty_catalog(self):
        """Test empty catalog."""
        result = compute_bonus(make_input([]))
        assert result.total_bonus == 0
        assert result.event_calculations == ()


class TestPurity:
    """Test determinism and input immutability."""

    def test_idempotent(self, catalog):
        """Test identical input gives identical output."""
        calc_input = make_input(catalog, soz=1_999_999.99, months=7, pharmacies=4)
        first = compute_bonus(calc_input)
        second = compute_bonus(calc_input)

        assert first == second
        assert first.total_bonus == second.total_bonus

    def test_input_not_mutated(self, catalog):
        """Test the catalog is unchanged after computing."""
        before = tuple(replace(e) for e in catalog)
        compute_bonus(make_input(catalog))
        assert catalog == before

    def test_result_is_frozen(self, catalog):
        """Test results are immutable value objects."""
        result = compute_bonus(make_input(catalog))
        assert isinstance(result, CalculationResult)
        with pytest.raises(AttributeError):
            result.total_bonus = 0

    def test_total_soz_exact(self):
        """Test total volume is the exact product for several inputs."""
        for soz, months, pharmacies in [(0, 1, 1), (1_000_000, 12, 7), (333.33, 3, 2)]:
            result = compute_bonus(make_input([], soz=soz, months=months, pharmacies=pharmacies))
            assert result.total_soz == soz * months * pharmacies


class TestValidateInput:
    """Test validation pre-pass."""

    def test_valid_input(self, catalog):
        """Test default inputs pass."""
        validate_input(make_input(catalog))

    def test_parameter_validation(self, catalog):
        """Test invalid parameters are rejected."""
        with pytest.raises(ValueError):
            validate_input(make_input(catalog, soz=-1))

        with pytest.raises(ValueError):
            validate_input(make_input(catalog, soz=float('inf')))

        with pytest.raises(ValueError):
            validate_input(make_input(catalog, soz=float('nan')))

        with pytest.raises(ValueError):
            validate_input(make_input(catalog, months=0))

        with pytest.raises(ValueError):
            validate_input(make_input(catalog, pharmacies=-2))

        with pytest.raises(ValueError):
            validate_input(make_input(catalog, months=2.5))

    def test_zero_soz_allowed(self, catalog):
        """Test zero purchase volume is valid."""
        validate_input(make_input(catalog, soz=0))

    def test_event_validation(self):
        """Test negative or non-finite event values are rejected."""
        with pytest.raises(ValueError):
            validate_input(make_input([MarketingEvent('a', 'A', True, -1, 10)]))

        with pytest.raises(ValueError):
            validate_input(make_input([MarketingEvent('a', 'A', True, 10, float('nan'))]))

    def test_share_above_hundred(self):
        """Test a single event cannot take more than the whole purchase volume."""
        with pytest.raises(ValueError, match="cannot exceed 100"):
            validate_input(make_input([MarketingEvent('a', 'A', True, 150, 1)]))

        # Boundary value is accepted
        validate_input(make_input([MarketingEvent('a', 'A', True, 100, 1)]))

    def test_duplicate_ids(self):
        """Test duplicate event ids are rejected."""
        events = [MarketingEvent('a', 'A', True, 1, 1), MarketingEvent('a', 'B', True, 2, 2)]
        with pytest.raises(ValueError, match="Duplicate"):
            validate_input(make_input(events))

    def test_calculate_validates(self, catalog):
        """Test calculate() runs validation before computing."""
        with pytest.raises(ValueError):
            calculate(2_500_000, 0, 1, catalog)

        result = calculate(2_500_000, 3, 1, catalog)
        assert result == compute_bonus(make_input(catalog))
