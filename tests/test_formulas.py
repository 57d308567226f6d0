"""Tests for the pure formula library."""
import math

import pytest

from tycoonengine import formulas


def test_investment_cost_growth():
    assert formulas.investment_cost(5, 0, 1.15) == pytest.approx(5.0)
    assert formulas.investment_cost(5, 1, 1.15) == pytest.approx(5.75)
    assert formulas.investment_cost(5, 10, 1.15) == pytest.approx(5 * 1.15 ** 10)


def test_bulk_cost_sums_levels():
    expected = 2 * (1 + 1.15 + 1.15 ** 2)
    assert formulas.bulk_cost(2, 0, 1.15, 3) == pytest.approx(expected)


def test_bulk_cost_single_matches_unit_cost():
    assert formulas.bulk_cost(7, 4, 1.2, 1) == pytest.approx(
        formulas.investment_cost(7, 4, 1.2)
    )


def test_bulk_cost_multiplier_applied_once_to_total():
    total = formulas.bulk_cost(10, 3, 1.15, 5)
    assert formulas.bulk_cost(10, 3, 1.15, 5, price_multiplier=0.5) == pytest.approx(
        total * 0.5
    )


def test_bulk_cost_zero_count():
    assert formulas.bulk_cost(10, 0, 1.15, 0) == 0.0


def test_manager_cost():
    assert formulas.manager_cost(2, 0) == pytest.approx(1000.0)
    assert formulas.manager_cost(2, 1) == pytest.approx(2500.0)
    assert formulas.manager_cost(2, 2) == pytest.approx(6250.0)


def test_specialist_cost():
    assert formulas.specialist_cost(10_000, 0) == pytest.approx(10_000)
    assert formulas.specialist_cost(10_000, 1) == pytest.approx(10_000_000)
    assert formulas.specialist_cost(1e8, 2) == pytest.approx(1e14)


def test_efficiency_speedup():
    assert formulas.efficiency_speedup(0) == 1.0
    assert formulas.efficiency_speedup(1) == pytest.approx(1.01)
    assert formulas.efficiency_speedup(10) == pytest.approx(1.01 ** 10)


def test_production_duration_floor():
    assert formulas.production_duration(2000, 1.0) == pytest.approx(2000)
    assert formulas.production_duration(2000, 4.0) == pytest.approx(500)
    assert formulas.production_duration(2000, 1000.0) == pytest.approx(100)


def test_negotiator_reduction_breakpoints():
    assert formulas.negotiator_reduction(0) == pytest.approx(0.99)
    assert formulas.negotiator_reduction(1) == pytest.approx(0.99)
    assert formulas.negotiator_reduction(50) == pytest.approx(0.15)
    assert formulas.negotiator_reduction(100) == pytest.approx(0.10)
    assert formulas.negotiator_reduction(5000) == pytest.approx(0.10)


def test_negotiator_reduction_interpolates():
    # Halfway between 1 and 50 on the first segment
    mid = formulas.negotiator_reduction(25)
    assert mid == pytest.approx(0.99 + 24 * (0.15 - 0.99) / 49)
    assert formulas.negotiator_reduction(75) == pytest.approx(0.125)


def test_negotiator_reduction_monotonic():
    values = [formulas.negotiator_reduction(n) for n in range(0, 151)]
    for earlier, later in zip(values, values[1:]):
        assert later <= earlier
    assert all(0.10 <= v <= 0.99 for v in values)


def test_consultant_bonus_per_second():
    # Revenue 100 per 10 s cycle is 10/s; level 1 consultant gives 10x that
    assert formulas.consultant_bonus_per_second(1, 100, 10_000) == pytest.approx(100)
    assert formulas.consultant_bonus_per_second(3, 100, 10_000) == pytest.approx(300)


def test_experience_points():
    assert formulas.experience_points(0) == 0
    assert formulas.experience_points(6_724_999_999) == 0
    assert formulas.experience_points(6_725_000_000) == 1
    assert formulas.experience_points(6_725_000_000 * 25.5) == 25


def test_prestige_multiplier():
    assert formulas.prestige_multiplier(0) == 1.0
    assert formulas.prestige_multiplier(1) == 1.0
    assert formulas.prestige_multiplier(5) == pytest.approx(2.0)
    assert formulas.prestige_multiplier(25) == pytest.approx(4.0)
    assert formulas.prestige_multiplier(125) == pytest.approx(8.0)


def test_prestige_multiplier_increasing():
    previous = formulas.prestige_multiplier(2)
    for xp in (3, 10, 100, 10_000):
        current = formulas.prestige_multiplier(xp)
        assert current > previous
        assert not math.isnan(current)
        previous = current
