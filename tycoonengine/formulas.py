from __future__ import annotations

import math

MIN_PRODUCTION_MS = 100.0
MANAGER_COST_FACTOR = 500.0
MANAGER_COST_GROWTH = 2.5
SPECIALIST_COST_GROWTH = 1000.0
EFFICIENCY_STEP = 1.01
XP_DIVISOR = 6_725_000_000
CONSULTANT_BONUS_FACTOR = 10.0

# (trigger count, reduction) breakpoints for the negotiator discount
_REDUCTION_CURVE: list[tuple[int, float]] = [
    (1, 0.99),
    (50, 0.15),
    (100, 0.10),
]


def investment_cost(base: float, level: int, growth: float) -> float:
    """Cost of the single level bought at *level*: base * growth^level."""
    return base * growth ** level


def bulk_cost(
    base: float,
    level: int,
    growth: float,
    count: int,
    price_multiplier: float = 1.0,
) -> float:
    """Total cost of *count* levels starting at *level*.

    The price multiplier is applied once to the summed total.
    """
    total = 0.0
    for i in range(count):
        total += investment_cost(base, level + i, growth)
    return total * price_multiplier


def manager_cost(base: float, manager_level: int) -> float:
    """Cost = base * 500 * 2.5^manager_level."""
    return base * MANAGER_COST_FACTOR * MANAGER_COST_GROWTH ** manager_level


def specialist_cost(base_for_kind: float, specialist_level: int) -> float:
    """Cost = base * 1000^level."""
    return base_for_kind * SPECIALIST_COST_GROWTH ** specialist_level


def efficiency_speedup(stacks: int) -> float:
    """Speed factor from permanent efficiency stacks (compounding)."""
    if stacks <= 0:
        return 1.0
    return EFFICIENCY_STEP ** stacks


def production_duration(base_duration_ms: float, speed_divisor: float) -> float:
    return max(MIN_PRODUCTION_MS, base_duration_ms / speed_divisor)


def negotiator_reduction(trigger_count: int) -> float:
    """Fraction knocked off the price after *trigger_count* negotiations.

    Piecewise linear: 0.99 up to one trigger, 0.15 at fifty, 0.10 from a
    hundred onwards.
    """
    first_count, first_value = _REDUCTION_CURVE[0]
    if trigger_count <= first_count:
        return first_value
    for (lo_count, lo_value), (hi_count, hi_value) in zip(
        _REDUCTION_CURVE, _REDUCTION_CURVE[1:]
    ):
        if trigger_count < hi_count:
            slope = (hi_value - lo_value) / (hi_count - lo_count)
            return lo_value + (trigger_count - lo_count) * slope
    return _REDUCTION_CURVE[-1][1]


def consultant_bonus_per_second(
    consultant_level: int, revenue_per_cycle: float, duration_ms: float
) -> float:
    """Bonus income/sec: 10 * level * (target revenue per second)."""
    revenue_per_second = revenue_per_cycle / (duration_ms / 1000.0)
    return CONSULTANT_BONUS_FACTOR * consultant_level * revenue_per_second


def experience_points(lifetime_money: float) -> int:
    return math.floor(lifetime_money / XP_DIVISOR)


def prestige_multiplier(xp: float) -> float:
    """2 raised to log5(xp); 1 for xp <= 1."""
    if xp <= 1:
        return 1.0
    return 2.0 ** (math.log(xp) / math.log(5))
