"""
solver.py

Market equilibrium by bounded bisection.
"""

from __future__ import annotations

import logging

from core.economics import Equilibrium, PriceFunction

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01
DEFAULT_MAX_ITERATIONS = 100


def solve_equilibrium(
    demand: PriceFunction,
    supply: PriceFunction,
    low: float,
    high: float,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Equilibrium:
    """
    Find the quantity where `demand` and `supply` cross inside [low, high].
    Callers pass the configured quantity domain, usually through
    `EquilibriumSolver`.

    Precondition: `demand` is non-increasing and `supply` non-decreasing on
    the interval. This is not checked; other shapes give meaningless answers.

    Stops as soon as the two prices are within `tolerance` and returns the
    demand price there. If the iteration budget runs out, the last midpoint
    is returned with the average of both prices. Never raises.
    """
    quantity = (low + high) / 2
    demand_price = supply_price = float("nan")

    for _ in range(max_iterations):
        quantity = (low + high) / 2
        demand_price = demand(quantity)
        supply_price = supply(quantity)

        if abs(demand_price - supply_price) < tolerance:
            return Equilibrium(quantity=quantity, price=demand_price)

        # Excess demand means the crossing lies to the right
        if demand_price > supply_price:
            low = quantity
        else:
            high = quantity

    logger.debug(
        "Equilibrium search did not converge after %d iterations (q=%s, gap=%s)",
        max_iterations,
        quantity,
        demand_price - supply_price,
    )
    return Equilibrium(quantity=quantity, price=(demand_price + supply_price) / 2)


class EquilibriumSolver:
    """Bisection solver bound to one quantity domain."""

    def __init__(
        self,
        max_quantity: float,
        *,
        tolerance: float = DEFAULT_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        self.max_quantity = max_quantity
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def solve(self, demand: PriceFunction, supply: PriceFunction) -> Equilibrium:
        return solve_equilibrium(
            demand,
            supply,
            0.0,
            self.max_quantity,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )
