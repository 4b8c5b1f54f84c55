import logging

import pytest

from core.economics import AffineCurve
from core.solver import EquilibriumSolver, solve_equilibrium


def test_default_market_equilibrium() -> None:
    eq = solve_equilibrium(AffineCurve(250, -1.5), AffineCurve(50, 1.0), 0, 200)
    assert eq.quantity == pytest.approx(80, abs=0.01)
    assert eq.price == pytest.approx(130, abs=0.01)


@pytest.mark.parametrize("demand_slope", [-3.0, -1.5, -0.5, -0.1])
@pytest.mark.parametrize("supply_slope", [0.1, 1.0, 3.0])
def test_converges_for_crossing_lines(demand_slope: float, supply_slope: float) -> None:
    # Both lines pass through (q=60, p=120)
    demand = AffineCurve(120 - demand_slope * 60, demand_slope)
    supply = AffineCurve(120 - supply_slope * 60, supply_slope)
    eq = EquilibriumSolver(200).solve(demand, supply)
    assert abs(demand(eq.quantity) - supply(eq.quantity)) < 0.01
    assert eq.quantity == pytest.approx(60, abs=0.1)


def test_exhausted_iterations_return_average_price(caplog: pytest.LogCaptureFixture) -> None:
    demand = AffineCurve(250, -1.5)
    supply = AffineCurve(50, 1.0)
    with caplog.at_level(logging.DEBUG, logger="core.solver"):
        eq = solve_equilibrium(demand, supply, 0, 200, max_iterations=1)
    # One step: q = 100, demand 100, supply 150
    assert eq.quantity == 100
    assert eq.price == pytest.approx(125)
    assert "did not converge" in caplog.text


def test_no_crossing_never_raises() -> None:
    eq = solve_equilibrium(AffineCurve(10, -1), AffineCurve(100, 1), 0, 200)
    assert 0 <= eq.quantity <= 200


def test_domain_bounds_are_required() -> None:
    with pytest.raises(TypeError):
        solve_equilibrium(AffineCurve(250, -1.5), AffineCurve(50, 1.0))  # type: ignore[call-arg]


def test_solver_searches_configured_domain() -> None:
    # Crossing at q = 300 lies outside [0, 200]
    demand = AffineCurve(400, -1.0)
    supply = AffineCurve(-200, 1.0)
    assert EquilibriumSolver(400).solve(demand, supply).quantity == pytest.approx(300, abs=0.01)
    assert EquilibriumSolver(200).solve(demand, supply).quantity == pytest.approx(200, abs=0.01)
