import math

import pytest

from core.economics import Equilibrium
from diagrams import DIAGRAMS, DiagramType, get_diagram
from diagrams.elasticity import point_elasticity_curve
from schemas.parameters import (
    ElasticityParameters,
    MonopolyParameters,
    SupplyDemandParameters,
    default_parameters,
    parse_parameters,
)


def draw(ctx, key: str, **values):
    return get_diagram(key).draw(ctx, parse_parameters(key, values))


def test_every_type_is_registered() -> None:
    assert set(DIAGRAMS) == set(DiagramType)
    assert get_diagram("monopoly") is DIAGRAMS[DiagramType.MONOPOLY]


def test_wrong_parameter_record_is_rejected(ctx) -> None:
    with pytest.raises(TypeError):
        get_diagram("monopoly").draw(ctx, SupplyDemandParameters())


def test_supply_demand_equilibrium_and_surplus(ctx, surface) -> None:
    result = draw(ctx, "supply-demand")
    eq = result["equilibrium"]
    assert isinstance(eq, Equilibrium)
    assert eq.quantity == pytest.approx(80, abs=0.01)
    assert eq.price == pytest.approx(130, abs=0.01)
    assert result["consumer_surplus"] == pytest.approx(4800, rel=1e-3)
    assert result["producer_surplus"] == pytest.approx(3200, rel=1e-3)
    assert "Equilibrium (Q=80, P=130)" in surface.texts()
    assert len(surface.of_kind("fill")) == 2


def test_subsidy_and_tariff_sit_on_opposite_sides(ctx) -> None:
    result = draw(ctx, "subsidy-tariff", subsidyAmount=30, tariffAmount=30)
    original, subsidized, tariffed = result["original"], result["subsidized"], result["tariffed"]

    assert subsidized.quantity > original.quantity > tariffed.quantity
    assert subsidized.price < original.price < tariffed.price
    assert subsidized.quantity == pytest.approx(92, abs=0.01)
    assert tariffed.quantity == pytest.approx(68, abs=0.01)

    assert result["subsidy_producer_price"] == pytest.approx(subsidized.price + 30)
    assert result["tariff_producer_price"] == pytest.approx(tariffed.price - 30)
    assert result["total_subsidy_cost"] == pytest.approx(30 * subsidized.quantity)
    assert result["total_tariff_revenue"] == pytest.approx(30 * tariffed.quantity)


def test_subsidy_tariff_without_policies(ctx, surface) -> None:
    result = draw(ctx, "subsidy-tariff")
    assert list(result.values) == ["original"]
    assert surface.of_kind("fill") == []


@pytest.mark.parametrize("tax", [5, 20, 40, 75, 100])
def test_tax_burdens_add_up(ctx, tax: float) -> None:
    result = draw(ctx, "tax-incidence", taxAmount=tax)
    assert result["consumer_burden"] + result["producer_burden"] == pytest.approx(tax)
    assert result["consumer_share"] + result["producer_share"] == pytest.approx(100)
    assert result["producer_price"] == pytest.approx(result["taxed"].price - tax)


def test_tax_incidence_values(ctx, surface) -> None:
    result = draw(ctx, "tax-incidence", taxAmount=40)
    # Steeper demand: buyers carry 1.5 / 2.3 of the tax
    assert result["consumer_share"] == pytest.approx(100 * 1.5 / 2.3, abs=0.1)
    assert result["deadweight_loss"] == pytest.approx(
        (result["original"].quantity - result["taxed"].quantity) * 20
    )
    assert result["tax_revenue"] == pytest.approx(40 * result["taxed"].quantity)
    assert len(surface.of_kind("fill")) == 3
    assert any(text.startswith("Producer Price:") for text in surface.texts())


def test_zero_tax_reports_original_only(ctx) -> None:
    result = draw(ctx, "tax-incidence")
    assert list(result.values) == ["original"]


def test_monopoly_closed_form(ctx, surface) -> None:
    result = draw(ctx, "monopoly")
    assert result["monopoly_quantity"] == 150
    assert result["monopoly_price"] == 125
    assert result["competitive_quantity"] == 300
    assert result["competitive_price"] == 50
    assert result["profit"] == 125 * 150 - (1000 + 50 * 150)
    assert result["deadweight_loss"] == pytest.approx(0.5 * 150 * 75)
    assert "Price/Cost" in surface.texts()
    assert "Monopoly Price: 125" in surface.texts()


def test_monopoly_flat_demand_does_not_raise(ctx) -> None:
    params = MonopolyParameters(demand_slope=0)
    result = get_diagram("monopoly").draw(ctx, params)
    assert math.isinf(result["monopoly_quantity"])


def test_elasticity_price_shock(ctx) -> None:
    result = draw(ctx, "elasticity")
    assert result["new_price"] == pytest.approx(110)
    assert result["elastic"]["new_quantity"] == pytest.approx(95)
    assert result["elastic"]["percent_change"] == pytest.approx(-5)
    assert result["inelastic"]["new_quantity"] == pytest.approx(80)
    assert result["inelastic"]["percent_change"] == pytest.approx(-20)


def test_elasticity_zero_quantity_propagates_non_finite(ctx, surface) -> None:
    curve = point_elasticity_curve(100, 0, -2)
    assert math.isinf(curve.slope)

    params = ElasticityParameters(quantity=0)
    result = get_diagram("elasticity").draw(ctx, params)
    assert not math.isfinite(result["elastic"]["new_quantity"])
    assert not math.isfinite(result["inelastic"]["percent_change"])
    assert any("NaN" in text for text in surface.texts())


def test_draw_is_repeatable(ctx) -> None:
    model = get_diagram("supply-demand")
    params = default_parameters("supply-demand")
    assert model.draw(ctx, params).to_dict() == model.draw(ctx, params).to_dict()
