import pytest
from pydantic import ValidationError

from schemas.parameters import (
    ParameterError,
    SubsidyTariffParameters,
    TaxIncidenceParameters,
    default_parameters,
    parse_parameters,
)


def test_defaults_follow_configuration() -> None:
    params = default_parameters("tax-incidence")
    assert isinstance(params, TaxIncidenceParameters)
    assert params.supply_slope == 0.8
    assert params.elasticity_ratio == 0.5


def test_form_strings_are_parsed() -> None:
    params = parse_parameters("subsidy-tariff", {"subsidyAmount": "25", "demandSlope": "-2.5"})
    assert isinstance(params, SubsidyTariffParameters)
    assert params.subsidy_amount == 25
    assert params.demand_slope == -2.5
    assert params.tariff_amount == 0


def test_record_uses_wire_names() -> None:
    record = default_parameters("supply-demand").to_record()
    assert record == {
        "demandIntercept": 250,
        "demandSlope": -1.5,
        "supplyIntercept": 50,
        "supplySlope": 1.0,
    }


@pytest.mark.parametrize(
    "key, values",
    [
        ("supply-demand", {"demandSlope": 0.5}),
        ("supply-demand", {"supplyIntercept": 500}),
        ("monopoly", {"fixedCost": -1}),
        ("elasticity", {"quantity": 0}),
        ("tax-incidence", {"taxAmount": 150}),
    ],
)
def test_out_of_range_values_are_rejected(key: str, values: dict) -> None:
    with pytest.raises(ParameterError):
        parse_parameters(key, values)


@pytest.mark.parametrize("value", ["abc", "", None, "nan", "inf"])
def test_non_numbers_are_rejected(value) -> None:
    with pytest.raises(ParameterError):
        parse_parameters("supply-demand", {"demandIntercept": value})


def test_unknown_names_are_rejected() -> None:
    with pytest.raises(ParameterError, match="taxAmount"):
        parse_parameters("supply-demand", {"taxAmount": 10})
    with pytest.raises(ParameterError):
        parse_parameters("histogram", {})


def test_range_check_can_be_skipped() -> None:
    params = parse_parameters("elasticity", {"quantity": 0}, check_ranges=False)
    assert params.quantity == 0


def test_parameter_error_is_a_value_error() -> None:
    assert issubclass(ParameterError, ValueError)


@pytest.mark.parametrize(
    "ratio, expected_slope",
    [(0.5, 3.0), (1.0, 1.5), (0.6, 2.5), (1.5, 1.0)],
)
def test_elasticity_ratio_sets_supply_slope(ratio: float, expected_slope: float) -> None:
    params = parse_parameters("tax-incidence", {"elasticityRatio": ratio})
    assert params.supply_slope == expected_slope
    assert params.elasticity_ratio == ratio


def test_explicit_supply_slope_wins_over_ratio() -> None:
    params = parse_parameters("tax-incidence", {"elasticityRatio": 1.0, "supplySlope": 2.0})
    assert params.supply_slope == 2.0


def test_ratio_must_be_positive() -> None:
    with pytest.raises(ParameterError):
        default_parameters("tax-incidence").with_elasticity_ratio(0)


def test_records_are_immutable() -> None:
    params = default_parameters("monopoly")
    with pytest.raises(ValidationError):
        params.fixed_cost = 10


@pytest.mark.parametrize(
    "demand_slope, ratio, expected_slope",
    [(-0.5, 2.0, 0.3), (-2.5, 2.0, 1.3), (-1.5, 0.6, 2.5)],
)
def test_ratio_coupling_rounds_half_up(demand_slope: float, ratio: float, expected_slope: float) -> None:
    params = parse_parameters(
        "tax-incidence", {"demandSlope": demand_slope, "elasticityRatio": ratio}
    )
    assert params.supply_slope == expected_slope


def test_defaults_come_from_the_records() -> None:
    assert default_parameters("monopoly") == parse_parameters("monopoly", {})
    assert default_parameters("elasticity").to_record() == {
        "price": 100,
        "quantity": 100,
        "elasticCoefficient": -2.0,
        "inelasticCoefficient": -0.5,
    }


def test_records_refuse_non_finite_values() -> None:
    with pytest.raises(ValidationError):
        TaxIncidenceParameters(tax_amount=float("inf"))


def test_parse_error_keeps_validation_cause() -> None:
    with pytest.raises(ParameterError) as info:
        parse_parameters("supply-demand", {"supplySlope": "steep"})
    assert isinstance(info.value.__cause__, ValidationError)
    assert "supplySlope" in str(info.value)
