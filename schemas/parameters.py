from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import SLIDER_RANGES


class ParameterError(ValueError):
    """A parameter record failed the range checks of the input form."""


# =============================================================================
# PARAMETER RECORDS
# =============================================================================

class DiagramParameters(BaseModel):
    """
    Flat record of named numbers read from the parameter form.

    Field names are snake_case in Python and camelCase on the wire (form
    fields, JSON payloads, CSV rows). Values must be finite;
    range checks against the sliders happen in `parse_parameters`.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="forbid", allow_inf_nan=False
    )

    def to_record(self) -> Dict[str, float]:
        return self.model_dump(by_alias=True)


class MarketParameters(DiagramParameters):
    demand_intercept: float = Field(250, alias="demandIntercept")
    demand_slope: float = Field(-1.5, alias="demandSlope")
    supply_intercept: float = Field(50, alias="supplyIntercept")
    supply_slope: float = Field(1.0, alias="supplySlope")


class SupplyDemandParameters(MarketParameters):
    pass


class SubsidyTariffParameters(MarketParameters):
    subsidy_amount: float = Field(0, alias="subsidyAmount")
    tariff_amount: float = Field(0, alias="tariffAmount")


class ElasticityParameters(DiagramParameters):
    price: float = 100
    quantity: float = 100
    elastic_coefficient: float = Field(-2.0, alias="elasticCoefficient")
    inelastic_coefficient: float = Field(-0.5, alias="inelasticCoefficient")


class MonopolyParameters(DiagramParameters):
    demand_intercept: float = Field(200, alias="demandIntercept")
    demand_slope: float = Field(-0.5, alias="demandSlope")
    fixed_cost: float = Field(1000, alias="fixedCost")
    marginal_cost: float = Field(50, alias="marginalCost")


class TaxIncidenceParameters(MarketParameters):
    supply_slope: float = Field(0.8, alias="supplySlope")
    tax_amount: float = Field(0, alias="taxAmount")
    # Ratio of supply to demand elasticity
    elasticity_ratio: float = Field(0.5, alias="elasticityRatio")

    def with_elasticity_ratio(self, ratio: float) -> "TaxIncidenceParameters":
        """
        Set the Es/Ed ratio and steepen or flatten supply to match it.

        Es/Ed equals |demand slope| / supply slope for lines through a
        common point. The slider caps the result at 3.0 and rounds half up
        to one decimal.
        """
        if ratio <= 0:
            raise ParameterError(f"Elasticity ratio must be positive, got {ratio:g}")
        slope = Decimal(min(abs(self.demand_slope) / ratio, 3.0))
        supply_slope = float(slope.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
        return self.model_copy(update={"elasticity_ratio": ratio, "supply_slope": supply_slope})


PARAMETER_MODELS: Dict[str, Type[DiagramParameters]] = {
    "supply-demand": SupplyDemandParameters,
    "subsidy-tariff": SubsidyTariffParameters,
    "elasticity": ElasticityParameters,
    "monopoly": MonopolyParameters,
    "tax-incidence": TaxIncidenceParameters,
}


def default_parameters(diagram_key: str) -> DiagramParameters:
    return PARAMETER_MODELS[diagram_key]()


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def parse_parameters(
    diagram_key: str,
    raw: Mapping[str, Any],
    *,
    check_ranges: bool = True,
) -> DiagramParameters:
    """
    Build a parameter record from loosely typed form input.

    Missing fields take the diagram's defaults. Every value must parse as a
    finite number and, with `check_ranges`, sit inside its slider range.
    """
    if diagram_key not in PARAMETER_MODELS:
        raise ParameterError(f"Unknown diagram type: {diagram_key!r}")

    try:
        params = PARAMETER_MODELS[diagram_key].model_validate(dict(raw))
    except ValidationError as exc:
        raise ParameterError(_describe(exc)) from exc

    if check_ranges:
        for name, number in params.to_record().items():
            slider = SLIDER_RANGES[diagram_key][name]
            if not slider.contains(number):
                raise ParameterError(
                    f"{slider.label} must be between {slider.min:g} and {slider.max:g}, got {number:g}"
                )

    # The ratio drives the supply slope unless the slope was given explicitly
    if (
        isinstance(params, TaxIncidenceParameters)
        and "elasticityRatio" in raw
        and "supplySlope" not in raw
    ):
        params = params.with_elasticity_ratio(params.elasticity_ratio)
    return params
