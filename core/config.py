"""
config.py

Process-wide style configuration and the slider ranges of the parameter
form. Everything here is frozen once built so renderers can share a single
instance. Parameter defaults live on the records in schemas/parameters.py.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphSettings(BaseModel):
    """Canvas geometry and the visible economic domain."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(800, gt=0, description="Canvas width in pixels")
    height: int = Field(500, gt=0, description="Canvas height in pixels")
    padding: float = Field(40, ge=0, description="Margin around the plot area in pixels")
    axis_width: float = 2
    line_width: float = 2
    point_radius: float = 5
    max_price: float = Field(300, gt=0)
    max_quantity: float = Field(200, gt=0)
    grid_lines: bool = True
    dpi: int = 100

    @model_validator(mode="after")
    def _check_padding(self) -> "GraphSettings":
        if self.padding >= min(self.width, self.height) / 2:
            raise ValueError(
                f"padding {self.padding} leaves no plot area on a "
                f"{self.width}x{self.height} canvas"
            )
        return self


class Palette(BaseModel):
    """Named colors. Translucent fills carry their alpha as a hex suffix."""

    model_config = ConfigDict(frozen=True)

    demand: str = "#3498db"
    supply: str = "#e74c3c"
    subsidized_supply: str = "#2ecc71"
    tariffed_supply: str = "#9b59b6"
    equilibrium: str = "#000000"
    new_equilibrium: str = "#f39c12"
    deadweight_loss: str = "#f39c124d"
    deadweight_loss_border: str = "#f39c12"
    grid: str = "#eeeeee"
    axis: str = "#666666"
    elastic_demand: str = "#2980b9"
    inelastic_demand: str = "#1abc9c"
    monopoly_mc: str = "#e67e22"
    monopoly_mr: str = "#9b59b6"
    monopoly_ac: str = "#3498db"
    consumer_surplus: str = "#2ecc714d"
    producer_surplus: str = "#3498db4d"
    government_revenue: str = "#9b59b64d"
    background: str = "#ffffff"


class StyleConfig(BaseModel):
    """Read-only configuration handed to every renderer and diagram."""

    model_config = ConfigDict(frozen=True)

    graph: GraphSettings = Field(default_factory=GraphSettings)
    colors: Palette = Field(default_factory=Palette)
    font_family: str = "DejaVu Sans"
    label_font_px: float = 12
    axis_font_px: float = 14


class SliderRange(BaseModel):
    """Allowed range of one numeric input, as offered by the parameter form."""

    model_config = ConfigDict(frozen=True)

    label: str
    min: float
    max: float
    step: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


# =============================================================================
# PER-DIAGRAM SLIDER RANGES
# =============================================================================

_MARKET_RANGES = {
    "demandIntercept": SliderRange(label="Demand Intercept", min=50, max=400, step=10),
    "demandSlope": SliderRange(label="Demand Slope", min=-3, max=-0.1, step=0.1),
    "supplyIntercept": SliderRange(label="Supply Intercept", min=0, max=200, step=10),
    "supplySlope": SliderRange(label="Supply Slope", min=0.1, max=3, step=0.1),
}

SLIDER_RANGES: Dict[str, Dict[str, SliderRange]] = {
    "supply-demand": dict(_MARKET_RANGES),
    "subsidy-tariff": {
        **_MARKET_RANGES,
        "subsidyAmount": SliderRange(label="Subsidy Amount", min=0, max=100, step=5),
        "tariffAmount": SliderRange(label="Tariff Amount", min=0, max=100, step=5),
    },
    "elasticity": {
        "price": SliderRange(label="Price", min=50, max=200, step=5),
        "quantity": SliderRange(label="Quantity", min=50, max=200, step=5),
        "elasticCoefficient": SliderRange(label="Elastic Coefficient", min=-5, max=-1.1, step=0.1),
        "inelasticCoefficient": SliderRange(label="Inelastic Coefficient", min=-0.9, max=-0.1, step=0.1),
    },
    "monopoly": {
        "demandIntercept": SliderRange(label="Demand Intercept", min=100, max=300, step=10),
        "demandSlope": SliderRange(label="Demand Slope", min=-2, max=-0.1, step=0.1),
        "fixedCost": SliderRange(label="Fixed Cost", min=0, max=3000, step=100),
        "marginalCost": SliderRange(label="Marginal Cost", min=0, max=150, step=5),
    },
    "tax-incidence": {
        **_MARKET_RANGES,
        "taxAmount": SliderRange(label="Tax Amount", min=0, max=100, step=5),
        "elasticityRatio": SliderRange(label="Elasticity Ratio (Es/Ed)", min=0.1, max=2, step=0.1),
    },
}


class EnvironmentSettings(BaseSettings):
    """Canvas size overrides read from `ECON_GRAPH_*` environment variables."""

    model_config = SettingsConfigDict(env_prefix="ECON_GRAPH_", extra="ignore", case_sensitive=False)

    width: Optional[int] = Field(default=None, gt=0)
    height: Optional[int] = Field(default=None, gt=0)


def load_config(**graph_overrides) -> StyleConfig:
    """
    Build the single StyleConfig for this process.

    `ECON_GRAPH_WIDTH` / `ECON_GRAPH_HEIGHT` resize the canvas; explicit
    keyword overrides win over the environment. A malformed variable raises
    pydantic's ValidationError naming the field.
    """
    graph_fields: Dict[str, object] = EnvironmentSettings().model_dump(exclude_none=True)
    graph_fields.update(graph_overrides)
    return StyleConfig(graph=GraphSettings(**graph_fields))
