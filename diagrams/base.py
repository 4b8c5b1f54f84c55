"""
base.py

What every diagram type shares: the `DiagramType` key, the immutable
`DiagramResult` record and the `DiagramModel` interface the dispatch table
is built from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Type, Union

from core.economics import Equilibrium
from formatting.renderers import RenderContext, round_label
from schemas.parameters import DiagramParameters

ResultValue = Union[float, Equilibrium, Mapping[str, float]]


class DiagramType(Enum):
    """Supported diagram types."""
    SUPPLY_DEMAND = "supply-demand"
    SUBSIDY_TARIFF = "subsidy-tariff"
    ELASTICITY = "elasticity"
    MONOPOLY = "monopoly"
    TAX_INCIDENCE = "tax-incidence"


@dataclass(frozen=True)
class DiagramResult:
    """
    The parameter record a diagram was drawn from plus what it computed.

    `values` keeps insertion order, which is also the CSV row order.
    Both mappings are read-only views.
    """

    diagram_type: DiagramType
    parameters: Mapping[str, float]
    values: Mapping[str, ResultValue]

    @classmethod
    def build(
        cls,
        diagram_type: DiagramType,
        params: DiagramParameters,
        values: Dict[str, ResultValue],
    ) -> "DiagramResult":
        frozen_values = {
            key: MappingProxyType(dict(value)) if isinstance(value, Mapping) else value
            for key, value in values.items()
        }
        return cls(
            diagram_type=diagram_type,
            parameters=MappingProxyType(params.to_record()),
            values=MappingProxyType(frozen_values),
        )

    def __getitem__(self, key: str) -> ResultValue:
        return self.values[key]

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def rows(self) -> List[Tuple[str, float]]:
        """
        Flatten to (name, number) pairs: parameters first, then results.

        An Equilibrium under `key` becomes `key_price` and `key_quantity`;
        a nested mapping becomes `key_<subkey>` for each entry.
        """
        rows: List[Tuple[str, float]] = list(self.parameters.items())
        for key, value in self.values.items():
            if isinstance(value, Equilibrium):
                rows.append((f"{key}_price", value.price))
                rows.append((f"{key}_quantity", value.quantity))
            elif isinstance(value, Mapping):
                rows.extend((f"{key}_{sub}", number) for sub, number in value.items())
            else:
                rows.append((key, value))
        return rows

    def to_dict(self) -> Dict[str, Any]:
        results: Dict[str, Any] = {}
        for key, value in self.values.items():
            if isinstance(value, Equilibrium):
                results[key] = value.to_dict()
            elif isinstance(value, Mapping):
                results[key] = dict(value)
            else:
                results[key] = value
        return {
            "diagramType": self.diagram_type.value,
            "parameters": dict(self.parameters),
            "results": results,
        }


class DiagramModel(ABC):
    """
    One diagram type. Implementations hold no state between draws: `draw`
    paints onto the context's surface and returns a fresh result.
    """

    diagram_type: DiagramType
    title: str
    explanation: str
    parameters_model: Type[DiagramParameters]
    x_label: str = "Quantity"
    y_label: str = "Price"

    @abstractmethod
    def draw(self, ctx: RenderContext, params: DiagramParameters) -> DiagramResult:
        ...

    def coerce(self, params: DiagramParameters) -> DiagramParameters:
        if not isinstance(params, self.parameters_model):
            raise TypeError(
                f"{self.diagram_type.value} expects {self.parameters_model.__name__}, "
                f"got {type(params).__name__}"
            )
        return params

    @staticmethod
    def label_price_line(ctx: RenderContext, price: float, text: str, color: str) -> None:
        """Label a horizontal price guide near the left edge of the plot."""
        ctx.annotations.label_at(30, ctx.mapper.to_pixel_y(price), text, color, pixel_space=True)

    @staticmethod
    def mark_equilibrium(ctx: RenderContext, eq: Equilibrium, color: str) -> None:
        annotations = ctx.annotations
        annotations.draw_point(eq.quantity, eq.price, color)
        annotations.draw_dashed_hline(eq.price, color)
        annotations.draw_dashed_vline(eq.quantity, color)

    @staticmethod
    def describe(eq: Equilibrium) -> str:
        return f"Q={round_label(eq.quantity)}, P={round_label(eq.price)}"
