"""
economics.py

Value types shared by the mapper, the solver and the diagram models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

from core.config import GraphSettings

# price = f(quantity)
PriceFunction = Callable[[float], float]

# Domain-space vertex: (quantity, price)
DomainPoint = Tuple[float, float]
Polygon = Sequence[DomainPoint]


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Floating-point division that yields inf or NaN instead of raising.

    Degenerate inputs (a zero reference quantity, a flat demand curve) are
    allowed to reach the drawing code as non-finite values.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


@dataclass(frozen=True)
class DomainBounds:
    """The visible economic space: quantity and price both start at zero."""

    max_quantity: float
    max_price: float

    @classmethod
    def from_settings(cls, settings: GraphSettings) -> "DomainBounds":
        return cls(max_quantity=settings.max_quantity, max_price=settings.max_price)


@dataclass(frozen=True)
class Viewport:
    """Canvas size and uniform padding, in pixels."""

    width: float
    height: float
    padding: float

    @classmethod
    def from_settings(cls, settings: GraphSettings) -> "Viewport":
        return cls(width=settings.width, height=settings.height, padding=settings.padding)


@dataclass(frozen=True)
class AffineCurve:
    """
    price = intercept + slope * quantity

    Demand curves carry a negative slope and supply curves a positive one.
    The type does not enforce it; the equilibrium solver relies on it.
    """

    intercept: float
    slope: float

    def __call__(self, quantity: float) -> float:
        return self.intercept + self.slope * quantity

    def shifted(self, amount: float) -> "AffineCurve":
        """Move the whole curve vertically by `amount` price units."""
        return AffineCurve(self.intercept + amount, self.slope)


@dataclass(frozen=True)
class Equilibrium:
    quantity: float
    price: float

    def to_dict(self) -> Dict[str, float]:
        return {"price": self.price, "quantity": self.quantity}
