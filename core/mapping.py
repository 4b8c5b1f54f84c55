"""
mapping.py

Affine transform from (quantity, price) model space into canvas pixels.
Pixel rows grow downward while price grows upward, so the Y axis flips.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from core.config import GraphSettings
from core.economics import DomainBounds, Viewport


@dataclass(frozen=True)
class CoordinateMapper:
    """
    Maps domain values to pixel positions inside the padded plot area.

    Values outside [0, bound] are mapped outside the plot area rather than
    rejected; clipping is the caller's job.
    """

    bounds: DomainBounds
    viewport: Viewport

    @classmethod
    def from_settings(cls, settings: GraphSettings) -> "CoordinateMapper":
        return cls(DomainBounds.from_settings(settings), Viewport.from_settings(settings))

    @property
    def plot_width(self) -> float:
        return self.viewport.width - 2 * self.viewport.padding

    @property
    def plot_height(self) -> float:
        return self.viewport.height - 2 * self.viewport.padding

    @property
    def left(self) -> float:
        return self.viewport.padding

    @property
    def right(self) -> float:
        return self.viewport.width - self.viewport.padding

    @property
    def top(self) -> float:
        return self.viewport.padding

    @property
    def bottom(self) -> float:
        return self.viewport.height - self.viewport.padding

    def to_pixel_x(self, quantity: float) -> float:
        return self.viewport.padding + (quantity / self.bounds.max_quantity) * self.plot_width

    def to_pixel_y(self, price: float) -> float:
        return (
            self.viewport.height
            - self.viewport.padding
            - (price / self.bounds.max_price) * self.plot_height
        )

    def to_pixel(self, quantity: float, price: float) -> Tuple[float, float]:
        return self.to_pixel_x(quantity), self.to_pixel_y(price)
