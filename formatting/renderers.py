"""
renderers.py

Drawing helpers shared by every diagram: axes and grid, sampled curves,
filled regions and annotations. All of them take domain coordinates
(quantity, price) and go through the CoordinateMapper of the current
RenderContext, so nothing is attached to the surface itself.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from core.config import StyleConfig
from core.economics import DomainBounds, Polygon, PriceFunction, Viewport
from core.mapping import CoordinateMapper
from formatting.surface import DrawingSurface, PixelPoint

# Quantity units between curve samples
CURVE_STEP = 2

DASH_PATTERN = (5, 3)
LABEL_OFFSET = 10
GRID_DIVISIONS = 5
TICK_LENGTH = 5


def round_label(value: float) -> str:
    """Round half up like the slider readouts; non-finite values print as-is."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return str(int(math.floor(value + 0.5)))


def format_value(value: float) -> str:
    """Shortest round-tripping text for a number; whole numbers drop the '.0'."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


class CurveRenderer:
    """Strokes price functions sampled across the whole quantity domain."""

    def __init__(self, surface: DrawingSurface, mapper: CoordinateMapper, style: StyleConfig):
        self.surface = surface
        self.mapper = mapper
        self.style = style

    def sample_quantities(self) -> np.ndarray:
        count = int(self.mapper.bounds.max_quantity // CURVE_STEP) + 1
        return np.arange(count, dtype=float) * CURVE_STEP

    def segments(self, price_fn: PriceFunction) -> List[List[PixelPoint]]:
        """
        Mapped polyline pieces of `price_fn` inside the visible price band.

        A sample outside [0, max_price] ends the current piece; the curve
        is truncated there, never clamped to the edge.
        """
        max_price = self.mapper.bounds.max_price
        pieces: List[List[PixelPoint]] = []
        current: List[PixelPoint] = []
        for quantity in self.sample_quantities():
            price = float(price_fn(float(quantity)))
            if 0 <= price <= max_price:
                current.append(self.mapper.to_pixel(float(quantity), price))
            elif current:
                pieces.append(current)
                current = []
        if current:
            pieces.append(current)
        return pieces

    def draw_curve(self, price_fn: PriceFunction, color: str,
                   line_width: Optional[float] = None) -> None:
        width = self.style.graph.line_width if line_width is None else line_width
        for piece in self.segments(price_fn):
            if len(piece) >= 2:
                self.surface.stroke_path(piece, color=color, line_width=width)


class RegionRenderer:
    """Fills closed polygons for surplus, burden and deadweight-loss areas."""

    def __init__(self, surface: DrawingSurface, mapper: CoordinateMapper):
        self.surface = surface
        self.mapper = mapper

    def fill_region(self, polygon: Polygon, fill: str, border: Optional[str] = None) -> None:
        # Callers order the vertices so they trace a simple polygon
        if len(polygon) < 3:
            return
        points = [self.mapper.to_pixel(q, p) for q, p in polygon]
        self.surface.fill_path(points, fill=fill, border=border, border_width=1.0)


class AnnotationRenderer:
    """Points, dashed guide lines and text labels. No collision avoidance."""

    def __init__(self, surface: DrawingSurface, mapper: CoordinateMapper, style: StyleConfig):
        self.surface = surface
        self.mapper = mapper
        self.style = style

    def draw_point(self, quantity: float, price: float, color: str,
                   radius: Optional[float] = None) -> None:
        radius = self.style.graph.point_radius if radius is None else radius
        self.surface.fill_circle(self.mapper.to_pixel(quantity, price), radius, color=color)

    def draw_dashed_hline(self, price: float, color: str, width: float = 1) -> None:
        y = self.mapper.to_pixel_y(price)
        self.surface.stroke_path(
            [(self.mapper.left, y), (self.mapper.right, y)],
            color=color, line_width=width, dash=DASH_PATTERN,
        )

    def draw_dashed_vline(self, quantity: float, color: str, width: float = 1) -> None:
        x = self.mapper.to_pixel_x(quantity)
        self.surface.stroke_path(
            [(x, self.mapper.top), (x, self.mapper.bottom)],
            color=color, line_width=width, dash=DASH_PATTERN,
        )

    def label_at(self, x: float, y: float, text: str, color: str,
                 pixel_space: bool = False) -> None:
        """
        Write `text` up and to the right of an anchor.

        The anchor is (quantity, price) unless `pixel_space` is set, in which
        case (x, y) are already canvas pixels.
        """
        if not pixel_space:
            x, y = self.mapper.to_pixel(x, y)
        self.surface.draw_text(
            (x + LABEL_OFFSET, y - LABEL_OFFSET), text,
            color=color, font_px=self.style.label_font_px, align="left",
        )


class AxesRenderer:
    """Background grid, the two axes, ticks with rounded values, axis titles."""

    def __init__(self, surface: DrawingSurface, mapper: CoordinateMapper, style: StyleConfig):
        self.surface = surface
        self.mapper = mapper
        self.style = style

    def draw(self, x_label: str = "Quantity", y_label: str = "Price") -> None:
        m = self.mapper
        colors = self.style.colors
        graph = self.style.graph
        font_px = self.style.axis_font_px

        if graph.grid_lines:
            for i in range(GRID_DIVISIONS + 1):
                x = m.left + i * (m.plot_width / GRID_DIVISIONS)
                self.surface.stroke_path([(x, m.top), (x, m.bottom)], color=colors.grid, line_width=1)
            for i in range(GRID_DIVISIONS + 1):
                y = m.top + i * (m.plot_height / GRID_DIVISIONS)
                self.surface.stroke_path([(m.left, y), (m.right, y)], color=colors.grid, line_width=1)

        self.surface.stroke_path([(m.left, m.top), (m.left, m.bottom)],
                                 color=colors.axis, line_width=graph.axis_width)
        self.surface.stroke_path([(m.left, m.bottom), (m.right, m.bottom)],
                                 color=colors.axis, line_width=graph.axis_width)

        self.surface.draw_text((15, m.viewport.height / 2), y_label, color=colors.axis,
                               font_px=font_px, align="center", rotation=90)
        self.surface.draw_text((m.viewport.width / 2, m.viewport.height - 10), x_label,
                               color=colors.axis, font_px=font_px, align="center")

        for i in range(GRID_DIVISIONS + 1):
            price = i * (m.bounds.max_price / GRID_DIVISIONS)
            y = m.to_pixel_y(price)
            self.surface.stroke_path([(m.left - TICK_LENGTH, y), (m.left, y)],
                                     color=colors.axis, line_width=graph.axis_width)
            self.surface.draw_text((m.left - 8, y + 4), round_label(price),
                                   color=colors.axis, font_px=font_px, align="right")

        for i in range(GRID_DIVISIONS + 1):
            quantity = i * (m.bounds.max_quantity / GRID_DIVISIONS)
            x = m.to_pixel_x(quantity)
            self.surface.stroke_path([(x, m.bottom), (x, m.bottom + TICK_LENGTH)],
                                     color=colors.axis, line_width=graph.axis_width)
            self.surface.draw_text((x, m.bottom + 18), round_label(quantity),
                                   color=colors.axis, font_px=font_px, align="center")


@dataclass
class RenderContext:
    """
    Everything one draw pass needs: the surface, a freshly built mapper and
    the read-only style, plus the renderers bound to them.
    """

    surface: DrawingSurface
    style: StyleConfig
    mapper: CoordinateMapper

    @classmethod
    def create(cls, surface: DrawingSurface, style: StyleConfig) -> "RenderContext":
        # Rebuilt per draw so a resized surface is picked up
        graph = style.graph
        mapper = CoordinateMapper(
            DomainBounds(graph.max_quantity, graph.max_price),
            Viewport(surface.width, surface.height, graph.padding),
        )
        return cls(surface=surface, style=style, mapper=mapper)

    @property
    def curves(self) -> CurveRenderer:
        return CurveRenderer(self.surface, self.mapper, self.style)

    @property
    def regions(self) -> RegionRenderer:
        return RegionRenderer(self.surface, self.mapper)

    @property
    def annotations(self) -> AnnotationRenderer:
        return AnnotationRenderer(self.surface, self.mapper, self.style)

    @property
    def axes(self) -> AxesRenderer:
        return AxesRenderer(self.surface, self.mapper, self.style)

    def begin(self, x_label: str = "Quantity", y_label: str = "Price") -> None:
        """Clear the surface and draw the shared axes."""
        self.surface.clear()
        self.axes.draw(x_label, y_label)


def polygon_area(polygon: Sequence[tuple]) -> float:
    """Shoelace area of a simple polygon in domain units."""
    if len(polygon) < 3:
        return 0.0
    qs = np.array([q for q, _ in polygon], dtype=float)
    ps = np.array([p for _, p in polygon], dtype=float)
    return float(0.5 * abs(np.dot(qs, np.roll(ps, -1)) - np.dot(ps, np.roll(qs, -1))))
