"""
surface.py

The drawing surface the renderers paint on. Renderers only talk to the
`DrawingSurface` protocol, in pixel coordinates with the origin at the top
left corner:

    MatplotlibSurface  - rasterizes through matplotlib's Agg backend
    RecordingSurface   - keeps a log of draw calls and produces no image
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for server use
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Polygon

PixelPoint = Tuple[float, float]

logger = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    width: int
    height: int

    def clear(self) -> None: ...

    def stroke_path(
        self,
        points: Sequence[PixelPoint],
        *,
        color: str,
        line_width: float,
        dash: Optional[Tuple[float, float]] = None,
    ) -> None: ...

    def fill_path(
        self,
        points: Sequence[PixelPoint],
        *,
        fill: str,
        border: Optional[str] = None,
        border_width: float = 1.0,
    ) -> None: ...

    def fill_circle(self, center: PixelPoint, radius: float, *, color: str) -> None: ...

    def draw_text(
        self,
        position: PixelPoint,
        text: str,
        *,
        color: str,
        font_px: float,
        align: str = "left",
        rotation: float = 0.0,
    ) -> None: ...

    def export_png(self) -> bytes: ...


def _finite(points: Sequence[PixelPoint]) -> bool:
    return all(math.isfinite(x) and math.isfinite(y) for x, y in points)


class MatplotlibSurface:
    """
    A fixed-size canvas backed by a matplotlib figure.

    The single axes fills the whole figure and its limits equal the pixel
    size, so one data unit is one pixel and the Y axis points down.
    Primitives with NaN or infinite coordinates are dropped.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        dpi: int = 100,
        background: str = "#ffffff",
        font_family: str = "DejaVu Sans",
    ):
        self.width = width
        self.height = height
        self.dpi = dpi
        self.background = background
        self.font_family = font_family
        self._fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self._ax = self._fig.add_axes([0, 0, 1, 1])
        self._reset_axes()

    def _reset_axes(self) -> None:
        ax = self._ax
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.axis('off')
        self._fig.patch.set_facecolor(self.background)

    def _px_to_pt(self, px: float) -> float:
        # matplotlib sizes lines and text in points
        return px * 72.0 / self.dpi

    def clear(self) -> None:
        self._ax.clear()
        self._reset_axes()

    def stroke_path(self, points, *, color, line_width, dash=None) -> None:
        if len(points) < 2 or not _finite(points):
            logger.debug("Skipping stroke with %d points", len(points))
            return
        xs, ys = zip(*points)
        width_pt = self._px_to_pt(line_width)
        line = Line2D(xs, ys, color=color, linewidth=width_pt, solid_capstyle='butt')
        if dash:
            # Dash lengths get multiplied by the line width when scale_dashes is on
            scale = width_pt if matplotlib.rcParams["lines.scale_dashes"] else 1.0
            line.set_dashes([self._px_to_pt(d) / scale for d in dash])
        self._ax.add_line(line)

    def fill_path(self, points, *, fill, border=None, border_width=1.0) -> None:
        if not _finite(points):
            logger.debug("Skipping fill with non-finite vertices")
            return
        patch = Polygon(list(points), closed=True, facecolor=fill,
                        edgecolor=border or 'none',
                        linewidth=self._px_to_pt(border_width) if border else 0)
        self._ax.add_patch(patch)

    def fill_circle(self, center, radius, *, color) -> None:
        if not _finite([center]):
            logger.debug("Skipping point at %s", center)
            return
        self._ax.add_patch(Circle(center, radius, facecolor=color, edgecolor='none'))

    def draw_text(self, position, text, *, color, font_px, align="left", rotation=0.0) -> None:
        if not _finite([position]):
            logger.debug("Skipping label %r at %s", text, position)
            return
        x, y = position
        self._ax.text(x, y, text, color=color, ha=align, va='baseline',
                      rotation=rotation, rotation_mode='anchor',
                      fontsize=self._px_to_pt(font_px), family=self.font_family)

    def export_png(self) -> bytes:
        buf = io.BytesIO()
        self._fig.savefig(buf, format="png", dpi=self.dpi,
                          facecolor=self._fig.get_facecolor(), edgecolor='none')
        buf.seek(0)
        return buf.read()

    def close(self) -> None:
        plt.close(self._fig)

    def __enter__(self) -> "MatplotlibSurface":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@dataclass
class DrawOp:
    """One recorded call on a RecordingSurface."""

    kind: str
    points: List[PixelPoint] = field(default_factory=list)
    style: Dict[str, Any] = field(default_factory=dict)
    text: Optional[str] = None


class RecordingSurface:
    """
    Surface that only remembers what was drawn.

    Used when the caller needs a diagram's result record but no image
    (CSV and JSON exports), and for inspecting draw calls in tests.
    """

    def __init__(self, width: int = 800, height: int = 500):
        self.width = width
        self.height = height
        self.ops: List[DrawOp] = []

    def clear(self) -> None:
        self.ops = [DrawOp("clear")]

    def stroke_path(self, points, *, color, line_width, dash=None) -> None:
        self.ops.append(DrawOp("stroke", list(points),
                               {"color": color, "line_width": line_width, "dash": dash}))

    def fill_path(self, points, *, fill, border=None, border_width=1.0) -> None:
        self.ops.append(DrawOp("fill", list(points),
                               {"fill": fill, "border": border, "border_width": border_width}))

    def fill_circle(self, center, radius, *, color) -> None:
        self.ops.append(DrawOp("circle", [center], {"radius": radius, "color": color}))

    def draw_text(self, position, text, *, color, font_px, align="left", rotation=0.0) -> None:
        self.ops.append(DrawOp("text", [position],
                               {"color": color, "font_px": font_px, "align": align,
                                "rotation": rotation}, text=text))

    def export_png(self) -> bytes:
        raise RuntimeError("RecordingSurface has no raster output")

    def of_kind(self, kind: str) -> List[DrawOp]:
        return [op for op in self.ops if op.kind == kind]

    def texts(self) -> List[str]:
        return [op.text for op in self.ops if op.kind == "text"]
