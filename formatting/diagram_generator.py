"""
diagram_generator.py

Entry point that turns a diagram type plus a parameter record into a
picture and a result record. Rendering goes through a fresh surface per
call; nothing carries over between calls except the read-only style.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.config import StyleConfig, load_config
from diagrams import DiagramResult, DiagramType, get_diagram
from formatting.renderers import RenderContext
from formatting.surface import DrawingSurface, MatplotlibSurface, RecordingSurface
from schemas.parameters import DiagramParameters, default_parameters, parse_parameters

logger = logging.getLogger(__name__)


@dataclass
class DiagramSpec:
    """Which diagram to draw and with what parameter values."""
    diagram_type: DiagramType
    params: Optional[DiagramParameters] = None
    width: Optional[int] = None   # pixels; defaults to the configured canvas
    height: Optional[int] = None

    def __post_init__(self):
        self.diagram_type = DiagramType(self.diagram_type)
        if self.params is None:
            self.params = default_parameters(self.diagram_type.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "diagram_type": self.diagram_type.value,
            "params": self.params.to_record(),
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiagramSpec":
        diagram_type = DiagramType(data["diagram_type"])
        return cls(
            diagram_type=diagram_type,
            params=parse_parameters(diagram_type.value, data.get("params", {}), check_ranges=False),
            width=data.get("width"),
            height=data.get("height"),
        )


@dataclass
class RenderedDiagram:
    """PNG bytes plus the result record they were drawn from."""
    png: bytes
    result: DiagramResult
    width: int = 0
    height: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)


class DiagramGenerator:
    """
    Draws economics diagrams.

    Usage:
        generator = DiagramGenerator()
        spec = DiagramSpec(DiagramType.SUPPLY_DEMAND)
        rendered = generator.generate(spec)
        rendered.png, rendered.result["equilibrium"]
    """

    def __init__(self, style: Optional[StyleConfig] = None):
        self.style = style or load_config()

    def draw(self, spec: DiagramSpec, surface: DrawingSurface) -> DiagramResult:
        """Paint `spec` onto any surface and return the computed result."""
        diagram = get_diagram(spec.diagram_type)
        ctx = RenderContext.create(surface, self.style)
        return diagram.draw(ctx, spec.params)

    def compute(self, spec: DiagramSpec) -> DiagramResult:
        """Result record only; draws into a RecordingSurface."""
        width, height = self._size(spec)
        return self.draw(spec, RecordingSurface(width, height))

    def generate(self, spec: DiagramSpec) -> RenderedDiagram:
        width, height = self._size(spec)
        surface = MatplotlibSurface(
            width, height,
            dpi=self.style.graph.dpi,
            background=self.style.colors.background,
            font_family=self.style.font_family,
        )
        with surface:
            result = self.draw(spec, surface)
            png = surface.export_png()
        logger.debug("Rendered %s at %dx%d (%d bytes)",
                     spec.diagram_type.value, width, height, len(png))
        return RenderedDiagram(png=png, result=result, width=width, height=height,
                               metadata={"title": get_diagram(spec.diagram_type).title})

    def generate_to_file(self, spec: DiagramSpec, path: Union[str, Path]) -> Path:
        """Generate diagram and save the PNG to file."""
        path = Path(path)
        path.write_bytes(self.generate(spec).png)
        return path

    def _size(self, spec: DiagramSpec):
        graph = self.style.graph
        return spec.width or graph.width, spec.height or graph.height


# =============================================================================
# SAMPLE OUTPUT
# =============================================================================

if __name__ == "__main__":
    out_dir = Path(__file__).parent.parent / "artifacts" / "diagram_samples"
    out_dir.mkdir(parents=True, exist_ok=True)

    generator = DiagramGenerator()
    samples = [
        ("supply_demand", DiagramSpec(DiagramType.SUPPLY_DEMAND)),
        ("subsidy_tariff", DiagramSpec(
            DiagramType.SUBSIDY_TARIFF,
            parse_parameters("subsidy-tariff", {"subsidyAmount": 30, "tariffAmount": 30}),
        )),
        ("elasticity", DiagramSpec(DiagramType.ELASTICITY)),
        ("monopoly", DiagramSpec(DiagramType.MONOPOLY)),
        ("tax_incidence", DiagramSpec(
            DiagramType.TAX_INCIDENCE,
            parse_parameters("tax-incidence", {"taxAmount": 40}),
        )),
    ]

    print("Generating sample diagrams...")
    for name, spec in samples:
        path = generator.generate_to_file(spec, out_dir / f"{name}.png")
        print(f"  Created: {path}")
