"""
session.py

The one piece of UI state: which diagram is selected, the current slider
values, and the last generated graph. Exports always work off the last
generated graph, never off values that were changed afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from diagrams import DiagramType
from formatting.diagram_generator import DiagramGenerator, DiagramSpec, RenderedDiagram
from formatting.exporters import build_embed_code, result_to_csv
from formatting.pdf_builder import PdfBuilder
from schemas.parameters import DiagramParameters, default_parameters, parse_parameters

logger = logging.getLogger(__name__)


def _differs(posted: Any, current: Optional[float]) -> bool:
    try:
        return float(posted) != current
    except (TypeError, ValueError):
        # Let parse_parameters report the bad value
        return True


class NoGraphError(RuntimeError):
    """An export was requested before any graph was generated."""

    def __init__(self, message: str = "Please generate a graph first."):
        super().__init__(message)


class GraphSession:
    def __init__(
        self,
        generator: Optional[DiagramGenerator] = None,
        diagram_type: Union[DiagramType, str] = DiagramType.SUPPLY_DEMAND,
    ):
        self.generator = generator or DiagramGenerator()
        self.diagram_type = DiagramType(diagram_type)
        self.parameters: DiagramParameters = default_parameters(self.diagram_type.value)
        self.last: Optional[RenderedDiagram] = None

    # ------------------------------------------------------------------ #
    # Input
    # ------------------------------------------------------------------ #

    def select(self, diagram_type: Union[DiagramType, str]) -> RenderedDiagram:
        """Switch diagram type, start from its defaults and draw it."""
        self.diagram_type = DiagramType(diagram_type)
        logger.debug("Selected %s", self.diagram_type.value)
        return self.reset()

    def reset(self) -> RenderedDiagram:
        self.parameters = default_parameters(self.diagram_type.value)
        return self.generate()

    def update(self, values: Mapping[str, Any]) -> DiagramParameters:
        """
        Apply form values on top of the current record. Range-checked; the
        record is left untouched if any value is rejected.

        The form posts every slider, so a moved Es/Ed ratio is detected by
        comparing it with the current record; the supply slope is then
        derived from the ratio instead of taken from the form.
        """
        current = self.parameters.to_record()
        merged: Dict[str, Any] = {key: value for key, value in current.items() if key not in values}
        merged.update(values)
        if "elasticityRatio" in values and _differs(values["elasticityRatio"], current.get("elasticityRatio")):
            merged.pop("supplySlope", None)
        self.parameters = parse_parameters(self.diagram_type.value, merged)
        return self.parameters

    def generate(self) -> RenderedDiagram:
        spec = DiagramSpec(self.diagram_type, self.parameters)
        self.last = self.generator.generate(spec)
        return self.last

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #

    def _require_graph(self) -> RenderedDiagram:
        if self.last is None:
            raise NoGraphError()
        return self.last

    def export_png(self) -> bytes:
        return self._require_graph().png

    def export_csv(self) -> str:
        return result_to_csv(self._require_graph().result)

    def export_embed(self) -> str:
        rendered = self._require_graph()
        return build_embed_code(rendered.png, rendered.result)

    def export_pdf(self) -> bytes:
        return PdfBuilder().build_bytes(self._require_graph())
