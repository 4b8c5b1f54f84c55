"""
export_tools.py

File writers around a rendered diagram: PNG, parameter CSV, HTML embed
snippet and the PDF handout. Each returns the path it wrote.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Union

from formatting.diagram_generator import RenderedDiagram
from formatting.exporters import (
    CSV_FILENAME,
    PDF_FILENAME,
    PNG_FILENAME,
    build_embed_code,
    result_to_csv,
)
from formatting.pdf_builder import PdfBuilder

logger = logging.getLogger(__name__)

EMBED_FILENAME = "economic-graph-embed.html"

PathLike = Union[str, Path]


def export_png(rendered: RenderedDiagram, output_path: PathLike) -> Path:
    path = Path(output_path)
    path.write_bytes(rendered.png)
    logger.info("Wrote PNG to %s", path)
    return path


def export_csv(rendered: RenderedDiagram, output_path: PathLike) -> Path:
    path = Path(output_path)
    path.write_text(result_to_csv(rendered.result), encoding="utf-8")
    logger.info("Wrote CSV to %s", path)
    return path


def export_embed(rendered: RenderedDiagram, output_path: PathLike) -> Path:
    path = Path(output_path)
    path.write_text(build_embed_code(rendered.png, rendered.result), encoding="utf-8")
    logger.info("Wrote embed snippet to %s", path)
    return path


def export_pdf(rendered: RenderedDiagram, output_path: PathLike) -> Path:
    path = PdfBuilder().build(rendered, output_path)
    logger.info("Wrote PDF handout to %s", path)
    return path


EXPORTERS = {
    "png": (export_png, PNG_FILENAME),
    "csv": (export_csv, CSV_FILENAME),
    "embed": (export_embed, EMBED_FILENAME),
    "pdf": (export_pdf, PDF_FILENAME),
}


def export_all(
    rendered: RenderedDiagram,
    output_dir: PathLike,
    kinds: Iterable[str] = ("png", "csv", "embed", "pdf"),
) -> Dict[str, Path]:
    """
    Write every requested format into `output_dir` under its default file
    name. A failed write is logged and skipped; the others still go out.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}
    for kind in kinds:
        writer, filename = EXPORTERS[kind]
        try:
            written[kind] = writer(rendered, output_dir / filename)
        except OSError as exc:
            logger.warning("Could not write %s export: %s", kind, exc)
    return written


if __name__ == "__main__":
    from diagrams import DiagramType
    from formatting.diagram_generator import DiagramGenerator, DiagramSpec

    rendered = DiagramGenerator().generate(DiagramSpec(DiagramType.TAX_INCIDENCE))
    for kind, path in export_all(rendered, "artifacts").items():
        print(f"Wrote {kind}: {path}")
