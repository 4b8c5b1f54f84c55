"""Command-line interface for rendering diagrams without the web UI."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from core.config import SLIDER_RANGES, load_config
from diagrams import DIAGRAMS, DiagramType
from formatting.diagram_generator import DiagramGenerator, DiagramSpec
from formatting.exporters import CSV_FILENAME, PDF_FILENAME, PNG_FILENAME
from schemas.parameters import ParameterError, parse_parameters
from tools.export_tools import EMBED_FILENAME, EXPORTERS

__all__ = ["main"]

logger = logging.getLogger(__name__)


def _parse_assignments(pairs: List[str]) -> Dict[str, str]:
    """Turn ``["taxAmount=40", ...]`` into a dict. Values stay strings."""
    values: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ParameterError(f"Expected key=value, got {pair!r}")
        values[name.strip()] = value.strip()
    return values


def _parse_cli(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render microeconomics diagrams")
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List diagram types and their parameters")

    render = sub.add_parser("render", help="Render one diagram")
    render.add_argument("diagram_type", choices=[t.value for t in DiagramType])
    render.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a parameter, e.g. --set taxAmount=40 (repeatable)",
    )
    render.add_argument("--out-dir", default=".", help="Directory for exported files")
    render.add_argument("--png", action="store_true", help=f"Write {PNG_FILENAME}")
    render.add_argument("--csv", action="store_true", help=f"Write {CSV_FILENAME}")
    render.add_argument("--embed", action="store_true", help=f"Write {EMBED_FILENAME}")
    render.add_argument("--pdf", action="store_true", help=f"Write {PDF_FILENAME}")
    render.add_argument("--width", type=int, help="Canvas width in pixels")
    render.add_argument("--height", type=int, help="Canvas height in pixels")
    render.add_argument(
        "--no-range-check",
        action="store_true",
        help="Accept values outside the slider ranges",
    )
    return parser.parse_args(argv)


def _list_diagrams() -> None:
    for diagram_type, model in DIAGRAMS.items():
        print(f"{diagram_type.value}: {model.title}")
        for name, slider in SLIDER_RANGES[diagram_type.value].items():
            print(f"  {name} [{slider.min:g} .. {slider.max:g}, step {slider.step:g}]")


def _render(ns: argparse.Namespace) -> int:
    try:
        params = parse_parameters(
            ns.diagram_type,
            _parse_assignments(ns.assignments),
            check_ranges=not ns.no_range_check,
        )
    except ParameterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    generator = DiagramGenerator(load_config())
    spec = DiagramSpec(DiagramType(ns.diagram_type), params, width=ns.width, height=ns.height)

    wanted = [kind for kind in ("png", "csv", "embed", "pdf") if getattr(ns, kind)]
    if not wanted:
        # Result record only, no picture
        result = generator.compute(spec)
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    rendered = generator.generate(spec)
    out_dir = Path(ns.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    status = 0
    for kind in wanted:
        writer, filename = EXPORTERS[kind]
        try:
            path = writer(rendered, out_dir / filename)
        except OSError as exc:
            logger.warning("Could not write %s: %s", kind, exc)
            status = 1
            continue
        print(f"Wrote {path}")
    print(json.dumps(rendered.result.to_dict(), indent=2))
    return status


def main(argv: Optional[List[str]] = None) -> int:
    ns = _parse_cli(argv)
    logging.basicConfig(level=getattr(logging, ns.log_level), format=logging.BASIC_FORMAT)

    if ns.command == "list":
        _list_diagrams()
        return 0
    return _render(ns)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
