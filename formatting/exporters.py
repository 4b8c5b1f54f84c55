"""
exporters.py

Serializers for a finished diagram: the two-column parameter CSV and the
HTML embed snippet (inline PNG plus a hidden JSON copy of the record).
"""

from __future__ import annotations

import base64
import csv
import html
import io
import json
import re
from typing import Tuple

from diagrams import DiagramResult, DiagramType
from formatting.renderers import format_value
from schemas.parameters import PARAMETER_MODELS, DiagramParameters

PNG_FILENAME = "economic-graph.png"
CSV_FILENAME = "economic_graph_data.csv"
PDF_FILENAME = "economic-graph.pdf"

_PAYLOAD_RE = re.compile(r'<div class="graph-data" style="display:none;">(.*?)</div>', re.DOTALL)


def result_to_csv(result: DiagramResult) -> str:
    """`Parameter,Value` header, then one row per flattened scalar."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Parameter", "Value"])
    for name, value in result.rows():
        writer.writerow([name, format_value(value)])
    return buf.getvalue()


def png_data_url(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def build_embed_code(png: bytes, result: DiagramResult) -> str:
    """
    HTML snippet with the image inline and the full record as hidden JSON,
    so the same parameters can be loaded back later.
    """
    payload = html.escape(json.dumps(result.to_dict()), quote=False)
    return (
        '<div class="economic-graph-embed">\n'
        f'  <img src="{png_data_url(png)}" alt="Economic Graph" style="max-width: 100%; height: auto;" />\n'
        f'  <div class="graph-data" style="display:none;">{payload}</div>\n'
        '</div>'
    )


def parse_embed_payload(snippet: str) -> Tuple[DiagramType, DiagramParameters]:
    """Recover the diagram type and parameter record from an embed snippet."""
    match = _PAYLOAD_RE.search(snippet)
    if match is None:
        raise ValueError("No graph data found in embed snippet")
    data = json.loads(html.unescape(match.group(1)))
    diagram_type = DiagramType(data["diagramType"])
    params = PARAMETER_MODELS[diagram_type.value].model_validate(data["parameters"])
    return diagram_type, params
