from __future__ import annotations

import io
import json
from pathlib import Path
import sys
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, render_template, request, send_file

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from core.config import SLIDER_RANGES, load_config
from diagrams import DIAGRAMS, DiagramType
from formatting.diagram_generator import DiagramGenerator
from formatting.exporters import CSV_FILENAME, PDF_FILENAME, PNG_FILENAME, png_data_url
from formatting.renderers import format_value
from schemas.parameters import ParameterError
from web.session import GraphSession, NoGraphError

style = load_config()
session = GraphSession(DiagramGenerator(style))
app = Flask(__name__)


def get_diagram_choices():
    """
    [(key, title), ...] in menu order, for the diagram type selector.
    """
    return [(diagram_type.value, model.title) for diagram_type, model in DIAGRAMS.items()]


def build_page_context(error: Optional[str] = None) -> Dict[str, Any]:
    key = session.diagram_type.value
    model = DIAGRAMS[session.diagram_type]
    record = session.parameters.to_record()
    sliders = [
        {
            "name": name,
            "label": slider.label,
            "min": slider.min,
            "max": slider.max,
            "step": slider.step,
            "value": format_value(record[name]),
        }
        for name, slider in SLIDER_RANGES[key].items()
    ]
    rendered = session.last
    return {
        "choices": get_diagram_choices(),
        "selected": key,
        "title": model.title,
        "explanation": model.explanation,
        "sliders": sliders,
        "image_url": png_data_url(rendered.png) if rendered else None,
        "rows": [(name, format_value(value)) for name, value in rendered.result.rows()] if rendered else [],
        "error": error,
    }


@app.route("/", methods=["GET"])
def index():
    if session.last is None:
        session.generate()
    return render_template("index.html", **build_page_context())


@app.route("/select", methods=["POST"])
def select():
    diagram_key = request.form.get("diagram_type", "")
    try:
        session.select(DiagramType(diagram_key))
    except ValueError:
        return render_template("index.html", **build_page_context(f"Unknown diagram type: {diagram_key}")), 400
    return render_template("index.html", **build_page_context())


@app.route("/generate", methods=["POST"])
def generate():
    values = {key: value for key, value in request.form.items() if key != "diagram_type"}
    try:
        session.update(values)
    except ParameterError as exc:
        app.logger.info("Rejected parameters for %s: %s", session.diagram_type.value, exc)
        return render_template("index.html", **build_page_context(str(exc))), 400
    session.generate()
    return render_template("index.html", **build_page_context())


@app.route("/reset", methods=["POST"])
def reset():
    session.reset()
    return render_template("index.html", **build_page_context())


@app.route("/export/<kind>", methods=["GET"])
def export(kind: str):
    try:
        if kind == "png":
            return send_file(io.BytesIO(session.export_png()), mimetype="image/png",
                             as_attachment=True, download_name=PNG_FILENAME)
        if kind == "csv":
            return Response(session.export_csv(), mimetype="text/csv",
                            headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"})
        if kind == "embed":
            return Response(session.export_embed(), mimetype="text/plain")
        if kind == "pdf":
            return send_file(io.BytesIO(session.export_pdf()), mimetype="application/pdf",
                             as_attachment=True, download_name=PDF_FILENAME)
    except NoGraphError as exc:
        return Response(str(exc), status=409, mimetype="text/plain")
    except OSError as exc:
        app.logger.warning("Export %s failed: %s", kind, exc)
        return Response(f"Export failed: {exc}", status=500, mimetype="text/plain")
    return Response(f"Unknown export format: {kind}", status=404, mimetype="text/plain")


@app.route("/api/diagrams", methods=["GET"])
def list_diagrams():
    return jsonify([
        {
            "key": diagram_type.value,
            "title": model.title,
            "parameters": {
                name: slider.model_dump()
                for name, slider in SLIDER_RANGES[diagram_type.value].items()
            },
        }
        for diagram_type, model in DIAGRAMS.items()
    ])


@app.route("/api/result", methods=["GET"])
def last_result():
    if session.last is None:
        return Response(str(NoGraphError()), status=409, mimetype="text/plain")
    # NaN/Infinity from degenerate inputs stay as JavaScript literals
    return Response(json.dumps(session.last.result.to_dict()), mimetype="application/json")


if __name__ == "__main__":
    # One request at a time: every draw finishes before the next event
    app.run(debug=True, port=5000, threaded=False)
