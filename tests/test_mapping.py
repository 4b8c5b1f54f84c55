import numpy as np
import pytest
from pydantic import ValidationError

from core.config import GraphSettings, load_config
from core.mapping import CoordinateMapper


def test_plot_corners() -> None:
    mapper = CoordinateMapper.from_settings(GraphSettings())
    assert mapper.to_pixel(0, 0) == (40, 460)
    assert mapper.to_pixel(200, 300) == (760, 40)


def test_x_increases_and_y_decreases() -> None:
    mapper = CoordinateMapper.from_settings(GraphSettings())
    xs = [mapper.to_pixel_x(q) for q in np.linspace(0, 200, 101)]
    ys = [mapper.to_pixel_y(p) for p in np.linspace(0, 300, 101)]
    assert all(b > a for a, b in zip(xs, xs[1:]))
    assert all(b < a for a, b in zip(ys, ys[1:]))


def test_values_outside_domain_map_outside_plot() -> None:
    mapper = CoordinateMapper.from_settings(GraphSettings())
    assert mapper.to_pixel_y(400) < mapper.top
    assert mapper.to_pixel_x(-10) < mapper.left


def test_padding_must_leave_plot_area() -> None:
    with pytest.raises(ValueError):
        GraphSettings(width=60, height=60, padding=40)


def test_env_resizes_canvas(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ECON_GRAPH_WIDTH", "1000")
    monkeypatch.setenv("ECON_GRAPH_HEIGHT", "600")
    style = load_config()
    assert (style.graph.width, style.graph.height) == (1000, 600)
    assert load_config(width=640).graph.width == 640


def test_malformed_env_names_the_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ECON_GRAPH_WIDTH", "abc")
    with pytest.raises(ValidationError, match="width"):
        load_config()


def test_defaults_without_env(style) -> None:
    assert (style.graph.width, style.graph.height) == (800, 500)
