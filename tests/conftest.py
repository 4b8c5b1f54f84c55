import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.config import load_config  # noqa: E402
from formatting.renderers import RenderContext  # noqa: E402
from formatting.surface import RecordingSurface  # noqa: E402


@pytest.fixture
def style(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ECON_GRAPH_WIDTH", raising=False)
    monkeypatch.delenv("ECON_GRAPH_HEIGHT", raising=False)
    return load_config()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface(800, 500)


@pytest.fixture
def ctx(surface, style) -> RenderContext:
    return RenderContext.create(surface, style)
