"""
Shared fixtures for converter tests.

Provides colors, stop lists, sample Figma nodes and an API client.
"""
import pytest

from engine import ConverterConfig, StyleMapper
from models.figma_types import BoundingBox, Color, ColorStop, FigmaNode, Paint, Vector


# ── Colors and stops ────────────────────────────────────────────────────

RED = Color(r=1.0, g=0.0, b=0.0, a=1.0)
BLUE = Color(r=0.0, g=0.0, b=1.0, a=1.0)

RED_CSS = "rgba(255,0,0,1)"
BLUE_CSS = "rgba(0,0,255,1)"


def vectors(*points):
    return [Vector(x=x, y=y) for x, y in points]


@pytest.fixture
def red():
    return RED


@pytest.fixture
def blue():
    return BLUE


@pytest.fixture
def two_stops():
    """Red at the start handle, blue at the end handle."""
    return [
        ColorStop(color=RED, position=0.0),
        ColorStop(color=BLUE, position=1.0),
    ]


@pytest.fixture
def rightward_handles():
    return vectors((0.0, 0.0), (1.0, 0.0))


@pytest.fixture
def centered_radial_handles():
    return vectors((0.5, 0.5), (1.0, 0.5), (0.5, 1.0))


# ── Nodes ───────────────────────────────────────────────────────────────

@pytest.fixture
def parent_box():
    return BoundingBox(x=100.0, y=200.0, width=400.0, height=300.0)


@pytest.fixture
def rectangle_node():
    return FigmaNode(
        id="1:2",
        name="Card",
        type="RECTANGLE",
        absoluteBoundingBox=BoundingBox(x=110.0, y=220.0, width=50.0, height=40.0),
        fills=[Paint(type="SOLID", color=RED)],
    )


@pytest.fixture
def linear_paint(two_stops, rightward_handles):
    return Paint(
        type="GRADIENT_LINEAR",
        gradientHandlePositions=rightward_handles + vectors((0.0, 1.0)),
        gradientStops=two_stops,
    )


@pytest.fixture
def mapper():
    return StyleMapper(ConverterConfig.default())


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
