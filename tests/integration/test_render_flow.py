"""Integration tests for geoms flowing through the rendering pipeline."""

import polars as pl
import pytest

import geomancer
from geomancer import (
    PolarCoord,
    deconstruct,
    from_constructor,
    geom_bar,
    geom_line,
    geom_path,
    geom_polygon,
    geom_rect,
)
from geomancer.infra.settings import RenderSettings
from geomancer.orchestration import GeomRenderer


@pytest.fixture
def renderer() -> GeomRenderer:
    """Create a renderer with fixed settings."""
    return GeomRenderer(settings=RenderSettings(_env_file=None))


class TestRenderFlow:
    """End-to-end rendering of the built-in geoms."""

    def test_line_orders_points_by_x(self, renderer: GeomRenderer) -> None:
        """Test a line draws its points in ascending x order."""
        data = pl.DataFrame({"x": [3, 1], "y": [1, 2], "group": [1, 1]})

        grob = renderer.render(geom_line(), data)

        assert grob.data["x"].to_list() == [1, 3]
        assert grob.data["y"].to_list() == [2, 1]
        assert grob.name == "geom_line.1"

    def test_path_keeps_data_order(self, renderer: GeomRenderer) -> None:
        """Test a path draws its points as given."""
        data = pl.DataFrame({"x": [3, 1], "y": [1, 2], "group": [1, 1]})

        grob = renderer.render(geom_path(), data)

        assert grob.data["x"].to_list() == [3, 1]

    def test_bar_in_cartesian(self, renderer: GeomRenderer) -> None:
        """Test bars stand on zero and are as wide as configured."""
        data = pl.DataFrame({"x": [1.0, 2.0, 3.0], "y": [2.0, -1.0, 4.0]})

        grob = renderer.render(geom_bar(width=0.5), data)
        spec = grob.chart.to_dict()

        assert grob.data["ymin"].to_list() == [0.0, -1.0, 0.0]
        assert grob.data["ymax"].to_list() == [2.0, 0.0, 4.0]
        assert grob.data["xmin"].to_list() == [0.75, 1.75, 2.75]
        assert spec["mark"]["type"] == "rect"
        assert spec["name"] == "geom_bar.1"

    def test_bar_in_polar(self, renderer: GeomRenderer) -> None:
        """Test bars become polygons in polar coordinates."""
        data = pl.DataFrame({"x": [1.0, 2.0], "y": [2.0, 3.0]})

        grob = renderer.render_in(PolarCoord(), geom_bar(aesthetics={"fill": "steelblue"}), data)

        assert grob.name == "geom_polygon.1"
        assert grob.data["group"].unique().sort().to_list() == [1, 2]
        assert set(grob.data["fill"].to_list()) == {"steelblue"}

    def test_rect_from_centres(self, renderer: GeomRenderer) -> None:
        """Test rectangles given by centre and size."""
        data = pl.DataFrame({"x": [1.0], "y": [1.0], "width": [2.0], "height": [4.0]})

        grob = renderer.render(geom_rect(), data)

        assert grob.data.select("xmin", "xmax", "ymin", "ymax").row(0) == (0.0, 2.0, -1.0, 3.0)

    def test_polygon_outline(self, renderer: GeomRenderer) -> None:
        """Test a polygon keeps one group per outline."""
        data = pl.DataFrame({"x": [0.0, 1.0, 0.5], "y": [0.0, 0.0, 1.0], "group": [1, 1, 1]})

        grob = renderer.render(geom_polygon(aesthetics={"colour": "black"}), data)

        assert grob.data["colour"].to_list() == ["black"] * 3
        assert grob.chart.to_dict()["mark"]["interpolate"] == "linear-closed"

    def test_round_trip_then_render(self, renderer: GeomRenderer) -> None:
        """Test a geom rebuilt from its text renders like the original."""
        original = geom_line(aesthetics={"colour": "red"}, linejoin="mitre", na_rm=True)
        rebuilt = from_constructor(deconstruct(original))
        data = pl.DataFrame({"x": [2.0, None, 1.0], "y": [1.0, 1.0, 2.0], "group": [1, 1, 1]})

        assert rebuilt == original
        first = renderer.render(original, data)
        second = renderer.render(rebuilt, data)
        assert first.data.equals(second.data)
        assert first.data["colour"].to_list() == ["red", "red"]


class TestModuleLevel:
    """Test the shared renderer helpers."""

    def test_render_and_preview(self) -> None:
        """Test module-level helpers render with the built-in geoms."""
        grob = geomancer.render(geom_path(), pl.DataFrame({"x": [0.0, 1.0], "y": [0.0, 1.0]}))
        icon = geomancer.preview(geom_line())

        assert grob.name.startswith("geom_path.")
        assert icon.name.startswith("geom_line.")
        assert icon.data.height == 5
