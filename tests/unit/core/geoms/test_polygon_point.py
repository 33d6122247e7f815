"""Unit tests for the polygon and point geoms."""

from unittest.mock import patch

import polars as pl

from geomancer.core.construction import construct
from geomancer.core.enums import Units
from geomancer.core.geoms import PointGeom, PolygonGeom
from geomancer.core.models import RenderContext
from geomancer.infra.settings import RenderSettings


class TestPolygonGeom:
    """Test suite for PolygonGeom."""

    def test_munch_includes_closing_edge(self) -> None:
        """Test the edge back to the first vertex is subdivided too."""
        geom = PolygonGeom()
        variant = construct("polygon", {})
        data = pl.DataFrame({"x": [0.0, 2.0, 0.0], "y": [0.0, 0.0, 2.0], "group": [1, 1, 1]})

        with patch("geomancer.core.geoms.polygon.get_settings", return_value=RenderSettings(munch_pieces=2)):
            munched_variant, munched = geom.munch(variant, data)

        assert munched_variant == variant
        assert munched["x"].to_list() == [0.0, 1.0, 2.0, 1.0, 0.0, 0.0]
        assert munched["y"].to_list() == [0.0, 0.0, 0.0, 1.0, 2.0, 1.0]

    def test_to_primitive(self) -> None:
        """Test polygons are drawn as closed, filled lines per group."""
        geom = PolygonGeom()
        variant = construct("polygon", {"aesthetics": {"fill": "red"}})
        data = geom.resolve_data(variant, pl.DataFrame({"x": [0, 1, 0], "y": [0, 0, 1], "group": [1, 1, 1]}))

        chart_dict = geom.to_primitive(variant, data, RenderContext()).to_dict()

        assert chart_dict["mark"]["type"] == "line"
        assert chart_dict["mark"]["interpolate"] == "linear-closed"
        assert chart_dict["mark"]["filled"] is True
        assert chart_dict["encoding"]["fill"]["field"] == "fill"
        assert data["fill"].to_list() == ["red"] * 3


class TestPointGeom:
    """Test suite for PointGeom."""

    def test_defaults(self) -> None:
        """Test point defaults."""
        geom = PointGeom()
        resolved = geom.resolve_data(construct("point", {}), pl.DataFrame({"x": [1], "y": [1], "group": [1]}))
        assert resolved["shape"].to_list() == ["circle"]
        assert resolved["size"].to_list() == [1.5]

    def test_munch_is_identity(self) -> None:
        """Test points are never munched."""
        geom = PointGeom()
        variant = construct("point", {})
        data = pl.DataFrame({"x": [1.0], "y": [1.0], "group": [1]})

        munched_variant, munched = geom.munch(variant, data)

        assert munched_variant is variant
        assert munched is data

    def test_npc_context_fixes_domain(self) -> None:
        """Test unit-square units fix both scale domains."""
        geom = PointGeom()
        variant = construct("point", {})
        data = geom.resolve_data(variant, pl.DataFrame({"x": [0.5], "y": [0.5], "group": [1]}))

        chart_dict = geom.to_primitive(variant, data, RenderContext(units=Units.NPC)).to_dict()

        assert chart_dict["mark"]["type"] == "point"
        assert chart_dict["encoding"]["x"]["scale"]["domain"] == [0, 1]
        assert chart_dict["encoding"]["y"]["scale"]["domain"] == [0, 1]
