"""Unit tests for the path geom."""

from unittest.mock import patch

import altair as alt
import polars as pl
import pytest

from geomancer.core.construction import construct
from geomancer.core.errors import DataShapeError
from geomancer.core.geoms import PathGeom
from geomancer.core.models import RenderContext
from geomancer.infra.settings import RenderSettings


class TestPathGeom:
    """Test suite for PathGeom."""

    @pytest.fixture
    def geom(self) -> PathGeom:
        """Create path geom instance."""
        return PathGeom()

    def test_keeps_row_order(self, geom: PathGeom) -> None:
        """Test paths are drawn in data order."""
        data = pl.DataFrame({"x": [3, 1, 2], "y": [1, 2, 3], "group": [1, 1, 1]})

        resolved = geom.resolve_data(construct("path", {}), data)

        assert resolved["x"].to_list() == [3, 1, 2]

    def test_fixed_aesthetics_override_data(self, geom: PathGeom) -> None:
        """Test fixed aesthetics replace data columns."""
        data = pl.DataFrame({"x": [1, 2], "y": [1, 2], "colour": ["red", "blue"], "group": [1, 1]})

        resolved = geom.resolve_data(construct("path", {"aesthetics": {"colour": "green"}}), data)

        assert resolved["colour"].to_list() == ["green", "green"]

    def test_missing_positions_raise(self, geom: PathGeom) -> None:
        """Test x and y are required."""
        data = pl.DataFrame({"x": [1, 2], "group": [1, 1]})

        with pytest.raises(DataShapeError) as exc_info:
            geom.resolve_data(construct("path", {}), data)
        assert exc_info.value.missing_columns == ["y"]

    def test_rows_with_missing_values_dropped(self, geom: PathGeom) -> None:
        """Test incomplete rows are dropped with a warning."""
        data = pl.DataFrame({"x": [1, None, 3], "y": [1, 2, 3], "group": [1, 1, 1]})

        with patch("geomancer.core.geoms.base.logger") as mock_logger:
            resolved = geom.resolve_data(construct("path", {}), data)

        assert resolved["x"].to_list() == [1, 3]
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["removed"] == 1

    def test_na_rm_silences_warning(self, geom: PathGeom) -> None:
        """Test na_rm drops rows quietly."""
        data = pl.DataFrame({"x": [1, None, 3], "y": [1, 2, 3], "group": [1, 1, 1]})

        with patch("geomancer.core.geoms.base.logger") as mock_logger:
            resolved = geom.resolve_data(construct("path", {"na_rm": True}), data)

        assert resolved.height == 2
        mock_logger.warning.assert_not_called()

    def test_munch_subdivides_segments(self, geom: PathGeom) -> None:
        """Test munching cuts every segment into the configured number of pieces."""
        variant = construct("path", {})
        data = pl.DataFrame({"x": [0.0, 1.0], "y": [0.0, 2.0], "group": [1, 1]})

        with patch("geomancer.core.geoms.path.get_settings", return_value=RenderSettings(munch_pieces=4)):
            munched_variant, munched = geom.munch(variant, data)

        assert munched_variant == variant
        assert munched["x"].to_list() == [0.0, 0.25, 0.5, 0.75, 1.0]
        assert munched["y"].to_list() == [0.0, 0.5, 1.0, 1.5, 2.0]

    def test_reparameterize_is_identity(self, geom: PathGeom) -> None:
        """Test paths need no reparameterisation."""
        data = pl.DataFrame({"x": [1], "y": [2]})
        assert geom.reparameterize(construct("path", {}), data).equals(data)

    def test_style_parameters_reach_mark(self, geom: PathGeom) -> None:
        """Test line end, join and mitre are passed to the mark."""
        variant = construct("path", {"lineend": "square", "linejoin": "mitre", "linemitre": 4})
        data = geom.resolve_data(variant, pl.DataFrame({"x": [1, 2], "y": [1, 2], "group": [1, 1]}))

        mark = geom.to_primitive(variant, data, RenderContext()).to_dict()["mark"]

        assert mark["strokeCap"] == "square"
        assert mark["strokeJoin"] == "miter"
        assert mark["strokeMiterLimit"] == 4.0

    def test_arrow_layers_heads(self, geom: PathGeom) -> None:
        """Test an arrow adds a layer of heads at the path ends."""
        variant = construct("path", {"arrow": {"ends": "both"}})
        data = geom.resolve_data(
            variant,
            pl.DataFrame({"x": [1, 2, 3, 4], "y": [1, 2, 3, 4], "group": [1, 1, 2, 2]}),
        )

        chart = geom.to_primitive(variant, data, RenderContext())

        assert isinstance(chart, alt.LayerChart)
        heads = geom._arrow_heads(data, variant.params["arrow"]["ends"])
        assert heads["x"].to_list() == [1, 3, 2, 4]
