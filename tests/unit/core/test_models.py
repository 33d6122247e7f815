"""Unit tests for pydantic models."""

import altair as alt
import polars as pl
import pytest
from pydantic import ValidationError

from geomancer.core.enums import ArrowEnds, LineEnd, LineJoin, Units
from geomancer.core.models import Arrow, BarParams, GeomGrob, PathParams, RenderContext, Variant


class TestVariant:
    """Test Variant model."""

    def test_aesthetics_from_params(self) -> None:
        """Test aesthetics are read from the params mapping."""
        variant = Variant(kind=("line", "path"), params={"aesthetics": {"colour": "red"}})
        assert variant.aesthetics == {"colour": "red"}
        assert Variant(kind=("line",)).aesthetics == {}

    def test_aesthetics_is_a_copy(self) -> None:
        """Test changing the returned mapping leaves the variant alone."""
        variant = Variant(kind=("line",), params={"aesthetics": {"colour": "red"}})
        variant.aesthetics["colour"] = "blue"
        assert variant.aesthetics == {"colour": "red"}

    def test_frozen(self) -> None:
        """Test variants cannot be reassigned."""
        variant = Variant(kind=("line",))
        with pytest.raises(ValidationError):
            variant.kind = ("path",)  # type: ignore[misc]

    def test_kind_required(self) -> None:
        """Test at least one kind tag is needed."""
        with pytest.raises(ValidationError):
            Variant(kind=())

    def test_equality(self) -> None:
        """Test variants compare by value."""
        assert Variant(kind=("line", "path"), params={"linejoin": "mitre"}) == Variant(
            kind=("line", "path"), params={"linejoin": "mitre"}
        )
        assert Variant(kind=("line",)) != Variant(kind=("path",))

    def test_param_default(self) -> None:
        """Test unsupplied parameters fall back to the given default."""
        variant = Variant(kind=("bar", "rect"), params={"width": 0.5})
        assert variant.param("width") == 0.5
        assert variant.param("na_rm", False) is False


class TestParams:
    """Test parameter models."""

    def test_path_defaults(self) -> None:
        """Test path parameter defaults."""
        params = PathParams()
        assert params.lineend == LineEnd.BUTT
        assert params.linejoin == LineJoin.ROUND
        assert params.linemitre == 1.0
        assert params.arrow is None
        assert params.na_rm is False

    def test_linemitre_lower_bound(self) -> None:
        """Test mitre limits below one are rejected."""
        with pytest.raises(ValidationError):
            PathParams(linemitre=0.5)

    def test_extra_forbidden(self) -> None:
        """Test unknown parameters are rejected."""
        with pytest.raises(ValidationError):
            PathParams.model_validate({"colour": "red"})

    def test_arrow_from_mapping(self) -> None:
        """Test arrows validate from plain mappings."""
        params = PathParams.model_validate({"arrow": {"ends": "both", "type": "closed"}})
        assert params.arrow == Arrow(ends=ArrowEnds.BOTH, type="closed")

    def test_bar_width_positive(self) -> None:
        """Test bar width must be positive."""
        assert BarParams().width == 0.9
        with pytest.raises(ValidationError):
            BarParams(width=0)

    def test_only_supplied_fields_dumped(self) -> None:
        """Test unset fields are left out of the dump."""
        params = PathParams.model_validate({"linejoin": "mitre"})
        assert params.model_dump(mode="json", exclude_unset=True) == {"linejoin": "mitre"}


class TestRenderContext:
    """Test RenderContext model."""

    def test_defaults(self) -> None:
        """Test default context."""
        context = RenderContext()
        assert context.units == Units.NATIVE
        assert context.width == 400
        assert context.height == 300

    def test_size_positive(self) -> None:
        """Test sizes must be positive."""
        with pytest.raises(ValidationError):
            RenderContext(width=0)


class TestGeomGrob:
    """Test GeomGrob model."""

    def test_holds_chart_and_data(self) -> None:
        """Test grob keeps chart and data."""
        data = pl.DataFrame({"x": [1.0], "y": [2.0]})
        chart = alt.Chart({"values": data.to_dicts()}).mark_point()
        grob = GeomGrob(name="geom_point.1", kind=("point",), chart=chart, data=data)
        assert grob.name == "geom_point.1"
        assert grob.data.equals(data)
        assert "data" not in grob.model_dump()

    def test_rejects_non_chart(self) -> None:
        """Test chart must be an altair chart."""
        with pytest.raises(ValidationError):
            GeomGrob(name="g", kind=("point",), chart="not a chart", data=pl.DataFrame())
