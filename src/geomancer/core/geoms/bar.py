"""Bar geom: rectangles standing on the x axis."""

import polars as pl

from geomancer.core.enums import AdjustID, StatID
from geomancer.core.models import BarParams, Variant

from .base import GeomSpec
from .rect import RectGeom


def resolution(values: pl.Series) -> float:
    """Smallest gap between distinct values, or 1 when there is none."""
    gaps = values.drop_nulls().unique().sort().diff().drop_nulls()
    gaps = gaps.filter(gaps > 0)
    return float(gaps.min()) if gaps.len() else 1.0  # type: ignore[arg-type]


class BarGeom(RectGeom):
    """Bars centred on x, reaching from zero to y."""

    def _get_spec(self) -> GeomSpec:
        return GeomSpec(
            kind=("bar", "rect"),
            name="Bar",
            aesthetics=["x", "y", "width", "weight", "colour", "fill", "size", "linetype", "alpha"],
            required_aesthetics=["x", "y"],
            default_aesthetics={
                "colour": "transparent",
                "fill": "#595959",
                "size": 0.5,
                "linetype": "solid",
                "alpha": 1.0,
                "weight": 1,
            },
            params_model=BarParams,
        )

    def related_stat(self, variant: Variant) -> StatID:  # noqa: ARG002
        return StatID.COUNT

    def related_adjust(self, variant: Variant) -> AdjustID:  # noqa: ARG002
        return AdjustID.STACK

    def reparameterize(self, variant: Variant, data: pl.DataFrame) -> pl.DataFrame:
        """Turn x, y and width into rectangle extents anchored at zero."""
        if "width" not in data.columns:
            width = variant.param("width", BarParams.model_fields["width"].default)
            data = data.with_columns(pl.lit(width * resolution(data["x"])).alias("width"))

        anchored = data.with_columns(
            pl.min_horizontal(pl.col("y"), pl.lit(0)).alias("ymin"),
            pl.max_horizontal(pl.col("y"), pl.lit(0)).alias("ymax"),
        )
        return super().reparameterize(variant, anchored)

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        return pl.DataFrame({"x": [0.2, 0.5, 0.8], "y": [0.6, 0.9, 0.4]})
