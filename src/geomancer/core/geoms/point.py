"""Point geom: one mark per row."""

import math

import altair as alt
import polars as pl

from geomancer.core.models import RenderContext, Variant

from .base import PT, BaseGeom, GeomSpec


class PointGeom(BaseGeom):
    """Scatter of individual observations."""

    def _get_spec(self) -> GeomSpec:
        return GeomSpec(
            kind=("point",),
            name="Point",
            aesthetics=["x", "y", "colour", "size", "shape", "alpha"],
            required_aesthetics=["x", "y"],
            default_aesthetics={"colour": "black", "size": 1.5, "shape": "circle", "alpha": 1.0},
        )

    def to_primitive(
        self,
        variant: Variant,  # noqa: ARG002
        data: pl.DataFrame,
        context: RenderContext,
    ) -> alt.Chart:
        """Build a filled point mark per row, sized by area."""
        prepared = data.with_columns(((pl.col("size").cast(pl.Float64) * PT) ** 2 * math.pi / 4).alias("_area"))
        scale = self.position_scale(context)

        chart = (
            alt.Chart(self.prepare_data_for_altair(prepared))
            .mark_point(filled=True)
            .encode(
                x=alt.X("x:Q", scale=scale, title=None),
                y=alt.Y("y:Q", scale=scale, title=None),
                color=alt.Color("colour:N", scale=None),
                opacity=alt.Opacity("alpha:Q", scale=None),
                size=alt.Size("_area:Q", scale=None),
                shape=alt.Shape("shape:N", scale=None),
            )
            .properties(width=context.width, height=context.height)
        )
        return chart  # type: ignore[no-any-return]  # noqa: RET504 — Altair type inference

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        return pl.DataFrame({"x": [0.1, 0.3, 0.5, 0.7, 0.9], "y": [0.3, 0.8, 0.5, 0.9, 0.2]})
