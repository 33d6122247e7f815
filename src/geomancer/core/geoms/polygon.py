"""Polygon geom: filled shapes, one per group."""

import altair as alt
import polars as pl

from geomancer.core.models import RenderContext, Variant
from geomancer.infra.settings import get_settings
from geomancer.processing.munching import subdivide

from .base import BaseGeom, GeomSpec

# Vertex order inside each group is kept by ``detail`` plus ``order``.
_ROW = "_row"


class PolygonGeom(BaseGeom):
    """Closed, filled polygon through the rows of each group."""

    def _get_spec(self) -> GeomSpec:
        return GeomSpec(
            kind=("polygon",),
            name="Polygon",
            aesthetics=["x", "y", "colour", "fill", "size", "linetype", "alpha"],
            required_aesthetics=["x", "y"],
            default_aesthetics={
                "colour": "transparent",
                "fill": "#333333",
                "size": 0.5,
                "linetype": "solid",
                "alpha": 1.0,
            },
        )

    def munch(self, variant: Variant, data: pl.DataFrame) -> tuple[Variant, pl.DataFrame]:
        """Cut every edge, including the closing one, into short pieces."""
        return variant, subdivide(data, get_settings().munch_pieces, closed=True)

    def to_primitive(
        self,
        variant: Variant,  # noqa: ARG002
        data: pl.DataFrame,
        context: RenderContext,
    ) -> alt.Chart:
        """Build a closed area per group, filled with the ``fill`` aesthetic."""
        prepared = self.with_stroke_width(data).with_row_index(_ROW)
        scale = self.position_scale(context)

        encodings = {
            "x": alt.X("x:Q", scale=scale, title=None),
            "y": alt.Y("y:Q", scale=scale, title=None),
            "detail": alt.Detail("group:N"),
            "order": alt.Order(f"{_ROW}:Q"),
            "fill": alt.Fill("fill:N", scale=None),
            "stroke": alt.Stroke("colour:N", scale=None),
            "opacity": alt.Opacity("alpha:Q", scale=None),
            "strokeWidth": alt.StrokeWidth("_stroke_width:Q", scale=None),
        }
        chart = (
            alt.Chart(self.prepare_data_for_altair(prepared))
            .mark_line(interpolate="linear-closed", filled=True)
            .encode(**encodings)
            .properties(width=context.width, height=context.height)
        )
        return chart  # type: ignore[no-any-return]  # noqa: RET504 — Altair type inference

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        return pl.DataFrame(
            {
                "x": [0.1, 0.4, 0.9, 0.7, 0.2],
                "y": [0.2, 0.1, 0.5, 0.9, 0.7],
                "group": [1] * 5,
            }
        )
