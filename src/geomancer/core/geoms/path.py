"""Path geom: connects observations in the order they appear in the data."""

from typing import Any

import altair as alt
import polars as pl

from geomancer.core.enums import ArrowEnds
from geomancer.core.models import PathParams, RenderContext, Variant
from geomancer.infra.settings import get_settings
from geomancer.processing.munching import subdivide

from .base import BaseGeom, GeomSpec

_ROW = "_row"


class PathGeom(BaseGeom):
    """Free-form path through the data, one line per group."""

    def _get_spec(self) -> GeomSpec:
        return GeomSpec(
            kind=("path",),
            name="Path",
            aesthetics=["x", "y", "colour", "size", "linetype", "alpha"],
            required_aesthetics=["x", "y"],
            default_aesthetics={"colour": "black", "size": 0.5, "linetype": "solid", "alpha": 1.0},
            params_model=PathParams,
        )

    def munch(self, variant: Variant, data: pl.DataFrame) -> tuple[Variant, pl.DataFrame]:
        """Cut every segment into short pieces."""
        return variant, subdivide(data, get_settings().munch_pieces)

    def to_primitive(
        self,
        variant: Variant,
        data: pl.DataFrame,
        context: RenderContext,
    ) -> alt.Chart | alt.LayerChart:
        """Build a line mark per group, keeping the row order of the data.

        Args:
            variant: Geom configuration
            data: Resolved dataset
            context: Drawing context

        Returns:
            Altair line chart, layered with arrow heads when an arrow is set
        """
        params = PathParams.model_validate(variant.params)
        prepared = self.with_stroke_width(data).with_row_index(_ROW)
        scale = self.position_scale(context)

        chart = alt.Chart(self.prepare_data_for_altair(prepared)).mark_line(
            strokeCap=params.lineend.value,
            strokeJoin="miter" if params.linejoin.value == "mitre" else params.linejoin.value,
            strokeMiterLimit=params.linemitre,
        )

        encodings: dict[str, Any] = {
            "x": alt.X("x:Q", scale=scale, title=None),
            "y": alt.Y("y:Q", scale=scale, title=None),
            "detail": alt.Detail("group:N"),
            "order": alt.Order(f"{_ROW}:Q"),
        }
        encodings.update(self.stroke_encodings(prepared))
        chart = chart.encode(**encodings).properties(width=context.width, height=context.height)

        if params.arrow is None or prepared.height == 0:
            return chart  # type: ignore[no-any-return]

        heads = self._arrow_heads(prepared, params.arrow.ends)
        arrow_chart = (
            alt.Chart(self.prepare_data_for_altair(heads))
            .mark_point(
                shape="triangle",
                filled=params.arrow.type == "closed",
                size=params.arrow.length**2,
            )
            .encode(
                x=alt.X("x:Q", scale=scale, title=None),
                y=alt.Y("y:Q", scale=scale, title=None),
                color=alt.Color("colour:N", scale=None),
            )
        )
        return alt.layer(chart, arrow_chart)

    def _arrow_heads(self, data: pl.DataFrame, ends: ArrowEnds) -> pl.DataFrame:
        """Rows at the path ends that carry an arrow head."""
        grouped = data.group_by("group", maintain_order=True)
        if ends == ArrowEnds.FIRST:
            return grouped.first()
        if ends == ArrowEnds.LAST:
            return grouped.last()
        return pl.concat([grouped.first(), grouped.last()])

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        return pl.DataFrame(
            {
                "x": [0.1, 0.5, 0.3, 0.8, 0.6, 0.9],
                "y": [0.2, 0.1, 0.6, 0.4, 0.9, 0.7],
                "group": [1] * 6,
            }
        )
