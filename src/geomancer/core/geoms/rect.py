"""Rect geom: axis-aligned rectangles."""

from collections.abc import Set

import altair as alt
import polars as pl

from geomancer.core.enums import PipelineStage
from geomancer.core.errors import DataShapeError
from geomancer.core.models import RectParams, RenderContext, Variant
from geomancer.infra.settings import get_settings
from geomancer.processing.munching import subdivide

from .base import BaseGeom, GeomSpec

_RECT = "_rect"
_CORNER = "_corner"

# Corner order traces each rectangle as a ring.
_CORNERS = (("xmin", "ymin"), ("xmin", "ymax"), ("xmax", "ymax"), ("xmax", "ymin"))
_EXTENTS = ("xmin", "xmax", "ymin", "ymax", "width", "height")


class RectGeom(BaseGeom):
    """Rectangles given by their extents, or by a centre plus width and height."""

    def _get_spec(self) -> GeomSpec:
        return GeomSpec(
            kind=("rect",),
            name="Rectangle",
            aesthetics=[
                "x",
                "y",
                "width",
                "height",
                "xmin",
                "xmax",
                "ymin",
                "ymax",
                "colour",
                "fill",
                "size",
                "linetype",
                "alpha",
            ],
            required_aesthetics=[],
            default_aesthetics={
                "colour": "transparent",
                "fill": "#595959",
                "size": 0.5,
                "linetype": "solid",
                "alpha": 1.0,
            },
            params_model=RectParams,
        )

    def reparameterize(self, variant: Variant, data: pl.DataFrame) -> pl.DataFrame:  # noqa: ARG002
        """Derive min/max extents from centres and sizes, and centres from extents.

        Raises:
            DataShapeError: If an axis has neither extents nor a centre and size
        """
        derived: list[pl.Expr] = []
        missing: list[str] = []

        for axis, size in (("x", "width"), ("y", "height")):
            lower, upper = f"{axis}min", f"{axis}max"
            if lower in data.columns and upper in data.columns:
                continue
            if axis in data.columns and size in data.columns:
                half = pl.col(size) / 2
                derived.extend([(pl.col(axis) - half).alias(lower), (pl.col(axis) + half).alias(upper)])
            else:
                missing.extend([name for name in (lower, upper) if name not in data.columns])

        if missing:
            msg = f"Cannot place rectangles without {missing}"
            raise DataShapeError(
                msg,
                missing_columns=missing,
                available_columns=list(data.columns),
                stage=PipelineStage.REPARAMETERIZE,
            )

        reparameterized = data.with_columns(derived) if derived else data

        centres = [
            ((pl.col(f"{axis}min") + pl.col(f"{axis}max")) / 2).alias(axis)
            for axis in ("x", "y")
            if axis not in reparameterized.columns
        ]
        return reparameterized.with_columns(centres) if centres else reparameterized

    def munch(self, variant: Variant, data: pl.DataFrame) -> tuple[Variant, pl.DataFrame]:
        """Redraw the rectangles as polygons, one group per rectangle.

        Rectangles cannot be drawn once their edges are transformed, so the
        returned geom is a polygon carrying over the rect's fixed aesthetics.
        """
        from geomancer.core.construction import construct  # noqa: PLC0415 — Avoids a circular import
        from geomancer.core.geoms.registry import default_registry  # noqa: PLC0415 — Avoids a circular import

        recognised = default_registry().lookup("polygon").spec.aesthetics
        polygon_params: dict[str, object] = {"aesthetics": self._polygon_aesthetics(variant, recognised)}
        if "na_rm" in variant.params:
            polygon_params["na_rm"] = variant.params["na_rm"]
        polygon = construct("polygon", polygon_params)

        return polygon, subdivide(self.corners(data), get_settings().munch_pieces, closed=True)

    def corners(self, data: pl.DataFrame) -> pl.DataFrame:
        """Expand every rectangle into its four corners, grouped per rectangle."""
        indexed = data.with_row_index(_RECT, offset=1)
        rings = pl.concat(
            [
                indexed.with_columns(
                    pl.col(x).alias("x"),
                    pl.col(y).alias("y"),
                    pl.lit(position).alias(_CORNER),
                )
                for position, (x, y) in enumerate(_CORNERS)
            ]
        ).sort([_RECT, _CORNER])

        rings = rings.with_columns(pl.col(_RECT).cast(pl.Int64).alias("group"))
        return rings.drop([column for column in (*_EXTENTS, _RECT, _CORNER) if column in rings.columns])

    def _polygon_aesthetics(self, variant: Variant, recognised: Set[str]) -> dict[str, object]:
        # Positions come from the corners; aesthetics such as a bar's weight do not carry over.
        return {
            name: value
            for name, value in variant.aesthetics.items()
            if name in recognised and name not in {"x", "y", *_EXTENTS}
        }

    def to_primitive(
        self,
        variant: Variant,  # noqa: ARG002
        data: pl.DataFrame,
        context: RenderContext,
    ) -> alt.Chart:
        """Build a rect mark spanning each row's extents."""
        prepared = self.with_stroke_width(data)
        scale = self.position_scale(context)

        chart = (
            alt.Chart(self.prepare_data_for_altair(prepared))
            .mark_rect()
            .encode(
                x=alt.X("xmin:Q", scale=scale, title=None),
                x2=alt.X2("xmax"),
                y=alt.Y("ymin:Q", scale=scale, title=None),
                y2=alt.Y2("ymax"),
                fill=alt.Fill("fill:N", scale=None),
                stroke=alt.Stroke("colour:N", scale=None),
                opacity=alt.Opacity("alpha:Q", scale=None),
                strokeWidth=alt.StrokeWidth("_stroke_width:Q", scale=None),
            )
            .properties(width=context.width, height=context.height)
        )
        return chart  # type: ignore[no-any-return]  # noqa: RET504 — Altair type inference

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        return pl.DataFrame(
            {
                "xmin": [0.1, 0.5],
                "xmax": [0.6, 0.9],
                "ymin": [0.1, 0.4],
                "ymax": [0.5, 0.9],
            }
        )
