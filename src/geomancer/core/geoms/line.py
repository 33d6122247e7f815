"""Line geom: connects observations in order of x."""

import polars as pl

from geomancer.core.models import PathParams, Variant

from .base import GeomSpec
from .path import PathGeom


class LineGeom(PathGeom):
    """Path whose points are connected in ascending x order within each group."""

    def _get_spec(self) -> GeomSpec:
        return GeomSpec(
            kind=("line", "path"),
            name="Line",
            aesthetics=["x", "y", "colour", "size", "linetype", "alpha"],
            required_aesthetics=["x", "y"],
            default_aesthetics={"colour": "black", "size": 0.5, "linetype": "solid", "alpha": 1.0},
            params_model=PathParams,
        )

    def resolve_data(self, variant: Variant, data: pl.DataFrame) -> pl.DataFrame:
        """Order rows by group and x, then resolve them as a path."""
        ordered = data.sort(["group", "x"], maintain_order=True) if "x" in data.columns else data
        return super().resolve_data(variant, ordered)

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        return pl.DataFrame(
            {
                "x": [0.0, 0.25, 0.5, 0.75, 1.0],
                "y": [0.2, 0.7, 0.4, 0.8, 0.3],
                "group": [1] * 5,
            }
        )
