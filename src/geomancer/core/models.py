"""Pydantic models for geomancer data structures."""

from typing import Any, Literal

import altair as alt
import polars as pl
from pydantic import BaseModel, ConfigDict, Field

from .enums import ArrowEnds, LineEnd, LineJoin, Units


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    reason: str | None = Field(default=None, description="Detailed reason for the error")
    suggestion: str | None = Field(default=None, description="Suggested correction")


class Variant(BaseModel):
    """A configured geom: kind tags plus the parameters the caller supplied.

    ``kind`` lists the geom's kind followed by the kinds it falls back to, most
    specific first, e.g. ``("line", "path")``. Variants are frozen; a stage that
    needs a different geom builds a new Variant.
    """

    model_config = ConfigDict(frozen=True)

    kind: tuple[str, ...] = Field(..., min_length=1, description="Kind tags, most specific first")
    params: dict[str, Any] = Field(default_factory=dict, description="Explicitly supplied parameters")

    @property
    def aesthetics(self) -> dict[str, Any]:
        """Aesthetic values fixed for every row drawn by this geom."""
        return dict(self.params.get("aesthetics", {}))

    def param(self, name: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return a supplied parameter, or ``default`` when it was not supplied."""
        return self.params.get(name, default)


class GeomParams(BaseModel):
    """Parameters shared by every geom."""

    model_config = ConfigDict(extra="forbid")

    aesthetics: dict[str, Any] = Field(default_factory=dict, description="Aesthetics fixed for all rows")
    na_rm: bool = Field(default=False, description="Silently drop rows with missing positions")


class Arrow(BaseModel):
    """Arrow heads drawn at the ends of a path."""

    model_config = ConfigDict(extra="forbid")

    angle: float = Field(default=30.0, gt=0, lt=180, description="Angle of the arrow head in degrees")
    length: float = Field(default=10.0, gt=0, description="Length of the arrow head in pixels")
    ends: ArrowEnds = Field(default=ArrowEnds.LAST, description="Which ends carry an arrow head")
    type: Literal["open", "closed"] = Field(default="open", description="Open or filled head")


class PathParams(GeomParams):
    """Parameters for path-like geoms."""

    arrow: Arrow | None = Field(default=None, description="Arrow specification")
    lineend: LineEnd = Field(default=LineEnd.BUTT, description="Line end style")
    linejoin: LineJoin = Field(default=LineJoin.ROUND, description="Line join style")
    linemitre: float = Field(default=1.0, ge=1.0, description="Mitre limit for mitre joins")


class RectParams(GeomParams):
    """Parameters for rectangle geoms."""

    linejoin: LineJoin = Field(default=LineJoin.MITRE, description="Line join style of the outline")


class BarParams(RectParams):
    """Parameters for bar geoms."""

    width: float = Field(default=0.9, gt=0, description="Bar width as a fraction of the x resolution")


class RenderContext(BaseModel):
    """Drawing context passed to ``to_primitive``."""

    model_config = ConfigDict(frozen=True)

    units: Units = Field(default=Units.NATIVE, description="Coordinate units of the x and y columns")
    width: int = Field(default=400, ge=1, description="Primitive width in pixels")
    height: int = Field(default=300, ge=1, description="Primitive height in pixels")


class GeomGrob(BaseModel):
    """Named primitive produced by one pipeline run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str = Field(..., description="Identity derived from the geom's display name")
    kind: tuple[str, ...] = Field(..., description="Kind tags of the geom that drew the primitive")
    chart: alt.Chart | alt.LayerChart = Field(..., description="Altair chart carrying the primitive")
    data: pl.DataFrame = Field(..., description="Dataset handed to primitive construction", exclude=True)
