"""Capability interface shared by every geom kind."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import altair as alt
import polars as pl

from geomancer.core.enums import AdjustID, StatID, Units
from geomancer.core.errors import CapabilityError
from geomancer.core.models import GeomParams, RenderContext, Variant
from geomancer.infra.logging import get_logger
from geomancer.processing.aesthetics import resolve_aesthetics

logger = get_logger(__name__)

# Points per millimetre, used to turn aesthetic sizes into pixel widths.
PT = 72.27 / 25.4

LINETYPE_DASHES: Mapping[str, list[float]] = MappingProxyType(
    {
        "solid": [1, 0],
        "dashed": [4, 4],
        "dotted": [1, 3],
        "dotdash": [1, 3, 4, 3],
        "longdash": [8, 4],
        "twodash": [2, 2, 6, 2],
        "blank": [0, 1],
    }
)


class GeomSpec:
    """Specification for a geom kind."""

    def __init__(  # noqa: PLR0913 — Geom specification requires multiple parameters
        self,
        kind: tuple[str, ...],
        name: str,
        aesthetics: list[str],
        required_aesthetics: list[str],
        default_aesthetics: dict[str, Any],
        params_model: type[GeomParams] = GeomParams,
    ) -> None:
        """Initialize geom specification.

        Args:
            kind: Kind tags, most specific first (the geom's own kind, then the
                kinds it falls back to)
            name: Human-readable geom name
            aesthetics: Aesthetic names the geom recognises
            required_aesthetics: Aesthetics that must be present after resolution
            default_aesthetics: Values used for aesthetics the data does not supply
            params_model: Pydantic model validating the geom's parameters
        """
        self.kind = kind
        self.name = name
        self.aesthetics = frozenset(aesthetics) | {"group"}
        self.required_aesthetics = tuple(required_aesthetics)
        self.default_aesthetics: Mapping[str, Any] = MappingProxyType(dict(default_aesthetics))
        self.params_model = params_model

    @property
    def base_kind(self) -> str | None:
        """Kind this geom falls back to, if any."""
        return self.kind[1] if len(self.kind) > 1 else None

    def unknown_aesthetics(self, names: list[str]) -> list[str]:
        """Return the names that are not aesthetics of this kind.

        Args:
            names: Aesthetic names to check

        Returns:
            Unrecognised names, in input order
        """
        return [name for name in names if name not in self.aesthetics]


class BaseGeom(ABC):
    """Base class for all geoms.

    Every operation except ``to_primitive`` has a default. Subclasses override
    the stages they need and call ``super()`` when they also want the base
    kind's behaviour.
    """

    def __init__(self) -> None:
        """Initialize base geom."""
        self.spec = self._get_spec()

    @abstractmethod
    def _get_spec(self) -> GeomSpec:
        """Get geom specification.

        Returns:
            Geom specification
        """

    @property
    def kind(self) -> str:
        """Most specific kind tag."""
        return self.spec.kind[0]

    @classmethod
    def supports_primitive(cls) -> bool:
        """Return whether this class provides its own ``to_primitive``."""
        return cls.to_primitive is not BaseGeom.to_primitive

    def resolve_data(self, variant: Variant, data: pl.DataFrame) -> pl.DataFrame:
        """Merge the dataset's aesthetic columns with the geom's fixed and default values.

        Rows missing a required aesthetic are dropped, with a warning unless
        the geom sets ``na_rm``.

        Args:
            variant: Geom configuration
            data: Grouped dataset

        Returns:
            Dataset with every required aesthetic present as a column
        """
        resolved = resolve_aesthetics(
            variant.aesthetics,
            self.spec.default_aesthetics,
            data,
            required=self.spec.required_aesthetics,
        )
        if not self.spec.required_aesthetics:
            return resolved

        complete = resolved.drop_nulls(list(self.spec.required_aesthetics))
        removed = resolved.height - complete.height
        if removed and not variant.param("na_rm", False):
            logger.warning("Removed rows containing missing values", geom=self.kind, removed=removed)
        return complete

    def munch(self, variant: Variant, data: pl.DataFrame) -> tuple[Variant, pl.DataFrame]:
        """Prepare data for a non-linear coordinate system.

        The default leaves both the geom and the data unchanged.

        Returns:
            The geom and data that should be used to draw
        """
        return variant, data

    def reparameterize(self, variant: Variant, data: pl.DataFrame) -> pl.DataFrame:  # noqa: ARG002
        """Convert alternative parameterisations into x, xmin, xmax, y, ymin and ymax.

        The default returns the data unchanged.
        """
        return data

    def related_stat(self, variant: Variant) -> StatID:  # noqa: ARG002
        """Statistical transform this geom is usually paired with."""
        return StatID.IDENTITY

    def related_adjust(self, variant: Variant) -> AdjustID:  # noqa: ARG002
        """Position adjustment this geom is usually paired with."""
        return AdjustID.IDENTITY

    def to_primitive(
        self,
        variant: Variant,  # noqa: ARG002
        data: pl.DataFrame,  # noqa: ARG002
        context: RenderContext,  # noqa: ARG002
    ) -> alt.Chart | alt.LayerChart:
        """Build the chart that draws ``data``.

        Every concrete kind must implement this.

        Raises:
            CapabilityError: Always, for kinds that do not override it
        """
        msg = f"Geom kind '{self.kind}' does not implement to_primitive"
        raise CapabilityError(msg, kind=self.kind)

    def icon_dataset(self, variant: Variant) -> pl.DataFrame:  # noqa: ARG002
        """Small dataset in the unit square used to draw a preview glyph.

        The default is empty.
        """
        return pl.DataFrame(schema={"x": pl.Float64, "y": pl.Float64})

    def position_scale(self, context: RenderContext) -> alt.Scale:
        """Scale for x and y encodings under ``context``."""
        if context.units == Units.NPC:
            return alt.Scale(domain=[0, 1], nice=False, zero=False)
        return alt.Scale(zero=False)

    def stroke_encodings(self, data: pl.DataFrame) -> dict[str, Any]:
        """Encodings passing outline aesthetic columns through unscaled.

        Args:
            data: Resolved dataset

        Returns:
            Encoding keyword arguments for ``Chart.encode``
        """
        encodings: dict[str, Any] = {}
        if "colour" in data.columns:
            encodings["color"] = alt.Color("colour:N", scale=None)
        if "alpha" in data.columns:
            encodings["opacity"] = alt.Opacity("alpha:Q", scale=None)
        if "size" in data.columns:
            encodings["strokeWidth"] = alt.StrokeWidth("_stroke_width:Q", scale=None)
        if "linetype" in data.columns:
            encodings["strokeDash"] = alt.StrokeDash(
                "linetype:N",
                scale=alt.Scale(domain=list(LINETYPE_DASHES), range=list(LINETYPE_DASHES.values())),
                legend=None,
            )
        return encodings

    def with_stroke_width(self, data: pl.DataFrame) -> pl.DataFrame:
        """Add the pixel stroke width derived from the ``size`` aesthetic."""
        if "size" not in data.columns:
            return data
        return data.with_columns((pl.col("size").cast(pl.Float64) * PT).alias("_stroke_width"))

    def prepare_data_for_altair(self, data: pl.DataFrame) -> dict[str, Any]:
        """Convert Polars DataFrame to Altair-compatible format.

        Args:
            data: Polars DataFrame

        Returns:
            Dictionary in records format for Altair
        """
        records = data.to_dicts()

        # Convert datetime objects to ISO format strings for JSON serialization
        for record in records:
            for key, value in record.items():
                if hasattr(value, "isoformat"):
                    record[key] = value.isoformat()

        return {"values": records}
