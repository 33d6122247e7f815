"""Pipeline that turns a geom and a dataset into a named primitive."""

import logging
import threading
import time
from collections import Counter
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

import polars as pl

from geomancer.core.construction import display_name
from geomancer.core.coords import CoordSystem, requires_munching
from geomancer.core.enums import PipelineStage, Units
from geomancer.core.errors import CapabilityError
from geomancer.core.geoms import BaseGeom, GeomRegistry, default_registry
from geomancer.core.models import GeomGrob, RenderContext, Variant
from geomancer.infra.logging import get_logger
from geomancer.infra.settings import RenderSettings, get_settings
from geomancer.processing.aesthetics import fill_missing_columns

logger = get_logger(__name__)

T = TypeVar("T")


def add_group(data: pl.DataFrame) -> pl.DataFrame:
    """Give every row its own group unless the data already has a ``group`` column."""
    if "group" in data.columns:
        return data
    return data.with_columns(pl.Series("group", range(1, data.height + 1), dtype=pl.Int64))


class GeomRenderer:
    """Runs geoms through grouping, data resolution, munching and drawing.

    Each render works on its own copy of the data, so a renderer can be shared
    between threads. Primitive names are numbered per renderer.
    """

    def __init__(self, registry: GeomRegistry | None = None, settings: RenderSettings | None = None) -> None:
        """Initialize renderer.

        Args:
            registry: Geom registry to dispatch on (defaults to the built-in geoms)
            settings: Render settings (defaults to the process settings)
        """
        self._registry = registry or default_registry()
        self._settings = settings or get_settings()
        self._counts: Counter[str] = Counter()
        self._lock = threading.Lock()

    @property
    def registry(self) -> GeomRegistry:
        """Registry this renderer dispatches on."""
        return self._registry

    def render(
        self,
        variant: Variant,
        data: pl.DataFrame,
        munch: bool = False,
        context: RenderContext | None = None,
    ) -> GeomGrob:
        """Render ``data`` with ``variant``.

        Reparameterization runs before munching, so munching always sees
        canonical positions such as a rect's ``xmin``..``ymax`` extents.

        Args:
            variant: Geom to draw with
            data: Dataset, one row per drawn observation
            munch: Whether to munch before drawing; pass ``requires_munching(coord)``
            context: Drawing context (defaults to native units at the configured size)

        Returns:
            Named primitive

        Raises:
            CapabilityError: If the geom (or the geom munching substitutes) cannot draw
            DataShapeError: If the data lacks columns the geom needs
        """
        context = context or RenderContext(width=self._settings.width, height=self._settings.height)
        geom = self._drawable(variant)

        data = self._run_stage(PipelineStage.GROUPING, variant, add_group, data)
        data = self._run_stage(PipelineStage.RESOLVE_DATA, variant, geom.resolve_data, variant, data)
        data = self._run_stage(PipelineStage.REPARAMETERIZE, variant, geom.reparameterize, variant, data)

        if munch:
            munched, data = self._run_stage(PipelineStage.MUNCH, variant, geom.munch, variant, data)
            if munched != variant:
                logger.debug(
                    "Munching substituted geom",
                    kind=list(variant.kind),
                    substitute=list(munched.kind),
                )
                variant, geom = munched, self._drawable(munched)

        chart = self._run_stage(PipelineStage.TO_PRIMITIVE, variant, geom.to_primitive, variant, data, context)

        name = self._next_name(display_name(variant))
        logger.debug("Rendered geom", grob=name, kind=list(variant.kind), rows=data.height)
        return GeomGrob(name=name, kind=variant.kind, chart=chart.properties(name=name), data=data)

    def render_in(self, coord: CoordSystem, variant: Variant, data: pl.DataFrame) -> GeomGrob:
        """Render in ``coord``, munching when the coordinate system is non-linear."""
        return self.render(variant, data, munch=requires_munching(coord))

    def preview(self, variant: Variant) -> GeomGrob:
        """Render the geom's icon dataset in the unit square."""
        geom = self._drawable(variant)
        icon = fill_missing_columns(pl.DataFrame(), geom.icon_dataset(variant))
        context = RenderContext(units=Units.NPC, width=self._settings.icon_size, height=self._settings.icon_size)
        return self.render(variant, icon, context=context)

    def _drawable(self, variant: Variant) -> BaseGeom:
        geom = self._registry.capability(variant)
        if not geom.supports_primitive():
            msg = f"Geom kind '{geom.kind}' cannot be rendered: it does not implement to_primitive"
            raise CapabilityError(msg, kind=geom.kind)
        return geom

    def _run_stage(self, stage: PipelineStage, variant: Variant, func: Callable[..., T], *args: object) -> T:
        with self._timed(stage, variant):
            return func(*args)

    @contextmanager
    def _timed(self, stage: PipelineStage, variant: Variant) -> Iterator[None]:
        if not logger.is_enabled_for(logging.DEBUG):
            yield
            return

        start = time.perf_counter()
        try:
            yield
        except Exception:
            logger.debug("Stage failed", stage=stage.value, kind=list(variant.kind))
            raise
        logger.debug(
            "Stage complete",
            stage=stage.value,
            kind=list(variant.kind),
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
        )

    def _next_name(self, base: str) -> str:
        with self._lock:
            self._counts[base] += 1
            return f"{base}.{self._counts[base]}"


_default_renderer: GeomRenderer | None = None
_default_lock = threading.Lock()


def get_renderer() -> GeomRenderer:
    """Shared renderer over the built-in geoms."""
    global _default_renderer  # noqa: PLW0603
    with _default_lock:
        if _default_renderer is None:
            _default_renderer = GeomRenderer()
        return _default_renderer


def render(variant: Variant, data: pl.DataFrame, munch: bool = False) -> GeomGrob:
    """Render with the shared renderer. See :meth:`GeomRenderer.render`."""
    return get_renderer().render(variant, data, munch=munch)


def preview(variant: Variant) -> GeomGrob:
    """Preview with the shared renderer. See :meth:`GeomRenderer.preview`."""
    return get_renderer().preview(variant)
