"""geomancer: an extensible rendering pipeline for a grammar of graphics."""

from geomancer.core.construction import (
    construct,
    deconstruct,
    display_name,
    from_constructor,
    from_layer,
    parse_constructor,
)
from geomancer.core.coords import CartesianCoord, FlipCoord, PolarCoord, requires_munching
from geomancer.core.errors import CapabilityError, ConfigurationError, DataShapeError, GeomancerError
from geomancer.core.factories import geom_bar, geom_line, geom_path, geom_point, geom_polygon, geom_rect
from geomancer.core.geoms import BaseGeom, GeomRegistry, GeomSpec, default_registry
from geomancer.core.models import GeomGrob, RenderContext, Variant
from geomancer.orchestration.pipeline import GeomRenderer, preview, render

__version__ = "0.1.0"

__all__ = [
    "BaseGeom",
    "CapabilityError",
    "CartesianCoord",
    "ConfigurationError",
    "DataShapeError",
    "FlipCoord",
    "GeomGrob",
    "GeomRegistry",
    "GeomRenderer",
    "GeomSpec",
    "GeomancerError",
    "PolarCoord",
    "RenderContext",
    "Variant",
    "__version__",
    "construct",
    "deconstruct",
    "default_registry",
    "display_name",
    "from_constructor",
    "from_layer",
    "geom_bar",
    "geom_line",
    "geom_path",
    "geom_point",
    "geom_polygon",
    "geom_rect",
    "parse_constructor",
    "preview",
    "render",
    "requires_munching",
]
