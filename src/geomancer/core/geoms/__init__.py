"""Built-in geoms and the registry that dispatches on their kind."""

from .bar import BarGeom
from .base import BaseGeom, GeomSpec
from .line import LineGeom
from .path import PathGeom
from .point import PointGeom
from .polygon import PolygonGeom
from .rect import RectGeom
from .registry import GeomRegistry, default_registry

__all__ = [
    "BarGeom",
    "BaseGeom",
    "GeomRegistry",
    "GeomSpec",
    "LineGeom",
    "PathGeom",
    "PointGeom",
    "PolygonGeom",
    "RectGeom",
    "default_registry",
]
