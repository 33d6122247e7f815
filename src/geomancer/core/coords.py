"""Coordinate systems, as far as the rendering pipeline needs to know them.

The pipeline only asks a coordinate system whether it is linear. Non-linear
systems bend straight segments, so geoms drawn in them are munched first.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CoordSystem(Protocol):
    """Protocol for coordinate systems."""

    @property
    def is_linear(self) -> bool:
        """Whether straight lines stay straight after the transformation."""
        ...


class CartesianCoord:
    """Plain cartesian coordinates."""

    is_linear = True


class FlipCoord(CartesianCoord):
    """Cartesian coordinates with x and y swapped."""


class PolarCoord:
    """Polar coordinates; ``theta`` names the position mapped to the angle."""

    is_linear = False

    def __init__(self, theta: str = "x", start: float = 0.0, direction: int = 1) -> None:
        self.theta = theta
        self.start = start
        self.direction = direction


def requires_munching(coord: CoordSystem) -> bool:
    """Return whether geoms drawn in ``coord`` must be munched."""
    return not coord.is_linear
