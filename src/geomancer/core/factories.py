"""Per-kind constructors for the built-in geoms.

Each factory forwards only the arguments the caller actually passed, so the
resulting geom deconstructs back to the same call.
"""

from collections.abc import Mapping
from typing import Any

from geomancer.core.construction import construct
from geomancer.core.enums import LineEnd, LineJoin
from geomancer.core.models import Arrow, Variant


def _supplied(**params: Any) -> dict[str, Any]:
    return {name: value for name, value in params.items() if value is not None}


def geom_path(  # noqa: PLR0913 — Mirrors the style knobs of the geom
    aesthetics: Mapping[str, Any] | None = None,
    arrow: Arrow | Mapping[str, Any] | None = None,
    lineend: LineEnd | str | None = None,
    linejoin: LineJoin | str | None = None,
    linemitre: float | None = None,
    na_rm: bool | None = None,
) -> Variant:
    """Connect observations in the order in which they appear in the data.

    Args:
        aesthetics: Aesthetic values fixed for every row, e.g. ``{"colour": "red"}``
        arrow: Arrow heads at the path ends
        lineend: Line end style, ``"butt"`` by default
        linejoin: Line join style, ``"round"`` by default
        linemitre: Mitre limit, at least 1
        na_rm: Drop rows with missing positions without a warning
    """
    return construct(
        "path",
        _supplied(
            aesthetics=aesthetics,
            arrow=arrow,
            lineend=lineend,
            linejoin=linejoin,
            linemitre=linemitre,
            na_rm=na_rm,
        ),
    )


def geom_line(  # noqa: PLR0913 — Mirrors the style knobs of the geom
    aesthetics: Mapping[str, Any] | None = None,
    arrow: Arrow | Mapping[str, Any] | None = None,
    lineend: LineEnd | str | None = None,
    linejoin: LineJoin | str | None = None,
    linemitre: float | None = None,
    na_rm: bool | None = None,
) -> Variant:
    """Connect observations, ordered by x value.

    Takes the same arguments as :func:`geom_path`.

    Example:
        >>> geom_line({"colour": "red"})
    """
    return construct(
        "line",
        _supplied(
            aesthetics=aesthetics,
            arrow=arrow,
            lineend=lineend,
            linejoin=linejoin,
            linemitre=linemitre,
            na_rm=na_rm,
        ),
    )


def geom_polygon(aesthetics: Mapping[str, Any] | None = None, na_rm: bool | None = None) -> Variant:
    """Filled polygons, one per group."""
    return construct("polygon", _supplied(aesthetics=aesthetics, na_rm=na_rm))


def geom_rect(
    aesthetics: Mapping[str, Any] | None = None,
    linejoin: LineJoin | str | None = None,
    na_rm: bool | None = None,
) -> Variant:
    """Rectangles from xmin/xmax/ymin/ymax, or from x/y plus width/height."""
    return construct("rect", _supplied(aesthetics=aesthetics, linejoin=linejoin, na_rm=na_rm))


def geom_bar(
    aesthetics: Mapping[str, Any] | None = None,
    width: float | None = None,
    linejoin: LineJoin | str | None = None,
    na_rm: bool | None = None,
) -> Variant:
    """Bars from zero to y, centred on x.

    Args:
        aesthetics: Aesthetic values fixed for every bar
        width: Bar width as a fraction of the spacing between x values (0.9 by default)
        linejoin: Line join style of the outline
        na_rm: Drop rows with missing positions without a warning
    """
    return construct("bar", _supplied(aesthetics=aesthetics, width=width, linejoin=linejoin, na_rm=na_rm))


def geom_point(aesthetics: Mapping[str, Any] | None = None, na_rm: bool | None = None) -> Variant:
    """Points, one per row."""
    return construct("point", _supplied(aesthetics=aesthetics, na_rm=na_rm))
