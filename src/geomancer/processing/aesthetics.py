"""Aesthetic resolution: merge per-row aesthetic columns with geom values."""

from collections.abc import Iterable, Mapping
from typing import Any

import polars as pl

from geomancer.core.enums import PipelineStage
from geomancer.core.errors import DataShapeError
from geomancer.infra.logging import get_logger

logger = get_logger(__name__)

AESTHETIC_ALIASES: Mapping[str, str] = {
    "color": "colour",
    "fg": "colour",
    "bg": "fill",
    "lty": "linetype",
    "lwd": "size",
    "pch": "shape",
    "cex": "size",
}


def canonical_aesthetic(name: str) -> str:
    """Return the canonical spelling of an aesthetic name."""
    return AESTHETIC_ALIASES.get(name, name)


def canonical_aesthetics(aesthetics: Mapping[str, Any]) -> dict[str, Any]:
    """Rename aliased keys of an aesthetic mapping to their canonical names."""
    return {canonical_aesthetic(name): value for name, value in aesthetics.items()}


def rename_aliased_columns(data: pl.DataFrame) -> pl.DataFrame:
    """Rename aliased aesthetic columns unless the canonical column already exists."""
    renames = {
        column: canonical_aesthetic(column)
        for column in data.columns
        if canonical_aesthetic(column) != column and canonical_aesthetic(column) not in data.columns
    }
    return data.rename(renames) if renames else data


def resolve_aesthetics(
    aesthetics: Mapping[str, Any],
    defaults: Mapping[str, Any],
    data: pl.DataFrame,
    required: Iterable[str] = (),
) -> pl.DataFrame:
    """Merge a dataset with fixed and default aesthetic values.

    Fixed aesthetics replace any column of the same name. Defaults only fill
    columns the data (and the fixed aesthetics) do not supply.

    Args:
        aesthetics: Aesthetic values fixed on the geom
        defaults: Default values of the geom kind
        data: Dataset to resolve
        required: Aesthetics that must exist after merging

    Returns:
        New dataset with the merged columns

    Raises:
        DataShapeError: If a required aesthetic is still missing
    """
    resolved = rename_aliased_columns(data)

    fixed = canonical_aesthetics(aesthetics)
    if fixed:
        resolved = resolved.with_columns([pl.lit(value).alias(name) for name, value in fixed.items()])

    filled = {name: value for name, value in defaults.items() if name not in resolved.columns}
    if filled:
        resolved = resolved.with_columns([pl.lit(value).alias(name) for name, value in filled.items()])

    missing = [name for name in required if name not in resolved.columns]
    if missing:
        msg = f"Missing required aesthetics: {missing}"
        raise DataShapeError(
            msg,
            missing_columns=missing,
            available_columns=list(data.columns),
            stage=PipelineStage.RESOLVE_DATA,
        )

    logger.debug(
        "Resolved aesthetics",
        fixed=sorted(fixed),
        defaulted=sorted(filled),
        rows=resolved.height,
    )
    return resolved


def fill_missing_columns(base: pl.DataFrame, extra: pl.DataFrame) -> pl.DataFrame:
    """Add the columns of ``extra`` that ``base`` lacks.

    Columns already present in ``base`` win. A base without columns takes
    ``extra`` as a whole.

    Raises:
        DataShapeError: If both frames have columns but different row counts
    """
    if base.width == 0:
        return extra.clone()

    added = [column for column in extra.columns if column not in base.columns]
    if not added:
        return base

    if base.height != extra.height:
        msg = f"Cannot merge {extra.height} rows into a dataset of {base.height} rows"
        raise DataShapeError(msg, available_columns=list(base.columns), stage=PipelineStage.GROUPING)

    return base.hstack(extra.select(added))
