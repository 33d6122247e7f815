"""Munching: cut paths into short pieces so they stay smooth after a non-linear transform."""

import polars as pl

from geomancer.core.enums import PipelineStage
from geomancer.core.errors import DataShapeError

_ORDER = "_munch_order"
_STEP = "_munch_step"
_X_END = "_munch_x_end"
_Y_END = "_munch_y_end"


def close_groups(data: pl.DataFrame, group: str = "group") -> pl.DataFrame:
    """Append the first row of every group to its end.

    Row order within and between groups is preserved.
    """
    indexed = data.with_row_index(_ORDER).with_columns(pl.col(_ORDER).cast(pl.Float64))
    closing = (
        indexed.group_by(group, maintain_order=True)
        .agg(pl.all().first(), (pl.col(_ORDER).max() + 0.5).alias("_closing_order"))
        .with_columns(pl.col("_closing_order").alias(_ORDER))
        .select(indexed.columns)
    )
    return pl.concat([indexed, closing], how="vertical_relaxed").sort(_ORDER).drop(_ORDER)


def subdivide(data: pl.DataFrame, pieces: int, closed: bool = False, group: str = "group") -> pl.DataFrame:
    """Interpolate ``pieces - 1`` extra points along every segment of every group.

    Args:
        data: Dataset with ``x``, ``y`` and the grouping column, in drawing order
        pieces: Number of pieces each segment is cut into
        closed: Whether each group is a closed ring whose last point joins its first
        group: Name of the grouping column

    Returns:
        New dataset; non-position columns are copied from each segment's start row

    Raises:
        DataShapeError: If positions or the grouping column are missing
    """
    missing = [column for column in ("x", "y", group) if column not in data.columns]
    if missing:
        msg = f"Cannot munch data without columns: {missing}"
        raise DataShapeError(
            msg,
            missing_columns=missing,
            available_columns=list(data.columns),
            stage=PipelineStage.MUNCH,
        )

    if pieces <= 1 or data.height == 0:
        return data

    source = close_groups(data, group) if closed else data
    steps = pl.DataFrame({_STEP: [i / pieces for i in range(pieces)]})

    segments = source.with_row_index(_ORDER).with_columns(
        pl.col("x").shift(-1).over(group).alias(_X_END),
        pl.col("y").shift(-1).over(group).alias(_Y_END),
    )
    munched = (
        segments.join(steps, how="cross")
        .filter((pl.col(_STEP) == 0) | pl.col(_X_END).is_not_null())
        .sort([_ORDER, _STEP])
        .with_columns(
            pl.when(pl.col(_STEP) > 0)
            .then(pl.col("x") + (pl.col(_X_END) - pl.col("x")) * pl.col(_STEP))
            .otherwise(pl.col("x"))
            .alias("x"),
            pl.when(pl.col(_STEP) > 0)
            .then(pl.col("y") + (pl.col(_Y_END) - pl.col("y")) * pl.col(_STEP))
            .otherwise(pl.col("y"))
            .alias("y"),
        )
    )

    if closed:
        # The closing row only served as a segment end.
        munched = munched.filter(pl.col(_X_END).is_not_null())

    return munched.drop([_ORDER, _STEP, _X_END, _Y_END])
