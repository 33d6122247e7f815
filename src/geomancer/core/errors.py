"""Error handling and exception definitions for geomancer."""

from .enums import ErrorCode, PipelineStage
from .models import ErrorDetail


class GeomancerError(Exception):
    """Base exception for all geomancer errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: list[ErrorDetail] | None = None,
        hint: str | None = None,
        stage: PipelineStage | None = None,
    ):
        """Initialize geomancer error.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Optional detailed error information
            hint: Optional correction hint for the caller
            stage: Optional pipeline stage where the error occurred
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or []
        self.hint = hint
        self.stage = stage


class ConfigurationError(GeomancerError):
    """Raised when a geom is constructed with parameters its kind does not accept."""

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        details: list[ErrorDetail] | None = None,
        recognized: list[str] | None = None,
    ):
        """Initialize configuration error."""
        hint = None
        if recognized:
            hint = f"Recognized names: {', '.join(recognized)}"
            if kind:
                hint = f"Recognized names for '{kind}': {', '.join(recognized)}"

        super().__init__(
            message=message,
            code=ErrorCode.E400_CONFIGURATION,
            details=details,
            hint=hint,
            stage=PipelineStage.CONSTRUCTION,
        )
        self.kind = kind


class CapabilityError(GeomancerError):
    """Raised when a geom kind cannot be rendered because it lacks a capability."""

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        capability: str = "to_primitive",
    ):
        """Initialize capability error."""
        hint = f"Implement '{capability}' on the geom class"
        if kind:
            hint = f"Geom kind '{kind}' must implement '{capability}' before it can be rendered"

        super().__init__(
            message=message,
            code=ErrorCode.E501_CAPABILITY,
            hint=hint,
            stage=PipelineStage.TO_PRIMITIVE,
        )
        self.kind = kind
        self.capability = capability


class DataShapeError(GeomancerError):
    """Raised when a dataset lacks columns a stage requires."""

    def __init__(
        self,
        message: str,
        missing_columns: list[str] | None = None,
        available_columns: list[str] | None = None,
        stage: PipelineStage | None = PipelineStage.RESOLVE_DATA,
    ):
        """Initialize data shape error."""
        details = [
            ErrorDetail(
                field=column,
                reason=f"Required column '{column}' is missing and has no default",
                suggestion=f"Map a data column to '{column}' or set it on the geom",
            )
            for column in missing_columns or []
        ]

        hint = None
        if available_columns is not None:
            hint = f"Available columns: {', '.join(available_columns[:10]) or '(none)'}"
            if len(available_columns) > 10:
                hint += f" (and {len(available_columns) - 10} more)"

        super().__init__(
            message=message,
            code=ErrorCode.E422_DATA_SHAPE,
            details=details or None,
            hint=hint,
            stage=stage,
        )
        self.missing_columns = list(missing_columns or [])
