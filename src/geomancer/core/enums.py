"""Enumerations for geomancer core types."""

from enum import Enum


class ErrorCode(str, Enum):
    """Application error codes for structured errors."""

    E400_CONFIGURATION = "E400_CONFIGURATION"
    E422_DATA_SHAPE = "E422_DATA_SHAPE"
    E501_CAPABILITY = "E501_CAPABILITY"


class PipelineStage(str, Enum):
    """Stages of a single render, in execution order."""

    CONSTRUCTION = "construction"
    GROUPING = "grouping"
    RESOLVE_DATA = "resolve_data"
    REPARAMETERIZE = "reparameterize"
    MUNCH = "munch"
    TO_PRIMITIVE = "to_primitive"


class StatID(str, Enum):
    """Statistical transforms a geom may name as its usual companion."""

    IDENTITY = "identity"
    COUNT = "count"
    BIN = "bin"
    SMOOTH = "smooth"


class AdjustID(str, Enum):
    """Position adjustments a geom may name as its usual companion."""

    IDENTITY = "identity"
    STACK = "stack"
    DODGE = "dodge"
    JITTER = "jitter"


class Units(str, Enum):
    """Coordinate units for primitive construction.

    ``NATIVE`` positions marks in data units, ``NPC`` (normalised parent
    coordinates) fixes both axes to the unit square.
    """

    NATIVE = "native"
    NPC = "npc"


class LineEnd(str, Enum):
    """Line end (cap) styles."""

    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class LineJoin(str, Enum):
    """Line join styles."""

    ROUND = "round"
    MITRE = "mitre"
    BEVEL = "bevel"


class ArrowEnds(str, Enum):
    """Which ends of a path carry an arrow head."""

    FIRST = "first"
    LAST = "last"
    BOTH = "both"
