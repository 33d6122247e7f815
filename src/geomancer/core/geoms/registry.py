"""Registry mapping geom kinds to their capability implementations."""

from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from geomancer.core.errors import CapabilityError, ConfigurationError
from geomancer.core.models import Variant
from geomancer.infra.logging import get_logger

from .bar import BarGeom
from .base import BaseGeom
from .line import LineGeom
from .path import PathGeom
from .point import PointGeom
from .polygon import PolygonGeom
from .rect import RectGeom

logger = get_logger(__name__)


class GeomRegistry:
    """Immutable lookup table from kind tag to geom.

    Registering returns a new registry, so a registry handed to a renderer is
    never changed underneath it.
    """

    def __init__(self, geoms: Iterable[BaseGeom] = ()) -> None:
        """Initialize registry.

        Args:
            geoms: Geoms to register, keyed by their most specific kind

        Raises:
            ConfigurationError: If two geoms share a kind
        """
        table: dict[str, BaseGeom] = {}
        for geom in geoms:
            if geom.kind in table:
                msg = f"Geom kind already registered: {geom.kind}"
                raise ConfigurationError(msg, kind=geom.kind)
            table[geom.kind] = geom
            if not geom.supports_primitive():
                logger.warning("Registered geom without to_primitive", kind=geom.kind)
            logger.debug("Registered geom", kind=geom.kind, base_kind=geom.spec.base_kind)

        self._geoms: Mapping[str, BaseGeom] = MappingProxyType(table)

    def __contains__(self, kind: object) -> bool:
        return kind in self._geoms

    def __iter__(self) -> Iterator[str]:
        return iter(self._geoms)

    def __len__(self) -> int:
        return len(self._geoms)

    def register(self, geom: BaseGeom, replace: bool = False) -> "GeomRegistry":
        """Return a new registry that also contains ``geom``.

        Args:
            geom: Geom to add
            replace: Whether an existing geom of the same kind may be replaced

        Raises:
            ConfigurationError: If the kind is taken and ``replace`` is false
        """
        if geom.kind in self._geoms and not replace:
            msg = f"Geom kind already registered: {geom.kind}"
            raise ConfigurationError(msg, kind=geom.kind)
        kept = [existing for kind, existing in self._geoms.items() if kind != geom.kind]
        return GeomRegistry([*kept, geom])

    def get(self, kind: str) -> BaseGeom | None:
        """Return the geom registered for exactly ``kind``."""
        return self._geoms.get(kind)

    def lookup(self, kind: str) -> BaseGeom:
        """Return the geom for ``kind``.

        Raises:
            ConfigurationError: If the kind is unknown
        """
        geom = self._geoms.get(kind)
        if geom is None:
            msg = f"Unknown geom kind: {kind}"
            raise ConfigurationError(msg, kind=kind, recognized=sorted(self._geoms))
        return geom

    def capability(self, variant: Variant) -> BaseGeom:
        """Return the geom that implements ``variant``.

        Kind tags are tried most specific first, so a variant whose own kind is
        not registered falls back to its base kind.

        Raises:
            CapabilityError: If none of the variant's kinds is registered
        """
        for kind in variant.kind:
            geom = self._geoms.get(kind)
            if geom is not None:
                return geom
        msg = f"No geom registered for kinds {list(variant.kind)}"
        raise CapabilityError(msg, kind=variant.kind[0])

    def default_aesthetics(self, kind: str) -> Mapping[str, Any]:
        """Read-only default aesthetic values of ``kind``."""
        return self.lookup(kind).spec.default_aesthetics


@lru_cache(maxsize=1)
def default_registry() -> GeomRegistry:
    """Registry of the built-in geoms, built once."""
    return GeomRegistry([PathGeom(), LineGeom(), PolygonGeom(), RectGeom(), BarGeom(), PointGeom()])
