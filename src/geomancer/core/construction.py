"""Building geoms from a kind and parameters, and turning them back into text.

A geom is written as a constructor call, ``geom_<kind>(name = value, ...)``,
with one keyword per explicitly supplied parameter. ``deconstruct`` produces
that text and ``from_constructor`` reads it back into an equal Variant.
"""

import ast
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from geomancer.core.errors import ConfigurationError
from geomancer.core.geoms.registry import GeomRegistry, default_registry
from geomancer.core.models import ErrorDetail, Variant
from geomancer.infra.logging import get_logger
from geomancer.processing.aesthetics import canonical_aesthetic, canonical_aesthetics

logger = get_logger(__name__)

GEOM_PREFIX = "geom_"


def construct(
    kind: str,
    parameters: Mapping[str, Any] | BaseModel | None = None,
    registry: GeomRegistry | None = None,
) -> Variant:
    """Build a geom of ``kind`` from the parameters a caller supplied.

    Only supplied parameters are kept; defaults stay implicit so that the
    geom deconstructs to the call that created it.

    Args:
        kind: Geom kind, e.g. ``"line"``
        parameters: Parameter mapping or a parameter model of the kind
        registry: Registry to look the kind up in (defaults to the built-in geoms)

    Returns:
        Validated Variant tagged with the kind and its base kinds

    Raises:
        ConfigurationError: If the kind, a parameter or an aesthetic is not recognised
    """
    geom = (registry or default_registry()).lookup(kind)
    params_model = geom.spec.params_model

    if isinstance(parameters, BaseModel):
        supplied = parameters.model_dump(mode="json", exclude_unset=True)
    else:
        supplied = dict(parameters or {})
    if isinstance(supplied.get("aesthetics"), Mapping):
        supplied["aesthetics"] = canonical_aesthetics(supplied["aesthetics"])

    try:
        validated = params_model.model_validate(supplied)
    except PydanticValidationError as e:
        details = [
            ErrorDetail(
                field=".".join(str(part) for part in error["loc"]) or None,
                reason=error["msg"],
            )
            for error in e.errors()
        ]
        msg = f"Invalid parameters for geom '{kind}'"
        raise ConfigurationError(msg, kind=kind, details=details, recognized=sorted(params_model.model_fields)) from e

    unknown = geom.spec.unknown_aesthetics(list(validated.aesthetics))
    if unknown:
        msg = f"Unknown aesthetics for geom '{kind}': {unknown}"
        raise ConfigurationError(
            msg,
            kind=kind,
            details=[ErrorDetail(field=name, reason="Not an aesthetic of this geom") for name in unknown],
            recognized=sorted(geom.spec.aesthetics),
        )

    non_finite = _non_finite(validated.model_dump(exclude_unset=True))
    if non_finite:
        msg = f"Non-finite values for geom '{kind}': {non_finite}"
        raise ConfigurationError(
            msg,
            kind=kind,
            details=[ErrorDetail(field=path, reason="Value must be finite") for path in non_finite],
        )

    variant = Variant(kind=geom.spec.kind, params=validated.model_dump(mode="json", exclude_unset=True))
    logger.debug("Constructed geom", kind=list(variant.kind), params=sorted(variant.params))
    return variant


def from_layer(kind: str, registry: GeomRegistry | None = None, **params: Any) -> Variant:  # noqa: ANN401
    """Build a geom from one flat set of layer arguments.

    Arguments naming an aesthetic of ``kind`` (or an alias of one) become fixed
    aesthetics; everything else is passed on as a geom parameter.

    Example:
        >>> from_layer("line", colour="red", linejoin="mitre").params
        {'aesthetics': {'colour': 'red'}, 'linejoin': 'mitre'}

    Raises:
        ConfigurationError: If the kind is unknown or an argument is neither an
            aesthetic nor a parameter of the kind
    """
    geom = (registry or default_registry()).lookup(kind)

    aesthetics = dict(params.pop("aesthetics", None) or {})
    for name in list(params):
        if canonical_aesthetic(name) in geom.spec.aesthetics:
            aesthetics[name] = params.pop(name)

    if aesthetics:
        params["aesthetics"] = aesthetics
    return construct(kind, params, registry=registry)


def _non_finite(value: Any, path: str = "") -> list[str]:  # noqa: ANN401
    """Paths of the float values in ``value`` that are NaN or infinite."""
    if isinstance(value, float):
        return [] if math.isfinite(value) else [path]
    if isinstance(value, Mapping):
        return [
            found for key, item in value.items() for found in _non_finite(item, f"{path}.{key}" if path else str(key))
        ]
    if isinstance(value, list | tuple):
        return [found for index, item in enumerate(value) for found in _non_finite(item, f"{path}.{index}")]
    return []


def display_name(variant: Variant) -> str:
    """Readable name of a geom, taken from its most specific kind."""
    return f"{GEOM_PREFIX}{variant.kind[0]}"


def deconstruct(variant: Variant) -> str:
    """Write a geom as the constructor call that creates it.

    Example:
        >>> deconstruct(construct("line", {"linejoin": "mitre"}))
        "geom_line(linejoin = 'mitre')"
    """
    args = ", ".join(f"{name} = {value!r}" for name, value in variant.params.items())
    return f"{display_name(variant)}({args})"


def parse_constructor(text: str) -> tuple[str, dict[str, Any]]:
    """Split a constructor call into its kind and literal keyword arguments.

    Args:
        text: Text such as ``"geom_line(linejoin = 'mitre')"``

    Returns:
        Tuple of (kind, parameters)

    Raises:
        ConfigurationError: If the text is not a ``geom_<kind>(...)`` call with
            literal keyword arguments only
    """
    try:
        tree = ast.parse(text.strip(), mode="eval")
    except SyntaxError as e:
        msg = f"Cannot parse geom constructor: {text!r}"
        raise ConfigurationError(msg) from e

    call = tree.body
    if not (
        isinstance(call, ast.Call)
        and isinstance(call.func, ast.Name)
        and call.func.id.startswith(GEOM_PREFIX)
        and len(call.func.id) > len(GEOM_PREFIX)
    ):
        msg = f"Expected a call of the form {GEOM_PREFIX}<kind>(...): {text!r}"
        raise ConfigurationError(msg)
    if call.args:
        msg = f"Geom constructors take keyword arguments only: {text!r}"
        raise ConfigurationError(msg)

    kind = call.func.id.removeprefix(GEOM_PREFIX)
    params: dict[str, Any] = {}
    for keyword in call.keywords:
        if keyword.arg is None:
            msg = f"Unpacked arguments are not supported: {text!r}"
            raise ConfigurationError(msg, kind=kind)
        try:
            params[keyword.arg] = ast.literal_eval(keyword.value)
        except ValueError as e:
            msg = f"Argument '{keyword.arg}' is not a literal value"
            raise ConfigurationError(msg, kind=kind) from e

    return kind, params


def from_constructor(text: str, registry: GeomRegistry | None = None) -> Variant:
    """Rebuild the geom written by :func:`deconstruct`."""
    kind, params = parse_constructor(text)
    return construct(kind, params, registry=registry)
