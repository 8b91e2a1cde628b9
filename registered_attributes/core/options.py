"""Declaration option checking.

Turns the keyword options of one `attribute` declaration into an
AttributeDefinition, failing fast with InvalidOptionError at class-definition
time rather than at instance-access time.
"""

import keyword
import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..config import AttributesConfig, get_config
from ..utils import as_list
from .errors import InvalidOptionError
from .models import (
    AttributeDefinition,
    InlineTransform,
    MethodTransform,
    Multiplicity,
)

logger = logging.getLogger(__name__)


RECOGNIZED_OPTIONS = frozenset(
    {
        "datastream",
        "field",
        "backing_field",
        "default",
        "multiple",
        "editable",
        "displayable",
        "reader",
        "writer",
        "validates",
        "label",
        "hint",
    }
)

_BOOL_OPTIONS = ("multiple", "editable", "displayable")
_TEXT_OPTIONS = ("label", "hint")


def check_name(name: Any, reserved: frozenset[str] | set[str] = frozenset()) -> str:
    """Check that an attribute name can become an accessor.

    Raises:
        InvalidOptionError: If the name is not an identifier, is a keyword,
            is private, or collides with the host object's own API.
    """
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidOptionError(str(name), "name must be a valid Python identifier")
    if name.startswith("_"):
        raise InvalidOptionError(name, "name must not start with an underscore")
    if name in reserved:
        raise InvalidOptionError(name, "name collides with a reserved method or attribute")
    return name


def _build_transform(
    name: str,
    option: str,
    value: Any,
    has_method: Callable[[str], bool],
) -> InlineTransform | MethodTransform | None:
    if value is None:
        return None
    if isinstance(value, str):
        if not has_method(value):
            raise InvalidOptionError(
                name, f"{option} refers to undefined method '{value}'"
            )
        return MethodTransform(method_name=value)
    if callable(value):
        return InlineTransform(function=value)
    raise InvalidOptionError(
        name,
        f"{option} must be a callable or a method name, got {type(value).__name__}",
    )


def build_definition(
    name: str,
    options: Mapping[str, Any],
    datastreams: Mapping[str, tuple[str, ...]],
    has_method: Callable[[str], bool] = lambda method_name: False,
    reserved: frozenset[str] | set[str] = frozenset(),
    config: AttributesConfig | None = None,
) -> AttributeDefinition:
    """Build an AttributeDefinition from declaration options.

    Args:
        name: Attribute name
        options: Declaration options (see RECOGNIZED_OPTIONS)
        datastreams: Datastream name -> declared field names on the owning class
        has_method: Predicate telling whether the owning class defines a method,
            used for writer/reader given by name
        reserved: Names the attribute may not take
        config: Registration policy; defaults to the global config

    Raises:
        InvalidOptionError: On unknown keys (under the "reject" policy),
            ill-typed values, or references to undeclared datastreams,
            fields or methods.
    """
    config = config or get_config()
    check_name(name, reserved)

    unknown = sorted(set(options) - RECOGNIZED_OPTIONS)
    if unknown:
        if config.reject_unknown_options:
            raise InvalidOptionError(name, f"unrecognized option(s): {', '.join(unknown)}")
        logger.warning("Ignoring unrecognized option(s) for '%s': %s", name, unknown)

    for option in _BOOL_OPTIONS:
        if option in options and not isinstance(options[option], bool):
            raise InvalidOptionError(
                name, f"{option} must be a bool, got {options[option]!r}"
            )
    for option in _TEXT_OPTIONS:
        value = options.get(option)
        if value is not None and not isinstance(value, str):
            raise InvalidOptionError(name, f"{option} must be a string, got {value!r}")

    if "field" in options and "backing_field" in options:
        raise InvalidOptionError(name, "give either field or backing_field, not both")
    field = options.get("field", options.get("backing_field"))

    datastream = options.get("datastream")
    if datastream is not None:
        if not isinstance(datastream, str):
            raise InvalidOptionError(
                name, f"datastream must be a string, got {datastream!r}"
            )
        if datastream not in datastreams:
            raise InvalidOptionError(name, f"datastream '{datastream}' is not declared")
        field = field or name
        if field not in datastreams[datastream]:
            raise InvalidOptionError(
                name, f"datastream '{datastream}' has no field '{field}'"
            )
    elif field is not None:
        raise InvalidOptionError(name, "field given without a datastream")

    multiple = options.get("multiple", False)
    default = options.get("default")
    if multiple and default is not None:
        default = tuple(as_list(default))

    return AttributeDefinition(
        name=name,
        datastream=datastream,
        backing_field=field,
        multiplicity=Multiplicity.MULTIPLE if multiple else Multiplicity.SINGLE,
        default=default,
        editable=options.get("editable", True),
        displayable=options.get("displayable", True),
        reader=_build_transform(name, "reader", options.get("reader"), has_method),
        writer=_build_transform(name, "writer", options.get("writer"), has_method),
        validates=options.get("validates"),
        label=options.get("label"),
        hint=options.get("hint"),
    )
