"""Validation engine bound to registered attributes.

Declarations only bind a spec to an attribute name (`validates={...}`); the
rules run later, when the host object is asked whether it is valid. Bindings
are copied to subclasses with the same snapshot semantics as the attribute
registry.

Rules:
- presence: True             value must not be blank
- length: {minimum, maximum} bounds on len(value) (or each element if multiple)
- inclusion: {"in": [...]}   value (each element if multiple) must be listed
- format: {"with": regex}    value (each element if multiple) must match
"""

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from .core.errors import InvalidOptionError
from .core.models import AttributeDefinition, ValidationResult
from .utils import as_list, is_blank

logger = logging.getLogger(__name__)


# =============================================================================
# Rule checks
# =============================================================================


def _elements(definition: AttributeDefinition, value: Any) -> list:
    if definition.multiple:
        return [v for v in as_list(value) if not is_blank(v)]
    return [] if is_blank(value) else [value]


def _check_presence(
    definition: AttributeDefinition, value: Any, options: Any, result: ValidationResult
) -> None:
    if options and is_blank(value):
        result.add_error(
            category="PRESENCE",
            location=definition.name,
            message="can't be blank",
        )


def _check_length(
    definition: AttributeDefinition, value: Any, options: Any, result: ValidationResult
) -> None:
    minimum = options.get("minimum")
    maximum = options.get("maximum")
    for element in _elements(definition, value):
        size = len(str(element))
        if minimum is not None and size < minimum:
            result.add_error(
                category="LENGTH",
                location=definition.name,
                message=f"is too short (minimum is {minimum} characters)",
            )
        if maximum is not None and size > maximum:
            result.add_error(
                category="LENGTH",
                location=definition.name,
                message=f"is too long (maximum is {maximum} characters)",
            )


def _check_inclusion(
    definition: AttributeDefinition, value: Any, options: Any, result: ValidationResult
) -> None:
    allowed = options["in"] if isinstance(options, Mapping) else options
    for element in _elements(definition, value):
        if element not in allowed:
            result.add_error(
                category="INCLUSION",
                location=definition.name,
                message=f"{element!r} is not included in the list",
                suggestion=f"use one of {list(allowed)!r}",
            )


def _check_format(
    definition: AttributeDefinition, value: Any, options: Any, result: ValidationResult
) -> None:
    pattern = options["with"] if isinstance(options, Mapping) else options
    for element in _elements(definition, value):
        if not re.search(pattern, str(element)):
            result.add_error(
                category="FORMAT",
                location=definition.name,
                message=f"{element!r} is invalid",
            )


def _check_length_options(name: str, options: Any) -> None:
    if not isinstance(options, Mapping) or not set(options) <= {"minimum", "maximum"}:
        raise InvalidOptionError(name, "length takes {'minimum': n, 'maximum': n}")


def _check_inclusion_options(name: str, options: Any) -> None:
    if isinstance(options, Mapping):
        options = options.get("in")
    if not isinstance(options, (list, tuple, set, frozenset)):
        raise InvalidOptionError(name, "inclusion takes a list or {'in': [...]}")


def _check_format_options(name: str, options: Any) -> None:
    if isinstance(options, Mapping):
        options = options.get("with")
    if not isinstance(options, str):
        raise InvalidOptionError(name, "format takes a pattern or {'with': pattern}")
    try:
        re.compile(options)
    except re.error as exc:
        raise InvalidOptionError(name, f"format pattern is invalid: {exc}") from exc


Rule = Callable[[AttributeDefinition, Any, Any, ValidationResult], None]

RULES: dict[str, Rule] = {
    "presence": _check_presence,
    "length": _check_length,
    "inclusion": _check_inclusion,
    "format": _check_format,
}

_OPTION_CHECKS: dict[str, Callable[[str, Any], None]] = {
    "length": _check_length_options,
    "inclusion": _check_inclusion_options,
    "format": _check_format_options,
}


# =============================================================================
# Engine
# =============================================================================


class ValidationEngine:
    """Per-class bindings of attribute name to validation spec."""

    def __init__(self, bindings: dict[str, dict[str, Any]] | None = None) -> None:
        self._bindings: dict[str, dict[str, Any]] = dict(bindings or {})

    def copy(self) -> "ValidationEngine":
        return ValidationEngine(self._bindings)

    def bind(self, name: str, spec: Any) -> None:
        """Bind a spec to an attribute, replacing any earlier binding.

        Raises:
            InvalidOptionError: If the spec is not a mapping of known rules.
        """
        if not isinstance(spec, Mapping):
            raise InvalidOptionError(name, f"validates must be a mapping, got {spec!r}")
        unknown = sorted(set(spec) - set(RULES))
        if unknown:
            raise InvalidOptionError(
                name, f"unknown validation rule(s): {', '.join(unknown)}"
            )
        for rule, options in spec.items():
            if rule in _OPTION_CHECKS:
                _OPTION_CHECKS[rule](name, options)
        self._bindings[name] = dict(spec)
        logger.debug("Bound validation %s to '%s'", sorted(spec), name)

    def unbind(self, name: str) -> None:
        """Drop any binding for an attribute; a no-op if there is none."""
        if self._bindings.pop(name, None) is not None:
            logger.debug("Unbound validation from '%s'", name)

    def bindings(self) -> dict[str, dict[str, Any]]:
        return {name: dict(spec) for name, spec in self._bindings.items()}

    def validate(self, obj: Any) -> ValidationResult:
        """Run every bound rule against an object's current attribute values.

        Values are read through the generated getters, so readers apply.
        """
        result = ValidationResult()
        registry = type(obj).attribute_registry
        for name, spec in self._bindings.items():
            definition = registry.fetch(name)
            value = getattr(obj, name)
            for rule, options in spec.items():
                RULES[rule](definition, value, options, result)
        return result

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
