"""Generated attribute accessors and the value pipeline.

Each registered attribute becomes an AttributeAccessor data descriptor on the
owning class. The descriptor holds only the attribute name; on every access it
fetches the definition from the instance's class registry and runs a fixed
pipeline, so subclasses that redeclare an attribute get their own behavior
without regenerating anything.

Read:  load (datastream field or local value) → default if unset →
       reader if declared, else unwrap to scalar for SINGLE.
Write: wrap to list + drop blanks for MULTIPLE → writer if declared →
       replace stored contents.

Host objects provide `datastreams` (name → Datastream) and
`_attribute_values` (dict for attributes without a datastream).
"""

import logging
from typing import Any

from ..config import get_config
from ..utils import as_list, compact_blanks
from .errors import NotRegisteredError
from .models import AttributeDefinition

logger = logging.getLogger(__name__)


# =============================================================================
# Value pipeline
# =============================================================================


def _default_value(definition: AttributeDefinition) -> Any:
    if definition.multiple:
        return list(definition.default or ())
    return definition.default


def _load(instance: Any, definition: AttributeDefinition) -> Any:
    """Current stored value in accessor shape, defaulted when unset."""
    if definition.delegated:
        store = instance.datastreams[definition.datastream]
        if not store.is_set(definition.backing_field):
            return _default_value(definition)
        values = store.get(definition.backing_field)
        if definition.multiple:
            return values
        return values[0] if values else None

    local = instance._attribute_values
    if definition.name not in local:
        return _default_value(definition)
    value = local[definition.name]
    return list(value) if definition.multiple else value


def read_value(instance: Any, definition: AttributeDefinition) -> Any:
    """Run the getter pipeline for one attribute."""
    value = _load(instance, definition)
    if definition.reader is not None:
        return definition.reader.apply(instance, value)
    return value


def write_value(instance: Any, definition: AttributeDefinition, value: Any) -> None:
    """Run the setter pipeline for one attribute.

    Setters replace stored contents; nothing is appended.
    """
    if definition.multiple:
        value = compact_blanks(
            as_list(value), strip_whitespace=get_config().strip_whitespace
        )
    if definition.writer is not None:
        value = definition.writer.apply(instance, value)

    if definition.delegated:
        if definition.multiple:
            stored = as_list(value)
        else:
            stored = [] if value is None else [value]
        instance.datastreams[definition.datastream].set(
            definition.backing_field, stored
        )
    elif definition.multiple:
        instance._attribute_values[definition.name] = as_list(value)
    else:
        instance._attribute_values[definition.name] = value


# =============================================================================
# Descriptor
# =============================================================================


class AttributeAccessor:
    """Getter/setter for one registered attribute.

    Accessed on the class, returns the class's AttributeDefinition.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.__doc__ = f"Registered attribute '{name}'."

    def _definition(self, owner: type) -> AttributeDefinition:
        # An accessor inherited from a parent that registered the name after
        # `owner` was defined is not part of `owner`'s registry
        try:
            return owner.attribute_registry.fetch(self.name)
        except NotRegisteredError as exc:
            raise AttributeError(str(exc)) from exc

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self._definition(owner)
        return read_value(instance, self._definition(type(instance)))

    def __set__(self, instance: Any, value: Any) -> None:
        write_value(instance, self._definition(type(instance)), value)

    def __repr__(self) -> str:
        return f"AttributeAccessor({self.name!r})"


def generate_accessors(owner: type, definition: AttributeDefinition) -> AttributeAccessor:
    """Install the accessor for `definition` on `owner`."""
    accessor = AttributeAccessor(definition.name)
    setattr(owner, definition.name, accessor)
    logger.debug("Generated accessors for %s.%s", owner.__name__, definition.name)
    return accessor
