"""Host base class and the attribute declaration surface.

Declare datastreams and attributes in a class body:

    class Work(DomainObject):
        properties = has_metadata(fields=["title", "creator"])

        title = attribute(datastream="properties", validates={"presence": True})
        creator = attribute(datastream="properties", writer=str.upper)
        notes = attribute(multiple=True)

or imperatively with `Work.register_attribute("title", datastream="properties")`.

Each subclass snapshots its parent's registry, validation bindings and
datastream declarations in __init_subclass__, then applies its own
declarations on top in body order.
"""

import logging
import threading
from types import MethodType
from typing import Any, Callable, ClassVar

from .core.accessors import AttributeAccessor, generate_accessors, read_value, write_value
from .core.errors import InvalidOptionError
from .core.models import AttributeDefinition, ValidationResult
from .core.options import build_definition
from .core.registry import AttributeRegistry
from .datastream import Datastream, DatastreamDeclaration
from .validation import ValidationEngine

logger = logging.getLogger(__name__)

# Guards registry snapshots and registration across threads defining classes
_REGISTRY_LOCK = threading.RLock()


class AttributeDeclaration:
    """Placeholder left in a class body by `attribute(...)`.

    Replaced by the generated accessor when the class is created.
    """

    def __init__(self, name: str | None, options: dict[str, Any]) -> None:
        self.name = name
        self.options = options
        self.assigned_name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        # Mismatches are raised from DomainObject.__init_subclass__; errors
        # raised here would surface as RuntimeError before Python 3.12
        self.assigned_name = name
        if self.name is None:
            self.name = name

    def check_assignment(self) -> None:
        if self.assigned_name is not None and self.name != self.assigned_name:
            raise InvalidOptionError(
                self.assigned_name,
                f"declared as '{self.name}' but assigned to '{self.assigned_name}'",
            )

    def __repr__(self) -> str:
        return f"AttributeDeclaration({self.name!r}, {self.options!r})"


def attribute(name: str | None = None, **options: Any) -> AttributeDeclaration:
    """Declare a registered attribute in a DomainObject class body.

    Options: datastream, field, default, multiple, editable, displayable,
    reader, writer, validates, label, hint.

    `field` (or its alias `backing_field`) names the slot inside `datastream`
    and defaults to the attribute name. It is only accepted together with
    `datastream`; an attribute without one is stored on the object itself.
    """
    return AttributeDeclaration(name, options)


class class_or_instance_method:
    """Method with separate class-level and instance-level implementations."""

    def __init__(self, for_class: Callable) -> None:
        self.for_class = for_class
        self.for_instance: Callable | None = None
        self.__doc__ = for_class.__doc__

    def instance(self, for_instance: Callable) -> "class_or_instance_method":
        self.for_instance = for_instance
        return self

    def __get__(self, instance: Any, owner: type) -> Callable:
        if instance is None or self.for_instance is None:
            return MethodType(self.for_class, owner)
        return MethodType(self.for_instance, instance)


class DomainObject:
    """Base class for objects with registered attributes."""

    attribute_registry: ClassVar[AttributeRegistry] = AttributeRegistry(owner="DomainObject")
    validation_engine: ClassVar[ValidationEngine] = ValidationEngine()
    datastream_declarations: ClassVar[dict[str, DatastreamDeclaration]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        with _REGISTRY_LOCK:
            # Inherited class attributes still point at the parent's objects here
            cls.attribute_registry = cls.attribute_registry.copy(owner=cls.__qualname__)
            cls.validation_engine = cls.validation_engine.copy()

            declarations = dict(cls.datastream_declarations)
            for value in vars(cls).values():
                if isinstance(value, DatastreamDeclaration):
                    declarations[value.name] = value
            cls.datastream_declarations = declarations

            pending = [
                (name, value)
                for name, value in vars(cls).items()
                if isinstance(value, AttributeDeclaration)
            ]
            for _, declaration in pending:
                declaration.check_assignment()
            for name, declaration in pending:
                cls.register_attribute(name, **declaration.options)

        logger.debug(
            "Defined %s with %d registered attribute(s)",
            cls.__qualname__,
            len(cls.attribute_registry),
        )

    # ── Registration ──

    @classmethod
    def _reserved_names(cls) -> set[str]:
        reserved = {"datastreams", *cls.datastream_declarations}
        for klass in cls.__mro__:
            for key, value in vars(klass).items():
                if not isinstance(value, (AttributeAccessor, AttributeDeclaration)):
                    reserved.add(key)
        return reserved

    @classmethod
    def register_attribute(cls, name: str, **options: Any) -> AttributeDefinition:
        """Declare an attribute on this class.

        Builds the definition, binds its validation spec, registers it and
        installs the generated getter/setter.

        Raises:
            InvalidOptionError: If the options are unrecognized or ill-typed.
        """
        with _REGISTRY_LOCK:
            definition = build_definition(
                name,
                options,
                datastreams={
                    ds_name: declaration.fields
                    for ds_name, declaration in cls.datastream_declarations.items()
                },
                has_method=lambda method_name: callable(getattr(cls, method_name, None)),
                reserved=cls._reserved_names(),
            )
            if definition.validates is not None:
                cls.validation_engine.bind(name, definition.validates)
            else:
                # A redeclaration replaces any rule inherited for this name
                cls.validation_engine.unbind(name)
            cls.attribute_registry.register(definition)
            generate_accessors(cls, definition)

        logger.debug("Registered attribute %s.%s", cls.__qualname__, name)
        return definition

    # ── Class-level queries ──

    @classmethod
    def registered_attribute_names(cls) -> list[str]:
        return cls.attribute_registry.names()

    @class_or_instance_method
    def editable_attributes(cls) -> list[AttributeDefinition]:
        """Definitions not declared with editable=False, in declaration order."""
        return cls.attribute_registry.editable_attributes()

    @class_or_instance_method
    def displayable_attributes(cls) -> list[AttributeDefinition]:
        """Definitions not declared with displayable=False, in declaration order."""
        return cls.attribute_registry.displayable_attributes()

    @class_or_instance_method
    def terms_for_editing(cls) -> list[str]:
        return [d.name for d in cls.editable_attributes()]

    @class_or_instance_method
    def terms_for_display(cls) -> list[str]:
        return [d.name for d in cls.displayable_attributes()]

    # ── Instance-level queries ──

    @editable_attributes.instance
    def editable_attributes(self) -> list[AttributeDefinition]:
        return [
            d
            for d in type(self).attribute_registry.editable_attributes()
            if self.attribute_is_editable(d)
        ]

    @displayable_attributes.instance
    def displayable_attributes(self) -> list[AttributeDefinition]:
        return [
            d
            for d in type(self).attribute_registry.displayable_attributes()
            if self.attribute_is_displayable(d)
        ]

    @terms_for_editing.instance
    def terms_for_editing(self) -> list[str]:
        return [d.name for d in self.editable_attributes()]

    @terms_for_display.instance
    def terms_for_display(self) -> list[str]:
        return [d.name for d in self.displayable_attributes()]

    def attribute_is_editable(self, definition: AttributeDefinition) -> bool:
        """Hook for per-instance narrowing of editable attributes."""
        return True

    def attribute_is_displayable(self, definition: AttributeDefinition) -> bool:
        """Hook for per-instance narrowing of displayable attributes."""
        return True

    # ── Instance state ──

    def __init__(self, **attributes: Any) -> None:
        self.datastreams: dict[str, Datastream] = {
            name: declaration.build()
            for name, declaration in type(self).datastream_declarations.items()
        }
        self._attribute_values: dict[str, Any] = {}
        self._errors = ValidationResult()
        for name, value in attributes.items():
            self.write_attribute(name, value)

    def read_attribute(self, name: str) -> Any:
        """Read an attribute by name through its getter pipeline.

        Raises:
            NotRegisteredError: If `name` is not registered on this class.
        """
        return read_value(self, type(self).attribute_registry.fetch(name))

    def write_attribute(self, name: str, value: Any) -> None:
        """Write an attribute by name through its setter pipeline.

        Raises:
            NotRegisteredError: If `name` is not registered on this class.
        """
        write_value(self, type(self).attribute_registry.fetch(name), value)

    def attributes(self) -> dict[str, Any]:
        """Current getter values of every registered attribute."""
        return {
            name: self.read_attribute(name)
            for name in type(self).attribute_registry.names()
        }

    # ── Validation ──

    def valid(self) -> bool:
        """Run bound validations; results are kept on `errors`."""
        self._errors = type(self).validation_engine.validate(self)
        return self._errors.valid

    @property
    def errors(self) -> ValidationResult:
        return self._errors

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.attributes().items())
        return f"{type(self).__name__}({values})"
