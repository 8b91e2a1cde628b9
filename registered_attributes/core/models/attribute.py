"""Attribute definition models.

An AttributeDefinition is the immutable record produced by one `attribute`
declaration. Everything the generated accessors need at call time (backing
field, multiplicity, default, transforms) lives here, so accessors can be
plain dispatchers that look the definition up by name.

- Multiplicity: single scalar vs ordered sequence
- Transforms: InlineTransform (a callable) | MethodTransform (a method name)
- AttributeDefinition: the per-attribute metadata record
"""

from enum import Enum
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field


class Multiplicity(str, Enum):
    SINGLE = "single"
    MULTIPLE = "multiple"


# =============================================================================
# Transforms
# =============================================================================


class InlineTransform(BaseModel):
    """A reader/writer given as a callable taking the value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline"] = "inline"
    function: Callable[[Any], Any]

    def apply(self, instance: object, value: Any) -> Any:
        return self.function(value)

    def describe(self) -> str:
        return getattr(self.function, "__name__", repr(self.function))


class MethodTransform(BaseModel):
    """A reader/writer given as the name of a method on the owning object.

    Resolved against the instance on every call, so subclasses may override
    the method and the method sees the rest of the instance state.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["method"] = "method"
    method_name: str

    def apply(self, instance: object, value: Any) -> Any:
        return getattr(instance, self.method_name)(value)

    def describe(self) -> str:
        return f"self.{self.method_name}"


Transform = InlineTransform | MethodTransform


# =============================================================================
# Attribute Definition
# =============================================================================


class AttributeDefinition(BaseModel):
    """Metadata for a single registered attribute.

    `datastream`/`backing_field` are both None for an attribute held on the
    object itself. For MULTIPLE attributes `default` is stored as a tuple so
    the definition never shares a mutable list with callers.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Attribute name, also the accessor name")
    datastream: str | None = Field(
        default=None, description="Name of the datastream backing this attribute"
    )
    backing_field: str | None = Field(
        default=None, description="Field within the datastream holding the values"
    )
    multiplicity: Multiplicity = Multiplicity.SINGLE
    default: Any = None
    editable: bool = True
    displayable: bool = True
    reader: Transform | None = None
    writer: Transform | None = None
    validates: Any = Field(
        default=None,
        description="Opaque validation spec bound to the validation engine",
    )
    label: str | None = None
    hint: str | None = None

    @property
    def multiple(self) -> bool:
        return self.multiplicity is Multiplicity.MULTIPLE

    @property
    def delegated(self) -> bool:
        """True when values live in a datastream rather than on the object."""
        return self.datastream is not None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def display_label(self) -> str:
        return self.label or self.name.replace("_", " ").capitalize()
