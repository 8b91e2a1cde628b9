"""Core attribute machinery: definitions, registry, option checking, accessors."""

from .errors import (
    RegisteredAttributeError,
    NotRegisteredError,
    InvalidOptionError,
    UnknownFieldError,
)
from .registry import AttributeRegistry
from .options import RECOGNIZED_OPTIONS, build_definition, check_name
from .accessors import AttributeAccessor, generate_accessors, read_value, write_value

__all__ = [
    "RegisteredAttributeError",
    "NotRegisteredError",
    "InvalidOptionError",
    "UnknownFieldError",
    "AttributeRegistry",
    "RECOGNIZED_OPTIONS",
    "build_definition",
    "check_name",
    "AttributeAccessor",
    "generate_accessors",
    "read_value",
    "write_value",
]
