"""Registered attributes: declarative, datastream-delegating accessors for domain objects.

Classes declare named attributes backed by a datastream field (or held on the
object), and get generated getters/setters applying defaults, single vs
multi-valued shaping, blank filtering, reader/writer transforms and
validation bindings. Registrations are inherited by subclasses and never
leak back to ancestors.
"""

__version__ = "0.1.0"

from .core import (
    AttributeRegistry,
    InvalidOptionError,
    NotRegisteredError,
    RegisteredAttributeError,
    UnknownFieldError,
)
from .core.models import (
    AttributeDefinition,
    InlineTransform,
    MethodTransform,
    Multiplicity,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from .datastream import Datastream, DatastreamDeclaration, has_metadata
from .model import AttributeDeclaration, DomainObject, attribute
from .validation import ValidationEngine

__all__ = [
    "__version__",
    # Host
    "DomainObject",
    "attribute",
    "AttributeDeclaration",
    # Datastreams
    "Datastream",
    "DatastreamDeclaration",
    "has_metadata",
    # Registry & models
    "AttributeRegistry",
    "AttributeDefinition",
    "Multiplicity",
    "InlineTransform",
    "MethodTransform",
    # Validation
    "ValidationEngine",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    # Errors
    "RegisteredAttributeError",
    "NotRegisteredError",
    "InvalidOptionError",
    "UnknownFieldError",
]
