"""Pydantic models for registered attributes.

- attribute.py: AttributeDefinition, Multiplicity, reader/writer transforms
- validation.py: Validation issues and result sets
"""

from .attribute import (
    Multiplicity,
    InlineTransform,
    MethodTransform,
    Transform,
    AttributeDefinition,
)
from .validation import (
    Severity,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Attributes
    "Multiplicity",
    "InlineTransform",
    "MethodTransform",
    "Transform",
    "AttributeDefinition",
    # Validation
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
