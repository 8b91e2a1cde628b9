"""Validation result models.

Validation never raises: checks append ValidationIssue entries to a
ValidationResult, keyed by `location` (the attribute name).
"""

from enum import Enum

from pydantic import BaseModel, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    """A single problem found while validating an object."""

    severity: Severity
    category: str = Field(description="Rule that produced the issue, e.g. PRESENCE")
    location: str = Field(description="Attribute name the issue belongs to")
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        return f"[{self.category}] {self.location}: {self.message}"


class ValidationResult(BaseModel):
    """Collection of validation issues for one object."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(
        self,
        category: str,
        location: str,
        message: str,
        suggestion: str | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=Severity.ERROR,
                category=category,
                location=location,
                message=message,
                suggestion=suggestion,
            )
        )

    def add_warning(
        self,
        category: str,
        location: str,
        message: str,
        suggestion: str | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=Severity.WARNING,
                category=category,
                location=location,
                message=message,
                suggestion=suggestion,
            )
        )

    def for_attribute(self, name: str) -> list[str]:
        """Error messages recorded against one attribute."""
        return [i.message for i in self.errors if i.location == name]

    def __getitem__(self, name: str) -> list[str]:
        return self.for_attribute(name)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)
