"""In-process datastream: the field store registered attributes delegate to.

A Datastream holds, per declared field, an ordered list of scalar values.
It tracks which fields have ever been set so callers can tell "never set"
(defaults apply) from "set to nothing" (defaults no longer apply).

Host classes declare datastreams in their body:

    class Work(DomainObject):
        properties = has_metadata(fields=["title", "creator"])

and every instance gets its own fresh Datastream under `work.properties`.
"""

import logging
from collections.abc import Iterable
from typing import Any

from .core.errors import UnknownFieldError
from .utils import as_list

logger = logging.getLogger(__name__)


class Datastream:
    """Named collection of multi-valued fields.

    Declared fields are also reachable as attributes (`ds.title`,
    `ds.title = [...]`), which always read and write whole lists.
    """

    def __init__(self, dsid: str, fields: Iterable[str]) -> None:
        object.__setattr__(self, "dsid", dsid)
        object.__setattr__(self, "_fields", tuple(fields))
        object.__setattr__(self, "_values", {})

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    def _check(self, field: str) -> None:
        if field not in self._fields:
            raise UnknownFieldError(self.dsid, field)

    def get(self, field: str) -> list:
        """Values of a field, empty when unset. Returns a copy."""
        self._check(field)
        return list(self._values.get(field, ()))

    def set(self, field: str, values: Any) -> None:
        """Replace the contents of a field. A scalar is stored as a one-element list."""
        self._check(field)
        self._values[field] = as_list(values)

    def is_set(self, field: str) -> bool:
        self._check(field)
        return field in self._values

    def clear(self, field: str) -> None:
        """Return a field to the never-set state."""
        self._check(field)
        self._values.pop(field, None)

    def to_dict(self) -> dict[str, list]:
        return {field: list(values) for field, values in self._values.items()}

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_") or name not in self._fields:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._fields:
            self.set(name, value)
        else:
            object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Datastream):
            return NotImplemented
        return (
            self.dsid == other.dsid
            and self._fields == other._fields
            and self._values == other._values
        )

    def __repr__(self) -> str:
        return f"Datastream({self.dsid!r}, fields={list(self._fields)!r})"


_RESERVED_FIELD_NAMES = frozenset(name for name in dir(Datastream) if not name.startswith("__"))


class DatastreamDeclaration:
    """Class-level declaration of a datastream and its fields.

    Reading the declaration on an instance returns that instance's Datastream.
    """

    def __init__(self, name: str | None = None, fields: Iterable[str] = ()) -> None:
        self.name = name
        self.fields = tuple(fields)
        for field in self.fields:
            if not isinstance(field, str) or not field.isidentifier():
                raise ValueError(f"Invalid datastream field name: {field!r}")
            if field in _RESERVED_FIELD_NAMES or field == "dsid":
                raise ValueError(f"Datastream field name {field!r} is reserved")
        if len(set(self.fields)) != len(self.fields):
            raise ValueError(f"Duplicate field names in datastream: {list(self.fields)}")

    def __set_name__(self, owner: type, name: str) -> None:
        if self.name is None:
            self.name = name
        elif self.name != name:
            raise ValueError(
                f"Datastream declared as '{self.name}' but assigned to '{name}'"
            )

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.datastreams[self.name]

    def build(self) -> Datastream:
        return Datastream(self.name, self.fields)

    def __repr__(self) -> str:
        return f"DatastreamDeclaration({self.name!r}, fields={list(self.fields)!r})"


def has_metadata(name: str | None = None, fields: Iterable[str] = ()) -> DatastreamDeclaration:
    """Declare a datastream in a class body.

    Examples:
        properties = has_metadata(fields=["title", "description"])
        properties = has_metadata("properties", ["title", "description"])
    """
    return DatastreamDeclaration(name=name, fields=fields)
