"""Exceptions raised by the attribute registry and its collaborators.

Reader/writer transforms are caller code: whatever they raise reaches the
accessor's caller untouched, so there is no wrapper class for them here.
"""


class RegisteredAttributeError(Exception):
    """Base class for registered attribute errors."""

    pass


class NotRegisteredError(RegisteredAttributeError, KeyError):
    """Raised when an attribute name was never declared on a class or its ancestors.

    This is distinct from an attribute that exists but has no value, which
    simply reads back as its default (or None / an empty list).
    """

    def __init__(self, name: str, owner: str | None = None):
        self.name = name
        self.owner = owner
        where = f" on {owner}" if owner else ""
        super().__init__(f"attribute '{name}' is not registered{where}")

    def __str__(self) -> str:
        # KeyError.__str__ repr()s its argument
        return self.args[0]


class InvalidOptionError(RegisteredAttributeError, ValueError):
    """Raised at declaration time for an unrecognized or ill-typed option."""

    def __init__(self, attribute: str, message: str):
        self.attribute = attribute
        super().__init__(f"attribute '{attribute}': {message}")


class UnknownFieldError(RegisteredAttributeError, KeyError):
    """Raised when a datastream is asked for a field it does not declare."""

    def __init__(self, datastream: str, field: str):
        self.datastream = datastream
        self.field = field
        super().__init__(f"datastream '{datastream}' has no field '{field}'")

    def __str__(self) -> str:
        return self.args[0]
