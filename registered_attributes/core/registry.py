"""Per-class attribute registry.

Each host class owns one AttributeRegistry. A subclass starts from a copy of
its parent's registry at class-definition time and then appends its own
declarations, so:

- the parent's registry never sees a child's attributes,
- the child inherits every parent definition including reader/writer/validation,
- attributes added to the parent later do not reach already-defined children.

Definitions are immutable, so the copy shares them by reference.
"""

import logging
from collections.abc import Iterator

from .errors import NotRegisteredError
from .models import AttributeDefinition

logger = logging.getLogger(__name__)


class AttributeRegistry:
    """Ordered mapping of attribute name to AttributeDefinition."""

    def __init__(
        self,
        owner: str | None = None,
        definitions: dict[str, AttributeDefinition] | None = None,
    ) -> None:
        self.owner = owner
        self._definitions: dict[str, AttributeDefinition] = dict(definitions or {})

    def copy(self, owner: str | None = None) -> "AttributeRegistry":
        """Snapshot this registry for a subclass."""
        logger.debug(
            "Copying attribute registry %s -> %s (%d attributes)",
            self.owner,
            owner,
            len(self._definitions),
        )
        return AttributeRegistry(owner=owner, definitions=self._definitions)

    def register(self, definition: AttributeDefinition) -> AttributeDefinition:
        """Insert or overwrite a definition.

        Re-registering an existing name keeps its original position.
        """
        if definition.name in self._definitions:
            logger.debug("Overwriting attribute '%s' on %s", definition.name, self.owner)
        self._definitions[definition.name] = definition
        return definition

    def fetch(self, name: str) -> AttributeDefinition:
        """Get a definition by name.

        Raises:
            NotRegisteredError: If no class in the chain declared `name`.
        """
        try:
            return self._definitions[name]
        except KeyError:
            raise NotRegisteredError(name, self.owner) from None

    def get(self, name: str) -> AttributeDefinition | None:
        return self._definitions.get(name)

    def names(self) -> list[str]:
        """Attribute names in declaration order, inherited ones first."""
        return list(self._definitions)

    def definitions(self) -> list[AttributeDefinition]:
        return list(self._definitions.values())

    def editable_attributes(self) -> list[AttributeDefinition]:
        return [d for d in self._definitions.values() if d.editable]

    def displayable_attributes(self) -> list[AttributeDefinition]:
        return [d for d in self._definitions.values() if d.displayable]

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[AttributeDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"AttributeRegistry(owner={self.owner!r}, names={self.names()!r})"
