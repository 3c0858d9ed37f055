"""Dict-backed collaborators for embedding, the CLI and tests."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence

from uniquekey.core.models import KeyDefinition

logger = logging.getLogger(__name__)


class InMemoryDefinitionStore:
    """Definitions held in a plain dict keyed by name."""

    def __init__(self, definitions: Iterable[KeyDefinition] = ()) -> None:
        self._definitions: dict[str, KeyDefinition] = {}
        for definition in definitions:
            self.add(definition)

    def add(self, definition: KeyDefinition) -> None:
        if definition.name in self._definitions:
            logger.warning("Replacing key definition '%s'", definition.name)
        self._definitions[definition.name] = definition

    def resolve(self, name: str) -> KeyDefinition | None:
        return self._definitions.get(name)

    def names(self) -> list[str]:
        return sorted(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


class InMemoryKeyStore:
    """Stored key values per (entity, field) column.

    ``lookup_count`` records how many :meth:`find_used` round-trips were made.
    """

    def __init__(self) -> None:
        self._columns: defaultdict[tuple[str, str], set[str]] = defaultdict(set)
        self.lookup_count = 0

    def insert(self, entity: str, field: str, key: str) -> None:
        """Record *key* as persisted in *entity.field*."""
        self._columns[(entity, field)].add(key)

    def find_used(self, entity: str, field: str, candidates: Sequence[str]) -> set[str]:
        self.lookup_count += 1
        column = self._columns.get((entity, field), set())
        return {c for c in candidates if c in column}
