"""Capability interfaces the allocator needs from the outside world."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from uniquekey.core.models import KeyDefinition


class DefinitionResolver(Protocol):
    """Looks up key definitions by name (the configuration store)."""

    def resolve(self, name: str) -> KeyDefinition | None:
        """Return the definition called *name*, or None if there is none."""
        ...


class ExistenceChecker(Protocol):
    """Answers "which of these keys are already taken?" (the data store).

    Implementations must answer with a single batched lookup per call, must
    not modify the store, and must raise
    :class:`~uniquekey.core.errors.LookupFailed` on any store error.
    """

    def find_used(self, entity: str, field: str, candidates: Sequence[str]) -> set[str]:
        """Return exactly the members of *candidates* stored in *entity.field*."""
        ...
