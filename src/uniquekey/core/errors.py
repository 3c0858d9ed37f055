"""Exceptions raised while allocating unique keys.

Every error here is fatal for the whole ``allocate`` call: no partial list of
keys is ever returned.
"""

from __future__ import annotations


class UniqueKeyError(Exception):
    """Base class for all unique key allocation failures."""


class UnknownDefinition(UniqueKeyError):
    """A request named a definition the resolver does not know."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown key definition: '{name}'")


class InvalidDefinition(UniqueKeyError):
    """A definition cannot produce keys (e.g. length not above prefix length)."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid key definition '{name}': {reason}")


class LookupFailed(UniqueKeyError):
    """The existence check against the target store failed."""

    def __init__(self, entity: str, field: str, cause: str) -> None:
        self.entity = entity
        self.field = field
        self.cause = cause
        super().__init__(f"Lookup on {entity}.{field} failed: {cause}")


class UniqueKeyExhausted(UniqueKeyError):
    """No unused candidate was found within the allowed number of refreshes."""

    def __init__(self, name: str, cycles: int) -> None:
        self.name = name
        self.cycles = cycles
        super().__init__(
            f"No unused key found for definition '{name}' after {cycles} batch refreshes"
        )
