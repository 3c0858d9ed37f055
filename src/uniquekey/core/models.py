"""Core domain models for uniquekey.

Definitions and requests are immutable Pydantic models. Candidate batches are
plain mutable containers that only live inside one ``allocate`` call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from uniquekey.core.errors import InvalidDefinition

# ---------------------------------------------------------------------------
# Key definition
# ---------------------------------------------------------------------------


class KeyDefinition(BaseModel):
    """Named configuration for one family of keys: prefix, length and target."""

    model_config = ConfigDict(frozen=True)

    name: str
    prefix: str
    total_length: int
    target_entity: str
    target_field: str

    @property
    def digit_count(self) -> int:
        """Number of random digits following the prefix."""
        return self.total_length - len(self.prefix)

    def validate_shape(self) -> None:
        """Raise :class:`InvalidDefinition` if this definition cannot yield keys."""
        if not self.name:
            raise InvalidDefinition(self.name, "name must not be empty")
        if self.total_length <= len(self.prefix):
            raise InvalidDefinition(
                self.name,
                f"total_length {self.total_length} must exceed prefix length {len(self.prefix)}",
            )
        if not self.target_entity or not self.target_field:
            raise InvalidDefinition(self.name, "target_entity and target_field are required")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class KeyRequest(BaseModel):
    """One key wanted for the named definition."""

    model_config = ConfigDict(frozen=True)

    definition_name: str


# ---------------------------------------------------------------------------
# Candidate batch
# ---------------------------------------------------------------------------


@dataclass
class CandidateBatch:
    """Generated candidates for one definition and the subset already stored."""

    definition: KeyDefinition
    candidates: list[str]
    used: set[str] = field(default_factory=set)

    def belongs_to(self, definition: KeyDefinition) -> bool:
        return self.definition == definition


# ---------------------------------------------------------------------------
# Allocator configuration
# ---------------------------------------------------------------------------


class AllocatorConfig(BaseModel):
    """Tunables for :class:`~uniquekey.core.allocator.UniqueKeyAllocator`."""

    max_refresh_cycles: int = Field(default=1000, ge=1)
    batch_size: int = Field(default=10, ge=1)
