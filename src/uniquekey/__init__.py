"""Prefixed, collision-checked unique key generation."""

from uniquekey.core.allocator import UniqueKeyAllocator
from uniquekey.core.errors import (
    InvalidDefinition,
    LookupFailed,
    UniqueKeyError,
    UniqueKeyExhausted,
    UnknownDefinition,
)
from uniquekey.core.generator import CandidateGenerator
from uniquekey.core.models import AllocatorConfig, KeyDefinition, KeyRequest
from uniquekey.core.service import generate_keys

__all__ = [
    "AllocatorConfig",
    "CandidateGenerator",
    "InvalidDefinition",
    "KeyDefinition",
    "KeyRequest",
    "LookupFailed",
    "UniqueKeyAllocator",
    "UniqueKeyError",
    "UniqueKeyExhausted",
    "UnknownDefinition",
    "generate_keys",
]
