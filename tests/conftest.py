"""Shared fixtures."""

from __future__ import annotations

import pytest

from uniquekey.core.models import KeyDefinition
from uniquekey.store.memory import InMemoryDefinitionStore


def _definition(name: str, prefix: str, total_length: int) -> KeyDefinition:
    return KeyDefinition(
        name=name,
        prefix=prefix,
        total_length=total_length,
        target_entity="account",
        target_field="account_key",
    )


@pytest.fixture
def definitions() -> InMemoryDefinitionStore:
    return InMemoryDefinitionStore(
        [
            _definition("yarp", "YARP", 9),
            _definition("alpha", "A-", 8),
            _definition("beta", "BETA", 10),
        ]
    )
