"""Single-call entry point used by automation and workflow triggers."""

from __future__ import annotations

import random
from collections.abc import Iterable

from uniquekey.core.allocator import UniqueKeyAllocator
from uniquekey.core.generator import CandidateGenerator
from uniquekey.core.models import AllocatorConfig, KeyRequest
from uniquekey.store.base import DefinitionResolver, ExistenceChecker


def generate_keys(
    definition_names: Iterable[str],
    resolver: DefinitionResolver,
    checker: ExistenceChecker,
    *,
    config: AllocatorConfig | None = None,
    rng: random.Random | None = None,
) -> list[str]:
    """Return one unique key per definition name, in the given order.

    Example: generate_keys(["invoice", "invoice"], defs, store)
    -> ["INV004512", "INV771208"]
    """
    config = config or AllocatorConfig()
    requests = [KeyRequest(definition_name=name) for name in definition_names]
    allocator = UniqueKeyAllocator(
        resolver,
        checker,
        generator=CandidateGenerator(rng=rng, batch_size=config.batch_size),
        config=config,
    )
    return allocator.allocate(requests)
