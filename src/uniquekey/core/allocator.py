"""Allocation of unique keys for an ordered list of requests.

Candidates are generated in batches and checked against the target store in
one round-trip per batch. A batch (and the used-set computed for it) carries
over to the next request when that request names the same definition, so
bulk requests against one field cost one lookup per batch rather than one
per key.

Uniqueness holds against records present in the store when each check ran
and within a single :meth:`UniqueKeyAllocator.allocate` call. Concurrent
calls, or a caller that persists keys after another caller checked them, can
still collide; guard against that with a unique constraint in the store.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from uniquekey.core.errors import (
    LookupFailed,
    UniqueKeyError,
    UniqueKeyExhausted,
    UnknownDefinition,
)
from uniquekey.core.generator import CandidateGenerator
from uniquekey.core.models import AllocatorConfig, CandidateBatch, KeyDefinition, KeyRequest
from uniquekey.metrics import (
    BATCH_REFRESHES,
    CANDIDATES_REJECTED,
    KEYS_ALLOCATED,
    LOOKUP_DURATION,
    LOOKUP_FAILURES,
)
from uniquekey.store.base import DefinitionResolver, ExistenceChecker

logger = logging.getLogger(__name__)

# Refreshes for a single request beyond this point are logged as a warning.
_SLOW_REFRESH_THRESHOLD = 10


def find_unique_key(candidates: list[str], used: set[str]) -> str | None:
    """Pop candidates off the front of *candidates* until one is not in *used*.

    The returned candidate is removed from *candidates*, as is every used
    candidate popped before it. Returns None once *candidates* is empty.
    """
    while candidates:
        candidate = candidates.pop(0)
        if candidate not in used:
            return candidate
    return None


class UniqueKeyAllocator:
    """Hands out one unused key per request, in request order.

    Parameters
    ----------
    resolver:
        Resolves definition names to :class:`KeyDefinition` objects.
    checker:
        Reports which candidates already exist in the target store.
    generator:
        Candidate source. Defaults to a :class:`CandidateGenerator` using
        ``config.batch_size``. An injected generator keeps its own batch
        size; a mismatch with ``config.batch_size`` is logged as a warning.
    config:
        Allocation limits. Defaults to :class:`AllocatorConfig`.
    """

    def __init__(
        self,
        resolver: DefinitionResolver,
        checker: ExistenceChecker,
        generator: CandidateGenerator | None = None,
        config: AllocatorConfig | None = None,
    ) -> None:
        self._resolver = resolver
        self._checker = checker
        self._config = config or AllocatorConfig()
        if generator is None:
            generator = CandidateGenerator(batch_size=self._config.batch_size)
        elif generator.batch_size != self._config.batch_size:
            logger.warning(
                "Generator batch size %d overrides configured batch_size %d",
                generator.batch_size,
                self._config.batch_size,
            )
        self._generator = generator

    def allocate(self, requests: Sequence[KeyRequest]) -> list[str]:
        """Return one key per request, in the same order, with no repeats.

        Raises:
            UnknownDefinition: A request names a definition that does not exist.
            InvalidDefinition: A definition's length leaves no room for digits.
            LookupFailed: The existence check failed. Errors a checker raises
                that are not :class:`UniqueKeyError` are wrapped in it.
            UniqueKeyExhausted: ``max_refresh_cycles`` batches held no unused key.
        """
        if not requests:
            return []

        definitions: dict[str, KeyDefinition] = {}
        issued: set[str] = set()
        keys: list[str] = []
        batch: CandidateBatch | None = None

        for request in requests:
            definition = definitions.get(request.definition_name)
            if definition is None:
                definition = self._resolve(request.definition_name)
                definitions[request.definition_name] = definition

            if batch is None:
                reason: str | None = "initial"
            elif not batch.belongs_to(definition):
                reason = "definition_changed"
            else:
                reason = None

            refreshes = 0
            while True:
                if reason is not None:
                    if refreshes >= self._config.max_refresh_cycles:
                        raise UniqueKeyExhausted(definition.name, refreshes)
                    batch = self._refresh(definition, issued, reason)
                    refreshes += 1
                    if refreshes == _SLOW_REFRESH_THRESHOLD + 1:
                        logger.warning(
                            "Definition '%s' needed more than %d batches for one key; "
                            "its key space may be nearly full",
                            definition.name,
                            _SLOW_REFRESH_THRESHOLD,
                        )

                assert batch is not None
                before = len(batch.candidates)
                key = find_unique_key(batch.candidates, batch.used)
                rejected = before - len(batch.candidates) - (1 if key is not None else 0)
                if rejected:
                    CANDIDATES_REJECTED.labels(definition=definition.name).inc(rejected)
                if key is not None:
                    break
                reason = "exhausted"

            issued.add(key)
            keys.append(key)
            KEYS_ALLOCATED.labels(definition=definition.name).inc()

        logger.info("Allocated %d keys for %d definitions", len(keys), len(definitions))
        return keys

    # -- Internal helpers ------------------------------------------------

    def _resolve(self, name: str) -> KeyDefinition:
        definition = self._resolver.resolve(name)
        if definition is None:
            raise UnknownDefinition(name)
        definition.validate_shape()
        return definition

    def _refresh(self, definition: KeyDefinition, issued: set[str], reason: str) -> CandidateBatch:
        """Generate a new batch for *definition* and compute its used-set."""
        candidates = self._generator.generate(definition.total_length, definition.prefix)

        started = time.perf_counter()
        try:
            used = self._checker.find_used(
                definition.target_entity, definition.target_field, candidates
            )
        except LookupFailed:
            LOOKUP_FAILURES.inc()
            raise
        except UniqueKeyError:
            raise
        except Exception as exc:
            LOOKUP_FAILURES.inc()
            raise LookupFailed(
                definition.target_entity, definition.target_field, f"{type(exc).__name__}: {exc}"
            ) from exc
        finally:
            LOOKUP_DURATION.observe(time.perf_counter() - started)

        BATCH_REFRESHES.labels(definition=definition.name, reason=reason).inc()
        # Keys issued earlier in this call are not in the store yet.
        used = set(used) | issued.intersection(candidates)
        logger.debug(
            "Refreshed batch for '%s' (%s): %d candidates, %d in use",
            definition.name,
            reason,
            len(candidates),
            len(used),
        )
        return CandidateBatch(definition=definition, candidates=candidates, used=used)
