"""Random candidate generation for prefixed numeric keys.

Candidates are formatted as "<prefix><digits>" where the digits are drawn
independently and uniformly from 0-9. A batch never holds the same
candidate twice.
"""

from __future__ import annotations

import random

from uniquekey.core.errors import InvalidDefinition

DEFAULT_BATCH_SIZE = 10

_DIGITS = "0123456789"


class CandidateGenerator:
    """Produces batches of distinct candidate keys.

    Parameters
    ----------
    rng:
        Source of randomness. Defaults to a fresh :class:`random.Random`;
        pass a seeded instance for reproducible output.
    batch_size:
        Number of candidates per batch.
    """

    def __init__(self, rng: random.Random | None = None, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._rng = rng or random.Random()
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def generate(self, length: int, prefix: str) -> list[str]:
        """Return a batch of distinct candidates of *length* characters.

        Example: generate(9, "YARP") -> ["YARP04417", "YARP91203", ...]

        Raises:
            InvalidDefinition: If *length* does not leave room for any digit.
        """
        digits = length - len(prefix)
        if digits <= 0:
            raise InvalidDefinition(
                prefix, f"length {length} must exceed prefix length {len(prefix)}"
            )

        # Tiny digit spaces cannot fill a batch; hand back every value instead.
        space = 10**digits
        if space <= self._batch_size:
            values = [f"{prefix}{n:0{digits}d}" for n in range(space)]
            self._rng.shuffle(values)
            return values

        seen: set[str] = set()
        batch: list[str] = []
        while len(batch) < self._batch_size:
            candidate = prefix + "".join(self._rng.choices(_DIGITS, k=digits))
            if candidate in seen:
                continue
            seen.add(candidate)
            batch.append(candidate)
        return batch
