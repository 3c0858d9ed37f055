"""Existence checks against a SQLite table."""

from __future__ import annotations

import logging
import re
import sqlite3
from collections.abc import Sequence

from uniquekey.core.errors import LookupFailed

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SqliteKeyStore:
    """Read-only :class:`~uniquekey.store.base.ExistenceChecker` over SQLite.

    Each :meth:`find_used` call is one query that returns the candidates a
    row already matches. Equality is decided by SQLite, so the column's
    collation and type affinity apply: a ``COLLATE NOCASE`` column holding
    ``yarp00001`` takes ``YARP00001``, and an INTEGER column holding ``12``
    takes ``0012``.

    Entity and field names are interpolated into the SQL, so they must be
    plain identifiers.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection

    def find_used(self, entity: str, field: str, candidates: Sequence[str]) -> set[str]:
        if not _IDENTIFIER.match(entity) or not _IDENTIFIER.match(field):
            raise LookupFailed(entity, field, "entity and field must be plain identifiers")
        if not candidates:
            return set()

        values = ", ".join("(?)" for _ in candidates)
        sql = (
            f"WITH candidate(value) AS (VALUES {values}) "
            f"SELECT value FROM candidate WHERE EXISTS "
            f'(SELECT 1 FROM "{entity}" WHERE "{entity}"."{field}" = candidate.value)'
        )
        try:
            rows = self._conn.execute(sql, list(candidates)).fetchall()
        except sqlite3.Error as exc:
            logger.error("Existence check on %s.%s failed: %s", entity, field, exc)
            raise LookupFailed(entity, field, str(exc)) from exc

        return {row[0] for row in rows}
