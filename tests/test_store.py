"""Tests for the in-memory and SQLite collaborators."""

from __future__ import annotations

import sqlite3

import pytest

from uniquekey.core.errors import LookupFailed
from uniquekey.core.models import KeyDefinition
from uniquekey.store.memory import InMemoryDefinitionStore, InMemoryKeyStore
from uniquekey.store.sqlite import SqliteKeyStore


def _definition(name: str = "yarp", prefix: str = "YARP", total_length: int = 9) -> KeyDefinition:
    return KeyDefinition(
        name=name,
        prefix=prefix,
        total_length=total_length,
        target_entity="account",
        target_field="account_key",
    )


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE account (id INTEGER PRIMARY KEY, account_key TEXT)")
    connection.executemany(
        "INSERT INTO account (account_key) VALUES (?)",
        [("YARP00001",), ("YARP00004",), ("OTHER0001",)],
    )
    connection.commit()
    yield connection
    connection.close()


class TestInMemoryDefinitionStore:
    def test_resolve(self):
        store = InMemoryDefinitionStore([_definition("yarp")])
        assert store.resolve("yarp").prefix == "YARP"
        assert store.resolve("missing") is None

    def test_later_definition_replaces_earlier(self):
        store = InMemoryDefinitionStore()
        store.add(_definition("yarp", "OLD", 8))
        store.add(_definition("yarp", "NEW", 8))
        assert store.resolve("yarp").prefix == "NEW"
        assert len(store) == 1

    def test_names_sorted(self):
        store = InMemoryDefinitionStore([_definition("b"), _definition("a")])
        assert store.names() == ["a", "b"]


class TestInMemoryKeyStore:
    def test_find_used_is_exact_subset(self):
        store = InMemoryKeyStore()
        store.insert("account", "account_key", "YARP00001")
        store.insert("account", "account_key", "YARP00009")
        used = store.find_used("account", "account_key", ["YARP00001", "YARP00002"])
        assert used == {"YARP00001"}

    def test_columns_are_separate(self):
        store = InMemoryKeyStore()
        store.insert("account", "account_key", "YARP00001")
        assert store.find_used("contact", "account_key", ["YARP00001"]) == set()
        assert store.find_used("account", "other_key", ["YARP00001"]) == set()

    def test_counts_lookups(self):
        store = InMemoryKeyStore()
        store.find_used("account", "account_key", ["A"])
        store.find_used("account", "account_key", ["B"])
        assert store.lookup_count == 2


class TestSqliteKeyStore:
    def test_find_used(self, conn):
        store = SqliteKeyStore(conn)
        candidates = ["YARP00001", "YARP00002", "YARP00003", "YARP00004"]
        assert store.find_used("account", "account_key", candidates) == {"YARP00001", "YARP00004"}

    def test_output_is_subset_of_input(self, conn):
        used = SqliteKeyStore(conn).find_used("account", "account_key", ["YARP00002"])
        assert used == set()

    def test_empty_candidates(self, conn):
        assert SqliteKeyStore(conn).find_used("account", "account_key", []) == set()

    def test_does_not_modify_table(self, conn):
        SqliteKeyStore(conn).find_used("account", "account_key", ["YARP00002"])
        assert conn.execute("SELECT COUNT(*) FROM account").fetchone()[0] == 3

    def test_missing_table(self, conn):
        with pytest.raises(LookupFailed, match="no such table"):
            SqliteKeyStore(conn).find_used("contact", "account_key", ["YARP00001"])

    def test_malformed_identifier(self, conn):
        with pytest.raises(LookupFailed, match="plain identifiers"):
            SqliteKeyStore(conn).find_used("account; DROP TABLE account", "account_key", ["X"])
        assert conn.execute("SELECT COUNT(*) FROM account").fetchone()[0] == 3


class TestSqliteColumnSemantics:
    def test_nocase_column_matches_other_case(self):
        conn = sqlite3.connect(":memory:")
        conn.execute("CREATE TABLE account (account_key TEXT COLLATE NOCASE UNIQUE)")
        conn.execute("INSERT INTO account VALUES ('yarp00001')")
        used = SqliteKeyStore(conn).find_used("account", "account_key", ["YARP00001", "YARP00002"])
        assert used == {"YARP00001"}
        conn.close()

    def test_integer_column_matches_zero_padded_candidate(self):
        conn = sqlite3.connect(":memory:")
        conn.execute("CREATE TABLE invoice (number INTEGER)")
        conn.execute("INSERT INTO invoice VALUES (12)")
        used = SqliteKeyStore(conn).find_used("invoice", "number", ["0012", "0013"])
        assert used == {"0012"}
        conn.close()

    def test_returns_candidates_not_stored_values(self):
        conn = sqlite3.connect(":memory:")
        conn.execute("CREATE TABLE account (account_key TEXT COLLATE NOCASE)")
        conn.executemany("INSERT INTO account VALUES (?)", [("yarp00001",), ("Yarp00001",)])
        used = SqliteKeyStore(conn).find_used("account", "account_key", ["YARP00001"])
        assert used == {"YARP00001"}
        conn.close()
