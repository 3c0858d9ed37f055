"""Collaborators that resolve definitions and check key existence."""

from uniquekey.store.base import DefinitionResolver, ExistenceChecker
from uniquekey.store.memory import InMemoryDefinitionStore, InMemoryKeyStore
from uniquekey.store.sqlite import SqliteKeyStore

__all__ = [
    "DefinitionResolver",
    "ExistenceChecker",
    "InMemoryDefinitionStore",
    "InMemoryKeyStore",
    "SqliteKeyStore",
]
