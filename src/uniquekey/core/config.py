"""Config loading utilities for uniquekey."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from uniquekey.core.errors import InvalidDefinition
from uniquekey.core.models import AllocatorConfig, KeyDefinition
from uniquekey.store.memory import InMemoryDefinitionStore

logger = logging.getLogger(__name__)


def _read_yaml(path: Path) -> Any:
    logger.info("Loading config from %s", path)
    with path.open() as f:
        return yaml.safe_load(f)


def load_settings(path: Path) -> dict[str, Any]:
    """Load a settings YAML file as a dict.

    Returns empty dict if the file doesn't exist.
    """
    if not path.exists():
        logger.debug("No settings found at %s; using defaults", path)
        return {}

    data = _read_yaml(path)
    if not isinstance(data, dict):
        logger.warning("%s did not contain a mapping; using empty dict", path.name)
        return {}

    return data


def make_allocator_config(settings: dict[str, Any]) -> AllocatorConfig:
    """Build an AllocatorConfig from the ``allocator`` section of *settings*.

    Only fields present in the section override the defaults defined in
    :class:`AllocatorConfig`.
    """
    section = settings.get("allocator", {})
    if not isinstance(section, dict):
        logger.warning("'allocator' key is not a mapping; ignoring")
        section = {}

    valid_fields = AllocatorConfig.model_fields
    filtered = {k: v for k, v in section.items() if k in valid_fields}

    if dropped := set(section) - set(filtered):
        logger.warning("Ignoring unknown allocator config keys: %s", sorted(dropped))

    return AllocatorConfig(**filtered)


def load_definitions(path: Path) -> InMemoryDefinitionStore:
    """Load key definitions from a YAML file.

    The file holds either a list of definitions or a mapping with a
    ``definitions`` list::

        definitions:
          - name: yarp
            prefix: YARP
            total_length: 9
            target_entity: account
            target_field: account_key

    Raises:
        InvalidDefinition: An entry is missing fields or has wrong types.
    """
    store = InMemoryDefinitionStore()
    if not path.exists():
        logger.debug("No definitions file at %s", path)
        return store

    data = _read_yaml(path)
    if isinstance(data, dict):
        data = data.get("definitions", [])
    if not isinstance(data, list):
        logger.warning("%s did not contain a list of definitions; ignoring", path.name)
        return store

    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise InvalidDefinition(f"#{index}", "entry is not a mapping")
        try:
            definition = KeyDefinition.model_validate(entry)
        except ValidationError as exc:
            name = str(entry.get("name", f"#{index}"))
            raise InvalidDefinition(name, str(exc)) from exc
        store.add(definition)

    logger.info("Loaded %d key definitions", len(store))
    return store
