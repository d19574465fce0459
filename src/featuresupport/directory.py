"""Keyed collection of registries, one per object type."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List

from featuresupport.registry import _DIRECTORY_TOKEN, Registry


logger = logging.getLogger(__name__)


class RegistryDirectory:
    """Hands out one shared Registry per type name (e.g. "taxonomy", "site")."""

    def __init__(self) -> None:
        self._instances: Dict[str, Registry] = {}
        self._lock = threading.Lock()

    def get_instance(self, type_name: str) -> Registry:
        with self._lock:
            registry = self._instances.get(type_name)
            if registry is None:
                registry = Registry(type_name, _DIRECTORY_TOKEN)
                self._instances[type_name] = registry
                logger.debug("Created feature registry for type %s", type_name)
            return registry

    def get_registered_types(self) -> List[str]:
        """Every type name requested so far, in first-request order."""
        with self._lock:
            return list(self._instances)

    def has_type(self, type_name: str) -> bool:
        with self._lock:
            return type_name in self._instances

    def reset(self) -> None:
        with self._lock:
            self._instances.clear()


_DEFAULT_DIRECTORY = RegistryDirectory()


def default_directory() -> RegistryDirectory:
    return _DEFAULT_DIRECTORY


def get_instance(type_name: str) -> Registry:
    """Get the process-wide registry for an object type."""
    return _DEFAULT_DIRECTORY.get_instance(type_name)


def get_registered_types() -> List[str]:
    return _DEFAULT_DIRECTORY.get_registered_types()
