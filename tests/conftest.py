from __future__ import annotations

import pytest

from featuresupport.directory import RegistryDirectory, default_directory
from featuresupport.registry import Registry


@pytest.fixture(autouse=True)
def _reset_default_directory():
    default_directory().reset()
    yield
    default_directory().reset()


@pytest.fixture
def directory() -> RegistryDirectory:
    return RegistryDirectory()


@pytest.fixture
def post_types(directory: RegistryDirectory) -> Registry:
    registry = directory.get_instance("post_type")
    registry.add("post", "thumbnail")
    registry.add("page", "thumbnail")
    registry.add("page", "editor", "a")
    return registry
