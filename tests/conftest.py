"""Shared fixtures for the ValidForge test suite."""

import pytest

from validforge.dispatch import TaskProviderRegistry
from validforge.metadata import MetadataRegistry


@pytest.fixture(autouse=True)
def clear_registries():
    """Clear metadata and provider registries before and after each test."""
    MetadataRegistry.clear()
    TaskProviderRegistry.clear()
    yield
    MetadataRegistry.clear()
    TaskProviderRegistry.clear()
