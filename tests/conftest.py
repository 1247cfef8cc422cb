"""Shared fixtures for envpaths tests."""

import pytest

from envpaths import MemoryEnvironment, VariableRegistry, detect_platform, env


@pytest.fixture
def store():
    """Empty in-memory environment table."""
    return MemoryEnvironment()


@pytest.fixture
def registry(store):
    """POSIX registry over the in-memory store, verification off."""
    return VariableRegistry(
        store, verify_directories=False, platform=detect_platform("linux")
    )


@pytest.fixture
def verifying_registry(store):
    """POSIX registry over the in-memory store, verification on."""
    return VariableRegistry(
        store, verify_directories=True, platform=detect_platform("linux")
    )


@pytest.fixture
def default_env():
    """The module-level registry with an empty cache and verification off."""
    env.clear()
    env.verify_directories = False
    yield env
    env.clear()
    env.verify_directories = True
