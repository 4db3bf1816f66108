"""Pytest configuration and fixtures."""

import pytest

from patternkit.cache.locked import LockedCache
from patternkit.cache.memory import MemoryCache
from patternkit.decorator.base import BaseComponent


class CountingFactory:
    """Zero-argument factory that records how often it was called."""

    def __init__(self, make=object):
        self.make = make
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.make()


@pytest.fixture
def cache():
    """Create an unbounded MemoryCache."""
    return MemoryCache()


@pytest.fixture
def locked_cache():
    """Create an unbounded LockedCache."""
    return LockedCache()


@pytest.fixture
def counting_factory():
    """Create a factory that counts its calls and returns fresh objects."""
    return CountingFactory()


@pytest.fixture
def base():
    """Create an empty BaseComponent."""
    return BaseComponent()


@pytest.fixture
def written():
    """Return a helper that creates a BaseComponent already holding a payload."""

    def make(payload):
        base = BaseComponent()
        base.write(payload)
        return base

    return make
