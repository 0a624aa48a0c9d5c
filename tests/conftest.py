"""Global pytest configuration and fixtures."""

# Standard library imports
import itertools

# Third-party imports
import pytest

# Local imports
from password_depth import PasswordDepthSystem


class FixedRandomSource:
    """Deterministic stand-in for a secure random source.

    Cycles through ``sequence`` forever and records every request so tests
    can assert how much randomness a transform consumed.
    """

    name = "fixed"

    def __init__(self, sequence):
        self._cycle = itertools.cycle(bytes(sequence))
        self.requests = []

    def next_bytes(self, n: int) -> bytes:
        self.requests.append(n)
        return bytes(next(self._cycle) for _ in range(n))

    def next_byte(self) -> int:
        return self.next_bytes(1)[0]


@pytest.fixture
def fixed_source():
    """Factory for FixedRandomSource instances."""
    return FixedRandomSource


@pytest.fixture
def zero_source():
    return FixedRandomSource([0])


@pytest.fixture
def system():
    return PasswordDepthSystem(FixedRandomSource(range(256)))
