"""
conftest.py - Shared pytest fixtures for lattice and cursor tests

Provides common fixtures used across unit and conformance tests:
- Small buffers (list, tuple, numpy array) for cursor traversal
- Payoffs and stopping predicates on the lattice
"""

import numpy as np
import pytest


# =============================================================================
# BUFFER FIXTURES
# =============================================================================

@pytest.fixture
def values():
    """The three-element buffer used throughout the cursor tests."""
    return [1, 2, 3]


@pytest.fixture
def array_values():
    """numpy buffer with the same contents as `values`."""
    return np.array([1.0, 2.0, 3.0])


@pytest.fixture
def terminated_values():
    """Buffer terminated by a None sentinel, for pointer cursors."""
    return [4, 5, 6, None]


# =============================================================================
# LATTICE FIXTURES
# =============================================================================

@pytest.fixture
def horizon():
    """Fixed horizon used by the expectation tests."""
    return 10


@pytest.fixture
def stop_at_horizon(horizon):
    """Stopping predicate that fires exactly at the horizon."""
    return lambda n, k: n == horizon


@pytest.fixture
def walk_payoff():
    """Walk value 2k - n as a node payoff."""
    return lambda n, k: 2 * k - n


@pytest.fixture
def terminal_walk_payoff(horizon):
    """Terminal walk value 2i - N as a function of the terminal level."""
    return lambda i: 2 * i - horizon


@pytest.fixture
def put_payoff():
    """Put on the walk value struck at zero: max(-(2k - n), 0)."""
    return lambda n, k: max(n - 2 * k, 0)
