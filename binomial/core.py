"""
Core constants, exceptions and validation for the binomial lattice library.

This module provides the shared foundations used by the sequence and lattice
modules:
1. Constants: numeric limits and normal-distribution factors
2. Exceptions: LatticeError and domain-specific error types
3. Type aliases: Payoff, TerminalPayoff, StoppingPredicate
4. Validation: pure checks for lattice coordinates

All functions in this module are pure.
"""

from __future__ import annotations

import math
import numbers
from typing import Callable


# ============================================================================
# CONSTANTS
# ============================================================================

# Deepest lattice for which 2**-n is still a normal double. Beyond this the
# exact mass chain loses precision and is carried out in log space instead.
EXACT_MASS_MAX_DEPTH = 1022

SQRT_2 = math.sqrt(2.0)
INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)
LN_2 = math.log(2.0)


# ============================================================================
# TYPE ALIASES
# ============================================================================

# payoff(n, k) evaluated at a stopping node
Payoff = Callable[[int, int], float]

# payoff(i) evaluated at terminal level i of a fixed horizon
TerminalPayoff = Callable[[int], float]

# stop(n, k) -> True when the walk has reached a stopping node
StoppingPredicate = Callable[[int, int], bool]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LatticeError(Exception):
    """Base exception for all lattice-related errors."""
    pass


class DomainError(LatticeError, ValueError):
    """Raised when a lattice coordinate or depth is outside its valid range."""
    pass


class NonTerminationError(LatticeError, RecursionError):
    """Raised when backward induction passes an explicit maximum depth without stopping."""
    pass


# ============================================================================
# VALIDATION
# ============================================================================

def validate_coordinate(n: int, k: int) -> None:
    """
    Validate a lattice coordinate (n, k).

    Raises:
        DomainError: If n or k is not an integer, n < 0, k < 0 or k > n
    """
    if not isinstance(n, numbers.Integral) or not isinstance(k, numbers.Integral):
        raise DomainError(f"lattice coordinates must be integers, got n={n!r}, k={k!r}")
    if n < 0:
        raise DomainError(f"depth must be non-negative, got n={n}")
    if k < 0 or k > n:
        raise DomainError(f"level must satisfy 0 <= k <= n, got n={n}, k={k}")


def validate_depth(n: int) -> None:
    """Validate a lattice depth: an integer n >= 0."""
    if not isinstance(n, numbers.Integral):
        raise DomainError(f"depth must be an integer, got n={n!r}")
    if n < 0:
        raise DomainError(f"depth must be non-negative, got n={n}")
