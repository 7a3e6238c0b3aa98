"""
lattice.py - Symmetric binomial lattice probabilities

A node (n, k) of the lattice is reached after n steps of which k went up.
Each step goes up or down with probability 1/2, so the centred walk value at
(n, k) is 2k - n.

Provides:
- Exact node mass C(n, k) / 2**n via a multiplicative recurrence
- Node coordinates (LatticeNode) and the walk value 2k - n
- Normal (De Moivre-Laplace) approximations of the node mass
- A lazy cursor over the masses of one lattice depth

The exact mass chains from the boundary value 2**-n, multiplying by
(n - j + 1) / j at each level. This never forms a factorial, so it neither
overflows nor loses precision for large n. Past EXACT_MASS_MAX_DEPTH the
starting value underflows and the chain is evaluated in log space.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np
from scipy.special import erf as scipy_erf
from scipy.special import gammaln

from .core import (
    EXACT_MASS_MAX_DEPTH,
    INV_SQRT_2PI,
    LN_2,
    SQRT_2,
    DomainError,
    validate_coordinate,
    validate_depth,
)
from .sequence import CursorMixin, accumulate

logger = logging.getLogger(__name__)

# Type alias for scalar or array inputs
Numeric = Union[float, np.ndarray]


# ============================================================================
# NORMAL DISTRIBUTION FUNCTIONS
# ============================================================================

def normal_cdf(x: Numeric) -> Numeric:
    """Standard normal cumulative distribution function."""
    return 0.5 * (1.0 + scipy_erf(np.asarray(x) / SQRT_2))


def normal_pdf(x: Numeric) -> Numeric:
    """Standard normal probability density function."""
    return INV_SQRT_2PI * np.exp(-0.5 * x * x)


# ============================================================================
# EXACT MASS
# ============================================================================

def _log_space_mass(n: int, k: int) -> float:
    log_mass = math.lgamma(n + 1) - math.lgamma(k + 1) - math.lgamma(n - k + 1) - n * LN_2
    return math.exp(log_mass)


def mass(n: int, k: int) -> float:
    """
    Probability that a symmetric walk of n steps ends at level k.

    mass(n, k) = C(n, k) / 2**n, computed by chaining

        m(n, 0) = 2**-n
        m(n, j) = m(n, j-1) * (n - j + 1) / j

    from the nearer boundary, so mass(n, k) == mass(n, n - k) exactly.

    Raises:
        DomainError: If n or k is not an integer, n < 0, k < 0 or k > n
    """
    validate_coordinate(n, k)
    k = min(k, n - k)
    if n > EXACT_MASS_MAX_DEPTH:
        logger.debug("mass(%d, %d): depth beyond exact chain, using log space", n, k)
        return _log_space_mass(n, k)

    m = math.ldexp(1.0, -n)
    for j in range(1, k + 1):
        m = m * (n - j + 1) / j
    return m


def mass_vector(n: int) -> np.ndarray:
    """
    Masses of every level 0..n at depth n as a numpy array.

    Uses the same chained products as mass(), evaluated with numpy.cumprod.

    Raises:
        DomainError: If n < 0
    """
    validate_depth(n)
    if n > EXACT_MASS_MAX_DEPTH:
        logger.debug("mass_vector(%d): depth beyond exact chain, using log space", n)
        k = np.arange(n + 1)
        return np.exp(gammaln(n + 1) - gammaln(k + 1) - gammaln(n - k + 1) - n * LN_2)

    j = np.arange(1, n + 1, dtype=float)
    out = np.empty(n + 1, dtype=float)
    out[0] = math.ldexp(1.0, -n)
    out[1:] = out[0] * np.cumprod((n - j + 1) / j)
    return out


def total_mass(n: int) -> float:
    """Sum of the exact masses at depth n. Equal to 1 up to rounding."""
    return accumulate(MassCursor(n), 0.0)


@dataclass(frozen=True, slots=True)
class MassCursor(CursorMixin):
    """
    Lazy cursor over mass(n, 0), mass(n, 1), ..., mass(n, n).

    Each advance applies one step of the recurrence to the previous value,
    so a full traversal costs O(n). Equality compares (n, k) only; the cached
    value depends on the path taken and may differ in the last bits.
    """
    n: int
    k: int = 0
    value: Optional[float] = field(default=None, compare=False)

    def __post_init__(self):
        validate_depth(self.n)
        if self.k < 0:
            raise DomainError(f"level must be non-negative, got k={self.k}")
        if self.value is None and self.k <= self.n:
            object.__setattr__(self, "value", mass(self.n, self.k))

    def has_more(self) -> bool:
        return self.k <= self.n

    def current(self) -> float:
        if self.k > self.n:
            raise IndexError("dereferenced an exhausted mass cursor")
        return self.value

    def advance(self) -> "MassCursor":
        if not self.has_more():
            return self
        k = self.k + 1
        if k > self.n:
            return MassCursor(self.n, k, 0.0)
        if self.n > EXACT_MASS_MAX_DEPTH:
            return MassCursor(self.n, k, mass(self.n, k))
        return MassCursor(self.n, k, self.value * (self.n - k + 1) / k)

    def end(self) -> "MassCursor":
        return MassCursor(self.n, self.n + 1, 0.0)


# ============================================================================
# WALK VALUE AND NODES
# ============================================================================

def walk_value(n: int, k: int) -> int:
    """
    Centred random-walk value 2k - n at node (n, k).

    The result lies in [-n, n] and has the parity of n.
    """
    validate_coordinate(n, k)
    return 2 * k - n


@dataclass(frozen=True, order=True, slots=True)
class LatticeNode:
    """
    Immutable lattice coordinate (n, k) with 0 <= k <= n.

    Nodes order lexicographically by (n, k). float(node) is the level k.
    Advancing raises the level by one and saturates at k == n.
    """
    n: int
    k: int

    def __post_init__(self):
        validate_coordinate(self.n, self.k)

    def __float__(self) -> float:
        return float(self.k)

    @property
    def walk_value(self) -> int:
        return 2 * self.k - self.n

    def mass(self) -> float:
        return mass(self.n, self.k)

    def approx_mass(self) -> float:
        return approx_mass(self.n, self.k)

    def advance(self) -> "LatticeNode":
        if self.k >= self.n:
            return self
        return LatticeNode(self.n, self.k + 1)

    def successors(self) -> tuple:
        """Down and up children of this node."""
        return LatticeNode(self.n + 1, self.k), LatticeNode(self.n + 1, self.k + 1)


# ============================================================================
# NORMAL APPROXIMATION
# ============================================================================

def _validate_approx(n: int, k: int) -> None:
    validate_coordinate(n, k)
    if n == 0:
        raise DomainError("normal approximation requires n > 0")


def approx_mass(n: int, k: int) -> float:
    """
    De Moivre-Laplace approximation of mass(n, k).

    With x = (2k - n) / sqrt(n) the walk value in standard units,

        approx_mass(n, k) = 2 * phi(x) / sqrt(n)

    The factor 2 is the lattice spacing in walk-value units. Values are not
    renormalized and sum to 1 only approximately over k = 0..n.

    Raises:
        DomainError: If n <= 0 or k is outside 0..n
    """
    _validate_approx(n, k)
    sqrt_n = math.sqrt(n)
    x = (2 * k - n) / sqrt_n
    return float(2.0 * normal_pdf(x) / sqrt_n)


def approx_mass_vector(n: int, normalize: bool = True) -> np.ndarray:
    """
    approx_mass(n, k) for every level k = 0..n.

    With normalize=True the values are rescaled to sum exactly to 1 (up to
    rounding), which makes them usable as expectation weights.
    """
    _validate_approx(n, 0)
    sqrt_n = math.sqrt(n)
    x = (2.0 * np.arange(n + 1) - n) / sqrt_n
    out = 2.0 * normal_pdf(x) / sqrt_n
    if normalize:
        out = out / out.sum()
    return out


def interval_mass(n: int, k: int) -> float:
    """
    Continuity-corrected normal approximation of mass(n, k).

    Integrates the limiting normal over the walk-value cell [2k-n-1, 2k-n+1]:

        Phi((2k - n + 1) / sqrt(n)) - Phi((2k - n - 1) / sqrt(n))
    """
    _validate_approx(n, k)
    sqrt_n = math.sqrt(n)
    upper = normal_cdf((2 * k - n + 1) / sqrt_n)
    lower = normal_cdf((2 * k - n - 1) / sqrt_n)
    return float(upper - lower)
