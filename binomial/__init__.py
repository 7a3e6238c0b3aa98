"""
binomial - Symmetric binomial lattice engine with lazy cursors

Exact and approximate node probabilities, backward-induction expectations
and a small forward-only cursor toolkit for folding over sequences.

Usage:
    from binomial import (
        CountedCursor, accumulate, take,
        mass, horizon_expectation, conditional_expectation,
    )

    accumulate(take(2, CountedCursor.over([1, 2, 3])))    # 3

    mass(4, 2)                                            # 0.375

    # E[2 K_10 - 10 | walk at (5, 3)] with a fixed horizon of 10 steps
    ev = horizon_expectation(10, lambda i: 2 * i - 10)
    ev(5, 3)                                              # 1.0

    # Same value via node-by-node backward induction
    ce = conditional_expectation(
        lambda n, k: n == 10,
        lambda n, k: 2 * k - 10,
    )
    ce(5, 3)                                              # 1.0
"""

# Core types
from .core import (
    LatticeError,
    DomainError,
    NonTerminationError,
    Payoff,
    TerminalPayoff,
    StoppingPredicate,
    validate_coordinate,
    EXACT_MASS_MAX_DEPTH,
)

# Sequence protocol
from .sequence import (
    Cursor,
    Take,
    accumulate,
    size,
    drop,
    take,
    span,
    to_list,
)

# Cursors
from .cursors import (
    PointerCursor,
    CountedCursor,
    SpanCursor,
)

# Lattice probabilities
from .lattice import (
    LatticeNode,
    MassCursor,
    mass,
    mass_vector,
    total_mass,
    walk_value,
    normal_pdf,
    normal_cdf,
    approx_mass,
    approx_mass_vector,
    interval_mass,
)

# Expectations
from .expectation import (
    conditional_expectation,
    horizon_expectation,
    backward_induction,
)

__version__ = "0.1.0"
