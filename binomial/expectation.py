"""
expectation.py - Conditional expectations on the symmetric binomial lattice

Backward induction values a payoff by averaging the values of the two
successor nodes until a stopping node is reached:

    value(n, k) = payoff(n, k)                               if stop(n, k)
                = (value(n+1, k) + value(n+1, k+1)) / 2      otherwise

Three evaluators are provided:

- conditional_expectation: the node-by-node recursion for any stopping rule.
  Work is exponential in the stopping depth unless memoize=True.
- horizon_expectation: stopping at a fixed depth N, collapsed into one
  weighted sum over the terminal levels reachable from (n, k).
- backward_induction: a dynamic-programming sweep from depth N back to
  depth n with optional early stopping. O(N**2) work.

Termination of conditional_expectation is a caller contract: every path
from the starting node must reach a stopping node. Pass max_depth to turn a
violation into NonTerminationError instead of unbounded work.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .core import (
    DomainError,
    NonTerminationError,
    Payoff,
    StoppingPredicate,
    TerminalPayoff,
    validate_coordinate,
    validate_depth,
)
from .lattice import mass_vector

logger = logging.getLogger(__name__)

NodeValue = Callable[[int, int], float]


# ============================================================================
# STOPPING-TIME RECURSION
# ============================================================================

def conditional_expectation(
    stop: StoppingPredicate,
    payoff: Payoff,
    *,
    max_depth: Optional[int] = None,
    memoize: bool = False,
) -> NodeValue:
    """
    E[payoff(N, K) | the walk is at (n, k)] where (N, K) is the first node
    at or after (n, k) with stop(N, K) true.

    Args:
        stop: Stopping predicate stop(n, k)
        payoff: Value at a stopping node, payoff(n, k)
        max_depth: Depth past which a non-stopping node raises
            NonTerminationError. None leaves the recursion unguarded.
        memoize: Cache node values across calls of the returned function.
            Off by default: nodes reachable by several paths are recomputed.

    Returns:
        Function value(n, k) -> float

    Raises (from the returned function):
        DomainError: If (n, k) is not a lattice coordinate
        NonTerminationError: If max_depth is set and exceeded
    """
    memo: Optional[Dict[Tuple[int, int], float]] = {} if memoize else None

    def value(n: int, k: int) -> float:
        validate_coordinate(n, k)

        # Explicit stack instead of Python recursion; a frame is
        # (n, k, expanded) and expanded frames combine the two child results.
        results: List[float] = []
        stack: List[Tuple[int, int, bool]] = [(n, k, False)]
        visited = 0

        while stack:
            node_n, node_k, expanded = stack.pop()

            if expanded:
                upper = results.pop()
                lower = results.pop()
                v = (lower + upper) / 2
                if memo is not None:
                    memo[(node_n, node_k)] = v
                results.append(v)
                continue

            visited += 1
            if memo is not None and (node_n, node_k) in memo:
                results.append(memo[(node_n, node_k)])
                continue

            if stop(node_n, node_k):
                v = float(payoff(node_n, node_k))
                if memo is not None:
                    memo[(node_n, node_k)] = v
                results.append(v)
                continue

            if max_depth is not None and node_n >= max_depth:
                raise NonTerminationError(
                    f"no stopping node reached by depth {max_depth} "
                    f"(starting from n={n}, k={k})"
                )

            stack.append((node_n, node_k, True))
            stack.append((node_n + 1, node_k + 1, False))
            stack.append((node_n + 1, node_k, False))

        logger.debug("conditional_expectation(%d, %d): visited %d nodes", n, k, visited)
        return results[0]

    return value


# ============================================================================
# FIXED HORIZON
# ============================================================================

def horizon_expectation(horizon: int, payoff: TerminalPayoff) -> NodeValue:
    """
    E[payoff(K_N) | the walk is at (n, k)] for a fixed horizon N.

    K_N is the level at depth N. From (n, k) the reachable terminal levels
    are k..k+(N-n), each weighted by the mass of the remaining N - n steps:

        value(n, k) = sum_j payoff(k + j) * mass(N - n, j)

    This is the stopping-time recursion with stop(n, k) = (n == N) collapsed
    into a single sum. The weights are exact at every depth; past
    EXACT_MASS_MAX_DEPTH remaining steps they come from the log-space path
    of mass_vector.

    Raises:
        DomainError: If horizon < 0, or (from the returned function) if
            (n, k) is not a lattice coordinate or n > horizon
    """
    validate_depth(horizon)

    def value(n: int, k: int) -> float:
        validate_coordinate(n, k)
        if n > horizon:
            raise DomainError(f"depth n={n} is past the horizon N={horizon}")
        steps = horizon - n
        weights = mass_vector(steps)
        payoffs = np.fromiter(
            (payoff(i) for i in range(k, k + steps + 1)),
            dtype=float,
            count=steps + 1,
        )
        return float(np.dot(weights, payoffs))

    return value


# ============================================================================
# DYNAMIC-PROGRAMMING SWEEP
# ============================================================================

def backward_induction(
    horizon: int,
    payoff: Payoff,
    stop: Optional[StoppingPredicate] = None,
) -> NodeValue:
    """
    Backward induction from a fixed horizon with optional early stopping.

    Every node at depth N stops. Earlier nodes stop where stop(n, k) is true,
    as in conditional_expectation. Values are swept one depth at a time from
    N back to the starting depth over the levels reachable from (n, k), so
    each node is evaluated once.

    Args:
        horizon: Terminal depth N
        payoff: Value at a stopping node, payoff(n, k)
        stop: Early stopping predicate; None stops only at the horizon

    Returns:
        Function value(n, k) -> float
    """
    validate_depth(horizon)

    def value(n: int, k: int) -> float:
        validate_coordinate(n, k)
        if n > horizon:
            raise DomainError(f"depth n={n} is past the horizon N={horizon}")

        levels = np.arange(k, k + horizon - n + 1)
        values = np.fromiter(
            (payoff(horizon, int(i)) for i in levels),
            dtype=float,
            count=levels.size,
        )

        for depth in range(horizon - 1, n - 1, -1):
            values = 0.5 * (values[:-1] + values[1:])
            levels = levels[:-1]
            if stop is None:
                continue

            stopped = np.fromiter(
                (bool(stop(depth, int(i))) for i in levels),
                dtype=bool,
                count=levels.size,
            )
            if stopped.any():
                payoffs = np.array([float(payoff(depth, int(i))) if s else 0.0
                                    for i, s in zip(levels, stopped)])
                values = np.where(stopped, payoffs, values)

        return float(values[0])

    return value
