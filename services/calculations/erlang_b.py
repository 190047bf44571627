"""
Erlang-B blocking probability and required-channel search.

For offered traffic A (Erlangs) on N channels with Poisson arrivals and no
queueing:

    B(A, N) = (A^N / N!) / sum_{i=0..N} (A^i / i!)

The factorial-ratio form overflows a float once N passes ~170, so the served
value uses the equivalent recursion

    B(A, 0) = 1,    B(A, n) = A * B(A, n-1) / (n + A * B(A, n-1))

which stays in [0, 1] for any N. blocking_probability_direct() keeps the
factorial-ratio form for cross-checking small channel counts.
"""

from typing import Any, Dict, Tuple
import logging

from services.calculations.base import BaseFormulaCalculator, FormulaDomainError
from services.calculations.special_functions import factorial
from services.explanations import get_renderer

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHANNELS = 1000


def blocking_probability(traffic: float, channels: int) -> float:
    """Erlang-B blocking probability via the stable recursion."""
    if traffic == 0:
        return 0.0

    blocking = 1.0
    for n in range(1, channels + 1):
        blocking = traffic * blocking / (n + traffic * blocking)
        # Zero is a fixed point of the recursion
        if blocking == 0.0:
            break
    return blocking


def blocking_probability_direct(traffic: float, channels: int) -> float:
    """
    Erlang-B blocking probability via the factorial ratio.

    Raises:
        ValueError: if channels is negative.
        OverflowError: once A^N or N! leaves the float range.
    """
    n_factorial = factorial(channels)
    if n_factorial <= 0:
        raise ValueError(f"Channel count must be non-negative, got {channels}")

    numerator = traffic ** channels / n_factorial
    denominator = sum(traffic ** i / factorial(i) for i in range(channels + 1))
    return numerator / denominator


def required_channels(
    traffic: float,
    max_blocking: float,
    max_channels: int = DEFAULT_MAX_CHANNELS,
) -> Tuple[int, bool]:
    """
    Smallest channel count N >= 1 with B(A, N) <= max_blocking.

    Scans upward from one channel, advancing the recursion one step per
    candidate. Stops at max_channels.

    Returns:
        (channels, converged). When no count up to max_channels meets the
        target the result is (max_channels, False) and must be treated as
        approximate.
    """
    blocking = 1.0
    for channels in range(1, max_channels + 1):
        blocking = traffic * blocking / (channels + traffic * blocking)
        if blocking <= max_blocking:
            return channels, True

    logger.warning(
        f"Erlang-B search did not converge: A={traffic}E, "
        f"target={max_blocking}, capped at {max_channels} channels"
    )
    return max_channels, False


class ErlangBCalculator(BaseFormulaCalculator):
    """
    Blocking at a given channel count plus the channels needed for a target.

    Example:
        - Offered traffic: 10 Erlangs on 15 channels
        - Blocking: ~3.65%
        - Target 2% -> 17 channels
    """

    formula_code = "erlang_b"
    template_name = "erlang_b.txt"
    required_fields = ("traffic", "channels", "maxBlocking")

    def __init__(self, params: dict, max_channels: int = DEFAULT_MAX_CHANNELS):
        super().__init__(params)
        self.max_channels = max_channels

    def calculate(self) -> Dict[str, Any]:
        traffic = self._non_negative("traffic")
        channels = self._non_negative_integer("channels")
        if channels > self.max_channels:
            raise FormulaDomainError(
                "channels", f"must be at most {self.max_channels} (got {channels})"
            )
        max_blocking = self._positive("maxBlocking")
        if max_blocking > 1:
            raise FormulaDomainError(
                "maxBlocking", f"must be a probability no greater than 1 (got {max_blocking})"
            )

        blocking = blocking_probability(traffic, channels)
        needed, converged = required_channels(traffic, max_blocking, self.max_channels)

        logger.info(
            f"Erlang-B: A={traffic}E, N={channels}, B={blocking:.6f}, "
            f"target={max_blocking} -> {needed} channels"
            f"{'' if converged else ' (capped)'}"
        )

        explanation = get_renderer().render(
            self.template_name,
            {
                "traffic": traffic,
                "channels": channels,
                "blocking": blocking,
                "max_blocking": max_blocking,
                "required_channels": needed,
                "converged": converged,
            },
        )

        return {
            "blockingProbability": blocking,
            "blockingPercent": blocking * 100,
            "requiredChannels": needed,
            "converged": converged,
            "explanation": explanation,
        }
