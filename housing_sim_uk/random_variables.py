"""Random number sources and annual rate distributions."""

import math
from dataclasses import dataclass
from random import Random
from typing import Callable

NORMAL = "normal"
LOG_NORMAL = "lognormal"
DISTRIBUTION_KINDS = (NORMAL, LOG_NORMAL)

RandomGenerator = Callable[[], float]


@dataclass(frozen=True)
class RandomVariableDistribution:
    """Mean and standard deviation of an annual rate, both in percent."""

    mean: float
    std_dev: float


def make_root_generator(seed: float | int) -> Random:
    """Create the seeded source every per-quantity generator draws from."""
    return Random(seed)


def make_generator(
    root: Random,
    distribution: RandomVariableDistribution | None,
    kind: str = LOG_NORMAL,
) -> RandomGenerator:
    """Return a generator of successive draws from distribution.

    normal:    draws are percentages, mean + std_dev·Z.
    lognormal: draws are multiplicative factors, exp(mean/100 + std_dev/100·Z),
               so a mean of 2.7 gives factors around 1.027.

    Every draw consumes the shared root, so generators made from the same
    root must be called in a fixed order to reproduce a run.
    """
    if distribution is None:
        raise ValueError("distribution is required to build a generator")
    if distribution.std_dev < 0:
        raise ValueError(f"std_dev must be non-negative, got {distribution.std_dev}")
    if kind not in DISTRIBUTION_KINDS:
        raise ValueError(f"unknown distribution kind {kind!r} (expected one of {DISTRIBUTION_KINDS})")

    if kind == NORMAL:
        mean, std_dev = distribution.mean, distribution.std_dev

        def draw_normal() -> float:
            return mean + std_dev * root.gauss(0, 1)

        return draw_normal

    mu = distribution.mean / 100
    sigma = distribution.std_dev / 100

    def draw_log_normal() -> float:
        return math.exp(mu + sigma * root.gauss(0, 1))

    return draw_log_normal
