# -*- coding: utf-8 -*-
"""
Summary statistics over the fetch vectors of one site.

All reductions are order independent: the mean uses ``math.fsum`` (exactly
rounded) and the median sorts its input, so shuffling the vectors gives
bit-identical results.
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

import numpy as np

from .constants import QUADRANT_NAMES
from .directions import quadrant_of

if TYPE_CHECKING:
    from .models import FetchVector


@dataclass(frozen=True)
class FetchSummary:
    """Fetch statistics for one site. Distances are in kilometres."""
    mean: float
    median: float
    quadrant_means: dict[str, float] = field(default_factory=dict)
    max_fetch: float = 0.0
    most_exposed: tuple[float, ...] = ()

    def as_row(self) -> dict[str, float]:
        """Quadrant means followed by the overall average."""
        row = {name: self.quadrant_means.get(name, float('nan')) for name in QUADRANT_NAMES}
        row['Average'] = self.mean
        return row


def _mean(values: list[float]) -> float:
    if not values:
        return float('nan')
    return math.fsum(values) / len(values)


def summarise(vectors: Iterable['FetchVector']) -> FetchSummary:
    """
    Reduce a set of fetch vectors to summary statistics.

    Args:
        vectors: Fetch vectors of a single site, in any order

    Returns:
        FetchSummary with the overall mean and median, the mean per quadrant
        and the direction(s) with the longest fetch (ties keep all directions)

    Raises:
        ValueError: if no vectors are given
    """
    vectors = list(vectors)
    if not vectors:
        raise ValueError("cannot summarise an empty set of fetch vectors")

    distances = [float(v.distance) for v in vectors]

    by_quadrant: dict[str, list[float]] = {name: [] for name in QUADRANT_NAMES}
    for v in vectors:
        by_quadrant[quadrant_of(v.direction)].append(float(v.distance))

    max_fetch = max(distances)
    most_exposed = tuple(sorted(float(v.direction) for v in vectors if v.distance == max_fetch))

    return FetchSummary(
        mean=_mean(distances),
        median=float(np.median(sorted(distances))),
        quadrant_means={name: _mean(vals) for name, vals in by_quadrant.items()},
        max_fetch=max_fetch,
        most_exposed=most_exposed,
    )
