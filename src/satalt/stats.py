"""Summary statistics over an altitude series."""

from collections.abc import Iterable

from satalt.models import Sample, Statistics


class EmptySeries(Exception):
    """Statistics requested for a series with no samples."""


def compute_statistics(samples: Iterable[Sample]) -> Statistics:
    """Compute min/max/mean/range in one pass.

    Args:
        samples: Samples of a succeeded result, any length.

    Returns:
        Statistics with range = max - min.

    Raises:
        EmptySeries: No samples. Callers check for this before rendering.
    """
    count = 0
    total = 0.0
    lo = hi = 0.0
    for sample in samples:
        alt = sample.altitude_km
        if count == 0:
            lo = hi = alt
        elif alt < lo:
            lo = alt
        elif alt > hi:
            hi = alt
        total += alt
        count += 1

    if count == 0:
        raise EmptySeries("No samples to summarize")
    return Statistics(min=lo, max=hi, mean=total / count, range=hi - lo)
