"""
Histogram / PMF Store

A fixed set of equal-width bins over [domain_min, domain_max]. Bins hold raw
counts after refills and increments, and probability masses after
normalize(). Values outside the domain are clamped into the first or last
bin, so every finite value lands somewhere.

The Histogram model family (models/histogram.py) wraps a store so that an
empirical PMF can be used anywhere a parametric model can.
"""

from typing import Iterable

import numpy as np

from .error_handling import ConfigurationError

import logging
logger = logging.getLogger('bamupdate')


class HistogramStore:
    """
    Equal-width bins over a numeric domain.

    Attributes:
        edges: (bin_count + 1,) bin edges, ascending
        bins: (bin_count,) counts or masses
    """

    __slots__ = ("edges", "bins")

    def __init__(self, edges, bins=None):
        edges = np.array(edges, dtype=np.float64)
        if edges.ndim != 1 or edges.size < 2:
            raise ConfigurationError("A histogram needs at least two bin edges")
        if not np.all(np.diff(edges) > 0):
            raise ConfigurationError("Histogram bin edges must be strictly increasing")
        self.edges = edges
        if bins is None:
            self.bins = np.zeros(edges.size - 1, dtype=np.float64)
        else:
            bins = np.array(bins, dtype=np.float64)
            if bins.shape != (edges.size - 1,):
                raise ConfigurationError(
                    f"Expected {edges.size - 1} bins for {edges.size} edges, got {bins.shape}"
                )
            self.bins = bins

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def alloc(cls, bin_count: int, domain_min: float, domain_max: float) -> 'HistogramStore':
        """Allocate ``bin_count`` empty equal-width bins over [domain_min, domain_max]."""
        if bin_count <= 0:
            raise ConfigurationError(f"bin_count must be > 0, got {bin_count}")
        if not (np.isfinite(domain_min) and np.isfinite(domain_max)) or domain_max <= domain_min:
            raise ConfigurationError(
                f"Histogram domain must be finite with min < max, got [{domain_min}, {domain_max}]"
            )
        return cls(np.linspace(domain_min, domain_max, bin_count + 1))

    @classmethod
    def from_values(cls, values: Iterable[float], bin_count: int) -> 'HistogramStore':
        """
        Bin ``values`` into ``bin_count`` bins spanning their own range.

        If every value is the same, the domain is widened by 0.5 on each side.
        """
        values = np.asarray(values, dtype=np.float64).ravel()
        finite = values[np.isfinite(values)]
        if finite.size == 0:
            raise ConfigurationError("Cannot build a histogram from an empty or non-finite sample")
        lo, hi = float(finite.min()), float(finite.max())
        if hi <= lo:
            lo, hi = lo - 0.5, hi + 0.5
        store = cls.alloc(bin_count, lo, hi)
        store.refill(values)
        return store

    def copy(self) -> 'HistogramStore':
        return HistogramStore(self.edges.copy(), self.bins.copy())

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def bin_count(self) -> int:
        return self.bins.size

    @property
    def domain(self):
        return float(self.edges[0]), float(self.edges[-1])

    @property
    def centers(self) -> np.ndarray:
        return 0.5 * (self.edges[:-1] + self.edges[1:])

    @property
    def total(self) -> float:
        return float(np.sum(self.bins))

    @property
    def pmf(self) -> np.ndarray:
        """Bin masses scaled to sum to one (a copy; the store is unchanged)."""
        total = self.total
        if total == 0:
            return np.zeros_like(self.bins)
        return self.bins / total

    def same_layout(self, other: 'HistogramStore') -> bool:
        return self.edges.shape == other.edges.shape and np.array_equal(self.edges, other.edges)

    # ------------------------------------------------------------------
    # Filling
    # ------------------------------------------------------------------

    def find(self, value: float) -> int:
        """Index of the bin holding ``value``; out-of-domain values clamp to the edge bins."""
        idx = int(np.searchsorted(self.edges, value, side='right')) - 1
        return min(max(idx, 0), self.bin_count - 1)

    def increment(self, value: float, weight: float = 1.0) -> bool:
        """Add ``weight`` to the bin containing ``value``. NaN is skipped."""
        if np.isnan(value):
            logger.warning("Histogram increment skipped a NaN value")
            return False
        self.bins[self.find(value)] += weight
        return True

    def reset(self) -> 'HistogramStore':
        self.bins[:] = 0.0
        return self

    def refill(self, values: Iterable[float]) -> 'HistogramStore':
        """Clear every bin, then increment once per value."""
        values = np.asarray(values, dtype=np.float64).ravel()
        self.reset()
        nan_mask = np.isnan(values)
        if np.any(nan_mask):
            logger.warning(f"Histogram refill skipped {int(np.sum(nan_mask))} NaN value(s)")
            values = values[~nan_mask]
        idx = np.searchsorted(self.edges, values, side='right') - 1
        idx = np.clip(idx, 0, self.bin_count - 1)
        np.add.at(self.bins, idx, 1.0)
        return self

    def normalize(self) -> bool:
        """
        Scale the bins so they sum to one.

        Returns:
            True on success. A zero total is reported as a warning and leaves
            the bins unchanged (returns False).
        """
        total = self.total
        if total == 0:
            logger.warning("Histogram has a total density of zero; leaving it unnormalized")
            return False
        self.bins /= total
        return True

    # ------------------------------------------------------------------
    # Sampling and evaluation
    # ------------------------------------------------------------------

    def sample(self, u_bin: float, u_within: float) -> float:
        """
        Inverse-CDF draw: ``u_bin`` picks the bin by cumulative mass,
        ``u_within`` places the value uniformly inside it.
        """
        cdf = np.cumsum(self.bins)
        total = cdf[-1]
        if total <= 0:
            raise ConfigurationError("Cannot draw from a histogram with zero total density")
        idx = int(np.searchsorted(cdf, u_bin * total, side='right'))
        idx = min(idx, self.bin_count - 1)
        lo, hi = self.edges[idx], self.edges[idx + 1]
        return float(lo + u_within * (hi - lo))

    def log_mass(self, values: Iterable[float]) -> np.ndarray:
        """Log of the normalized mass of the bin each value falls in."""
        values = np.asarray(values, dtype=np.float64).ravel()
        idx = np.clip(np.searchsorted(self.edges, values, side='right') - 1, 0, self.bin_count - 1)
        with np.errstate(divide='ignore'):
            return np.log(self.pmf[idx])

    def __repr__(self):
        lo, hi = self.domain
        return f"HistogramStore(bins={self.bin_count}, domain=[{lo:g}, {hi:g}], total={self.total:g})"
