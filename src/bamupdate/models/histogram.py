"""
Histogram Model Family

Wraps a HistogramStore so an empirical PMF behaves like any other model:
it can be drawn from (inverse CDF over the bins, uniform within a bin) and
can score data (sum of log bin masses). MCMC posteriors are returned as
Histogram models, which is what lets a posterior feed a later update as its
prior.

Template resets build a new histogram with exactly the template's bin edges,
so two histograms built from the same template are directly comparable.
"""

from typing import Any, Dict, Iterable, Optional

from ..error_handling import ConfigurationError, MissingCapabilityError, NotAHistogramError
from ..histogram import HistogramStore
from .base import Model, ModelFamily, as_table


class HistogramModel(Model):
    """
    Empirical model holding a HistogramStore instead of closed-form parameters.

    Args:
        store: The bins (counts or masses)
        settings: Optional settings groups
    """
    name = "Histogram"
    family = ModelFamily.HISTOGRAM
    vbase = 0
    m1base = 0
    m2base = 0

    def __init__(self, store: HistogramStore, settings: Optional[Dict[str, Any]] = None):
        if not isinstance(store, HistogramStore):
            raise ConfigurationError(f"HistogramModel needs a HistogramStore, got {type(store).__name__}")
        super().__init__(parameters=None, settings=settings)
        self.store = store

    @classmethod
    def from_values(cls, values: Iterable[float], bin_count: int) -> 'HistogramModel':
        """Histogram of ``values`` over their own range (raw counts)."""
        return cls(HistogramStore.from_values(values, bin_count))

    def draw(self, rng) -> float:
        return self.store.sample(rng.uniform(), rng.uniform())

    def log_likelihood(self, data) -> float:
        return float(self.store.log_mass(as_table(data)).sum())

    def mean(self) -> float:
        """Mass-weighted mean of the bin centers."""
        return float((self.store.pmf * self.store.centers).sum())

    def __repr__(self):
        return f"HistogramModel({self.store!r})"


def _require_histogram(template) -> HistogramModel:
    if template is None or getattr(template, 'family', None) != ModelFamily.HISTOGRAM:
        raise NotAHistogramError(
            "The template needs to be a Histogram model; build one with "
            "HistogramModel.from_values or take the output of a sampled update."
        )
    return template


def reset_from_template(template: HistogramModel, values: Iterable[float]) -> HistogramModel:
    """
    New histogram with the template's bins, filled with ``values``.

    The template is not modified. Bins hold raw counts (not normalized);
    values outside the template's domain land in the edge bins.
    """
    out = _require_histogram(template).copy()
    out.store.refill(values)
    return out


def reset_from_draws(template: HistogramModel, source_model: Model, draw_count: int = 100000,
                     rng=None) -> HistogramModel:
    """
    New histogram with the template's bins, filled with ``draw_count`` draws
    from ``source_model`` and normalized to a PMF.

    Args:
        template: Histogram model whose bin edges are reused
        source_model: Any model with a draw capability
        draw_count: Number of draws
        rng: RandomSource; the process-wide default when None
    """
    out = _require_histogram(template).copy()
    if source_model is None or not source_model.supports_draw:
        raise MissingCapabilityError(
            "The source model needs a draw method to build a histogram from random draws."
        )
    if draw_count < 1:
        raise ConfigurationError(f"draw_count must be >= 1, got {draw_count}")
    if rng is None:
        from ..rng import get_default_source
        rng = get_default_source()

    out.store.reset()
    for _ in range(draw_count):
        out.store.increment(float(source_model.draw(rng)))
    out.store.normalize()
    return out


def normalize(model: HistogramModel) -> bool:
    """Normalize a Histogram model's bins in place; see HistogramStore.normalize."""
    return _require_histogram(model).store.normalize()
