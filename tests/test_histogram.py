"""
Histogram / PMF Tests

Tests the HistogramStore and the Histogram model family:
- Allocation, binning and edge clamping
- Normalization (including the zero-density warning)
- Template resets from values and from model draws

Run with: pytest tests/test_histogram.py -v
"""

import logging

import numpy as np
import pytest

from bamupdate import HistogramModel, HistogramStore, Normal, reset_from_draws, reset_from_template
from bamupdate.error_handling import ConfigurationError, MissingCapabilityError, NotAHistogramError
from bamupdate.models import Model, normalize


# ============================================================================
# STORE
# ============================================================================

class TestHistogramStore:

    def test_alloc_equal_width(self):
        store = HistogramStore.alloc(4, 0.0, 2.0)
        np.testing.assert_allclose(store.edges, [0.0, 0.5, 1.0, 1.5, 2.0])
        assert store.bin_count == 4
        assert store.total == 0.0

    @pytest.mark.parametrize("bin_count", [0, -3])
    def test_alloc_rejects_non_positive_bins(self, bin_count):
        with pytest.raises(ConfigurationError):
            HistogramStore.alloc(bin_count, 0.0, 1.0)

    def test_alloc_rejects_empty_domain(self):
        with pytest.raises(ConfigurationError):
            HistogramStore.alloc(3, 1.0, 1.0)

    def test_increment_and_clamping(self):
        store = HistogramStore.alloc(4, 0.0, 4.0)
        store.increment(1.0)
        store.increment(-10.0)
        store.increment(100.0)
        store.increment(4.0)
        np.testing.assert_array_equal(store.bins, [1, 1, 0, 2])

    def test_nan_increment_skipped(self, caplog):
        store = HistogramStore.alloc(2, 0.0, 1.0)
        with caplog.at_level(logging.WARNING, logger='bamupdate'):
            assert store.increment(float('nan')) is False
        assert store.total == 0.0
        assert "NaN" in caplog.text

    def test_refill_clears_first(self):
        store = HistogramStore.alloc(2, 0.0, 2.0)
        store.refill([0.5, 0.5, 1.5])
        store.refill([1.5])
        np.testing.assert_array_equal(store.bins, [0, 1])

    def test_from_values_spans_data(self):
        store = HistogramStore.from_values([1.0, 2.0, 3.0, 4.0], 3)
        assert store.domain == (1.0, 4.0)
        assert store.total == 4

    def test_copy_is_independent(self):
        store = HistogramStore.from_values([0.0, 1.0], 2)
        dup = store.copy()
        dup.increment(0.0)
        assert store.total == 2 and dup.total == 3
        assert dup.same_layout(store)

    def test_from_values_degenerate_domain(self):
        store = HistogramStore.from_values([2.0, 2.0], 5)
        assert store.domain == (1.5, 2.5)
        assert store.total == 2


# ============================================================================
# NORMALIZATION
# ============================================================================

class TestNormalize:

    def test_sums_to_one(self):
        store = HistogramStore.alloc(3, 0.0, 3.0)
        store.refill([0.1, 1.1, 1.2, 2.5])
        assert store.normalize() is True
        np.testing.assert_allclose(store.bins, [0.25, 0.5, 0.25])

    def test_idempotent(self):
        store = HistogramStore.alloc(7, 0.0, 1.0)
        store.refill(np.random.default_rng(0).uniform(size=333))
        store.normalize()
        once = store.bins.copy()
        for _ in range(3):
            store.normalize()
        np.testing.assert_allclose(store.bins, once, rtol=1e-14, atol=0)
        assert abs(store.total - 1.0) < 1e-12

    def test_zero_density_is_reported_not_raised(self, caplog):
        store = HistogramStore.alloc(3, 0.0, 1.0)
        with caplog.at_level(logging.WARNING, logger='bamupdate'):
            assert store.normalize() is False
        np.testing.assert_array_equal(store.bins, [0, 0, 0])
        assert "zero" in caplog.text

    def test_model_level_normalize(self):
        model = HistogramModel.from_values([0.0, 1.0, 1.0], 2)
        assert normalize(model) is True
        np.testing.assert_allclose(model.store.bins, [1 / 3, 2 / 3])

    def test_model_level_normalize_requires_histogram(self):
        with pytest.raises(NotAHistogramError):
            normalize(Normal(0, 1))


# ============================================================================
# TEMPLATE RESETS
# ============================================================================

class TestTemplateResets:

    @pytest.fixture
    def template(self):
        return HistogramModel.from_values(np.linspace(-3, 3, 61), 12)

    def test_reset_from_template_keeps_layout(self, template):
        before = template.store.bins.copy()
        out = reset_from_template(template, [0.0, 0.1, 10.0])

        assert out.store.same_layout(template.store)
        assert out.store.total == 3
        assert out.store.bins[-1] == 1
        np.testing.assert_array_equal(template.store.bins, before)

    def test_reset_from_template_requires_histogram(self):
        with pytest.raises(NotAHistogramError):
            reset_from_template(Normal(0, 1), [1.0])

    def test_reset_from_draws_is_normalized(self, template, rng):
        out = reset_from_draws(template, Normal(0, 1), draw_count=500, rng=rng)
        assert out.store.same_layout(template.store)
        assert abs(out.store.total - 1.0) < 1e-9
        # Central bins dominate for a standard normal
        centers = out.store.centers
        assert out.store.bins[np.abs(centers) < 1].sum() > 0.5

    def test_reset_from_draws_needs_draw(self, template):
        with pytest.raises(MissingCapabilityError):
            reset_from_draws(template, Model(), draw_count=10)

    def test_reset_from_draws_uses_default_source(self, template):
        out = reset_from_draws(template, Normal(0, 1), draw_count=20)
        assert abs(out.store.total - 1.0) < 1e-9


# ============================================================================
# HISTOGRAM MODEL
# ============================================================================

class TestHistogramModel:

    def test_draws_stay_in_occupied_bins(self, rng):
        model = HistogramModel(HistogramStore(edges=[0.0, 1.0, 2.0, 3.0], bins=[0.0, 1.0, 0.0]))
        draws = [model.draw(rng) for _ in range(20)]
        assert all(1.0 <= d <= 2.0 for d in draws)

    def test_log_likelihood_is_log_mass(self):
        model = HistogramModel(HistogramStore(edges=[0.0, 1.0, 2.0], bins=[1.0, 3.0]))
        expected = np.log(0.25) + 2 * np.log(0.75)
        assert model.log_likelihood([0.5, 1.5, 1.7]) == pytest.approx(expected)

    def test_mean(self):
        model = HistogramModel(HistogramStore(edges=[0.0, 1.0, 2.0], bins=[1.0, 1.0]))
        assert model.mean() == pytest.approx(1.0)

    def test_capabilities(self):
        model = HistogramModel.from_values([1.0, 2.0], 2)
        assert model.supports_draw
        assert model.supports_log_likelihood
        assert model.name == "Histogram"
