"""
Conjugacy Resolver Tests

Tests the closed-form posterior table against hand-computed values.

Run with: pytest tests/test_conjugacy.py -v
"""

import numpy as np
import pytest

from bamupdate import (
    Beta, Bernoulli, Binomial, Exponential, Gamma, Normal, UpdateConfig,
    list_conjugate_pairs, resolve, update,
)
from bamupdate.error_handling import ConfigurationError
from bamupdate.models.base import ModelFamily


# ============================================================================
# BETA PRIORS
# ============================================================================

class TestBetaPrior:

    def test_binomial_without_data_uses_likelihood_parameters(self):
        posterior = resolve(Beta(1, 1), Binomial(n=10, p=0.3))
        assert posterior.alpha == pytest.approx(4.0, abs=1e-12)
        assert posterior.beta == pytest.approx(8.0, abs=1e-12)

    def test_binomial_with_data(self):
        data = np.array([[1.0, 0.0], [1.0, 1.0]])
        posterior = resolve(Beta(2, 3), Binomial(), data)
        assert posterior.alpha == 5.0
        assert posterior.beta == 4.0

    def test_bernoulli_counts_nonzero_cells(self):
        posterior = resolve(Beta(1, 1), Bernoulli(), [0, 1, 1, 0, 2])
        assert posterior.alpha == 4.0
        assert posterior.beta == 3.0

    def test_bernoulli_needs_data(self):
        with pytest.raises(ConfigurationError):
            resolve(Beta(1, 1), Bernoulli(0.5))


# ============================================================================
# GAMMA / EXPONENTIAL
# ============================================================================

class TestGammaExponential:

    def test_update(self, exponential_data):
        posterior = resolve(Gamma(shape=2, scale=1), Exponential(), exponential_data)
        assert posterior.shape == 102.0
        assert posterior.scale == pytest.approx(1.0 / 51.0, rel=1e-12)

    def test_rate_construction(self, exponential_data):
        posterior = resolve(Gamma(shape=2, rate=1), Exponential(), exponential_data)
        assert posterior.shape == 102.0
        assert posterior.rate == pytest.approx(51.0, rel=1e-12)

    def test_needs_data(self):
        with pytest.raises(ConfigurationError):
            resolve(Gamma(2, 1), Exponential())


# ============================================================================
# NORMAL / NORMAL
# ============================================================================

class TestNormalNormal:

    def test_with_data(self):
        # mean 2, sample variance 4, n = 5
        data = np.array([0.0, 0.0, 2.0, 4.0, 4.0])
        assert np.var(data, ddof=1) == 4.0

        posterior = resolve(Normal(0, 1), Normal(), data)

        var_prior, mu_like, var_like, n = 1.0, 2.0, 4.0, 5
        precision = 1 / var_prior + n / var_like
        assert posterior.mu == pytest.approx((n * mu_like / var_like) / precision, abs=1e-9)
        assert posterior.sigma == pytest.approx(precision ** -0.5, abs=1e-9)

    def test_without_data_weights_likelihood_as_one_observation(self):
        posterior = resolve(Normal(0, 1), Normal(2, 2))
        assert posterior.mu == pytest.approx(0.4, abs=1e-12)
        assert posterior.sigma == pytest.approx(1.25 ** -0.5, abs=1e-12)

    def test_needs_two_observations(self):
        with pytest.raises(ConfigurationError):
            resolve(Normal(0, 1), Normal(), [3.0])


# ============================================================================
# TABLE BEHAVIOUR
# ============================================================================

class TestResolver:

    def test_unmatched_pair_returns_none(self):
        assert resolve(Gamma(2, 1), Normal(0, 1), [1.0, 2.0]) is None
        assert resolve(Normal(0, 1), Beta(1, 1), [0.5]) is None

    def test_table_contents(self):
        assert set(list_conjugate_pairs()) == {
            (ModelFamily.GAMMA, ModelFamily.EXPONENTIAL),
            (ModelFamily.BETA, ModelFamily.BINOMIAL),
            (ModelFamily.BETA, ModelFamily.BERNOULLI),
            (ModelFamily.NORMAL, ModelFamily.NORMAL),
        }

    def test_returns_copy_with_settings_preserved(self):
        prior = Beta(1, 1)
        prior.add_settings('update', UpdateConfig(periods=10))

        posterior = resolve(prior, Binomial(n=4, p=0.5))

        assert posterior is not prior
        assert posterior.family == ModelFamily.BETA
        assert posterior.get_settings('update').periods == 10
        assert posterior.get_settings('update') is not prior.get_settings('update')
        assert prior.alpha == 1.0 and prior.beta == 1.0

    def test_update_takes_conjugate_fast_path(self):
        posterior = update(None, Beta(1, 1), Binomial(n=10, p=0.3))
        assert isinstance(posterior, Beta)
        # No sampling: no config was attached to the prior
        assert posterior.get_settings('update') is None
