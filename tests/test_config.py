"""
Update Configuration Tests

Tests UpdateConfig validation, the config attached to priors, and chain
initialization.

Run with: pytest tests/test_config.py -v
"""

import numpy as np
import pytest

from bamupdate import Gamma, ParameterSet, SamplerMethod, UpdateConfig
from bamupdate.error_handling import ConfigurationError, SizeMismatchError, validate_update_config
from bamupdate.mcmc import configure_chain, get_update_config

from .conftest import ConstantLikelihood


class TestUpdateConfig:

    def test_defaults(self):
        config = UpdateConfig()
        assert config.periods == 6000
        assert config.burnin == 0.05
        assert config.histosegments == 500
        assert config.starting_pt is None
        assert config.method == SamplerMethod.METROPOLIS_HASTINGS
        assert config.burnin_count == 300
        assert config.record_count == 5700

    def test_from_dict_lowercases_keys(self):
        config = UpdateConfig.from_dict({'Periods': 100, 'BURNIN': 0.1})
        assert config.periods == 100
        assert config.burnin_count == 10
        assert config.histosegments == 500

    @pytest.mark.parametrize("bad", [
        {'periods': 0},
        {'burnin': 1.0},
        {'burnin': -0.1},
        {'histosegments': 0},
        {'starting_pt': [1.0, 2.0]},
        {'iterations': 10},
        {'burnin': float('nan')},
        {'method': 7},
    ])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ConfigurationError):
            UpdateConfig.from_dict(bad)

    def test_all_errors_reported_together(self):
        with pytest.raises(ConfigurationError) as excinfo:
            validate_update_config({'periods': 0, 'histosegments': 0})
        assert "periods" in str(excinfo.value)
        assert "histosegments" in str(excinfo.value)

    def test_unknown_method_collected_with_other_errors(self):
        with pytest.raises(ConfigurationError) as excinfo:
            UpdateConfig(periods=0, method=7)
        assert "method" in str(excinfo.value)
        assert "periods" in str(excinfo.value)

    def test_method_string(self):
        assert str(SamplerMethod.METROPOLIS_HASTINGS) == "Metropolis Hastings"


class TestAttachedConfig:

    def test_default_attached_once(self):
        prior = Gamma(2, 1)
        config = get_update_config(prior)
        assert prior.get_settings('update') is config
        assert get_update_config(prior) is config

    def test_override_wins_and_is_not_attached(self):
        prior = Gamma(2, 1)
        config = get_update_config(prior, {'periods': 10})
        assert config.periods == 10
        assert prior.get_settings('update') is None

    def test_attached_dict_is_accepted(self):
        prior = Gamma(2, 1)
        prior.add_settings('update', {'periods': 25})
        assert get_update_config(prior).periods == 25

    def test_rejects_other_types(self):
        with pytest.raises(ConfigurationError):
            get_update_config(Gamma(2, 1), 42)


class TestConfigureChain:

    def test_all_ones_start(self):
        shape, current = configure_chain(ConstantLikelihood(), np.zeros((4, 1)), UpdateConfig())
        assert shape.width == 1
        np.testing.assert_array_equal(current.vector, [1.0])

    def test_starting_point_is_copied(self):
        start = ParameterSet(vector=[3.0])
        _, current = configure_chain(ConstantLikelihood(), np.zeros((4, 1)),
                                     UpdateConfig(starting_pt=start))
        current.vector[0] = 0.0
        assert start.vector[0] == 3.0

    def test_starting_point_mismatch(self):
        config = UpdateConfig(starting_pt=ParameterSet(vector=[1.0, 2.0]))
        with pytest.raises(SizeMismatchError):
            configure_chain(ConstantLikelihood(), np.zeros((4, 1)), config)
