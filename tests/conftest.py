"""
Pytest configuration and shared fixtures for bamupdate tests.
"""

import itertools

import numpy as np
import pytest

from bamupdate import JaxRandomSource, Model, ParameterSet
from bamupdate.models import Exponential
from bamupdate.models.base import ModelFamily
from bamupdate.rng import gen_rng_key, reset_default_source


@pytest.fixture
def rng_seed():
    """Default RNG seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(rng_seed):
    """Fresh seeded random source."""
    return JaxRandomSource(rng_seed)


@pytest.fixture(autouse=True)
def clean_default_source():
    """Each test starts without a process-wide default source."""
    reset_default_source()
    yield
    reset_default_source()


class ScriptedSource:
    """
    RandomSource returning scripted uniforms.

    Raises if more uniforms are requested than were scripted, so tests can
    assert that the sampler never needed one.
    """

    def __init__(self, uniforms=(), seed=0):
        self._uniforms = iter(uniforms)
        self._key = gen_rng_key(seed)
        self.uniform_calls = 0

    def uniform(self):
        self.uniform_calls += 1
        try:
            return next(self._uniforms)
        except StopIteration:
            raise AssertionError("ScriptedSource ran out of uniforms")

    def next_key(self):
        import jax.random
        self._key, subkey = jax.random.split(self._key)
        return subkey


class SequencePrior(Model):
    """Prior whose draws are 1.0, 2.0, 3.0, ... (or a supplied sequence)."""
    name = "Sequence"

    def __init__(self, values=None):
        super().__init__()
        self._values = iter(values) if values is not None else (float(i) for i in itertools.count(1))

    def draw(self, rng):
        return next(self._values)


class ConstantLikelihood(Model):
    """One-parameter likelihood that scores every candidate the same."""
    name = "Constant"
    vbase = 1
    m1base = 0
    m2base = 0

    def __init__(self, value=0.0):
        super().__init__()
        self.value = value
        self.seen = []

    def log_likelihood(self, data):
        self.seen.append(float(self.parameters.vector[0]))
        return self.value


class NonConjugateExponential(Exponential):
    """Exponential likelihood that the conjugacy table does not recognize."""
    name = "Exponential (sampled)"
    family = ModelFamily.CUSTOM


@pytest.fixture
def exponential_data():
    """100 observations summing to 50."""
    return np.full(100, 0.5)


@pytest.fixture
def layered_params():
    """Three pages: data, info page, data."""
    third = ParameterSet(vector=[2.0, 3.0], matrix=[[4.0, 5.0]], title="third")
    info = ParameterSet(matrix=[[9.0, 9.5]], title="<Covariance>", more=third)
    return ParameterSet(vector=[1.0], title="first", more=info)
