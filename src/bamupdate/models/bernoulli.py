"""
Bernoulli distribution, parameter p. Any nonzero data cell counts as a success.
"""

import jax
import jax.numpy as jnp
import jax.random as random
import jax.scipy.stats as stats

from ..error_handling import ConfigurationError
from .base import ModelFamily, ParametricModel, as_table


@jax.jit
def bernoulli_log_likelihood(x, p):
    ll = jnp.sum(stats.bernoulli.logpmf((x != 0).astype(x.dtype), p))
    return jnp.where((p >= 0) & (p <= 1), ll, -jnp.inf)


class Bernoulli(ParametricModel):
    name = "Bernoulli"
    family = ModelFamily.BERNOULLI
    parameter_names = ("p",)
    defaults = (0.5,)

    def __init__(self, *values, **kwargs):
        super().__init__(*values, **kwargs)
        p = self.parameters.vector[0]
        if not 0 <= p <= 1:
            raise ConfigurationError(f"Bernoulli p must be in [0, 1], got {p}")

    def draw(self, rng) -> float:
        p, = self.parameters.vector
        return float(random.bernoulli(rng.next_key(), p))

    def log_likelihood(self, data) -> float:
        p, = self.parameters.vector
        return float(bernoulli_log_likelihood(jnp.asarray(as_table(data)), p))
