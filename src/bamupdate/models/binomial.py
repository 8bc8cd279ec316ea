"""
Binomial distribution, parameters (n, p).

Each data cell is a success count out of n trials. Draws return the number
of successes in one set of n trials.
"""

import jax
import jax.numpy as jnp
import jax.random as random
from jax.scipy.special import gammaln, xlog1py, xlogy

from ..error_handling import ConfigurationError
from .base import ModelFamily, ParametricModel, as_table


@jax.jit
def binomial_log_likelihood(k, n, p):
    log_choose = gammaln(n + 1) - gammaln(k + 1) - gammaln(n - k + 1)
    ll = jnp.sum(log_choose + xlogy(k, p) + xlog1py(n - k, -p))
    valid = (p >= 0) & (p <= 1) & (n >= 0) & jnp.all((k >= 0) & (k <= n))
    return jnp.where(valid, ll, -jnp.inf)


class Binomial(ParametricModel):
    name = "Binomial"
    family = ModelFamily.BINOMIAL
    parameter_names = ("n", "p")
    defaults = (1.0, 0.5)
    positive = ("n",)

    def __init__(self, *values, **kwargs):
        super().__init__(*values, **kwargs)
        p = self.parameters.vector[1]
        if not 0 <= p <= 1:
            raise ConfigurationError(f"Binomial p must be in [0, 1], got {p}")

    def draw(self, rng) -> float:
        n, p = self.parameters.vector
        trials = random.bernoulli(rng.next_key(), p, shape=(int(round(n)),))
        return float(jnp.sum(trials))

    def log_likelihood(self, data) -> float:
        n, p = self.parameters.vector
        return float(binomial_log_likelihood(jnp.asarray(as_table(data)), n, p))
