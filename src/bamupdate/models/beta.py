"""
Beta distribution over (0, 1).

Parameters: (alpha, beta). Conjugate prior for Binomial and Bernoulli
likelihoods.
"""

import jax
import jax.numpy as jnp
import jax.random as random
import jax.scipy.stats as stats

from .base import ModelFamily, ParametricModel, as_table


@jax.jit
def beta_log_likelihood(x, alpha, beta):
    ll = jnp.sum(stats.beta.logpdf(x, alpha, beta))
    return jnp.where((alpha > 0) & (beta > 0), ll, -jnp.inf)


class Beta(ParametricModel):
    name = "Beta"
    family = ModelFamily.BETA
    parameter_names = ("alpha", "beta")
    defaults = (1.0, 1.0)
    positive = ("alpha", "beta")

    def draw(self, rng) -> float:
        alpha, beta = self.parameters.vector
        return float(random.beta(rng.next_key(), alpha, beta))

    def log_likelihood(self, data) -> float:
        alpha, beta = self.parameters.vector
        return float(beta_log_likelihood(jnp.asarray(as_table(data)), alpha, beta))
