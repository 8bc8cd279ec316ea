"""
Normal distribution, parameters (mu, sigma).
"""

import jax
import jax.numpy as jnp
import jax.random as random
import jax.scipy.stats as stats

from .base import ModelFamily, ParametricModel, as_table


@jax.jit
def normal_log_likelihood(x, mu, sigma):
    ll = jnp.sum(stats.norm.logpdf(x, mu, sigma))
    return jnp.where(sigma > 0, ll, -jnp.inf)


class Normal(ParametricModel):
    name = "Normal"
    family = ModelFamily.NORMAL
    parameter_names = ("mu", "sigma")
    defaults = (0.0, 1.0)
    positive = ("sigma",)

    def draw(self, rng) -> float:
        mu, sigma = self.parameters.vector
        return float(mu + sigma * random.normal(rng.next_key()))

    def log_likelihood(self, data) -> float:
        mu, sigma = self.parameters.vector
        return float(normal_log_likelihood(jnp.asarray(as_table(data)), mu, sigma))
