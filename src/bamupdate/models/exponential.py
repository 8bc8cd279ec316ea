"""
Exponential distribution with scale mu (mean mu, density exp(-x/mu)/mu).
"""

import jax
import jax.numpy as jnp
import jax.random as random
import jax.scipy.stats as stats

from .base import ModelFamily, ParametricModel, as_table


@jax.jit
def exponential_log_likelihood(x, scale):
    ll = jnp.sum(stats.expon.logpdf(x, scale=scale))
    return jnp.where(scale > 0, ll, -jnp.inf)


class Exponential(ParametricModel):
    name = "Exponential"
    family = ModelFamily.EXPONENTIAL
    parameter_names = ("scale",)
    defaults = (1.0,)
    positive = ("scale",)

    def draw(self, rng) -> float:
        scale, = self.parameters.vector
        return float(random.exponential(rng.next_key()) * scale)

    def log_likelihood(self, data) -> float:
        scale, = self.parameters.vector
        return float(exponential_log_likelihood(jnp.asarray(as_table(data)), scale))
