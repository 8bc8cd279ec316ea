"""
Gamma distribution with shape k and scale theta.

Density: x^(k-1) exp(-x/theta) / (Gamma(k) theta^k). Conjugate prior for the
Exponential likelihood, where the update is shape += n and
theta <- 1 / (1/theta + sum(x)).
"""

import jax
import jax.numpy as jnp
import jax.random as random
import jax.scipy.stats as stats

from ..error_handling import ConfigurationError
from .base import ModelFamily, ParametricModel, as_table


@jax.jit
def gamma_log_likelihood(x, shape, scale):
    ll = jnp.sum(stats.gamma.logpdf(x, shape, scale=scale))
    return jnp.where((shape > 0) & (scale > 0), ll, -jnp.inf)


class Gamma(ParametricModel):
    """
    Gamma(shape, scale). ``rate=`` is accepted in place of ``scale`` and
    stored as scale = 1 / rate.
    """
    name = "Gamma"
    family = ModelFamily.GAMMA
    parameter_names = ("shape", "scale")
    defaults = (1.0, 1.0)
    positive = ("shape", "scale")

    def __init__(self, *values, **kwargs):
        if 'rate' in kwargs:
            rate = kwargs.pop('rate')
            if 'scale' in kwargs or len(values) > 1:
                raise ConfigurationError("Gamma takes either scale or rate, not both")
            if not rate > 0:
                raise ConfigurationError(f"Gamma parameter 'rate' must be > 0, got {rate}")
            kwargs['scale'] = 1.0 / rate
        super().__init__(*values, **kwargs)

    @property
    def rate(self) -> float:
        return 1.0 / self.scale

    def draw(self, rng) -> float:
        shape, scale = self.parameters.vector
        return float(random.gamma(rng.next_key(), shape) * scale)

    def log_likelihood(self, data) -> float:
        shape, scale = self.parameters.vector
        return float(gamma_log_likelihood(jnp.asarray(as_table(data)), shape, scale))
