"""
Bayesian Update Orchestrator

update() turns a prior, a likelihood and data into a posterior model:

1. Conjugate pairs (see conjugacy.py) return a closed-form model of the
   prior's family immediately; nothing is sampled.
2. Otherwise a Metropolis-Hastings chain draws candidates from the prior,
   scores them with the likelihood, and the retained states are binned into
   a normalized Histogram model.

Because a Histogram model can draw, a sampled posterior can be the prior of
the next update.

Settings for the sampled path come from an UpdateConfig attached to the
prior (attached with defaults on first use) or passed explicitly:

    prior = Gamma(shape=2, scale=1)
    prior.add_settings('update', UpdateConfig(periods=2000, histosegments=100))
    posterior = update(data, prior, likelihood, rng=JaxRandomSource(7))
"""

from typing import Optional

from .conjugacy import resolve
from .error_handling import ConfigurationError, MissingCapabilityError
from .mcmc.config import get_update_config
from .mcmc.sampling import posterior_from_samples, run_metropolis_hastings
from .models.base import Model, as_table
from .rng import get_default_source

import logging
logger = logging.getLogger('bamupdate')


def validate_update_inputs(table, prior: Model, likelihood: Model) -> None:
    """Check that the sampled path can run; raises before any sampling starts."""
    if not prior.supports_draw:
        raise MissingCapabilityError(
            f"The prior ({prior.name}) needs a draw method for the sampled update"
        )
    if not likelihood.supports_log_likelihood:
        raise MissingCapabilityError(
            f"The likelihood ({likelihood.name}) needs a log-likelihood for the sampled update"
        )
    if table is None:
        raise ConfigurationError(
            f"No conjugate rule for {prior.name}/{likelihood.name}; the sampled update needs data"
        )


def update(data, prior: Model, likelihood: Model, rng=None, config=None) -> Model:
    """
    Take in a prior and a likelihood, and output a posterior.

    Args:
        data: Observed data (array-like or ParameterSet), or None for the
              data-free conjugate updates that use the likelihood's parameters
        prior: Prior model. Must not be None. Needs draw() for the sampled path.
        likelihood: Likelihood model. Must not be None. Needs
              log_likelihood() for the sampled path.
        rng: RandomSource; the process-wide default when None
        config: Optional UpdateConfig or dict overriding the prior's attached one

    Returns:
        A closed-form model of the prior's family for conjugate pairs, else a
        normalized HistogramModel built from the chain.

    Raises:
        ConfigurationError: Missing models, missing data, malformed shapes or
            settings. Raised before any sampling begins.
    """
    if prior is None:
        raise ConfigurationError("prior must not be None")
    if likelihood is None:
        raise ConfigurationError("likelihood must not be None")

    table = as_table(data)
    posterior = resolve(prior, likelihood, table)
    if posterior is not None:
        return posterior

    validate_update_inputs(table, prior, likelihood)
    settings = get_update_config(prior, config)
    if rng is None:
        rng = get_default_source()

    logger.info(f"No conjugate rule for {prior.name}/{likelihood.name}; sampling with {settings.method}")
    result = run_metropolis_hastings(table, prior, likelihood, settings, rng)
    return posterior_from_samples(result.samples, settings.histosegments)
