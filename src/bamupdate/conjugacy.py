"""
Conjugacy Resolver

Closed-form posteriors for conjugate (prior, likelihood) pairs. The table is
keyed on (prior family, likelihood family); each rule returns the prior
family's new parameter vector computed from sufficient statistics of the
data, or from the likelihood's own parameters when no data is given.

    Prior   Likelihood   Update
    Gamma   Exponential  shape += #cells; scale <- 1/(1/scale + sum(x))
    Beta    Binomial     no data: alpha += n*p, beta += n*(1-p)
                         data:    alpha += sum(x), beta += #cells - sum(x)
    Beta    Bernoulli    alpha += #nonzero cells, beta += #zero cells
    Normal  Normal       precision-weighted mean, sd = (1/s0^2 + n/s^2)^-1/2

resolve() returns None for pairs not in the table; the orchestrator then
falls back to Metropolis-Hastings sampling.

To add a rule:
1. Write a function (prior, likelihood, table) -> new prior vector
2. Add it to CONJUGATE_RULES under its (ModelFamily, ModelFamily) key
"""

from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .error_handling import ConfigurationError
from .models.base import Model, ModelFamily, as_table

import logging
logger = logging.getLogger('bamupdate')


def _require_data(table, pair):
    if table is None or table.size == 0:
        raise ConfigurationError(f"The {pair} conjugate update needs observed data")
    return table


def gamma_exponential(prior, likelihood, table):
    table = _require_data(table, "Gamma/Exponential")
    shape, scale = prior.parameters.vector
    return [shape + table.size, 1.0 / (1.0 / scale + table.sum())]


def beta_binomial(prior, likelihood, table):
    alpha, beta = prior.parameters.vector
    if table is None:
        if likelihood.parameters is None or likelihood.parameters.vector is None:
            raise ConfigurationError(
                "The Beta/Binomial conjugate update needs data or a parametrized Binomial likelihood"
            )
        n, p = likelihood.parameters.vector[:2]
        return [alpha + n * p, beta + n * (1 - p)]
    successes = table.sum()
    return [alpha + successes, beta + table.size - successes]


def beta_bernoulli(prior, likelihood, table):
    table = _require_data(table, "Beta/Bernoulli")
    alpha, beta = prior.parameters.vector
    successes = np.count_nonzero(table)
    return [alpha + successes, beta + table.size - successes]


def normal_normal(prior, likelihood, table):
    """
    Updates the mean of a Normal prior, weighting the likelihood side by the
    number of observations (n = 1 for a parametrized likelihood without data).
    """
    mu_prior, sigma_prior = prior.parameters.vector
    var_prior = sigma_prior ** 2
    if table is None:
        if likelihood.parameters is None or likelihood.parameters.vector is None:
            raise ConfigurationError(
                "The Normal/Normal conjugate update needs data or a parametrized Normal likelihood"
            )
        mu_like, sigma_like = likelihood.parameters.vector[:2]
        var_like = sigma_like ** 2
        n = 1
    else:
        n = table.size
        if n < 2:
            raise ConfigurationError("The Normal/Normal conjugate update needs at least two observations")
        mu_like = float(np.mean(table))
        var_like = float(np.var(table, ddof=1))
    if var_like <= 0:
        raise ConfigurationError(f"Normal/Normal conjugate update got a non-positive likelihood variance ({var_like})")

    precision = 1.0 / var_prior + n / var_like
    mu_post = (mu_prior / var_prior + n * mu_like / var_like) / precision
    return [mu_post, precision ** -0.5]


ConjugateRule = Callable[[Model, Model, Optional[np.ndarray]], List[float]]

CONJUGATE_RULES: Dict[Tuple[ModelFamily, ModelFamily], ConjugateRule] = {
    (ModelFamily.GAMMA, ModelFamily.EXPONENTIAL): gamma_exponential,
    (ModelFamily.BETA, ModelFamily.BINOMIAL): beta_binomial,
    (ModelFamily.BETA, ModelFamily.BERNOULLI): beta_bernoulli,
    (ModelFamily.NORMAL, ModelFamily.NORMAL): normal_normal,
}


def list_conjugate_pairs() -> List[Tuple[ModelFamily, ModelFamily]]:
    """All (prior family, likelihood family) pairs with a closed-form update."""
    return list(CONJUGATE_RULES.keys())


def resolve(prior: Model, likelihood: Model, data=None) -> Optional[Model]:
    """
    Closed-form posterior for a conjugate pair.

    Args:
        prior: Prior model
        likelihood: Likelihood model
        data: Observed data (any form accepted by as_table), or None to use
              the likelihood's own parameters where the rule allows it

    Returns:
        A deep copy of the prior with new parameters (settings preserved),
        or None if the pair has no rule.

    Raises:
        ConfigurationError: A rule matched but its inputs are unusable.
    """
    rule = CONJUGATE_RULES.get((prior.family, likelihood.family))
    if rule is None:
        return None

    new_vector = rule(prior, likelihood, as_table(data))
    posterior = prior.copy()
    posterior.parameters.vector[:] = new_vector
    logger.info(f"Conjugate update {prior.family}/{likelihood.family}: {posterior!r}")
    return posterior
