"""
Metropolis-Hastings Sampling.

The non-conjugate update path:
- run_metropolis_hastings: Independence sampler drawing candidates from the
  prior and accepting them by a log-likelihood-ratio test
- posterior_from_samples: Fold the sample log into a normalized Histogram

Each iteration builds a fresh candidate ParameterSet from a prior draw and
evaluates it on a copy of the likelihood, so the caller's likelihood model
is never written to. The retained state is only replaced on acceptance.
"""

import math
import time

import numpy as np

from ..codec import flatten, unflatten
from ..error_handling import SizeMismatchError
from ..models.histogram import HistogramModel
from ..params import ParameterSet
from .config import UpdateConfig, configure_chain
from .types import ChainResult

import logging
logger = logging.getLogger('bamupdate')


def accept_candidate(ratio: float, rng) -> bool:
    """
    Metropolis acceptance on the log scale.

    Accepts when ratio >= 0 without drawing; otherwise draws u ~ U[0, 1) and
    accepts when log(u) < ratio. Comparing logs avoids exponentiating large
    likelihood ratios.
    """
    if ratio >= 0:
        return True
    u = rng.uniform()
    log_u = math.log(u) if u > 0 else -math.inf
    return log_u < ratio


def run_metropolis_hastings(table: np.ndarray, prior, likelihood, config: UpdateConfig,
                            rng) -> ChainResult:
    """
    Run one Metropolis-Hastings chain.

    Args:
        table: Observed data, 2-D float array
        prior: Model with a draw capability; each draw is one candidate
        likelihood: Model with a log-likelihood capability
        config: UpdateConfig (periods, burnin, starting_pt)
        rng: RandomSource

    Returns:
        ChainResult whose samples hold the flattened retained state for every
        iteration i >= floor(periods * burnin), accepted or not.
    """
    shape, current_param = configure_chain(likelihood, table, config)
    burnin_count = config.burnin_count
    samples = np.empty((config.periods - burnin_count, shape.width), dtype=np.float64)

    current_ll = -np.inf
    n_accepted = 0
    n_nan = 0

    logger.info(
        f"Metropolis-Hastings: {config.periods} periods, burn-in {burnin_count}, "
        f"{shape.width} parameter(s) per draw"
    )
    start_time = time.perf_counter()

    for i in range(config.periods):
        candidate = ParameterSet.alloc(shape.vsize, shape.rows, shape.cols)
        draw = np.atleast_1d(np.asarray(prior.draw(rng), dtype=np.float64))
        if draw.size != shape.width:
            raise SizeMismatchError(
                f"{prior.name} draws {draw.size} value(s) but {likelihood.name} takes {shape.width}"
            )
        unflatten(draw, candidate)
        ll = likelihood.with_parameters(candidate).log_likelihood(table)
        ratio = ll - current_ll

        if np.isnan(ratio):
            n_nan += 1
            logger.warning(
                f"Trouble evaluating the likelihood at iteration {i} (candidate "
                f"beginning with {flatten(candidate)[0]:g}, current state beginning with "
                f"{flatten(current_param)[0]:g}). Maybe offer a new starting point."
            )
        elif accept_candidate(ratio, rng):
            current_param = candidate
            current_ll = ll
            n_accepted += 1

        if i >= burnin_count:
            flatten(current_param, out=samples[i - burnin_count])

    wall_time = time.perf_counter() - start_time
    result = ChainResult(
        samples=samples,
        current_param=current_param,
        current_log_likelihood=float(current_ll),
        periods=config.periods,
        burnin_count=burnin_count,
        n_accepted=n_accepted,
        n_nan=n_nan,
    )
    logger.info(f"\n--- MCMC Run Summary ---")
    logger.info(f"  Wall Time: {wall_time:.2f}s")
    logger.info(f"  Acceptance rate: {result.acceptance_rate:.3f} ({n_accepted}/{config.periods})")
    if n_nan:
        logger.info(f"  NaN likelihood ratios: {n_nan}")
    return result


def posterior_from_samples(samples: np.ndarray, histosegments: int) -> HistogramModel:
    """Histogram of every recorded value with ``histosegments`` bins, normalized to a PMF."""
    posterior = HistogramModel.from_values(samples.ravel(), histosegments)
    posterior.store.normalize()
    return posterior
