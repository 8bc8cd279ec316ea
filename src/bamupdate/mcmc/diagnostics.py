"""
MCMC Diagnostics.

One update call runs one chain. To check convergence, run several chains
with independent random sources (JaxRandomSource.spawn) and compare them:
- compute_rhat: Gelman-Rubin R-hat across chains
- print_acceptance_summary: Acceptance and NaN counts for one chain
"""

from typing import Sequence

import jax.numpy as jnp
import numpy as np

from .types import ChainResult

import logging
logger = logging.getLogger('bamupdate')


def stack_chains(results: Sequence[ChainResult]) -> np.ndarray:
    """Stack sample logs into (n_samples, n_chains, n_params)."""
    lengths = {r.samples.shape for r in results}
    if len(lengths) != 1:
        raise ValueError(f"All chains must have the same sample log shape, got {sorted(lengths)}")
    return np.stack([r.samples for r in results], axis=1)


def compute_rhat(history) -> jnp.ndarray:
    """
    Standard Gelman-Rubin R-hat.

    Args:
        history: Sample history array (n_samples, n_chains, n_params), or a
                 sequence of ChainResults from independent runs

    Returns:
        rhat: (n_params,) array of R-hat values.
    """
    if not hasattr(history, 'shape'):
        history = stack_chains(history)
    history = jnp.asarray(history)
    n, m, _ = history.shape
    if m < 2 or n < 2:
        raise ValueError(f"R-hat needs at least two chains of two samples, got shape {history.shape}")

    chain_means = jnp.mean(history, axis=0)
    B = n * jnp.var(chain_means, axis=0, ddof=1)
    W = jnp.mean(jnp.var(history, axis=0, ddof=1), axis=0)

    # V_hat = (n-1)/n * W + B/n + B/(m*n)
    V_hat = ((n - 1) / n) * W + B / n + B / (m * n)
    return jnp.sqrt(V_hat / W)


def print_acceptance_summary(result: ChainResult) -> None:
    """Log acceptance statistics for one chain."""
    logger.info(f"\n--- MH Acceptance ---")
    logger.info(f"  Rate: {result.acceptance_rate:.1%} ({result.n_accepted}/{result.periods})")
    logger.info(f"  Recorded samples: {result.samples.shape[0]} (burn-in {result.burnin_count})")
    if result.acceptance_rate < 0.01:
        logger.warning("  WARNING: acceptance rate < 1%; the prior may be far from the likelihood")
    if result.n_nan:
        logger.warning(f"  WARNING: {result.n_nan} NaN likelihood ratio(s)")
