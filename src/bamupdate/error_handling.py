"""
Error Types, Validation and Diagnostics for Bayesian Updating

This module provides the exception hierarchy used across the package, the
UpdateConfig validator, and diagnostic tools for inspecting a finished chain.

Error taxonomy:
    ConfigurationError - missing prior/likelihood, malformed ParameterSets,
                         invalid settings. Raised before any sampling starts.
    SizeMismatchError  - buffer/shape disagreements in the codec.
    MissingCapabilityError - a model lacks draw or log_likelihood where the
                         operation needs it.
    NotAHistogramError - a histogram-only operation got another family.

Numeric degeneracy (NaN likelihood ratios, zero-density normalization) is
never raised; it is logged as a warning and the operation continues.
"""

from typing import Any, Dict

import numpy as np

import logging
logger = logging.getLogger('bamupdate')


class UpdateError(Exception):
    """Base class for every error raised by bamupdate."""


class ConfigurationError(UpdateError, ValueError):
    """Structural problem with the inputs; the operation is aborted."""


class SizeMismatchError(ConfigurationError):
    """A flat buffer and a ParameterSet disagree on size."""


class MissingCapabilityError(ConfigurationError):
    """A model is missing the draw or log_likelihood capability."""


class NotAHistogramError(ConfigurationError):
    """A histogram template was expected but another model family was given."""


def validate_update_config(update_config: Dict[str, Any]) -> None:
    """
    Validates that an update configuration is sensible.

    Args:
        update_config: Configuration dictionary (lowercase keys)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    errors = []

    if 'periods' in update_config:
        if update_config['periods'] < 1:
            errors.append("periods must be >= 1")

    if 'burnin' in update_config:
        burnin = update_config['burnin']
        if not 0 <= burnin < 1:
            errors.append(f"burnin must be in [0, 1), got {burnin}")

    if 'histosegments' in update_config:
        if update_config['histosegments'] < 1:
            errors.append("histosegments must be >= 1")

    if 'method' in update_config:
        from .mcmc.types import SamplerMethod
        try:
            SamplerMethod(update_config['method'])
        except ValueError:
            valid = ", ".join(f"{int(m)} ({m})" for m in SamplerMethod)
            errors.append(f"Unknown sampler method {update_config['method']!r}; valid: {valid}")

    starting_pt = update_config.get('starting_pt')
    if starting_pt is not None and not hasattr(starting_pt, 'vector'):
        errors.append(
            f"starting_pt must be a ParameterSet, got {type(starting_pt).__name__}"
        )

    unknown = set(update_config) - {'periods', 'burnin', 'histosegments', 'starting_pt', 'method'}
    for key in sorted(unknown):
        errors.append(f"Unknown config key: '{key}'")

    if errors:
        raise ConfigurationError("Invalid update configuration:\n  " + "\n  ".join(errors))


def diagnose_sampler_issues(result, diagnostics: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Analyzes a finished Metropolis-Hastings chain to identify common issues.

    Args:
        result: ChainResult from run_metropolis_hastings
        diagnostics: Existing diagnostics dict to extend

    Returns:
        diagnostics: Dictionary with issues, warnings, and info
    """
    diagnostics = (diagnostics or {}) | {
        'issues': [],
        'warnings': [],
        'info': []
    }
    samples = result.samples

    if samples.size and not np.all(np.isfinite(samples)):
        diagnostics['issues'].append(
            "Sample log contains NaN or Inf values - likelihood became unstable"
        )

    if result.n_accepted == 0:
        diagnostics['issues'].append(
            "No candidate was ever accepted - the chain never left its starting point"
        )
    elif samples.shape[0] > 1 and np.all(np.var(samples, axis=0) < 1e-12):
        diagnostics['warnings'].append("Chain appears stuck (near-zero variance)")

    if result.n_nan > 0:
        diagnostics['warnings'].append(
            f"{result.n_nan} iteration(s) produced a NaN likelihood ratio"
        )

    diagnostics['info'].append(f"Total periods: {result.periods}")
    diagnostics['info'].append(f"Recorded samples: {samples.shape[0]}")
    diagnostics['info'].append(f"Acceptance rate: {result.acceptance_rate:.3f}")

    return diagnostics


def print_diagnostics(diagnostics: Dict[str, Any]) -> None:
    """Log the output of diagnose_sampler_issues, problems first."""
    logger.info("\n--- Chain Diagnostics ---")
    for issue in diagnostics['issues']:
        logger.error(f"  Problem: {issue}")
    for warning in diagnostics['warnings']:
        logger.warning(f"  Check: {warning}")
    for info in diagnostics['info']:
        logger.info(f"  {info}")

    if not diagnostics['issues'] and not diagnostics['warnings']:
        logger.info("  Chain looks healthy")
