"""
bamupdate - Bayesian Updating

Public API:
    Updating:
        update - Prior + likelihood + data -> posterior model
        resolve - Closed-form posterior for conjugate pairs (None otherwise)
        list_conjugate_pairs - Pairs with a closed-form rule

    Models:
        Beta, Gamma, Normal, Exponential, Binomial, Bernoulli - Parametric families
        HistogramModel - Empirical PMF model (output of sampled updates)
        Model, ParametricModel - Base classes for user-defined families
        ModelFamily - IntEnum keying the conjugacy table
        register_family / get_family / list_families - Family lookup by name

    Parameters and Codec:
        ParameterSet - Vector / matrix / weights / chained pages
        flatten, unflatten, size_count - Pack and unpack parameter buffers

    Histograms:
        HistogramStore - Equal-width bins with refill/normalize
        reset_from_template - Same bins, new values (raw counts)
        reset_from_draws - Same bins, random draws from a model (normalized)

    Sampling:
        UpdateConfig - periods, burnin, histosegments, starting_pt, method
        run_metropolis_hastings - One chain, returns a ChainResult
        compute_rhat - Convergence check across independent chains

    Randomness:
        JaxRandomSource - Seeded jax.random source
        get_default_source - Process-wide default source

Example:
    from bamupdate import update, Gamma, Exponential, Beta, Binomial

    # Conjugate: closed form
    posterior = update(None, Beta(1, 1), Binomial(n=10, p=0.3))

    # Non-conjugate: Metropolis-Hastings, returns a HistogramModel
    posterior = update(data, Normal(1, 0.5), Exponential(), config={'periods': 2000})
"""
# CRITICAL: Import jax_config FIRST to set environment variables before JAX loads
from . import jax_config  # noqa: F401

from .error_handling import (
    UpdateError,
    ConfigurationError,
    SizeMismatchError,
    MissingCapabilityError,
    NotAHistogramError,
)
from .params import ParameterSet
from .codec import flatten, unflatten, size_count
from .histogram import HistogramStore
from .registry import register_family, get_family, list_families
from .models import (
    Model,
    ModelFamily,
    ParametricModel,
    Beta,
    Gamma,
    Normal,
    Exponential,
    Binomial,
    Bernoulli,
    HistogramModel,
    reset_from_template,
    reset_from_draws,
)
from .conjugacy import resolve, list_conjugate_pairs
from .rng import JaxRandomSource, get_default_source
from .mcmc import (
    UpdateConfig,
    SamplerMethod,
    ChainResult,
    run_metropolis_hastings,
    compute_rhat,
)

# Main entry point
from .update import update
