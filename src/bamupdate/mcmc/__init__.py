"""
MCMC Subpackage - Sampling path of the Bayesian update.

This package contains the non-conjugate update machinery:
- config: UpdateConfig and chain initialization
- sampling: Metropolis-Hastings loop and histogram folding
- diagnostics: R-hat across chains and acceptance summaries
- types: SamplerMethod, ParameterShape, ChainResult
"""

from .types import SamplerMethod, ParameterShape, ChainResult
from .config import UpdateConfig, get_update_config, configure_chain, UPDATE_SETTINGS_GROUP
from .sampling import accept_candidate, run_metropolis_hastings, posterior_from_samples
from .diagnostics import compute_rhat, print_acceptance_summary, stack_chains

__all__ = [
    # Types
    'SamplerMethod',
    'ParameterShape',
    'ChainResult',
    # Config
    'UpdateConfig',
    'get_update_config',
    'configure_chain',
    'UPDATE_SETTINGS_GROUP',
    # Sampling
    'accept_candidate',
    'run_metropolis_hastings',
    'posterior_from_samples',
    # Diagnostics
    'compute_rhat',
    'print_acceptance_summary',
    'stack_chains',
]
