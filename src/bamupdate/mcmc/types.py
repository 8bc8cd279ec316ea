"""
MCMC Data Structures and Type Definitions.

This module contains the data structures used by the sampler:
- SamplerMethod: Enum selecting the sampler variant
- ParameterShape: Shape of the likelihood's parameter slot
- ChainResult: Everything a finished chain produced
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class SamplerMethod(IntEnum):
    """
    Enumeration of sampler variants for the non-conjugate path.

    Only METROPOLIS_HASTINGS is implemented; the selector is kept in
    UpdateConfig so configurations stay stable when variants are added.
    """
    METROPOLIS_HASTINGS = 0

    def __str__(self):
        return self.name.replace('_', ' ').title()


@dataclass(frozen=True)
class ParameterShape:
    """
    Shape of one candidate parameter set.

    Fields:
        vsize: Vector length
        rows: Matrix rows
        cols: Matrix columns
    """
    vsize: int
    rows: int
    cols: int

    @property
    def width(self) -> int:
        """Flattened length of one candidate (vector + matrix)."""
        return self.vsize + (self.rows * self.cols if self.rows > 0 and self.cols > 0 else 0)


@dataclass
class ChainResult:
    """
    Output of one Metropolis-Hastings run.

    Fields:
        samples: MCMCSampleLog, (periods - burnin_count, width) flattened states
        current_param: Retained state after the last iteration (ParameterSet)
        current_log_likelihood: Log-likelihood of current_param
        periods: Iterations run
        burnin_count: Leading iterations not recorded
        n_accepted: Accepted transitions
        n_nan: Iterations whose likelihood ratio was NaN
    """
    samples: np.ndarray
    current_param: object
    current_log_likelihood: float
    periods: int
    burnin_count: int
    n_accepted: int
    n_nan: int

    @property
    def acceptance_rate(self) -> float:
        return self.n_accepted / self.periods if self.periods else 0.0
