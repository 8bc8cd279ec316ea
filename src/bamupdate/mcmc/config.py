"""
Update Configuration.

This module handles the settings the sampling path reads:
- UpdateConfig: periods, burnin, histosegments, starting_pt, method
- get_update_config: Read the config attached to a prior, attaching a
  default one when absent
- configure_chain: Resolve the parameter shape and the initial state

All config keys use lowercase with underscores, matching the
UpdateConfig field names.
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

import numpy as np

from ..error_handling import ConfigurationError, SizeMismatchError, validate_update_config
from ..params import ParameterSet
from .types import ParameterShape, SamplerMethod


UPDATE_SETTINGS_GROUP = 'update'


@dataclass
class UpdateConfig:
    """
    Settings for the sampled (non-conjugate) update path.

    Fields:
        periods: Total sampler iterations
        burnin: Fraction of periods discarded before recording
        histosegments: Bins in the output histogram
        starting_pt: Initial ParameterSet for the chain (all ones if None)
        method: Sampler variant
    """
    periods: int = 6000
    burnin: float = 0.05
    histosegments: int = 500
    starting_pt: Optional[ParameterSet] = None
    method: SamplerMethod = SamplerMethod.METROPOLIS_HASTINGS

    def __post_init__(self):
        validate_update_config(self.to_dict())
        self.periods = int(self.periods)
        self.histosegments = int(self.histosegments)
        self.burnin = float(self.burnin)
        self.method = SamplerMethod(self.method)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'UpdateConfig':
        """Build from a dict; keys are lowercased and missing keys take the defaults."""
        config = {str(k).lower(): v for k, v in config.items()}
        validate_update_config(config)
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def burnin_count(self) -> int:
        """Leading iterations that are not recorded: floor(periods * burnin)."""
        return math.floor(self.periods * self.burnin)

    @property
    def record_count(self) -> int:
        return self.periods - self.burnin_count


def get_update_config(prior, override=None) -> UpdateConfig:
    """
    The UpdateConfig for an update call.

    An explicit ``override`` (UpdateConfig or dict) wins. Otherwise the
    config attached to the prior is used; a prior without one gets a default
    UpdateConfig attached, so later calls see the same settings.
    """
    if override is not None:
        if isinstance(override, dict):
            return UpdateConfig.from_dict(override)
        if not isinstance(override, UpdateConfig):
            raise ConfigurationError(
                f"config must be an UpdateConfig or dict, got {type(override).__name__}"
            )
        return override

    config = prior.get_settings(UPDATE_SETTINGS_GROUP)
    if config is None:
        config = UpdateConfig()
        prior.add_settings(UPDATE_SETTINGS_GROUP, config)
    elif isinstance(config, dict):
        config = UpdateConfig.from_dict(config)
    return config


def configure_chain(likelihood, table: np.ndarray, config: UpdateConfig):
    """
    Resolve the candidate parameter shape and the chain's initial state.

    Base sizes the likelihood leaves at -1 take the data's column count.

    Returns:
        shape: ParameterShape of one candidate
        current_param: Initial ParameterSet (starting_pt copy, or all ones)
    """
    columns = table.shape[1] if table is not None else 0
    shape = ParameterShape(*likelihood.parameter_shape(columns))
    if shape.width == 0:
        raise ConfigurationError(
            f"{likelihood.name} has no parameters to sample (vbase={likelihood.vbase}, "
            f"m1base={likelihood.m1base}, m2base={likelihood.m2base})"
        )

    current_param = ParameterSet.alloc(shape.vsize, shape.rows, shape.cols)
    if config.starting_pt is not None:
        try:
            current_param.copy_from(config.starting_pt)
        except SizeMismatchError as e:
            raise SizeMismatchError(
                f"starting_pt does not match the likelihood's parameter shape {asdict(shape)}"
            ) from e
    else:
        current_param.set_all(1.0)
    return shape, current_param
