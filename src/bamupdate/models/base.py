"""
Model Base Classes

A Model is a named family plus an optional ParameterSet, an optional set of
attached settings groups, and two optional capabilities:

    draw(rng)            -> one random draw (float, or 1-D array)
    log_likelihood(data) -> log density of a data table under the model

Capabilities are detected by override: a subclass that defines draw() has
supports_draw == True. The update orchestrator checks these markers before
sampling, so a model without the needed capability fails fast instead of
inside the chain.

Base sizes (vbase, m1base, m2base) describe the parameter shape a model
expects when the sampler writes candidates into it. -1 means "use the data's
column count".
"""

import copy
from enum import IntEnum
from typing import Any, Dict, Optional, Sequence

import numpy as np

from ..error_handling import ConfigurationError, MissingCapabilityError
from ..params import ParameterSet


class ModelFamily(IntEnum):
    """
    Enumeration of model families.

    The conjugacy table is keyed on (prior family, likelihood family) pairs.
    User-defined models are CUSTOM and never match a conjugate rule.
    """
    CUSTOM = 0
    BETA = 1
    GAMMA = 2
    NORMAL = 3
    BINOMIAL = 4
    BERNOULLI = 5
    EXPONENTIAL = 6
    HISTOGRAM = 7

    def __str__(self):
        return self.name.replace('_', ' ').title()


def as_table(data) -> Optional[np.ndarray]:
    """
    Coerce observed data to a 2-D float64 grid.

    Accepts None, scalars, sequences, arrays, or a ParameterSet (its matrix,
    or its vector as a single column when there is no matrix).
    """
    if data is None:
        return None
    if isinstance(data, ParameterSet):
        if data.matrix is not None:
            return data.matrix
        if data.vector is not None:
            return data.vector[:, np.newaxis]
        raise ConfigurationError("data ParameterSet has neither a matrix nor a vector")
    table = np.asarray(data, dtype=np.float64)
    if table.ndim == 0:
        return table.reshape(1, 1)
    if table.ndim == 1:
        return table[:, np.newaxis]
    if table.ndim != 2:
        raise ConfigurationError(f"data must be at most 2-D, got shape {table.shape}")
    return table


class Model:
    """
    Base class for every model family.

    Attributes:
        parameters: ParameterSet or None
        settings: Dict of attached settings groups, keyed by group name
    """
    name = "Custom model"
    family = ModelFamily.CUSTOM
    vbase = -1
    m1base = -1
    m2base = -1

    def __init__(self, parameters: Optional[ParameterSet] = None,
                 settings: Optional[Dict[str, Any]] = None):
        if parameters is not None and not isinstance(parameters, ParameterSet):
            raise ConfigurationError(
                f"parameters must be a ParameterSet, got {type(parameters).__name__}"
            )
        self.parameters = parameters
        self.settings = dict(settings or {})

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @property
    def supports_draw(self) -> bool:
        return type(self).draw is not Model.draw

    @property
    def supports_log_likelihood(self) -> bool:
        return type(self).log_likelihood is not Model.log_likelihood

    def draw(self, rng):
        raise MissingCapabilityError(f"{self.name} has no draw method")

    def log_likelihood(self, data) -> float:
        raise MissingCapabilityError(f"{self.name} has no log-likelihood")

    # ------------------------------------------------------------------
    # Settings groups
    # ------------------------------------------------------------------

    def add_settings(self, group: str, value: Any) -> None:
        """Attach a settings group. A model holds at most one group per name."""
        if group in self.settings:
            raise ConfigurationError(f"{self.name} already has a '{group}' settings group")
        self.settings[group] = value

    def get_settings(self, group: str, default: Any = None) -> Any:
        return self.settings.get(group, default)

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def copy(self) -> 'Model':
        """Deep copy: parameters and settings are not shared with the original."""
        return copy.deepcopy(self)

    def with_parameters(self, parameters: ParameterSet) -> 'Model':
        """
        Shallow copy of this model holding ``parameters`` instead.

        The settings dict is copied, its groups are shared. Used by the
        sampler to evaluate candidates without touching the live model.
        """
        out = copy.copy(self)
        out.parameters = parameters
        out.settings = dict(self.settings)
        return out

    def parameter_shape(self, data_columns: int = 0):
        """(vsize, rows, cols) for a parameter slot, with -1 bases taken from the data."""
        vs = self.vbase if self.vbase >= 0 else data_columns
        ms1 = self.m1base if self.m1base >= 0 else data_columns
        ms2 = self.m2base if self.m2base >= 0 else data_columns
        return vs, ms1, ms2

    def __repr__(self):
        return f"{type(self).__name__}(parameters={self.parameters!r})"


class ParametricModel(Model):
    """
    Closed-form family whose parameters live in the vector part, in the order
    given by ``parameter_names``.

    Subclasses set ``parameter_names``, ``defaults`` and ``positive`` (names
    that must be > 0 when the model is constructed directly).
    """
    parameter_names: Sequence[str] = ()
    defaults: Sequence[float] = ()
    positive: Sequence[str] = ()
    m1base = 0
    m2base = 0

    def __init__(self, *values: float, parameters: Optional[ParameterSet] = None,
                 settings: Optional[Dict[str, Any]] = None, **named: float):
        if parameters is None:
            parameters = ParameterSet(vector=self._collect(values, named))
        elif parameters.vector is None or parameters.vector.size != len(self.parameter_names):
            raise ConfigurationError(
                f"{self.name} needs a parameter vector of size {len(self.parameter_names)}"
            )
        super().__init__(parameters=parameters, settings=settings)

    @property
    def vbase(self) -> int:
        return len(self.parameter_names)

    def _collect(self, values, named):
        if len(values) > len(self.parameter_names):
            raise ConfigurationError(
                f"{self.name} takes {len(self.parameter_names)} parameters, got {len(values)}"
            )
        resolved = dict(zip(self.parameter_names, self.defaults))
        resolved.update(zip(self.parameter_names, values))
        unknown = set(named) - set(self.parameter_names)
        if unknown:
            raise ConfigurationError(f"Unknown {self.name} parameter(s): {sorted(unknown)}")
        resolved.update(named)
        for key in self.positive:
            if not resolved[key] > 0:
                raise ConfigurationError(f"{self.name} parameter '{key}' must be > 0, got {resolved[key]}")
        return [float(resolved[key]) for key in self.parameter_names]

    def __getattr__(self, item):
        # Named access to vector parameters, e.g. beta_model.alpha
        names = type(self).parameter_names
        if item in names and 'parameters' in self.__dict__:
            return float(self.__dict__['parameters'].vector[names.index(item)])
        raise AttributeError(item)

    def as_dict(self) -> Dict[str, float]:
        return {key: float(v) for key, v in zip(self.parameter_names, self.parameters.vector)}

    def __repr__(self):
        args = ", ".join(f"{k}={v:g}" for k, v in self.as_dict().items())
        return f"{type(self).__name__}({args})"
