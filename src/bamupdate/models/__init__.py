"""
Model Families

Built-in families:
- Beta, Gamma, Normal, Exponential, Binomial, Bernoulli: closed-form
  parametric models (parameters in the vector part)
- HistogramModel: empirical PMF over a HistogramStore

Template resets for histograms live in models/histogram.py.
"""

from .base import Model, ModelFamily, ParametricModel, as_table
from .beta import Beta
from .gamma import Gamma
from .normal import Normal
from .exponential import Exponential
from .binomial import Binomial
from .bernoulli import Bernoulli
from .histogram import HistogramModel, reset_from_template, reset_from_draws, normalize

from ..registry import register_family, list_families

BUILTIN_FAMILIES = (Beta, Gamma, Normal, Exponential, Binomial, Bernoulli, HistogramModel)

for _cls in BUILTIN_FAMILIES:
    if _cls.name not in list_families():
        register_family(_cls.name, _cls)

__all__ = [
    'Model',
    'ModelFamily',
    'ParametricModel',
    'as_table',
    'Beta',
    'Gamma',
    'Normal',
    'Exponential',
    'Binomial',
    'Bernoulli',
    'HistogramModel',
    'reset_from_template',
    'reset_from_draws',
    'normalize',
    'BUILTIN_FAMILIES',
]
