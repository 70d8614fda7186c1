"""pyModelSwitch: Metropolis-Hastings moves for sampling across models.

A single integer model indicator selects which group of continuous
parameters is active. The package provides:

- Partitioning of a flat parameter list into per-model buckets
- A multiplicative scale move on the active model's parameters
- A trans-dimensional move that switches models using Gamma pseudo-priors
- Switchers that dispatch a log-density or population function to the
  active model
- A reference Metropolis-Hastings driver and chain analysis tools

Examples
--------
    >>> from modelswitch import (
    ...     ModelIndicator, Parameter, ParameterPartition, ModelSwitchProposal,
    ...     GammaProposal, NumpyRandomSource,
    ... )
    >>> params = [Parameter("a", 1.0), Parameter("b", 2.0), Parameter("c", 3.0)]
    >>> partition = ParameterPartition.build(params, [0, 1, 0])
    >>> indicator = ModelIndicator(0)
    >>> move = ModelSwitchProposal(
    ...     indicator, partition, [GammaProposal(2.0, 1.0)] * 3, NumpyRandomSource(1)
    ... )
    >>> log_hr = move.proposal()
"""

from .exceptions import ConfigurationError, ModelSwitchError, RuntimeInvariantError
from .partition import ParameterPartition
from .proposals import (
    ConditionalScaleProposal,
    GammaProposal,
    ModelSwitchProposal,
    ScaleBounds,
    gamma_proposals,
)
from .state import ModelIndicator, Parameter
from .switchers import DistributionSwitcher, EvaluationPolicy, PopulationFunctionSwitcher
from .utils import NumpyRandomSource

__all__ = [
    "ConditionalScaleProposal",
    "ConfigurationError",
    "DistributionSwitcher",
    "EvaluationPolicy",
    "GammaProposal",
    "ModelIndicator",
    "ModelSwitchError",
    "ModelSwitchProposal",
    "NumpyRandomSource",
    "Parameter",
    "ParameterPartition",
    "PopulationFunctionSwitcher",
    "RuntimeInvariantError",
    "ScaleBounds",
    "gamma_proposals",
]
