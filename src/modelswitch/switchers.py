"""Dispatch to the sub-model selected by the model indicator."""

import logging
from collections.abc import Sequence
from enum import StrEnum, auto

from .exceptions import ConfigurationError
from .state import ModelIndicator
from .utils.types import LogDensity, PopulationLaw

logger = logging.getLogger(__name__)


class EvaluationPolicy(StrEnum):
    """Which sub-distributions ``DistributionSwitcher`` evaluates."""

    # Evaluate every sub-distribution on the first call, then only the active one.
    PRIME_ALL = auto()
    # Only ever evaluate the active sub-distribution.
    ACTIVE_ONLY = auto()


class DistributionSwitcher:
    """Log-density of whichever sub-distribution the indicator selects.

    With ``EvaluationPolicy.PRIME_ALL`` the first evaluation also computes
    every inactive sub-distribution once, so configuration errors in a model
    surface before the chain first jumps into it. The returned value is
    always that of the active sub-distribution alone.

    Parameters
    ----------
    indicator : ModelIndicator
        Selects the active sub-distribution. Restricted to
        ``[0, len(distributions))``.
    distributions : sequence of LogDensity
        One sub-distribution per model.
    policy : EvaluationPolicy, optional
        Default is ``PRIME_ALL``.
    """

    def __init__(
        self,
        indicator: ModelIndicator,
        distributions: Sequence[LogDensity],
        policy: EvaluationPolicy = EvaluationPolicy.PRIME_ALL,
    ):
        if len(distributions) == 0:
            raise ConfigurationError(
                "DistributionSwitcher needs at least one distribution.",
                dimension="distributions",
                expected=">= 1",
                actual=0,
            )
        indicator.restrict(len(distributions))
        self.indicator = indicator
        self.distributions = tuple(distributions)
        self.policy = EvaluationPolicy(policy)
        self.log_p = float("nan")
        self._primed = False

    def __repr__(self):
        """String representation of the switcher."""
        return (
            f"DistributionSwitcher(n_models={len(self.distributions)}, "
            f"policy={self.policy})"
        )

    def log_density(self) -> float:
        """Log-density of the active sub-distribution."""
        m = self.indicator.check()
        if self.policy == EvaluationPolicy.PRIME_ALL and not self._primed:
            for i, distribution in enumerate(self.distributions):
                value = distribution.log_density()
                if i == m:
                    self.log_p = value
            self._primed = True
            logger.debug("Primed %d sub-distributions", len(self.distributions))
        else:
            self.log_p = self.distributions[m].log_density()
        return self.log_p


class PopulationFunctionSwitcher:
    """Population function of whichever demographic model is active.

    Parameters
    ----------
    indicator : ModelIndicator
        Selects the active population function.
    population_functions : sequence of PopulationLaw
        One population function per model.
    """

    def __init__(
        self,
        indicator: ModelIndicator,
        population_functions: Sequence[PopulationLaw],
    ):
        if len(population_functions) == 0:
            raise ConfigurationError(
                "PopulationFunctionSwitcher needs at least one population function.",
                dimension="population_functions",
                expected=">= 1",
                actual=0,
            )
        indicator.restrict(len(population_functions))
        self.indicator = indicator
        self.population_functions = tuple(population_functions)
        self._parameter_ids = tuple(
            pid for f in self.population_functions for pid in f.parameter_ids
        )

    def __repr__(self):
        """String representation of the switcher."""
        return f"PopulationFunctionSwitcher(n_models={len(self.population_functions)})"

    @property
    def active(self) -> PopulationLaw:
        """The population function selected by the indicator."""
        return self.population_functions[self.indicator.check()]

    @property
    def parameter_ids(self) -> tuple[str, ...]:
        """Parameter identifiers of every sub-function, in model order."""
        return self._parameter_ids

    def pop_size(self, t: float) -> float:
        """Population size at time ``t`` under the active model."""
        return self.active.pop_size(t)

    def intensity(self, t: float) -> float:
        """Coalescent intensity at time ``t`` under the active model."""
        return self.active.intensity(t)

    def inverse_intensity(self, x: float) -> float:
        """Inverse coalescent intensity under the active model."""
        return self.active.inverse_intensity(x)
