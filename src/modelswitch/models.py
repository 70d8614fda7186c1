"""Stock sub-models to switch between: demographic functions and priors."""

from collections.abc import Sequence

import numpy as np

from .exceptions import ConfigurationError
from .state import Parameter


class ConstantPopulation:
    """Population of constant size ``N``.

    ``intensity(t) = t / N`` and ``inverse_intensity(x) = x * N``.
    """

    def __init__(self, pop_size: Parameter):
        self.pop_size_parameter = pop_size

    def __repr__(self):
        """String representation of the population function."""
        return f"ConstantPopulation(pop_size={self.pop_size_parameter.name!r})"

    @property
    def parameter_ids(self) -> tuple[str, ...]:
        """Identifiers of the parameters this function depends on."""
        return (self.pop_size_parameter.name,)

    def pop_size(self, t: float) -> float:
        """Population size, independent of ``t``."""
        return self.pop_size_parameter.get()

    def intensity(self, t: float) -> float:
        """Integrated coalescent intensity up to ``t``."""
        return t / self.pop_size_parameter.get()

    def inverse_intensity(self, x: float) -> float:
        """Time at which the intensity reaches ``x``."""
        return x * self.pop_size_parameter.get()


class ExponentialGrowth:
    """Population growing exponentially towards the present.

    Going back in time from the present size ``N0`` with growth rate ``r``,
    ``pop_size(t) = N0 * exp(-r * t)``. A zero growth rate reduces to a
    constant population.
    """

    def __init__(self, pop_size: Parameter, growth_rate: Parameter):
        self.pop_size_parameter = pop_size
        self.growth_rate_parameter = growth_rate

    def __repr__(self):
        """String representation of the population function."""
        return (
            f"ExponentialGrowth(pop_size={self.pop_size_parameter.name!r}, "
            f"growth_rate={self.growth_rate_parameter.name!r})"
        )

    @property
    def parameter_ids(self) -> tuple[str, ...]:
        """Identifiers of the parameters this function depends on."""
        return (self.pop_size_parameter.name, self.growth_rate_parameter.name)

    def pop_size(self, t: float) -> float:
        """Population size at time ``t``."""
        n0 = self.pop_size_parameter.get()
        r = self.growth_rate_parameter.get()
        return float(n0 * np.exp(-r * t))

    def intensity(self, t: float) -> float:
        """Integrated coalescent intensity up to ``t``."""
        n0 = self.pop_size_parameter.get()
        r = self.growth_rate_parameter.get()
        if r == 0:
            return t / n0
        return float(np.expm1(r * t) / (n0 * r))

    def inverse_intensity(self, x: float) -> float:
        """Time at which the intensity reaches ``x``."""
        n0 = self.pop_size_parameter.get()
        r = self.growth_rate_parameter.get()
        if r == 0:
            return x * n0
        return float(np.log1p(x * n0 * r) / r)


class ParameterPrior:
    """Independent prior over a set of parameters.

    ``log_density`` sums the ``logpdf`` of a frozen ``scipy.stats``
    distribution over the current parameter values.

    Parameters
    ----------
    parameters : sequence of Parameter
        Parameters the prior applies to.
    distribution : frozen scipy.stats distribution
        E.g. ``scipy.stats.gamma(a=2.0, scale=0.5)``.
    """

    def __init__(self, parameters: Sequence[Parameter], distribution):
        if len(parameters) == 0:
            raise ConfigurationError("ParameterPrior needs at least one parameter.")
        if not hasattr(distribution, "logpdf"):
            raise ConfigurationError(
                f"Prior distribution must provide logpdf, got {type(distribution).__name__}."
            )
        self.parameters = tuple(parameters)
        self.distribution = distribution

    def __repr__(self):
        """String representation of the prior."""
        names = [p.name for p in self.parameters]
        return f"ParameterPrior(parameters={names})"

    def log_density(self) -> float:
        """Sum of log prior densities of the current values."""
        values = np.array([p.get() for p in self.parameters])
        return float(np.sum(self.distribution.logpdf(values)))
