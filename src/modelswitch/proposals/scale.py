"""Scale a parameter drawn from the bucket of the active model."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..exceptions import ConfigurationError, RuntimeInvariantError
from ..partition import ParameterPartition
from ..state import ModelIndicator, Parameter
from ..utils.types import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleBounds:
    """Maximum scale factors, either shared or one per parameter.

    A negative bound ``f`` is read as ``|1/f|``. Bounds below one are then
    replaced by their reciprocal, so every stored bound is at least one and
    the factor is drawn from ``[1/fmax, fmax]``.
    """

    values: tuple[float, ...]

    def __post_init__(self):
        """Post-initialization checks."""
        if len(self.values) == 0:
            raise ConfigurationError("At least one scale bound is required.")
        normalised = []
        for f in self.values:
            if not np.isfinite(f) or f == 0:
                raise ConfigurationError(f"Scale bounds must be finite and non-zero, got {f}.")
            if f < 0:
                f = abs(1.0 / f)
            normalised.append(1.0 / f if f < 1.0 else float(f))
        object.__setattr__(self, "values", tuple(normalised))

    @classmethod
    def build(cls, bounds: float | Sequence[float], n_parameters: int) -> "ScaleBounds":
        """Validate ``bounds`` against the number of parameters.

        Raises
        ------
        ConfigurationError
            If there is more than one bound and not exactly one per parameter.
        """
        values = tuple(float(f) for f in np.atleast_1d(np.asarray(bounds, dtype=float)))
        if len(values) not in (1, n_parameters):
            raise ConfigurationError(
                "Number of scale factors is not 1 and does not match number of parameters provided.",
                dimension="scale_bounds",
                expected=f"1 or {n_parameters}",
                actual=len(values),
            )
        return cls(values)

    @property
    def dimension(self) -> int:
        """Number of bounds held."""
        return len(self.values)

    def bound(self, position: int) -> float:
        """Bound for the parameter at flat ``position``."""
        if len(self.values) == 1:
            return self.values[0]
        return self.values[position]


class ConditionalScaleProposal:
    """Multiplicative scale move on one parameter of the active model.

    Each call draws a parameter uniformly from the active model's bucket,
    then a factor ``f`` uniformly from ``[1/fmax, fmax]``, and multiplies the
    parameter by ``f``. Exactly one parameter changes and exactly two draws
    are consumed: ``uniform_int`` for the parameter, then ``uniform_real``
    for the factor.

    Parameters
    ----------
    indicator : ModelIndicator
        Selects the active model.
    partition : ParameterPartition
        Parameters grouped by model.
    bounds : ScaleBounds or float or sequence of float
        Maximum scale factors, one shared or one per parameter.
    rng : RandomSource
        Shared random stream.
    """

    def __init__(
        self,
        indicator: ModelIndicator,
        partition: ParameterPartition,
        bounds: ScaleBounds | float | Sequence[float],
        rng: RandomSource,
    ):
        if not isinstance(bounds, ScaleBounds):
            bounds = ScaleBounds.build(bounds, partition.n_parameters)
        elif bounds.dimension not in (1, partition.n_parameters):
            raise ConfigurationError(
                "Number of scale factors is not 1 and does not match number of parameters provided.",
                dimension="scale_bounds",
                expected=f"1 or {partition.n_parameters}",
                actual=bounds.dimension,
            )
        self.indicator = indicator
        self.partition = partition
        self.bounds = bounds
        self.rng = rng
        self._modified: tuple[Parameter, ...] = ()

    def __repr__(self):
        """String representation of the proposal."""
        return f"ConditionalScaleProposal(indicator={self.indicator.name!r}, partition={self.partition!r})"

    def proposal(self) -> float:
        """Scale one parameter of the active model.

        Returns
        -------
        float
            Log Hastings ratio, ``log(old / new)``.

        Raises
        ------
        RuntimeInvariantError
            If the indicator is out of bounds, the active model owns no
            parameters, or the selected parameter is not strictly positive.
        """
        self._modified = ()
        m = self.indicator.check()
        positions = self.partition.bucket_positions(m)
        if not positions:
            raise RuntimeInvariantError(
                f"Model {m} has no parameters for a scale move to act on."
            )

        i = self.rng.uniform_int(len(positions))
        position = positions[i]
        param = self.partition.parameters[position]

        fmax = self.bounds.bound(position)
        f = 1.0 / fmax + self.rng.uniform_real() * (fmax - 1.0 / fmax)

        old_value = param.get()
        if not old_value > 0:
            raise RuntimeInvariantError(
                f"Cannot scale parameter '{param.name}' with non-positive value {old_value}."
            )
        new_value = old_value * f
        param.set(new_value)
        self._modified = (param,)

        logger.debug(
            "Model %d: scaling %s from %g to %g", m, param.name, old_value, new_value
        )
        return float(np.log(old_value / new_value))

    def modified_cells(self) -> tuple[Parameter, ...]:
        """The parameter changed by the most recent call, if any."""
        return self._modified
