"""Gamma pseudo-prior used to propose and score inactive parameters."""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from scipy import stats

from ..exceptions import ConfigurationError
from ..utils.types import RandomSource


@dataclass(frozen=True)
class GammaProposal:
    """Gamma law parameterised by shape and mean.

    The same law serves as the pseudo-prior that scores a value being
    abandoned and as the proposal that draws a value being activated.
    Internally the shape/scale convention is used throughout, with
    ``scale = mean / shape`` (equivalently ``rate = shape / mean``).

    Attributes
    ----------
    shape : float
        Shape parameter, strictly positive.
    mean : float
        Mean of the law, strictly positive.
    """

    shape: float
    mean: float

    def __post_init__(self):
        """Post-initialization checks."""
        if not (np.isfinite(self.shape) and self.shape > 0):
            raise ConfigurationError(f"Gamma shape must be positive, got {self.shape}.")
        if not (np.isfinite(self.mean) and self.mean > 0):
            raise ConfigurationError(f"Gamma mean must be positive, got {self.mean}.")

    @classmethod
    def from_rate(cls, shape: float, rate: float) -> "GammaProposal":
        """Build from a (shape, rate) pair."""
        if not (np.isfinite(rate) and rate > 0):
            raise ConfigurationError(f"Gamma rate must be positive, got {rate}.")
        return cls(shape=shape, mean=shape / rate)

    @property
    def scale(self) -> float:
        """Scale parameter, ``mean / shape``."""
        return self.mean / self.shape

    @property
    def rate(self) -> float:
        """Rate parameter, ``shape / mean``."""
        return self.shape / self.mean

    def sample(self, rng: RandomSource) -> float:
        """Draw a variate. Consumes exactly one ``gamma_variate`` draw."""
        return rng.gamma_variate(self.shape, self.scale)

    def log_density(self, x: float) -> float:
        """Log-density at ``x``; ``-inf`` outside the support."""
        return float(stats.gamma.logpdf(x, a=self.shape, scale=self.scale))


def gamma_proposals(
    shapes: Sequence[float],
    means: Sequence[float],
    n_parameters: int,
) -> list[GammaProposal]:
    """Build one ``GammaProposal`` per parameter from parallel arrays.

    Raises
    ------
    ConfigurationError
        If either array does not have exactly ``n_parameters`` entries.
    """
    shapes = np.atleast_1d(np.asarray(shapes, dtype=float))
    means = np.atleast_1d(np.asarray(means, dtype=float))
    if len(shapes) != n_parameters:
        raise ConfigurationError(
            "Number of proposal shapes does not match number of parameters.",
            dimension="shapes",
            expected=n_parameters,
            actual=len(shapes),
        )
    if len(means) != n_parameters:
        raise ConfigurationError(
            "Number of proposal means does not match number of parameters.",
            dimension="means",
            expected=n_parameters,
            actual=len(means),
        )
    return [GammaProposal(float(k), float(mu)) for k, mu in zip(shapes, means)]
