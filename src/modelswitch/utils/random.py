"""Numpy-backed random source."""

import numpy as np


class NumpyRandomSource:
    """Random source backed by a numpy ``Generator``.

    Parameters
    ----------
    seed : int or numpy.random.Generator, optional
        Seed for ``numpy.random.default_rng``, or an existing generator to
        draw from. Default is 61254557.
    """

    def __init__(self, seed=61254557):
        if isinstance(seed, np.random.Generator):
            self.generator = seed
        else:
            self.generator = np.random.default_rng(seed)

    def __repr__(self):
        """String representation of the random source."""
        return f"NumpyRandomSource({self.generator!r})"

    def uniform_real(self) -> float:
        """Draw a real number uniformly from ``[0, 1)``."""
        return float(self.generator.random())

    def uniform_int(self, n: int) -> int:
        """Draw an integer uniformly from ``[0, n)``."""
        if n <= 0:
            raise ValueError("n must be a positive integer.")
        return int(self.generator.integers(n))

    def gamma_variate(self, shape: float, scale: float) -> float:
        """Draw from a Gamma distribution with the given shape and scale."""
        return float(self.generator.gamma(shape, scale))
