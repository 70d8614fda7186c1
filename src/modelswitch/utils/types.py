"""Custom types for modelswitch."""

from collections.abc import Sequence
from typing import Annotated, Protocol, TypeAlias

import numpy as np
import numpy.typing as npt

# These annotations are for documentation purposes; type checkers only see the dtype.
IntArray: TypeAlias = npt.NDArray[np.integer]
FloatArray: TypeAlias = npt.NDArray[np.floating]
IndicatorChain: TypeAlias = Annotated[IntArray, "(n_steps,)"]
ModelIndexList: TypeAlias = Sequence[int] | IntArray


class RandomSource(Protocol):
    """Protocol for the random number stream shared by every proposal.

    All proposals draw from one seedable stream, so the number and order of
    draws each proposal makes is part of its contract.
    """

    def uniform_real(self) -> float:
        """Draw a real number uniformly from ``[0, 1)``."""
        ...

    def uniform_int(self, n: int) -> int:
        """Draw an integer uniformly from ``[0, n)``."""
        ...

    def gamma_variate(self, shape: float, scale: float) -> float:
        """Draw from a Gamma distribution with the given shape and scale."""
        ...


class StateCell(Protocol):
    """Protocol for a mutable piece of chain state that can be rolled back."""

    def store(self) -> None:
        """Remember the current value so it can be restored later."""
        ...

    def restore(self) -> None:
        """Reinstate the value saved by the last call to ``store``."""
        ...


class Proposable(Protocol):
    """Protocol for Metropolis-Hastings proposal operators.

    A proposal mutates shared state in place and returns the log Hastings
    ratio of the move. ``modified_cells`` lists every state cell the most
    recent call may have changed, which is all a driver needs to undo it.
    """

    def proposal(self) -> float:
        """Perform the move and return its log Hastings ratio."""
        ...

    def modified_cells(self) -> tuple[StateCell, ...]:
        """State cells touched by the most recent call to ``proposal``."""
        ...


class LogDensity(Protocol):
    """Protocol for objects that evaluate a log-density of the current state.

    Used for sub-distributions selected by ``DistributionSwitcher`` and for
    the target density of the reference driver.
    """

    def log_density(self) -> float:
        """Evaluate the log-density at the current state.

        Returns
        -------
        float
            Log-density value. Not necessarily normalised.
        """
        ...


class PopulationLaw(Protocol):
    """Protocol for demographic (population size) functions of time.

    Time runs backwards from the present, as in coalescent theory. The
    intensity is the integral of ``1 / pop_size`` from 0 to ``t``.
    """

    @property
    def parameter_ids(self) -> tuple[str, ...]:
        """Identifiers of the parameters this function depends on."""
        ...

    def pop_size(self, t: float) -> float:
        """Effective population size at time ``t``."""
        ...

    def intensity(self, t: float) -> float:
        """Integrated coalescent intensity between 0 and ``t``."""
        ...

    def inverse_intensity(self, x: float) -> float:
        """Time ``t`` at which ``intensity(t) == x``."""
        ...
