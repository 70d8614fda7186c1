"""Mutable chain state: real-valued parameters and the model indicator."""

import operator
from dataclasses import dataclass, field

from .exceptions import ConfigurationError, RuntimeInvariantError


@dataclass(eq=False)
class Parameter:
    """A named real scalar owned by the chain state.

    Parameters compare by identity, so the same value held by two different
    parameters never makes them interchangeable.
    """

    name: str
    value: float
    _stored: float = field(init=False, repr=False)

    def __post_init__(self):
        """Post-initialization checks."""
        self.value = float(self.value)
        self._stored = self.value

    def get(self) -> float:
        """Current value."""
        return self.value

    def set(self, value: float) -> None:
        """Overwrite the current value."""
        self.value = float(value)

    def store(self) -> None:
        """Remember the current value."""
        self._stored = self.value

    def restore(self) -> None:
        """Reinstate the value saved by ``store``."""
        self.value = self._stored


@dataclass(eq=False)
class ModelIndicator:
    """Integer state cell selecting the active model.

    Until ``restrict`` is called the indicator only has to be non-negative.
    Once restricted, setting a value outside ``[0, n_models)`` raises
    ``RuntimeInvariantError``.
    """

    value: int = 0
    name: str = "modelIndicator"
    n_models: int | None = field(default=None, init=False)
    _stored: int = field(init=False, repr=False)

    def __post_init__(self):
        """Post-initialization checks."""
        if int(self.value) != self.value or self.value < 0:
            raise ConfigurationError(
                f"Model indicator must start at a non-negative integer, got {self.value!r}."
            )
        self.value = int(self.value)
        self._stored = self.value

    def restrict(self, n_models: int) -> None:
        """Bound the indicator to ``[0, n_models)``.

        Every component sharing the indicator must agree on ``n_models``.
        """
        n_models = operator.index(n_models)
        if n_models < 1:
            raise ConfigurationError(
                "Model indicator needs at least one model.",
                dimension="n_models",
                expected=">= 1",
                actual=n_models,
            )
        if self.n_models is not None and self.n_models != n_models:
            raise ConfigurationError(
                f"Components sharing '{self.name}' disagree on the number of models.",
                dimension="n_models",
                expected=self.n_models,
                actual=n_models,
            )
        if self.value >= n_models:
            raise ConfigurationError(
                f"Model indicator '{self.name}' starts outside [0, {n_models}).",
                dimension="value",
                expected=f"< {n_models}",
                actual=self.value,
            )
        self.n_models = n_models

    def _validate(self, value: int) -> int:
        if value < 0 or (self.n_models is not None and value >= self.n_models):
            raise RuntimeInvariantError(
                f"Model indicator '{self.name}' is {value}, "
                f"outside [0, {self.n_models})."
            )
        return value

    def check(self) -> int:
        """Return the current value, raising if it is out of bounds."""
        return self._validate(self.value)

    def get(self) -> int:
        """Current active model index."""
        return self.value

    def set(self, value: int) -> None:
        """Select a new active model. An out-of-range value leaves it unchanged."""
        self.value = self._validate(int(value))

    def store(self) -> None:
        """Remember the current value."""
        self._stored = self.value

    def restore(self) -> None:
        """Reinstate the value saved by ``store``."""
        self.value = self._stored
