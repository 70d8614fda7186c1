"""Shared fixtures for modelswitch tests."""

import pytest

from modelswitch import ModelIndicator, Parameter, ParameterPartition


class ScriptedRandomSource:
    """Random source replaying fixed draws and logging each call."""

    def __init__(self, ints=(), reals=(), gammas=()):
        self.ints = list(ints)
        self.reals = list(reals)
        self.gammas = list(gammas)
        self.calls = []

    def uniform_real(self) -> float:
        self.calls.append(("uniform_real",))
        return self.reals.pop(0)

    def uniform_int(self, n: int) -> int:
        self.calls.append(("uniform_int", n))
        value = self.ints.pop(0)
        assert 0 <= value < n
        return value

    def gamma_variate(self, shape: float, scale: float) -> float:
        self.calls.append(("gamma_variate", shape, scale))
        return self.gammas.pop(0)


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRandomSource


@pytest.fixture
def parameters() -> list[Parameter]:
    """Three parameters, the first and last belonging to model 0."""
    return [Parameter("a", 1.0), Parameter("b", 2.0), Parameter("c", 3.0)]


@pytest.fixture
def partition(parameters: list[Parameter]) -> ParameterPartition:
    """Partition of the three parameters into models [0, 1, 0]."""
    return ParameterPartition.build(parameters, [0, 1, 0])


@pytest.fixture
def indicator() -> ModelIndicator:
    """Model indicator starting in model 0."""
    return ModelIndicator(0)
