"""Partition a flat list of parameters into per-model buckets."""

from collections.abc import Iterator, Sequence

import numpy as np

from .exceptions import ConfigurationError
from .state import Parameter
from .utils.types import ModelIndexList


class ParameterPartition:
    """Read-only grouping of parameters by the model they belong to.

    Buckets are ordered by the first appearance of their model index and
    keep the original relative order of their members. Each bucket also
    remembers the flat positions of its parameters so that per-parameter
    settings (scale bounds, proposal densities) can be looked up alongside.

    Use ``ParameterPartition.build`` rather than the constructor.
    """

    def __init__(
        self,
        parameters: tuple[Parameter, ...],
        positions: dict[int, tuple[int, ...]],
    ):
        self._parameters = parameters
        self._positions = positions

    def __repr__(self):
        """String representation of the partition."""
        sizes = {m: len(pos) for m, pos in self._positions.items()}
        return f"ParameterPartition(bucket_sizes={sizes})"

    @classmethod
    def build(
        cls,
        parameters: Sequence[Parameter],
        model_index_of: ModelIndexList,
    ) -> "ParameterPartition":
        """Group ``parameters`` by the parallel list ``model_index_of``.

        Parameters
        ----------
        parameters : sequence of Parameter
            The parameters to partition.
        model_index_of : sequence of int
            Model index of each parameter. Must have the same length as
            ``parameters``.

        Returns
        -------
        ParameterPartition
            The partition.

        Raises
        ------
        ConfigurationError
            If the lengths differ, a model index is negative, non-finite or not an
            integer, or a parameter is listed more than once.
        """
        parameters = tuple(parameters)
        indices = np.asarray(model_index_of).ravel()

        if len(parameters) != len(indices):
            raise ConfigurationError(
                "Number of parameters does not match number of model indices.",
                dimension="model_index_of",
                expected=len(parameters),
                actual=len(indices),
            )
        if len({id(p) for p in parameters}) != len(parameters):
            raise ConfigurationError(
                "Each parameter may belong to only one model."
            )

        if indices.dtype.kind not in "biuf":
            raise ConfigurationError(
                f"Model indices must be numeric, got dtype {indices.dtype}."
            )

        positions: dict[int, list[int]] = {}
        for i, raw in enumerate(indices):
            if not np.isfinite(raw) or int(raw) != raw or raw < 0:
                raise ConfigurationError(
                    f"Model index of parameter {i} must be a non-negative integer, got {raw!r}."
                )
            positions.setdefault(int(raw), []).append(i)

        return cls(parameters, {m: tuple(pos) for m, pos in positions.items()})

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        """All parameters in their original order."""
        return self._parameters

    @property
    def n_parameters(self) -> int:
        """Total number of parameters across all buckets."""
        return len(self._parameters)

    @property
    def model_indices(self) -> tuple[int, ...]:
        """Model indices in the order they were first seen."""
        return tuple(self._positions)

    def bucket_positions(self, model_index: int) -> tuple[int, ...]:
        """Flat positions of the parameters belonging to ``model_index``."""
        return self._positions.get(model_index, ())

    def bucket(self, model_index: int) -> tuple[Parameter, ...]:
        """Parameters belonging to ``model_index``, empty if it owns none."""
        return tuple(self._parameters[i] for i in self.bucket_positions(model_index))

    def bucket_size(self, model_index: int) -> int:
        """Number of parameters belonging to ``model_index``."""
        return len(self.bucket_positions(model_index))

    def distinct_model_count(self) -> int:
        """Number of distinct model indices that own at least one parameter."""
        return len(self._positions)

    def __iter__(self) -> Iterator[tuple[int, tuple[Parameter, ...]]]:
        """Iterate over ``(model_index, bucket)`` pairs in discovery order."""
        for m in self._positions:
            yield m, self.bucket(m)
