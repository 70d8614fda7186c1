"""Trans-dimensional move between models."""

import logging
import operator
from collections.abc import Sequence

from ..exceptions import ConfigurationError
from ..partition import ParameterPartition
from ..state import ModelIndicator, Parameter
from ..utils.types import RandomSource, StateCell
from .density import GammaProposal

logger = logging.getLogger(__name__)


class ModelSwitchProposal:
    """Jump the model indicator to a different model.

    The parameters of the model being left are scored under their Gamma
    pseudo-priors; the parameters of the model being entered are redrawn
    from theirs. With the pseudo-prior acting as the proposal in both
    directions the log Hastings ratio is

        sum(log q(old) for model left) - sum(log q(new) for model entered)

    Random draws happen in a fixed order: ``uniform_int(n_models)`` until it
    differs from the current model, then one ``gamma_variate`` per parameter
    of the new model in bucket order.

    Parameters
    ----------
    indicator : ModelIndicator
        Selects the active model. Restricted to ``[0, n_models)``.
    partition : ParameterPartition
        Parameters grouped by model.
    proposal_densities : sequence of GammaProposal
        One pseudo-prior per parameter, in the partition's flat order.
    rng : RandomSource
        Shared random stream.
    n_models : int, optional
        Number of models. Defaults to the number of distinct model indices
        in the partition.
    """

    def __init__(
        self,
        indicator: ModelIndicator,
        partition: ParameterPartition,
        proposal_densities: Sequence[GammaProposal],
        rng: RandomSource,
        n_models: int | None = None,
    ):
        if n_models is None:
            n_models = partition.distinct_model_count()
        n_models = operator.index(n_models)
        if n_models < 2:
            raise ConfigurationError(
                "Model switching needs at least two models.",
                dimension="n_models",
                expected=">= 2",
                actual=n_models,
            )
        if len(proposal_densities) != partition.n_parameters:
            raise ConfigurationError(
                "Number of proposal densities does not match number of parameters.",
                dimension="proposal_densities",
                expected=partition.n_parameters,
                actual=len(proposal_densities),
            )
        out_of_range = [m for m in partition.model_indices if m >= n_models]
        if out_of_range:
            raise ConfigurationError(
                f"Parameters are assigned to models {out_of_range} beyond the {n_models} available.",
                dimension="model_index_of",
                expected=f"< {n_models}",
                actual=max(out_of_range),
            )

        indicator.restrict(n_models)
        self.indicator = indicator
        self.partition = partition
        self.proposal_densities = tuple(proposal_densities)
        self.rng = rng
        self.n_models = n_models
        self._modified: tuple[StateCell, ...] = ()

    def __repr__(self):
        """String representation of the proposal."""
        return f"ModelSwitchProposal(n_models={self.n_models}, partition={self.partition!r})"

    def _draw_new_model(self, current: int) -> int:
        while True:
            proposed = self.rng.uniform_int(self.n_models)
            if proposed != current:
                return proposed

    def proposal(self) -> float:
        """Switch to a uniformly chosen different model.

        Returns
        -------
        float
            Log Hastings ratio of the jump.

        Raises
        ------
        RuntimeInvariantError
            If the indicator is out of bounds.
        """
        self._modified = ()
        current = self.indicator.check()
        proposed = self._draw_new_model(current)
        self.indicator.set(proposed)

        log_hastings_ratio = 0.0
        for position in self.partition.bucket_positions(current):
            old_value = self.partition.parameters[position].get()
            log_hastings_ratio += self.proposal_densities[position].log_density(old_value)

        activated: list[Parameter] = []
        for position in self.partition.bucket_positions(proposed):
            param = self.partition.parameters[position]
            density = self.proposal_densities[position]
            new_value = density.sample(self.rng)
            param.set(new_value)
            activated.append(param)
            log_hastings_ratio -= density.log_density(new_value)

        self._modified = (self.indicator, *activated)

        logger.debug(
            "Switching model %d -> %d, redrew %d parameters, log HR %g",
            current,
            proposed,
            len(activated),
            log_hastings_ratio,
        )
        return log_hastings_ratio

    def modified_cells(self) -> tuple[StateCell, ...]:
        """The indicator and the newly activated parameters of the last call."""
        return self._modified
