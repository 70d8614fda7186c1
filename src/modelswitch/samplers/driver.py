"""Reference Metropolis-Hastings driver for model-switching proposals."""

import logging
import operator
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from tqdm import tqdm

from ..exceptions import ConfigurationError
from ..state import ModelIndicator, Parameter
from ..utils.types import IntArray, LogDensity, Proposable, RandomSource, StateCell

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@dataclass
class ModelSwitchChain:
    """Dataclass to hold the in-memory trace of a model-switching run."""

    n_models: int
    n_proposals: int
    indicator_chain: list[int] = field(default_factory=list, init=False)
    log_posterior_chain: list[float] = field(default_factory=list, init=False)
    proposed: list[int] = field(init=False)
    accepted: list[int] = field(init=False)

    def __repr__(self):
        """String representation of the chain."""
        return f"ModelSwitchChain(n_models={self.n_models}, n_steps={self.n_steps})"

    def __post_init__(self):
        """Post-initialization checks."""
        for name in ("n_models", "n_proposals"):
            try:
                value = operator.index(getattr(self, name))
            except TypeError:
                raise ValueError(f"{name} must be a positive integer.") from None
            if value <= 0:
                raise ValueError(f"{name} must be a positive integer.")
            setattr(self, name, value)
        self.proposed = [0] * self.n_proposals
        self.accepted = [0] * self.n_proposals

    @property
    def n_steps(self) -> int:
        """Number of steps in the chain."""
        return len(self.indicator_chain)

    @property
    def indicator_chain_tot(self) -> IntArray:
        """Visits to each model up to and including every step, (n_steps, n_models)."""
        one_hot = np.eye(self.n_models, dtype=int)[np.asarray(self.indicator_chain, dtype=int)]
        return one_hot.reshape(-1, self.n_models).cumsum(axis=0)

    @property
    def acceptance_rates(self) -> list[float]:
        """Fraction of accepted moves for each proposal (nan if never chosen)."""
        return [
            a / p if p else float("nan") for a, p in zip(self.accepted, self.proposed)
        ]


def update_chain(
    chain: ModelSwitchChain,
    indicator_value: int,
    log_posterior: float,
    proposal_index: int,
    proposal_accepted: bool,
) -> None:
    """Record the outcome of one step.

    Args:
        chain (ModelSwitchChain): The chain to update.
        indicator_value (int): Active model after the accept/reject step.
        log_posterior (float): Log posterior after the accept/reject step.
        proposal_index (int): Which proposal was attempted.
        proposal_accepted (bool): Whether the proposal was accepted or not.
    """
    chain.indicator_chain.append(indicator_value)
    chain.log_posterior_chain.append(log_posterior)
    chain.proposed[proposal_index] += 1
    chain.accepted[proposal_index] += int(proposal_accepted)


def run_model_switch_sampler(
    n_steps: int,
    proposals: Sequence[Proposable],
    posterior: LogDensity,
    indicator: ModelIndicator,
    parameters: Sequence[Parameter],
    rng: RandomSource,
    weights: Sequence[float] | None = None,
    progress=False,
) -> ModelSwitchChain:
    """Run a single Metropolis-Hastings chain over models and their parameters.

    Each step picks one proposal according to ``weights``, applies it, and
    accepts or rejects it against ``posterior``. Rejected moves are undone by
    restoring the cells the proposal reports through ``modified_cells``.

    Parameters
    ----------
    n_steps : int
        Number of MCMC steps.
    proposals : sequence of Proposable
        Proposal operators, e.g. ``ConditionalScaleProposal`` and
        ``ModelSwitchProposal``.
    posterior : LogDensity
        Target log-density of the current state, typically a
        ``DistributionSwitcher`` over per-model posteriors.
    indicator : ModelIndicator
        The shared model indicator. Must already be restricted to the
        number of models.
    parameters : sequence of Parameter
        Every parameter any proposal may change.
    rng : RandomSource
        Shared random stream. Each step draws one ``uniform_real`` to pick
        the proposal, then whatever the proposal draws, then one
        ``uniform_real`` for the acceptance test.
    weights : sequence of float, optional
        Relative selection weights of the proposals. Default is uniform.
    progress : bool, optional
        Whether to display a progress bar. Default is False.

    Returns
    -------
    ModelSwitchChain
        The indicator trace, log-posterior trace and per-proposal counts.

    Examples
    --------
    >>> chain = run_model_switch_sampler(
    ...     n_steps=10000,
    ...     proposals=[scale_move, switch_move],
    ...     posterior=DistributionSwitcher(indicator, [post_a, post_b]),
    ...     indicator=indicator,
    ...     parameters=partition.parameters,
    ...     rng=NumpyRandomSource(42),
    ...     weights=[3.0, 1.0],
    ... )
    """
    if len(proposals) == 0:
        raise ConfigurationError("At least one proposal is required.")
    if weights is None:
        weights = [1.0] * len(proposals)
    weights = np.asarray(weights, dtype=float)
    if len(weights) != len(proposals):
        raise ConfigurationError(
            "Number of weights does not match number of proposals.",
            dimension="weights",
            expected=len(proposals),
            actual=len(weights),
        )
    if np.any(weights < 0) or not np.sum(weights) > 0:
        raise ConfigurationError("Proposal weights must be non-negative with a positive sum.")
    if indicator.n_models is None:
        raise ConfigurationError(
            f"Model indicator '{indicator.name}' has not been restricted to a number of models."
        )

    logger.info("Running model-switch sampler")
    logger.info("Number of models: %d", indicator.n_models)
    logger.info("Number of parameters: %d", len(parameters))
    logger.info("Number of proposals: %d", len(proposals))

    cumulative = np.cumsum(weights) / np.sum(weights)
    cells: tuple[StateCell, ...] = (indicator, *parameters)
    chain = ModelSwitchChain(indicator.n_models, len(proposals))

    log_p = posterior.log_density()
    for _ in tqdm(range(n_steps), disable=not progress):
        k, accept, log_p = _chain_step(
            proposals, cumulative, posterior, cells, rng, log_p
        )
        update_chain(chain, indicator.get(), log_p, k, accept)

    logger.info("Acceptance rates: %s", chain.acceptance_rates)
    return chain


def _chain_step(
    proposals: Sequence[Proposable],
    cumulative: np.ndarray,
    posterior: LogDensity,
    cells: tuple[StateCell, ...],
    rng: RandomSource,
    log_p_current: float,
) -> tuple[int, bool, float]:
    """Perform a single step of the sampler.

    Returns:
        int: Index of the proposal attempted.
        bool: Whether the proposal was accepted or not.
        float: Log posterior of the state after the step.
    """
    k = min(int(np.searchsorted(cumulative, rng.uniform_real(), side="right")), len(proposals) - 1)
    proposal = proposals[k]

    for cell in cells:
        cell.store()

    log_hastings_ratio = proposal.proposal()
    log_p_proposed = posterior.log_density()

    # Metropolis-Hastings acceptance criterion
    log_alpha = log_p_proposed - log_p_current + log_hastings_ratio
    # u == 0 gives log u == -inf, which accepts any finite log alpha
    with np.errstate(divide="ignore"):
        log_u = np.log(rng.uniform_real())
    accept = bool(log_alpha >= log_u)

    logger.debug(
        "%s move from %r: log alpha %g",
        "Accepting" if accept else "Rejecting",
        proposal,
        log_alpha,
    )

    if accept:
        return k, True, log_p_proposed

    for cell in proposal.modified_cells():
        cell.restore()
    return k, False, log_p_current
