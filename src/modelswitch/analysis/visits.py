"""Module to summarise the models visited along a chain."""

import numpy as np

from ..samplers.driver import ModelSwitchChain
from ..utils.types import FloatArray, IndicatorChain


def get_visits_to_models(
    chain: ModelSwitchChain,
    discard=0,
    thin=1,
    normalize=False,
):
    """Running visit statistics for each model along a chain.

    Parameters
    ----------
    chain : ModelSwitchChain
        Result of ``run_model_switch_sampler``.
    discard : int, optional
        Number of initial samples to discard as burn-in. Default is 0.
    thin : int, optional
        Use every ``thin``-th sample. Default is 1 (no thinning).
    normalize : bool, optional
        Whether to return fractions of visits instead of raw cumulative
        counts. Default is False.

    Returns
    -------
    visits : FloatArray
        Shape (n_steps, n_models); cumulative counts or fractions.
    samples : IntArray
        Indicator values kept after discarding and thinning.
    """
    samples = np.asarray(chain.indicator_chain, dtype=int)[discard::thin]
    visits = chain.indicator_chain_tot[discard::thin, :].astype("float")
    if normalize and visits.size:
        visits /= np.sum(visits, axis=1)[:, np.newaxis]

    return visits, samples


def count_model_switches(
    indicator_chain: IndicatorChain,
    discard: int = 0,
    thin: int = 1,
) -> int:
    """
    Count the number of times the indicator changes value.

    Parameters:
    indicator_chain - list of ints : the indicator chain to analyse (n_steps)
    discard - int                  : number of initial samples to discard (default = 0)
    thin - int                     : thinning factor for samples (default = 1)

    Returns:
    int : number of model changes
    """
    _chain = np.asarray(indicator_chain, dtype=int)[discard::thin]
    return int(np.count_nonzero(_chain[1:] - _chain[:-1]))


def get_relative_model_probabilities(
    chain: ModelSwitchChain,
    discard: int = 0,
    thin: int = 1,
) -> FloatArray:
    """Estimate posterior model probabilities from visit frequencies.

    The fraction of retained steps spent in each model estimates its
    posterior probability, provided the chain has mixed between models.

    Examples
    --------
    >>> probs = get_relative_model_probabilities(chain, discard=1000)
    >>> bayes_factor = probs[1] / probs[0]
    """
    samples = np.asarray(chain.indicator_chain, dtype=int)[discard::thin]
    if samples.size == 0:
        raise ValueError("No samples left after discarding and thinning.")
    counts = np.bincount(samples, minlength=chain.n_models)
    return counts / np.sum(counts)
