"""Tests for the model visit analysis functions."""

import numpy as np
import pytest

from modelswitch.analysis.visits import (
    count_model_switches,
    get_relative_model_probabilities,
    get_visits_to_models,
)
from modelswitch.samplers.driver import ModelSwitchChain, update_chain


@pytest.fixture
def chain() -> ModelSwitchChain:
    """Chain with a fixed indicator trace over three models."""
    chain = ModelSwitchChain(n_models=3, n_proposals=1)
    chain.indicator_chain = [0, 0, 1, 1, 1, 2, 0, 1]
    return chain


def test_get_visits_to_models_counts(chain: ModelSwitchChain) -> None:
    """Test cumulative visit counts along the chain."""

    visits, samples = get_visits_to_models(chain)
    assert visits.shape == (8, 3)
    np.testing.assert_array_equal(visits[-1], [3, 4, 1])
    np.testing.assert_array_equal(samples, chain.indicator_chain)


def test_get_visits_to_models_normalized(chain: ModelSwitchChain) -> None:
    """Test normalised visits sum to one at every step."""

    visits, _ = get_visits_to_models(chain, normalize=True)
    np.testing.assert_allclose(visits.sum(axis=1), 1.0)
    np.testing.assert_allclose(visits[-1], [3 / 8, 4 / 8, 1 / 8])


def test_get_visits_to_models_discard_thin(chain: ModelSwitchChain) -> None:
    """Test burn-in and thinning are applied to both outputs."""

    visits, samples = get_visits_to_models(chain, discard=2, thin=2)
    np.testing.assert_array_equal(samples, [1, 1, 0])
    assert visits.shape == (3, 3)


def test_count_model_switches(chain: ModelSwitchChain) -> None:
    """Test the number of indicator changes is counted."""

    assert count_model_switches(chain.indicator_chain) == 4
    assert count_model_switches(chain.indicator_chain, discard=5) == 2
    assert count_model_switches([]) == 0


def test_get_relative_model_probabilities(chain: ModelSwitchChain) -> None:
    """Test visit fractions per model."""

    probs = get_relative_model_probabilities(chain)
    np.testing.assert_allclose(probs, [3 / 8, 4 / 8, 1 / 8])
    np.testing.assert_allclose(get_relative_model_probabilities(chain, discard=6), [0.5, 0.5, 0.0])


def test_get_relative_model_probabilities_empty() -> None:
    """Test an empty selection is an error."""

    with pytest.raises(ValueError, match="No samples"):
        get_relative_model_probabilities(ModelSwitchChain(n_models=2, n_proposals=1))


def test_visit_tally_step_by_step(chain: ModelSwitchChain) -> None:
    """Test each row holds the visits up to and including that step."""

    visits, _ = get_visits_to_models(chain)
    expected = [
        [1, 0, 0],
        [2, 0, 0],
        [2, 1, 0],
        [2, 2, 0],
        [2, 3, 0],
        [2, 3, 1],
        [3, 3, 1],
        [3, 4, 1],
    ]
    np.testing.assert_array_equal(visits, expected)
    np.testing.assert_array_equal(visits.sum(axis=1), np.arange(1, 9))


def test_visit_tally_keeps_unvisited_models() -> None:
    """Test models never entered, such as one without parameters, keep a zero column."""

    chain = ModelSwitchChain(n_models=4, n_proposals=2)
    for step, m in enumerate([1, 1, 0, 1]):
        update_chain(chain, m, -1.0, step % 2, True)

    visits, samples = get_visits_to_models(chain, normalize=True)
    assert visits.shape == (4, 4)
    np.testing.assert_allclose(visits[-1], [0.25, 0.75, 0.0, 0.0])
    np.testing.assert_array_equal(samples, [1, 1, 0, 1])


def test_visit_tally_empty_chain() -> None:
    """Test an empty chain yields no rows but one column per model."""

    visits, samples = get_visits_to_models(ModelSwitchChain(n_models=3, n_proposals=1))
    assert visits.shape == (0, 3)
    assert len(samples) == 0
