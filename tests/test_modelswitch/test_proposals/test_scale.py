"""Tests for the conditional scale proposal."""

import numpy as np
import pytest

from modelswitch import (
    ConditionalScaleProposal,
    ConfigurationError,
    ModelIndicator,
    NumpyRandomSource,
    Parameter,
    ParameterPartition,
    RuntimeInvariantError,
    ScaleBounds,
)


def test_scales_selected_parameter(parameters, partition, indicator, scripted_rng) -> None:
    """Test the chosen parameter is multiplied by the drawn factor."""

    rng = scripted_rng(ints=[1], reals=[0.5])
    move = ConditionalScaleProposal(indicator, partition, 2.0, rng)

    log_hr = move.proposal()

    f = 0.5 + 0.5 * (2.0 - 0.5)
    assert parameters[2].get() == pytest.approx(3.0 * f)
    assert parameters[0].get() == 1.0
    assert parameters[1].get() == 2.0
    assert log_hr == pytest.approx(np.log(3.0 / (3.0 * f)))
    assert log_hr == pytest.approx(-np.log(f))
    assert rng.calls == [("uniform_int", 2), ("uniform_real",)]
    assert move.modified_cells() == (parameters[2],)


def test_uses_bound_of_selected_parameter(parameters, partition, scripted_rng) -> None:
    """Test per-parameter bounds are looked up by the parameter's flat position."""

    indicator = ModelIndicator(1)
    rng = scripted_rng(ints=[0], reals=[1.0])
    move = ConditionalScaleProposal(indicator, partition, [1.5, 4.0, 1.5], rng)

    move.proposal()

    assert parameters[1].get() == pytest.approx(2.0 * 4.0)


def test_hastings_ratio_and_range() -> None:
    """Test log HR equals log(old/new) and the factor stays within bounds."""

    params = [Parameter(f"p{i}", 0.5 + i) for i in range(4)]
    partition = ParameterPartition.build(params, [0, 0, 1, 1])
    indicator = ModelIndicator(0)
    fmax = 3.0
    move = ConditionalScaleProposal(indicator, partition, fmax, NumpyRandomSource(7))

    for step in range(500):
        indicator.set(step % 2)
        old = [p.get() for p in params]
        log_hr = move.proposal()
        (changed,) = move.modified_cells()
        i = params.index(changed)
        ratio = changed.get() / old[i]
        assert 1.0 / fmax <= ratio <= fmax
        assert log_hr == pytest.approx(np.log(old[i] / changed.get()))
        assert partition.bucket_positions(indicator.get()).count(i) == 1


def test_bounds_below_one_are_inverted() -> None:
    """Test a bound below one is replaced by its reciprocal."""

    bounds = ScaleBounds.build([0.25, 2.0], n_parameters=2)
    assert bounds.values == (4.0, 2.0)
    assert ScaleBounds.build(0.5, n_parameters=3).bound(2) == 2.0


@pytest.mark.parametrize("bound", [0.0, np.inf, -np.inf, np.nan])
def test_invalid_bound_values(bound) -> None:
    """Test zero or non-finite bounds are rejected."""

    with pytest.raises(ConfigurationError, match="finite and non-zero"):
        ScaleBounds.build(bound, n_parameters=1)


@pytest.mark.parametrize("bound, expected", [(-0.5, 2.0), (-2.0, 2.0), (-1.0, 1.0)])
def test_negative_bounds_are_normalised(bound, expected) -> None:
    """Test a negative bound is read as the magnitude of its reciprocal."""

    bounds = ScaleBounds.build(bound, n_parameters=1)
    assert bounds.bound(0) == pytest.approx(expected)
    assert bounds.bound(0) >= 1.0


def test_negative_bound_drives_scale_move(scripted_rng) -> None:
    """Test a scale move built from a negative bound draws within [1/2, 2]."""

    p = Parameter("p", 3.0)
    partition = ParameterPartition.build([p], [0])
    move = ConditionalScaleProposal(ModelIndicator(0), partition, -0.5, scripted_rng(ints=[0], reals=[1.0]))
    log_hr = move.proposal()
    assert p.get() == pytest.approx(6.0)
    assert log_hr == pytest.approx(-np.log(2.0))


def test_bounds_dimension_mismatch(partition, indicator) -> None:
    """Test more than one bound but not one per parameter is rejected."""

    with pytest.raises(ConfigurationError, match="scale factors") as excinfo:
        ConditionalScaleProposal(indicator, partition, [2.0, 2.0], NumpyRandomSource())
    assert excinfo.value.dimension == "scale_bounds"
    assert excinfo.value.actual == 2


def test_prebuilt_bounds_dimension_mismatch(partition, indicator) -> None:
    """Test a ScaleBounds built for a different parameter count is rejected."""

    bounds = ScaleBounds((2.0, 2.0))
    with pytest.raises(ConfigurationError, match="scale factors"):
        ConditionalScaleProposal(indicator, partition, bounds, NumpyRandomSource())


def test_empty_active_bucket(partition, scripted_rng) -> None:
    """Test a scale move on a model without parameters fails loudly."""

    indicator = ModelIndicator(2)
    rng = scripted_rng()
    move = ConditionalScaleProposal(indicator, partition, 2.0, rng)
    with pytest.raises(RuntimeInvariantError, match="no parameters"):
        move.proposal()
    assert rng.calls == []


def test_non_positive_value(scripted_rng) -> None:
    """Test scaling a non-positive value fails loudly."""

    p = Parameter("p", 0.0)
    partition = ParameterPartition.build([p], [0])
    move = ConditionalScaleProposal(ModelIndicator(0), partition, 2.0, scripted_rng(ints=[0], reals=[0.3]))
    with pytest.raises(RuntimeInvariantError, match="non-positive"):
        move.proposal()
    assert p.get() == 0.0
    assert move.modified_cells() == ()
