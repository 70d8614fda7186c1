"""Custom exceptions for pyModelSwitch.

This module defines the exception hierarchy for the modelswitch package,
separating mistakes made while wiring up a sampler from defects detected
while the chain is running.
"""


class ModelSwitchError(Exception):
    """Base exception class for all modelswitch-specific errors.

    It can be used to catch any modelswitch-related error in a general
    exception handler.
    """

    pass


class ConfigurationError(ModelSwitchError):
    """Raised when a component is constructed from inconsistent inputs.

    This exception is raised when:
    - Parallel input arrays have different lengths
    - Fewer than two models are available to a model-switch proposal
    - Scale bounds or proposal densities have invalid values
    - Two components disagree on the number of models

    Parameters
    ----------
    msg : str, optional
        Human-readable error message describing the problem.
    dimension : str, optional
        Name of the mismatched dimension, e.g. ``"scale_bounds"``.
    expected : object, optional
        The size (or sizes) that would have been valid.
    actual : object, optional
        The size that was supplied.
    """

    def __init__(
        self,
        msg="Invalid sampler configuration",
        dimension=None,
        expected=None,
        actual=None,
    ):
        self.dimension = dimension
        self.expected = expected
        self.actual = actual
        if dimension is not None:
            msg = f"{msg} ({dimension}: expected {expected}, got {actual})"
        super().__init__(msg)


class RuntimeInvariantError(ModelSwitchError):
    """Raised when a chain step finds the shared state in an impossible shape.

    Examples are a model indicator outside ``[0, n_models)`` or a scale move
    asked to act on a model that owns no parameters. These indicate a
    programming or configuration defect and abort the step.
    """

    def __init__(self, msg="Sampler state violates a runtime invariant"):
        super().__init__(msg)
