"""Analysis tools for model-switching MCMC results.

This module provides utilities for summarising the model indicator trace,
including running visit counts, the number of model switches and visit-based
estimates of posterior model probabilities.
"""

from .visits import (
    count_model_switches,
    get_relative_model_probabilities,
    get_visits_to_models,
)

__all__ = [
    "count_model_switches",
    "get_relative_model_probabilities",
    "get_visits_to_models",
]
