"""Utility functions and types for pyModelSwitch.

This module contains the supporting pieces used throughout the package:

- Type annotations and capability protocols for proposals and sub-models
- A numpy-backed implementation of the random source protocol
"""

from .random import NumpyRandomSource

__all__ = ["NumpyRandomSource"]
