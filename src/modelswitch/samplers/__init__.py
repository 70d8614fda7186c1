"""Sampling drivers for pyModelSwitch."""

from .driver import ModelSwitchChain, run_model_switch_sampler

__all__ = [
    "ModelSwitchChain",
    "run_model_switch_sampler",
]
