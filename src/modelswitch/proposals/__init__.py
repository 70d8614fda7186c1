"""Proposal operators for model-switching MCMC."""

from .density import GammaProposal, gamma_proposals
from .model_switch import ModelSwitchProposal
from .scale import ConditionalScaleProposal, ScaleBounds

__all__ = [
    "ConditionalScaleProposal",
    "GammaProposal",
    "ModelSwitchProposal",
    "ScaleBounds",
    "gamma_proposals",
]
