"""nodenet public API."""

from .config import RunConfig, load_config, load_preset, presets
from .core import activations  # noqa: F401
from .core.activations import ActivationKind, activate, derivative
from .core.network import Layer, Network, Node
from .core.types import ConfigurationError, Sample
from .training.trainer import Trainer

__all__ = [
    "ActivationKind",
    "ConfigurationError",
    "Layer",
    "Network",
    "Node",
    "RunConfig",
    "Sample",
    "Trainer",
    "activate",
    "activations",
    "derivative",
    "load_config",
    "load_preset",
    "presets",
]
