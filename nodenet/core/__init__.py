"""Core numerical primitives for nodenet."""

from . import activations, losses, network, types

__all__ = ["activations", "losses", "network", "types"]
