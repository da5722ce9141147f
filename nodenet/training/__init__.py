"""Training loop for nodenet networks."""

from .trainer import Trainer

__all__ = ["Trainer"]
