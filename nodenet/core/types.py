"""Core typing contracts for nodenet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

Array = np.ndarray


class ConfigurationError(ValueError):
    """Raised for malformed topologies, activation kinds or vector lengths."""


@dataclass(frozen=True)
class Sample:
    """A single training example: one input vector and its expected outputs."""

    inputs: Tuple[float, ...]
    targets: Tuple[float, ...]


@dataclass(frozen=True)
class NodeSnapshot:
    """Diagnostic copy of a node's state."""

    index: int
    bias: float
    pre_activation: float
    activation: float
    error_signal: float
    expected_output: float
    inputs: Tuple[float, ...]
    weights: Tuple[float, ...]


@dataclass(frozen=True)
class LayerSnapshot:
    """Diagnostic copy of a layer's nodes."""

    index: int
    nodes: Tuple[NodeSnapshot, ...]

    @property
    def num_nodes(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :meth:`nodenet.training.trainer.Trainer.run`."""

    epochs: int
    steps: int
    history: List[Dict[str, float]] = field(default_factory=list)

    @property
    def final_loss(self) -> float:
        if not self.history:
            return float("nan")
        return float(self.history[-1]["loss"])
