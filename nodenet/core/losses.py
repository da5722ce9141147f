"""Loss functions matching the output error signal used by back-propagation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Sequence

import numpy as np

from .types import Array

LossFn = Callable[[Array, Array], tuple[float, Array]]


def squared_error(predictions: Array, targets: Array) -> tuple[float, Array]:
    """Return ``0.5 * sum((p - t)**2)`` and its gradient ``p - t``."""

    preds = np.atleast_1d(np.asarray(predictions, dtype=np.float64))
    targs = np.atleast_1d(np.asarray(targets, dtype=np.float64))
    if preds.shape != targs.shape:
        raise ValueError(f"Shape mismatch: predictions {preds.shape} vs targets {targs.shape}")
    diff = preds - targs
    return 0.5 * float(np.sum(diff**2)), diff


@dataclass(frozen=True)
class Loss:
    """Loss wrapper returning both the scalar loss and dL/dy."""

    name: str
    fn: LossFn

    def __call__(self, predictions: Array, targets: Array) -> tuple[float, Array]:
        return self.fn(predictions, targets)


class LossRegistry:
    """Named loss functions available to the trainer for evaluation."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, name: str, fn: LossFn) -> None:
        self._registry[name] = Loss(name, fn)

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def get(self, name: str) -> Loss:
        if name not in self._registry:
            available = ", ".join(sorted(self._registry))
            raise KeyError(f"Unknown loss {name!r}. Available losses: {available}")
        return self._registry[name]


REGISTRY = LossRegistry()
REGISTRY.register("squared_error", squared_error)


def mean_loss(values: Sequence[float]) -> float:
    return float(np.mean(values)) if len(values) else 0.0


__all__ = ["Loss", "LossRegistry", "REGISTRY", "mean_loss", "squared_error"]
