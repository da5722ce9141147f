"""Deterministic online training loop for nodenet networks."""

from __future__ import annotations

import random
from typing import Iterable, List, Mapping, Sequence

import numpy as np

from ..core.losses import REGISTRY as LOSS_REGISTRY
from ..core.losses import mean_loss
from ..core.network import Network
from ..core.types import Array, ConfigurationError, RunResult, Sample


class Trainer:
    """Drive forward/backward epochs over a fixed sample sequence."""

    def __init__(
        self,
        network: Network,
        learning_rate: float,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        self.network = network
        self.learning_rate = float(learning_rate)
        self.callbacks = list(callbacks or [])

    def run(
        self,
        dataset: Iterable[Sample],
        epochs: int,
        seed: int | None = None,
        *,
        init: str = "zeros",
        init_scale: float = 0.5,
    ) -> RunResult:
        if isinstance(epochs, bool) or not isinstance(epochs, int) or epochs < 0:
            raise ConfigurationError(f"epochs must be a non-negative integer, got {epochs!r}")
        samples = list(dataset)
        if not samples:
            raise ConfigurationError("dataset is empty")

        if seed is not None:
            self._set_seed(seed)
        if init == "normal":
            self.network.initialize(np.random.default_rng(seed), scale=init_scale)
        elif init != "zeros":
            raise ConfigurationError(f"Unknown init mode: {init!r}")

        history: List[dict] = []
        step = 0
        try:
            for epoch in range(1, epochs + 1):
                losses: List[float] = []
                for sample in samples:
                    loss = self.network.train_step(
                        sample.inputs, sample.targets, self.learning_rate
                    )
                    losses.append(loss)
                    step += 1
                    self._emit("on_step", step, {"loss": loss})
                metrics = {
                    "loss": mean_loss(losses),
                    "output": float(self.network.outputs[0]),
                }
                history.append(metrics)
                self._emit("on_epoch", epoch, metrics)
        finally:
            for callback in self.callbacks:
                if hasattr(callback, "close"):
                    callback.close()  # type: ignore[attr-defined]
        return RunResult(epochs=epochs, steps=step, history=history)

    def evaluate(
        self, dataset: Iterable[Sample], loss: str = "squared_error"
    ) -> tuple[float, List[Array]]:
        """Forward-only pass over ``dataset``; returns mean loss and predictions."""

        loss_fn = LOSS_REGISTRY.get(loss)
        losses: List[float] = []
        predictions: List[Array] = []
        for sample in dataset:
            self.network.forward(sample.inputs)
            outputs = self.network.outputs
            value, _ = loss_fn(outputs, np.asarray(sample.targets, dtype=np.float64))
            losses.append(value)
            predictions.append(outputs)
        return mean_loss(losses), predictions

    def _emit(self, hook: str, index: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            handler = getattr(callback, hook, None)
            if handler is not None:
                handler(index, metrics)

    @staticmethod
    def _set_seed(seed: int) -> None:
        random.seed(seed)
        np.random.seed(seed)


__all__ = ["Trainer"]
