"""Build a network from a :class:`RunConfig`, train it and collect artifacts."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from . import data
from .config import RunConfig
from .core.network import Network
from .core.types import RunResult
from .reporting.console import ConsoleSink
from .reporting.metrics import CsvSink, JsonlSink
from .reporting.plots import PlotAdapter
from .training.trainer import Trainer


def _loss_or_none(value: float) -> Optional[float]:
    # NaN is not valid JSON; runs without epochs have no loss.
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class PipelineResult:
    """Trained network plus where its run artifacts were written."""

    network: Network
    result: RunResult
    metrics_path: str = ""
    csv_path: str = ""
    summary_path: str = ""

    def summary(self) -> dict:
        payload = {
            "epochs": self.result.epochs,
            "steps": self.result.steps,
            "final_loss": _loss_or_none(self.result.final_loss),
        }
        if self.metrics_path:
            payload["metrics"] = self.metrics_path
            payload["csv"] = self.csv_path
            payload["summary"] = self.summary_path
        return payload


def build_network(config: RunConfig) -> Network:
    return Network(config.topology, config.input_dim, config.activation)


def run_pipeline(
    config: RunConfig,
    *,
    stream: TextIO | None = None,
    extra_callbacks: Sequence[object] = (),
) -> PipelineResult:
    network = build_network(config)
    samples = data.load(config.dataset)

    callbacks: List[object] = [ConsoleSink(stream)]
    run_dir: Optional[Path] = Path(config.run_dir) if config.run_dir else None
    metrics_path = csv_path = summary_path = ""
    if run_dir is not None:
        run_dir.mkdir(parents=True, exist_ok=True)
        metrics_path = str(run_dir / "metrics.jsonl")
        csv_path = str(run_dir / "metrics.csv")
        summary_path = str(run_dir / "summary.json")
        callbacks.append(JsonlSink(metrics_path, seed=config.seed))
        callbacks.append(CsvSink(csv_path))
        callbacks.append(PlotAdapter(run_dir, enable_plots=config.enable_plots))
    callbacks.extend(extra_callbacks)

    trainer = Trainer(network, config.learning_rate, callbacks=callbacks)
    result = trainer.run(
        samples,
        config.epochs,
        seed=config.seed,
        init=config.init,
        init_scale=config.init_scale,
    )
    outcome = PipelineResult(
        network=network,
        result=result,
        metrics_path=metrics_path,
        csv_path=csv_path,
        summary_path=summary_path,
    )
    if summary_path:
        payload = {
            "config": config.to_dict(),
            "network": network.describe(),
            "parameters": network.parameter_count(),
            "epochs": result.epochs,
            "steps": result.steps,
            "final_loss": _loss_or_none(result.final_loss),
        }
        Path(summary_path).write_text(json.dumps(payload, indent=2, sort_keys=True))
    return outcome


__all__ = ["PipelineResult", "build_network", "run_pipeline"]
