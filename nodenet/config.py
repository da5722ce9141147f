"""Run configuration and preset loading."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .core.network import validate_topology

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor_demo": {
        "topology": [2, 1],
        "input_dim": 2,
        "activation": "tanh",
        "learning_rate": 0.01,
        "epochs": 10,
        "dataset": "xor",
    },
    "xor_train": {
        "topology": [4, 1],
        "input_dim": 2,
        "activation": "tanh",
        "learning_rate": 0.1,
        "epochs": 2000,
        "seed": 7,
        "init": "normal",
        "dataset": "xor",
    },
    "or_sigmoid": {
        "topology": [1],
        "input_dim": 2,
        "activation": "sigmoid",
        "learning_rate": 0.5,
        "epochs": 500,
        "seed": 0,
        "init": "normal",
        "dataset": "or",
    },
}


@dataclass
class RunConfig:
    """Everything the driver needs to build and train one network."""

    topology: List[int] = field(default_factory=lambda: [2, 1])
    input_dim: int = 2
    activation: str = "tanh"
    learning_rate: float = 0.01
    epochs: int = 10
    seed: Optional[int] = None
    init: str = "zeros"
    init_scale: float = 0.5
    dataset: str = "xor"
    run_dir: Optional[str] = None
    enable_plots: bool = False
    verbose: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "RunConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise KeyError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        values = dict(data)
        if "topology" in values:
            values["topology"] = validate_topology(values["topology"])  # type: ignore[arg-type]
        return cls(**values)  # type: ignore[arg-type]

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def merged(self, overrides: Mapping[str, object]) -> "RunConfig":
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig.from_mapping(data)


def presets() -> Dict[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> RunConfig:
    try:
        return RunConfig.from_mapping(_PRESETS[name])
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def _read_config_file(path: Path) -> Mapping[str, object]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load config files in YAML format") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def load_config(path: str | Path) -> RunConfig:
    return RunConfig.from_mapping(_read_config_file(Path(path)))


__all__ = ["RunConfig", "load_config", "load_preset", "presets"]
