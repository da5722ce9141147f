"""Command line entry point for training nodenet networks."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from nodenet import config as run_config
from nodenet import data, pipeline
from nodenet.core.activations import ActivationKind
from nodenet.core.types import ConfigurationError
from nodenet.reporting.console import format_network


def _topology(value: str) -> list[int]:
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid topology {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=sorted(run_config.presets().keys()),
        default="xor_demo",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config file")
    parser.add_argument(
        "--topology",
        type=_topology,
        help="Comma separated node counts per layer, e.g. 2,1",
    )
    parser.add_argument("--input-dim", type=int, help="Width of the external input vector")
    parser.add_argument(
        "--activation",
        choices=[kind.value for kind in ActivationKind],
        help="Activation function used by every node",
    )
    parser.add_argument("--learning-rate", type=float)
    parser.add_argument("--epochs", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--init", choices=["zeros", "normal"])
    parser.add_argument("--dataset", choices=data.names())
    parser.add_argument("--run-dir", help="Directory for metrics and summary files")
    parser.add_argument(
        "--enable-plots", action="store_true", default=None, help="Write loss.png to the run dir"
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="Print node state after training"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    return parser


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_presets:
        for name in sorted(run_config.presets().keys()):
            print(name)
        raise SystemExit(0)

    if args.config:
        config = run_config.load_config(args.config)
    else:
        config = run_config.load_preset(args.preset)
    config = config.merged(
        {
            "topology": args.topology,
            "input_dim": args.input_dim,
            "activation": args.activation,
            "learning_rate": args.learning_rate,
            "epochs": args.epochs,
            "seed": args.seed,
            "init": args.init,
            "dataset": args.dataset,
            "run_dir": args.run_dir,
            "enable_plots": args.enable_plots,
            "verbose": args.verbose,
        }
    )

    try:
        outcome = pipeline.run_pipeline(config)
    except ConfigurationError as exc:
        parser.error(str(exc))

    if config.verbose:
        print(format_network(outcome.network.snapshot()))
    print(json.dumps(outcome.summary(), sort_keys=True))


if __name__ == "__main__":
    main()
