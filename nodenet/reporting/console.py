"""Plain-text rendering of network state."""

from __future__ import annotations

import sys
from typing import Iterable, Mapping, TextIO

from ..core.types import LayerSnapshot, NodeSnapshot


def format_node(node: NodeSnapshot) -> str:
    lines = [
        f"NODE {node.index}: bias: {node.bias:.2f}, output: {node.pre_activation:.2f}, "
        f"activation: {node.activation:.2f}, error: {node.error_signal:.2f}, "
        f"expected: {node.expected_output:.2f}"
    ]
    lines.extend(f"input {i}: {value:.5f}" for i, value in enumerate(node.inputs))
    lines.extend(f"coe {i}: {value:.5f}" for i, value in enumerate(node.weights))
    return "\n".join(lines)


def format_layer(layer: LayerSnapshot) -> str:
    header = f"LAYER {layer.index}: num_nodes: {layer.num_nodes}"
    return "\n".join([header, *(format_node(node) for node in layer.nodes)])


def format_network(layers: Iterable[LayerSnapshot]) -> str:
    return "\n\n----------\n\n".join(format_layer(layer) for layer in layers)


class ConsoleSink:
    """Print the network output once per epoch."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.stream.write(f"OUTPUT: {float(metrics.get('output', 0.0)):.5f}\n")


__all__ = ["ConsoleSink", "format_layer", "format_network", "format_node"]
