"""Layered feed-forward network built from individual nodes."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .activations import ActivationKind, activate, derivative
from .losses import squared_error
from .types import Array, ConfigurationError, LayerSnapshot, NodeSnapshot


@dataclass
class Node:
    """A single neuron: weighted sum of its inputs plus bias, then activation."""

    index: int
    weights: Array
    kind: ActivationKind = ActivationKind.TANH
    bias: float = 0.0
    pre_activation: float = 0.0
    activation: float = 0.0
    error_signal: float = 0.0
    expected_output: float = 0.0
    inputs: Array = field(default_factory=lambda: np.zeros(0), repr=False)
    _error_fresh: bool = field(default=False, repr=False)

    @classmethod
    def zeros(cls, index: int, input_size: int, kind: ActivationKind) -> "Node":
        return cls(index=index, weights=np.zeros(input_size, dtype=np.float64), kind=kind)

    def compute_output(self) -> float:
        self.pre_activation = float(np.dot(self.weights, self.inputs)) + self.bias
        self.activation = activate(self.pre_activation, self.kind)
        return self.activation

    def set_error(self, error_signal: float) -> None:
        self.error_signal = float(error_signal)
        self._error_fresh = True

    def update_weights(self, learning_rate: float) -> None:
        """Take one gradient-descent step using the inputs of the last forward pass."""

        if not self._error_fresh:
            raise RuntimeError(
                f"Node {self.index}: update_weights called before an error signal was computed"
            )
        step = learning_rate * self.error_signal
        self.weights -= step * self.inputs
        self.bias -= step
        self._error_fresh = False

    def snapshot(self) -> NodeSnapshot:
        return NodeSnapshot(
            index=self.index,
            bias=self.bias,
            pre_activation=self.pre_activation,
            activation=self.activation,
            error_signal=self.error_signal,
            expected_output=self.expected_output,
            inputs=tuple(float(v) for v in self.inputs),
            weights=tuple(float(w) for w in self.weights),
        )


class Layer:
    """Ordered group of nodes reading one shared input vector."""

    def __init__(self, index: int, num_nodes: int, input_size: int, kind: ActivationKind):
        self.index = index
        self.input_size = input_size
        self.nodes: List[Node] = [Node.zeros(i, input_size, kind) for i in range(num_nodes)]
        self._previous: Optional[Layer] = None
        self._external: Optional[Array] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def wire_input_from(self, previous: "Layer") -> None:
        if len(previous) != self.input_size:
            raise ConfigurationError(
                f"Layer {self.index} expects {self.input_size} inputs, "
                f"layer {previous.index} produces {len(previous)}"
            )
        self._previous = previous
        self._external = None

    def bind_input(self, inputs: Array) -> None:
        self._previous = None
        self._external = inputs

    @property
    def input_vector(self) -> Array:
        """Current inputs, read fresh from the producer on every access."""

        if self._previous is not None:
            return self._previous.activations
        if self._external is None:
            return np.zeros(self.input_size, dtype=np.float64)
        return self._external

    @property
    def activations(self) -> Array:
        return np.array([node.activation for node in self.nodes], dtype=np.float64)

    def forward(self) -> Array:
        inputs = self.input_vector
        for node in self.nodes:
            node.inputs = inputs
            node.compute_output()
        return self.activations

    def snapshot(self) -> LayerSnapshot:
        return LayerSnapshot(index=self.index, nodes=tuple(n.snapshot() for n in self.nodes))


def validate_topology(topology: Sequence[int]) -> List[int]:
    if isinstance(topology, (str, bytes)) or not hasattr(topology, "__iter__"):
        raise ConfigurationError(f"Topology must be a sequence of layer sizes, got {topology!r}")
    sizes = list(topology)
    if not sizes:
        raise ConfigurationError("Topology must contain at least one layer")
    for pos, size in enumerate(sizes):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
            raise ConfigurationError(
                f"Topology entry {pos} must be a positive integer, got {size!r}"
            )
    return [int(s) for s in sizes]


class Network:
    """Feed-forward network with one activation kind shared by every node.

    ``topology`` lists the node count of each layer, starting with the first
    layer that has weights. The external input width is given separately by
    ``input_dim`` and fixes the weight count of every node in layer 0.
    """

    def __init__(
        self,
        topology: Sequence[int],
        input_dim: int,
        activation: ActivationKind | str = ActivationKind.TANH,
    ) -> None:
        self.topology = validate_topology(topology)
        if isinstance(input_dim, bool) or not isinstance(input_dim, (int, np.integer)) or input_dim <= 0:
            raise ConfigurationError(f"input_dim must be a positive integer, got {input_dim!r}")
        self.input_dim = int(input_dim)
        self.activation = ActivationKind.parse(activation)

        self._forwarded = False
        self.layers: List[Layer] = []
        input_size = self.input_dim
        for idx, size in enumerate(self.topology):
            self.layers.append(Layer(idx, size, input_size, self.activation))
            input_size = size
        for previous, layer in zip(self.layers[:-1], self.layers[1:]):
            layer.wire_input_from(previous)

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    @property
    def outputs(self) -> Array:
        return self.output_layer.activations

    def describe(self) -> dict:
        return {
            "topology": list(self.topology),
            "input_dim": self.input_dim,
            "activation": self.activation.value,
        }

    def parameter_count(self) -> int:
        return sum(len(node.weights) + 1 for layer in self.layers for node in layer)

    def initialize(self, rng: np.random.Generator, scale: float = 0.5) -> None:
        """Draw every weight and bias from ``normal(0, scale)``."""

        for layer in self.layers:
            for node in layer:
                node.weights = rng.normal(0.0, scale, size=layer.input_size).astype(np.float64)
                node.bias = float(rng.normal(0.0, scale))

    def set_weights(
        self, layer: int, node: int, weights: Sequence[float], bias: float | None = None
    ) -> None:
        target = self.layers[layer].nodes[node]
        values = np.array(weights, dtype=np.float64)
        if values.shape != (self.layers[layer].input_size,):
            raise ConfigurationError(
                f"Layer {layer} node {node} needs {self.layers[layer].input_size} weights, "
                f"got {values.size}"
            )
        target.weights = values
        if bias is not None:
            target.bias = float(bias)

    def bind_input(self, inputs: Sequence[float] | Array) -> Array:
        # asarray keeps a float64 caller buffer aliased rather than copied.
        values = np.asarray(inputs, dtype=np.float64)
        if values.ndim != 1 or values.shape[0] != self.input_dim:
            raise ConfigurationError(
                f"Expected an input vector of length {self.input_dim}, got shape {values.shape}"
            )
        self.layers[0].bind_input(values)
        return values

    def forward(self, inputs: Sequence[float] | Array) -> float | Array:
        """Run the forward pass and return the network output.

        Single-output networks return a float; wider output layers return a
        copy of the final activation vector.
        """

        self.bind_input(inputs)
        out: Array = np.zeros(0)
        for layer in self.layers:
            out = layer.forward()
        self._forwarded = True
        if out.shape[0] == 1:
            return float(out[0])
        return out

    def set_expected(self, targets: Sequence[float] | float) -> None:
        values = np.atleast_1d(np.asarray(targets, dtype=np.float64))
        if values.ndim != 1 or values.shape[0] != len(self.output_layer):
            raise ConfigurationError(
                f"Expected {len(self.output_layer)} target values, got shape {values.shape}"
            )
        for node, value in zip(self.output_layer, values):
            node.expected_output = float(value)

    def backward(self, learning_rate: float) -> None:
        """Back-propagate the output error and apply one gradient-descent step.

        Error signals of every layer are computed from the weights used in the
        forward pass before any weight is changed.
        """

        if not math.isfinite(learning_rate) or learning_rate < 0:
            raise ConfigurationError(
                f"learning_rate must be finite and non-negative, got {learning_rate!r}"
            )
        if not self._forwarded:
            raise RuntimeError("backward called before forward")
        for node in self.output_layer:
            node.set_error(
                (node.activation - node.expected_output) * derivative(node.activation, self.activation)
            )
        for idx in range(len(self.layers) - 2, -1, -1):
            following = self.layers[idx + 1]
            for node in self.layers[idx]:
                propagated = sum(n.error_signal * n.weights[node.index] for n in following)
                node.set_error(propagated * derivative(node.activation, self.activation))
        for layer in reversed(self.layers):
            for node in layer:
                node.update_weights(learning_rate)
        self._forwarded = False

    def train_step(
        self,
        inputs: Sequence[float] | Array,
        targets: Sequence[float] | float,
        learning_rate: float,
    ) -> float:
        """One epoch on one sample; returns the squared error before the update."""

        if self.activation is ActivationKind.STEP and learning_rate > 0:
            warnings.warn(
                "STEP activation has a zero derivative everywhere; the network will not learn",
                RuntimeWarning,
                stacklevel=2,
            )
        self.forward(inputs)
        self.set_expected(targets)
        expected = np.array([n.expected_output for n in self.output_layer])
        loss, _ = squared_error(self.outputs, expected)
        self.backward(learning_rate)
        return loss

    def snapshot(self) -> List[LayerSnapshot]:
        return [layer.snapshot() for layer in self.layers]


__all__ = ["Layer", "Network", "Node", "validate_topology"]
