import math

import numpy as np
import pytest

from nodenet.core.activations import ActivationKind
from nodenet.core.network import Network

HIDDEN = [([0.5, -0.3], 0.1), ([0.2, 0.4], -0.2)]
OUTPUT = ([0.7, -0.6], 0.05)


def _known_network() -> Network:
    net = Network([2, 1], input_dim=2, activation=ActivationKind.TANH)
    for idx, (weights, bias) in enumerate(HIDDEN):
        net.set_weights(0, idx, weights, bias=bias)
    net.set_weights(1, 0, OUTPUT[0], bias=OUTPUT[1])
    return net


def _params(net: Network):
    return [(node.weights.copy(), node.bias) for layer in net.layers for node in layer]


def test_zero_weights_give_zero_output_for_any_input():
    net = Network([2, 1], input_dim=2)
    for inputs in ([0.0, 1.0], [3.0, -7.5], [100.0, 100.0]):
        assert net.forward(inputs) == 0.0
        for layer in net.layers:
            assert all(node.pre_activation == 0.0 for node in layer)
            assert all(node.activation == 0.0 for node in layer)


def test_forward_matches_hand_computation():
    net = _known_network()
    x = [0.0, 1.0]
    h = [math.tanh(w[0] * x[0] + w[1] * x[1] + b) for w, b in HIDDEN]
    expected = math.tanh(OUTPUT[0][0] * h[0] + OUTPUT[0][1] * h[1] + OUTPUT[1])
    assert net.forward(x) == pytest.approx(expected, abs=1e-12)


def test_one_backward_step_matches_hand_computation():
    lr = 0.01
    net = _known_network()
    x = np.array([0.0, 1.0])
    out = net.forward(x)
    hidden = net.layers[0].activations.copy()
    net.set_expected([1.0])
    net.backward(lr)

    out_error = (out - 1.0) * (1 - out**2)
    output_node = net.layers[1].nodes[0]
    assert output_node.error_signal == pytest.approx(out_error)
    for i in range(2):
        delta = output_node.weights[i] - OUTPUT[0][i]
        assert delta == pytest.approx(-lr * (out - 1.0) * (1 - out**2) * hidden[i], abs=1e-15)
    assert output_node.bias == pytest.approx(OUTPUT[1] - lr * out_error, abs=1e-15)

    for j, (weights, bias) in enumerate(HIDDEN):
        node = net.layers[0].nodes[j]
        hidden_error = out_error * OUTPUT[0][j] * (1 - hidden[j] ** 2)
        assert node.error_signal == pytest.approx(hidden_error)
        assert np.allclose(node.weights, np.array(weights) - lr * hidden_error * x, atol=1e-15)
        assert node.bias == pytest.approx(bias - lr * hidden_error, abs=1e-15)


@pytest.mark.parametrize("kind", list(ActivationKind))
def test_zero_learning_rate_leaves_parameters_unchanged(kind):
    net = Network([3, 2], input_dim=2, activation=kind)
    net.initialize(np.random.default_rng(3))
    before = _params(net)
    net.train_step([0.4, -0.9], [1.0, -1.0], learning_rate=0.0)
    after = _params(net)
    for (w0, b0), (w1, b1) in zip(before, after):
        assert np.array_equal(w0, w1)
        assert b0 == b1


def test_scalar_chain_composes_activations():
    net = Network([1, 1], input_dim=1, activation="sigmoid")
    net.set_weights(0, 0, [1.5], bias=-0.25)
    net.set_weights(1, 0, [-2.0], bias=0.5)

    def sigmoid(v):
        return 1.0 / (1.0 + math.exp(-v))

    for x in (-1.0, 0.0, 0.3, 2.0):
        expected = sigmoid(-2.0 * sigmoid(1.5 * x - 0.25) + 0.5)
        assert net.forward([x]) == pytest.approx(expected, abs=1e-12)


def test_forward_is_deterministic():
    a = Network([4, 3, 1], input_dim=3)
    b = Network([4, 3, 1], input_dim=3)
    a.initialize(np.random.default_rng(11))
    b.initialize(np.random.default_rng(11))
    x = [0.2, -0.7, 1.3]
    assert a.forward(x) == b.forward(x)
    assert a.forward(x) == a.forward(x)


def test_backward_reads_weights_from_the_forward_pass():
    net = _known_network()
    net.forward([1.0, 1.0])
    net.set_expected([-1.0])
    out_node = net.layers[1].nodes[0]
    out_error = (out_node.activation + 1.0) * (1 - out_node.activation**2)
    h0 = net.layers[0].nodes[0].activation
    net.backward(0.5)
    expected = out_error * OUTPUT[0][0] * (1 - h0**2)
    assert net.layers[0].nodes[0].error_signal == pytest.approx(expected)


def test_step_network_warns_and_does_not_learn():
    net = Network([1], input_dim=2, activation="step")
    net.set_weights(0, 0, [0.3, 0.3], bias=0.1)
    with pytest.warns(RuntimeWarning):
        net.train_step([1.0, 1.0], [0.0], learning_rate=0.1)
    node = net.layers[0].nodes[0]
    assert np.array_equal(node.weights, [0.3, 0.3])
    assert node.bias == 0.1


def test_repeated_training_reduces_error():
    net = Network([1], input_dim=2, activation="sigmoid")
    net.initialize(np.random.default_rng(0))
    first = net.train_step([1.0, 0.0], [1.0], learning_rate=0.5)
    for _ in range(200):
        last = net.train_step([1.0, 0.0], [1.0], learning_rate=0.5)
    assert last < first
