import math
import warnings

import numpy as np
import pytest

from nodenet.core.activations import LEAKY_SLOPE, ActivationKind, activate, derivative
from nodenet.core.types import ConfigurationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("tanh", ActivationKind.TANH),
        ("TANH", ActivationKind.TANH),
        ("leaky-relu", ActivationKind.LEAKY_RELU),
        (" Leaky_ReLU ", ActivationKind.LEAKY_RELU),
        (ActivationKind.STEP, ActivationKind.STEP),
    ],
)
def test_parse_accepts_names_and_members(value, expected):
    assert ActivationKind.parse(value) is expected


@pytest.mark.parametrize("value", ["softmax", "", 3, None])
def test_unknown_kind_is_a_configuration_error(value):
    with pytest.raises(ConfigurationError):
        ActivationKind.parse(value)
    with pytest.raises(ConfigurationError):
        activate(0.5, value)
    with pytest.raises(ConfigurationError):
        derivative(0.5, value)


def test_scalar_inputs_return_floats():
    for kind in ActivationKind:
        assert isinstance(activate(0.25, kind), float)
        assert isinstance(derivative(0.25, kind), float)


def test_piecewise_functions():
    x = np.array([-2.0, 0.0, 3.0])
    assert np.array_equal(activate(x, "step"), [0.0, 0.0, 1.0])
    assert np.array_equal(activate(x, "relu"), [0.0, 0.0, 3.0])
    assert np.allclose(activate(x, "leaky_relu"), [-2.0 * LEAKY_SLOPE, 0.0, 3.0])
    assert np.array_equal(derivative(x, "step"), [0.0, 0.0, 0.0])
    assert np.array_equal(derivative(x, "relu"), [0.0, 0.0, 1.0])
    assert np.allclose(derivative(x, "leaky_relu"), [LEAKY_SLOPE, LEAKY_SLOPE, 1.0])


def test_tanh_matches_exponential_ratio():
    for x in np.linspace(-3.0, 3.0, 13):
        ratio = (math.exp(x) - math.exp(-x)) / (math.exp(x) + math.exp(-x))
        assert activate(float(x), ActivationKind.TANH) == pytest.approx(ratio, abs=1e-12)


def test_bounded_ranges():
    x = np.linspace(-10.0, 10.0, 201)
    tanh_out = activate(x, ActivationKind.TANH)
    sig_out = activate(x, ActivationKind.SIGMOID)
    assert np.all((tanh_out > -1.0) & (tanh_out < 1.0))
    assert np.all((sig_out > 0.0) & (sig_out < 1.0))
    for kind in (ActivationKind.RELU, ActivationKind.LEAKY_RELU):
        out = activate(x, kind)
        assert np.all(out >= np.minimum(0.0, LEAKY_SLOPE * x) - 1e-15)


def test_sigmoid_is_stable_for_extreme_inputs():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        out = activate(np.array([-1000.0, 1000.0]), ActivationKind.SIGMOID)
    assert np.all(np.isfinite(out))
    assert out[0] == pytest.approx(0.0)
    assert out[1] == pytest.approx(1.0)


def test_derivative_identities_on_activation_values():
    for x in np.linspace(-4.0, 4.0, 17):
        a = activate(float(x), ActivationKind.SIGMOID)
        assert derivative(a, ActivationKind.SIGMOID) == a * (1 - a)
        t = activate(float(x), ActivationKind.TANH)
        assert derivative(t, ActivationKind.TANH) == 1 - t * t


def test_array_shape_is_preserved():
    x = np.zeros((2, 3))
    assert activate(x, "sigmoid").shape == (2, 3)
    assert derivative(x, "tanh").shape == (2, 3)
