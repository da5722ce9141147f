"""Activation functions and their derivatives for nodenet."""

from __future__ import annotations

from enum import Enum
from typing import Union

import numpy as np

from .types import Array, ConfigurationError

LEAKY_SLOPE = 0.01

Scalar = Union[float, int]


class ActivationKind(Enum):
    """Nonlinearity applied to a node's weighted sum."""

    STEP = "step"
    RELU = "relu"
    LEAKY_RELU = "leaky_relu"
    SIGMOID = "sigmoid"
    TANH = "tanh"

    @classmethod
    def parse(cls, value: "ActivationKind | str") -> "ActivationKind":
        """Return the member named by ``value`` (case-insensitive)."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            for member in cls:
                if member.value == key:
                    return member
        raise ConfigurationError(f"Unknown activation kind: {value!r}")


def _sigmoid(x: Array) -> Array:
    # Split on sign so that exp never sees a large positive argument.
    out = np.empty_like(x)
    pos = x >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
    ex = np.exp(x[~pos])
    out[~pos] = ex / (1.0 + ex)
    return out


def _activate(x: Array, kind: ActivationKind) -> Array:
    if kind is ActivationKind.STEP:
        return np.where(x > 0.0, 1.0, 0.0)
    if kind is ActivationKind.RELU:
        return np.where(x > 0.0, x, 0.0)
    if kind is ActivationKind.LEAKY_RELU:
        return np.where(x > 0.0, x, LEAKY_SLOPE * x)
    if kind is ActivationKind.SIGMOID:
        return _sigmoid(x)
    if kind is ActivationKind.TANH:
        return np.tanh(x)
    raise ConfigurationError(f"Unknown activation kind: {kind!r}")


def _derivative(a: Array, kind: ActivationKind) -> Array:
    if kind is ActivationKind.STEP:
        return np.zeros_like(a)
    if kind is ActivationKind.RELU:
        return np.where(a > 0.0, 1.0, 0.0)
    if kind is ActivationKind.LEAKY_RELU:
        return np.where(a > 0.0, 1.0, LEAKY_SLOPE)
    if kind is ActivationKind.SIGMOID:
        return a * (1.0 - a)
    if kind is ActivationKind.TANH:
        return 1.0 - a * a
    raise ConfigurationError(f"Unknown activation kind: {kind!r}")


def _coerce_kind(kind: object) -> ActivationKind:
    if isinstance(kind, ActivationKind):
        return kind
    return ActivationKind.parse(kind)  # type: ignore[arg-type]


def activate(x: Scalar | Array, kind: ActivationKind | str) -> float | Array:
    """Map the pre-activation ``x`` to an activation value.

    Scalars return a ``float``; arrays are evaluated element-wise.
    """

    kind = _coerce_kind(kind)
    arr = np.asarray(x, dtype=np.float64)
    out = _activate(np.atleast_1d(arr), kind)
    if arr.ndim == 0:
        return float(out[0])
    return out.reshape(arr.shape)


def derivative(a: Scalar | Array, kind: ActivationKind | str) -> float | Array:
    """Return the activation derivative evaluated on the activation ``a``.

    SIGMOID and TANH use their closed-form identities ``a * (1 - a)`` and
    ``1 - a**2``. RELU, LEAKY_RELU and STEP branch on the sign of ``a``,
    which matches the sign of the pre-activation for these kinds.
    """

    kind = _coerce_kind(kind)
    arr = np.asarray(a, dtype=np.float64)
    out = _derivative(np.atleast_1d(arr), kind)
    if arr.ndim == 0:
        return float(out[0])
    return out.reshape(arr.shape)


__all__ = ["ActivationKind", "LEAKY_SLOPE", "activate", "derivative"]
