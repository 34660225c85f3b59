"""Element-wise activation functions and their derivatives."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

import numpy as np

from brainnlet.tensor import Tensor

_SIGMOID_CLIP = 500.0


class ActivationType(Enum):
    RELU = "ReLU"
    SIGMOID = "Sigmoid"
    TANH = "Tanh"
    LINEAR = "Linear"


class ActivationFunction(ABC):
    """An activation: forward applies it, backward gives its derivative."""

    name: ClassVar[str]
    type: ClassVar[ActivationType]

    @abstractmethod
    def forward(self, values: Tensor) -> Tensor:
        """Apply the activation element-wise."""

    @abstractmethod
    def backward(self, values: Tensor) -> Tensor:
        """Derivative of the activation evaluated at the given pre-activations."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ReLU(ActivationFunction):
    name = "ReLU"
    type = ActivationType.RELU

    def forward(self, values: Tensor) -> Tensor:
        return Tensor(np.maximum(values.data, 0.0))

    def backward(self, values: Tensor) -> Tensor:
        return Tensor((values.data > 0.0).astype(float))


def _sigmoid(array: np.ndarray) -> np.ndarray:
    clipped = np.clip(array, -_SIGMOID_CLIP, _SIGMOID_CLIP)
    return 1.0 / (1.0 + np.exp(-clipped))


class Sigmoid(ActivationFunction):
    name = "Sigmoid"
    type = ActivationType.SIGMOID

    def forward(self, values: Tensor) -> Tensor:
        return Tensor(_sigmoid(values.data))

    def backward(self, values: Tensor) -> Tensor:
        s = _sigmoid(values.data)
        return Tensor(s * (1.0 - s))


class Tanh(ActivationFunction):
    name = "Tanh"
    type = ActivationType.TANH

    def forward(self, values: Tensor) -> Tensor:
        return Tensor(np.tanh(values.data))

    def backward(self, values: Tensor) -> Tensor:
        t = np.tanh(values.data)
        return Tensor(1.0 - t * t)


class Linear(ActivationFunction):
    name = "Linear"
    type = ActivationType.LINEAR

    def forward(self, values: Tensor) -> Tensor:
        return Tensor(values.data)

    def backward(self, values: Tensor) -> Tensor:
        return Tensor(np.ones_like(values.data))


_ACTIVATIONS: dict[ActivationType, type[ActivationFunction]] = {
    ActivationType.RELU: ReLU,
    ActivationType.SIGMOID: Sigmoid,
    ActivationType.TANH: Tanh,
    ActivationType.LINEAR: Linear,
}

_NAMES: dict[str, ActivationType] = {
    "ReLU": ActivationType.RELU,
    "relu": ActivationType.RELU,
    "Sigmoid": ActivationType.SIGMOID,
    "sigmoid": ActivationType.SIGMOID,
    "Tanh": ActivationType.TANH,
    "tanh": ActivationType.TANH,
    "Linear": ActivationType.LINEAR,
    "linear": ActivationType.LINEAR,
}


def create_activation(kind: ActivationType) -> ActivationFunction:
    """Instantiate the activation function of the given type."""
    try:
        return _ACTIVATIONS[kind]()
    except (KeyError, TypeError):
        raise ValueError("Unknown activation type") from None


def activation_from_string(name: str) -> ActivationType:
    try:
        return _NAMES[name]
    except KeyError:
        raise ValueError(f"Unknown activation function: {name}") from None


def activation_to_string(kind: ActivationType) -> str:
    return kind.value if isinstance(kind, ActivationType) else "Unknown"