"""Fully connected layer with a configurable activation."""

from __future__ import annotations

import math

import numpy as np

from brainnlet.activations import ActivationFunction, ActivationType, create_activation
from brainnlet.layer import Layer
from brainnlet.tensor import Tensor

_rng = np.random.default_rng()


class DenseLayer(Layer):
    """Computes ``activation(x @ W + b)``; gradients accumulate until zeroed."""

    def __init__(
        self,
        input_size: int,
        output_size: int,
        activation: ActivationType = ActivationType.RELU,
    ) -> None:
        super().__init__()
        if input_size <= 0 or output_size <= 0:
            raise ValueError("Layer sizes must be positive")
        self._input_size = input_size
        self._output_size = output_size
        self._weights = Tensor.zeros(input_size, output_size)
        self._biases = Tensor.zeros(1, output_size)
        self._weight_gradients = Tensor.zeros(input_size, output_size)
        self._bias_gradients = Tensor.zeros(1, output_size)
        self._activation = create_activation(activation)
        self._last_input: Tensor | None = None
        self._last_linear_output: Tensor | None = None
        self.xavier_init()

    def forward(self, values: Tensor) -> Tensor:
        if values.cols != self._input_size:
            raise ValueError("Input size mismatch in DenseLayer")
        self._last_input = Tensor(values.data)
        linear = values @ self._weights
        self._last_linear_output = Tensor(linear.data + self._biases.data)
        return self._activation.forward(self._last_linear_output)

    def backward(self, gradient: Tensor) -> Tensor:
        if gradient.cols != self._output_size:
            raise ValueError("Gradient size mismatch in DenseLayer")
        if self._last_input is None or self._last_linear_output is None:
            raise RuntimeError("backward called before forward")
        activation_grad = self._activation.backward(self._last_linear_output)
        if gradient.rows != activation_grad.rows:
            raise ValueError("Gradient batch size doesn't match the last forward pass")
        linear_grad = Tensor(gradient.data * activation_grad.data)
        self._weight_gradients += self._last_input.transpose() @ linear_grad
        self._bias_gradients += Tensor(linear_grad.data.sum(axis=0, keepdims=True))
        return linear_grad @ self._weights.transpose()

    def update_weights(self, learning_rate: float) -> None:
        self._weights -= self._weight_gradients * learning_rate
        self._biases -= self._bias_gradients * learning_rate

    def zero_gradients(self) -> None:
        self._weight_gradients.zero()
        self._bias_gradients.zero()

    @property
    def name(self) -> str:
        return f"Dense({self._input_size}->{self._output_size}, {self._activation.name})"

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self._output_size

    @property
    def has_parameters(self) -> bool:
        return True

    @property
    def parameter_count(self) -> int:
        return self._input_size * self._output_size + self._output_size

    @property
    def weights(self) -> Tensor:
        """Weight matrix of shape (input_size, output_size)."""
        return self._weights

    @weights.setter
    def weights(self, value: Tensor) -> None:
        if value.shape != (self._input_size, self._output_size):
            raise ValueError("Weight dimensions don't match layer size")
        self._weights = Tensor(value.data)

    @property
    def biases(self) -> Tensor:
        """Bias row of shape (1, output_size)."""
        return self._biases

    @biases.setter
    def biases(self, value: Tensor) -> None:
        if value.shape != (1, self._output_size):
            raise ValueError("Bias dimensions don't match layer size")
        self._biases = Tensor(value.data)

    @property
    def weight_gradients(self) -> Tensor:
        return self._weight_gradients

    @property
    def bias_gradients(self) -> Tensor:
        return self._bias_gradients

    @property
    def activation(self) -> ActivationFunction:
        return self._activation

    @property
    def activation_type(self) -> ActivationType:
        return self._activation.type

    def xavier_init(self) -> None:
        """Draw weights uniformly from +/- sqrt(6 / (fan_in + fan_out))."""
        limit = math.sqrt(6.0 / (self._input_size + self._output_size))
        self._weights.random(-limit, limit)

    def he_init(self) -> None:
        """Draw weights from a normal distribution with std sqrt(2 / fan_in)."""
        std_dev = math.sqrt(2.0 / self._input_size)
        self._weights.data[...] = _rng.normal(0.0, std_dev, size=self._weights.shape)