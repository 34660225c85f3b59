"""Abstract base class for network layers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from brainnlet.tensor import Tensor


class Layer(ABC):
    """A differentiable stage of a network.

    Subclasses implement the forward and backward passes and describe their
    shape; layers without trainable parameters can keep the default no-op
    update and gradient handling.
    """

    def __init__(self) -> None:
        self.training = True

    @abstractmethod
    def forward(self, values: Tensor) -> Tensor:
        """Compute the layer's output for a batch of inputs."""

    @abstractmethod
    def backward(self, gradient: Tensor) -> Tensor:
        """Propagate the gradient of the loss back to the layer's input."""

    def update_weights(self, learning_rate: float) -> None:
        """Apply accumulated gradients; nothing to do for parameterless layers."""

    def zero_gradients(self) -> None:
        """Reset accumulated gradients; nothing to do for parameterless layers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable description of the layer."""

    @property
    @abstractmethod
    def input_size(self) -> int:
        """Number of input features."""

    @property
    @abstractmethod
    def output_size(self) -> int:
        """Number of output features."""

    @property
    def has_parameters(self) -> bool:
        return False

    @property
    def parameter_count(self) -> int:
        return 0

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"