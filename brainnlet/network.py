"""Sequential network of dense layers with a loss function."""

from __future__ import annotations

from dataclasses import dataclass

from brainnlet.activations import ActivationType
from brainnlet.dense_layer import DenseLayer
from brainnlet.layer import Layer
from brainnlet.loss import LossFunction, LossType, create_loss
from brainnlet.tensor import Tensor


@dataclass(frozen=True)
class LayerConfig:
    """Description of a dense layer to append to a network."""

    neurons: int
    activation: ActivationType = ActivationType.RELU


class Network:
    """A stack of layers trained with a single loss function.

    The first layer's input size is fixed on the first forward pass: when it
    does not match the data, that layer is rebuilt with fresh weights.
    """

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._loss: LossFunction | None = create_loss(LossType.MEAN_SQUARED_ERROR)
        self._training = True

    def add_layer(
        self,
        neurons: int | LayerConfig,
        activation: ActivationType = ActivationType.RELU,
    ) -> None:
        """Append a dense layer, given a neuron count or a LayerConfig."""
        config = neurons if isinstance(neurons, LayerConfig) else LayerConfig(neurons, activation)
        if config.neurons <= 0:
            raise ValueError("Layer must have at least 1 neuron")
        input_size = self._layers[-1].output_size if self._layers else config.neurons
        self._layers.append(DenseLayer(input_size, config.neurons, config.activation))

    def remove_layer(self, index: int = -1) -> None:
        """Remove the layer at ``index``; -1 removes the last one."""
        if not self._layers:
            raise RuntimeError("Cannot remove layer from empty network")
        if index == -1:
            self._layers.pop()
            return
        if not 0 <= index < len(self._layers):
            raise IndexError("Layer index out of range")
        del self._layers[index]

    def clear(self) -> None:
        self._layers.clear()

    def forward(self, values: Tensor) -> Tensor:
        if not self._layers:
            raise RuntimeError("Cannot forward through empty network")
        first = self._layers[0]
        if first.input_size != values.cols and isinstance(first, DenseLayer):
            self._layers[0] = DenseLayer(values.cols, first.output_size, first.activation_type)
        output = values
        for layer in self._layers:
            output = layer.forward(output)
        return output

    def backward(self, loss_gradient: Tensor) -> Tensor:
        if not self._layers:
            raise RuntimeError("Cannot backward through empty network")
        gradient = loss_gradient
        for layer in reversed(self._layers):
            gradient = layer.backward(gradient)
        return gradient

    def set_loss_function(self, loss_type: LossType) -> None:
        self._loss = create_loss(loss_type)

    @property
    def loss_function(self) -> LossFunction | None:
        return self._loss

    def _require_loss(self) -> LossFunction:
        if self._loss is None:
            raise RuntimeError("No loss function set")
        return self._loss

    def compute_loss(self, predictions: Tensor, targets: Tensor) -> float:
        return self._require_loss().forward(predictions, targets)

    def compute_loss_gradient(self, predictions: Tensor, targets: Tensor) -> Tensor:
        return self._require_loss().backward(predictions, targets)

    def update_weights(self, learning_rate: float) -> None:
        for layer in self._layers:
            layer.update_weights(learning_rate)

    def zero_gradients(self) -> None:
        for layer in self._layers:
            layer.zero_gradients()

    @property
    def layer_count(self) -> int:
        return len(self._layers)

    @property
    def parameter_count(self) -> int:
        return sum(layer.parameter_count for layer in self._layers)

    def summary(self) -> str:
        lines = ["Network Summary:", "================"]
        if not self._layers:
            lines.append("Empty network")
            return "\n".join(lines) + "\n"
        for i, layer in enumerate(self._layers):
            lines.append(f"Layer {i}: {layer.name}")
            lines.append(f"  Parameters: {layer.parameter_count}")
        lines.append("================")
        lines.append(f"Total parameters: {self.parameter_count}")
        lines.append(f"Loss function: {self._loss.name if self._loss else 'None'}")
        return "\n".join(lines) + "\n"

    def layer(self, index: int) -> Layer:
        if not 0 <= index < len(self._layers):
            raise IndexError("Layer index out of range")
        return self._layers[index]

    def is_valid(self) -> bool:
        try:
            self._validate()
        except RuntimeError:
            return False
        return True

    def validation_error(self) -> str:
        """The reason the network is invalid, or an empty string."""
        try:
            self._validate()
        except RuntimeError as error:
            return str(error)
        return ""

    def set_training(self, training: bool) -> None:
        self._training = training
        for layer in self._layers:
            layer.training = training

    @property
    def training(self) -> bool:
        return self._training

    def _validate(self) -> None:
        if not self._layers:
            raise RuntimeError("Network has no layers")
        for i, (prev, curr) in enumerate(zip(self._layers, self._layers[1:]), start=1):
            if prev.output_size != curr.input_size:
                raise RuntimeError(
                    f"Layer {i - 1} output size ({prev.output_size}) doesn't match "
                    f"layer {i} input size ({curr.input_size})"
                )
        if self._loss is None:
            raise RuntimeError("No loss function set")