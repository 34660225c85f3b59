"""Loss functions with their gradients with respect to the predictions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

import numpy as np

from brainnlet.tensor import Tensor

_LOG_EPSILON = 1e-15


class LossType(Enum):
    MEAN_SQUARED_ERROR = "MSE"
    CROSS_ENTROPY = "CrossEntropy"
    BINARY_CROSS_ENTROPY = "BinaryCrossEntropy"


def _check_shapes(predictions: Tensor, targets: Tensor) -> None:
    if predictions.shape != targets.shape:
        raise ValueError("Predictions and targets must have same dimensions")


class LossFunction(ABC):
    """A loss: forward gives its value, backward its gradient."""

    name: ClassVar[str]
    type: ClassVar[LossType]

    @abstractmethod
    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        """Loss value for a batch."""

    @abstractmethod
    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        """Gradient of the loss with respect to the predictions."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MeanSquaredError(LossFunction):
    name = "MSE"
    type = LossType.MEAN_SQUARED_ERROR

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        _check_shapes(predictions, targets)
        diff = predictions.data - targets.data
        return float(np.sum(diff * diff)) / predictions.size

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        _check_shapes(predictions, targets)
        scale = 2.0 / predictions.size
        return Tensor(scale * (predictions.data - targets.data))


class CrossEntropy(LossFunction):
    """Softmax cross-entropy computed from raw scores."""

    name = "CrossEntropy"
    type = LossType.CROSS_ENTROPY

    def softmax(self, values: Tensor) -> Tensor:
        """Row-wise softmax, shifted by each row's maximum for stability."""
        array = values.data
        exps = np.exp(array - array.max(axis=1, keepdims=True))
        return Tensor(exps / exps.sum(axis=1, keepdims=True))

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        _check_shapes(predictions, targets)
        probs = self.softmax(predictions).data
        t = targets.data
        mask = t > 0.0
        total = -float(np.sum(t[mask] * np.log(np.maximum(probs[mask], _LOG_EPSILON))))
        return total / predictions.rows

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        _check_shapes(predictions, targets)
        gradient = self.softmax(predictions) - targets
        gradient /= float(predictions.rows)
        return gradient


def _clip_probabilities(array: np.ndarray) -> np.ndarray:
    return np.clip(array, _LOG_EPSILON, 1.0 - _LOG_EPSILON)


class BinaryCrossEntropy(LossFunction):
    name = "BinaryCrossEntropy"
    type = LossType.BINARY_CROSS_ENTROPY

    def forward(self, predictions: Tensor, targets: Tensor) -> float:
        _check_shapes(predictions, targets)
        p = _clip_probabilities(predictions.data)
        t = targets.data
        total = -float(np.sum(t * np.log(p) + (1.0 - t) * np.log(1.0 - p)))
        return total / predictions.size

    def backward(self, predictions: Tensor, targets: Tensor) -> Tensor:
        _check_shapes(predictions, targets)
        p = _clip_probabilities(predictions.data)
        scale = 1.0 / predictions.size
        return Tensor(scale * (p - targets.data) / (p * (1.0 - p)))


_LOSSES: dict[LossType, type[LossFunction]] = {
    LossType.MEAN_SQUARED_ERROR: MeanSquaredError,
    LossType.CROSS_ENTROPY: CrossEntropy,
    LossType.BINARY_CROSS_ENTROPY: BinaryCrossEntropy,
}

_NAMES: dict[str, LossType] = {
    "MSE": LossType.MEAN_SQUARED_ERROR,
    "mse": LossType.MEAN_SQUARED_ERROR,
    "CrossEntropy": LossType.CROSS_ENTROPY,
    "crossentropy": LossType.CROSS_ENTROPY,
    "BinaryCrossEntropy": LossType.BINARY_CROSS_ENTROPY,
    "bce": LossType.BINARY_CROSS_ENTROPY,
}


def create_loss(kind: LossType) -> LossFunction:
    """Instantiate the loss function of the given type."""
    try:
        return _LOSSES[kind]()
    except (KeyError, TypeError):
        raise ValueError("Unknown loss type") from None


def loss_from_string(name: str) -> LossType:
    try:
        return _NAMES[name]
    except KeyError:
        raise ValueError(f"Unknown loss function: {name}") from None


def loss_to_string(kind: LossType) -> str:
    return kind.value if isinstance(kind, LossType) else "Unknown"