"""Mini-batch training loop with evaluation, history and callbacks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from brainnlet.dataset import Dataset, generate_indices, shuffle_indices, split_dataset
from brainnlet.network import Network
from brainnlet.tensor import Tensor

logger = logging.getLogger(__name__)


@dataclass
class TrainingMetrics:
    """Loss and accuracy measured at a given epoch and batch."""

    loss: float = 0.0
    accuracy: float = 0.0
    epoch: int = 0
    batch: int = 0


@dataclass
class TrainingConfig:
    """Hyper-parameters for a training run."""

    epochs: int = 10
    batch_size: int = 32
    learning_rate: float = 0.001
    validation_split: float = 0.2
    shuffle: bool = True
    print_every: int = 10


OnEpochEnd = Callable[[int, TrainingMetrics, TrainingMetrics], None]
OnBatchEnd = Callable[[int, TrainingMetrics], None]
OnTrainingStart = Callable[[int, int], None]
OnTrainingEnd = Callable[[list[TrainingMetrics]], None]


def _batches(indices: Sequence[int], batch_size: int) -> list[list[int]]:
    return [list(indices[start:start + batch_size]) for start in range(0, len(indices), batch_size)]


class Trainer:
    """Trains a network on a dataset and records per-epoch metrics.

    Optional callbacks are plain attributes: ``on_training_start``,
    ``on_batch_end``, ``on_epoch_end`` and ``on_training_end``.
    """

    def __init__(self, network: Network, dataset: Dataset) -> None:
        self.network = network
        self.dataset = dataset
        self._is_training = False
        self._should_stop = False
        self._training_history: list[TrainingMetrics] = []
        self._validation_history: list[TrainingMetrics] = []
        self.on_epoch_end: OnEpochEnd | None = None
        self.on_batch_end: OnBatchEnd | None = None
        self.on_training_start: OnTrainingStart | None = None
        self.on_training_end: OnTrainingEnd | None = None

    def train(self, config: TrainingConfig) -> None:
        """Run the configured number of epochs, or until ``stop`` is called."""
        if not self.dataset.is_loaded:
            raise RuntimeError("Dataset not loaded")
        if config.batch_size <= 0:
            raise ValueError("Batch size must be positive")

        self._is_training = True
        self._should_stop = False
        self._training_history = []
        self._validation_history = []

        try:
            all_indices = generate_indices(len(self.dataset))
            if config.shuffle:
                all_indices = shuffle_indices(all_indices)
            train_indices, val_indices = split_dataset(all_indices, 1.0 - config.validation_split)

            batches_per_epoch = -(-len(train_indices) // config.batch_size)
            if self.on_training_start:
                self.on_training_start(config.epochs, batches_per_epoch)

            for epoch in range(config.epochs):
                if self._should_stop:
                    break
                if config.shuffle:
                    train_indices = shuffle_indices(train_indices)

                self._train_epoch(train_indices, config, epoch)

                train_metrics = self.evaluate(train_indices, config.batch_size)
                train_metrics.epoch = epoch
                self._training_history.append(train_metrics)

                val_metrics = TrainingMetrics()
                if val_indices:
                    val_metrics = self.evaluate(val_indices, config.batch_size)
                    val_metrics.epoch = epoch
                    self._validation_history.append(val_metrics)

                if self.on_epoch_end:
                    self.on_epoch_end(epoch, train_metrics, val_metrics)

                message = (
                    f"Epoch {epoch + 1}/{config.epochs} - Loss: {train_metrics.loss:g}"
                    f" - Accuracy: {train_metrics.accuracy:g}"
                )
                if val_indices:
                    message += (
                        f" - Val Loss: {val_metrics.loss:g}"
                        f" - Val Accuracy: {val_metrics.accuracy:g}"
                    )
                logger.info(message)
        finally:
            self._is_training = False

        if self.on_training_end:
            self.on_training_end(self._training_history)

    def _train_epoch(self, train_indices: Sequence[int], config: TrainingConfig, epoch: int) -> None:
        self.network.set_training(True)
        batches = _batches(train_indices, config.batch_size)
        for batch_idx, batch_indices in enumerate(batches):
            if self._should_stop:
                break
            features, targets = self.dataset.get_batch(batch_indices)
            predictions = self.network.forward(features)
            loss = self.network.compute_loss(predictions, targets)
            accuracy = self.compute_accuracy(predictions, targets)

            self.network.zero_gradients()
            self.network.backward(self.network.compute_loss_gradient(predictions, targets))
            self.network.update_weights(config.learning_rate)

            metrics = TrainingMetrics(loss, accuracy, epoch, batch_idx)
            if self.on_batch_end:
                self.on_batch_end(batch_idx, metrics)

            if config.print_every > 0 and batch_idx % config.print_every == 0:
                logger.info(
                    "  Batch %d/%d - Loss: %g - Accuracy: %g",
                    batch_idx + 1,
                    len(batches),
                    loss,
                    accuracy,
                )

    def stop(self) -> None:
        """Ask a running ``train`` call to finish after the current batch."""
        self._should_stop = True

    def evaluate(self, indices: Sequence[int], batch_size: int = 32) -> TrainingMetrics:
        """Sample-weighted mean loss and accuracy over ``indices``."""
        if not indices:
            return TrainingMetrics()
        if batch_size <= 0:
            raise ValueError("Batch size must be positive")

        self.network.set_training(False)
        total_loss = 0.0
        total_accuracy = 0.0
        total_samples = 0
        for batch_indices in _batches(indices, batch_size):
            features, targets = self.dataset.get_batch(batch_indices)
            predictions = self.network.forward(features)
            count = len(batch_indices)
            total_loss += self.network.compute_loss(predictions, targets) * count
            total_accuracy += self.compute_accuracy(predictions, targets) * count
            total_samples += count

        return TrainingMetrics(total_loss / total_samples, total_accuracy / total_samples, 0, 0)

    def compute_accuracy(self, predictions: Tensor, targets: Tensor) -> float:
        """Fraction of rows whose argmax agrees; 0.0 when the shapes differ."""
        if predictions.shape != targets.shape or predictions.rows == 0:
            return 0.0
        predicted = np.argmax(predictions.data, axis=1)
        expected = np.argmax(targets.data, axis=1)
        return float(np.count_nonzero(predicted == expected)) / predictions.rows

    @property
    def training_history(self) -> list[TrainingMetrics]:
        return self._training_history

    @property
    def validation_history(self) -> list[TrainingMetrics]:
        return self._validation_history

    @property
    def is_training(self) -> bool:
        return self._is_training