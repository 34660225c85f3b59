"""Dataset interface with batching, statistics and index utilities."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from brainnlet.tensor import Tensor

_STD_EPSILON = 1e-8
_shuffler = random.Random()


@dataclass
class DataSample:
    """One example: a 1 x N feature row and a 1 x K label row."""

    features: Tensor
    label: Tensor


class Dataset(ABC):
    """A collection of samples that can be loaded, batched and normalised."""

    def __init__(self) -> None:
        self._loaded = False
        self._samples: list[DataSample] = []
        self._mean: Tensor | None = None
        self._std: Tensor | None = None
        self._normalized = False

    @abstractmethod
    def load(self, path: str) -> bool:
        """Load the samples; returns whether the requested data was used."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of samples."""

    @abstractmethod
    def get(self, index: int) -> DataSample:
        """Return the sample at ``index``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the dataset."""

    @property
    @abstractmethod
    def input_size(self) -> int:
        """Number of features per sample."""

    @property
    @abstractmethod
    def output_size(self) -> int:
        """Width of each label row."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get_batch(self, indices: Sequence[int]) -> tuple[Tensor, Tensor]:
        """Stack the samples at ``indices`` into feature and label tensors."""
        if not indices:
            raise ValueError("Cannot create batch from empty indices")
        samples = [self.get(i) for i in indices]
        features = np.vstack([s.features.data[0] for s in samples])
        labels = np.vstack([s.label.data[0] for s in samples])
        return Tensor(features), Tensor(labels)

    def get_range(self, start: int, batch_size: int) -> tuple[Tensor, Tensor]:
        """Batch of up to ``batch_size`` consecutive samples starting at ``start``."""
        size = len(self)
        if not 0 <= start < size:
            raise IndexError("Start index out of range")
        end = min(start + batch_size, size)
        return self.get_batch(range(start, end))

    def _require_samples(self) -> np.ndarray:
        if not self._loaded or not self._samples:
            raise RuntimeError("Dataset not loaded or empty")
        return np.vstack([s.features.data[0] for s in self._samples])

    def compute_mean(self) -> Tensor:
        """Per-feature mean over all samples, as a 1 x N tensor."""
        features = self._require_samples()
        return Tensor(features.mean(axis=0, keepdims=True))

    def compute_std(self) -> Tensor:
        """Per-feature population standard deviation, as a 1 x N tensor."""
        features = self._require_samples()
        mean = features.mean(axis=0, keepdims=True)
        variance = ((features - mean) ** 2).mean(axis=0, keepdims=True)
        return Tensor(np.sqrt(variance))

    def normalize(self) -> None:
        """Standardise every feature in place; constant features are only centred."""
        self._require_samples()
        if self._normalized:
            return
        self._mean = self.compute_mean()
        self._std = self.compute_std()
        std = self._std.data
        divisor = np.where(std > _STD_EPSILON, std, 1.0)
        for sample in self._samples:
            sample.features = Tensor((sample.features.data - self._mean.data) / divisor)
        self._normalized = True


def generate_indices(size: int) -> list[int]:
    return list(range(size))


def shuffle_indices(indices: Sequence[int]) -> list[int]:
    """Return a shuffled copy of ``indices``."""
    shuffled = list(indices)
    _shuffler.shuffle(shuffled)
    return shuffled


def split_dataset(indices: Sequence[int], train_ratio: float) -> tuple[list[int], list[int]]:
    """Split into (train, validation) keeping order; train gets the leading part."""
    if not 0.0 <= train_ratio <= 1.0:
        raise ValueError("Train ratio must be between 0 and 1")
    train_size = int(len(indices) * train_ratio)
    return list(indices[:train_size]), list(indices[train_size:])