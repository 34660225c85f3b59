"""MNIST dataset read from IDX files, with a random fallback."""

from __future__ import annotations

import logging
import os
import struct
from pathlib import Path
from typing import Sequence

import numpy as np

from brainnlet.dataset import DataSample, Dataset
from brainnlet.tensor import Tensor

logger = logging.getLogger(__name__)

IMAGE_MAGIC = 0x00000803
LABEL_MAGIC = 0x00000801
IMAGE_SIDE = 28
IMAGE_PIXELS = IMAGE_SIDE * IMAGE_SIDE
NUM_CLASSES = 10
DUMMY_SAMPLES = 1000

TRAIN_IMAGES = "train-images.idx3-ubyte"
TRAIN_LABELS = "train-labels.idx1-ubyte"

_rng = np.random.default_rng()


def _read_u32(data: bytes, offset: int) -> int:
    if len(data) < offset + 4:
        raise ValueError("Error reading big-endian uint32")
    return struct.unpack_from(">I", data, offset)[0]


def read_images(path: str | os.PathLike[str]) -> list[bytes]:
    """Read an IDX3 image file of 28x28 images; one bytes object per image."""
    data = Path(path).read_bytes()
    if _read_u32(data, 0) != IMAGE_MAGIC:
        raise ValueError("Invalid MNIST image file magic number")
    count = _read_u32(data, 4)
    rows = _read_u32(data, 8)
    cols = _read_u32(data, 12)
    logger.info("MNIST Images: %d samples, %dx%d pixels", count, rows, cols)
    if rows != IMAGE_SIDE or cols != IMAGE_SIDE:
        raise ValueError("Expected 28x28 images")
    body = data[16:]
    if len(body) < count * IMAGE_PIXELS:
        raise ValueError("Error reading image data")
    return [body[i * IMAGE_PIXELS:(i + 1) * IMAGE_PIXELS] for i in range(count)]


def read_labels(path: str | os.PathLike[str]) -> bytes:
    """Read an IDX1 label file; one byte per label."""
    data = Path(path).read_bytes()
    if _read_u32(data, 0) != LABEL_MAGIC:
        raise ValueError("Invalid MNIST label file magic number")
    count = _read_u32(data, 4)
    logger.info("MNIST Labels: %d labels", count)
    body = data[8:]
    if len(body) < count:
        raise ValueError("Error reading label data")
    return body[:count]


def one_hot(label: int, num_classes: int) -> Tensor:
    """A 1 x num_classes row with a 1 at ``label``; all zeros if out of range."""
    encoded = Tensor.zeros(1, num_classes)
    if 0 <= label < num_classes:
        encoded[0, label] = 1.0
    return encoded


def normalize_image(pixels: Sequence[int] | bytes) -> Tensor:
    """Scale raw pixel bytes from [0, 255] to [0, 1] as a single row."""
    array = np.frombuffer(bytes(pixels), dtype=np.uint8).astype(float) / 255.0
    return Tensor(array.reshape(1, -1))


class MnistDataset(Dataset):
    """Handwritten digits: 784 pixel features and 10 one-hot classes."""

    search_paths: tuple[str, ...] = (
        "src/core/data/MNIST",
        "../src/core/data/MNIST",
        "../../src/core/data/MNIST",
    )

    def __init__(self) -> None:
        super().__init__()

    def load(self, path: str) -> bool:
        """Load from ``path``, else a default directory, else random data."""
        if path and os.path.exists(path):
            return self.load_train_test_split(path, 1.0)
        for directory in self.search_paths:
            if os.path.exists(directory):
                logger.info("Loading MNIST dataset from: %s", directory)
                return self.load_train_test_split(directory, 1.0)
        logger.info("MNIST files not found, using dummy data for testing")
        self._create_dummy_data()
        self._loaded = True
        return True

    def __len__(self) -> int:
        return len(self._samples)

    def get(self, index: int) -> DataSample:
        if not self._loaded:
            raise RuntimeError("Dataset not loaded")
        if not 0 <= index < len(self._samples):
            raise IndexError("Index out of range")
        return self._samples[index]

    @property
    def name(self) -> str:
        return "MNIST"

    @property
    def input_size(self) -> int:
        return IMAGE_PIXELS

    @property
    def output_size(self) -> int:
        return NUM_CLASSES

    def load_train_test_split(self, mnist_dir: str, train_ratio: float = 0.8) -> bool:
        """Load the training files, shuffle, and keep ``train_ratio`` of them.

        On failure random data is used instead and False is returned.
        """
        directory = Path(mnist_dir)
        try:
            images = read_images(directory / TRAIN_IMAGES)
            labels = read_labels(directory / TRAIN_LABELS)
            if len(images) != len(labels):
                raise ValueError("Mismatch between number of images and labels")
        except (OSError, ValueError) as error:
            logger.error("Error loading MNIST data: %s", error)
            self._create_dummy_data()
            self._loaded = True
            return False

        logger.info("Loaded %d MNIST training samples", len(images))
        samples = [
            DataSample(normalize_image(image), one_hot(label, NUM_CLASSES))
            for image, label in zip(images, labels)
        ]
        _rng.shuffle(samples)
        if train_ratio < 1.0:
            keep = int(len(samples) * train_ratio)
            samples = samples[:keep]
            logger.info("Using %d samples (ratio: %s)", keep, train_ratio)
        self._samples = samples
        self._loaded = True
        return True

    def create_validation_split(self, validation_ratio: float = 0.2) -> None:
        """Shuffle the loaded samples ahead of a validation split."""
        if not self._loaded or not self._samples:
            raise RuntimeError("Dataset must be loaded before creating validation split")
        _rng.shuffle(self._samples)
        logger.info("Dataset shuffled for validation split (ratio: %s)", validation_ratio)

    def _create_dummy_data(self) -> None:
        pixels = _rng.uniform(0.0, 1.0, size=(DUMMY_SAMPLES, IMAGE_PIXELS))
        labels = _rng.integers(0, NUM_CLASSES, size=DUMMY_SAMPLES)
        self._samples = [
            DataSample(Tensor(row.reshape(1, -1)), one_hot(int(label), NUM_CLASSES))
            for row, label in zip(pixels, labels)
        ]