# brainnlet

brainnlet is a small, readable neural network library for learning how
feed-forward networks work. It is built on numpy and provides:

- `brainnlet.tensor.Tensor`: a 2-D matrix of floats. It supports the matrix
  product (`a @ b`), element-wise `+` and `-` for tensors of the same shape,
  and scaling with `*` and `/` by a number. Dividing by a number whose
  magnitude is below 1e-10 raises `ZeroDivisionError`, and mismatched shapes
  raise `ValueError`.
- `brainnlet.activations`: `ReLU`, `Sigmoid`, `Tanh` and `Linear`, the
  `ActivationType` enum, `create_activation`, `activation_from_string` and
  `activation_to_string`.
- `brainnlet.loss`: `MeanSquaredError`, `CrossEntropy` (it applies a softmax
  to raw scores) and `BinaryCrossEntropy`, the `LossType` enum,
  `create_loss`, `loss_from_string` and `loss_to_string`.
- `brainnlet.layer.Layer`, the abstract layer base class, and
  `brainnlet.dense_layer.DenseLayer`, a fully connected layer. Its gradients
  accumulate across `backward` calls until `zero_gradients` is called.
- `brainnlet.network.Network` and `LayerConfig`, for building a model layer
  by layer and training it with backpropagation.
- `brainnlet.dataset`: the abstract `Dataset` with batching
  (`get_batch`, `get_range`), statistics (`compute_mean`, `compute_std`,
  `normalize`), and the helpers `generate_indices`, `shuffle_indices` and
  `split_dataset`.
- `brainnlet.mnist.MnistDataset`, which reads the MNIST IDX training files,
  plus the functions `read_images`, `read_labels`, `one_hot` and
  `normalize_image`.
- `brainnlet.trainer.Trainer`, a mini-batch gradient-descent loop with a
  validation split, callbacks and a history of metrics, configured with
  `TrainingConfig` and reporting `TrainingMetrics`.

## Installation

```
pip install .
```

numpy is the only runtime dependency.

## Building and training a network

```python
import logging

from brainnlet.activations import ActivationType
from brainnlet.loss import LossType
from brainnlet.mnist import MnistDataset
from brainnlet.network import Network
from brainnlet.trainer import Trainer, TrainingConfig

logging.basicConfig(level=logging.INFO)

network = Network()
network.add_layer(128, ActivationType.RELU)
network.add_layer(64, ActivationType.RELU)
network.add_layer(10, ActivationType.LINEAR)
network.set_loss_function(LossType.CROSS_ENTROPY)
print(network.summary())

dataset = MnistDataset()
dataset.load("path/to/MNIST")   # holds train-images.idx3-ubyte and train-labels.idx1-ubyte

trainer = Trainer(network, dataset)
trainer.on_epoch_end = lambda epoch, train, val: print(epoch, train.loss, val.accuracy)
trainer.train(TrainingConfig(epochs=5, batch_size=64, learning_rate=0.01))

for metrics in trainer.training_history:
    print(metrics.epoch, metrics.loss, metrics.accuracy)
```

A new `Network` uses mean squared error as its loss until you choose
another one. The first layer takes its input size from the first batch
passed to `forward`. If that size differs from the layer's current input
size, the first layer is rebuilt with fresh weights. Every later layer takes
its input size from the layer before it.

`Trainer` reports its progress through the standard `logging` module, under
the logger `brainnlet.trainer` at INFO level. It can also call the optional
callback attributes `on_training_start`, `on_batch_end`, `on_epoch_end` and
`on_training_end`. Calling `stop()` ends a running `train` call after the
current batch.

### Where MNIST data comes from

`MnistDataset.load(path)` reads from `path` if it exists. Otherwise it tries
each directory in `MnistDataset.search_paths`, relative to the current
working directory. If neither gives any data, it fills the dataset with 1000
random samples. If the files are found but cannot be read, it also uses
random samples, and `load` returns `False`. The samples are shuffled after
loading. Pixels are scaled to [0, 1] and labels are one-hot rows of width 10.

## Working with tensors directly

```python
from brainnlet.tensor import Tensor

a = Tensor.from_list([1, 2, 3, 4], 2, 2)   # row-major input
b = Tensor.zeros(2, 2)
b.fill(1.0)
print((a @ b).to_list())                   # flattened in column-major order
print((a * 2).sum(), a.transpose()[0, 1])
```

## The console guide

Installing the package adds a `brainnlet` command. It opens a small
interactive menu with an overview of the library, its features and tips
for training:

```
brainnlet
```

Type a menu number and press Enter. Choose `0` to leave, or end the input.

## What this package does not do

There is no graphical explorer in this package. The console guide's menu
entry for it only prints a note. Training runs from Python code as shown
above; there is no command-line training tool, and trained models cannot be
saved to disk or loaded back.

## Running the tests

```
pip install .[test]
pytest
```