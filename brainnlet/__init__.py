"""Educational neural network library: tensors, activations, losses, dense layers, networks, MNIST loading, training and a console guide."""

__version__ = "1.0.0"