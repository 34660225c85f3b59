import math

import numpy as np
import pytest

from brainnlet.activations import ActivationType
from brainnlet.dense_layer import DenseLayer
from brainnlet.tensor import Tensor


def _numeric_gradient(func, array, eps=1e-6):
    grad = np.zeros_like(array)
    for idx in np.ndindex(array.shape):
        plus = array.copy()
        minus = array.copy()
        plus[idx] += eps
        minus[idx] -= eps
        grad[idx] = (func(plus) - func(minus)) / (2 * eps)
    return grad


def _layer(activation=ActivationType.TANH):
    layer = DenseLayer(3, 2, activation)
    layer.weights = Tensor([[0.1, -0.2], [0.3, 0.4], [-0.5, 0.6]])
    layer.biases = Tensor([[0.05, -0.1]])
    return layer


def test_name_format():
    assert DenseLayer(3, 2).name == "Dense(3->2, ReLU)"


def test_shapes_and_parameter_count():
    layer = DenseLayer(4, 3, ActivationType.SIGMOID)
    assert layer.weights.shape == (4, 3)
    assert layer.biases.shape == (1, 3)
    assert layer.parameter_count == layer.weights.size + layer.biases.size
    assert layer.has_parameters is True
    assert layer.activation_type is ActivationType.SIGMOID
    assert layer.activation.name == "Sigmoid"


def test_initial_biases_and_gradients_zero():
    layer = DenseLayer(5, 4)
    assert layer.biases.sum() == 0.0
    assert layer.weight_gradients.norm() == 0.0
    assert layer.bias_gradients.norm() == 0.0


def test_xavier_init_within_limit():
    layer = DenseLayer(10, 6)
    limit = math.sqrt(6.0 / 16)
    first = layer.weights.data.copy()
    assert np.abs(first).max() <= limit
    assert layer.weights.norm() > 0.0
    layer.xavier_init()
    second = layer.weights.data
    assert second.shape == (10, 6)
    assert np.abs(second).max() <= limit
    assert not np.allclose(first, second)


def test_he_init_changes_weights():
    layer = DenseLayer(50, 40)
    before = layer.weights.data.copy()
    layer.he_init()
    assert not np.allclose(layer.weights.data, before)
    assert layer.weights.shape == (50, 40)


def test_linear_identity_passes_input_through():
    layer = DenseLayer(2, 2, ActivationType.LINEAR)
    layer.weights = Tensor([[1.0, 0.0], [0.0, 1.0]])
    x = Tensor([[3.0, -4.0], [0.5, 2.0]])
    np.testing.assert_allclose(layer.forward(x).data, x.data)


def test_relu_output_non_negative():
    layer = DenseLayer(4, 5)
    x = Tensor(np.linspace(-3, 3, 12).reshape(3, 4))
    assert np.all(layer.forward(x).data >= 0.0)


def test_forward_rejects_wrong_input_size():
    with pytest.raises(ValueError):
        DenseLayer(3, 2).forward(Tensor.zeros(1, 4))


def test_backward_rejects_wrong_gradient_size():
    layer = _layer()
    layer.forward(Tensor.zeros(1, 3))
    with pytest.raises(ValueError):
        layer.backward(Tensor.zeros(1, 3))


def test_backward_before_forward_raises():
    with pytest.raises(RuntimeError):
        DenseLayer(3, 2).backward(Tensor.zeros(1, 2))


def test_set_weights_and_biases_validate_shape():
    layer = DenseLayer(3, 2)
    with pytest.raises(ValueError):
        layer.weights = Tensor.zeros(2, 3)
    with pytest.raises(ValueError):
        layer.biases = Tensor.zeros(2, 2)


def test_input_gradient_matches_numeric():
    layer = _layer()
    x = np.array([[0.2, -0.7, 1.1], [-0.3, 0.4, 0.9]])
    upstream = np.array([[1.0, -2.0], [0.5, 0.25]])

    def objective(array):
        return float(np.sum(layer.forward(Tensor(array)).data * upstream))

    expected = _numeric_gradient(objective, x)
    layer.forward(Tensor(x))
    got = layer.backward(Tensor(upstream))
    np.testing.assert_allclose(got.data, expected, rtol=1e-5, atol=1e-7)


def test_weight_and_bias_gradients_match_numeric():
    layer = _layer(ActivationType.SIGMOID)
    x = Tensor([[0.2, -0.7, 1.1], [-0.3, 0.4, 0.9]])
    upstream = np.array([[1.0, -2.0], [0.5, 0.25]])
    weights = layer.weights.data.copy()
    biases = layer.biases.data.copy()

    def weight_objective(array):
        layer.weights = Tensor(array)
        return float(np.sum(layer.forward(x).data * upstream))

    def bias_objective(array):
        layer.biases = Tensor(array)
        return float(np.sum(layer.forward(x).data * upstream))

    expected_w = _numeric_gradient(weight_objective, weights)
    layer.weights = Tensor(weights)
    expected_b = _numeric_gradient(bias_objective, biases)
    layer.biases = Tensor(biases)

    layer.forward(x)
    layer.backward(Tensor(upstream))
    np.testing.assert_allclose(layer.weight_gradients.data, expected_w, rtol=1e-5, atol=1e-7)
    np.testing.assert_allclose(layer.bias_gradients.data, expected_b, rtol=1e-5, atol=1e-7)


def test_gradients_accumulate_and_zero():
    layer = _layer()
    x = Tensor([[0.2, -0.7, 1.1]])
    g = Tensor([[1.0, 1.0]])
    layer.forward(x)
    layer.backward(g)
    once = layer.weight_gradients.data.copy()
    once_b = layer.bias_gradients.data.copy()
    layer.backward(g)
    np.testing.assert_allclose(layer.weight_gradients.data, 2 * once)
    np.testing.assert_allclose(layer.bias_gradients.data, 2 * once_b)
    layer.zero_gradients()
    assert layer.weight_gradients.norm() == 0.0
    assert layer.bias_gradients.norm() == 0.0


def test_update_weights_steps_against_gradient():
    layer = _layer()
    x = Tensor([[0.2, -0.7, 1.1]])
    layer.forward(x)
    layer.backward(Tensor([[1.0, -1.0]]))
    w_before = layer.weights.data.copy()
    b_before = layer.biases.data.copy()
    grad_w = layer.weight_gradients.data.copy()
    grad_b = layer.bias_gradients.data.copy()
    layer.update_weights(0.1)
    np.testing.assert_allclose(layer.weights.data, w_before - 0.1 * grad_w)
    np.testing.assert_allclose(layer.biases.data, b_before - 0.1 * grad_b)