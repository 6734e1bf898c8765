"""
Brain: a fixed-topology feed-forward network with ReLU neurons.

Weights travel between networks as one flat vector, laid out layer by layer,
neuron by neuron, as [bias, w0, w1, ...]. The same topology must be used to
encode and decode; decoding validates the vector length against it.
"""
from dataclasses import dataclass
from typing import List, Sequence
import numpy as np

from .errors import ConfigurationError, DimensionMismatch


def _check_topology(topology: Sequence[int]) -> List[int]:
    sizes = [int(n) for n in topology]
    if len(sizes) < 2:
        raise ConfigurationError(f"network needs at least 2 layers, got {len(sizes)}")
    if any(n <= 0 for n in sizes):
        raise ConfigurationError(f"every layer needs at least one neuron, got {sizes}")
    return sizes


def weights_count(topology: Sequence[int]) -> int:
    """Number of genes a network of this topology encodes to."""
    sizes = _check_topology(topology)
    return sum((n_in + 1) * n_out for n_in, n_out in zip(sizes[:-1], sizes[1:]))


@dataclass(eq=False)
class Layer:
    # one row per neuron
    biases: np.ndarray
    weights: np.ndarray

    @property
    def inputs(self) -> int:
        return self.weights.shape[1]

    @property
    def neurons(self) -> int:
        return self.weights.shape[0]

    @classmethod
    def random(cls, inputs: int, neurons: int, rng: np.random.Generator) -> "Layer":
        # bias first, then weights, per neuron; signed so ReLU brains can steer both ways
        params = rng.uniform(-1.0, 1.0, size=(neurons, inputs + 1))
        return cls(biases=params[:, 0].copy(), weights=params[:, 1:].copy())

    def propagate(self, inputs: np.ndarray) -> np.ndarray:
        if inputs.shape[0] != self.inputs:
            raise DimensionMismatch(
                f"layer expects {self.inputs} inputs, got {inputs.shape[0]}"
            )
        return np.maximum(self.weights @ inputs + self.biases, 0.0)

    def flat(self) -> np.ndarray:
        return np.hstack([self.biases[:, None], self.weights]).ravel()


class NeuralNetwork:
    def __init__(self, layers: List[Layer]):
        self.layers = layers

    @property
    def topology(self) -> List[int]:
        return [self.layers[0].inputs] + [layer.neurons for layer in self.layers]

    @classmethod
    def random(cls, topology: Sequence[int], rng: np.random.Generator) -> "NeuralNetwork":
        sizes = _check_topology(topology)
        return cls([Layer.random(n_in, n_out, rng) for n_in, n_out in zip(sizes[:-1], sizes[1:])])

    @classmethod
    def from_weights(cls, topology: Sequence[int], weights: Sequence[float]) -> "NeuralNetwork":
        """Rebuild a network from the flat vector produced by `weights()`."""
        sizes = _check_topology(topology)
        flat = np.asarray(weights, dtype=np.float64).ravel()
        expected = weights_count(sizes)
        if flat.shape[0] != expected:
            raise DimensionMismatch(
                f"topology {sizes} needs {expected} weights, got {flat.shape[0]}"
            )

        layers: List[Layer] = []
        offset = 0
        for n_in, n_out in zip(sizes[:-1], sizes[1:]):
            size = (n_in + 1) * n_out
            params = flat[offset:offset + size].reshape(n_out, n_in + 1)
            layers.append(Layer(biases=params[:, 0].copy(), weights=params[:, 1:].copy()))
            offset += size
        return cls(layers)

    def propagate(self, inputs: Sequence[float]) -> np.ndarray:
        acts = np.asarray(inputs, dtype=np.float64)
        if acts.ndim != 1:
            raise DimensionMismatch(f"expected a flat input vector, got shape {acts.shape}")
        for layer in self.layers:
            acts = layer.propagate(acts)
        return acts

    def weights(self) -> np.ndarray:
        return np.concatenate([layer.flat() for layer in self.layers])
