"""
Exploration policies - action selection over raw actor outputs

Each tick the actor sub-network computes its buffers, the values are
collected into a list and handed to select_action(), which rewrites the
list in place. The rewritten list is what gets committed as the new
actor activations.

Policies:
- RandomExplorationPolicy: pure exploration, ignores the values
- GreedyPolicy: one-hot on the largest value (deterministic)
- EpsilonGreedyPolicy: greedy with probability 1 - epsilon, random otherwise
- SoftmaxPolicy: Boltzmann sampling with a temperature
"""

from abc import ABC, abstractmethod
from typing import List, MutableSequence, Union

import numpy as np

RandomSource = Union[None, int, np.random.Generator]


def _make_rng(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _one_hot(values: MutableSequence[float], index: int):
    for i in range(len(values)):
        values[i] = 1.0 if i == index else 0.0


class ExplorationPolicy(ABC):
    """Single-method strategy: mutate `values` to encode the chosen action."""

    @abstractmethod
    def select_action(self, values: MutableSequence[float]) -> None:
        ...


class RandomExplorationPolicy(ExplorationPolicy):
    """Pick one index uniformly at random, set it to 1.0 and the rest to 0.0."""

    def __init__(self, rng: RandomSource = None):
        self.rng = _make_rng(rng)

    def select_action(self, values: MutableSequence[float]) -> None:
        if len(values) == 0:
            return
        _one_hot(values, int(self.rng.integers(len(values))))


class GreedyPolicy(ExplorationPolicy):
    """One-hot on the largest value; ties go to the lowest index."""

    def select_action(self, values: MutableSequence[float]) -> None:
        if len(values) == 0:
            return
        _one_hot(values, int(np.argmax(values)))


class EpsilonGreedyPolicy(ExplorationPolicy):
    def __init__(self, epsilon: float = 0.1, rng: RandomSource = None):
        if not 0.0 <= epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {epsilon}")
        self.epsilon = epsilon
        self.rng = _make_rng(rng)

    def select_action(self, values: MutableSequence[float]) -> None:
        if len(values) == 0:
            return
        if self.rng.random() < self.epsilon:
            index = int(self.rng.integers(len(values)))
        else:
            index = int(np.argmax(values))
        _one_hot(values, index)


class SoftmaxPolicy(ExplorationPolicy):
    """
    Boltzmann exploration.

    P(a) = exp(v_a / T) / sum_b exp(v_b / T)

    Low temperature approaches greedy, high temperature approaches uniform.
    """

    def __init__(self, temperature: float = 1.0, rng: RandomSource = None):
        if temperature <= 0:
            raise ValueError(f"temperature must be positive, got {temperature}")
        self.temperature = temperature
        self.rng = _make_rng(rng)

    def probabilities(self, values: List[float]) -> np.ndarray:
        logits = np.asarray(values, dtype=float) / self.temperature
        logits -= logits.max()  # numerical stability
        exp = np.exp(logits)
        return exp / exp.sum()

    def select_action(self, values: MutableSequence[float]) -> None:
        if len(values) == 0:
            return
        probs = self.probabilities(list(values))
        _one_hot(values, int(self.rng.choice(len(values), p=probs)))
