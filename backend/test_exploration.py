"""
Exploration Policy Test - one-hot output, determinism under seeds
"""

import numpy as np
import pytest

from actorcritic import (
    EpsilonGreedyPolicy,
    GreedyPolicy,
    RandomExplorationPolicy,
    SoftmaxPolicy,
)


def is_one_hot(values):
    return sorted(values) == [0.0] * (len(values) - 1) + [1.0]


def test_random_policy_ignores_values():
    print("Testing random exploration...")
    policy = RandomExplorationPolicy(0)
    seen = set()
    for _ in range(200):
        values = [5.0, -3.0, 0.2, 0.0]
        policy.select_action(values)
        assert is_one_hot(values)
        seen.add(values.index(1.0))
    assert seen == {0, 1, 2, 3}
    print(f"  [PASS] all {len(seen)} actions explored")


def test_random_policy_seeded():
    a, b = RandomExplorationPolicy(11), RandomExplorationPolicy(11)
    for _ in range(20):
        va, vb = [0.0] * 5, [0.0] * 5
        a.select_action(va)
        b.select_action(vb)
        assert va == vb


def test_shared_generator():
    rng = np.random.default_rng(3)
    policy = RandomExplorationPolicy(rng)
    assert policy.rng is rng


def test_greedy_policy():
    values = [0.2, 0.9, 0.9]
    GreedyPolicy().select_action(values)
    assert values == [0.0, 1.0, 0.0]


def test_epsilon_greedy_extremes():
    values = [0.1, 0.3, 0.2]
    EpsilonGreedyPolicy(0.0, rng=1).select_action(values)
    assert values == [0.0, 1.0, 0.0]

    policy = EpsilonGreedyPolicy(1.0, rng=1)
    picks = set()
    for _ in range(100):
        values = [0.1, 0.3, 0.2]
        policy.select_action(values)
        assert is_one_hot(values)
        picks.add(values.index(1.0))
    assert picks == {0, 1, 2}


def test_softmax_policy():
    policy = SoftmaxPolicy(temperature=1.0, rng=5)
    probs = policy.probabilities([0.0, 1.0, 2.0])
    assert probs.sum() == pytest.approx(1.0)
    assert probs[2] > probs[1] > probs[0]

    cold = SoftmaxPolicy(temperature=0.01, rng=5)
    for _ in range(20):
        values = [0.0, 1.0]
        cold.select_action(values)
        assert values == [0.0, 1.0]


def test_empty_values_untouched():
    for policy in (RandomExplorationPolicy(0), GreedyPolicy(),
                   EpsilonGreedyPolicy(0.5, 0), SoftmaxPolicy(1.0, 0)):
        values = []
        policy.select_action(values)
        assert values == []


def test_invalid_parameters():
    with pytest.raises(ValueError):
        EpsilonGreedyPolicy(1.5)
    with pytest.raises(ValueError):
        SoftmaxPolicy(0.0)


if __name__ == "__main__":
    test_random_policy_ignores_values()
    test_random_policy_seeded()
    test_shared_generator()
    test_greedy_policy()
    test_epsilon_greedy_extremes()
    test_softmax_policy()
    test_empty_values_untouched()
    test_invalid_parameters()
    print("\nALL TESTS PASSED")
