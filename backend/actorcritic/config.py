"""
Actor-critic configuration.

Values are copied onto the ActorCritic instance at construction; after
that the instance attributes are the live settings.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional


@dataclass
class ActorCriticConfig:
    """Actor-critic 설정"""
    # Learning
    train: bool = True
    absorb_reward: bool = True   # stored and copied, not read by the update rule
    actor_learning_rate: float = 1.0
    critic_learning_rate: float = 1.0
    gamma: float = 1.0           # reward discount factor

    # Synapse bounds (state→critic bounds are normalised with min/max)
    weight_lower_bound: float = -10.0
    weight_upper_bound: float = 10.0
    critic_initial_strength: float = 0.0

    # Neuron bounds
    neuron_lower_bound: float = 0.0
    neuron_upper_bound: float = 1.0
    neuron_increment: float = 1.0
    clip_activations: bool = False

    # Seed for the default exploration policy (None = nondeterministic)
    seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActorCriticConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
