"""
Actor-Critic - Temporal Difference learning on a three-part network

    state ──┬──> actions   (actor: learns which action leads to reward)
            └──> critic[0] (critic: learns how good the state is)
                 critic[1] <── external reward

Advanced one tick at a time and trained online with a one-step TD error:
    delta = gamma * V(t) + r(t-1) - V(t-1)

Components:
- topology.py: builds the composite and wires the synapses
- exploration.py: pluggable action selection
- learning.py: TD(0) critic/actor weight update
- actor_critic.py: the tick loop and lifecycle (reset, duplicate, rehydrate)
- checkpoint.py: JSON save/load through the rehydrate hook
"""

from .config import ActorCriticConfig
from .errors import ActorCriticError, TopologyError, LinkNotFoundError
from .exploration import (
    ExplorationPolicy,
    RandomExplorationPolicy,
    GreedyPolicy,
    EpsilonGreedyPolicy,
    SoftmaxPolicy,
)
from .topology import TopologyBuilder
from .learning import TDLearningRule, td_error
from .actor_critic import ActorCritic
from .checkpoint import NetworkCheckpoint
from .reproducibility import SeedManager, weight_fingerprint

__all__ = [
    # Config / errors
    'ActorCriticConfig', 'ActorCriticError', 'TopologyError', 'LinkNotFoundError',
    # Exploration
    'ExplorationPolicy', 'RandomExplorationPolicy', 'GreedyPolicy',
    'EpsilonGreedyPolicy', 'SoftmaxPolicy',
    # Engine
    'TopologyBuilder', 'TDLearningRule', 'td_error', 'ActorCritic',
    # Persistence / reproducibility
    'NetworkCheckpoint', 'SeedManager', 'weight_fingerprint',
]
