"""
ActorCritic - TD(0) actor-critic network

The network consists of two components:
- an adaptive critic that learns to predict the goodness of states
- an actor that learns to take actions leading towards rewarding states

The composite Network built by TopologyBuilder owns every neuron and
synapse. ActorCritic holds handles to its three children plus the
transient buffers used by the learning rule.

One tick (update):
    1. state   : record last_state, compute buffers, commit
    2. actions : record last_actions, compute buffers, exploration policy
                 rewrites them, commit
    3. critic  : record last_critic, compute buffers, commit
    4. learning: if train, TD update of critic and actor weights
"""

import logging
from typing import Dict, Optional, Sequence

import numpy as np

from network import Network

from .config import ActorCriticConfig
from .errors import TopologyError
from .exploration import ExplorationPolicy, RandomExplorationPolicy
from .learning import TDLearningRule
from .topology import ACTIONS_INDEX, CRITIC_INDEX, CRITIC_UNITS, STATE_INDEX, TopologyBuilder

logger = logging.getLogger(__name__)


def _step_group(group: Network, last: np.ndarray):
    """Two-phase update of one sub-network: record, compute every buffer, then commit."""
    for i, neuron in enumerate(group.neurons):
        last[i] = neuron.activation
        neuron.update()
    for neuron in group.neurons:
        neuron.set_activation(neuron.buffer)


class ActorCritic:
    def __init__(self,
                 state_units: int = 2,
                 actor_units: int = 2,
                 config: Optional[ActorCriticConfig] = None,
                 exploration_policy: Optional[ExplorationPolicy] = None,
                 layout=None,
                 network: Optional[Network] = None):
        """
        Args:
            state_units: number of state neurons
            actor_units: number of possible actions
            config: learning rates, discount, flags and bounds
            exploration_policy: shared, not copied by duplicate()
            layout: spatial layout for the neurons (display only)
            network: an already built composite (duplicate/restore path);
                when given, the unit counts are taken from it and no
                wiring is done
        """
        config = config or ActorCriticConfig()
        self.train = config.train
        self.absorb_reward = config.absorb_reward
        self.actor_learning_rate = config.actor_learning_rate
        self.critic_learning_rate = config.critic_learning_rate
        self.gamma = config.gamma
        self.exploration_policy = exploration_policy or RandomExplorationPolicy(config.seed)
        self.learning_rule = TDLearningRule()
        self.time_step = 0
        self.last_delta = 0.0

        if network is None:
            network = TopologyBuilder(config, layout).build(state_units, actor_units)
        self.network = network
        self.rehydrate()
        logger.debug("ActorCritic ready: S=%d A=%d train=%s",
                     self.state_units, self.actor_units, self.train)

    # --- Structure ---

    @property
    def state_units(self) -> int:
        return self.state.neuron_count

    @property
    def actor_units(self) -> int:
        return self.actions.neuron_count

    def _init_buffers(self):
        self.last_state = np.zeros(self.state.neuron_count)
        self.last_actions = np.zeros(self.actions.neuron_count)
        self.last_critic = np.zeros(CRITIC_UNITS)

    def rehydrate(self):
        """
        Rebind the three sub-network handles to children 0, 1, 2 and
        reallocate zeroed buffers. Called after the composite has been
        restored or cloned.
        """
        children = self.network.networks
        if len(children) < 3:
            raise TopologyError(
                f"Actor-critic composite needs 3 child networks, found {len(children)}"
            )
        self.state = children[STATE_INDEX]
        self.actions = children[ACTIONS_INDEX]
        self.critic = children[CRITIC_INDEX]
        for child in (self.state, self.actions, self.critic):
            child.parent = self.network
        if self.critic.neuron_count != CRITIC_UNITS:
            raise TopologyError(
                f"Critic must have {CRITIC_UNITS} neurons, found {self.critic.neuron_count}"
            )
        self._init_buffers()

    # --- Dynamics ---

    def update(self):
        _step_group(self.state, self.last_state)

        a = []
        for i, neuron in enumerate(self.actions.neurons):
            self.last_actions[i] = neuron.activation
            a.append(neuron.update())
        self.exploration_policy.select_action(a)
        for neuron, value in zip(self.actions.neurons, a):
            neuron.set_activation(value)

        _step_group(self.critic, self.last_critic)

        if self.train:
            self.last_delta = self.learning_rule.apply(self)
        self.time_step += 1

    def reset(self):
        """Zero state inputs and the reward input, then run one tick to absorb any pending reward."""
        for neuron in self.state.neurons:
            neuron.set_input_value(0.0)
        self.critic.get_neuron(1).set_input_value(0.0)
        self.update()
        logger.debug("reset at tick %d", self.time_step)

    def randomize(self):
        if not self.network.get_flat_synapse_list():
            return
        self.network.randomize_weights()

    def duplicate(self) -> "ActorCritic":
        """Independent structural copy sharing this network's exploration policy."""
        clone = ActorCritic(config=self.to_config(),
                            exploration_policy=self.exploration_policy,
                            network=self.network.duplicate())
        logger.debug("duplicated network (S=%d A=%d)", clone.state_units, clone.actor_units)
        return clone

    def current_action(self) -> int:
        for i, neuron in enumerate(self.actions.neurons):
            if neuron.activation > 0:
                return i
        return -1

    # --- Host accessors ---

    def set_state_inputs(self, values: Sequence[float]):
        if len(values) != self.state_units:
            raise ValueError(f"Expected {self.state_units} state inputs, got {len(values)}")
        for neuron, value in zip(self.state.neurons, values):
            neuron.set_input_value(float(value))

    def set_reward(self, reward: float):
        self.critic.get_neuron(1).set_input_value(float(reward))

    @property
    def value(self) -> float:
        return self.critic.get_neuron(0).activation

    def critic_weights(self) -> np.ndarray:
        v = self.critic.get_neuron(0)
        return np.array([self.network.get_weight_between(s, v).strength
                         for s in self.state.neurons])

    def actor_weights(self) -> np.ndarray:
        """(S, A) matrix of state→action strengths."""
        w = np.zeros((self.state_units, self.actor_units))
        for k, s in enumerate(self.state.neurons):
            for j, a in enumerate(self.actions.neurons):
                w[k, j] = self.network.get_weight_between(s, a).strength
        return w

    def to_config(self) -> ActorCriticConfig:
        return ActorCriticConfig(
            train=self.train,
            absorb_reward=self.absorb_reward,
            actor_learning_rate=self.actor_learning_rate,
            critic_learning_rate=self.critic_learning_rate,
            gamma=self.gamma,
        )

    def get_state(self) -> Dict:
        return {
            "time": self.time_step,
            "state": [n.activation for n in self.state.neurons],
            "actions": [n.activation for n in self.actions.neurons],
            "critic": [n.activation for n in self.critic.neurons],
            "current_action": self.current_action(),
            "delta": self.last_delta,
            "config": self.to_config().to_dict(),
        }
