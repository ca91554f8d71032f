"""
Topology builder for the actor-critic composite.

Child layout of the composite (positions are relied on by rehydration):
    0: state   (S linear neurons)
    1: actions (A linear neurons)
    2: critic  (2 linear neurons; 0 = value estimate, 1 = reward input)

Synapses live on the composite, state→critic first, then state×action
in source-major order:
    flat index i          : state_i → critic_0          (0 <= i < S)
    flat index S + k*A + j: state_k → action_j
"""

import logging
from typing import Optional, Tuple

from connections import AllToAll
from layout import LineLayout
from network import Network
from neuron import LinearNeuron
from synapse import Synapse

from .config import ActorCriticConfig
from .errors import TopologyError

logger = logging.getLogger(__name__)

CRITIC_UNITS = 2
STATE_INDEX, ACTIONS_INDEX, CRITIC_INDEX = 0, 1, 2


class TopologyBuilder:
    def __init__(self, config: Optional[ActorCriticConfig] = None, layout=None):
        self.config = config or ActorCriticConfig()
        self.layout = layout or LineLayout()

    def weight_bounds(self) -> Tuple[float, float]:
        """Configured synapse bounds as (min, max), whatever order they were given in."""
        lower, upper = sorted((self.config.weight_lower_bound, self.config.weight_upper_bound))
        return lower, upper

    def construct(self, state_units: int, actor_units: int) -> Network:
        """Create the composite with its three children and lay out the neurons."""
        if state_units < 0 or actor_units < 0:
            raise TopologyError(
                f"Unit counts must be non-negative (state={state_units}, actor={actor_units})"
            )

        composite = Network("actor_critic")
        for name, count in (("state", state_units), ("actions", actor_units),
                            ("critic", CRITIC_UNITS)):
            child = Network(name)
            for _ in range(count):
                child.add_neuron(LinearNeuron(clipping=self.config.clip_activations))
            composite.add_network(child)

        self.layout.layout_neurons(composite.get_flat_neuron_list())
        logger.debug("Constructed actor-critic composite: S=%d A=%d", state_units, actor_units)
        return composite

    def connect(self, composite: Network):
        """Wire state→critic and state×action synapses and set neuron bounds."""
        state = composite.get_network(STATE_INDEX)
        actions = composite.get_network(ACTIONS_INDEX)
        critic = composite.get_network(CRITIC_INDEX)
        if state.neuron_count == 0:
            return

        lower, upper = self.weight_bounds()
        value_neuron = critic.get_neuron(0)
        for s in state.get_flat_neuron_list():
            composite.add_weight(Synapse(
                s, value_neuron,
                strength=self.config.critic_initial_strength,
                lower_bound=lower,
                upper_bound=upper,
            ))

        connector = AllToAll(composite, state.get_flat_neuron_list(),
                             actions.get_flat_neuron_list())
        for syn in connector.connect_neurons():
            syn.set_bounds(lower, upper)
            syn.randomize()

        for neuron in composite.get_flat_neuron_list():
            neuron.set_bounds(self.config.neuron_lower_bound, self.config.neuron_upper_bound)
            neuron.increment = self.config.neuron_increment

    def build(self, state_units: int, actor_units: int) -> Network:
        composite = self.construct(state_units, actor_units)
        self.connect(composite)
        return composite
