"""
TD(0) actor-critic learning rule.

    delta = gamma * V(t) + r(t-1) - V(t-1)

where V(t) is the critic value neuron's freshly committed activation and
r(t-1), V(t-1) are the critic activations recorded before this tick.

Critic:  w(s_i → c_0) += critic_lr * s_i(t-1) * delta           (clipped every tick)
Actor:   w(s_k → a_j) += actor_lr * s_k(t-1) * delta * a_j(t-1)

Actor clipping runs once per state neuron k and targets flat synapse
index S + k, not the S + k*A + j synapses that were just changed. With
A > 1 some actor synapses can therefore sit outside their bounds until a
later tick happens to clip them (see test_learning_rule.py).
"""

import logging

logger = logging.getLogger(__name__)


def td_error(gamma: float, value: float, last_critic) -> float:
    return gamma * value + last_critic[1] - last_critic[0]


class TDLearningRule:
    """Single-step, first-order update. No traces, no momentum."""

    def apply(self, agent) -> float:
        """Update critic and actor weights of `agent` in place and return delta."""
        state, actions, critic = agent.state, agent.actions, agent.critic
        composite = agent.network
        state_units = state.neuron_count
        actor_units = actions.neuron_count

        delta = td_error(agent.gamma, critic.get_neuron(0).activation, agent.last_critic)
        if delta < 0:
            logger.debug("negative delta: %.6f", delta)
        if state_units == 0:
            return delta

        value_neuron = critic.get_neuron(0)
        for i in range(state_units):
            syn = composite.get_weight_between(state.get_neuron(i), value_neuron)
            syn.set_strength(syn.strength
                             + agent.critic_learning_rate * agent.last_state[i] * delta)
            syn.check_bounds()

        flat_synapses = composite.get_flat_synapse_list()
        for k in range(state_units):
            source = state.get_neuron(k)
            for j in range(actor_units):
                syn = composite.get_weight_between(source, actions.get_neuron(j))
                syn.set_strength(syn.strength
                                 + agent.actor_learning_rate * agent.last_state[k]
                                 * delta * agent.last_actions[j])
            clip_index = state_units + k
            if clip_index < len(flat_synapses):
                flat_synapses[clip_index].check_bounds()

        return delta
