from typing import List

from neuron import LinearNeuron
from synapse import Synapse


class AllToAll:
    """
    Connects every source neuron to every target neuron.

    Synapses are added to `network` in source-major order, so the link
    from sources[k] to targets[j] lands at offset k * len(targets) + j of
    the batch.
    """

    def __init__(self, network, sources: List[LinearNeuron], targets: List[LinearNeuron],
                 allow_self_connection: bool = False, strength: float = 1.0):
        self.network = network
        self.sources = sources
        self.targets = targets
        self.allow_self_connection = allow_self_connection
        self.strength = strength

    def connect_neurons(self) -> List[Synapse]:
        created = []
        for source in self.sources:
            for target in self.targets:
                if source is target and not self.allow_self_connection:
                    continue
                created.append(self.network.add_weight(
                    Synapse(source, target, strength=self.strength)
                ))
        return created
