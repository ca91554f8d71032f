import copy
from typing import Dict, List, Optional

from neuron import LinearNeuron
from synapse import Synapse


class LinkNotFoundError(LookupError):
    """Raised when two neurons have no connecting synapse."""


class Network:
    """
    Manages neurons, synapses and nested child networks.

    Synapses are owned by the network they are added to, which may be a
    parent of the networks owning their endpoints. Flat lists walk the
    child networks depth-first after the network's own entries.
    """

    def __init__(self, network_id: str = "net"):
        self.network_id = network_id
        self.neurons: List[LinearNeuron] = []
        self.synapses: List[Synapse] = []
        self.networks: List["Network"] = []
        self.parent: Optional["Network"] = None
        self.time_step = 0

    # --- Structure ---

    def add_neuron(self, neuron: Optional[LinearNeuron] = None) -> LinearNeuron:
        if neuron is None:
            neuron = LinearNeuron()
        if neuron.neuron_id is None:
            neuron.neuron_id = f"{self.network_id}_{len(self.neurons)}"
        neuron.parent = self
        self.neurons.append(neuron)
        return neuron

    def add_network(self, network: "Network") -> "Network":
        network.parent = self
        self.networks.append(network)
        return network

    def get_network(self, index: int) -> "Network":
        return self.networks[index]

    def get_neuron(self, index: int) -> LinearNeuron:
        return self.neurons[index]

    @property
    def neuron_count(self) -> int:
        return len(self.neurons)

    def get_flat_neuron_list(self) -> List[LinearNeuron]:
        flat = list(self.neurons)
        for child in self.networks:
            flat.extend(child.get_flat_neuron_list())
        return flat

    def get_flat_synapse_list(self) -> List[Synapse]:
        flat = list(self.synapses)
        for child in self.networks:
            flat.extend(child.get_flat_synapse_list())
        return flat

    # --- Synapses ---

    def add_weight(self, synapse: Synapse) -> Synapse:
        flat_ids = {id(n) for n in self.get_flat_neuron_list()}
        if id(synapse.source) not in flat_ids or id(synapse.target) not in flat_ids:
            raise ValueError(
                f"Neuron not found: {synapse.source.neuron_id} or {synapse.target.neuron_id}"
            )
        synapse.source.fan_out.append(synapse)
        synapse.target.fan_in.append(synapse)
        self.synapses.append(synapse)
        return synapse

    def connect(
        self,
        source: LinearNeuron,
        target: LinearNeuron,
        strength: float = 1.0,
        lower_bound: float = Synapse.W_MIN,
        upper_bound: float = Synapse.W_MAX,
    ) -> Synapse:
        syn = Synapse(source, target, strength=strength,
                      lower_bound=lower_bound, upper_bound=upper_bound)
        return self.add_weight(syn)

    def get_weight(self, index: int) -> Synapse:
        """Synapse at position `index` of the flat synapse list."""
        return self.get_flat_synapse_list()[index]

    def get_weight_between(self, source: LinearNeuron, target: LinearNeuron) -> Synapse:
        for syn in target.fan_in:
            if syn.source is source:
                return syn
        raise LinkNotFoundError(
            f"No synapse from {source.neuron_id} to {target.neuron_id}"
        )

    # --- Dynamics ---

    def update(self):
        """Synchronous update: every neuron computes its buffer, then all commit."""
        flat = self.get_flat_neuron_list()
        for neuron in flat:
            neuron.update()
        for neuron in flat:
            neuron.set_activation(neuron.buffer)
        self.time_step += 1

    def randomize_weights(self):
        for syn in self.get_flat_synapse_list():
            syn.randomize()

    # --- Copy / serialization ---

    def duplicate(self) -> "Network":
        """Deep structural copy. The copy has no parent."""
        return copy.deepcopy(self, {id(self.parent): None})

    def to_dict(self) -> Dict:
        index = {id(n): i for i, n in enumerate(self.get_flat_neuron_list())}
        return {
            "id": self.network_id,
            "time": self.time_step,
            "neurons": [n.to_dict() for n in self.neurons],
            "networks": [child.to_dict() for child in self.networks],
            "synapses": [
                {
                    "source": index[id(s.source)],
                    "target": index[id(s.target)],
                    "strength": s.strength,
                    "lower_bound": s.lower_bound,
                    "upper_bound": s.upper_bound,
                }
                for s in self.synapses
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Network":
        net = cls(network_id=data.get("id", "net"))
        net.time_step = data.get("time", 0)
        for n in data.get("neurons", []):
            net.add_neuron(LinearNeuron.from_dict(n))
        for child in data.get("networks", []):
            net.add_network(Network.from_dict(child))
        flat = net.get_flat_neuron_list()
        for s in data.get("synapses", []):
            net.add_weight(Synapse(
                flat[s["source"]],
                flat[s["target"]],
                strength=s["strength"],
                lower_bound=s["lower_bound"],
                upper_bound=s["upper_bound"],
            ))
        return net

