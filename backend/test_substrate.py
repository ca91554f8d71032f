"""
Substrate Test - neurons, synapses, networks, connectors, layouts
"""

import pytest

from connections import AllToAll
from layout import GridLayout, LineLayout
from network import LinkNotFoundError, Network
from neuron import LinearNeuron
from synapse import Synapse


def make_pair():
    net = Network("pair")
    a = net.add_neuron()
    b = net.add_neuron()
    syn = net.connect(a, b, strength=2.0)
    return net, a, b, syn


def test_neuron_two_phase():
    """update() writes the buffer only; activation changes on commit."""
    print("Testing neuron buffer/commit...")
    n = LinearNeuron()
    n.set_input_value(0.5)
    n.update()
    assert n.buffer == 0.5
    assert n.activation == 0.0
    n.set_activation(n.buffer)
    assert n.activation == 0.5
    print("  [PASS] buffer is not visible until committed")


def test_neuron_clipping_and_increment():
    n = LinearNeuron(clipping=True)
    n.set_bounds(0.0, 1.0)
    n.set_input_value(5.0)
    assert n.update() == 1.0

    n.increment = 0.4
    n.increment_activation()
    n.increment_activation()
    n.increment_activation()
    assert n.activation == 1.0
    n.decrement_activation()
    assert n.activation == pytest.approx(0.6)


def test_weighted_input():
    net, a, b, syn = make_pair()
    a.set_activation(0.5)
    b.set_input_value(0.25)
    assert b.update() == pytest.approx(1.25)


def test_synapse_bounds():
    syn = Synapse(LinearNeuron(), LinearNeuron(), strength=12.0)
    syn.check_bounds()
    assert syn.strength == Synapse.W_MAX
    syn.set_strength(-30.0)
    syn.check_bounds()
    assert syn.strength == Synapse.W_MIN

    syn.set_bounds(-0.5, 0.5)
    for _ in range(50):
        syn.randomize()
        assert -0.5 <= syn.strength <= 0.5


def test_weight_lookup():
    print("Testing synapse lookup...")
    net, a, b, syn = make_pair()
    assert net.get_weight_between(a, b) is syn
    assert net.get_weight(0) is syn

    with pytest.raises(LinkNotFoundError):
        net.get_weight_between(b, a)
    with pytest.raises(LookupError):
        net.get_weight_between(a, a)
    print("  [PASS] missing synapse raises")


def test_add_weight_rejects_foreign_neurons():
    net, a, _, _ = make_pair()
    with pytest.raises(ValueError):
        net.connect(a, LinearNeuron())


def test_flat_lists_cover_children():
    parent = Network("parent")
    left, right = Network("left"), Network("right")
    for _ in range(2):
        left.add_neuron()
    right.add_neuron()
    parent.add_network(left)
    parent.add_network(right)

    flat = parent.get_flat_neuron_list()
    assert [n.neuron_id for n in flat] == ["left_0", "left_1", "right_0"]
    assert left.parent is parent

    syn = parent.connect(left.get_neuron(0), right.get_neuron(0))
    inner = left.connect(left.get_neuron(0), left.get_neuron(1))
    assert parent.get_flat_synapse_list() == [syn, inner]


def test_synchronous_network_update():
    """Neurons read the previous activations of their inputs, not this tick's."""
    net, a, b, _ = make_pair()
    a.set_input_value(1.0)
    net.update()
    assert a.activation == 1.0
    assert b.activation == 0.0
    net.update()
    assert b.activation == 2.0


def test_duplicate_is_independent():
    print("Testing network duplicate...")
    parent = Network("parent")
    child = parent.add_network(Network("child"))
    x = child.add_neuron()
    y = child.add_neuron()
    parent.connect(x, y, strength=0.3)

    copy = child.duplicate()
    assert copy.parent is None
    assert child.parent is parent

    clone = parent.duplicate()
    clone.get_weight(0).set_strength(-4.0)
    assert parent.get_weight(0).strength == 0.3
    assert clone.get_network(0).parent is clone
    cx, cy = clone.get_flat_neuron_list()
    assert clone.get_weight_between(cx, cy) is clone.get_weight(0)
    assert cx is not x
    print("  [PASS] clone shares no neurons or synapses")


def test_serialization_preserves_structure():
    parent = Network("parent")
    child = parent.add_network(Network("child"))
    x = child.add_neuron()
    y = child.add_neuron()
    x.set_input_value(0.7)
    parent.connect(x, y, strength=0.3, lower_bound=-1.0, upper_bound=2.0)

    restored = Network.from_dict(parent.to_dict())
    rx, ry = restored.get_flat_neuron_list()
    syn = restored.get_weight_between(rx, ry)
    assert (syn.strength, syn.lower_bound, syn.upper_bound) == (0.3, -1.0, 2.0)
    assert rx.input_value == 0.7
    assert restored.get_network(0).parent is restored


def test_all_to_all_order():
    net = Network("net")
    sources = [net.add_neuron() for _ in range(2)]
    targets = [net.add_neuron() for _ in range(3)]
    created = AllToAll(net, sources, targets).connect_neurons()

    assert len(created) == 6
    for k, s in enumerate(sources):
        for j, t in enumerate(targets):
            syn = net.get_weight(k * 3 + j)
            assert syn.source is s and syn.target is t


def test_all_to_all_skips_self_connections():
    net = Network("net")
    group = [net.add_neuron() for _ in range(3)]
    assert len(AllToAll(net, group, group).connect_neurons()) == 6
    assert len(AllToAll(net, group, group, allow_self_connection=True).connect_neurons()) == 9


def test_layouts():
    neurons = [LinearNeuron() for _ in range(5)]
    GridLayout(h_spacing=10, v_spacing=20).layout_neurons(neurons)
    # ceil(sqrt(5)) = 3 columns
    assert [(n.x, n.y) for n in neurons] == [
        (0, 0), (10, 0), (20, 0), (0, 20), (10, 20)
    ]

    GridLayout(h_spacing=10, num_columns=1, manual_columns=True).layout_neurons(neurons)
    assert all(n.x == 0 for n in neurons)

    LineLayout(spacing=5, vertical=True).layout_neurons(neurons)
    assert [n.y for n in neurons] == [0, 5, 10, 15, 20]


if __name__ == "__main__":
    test_neuron_two_phase()
    test_neuron_clipping_and_increment()
    test_weighted_input()
    test_synapse_bounds()
    test_weight_lookup()
    test_add_weight_rejects_foreign_neurons()
    test_flat_lists_cover_children()
    test_synchronous_network_update()
    test_duplicate_is_independent()
    test_serialization_preserves_structure()
    test_all_to_all_order()
    test_all_to_all_skips_self_connections()
    test_layouts()
    print("\nALL TESTS PASSED")
