import random


class Synapse:
    """
    Represents a weighted connection between two neurons.

    The synapse only holds references to its endpoints; both neurons and the
    synapse itself are owned by the network the synapse is added to.
    Strength is kept inside [lower_bound, upper_bound] only when
    check_bounds() is called, not on every assignment.
    """

    # Default weight bounds
    W_MIN = -10.0
    W_MAX = 10.0

    def __init__(
        self,
        source,
        target,
        strength: float = 1.0,
        lower_bound: float = W_MIN,
        upper_bound: float = W_MAX,
    ):
        self.source = source
        self.target = target
        self.strength = strength
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def set_strength(self, strength: float):
        self.strength = strength

    def set_bounds(self, lower: float, upper: float):
        self.lower_bound = lower
        self.upper_bound = upper

    def check_bounds(self):
        """Clamp strength to the configured bounds."""
        if self.strength > self.upper_bound:
            self.strength = self.upper_bound
        elif self.strength < self.lower_bound:
            self.strength = self.lower_bound

    def randomize(self):
        """Sample strength uniformly within the bounds."""
        self.strength = random.uniform(self.lower_bound, self.upper_bound)
