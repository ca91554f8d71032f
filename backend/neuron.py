class LinearNeuron:
    def __init__(self, neuron_id=None, slope=1.0, bias=0.0, clipping=False):
        """
        Initialize a linear rate neuron.

        Parameters:
        - slope: Gain applied to the summed input.
        - bias: Constant offset added after the gain.
        - clipping: If True the computed value is clipped to [lower_bound, upper_bound].

        Update is two-phase: update() only writes `buffer`, the owner
        commits it with set_activation(buffer) once the whole group is done.
        """
        self.neuron_id = neuron_id

        # Parameters
        self.slope = slope
        self.bias = bias
        self.clipping = clipping

        # State variables
        self.activation = 0.0
        self.buffer = 0.0
        self.input_value = 0.0  # External input, persists until changed

        # Bounds
        self.lower_bound = -1.0
        self.upper_bound = 1.0
        self.increment = 0.1

        # Owning (sub)network and layout position
        self.parent = None
        self.x = 0.0
        self.y = 0.0

        # Filled in by the owning network
        self.fan_in = []
        self.fan_out = []

    def weighted_input(self):
        return sum(s.source.activation * s.strength for s in self.fan_in)

    def update(self):
        """
        Compute the next activation into the buffer.

        buffer = slope * (sum(w * source.activation) + input_value) + bias
        """
        val = self.slope * (self.weighted_input() + self.input_value) + self.bias
        if self.clipping:
            val = self.clip(val)
        self.buffer = val
        return val

    def clip(self, value):
        return max(self.lower_bound, min(self.upper_bound, value))

    def set_activation(self, value):
        self.activation = value

    def set_input_value(self, value):
        self.input_value = value

    def set_bounds(self, lower, upper):
        self.lower_bound = lower
        self.upper_bound = upper

    def increment_activation(self):
        """Step activation up by `increment`, stopping at the upper bound."""
        self.activation = min(self.upper_bound, self.activation + self.increment)

    def decrement_activation(self):
        self.activation = max(self.lower_bound, self.activation - self.increment)

    def to_dict(self):
        return {
            "id": self.neuron_id,
            "activation": self.activation,
            "input_value": self.input_value,
            "slope": self.slope,
            "bias": self.bias,
            "clipping": self.clipping,
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
            "increment": self.increment,
            "x": self.x,
            "y": self.y,
        }

    @classmethod
    def from_dict(cls, data):
        neuron = cls(
            neuron_id=data.get("id"),
            slope=data.get("slope", 1.0),
            bias=data.get("bias", 0.0),
            clipping=data.get("clipping", False),
        )
        neuron.activation = data.get("activation", 0.0)
        neuron.input_value = data.get("input_value", 0.0)
        neuron.lower_bound = data.get("lower_bound", -1.0)
        neuron.upper_bound = data.get("upper_bound", 1.0)
        neuron.increment = data.get("increment", 0.1)
        neuron.x = data.get("x", 0.0)
        neuron.y = data.get("y", 0.0)
        return neuron
