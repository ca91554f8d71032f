"""
Spatial layouts for neurons.

Layouts only assign x/y positions for display. They never touch
activations or synapses.
"""

import math
from typing import List

from neuron import LinearNeuron


class LineLayout:
    """Places neurons in a horizontal (or vertical) row."""

    def __init__(self, spacing: float = 40.0, vertical: bool = False,
                 initial_x: float = 0.0, initial_y: float = 0.0):
        self.spacing = spacing
        self.vertical = vertical
        self.initial_x = initial_x
        self.initial_y = initial_y

    def layout_neurons(self, neurons: List[LinearNeuron]):
        for i, neuron in enumerate(neurons):
            if self.vertical:
                neuron.x, neuron.y = self.initial_x, self.initial_y + i * self.spacing
            else:
                neuron.x, neuron.y = self.initial_x + i * self.spacing, self.initial_y


class GridLayout:
    """
    Places neurons row by row in a grid.

    Unless `manual_columns` is set, the column count is ceil(sqrt(n)).
    """

    def __init__(self, h_spacing: float = 50.0, v_spacing: float = 50.0,
                 num_columns: int = 3, manual_columns: bool = False,
                 initial_x: float = 0.0, initial_y: float = 0.0):
        self.h_spacing = h_spacing
        self.v_spacing = v_spacing
        self.num_columns = num_columns
        self.manual_columns = manual_columns
        self.initial_x = initial_x
        self.initial_y = initial_y

    def columns_for(self, count: int) -> int:
        if self.manual_columns:
            return max(1, self.num_columns)
        return max(1, math.ceil(math.sqrt(count)))

    def layout_neurons(self, neurons: List[LinearNeuron]):
        cols = self.columns_for(len(neurons))
        for i, neuron in enumerate(neurons):
            row, col = divmod(i, cols)
            neuron.x = self.initial_x + col * self.h_spacing
            neuron.y = self.initial_y + row * self.v_spacing
