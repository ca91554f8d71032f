"""
Reproducibility - seed management and weight fingerprints

Synapse/neuron randomize() draws from the `random` module, the exploration
policies from numpy Generators. set_seed() fixes both global sources;
policies built with an explicit seed are independent of it.
"""

import hashlib
import json
import random
from typing import List, Optional

import numpy as np


class SeedManager:
    """
    중앙 시드 관리자

        seed_mgr = SeedManager()
        seed_mgr.set_seed(42)
    """

    def __init__(self):
        self.current_seed: Optional[int] = None

    def set_seed(self, seed: int):
        self.current_seed = seed
        np.random.seed(seed)
        random.seed(seed)

    def get_seed(self) -> Optional[int]:
        return self.current_seed


def weight_vector(agent) -> List[float]:
    return [s.strength for s in agent.network.get_flat_synapse_list()]


def weight_fingerprint(agent, decimals: int = 6) -> str:
    """Short hash of the rounded flat strength vector, for comparing runs."""
    data = [round(w, decimals) for w in weight_vector(agent)]
    return hashlib.md5(json.dumps(data).encode()).hexdigest()[:12]
