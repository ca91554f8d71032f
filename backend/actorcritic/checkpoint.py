"""
Checkpoint System - Save/Load actor-critic networks

Saved:
1. composite network structure (neurons, child networks, synapses)
2. persisted scalars (learning rates, gamma, flags)
3. metadata (version, tick, timestamp)

Not saved: last_state / last_actions / last_critic. They are transient
and are reallocated by ActorCritic.rehydrate() after loading.
"""

import json
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from network import Network

from .actor_critic import ActorCritic
from .config import ActorCriticConfig
from .exploration import ExplorationPolicy

logger = logging.getLogger(__name__)


@dataclass
class CheckpointMetadata:
    version: str = "1.0"
    timestamp: str = ""
    time_step: int = 0
    state_units: int = 0
    actor_units: int = 0
    description: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()


def to_checkpoint(agent: ActorCritic, description: str = "") -> Dict[str, Any]:
    return {
        'metadata': asdict(CheckpointMetadata(
            time_step=agent.time_step,
            state_units=agent.state_units,
            actor_units=agent.actor_units,
            description=description,
        )),
        'config': agent.to_config().to_dict(),
        'network': agent.network.to_dict(),
    }


def restore_into(agent: ActorCritic, checkpoint: Dict[str, Any]) -> ActorCritic:
    """
    Replace `agent`'s composite and scalars in place, then rehydrate it.

    The restored composite is checked before anything on `agent` changes;
    a TopologyError leaves the agent as it was.
    """
    config = ActorCriticConfig.from_dict(checkpoint.get('config', {}))
    network = Network.from_dict(checkpoint['network'])
    ActorCritic(config=config, exploration_policy=agent.exploration_policy, network=network)

    agent.network = network
    agent.train = config.train
    agent.absorb_reward = config.absorb_reward
    agent.actor_learning_rate = config.actor_learning_rate
    agent.critic_learning_rate = config.critic_learning_rate
    agent.gamma = config.gamma
    agent.time_step = checkpoint.get('metadata', {}).get('time_step', 0)
    agent.rehydrate()
    return agent


class NetworkCheckpoint:
    """
    사용법:
        checkpoint = NetworkCheckpoint("./checkpoints")
        checkpoint.save(agent, "ac.json")
        agent = checkpoint.load("ac.json")
    """

    def __init__(self, checkpoint_dir: str = "./checkpoints"):
        self.checkpoint_dir = Path(checkpoint_dir)
        self.checkpoint_dir.mkdir(parents=True, exist_ok=True)

    def save(self, agent: ActorCritic, filename: str, description: str = "") -> str:
        filepath = self.checkpoint_dir / filename
        with open(filepath, 'w') as f:
            json.dump(to_checkpoint(agent, description), f, indent=2)
        logger.info("Saved checkpoint %s (tick %d)", filepath, agent.time_step)
        return str(filepath)

    def read(self, filename: str) -> Dict[str, Any]:
        filepath = self.checkpoint_dir / filename
        with open(filepath, 'r') as f:
            return json.load(f)

    def load(self, filename: str,
             exploration_policy: Optional[ExplorationPolicy] = None) -> ActorCritic:
        checkpoint = self.read(filename)
        agent = ActorCritic(
            config=ActorCriticConfig.from_dict(checkpoint.get('config', {})),
            exploration_policy=exploration_policy,
            network=Network.from_dict(checkpoint['network']),
        )
        agent.time_step = checkpoint.get('metadata', {}).get('time_step', 0)
        logger.info("Loaded checkpoint %s (tick %d)", filename, agent.time_step)
        return agent

    def load_into(self, agent: ActorCritic, filename: str) -> ActorCritic:
        return restore_into(agent, self.read(filename))
