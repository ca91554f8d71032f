"""
Actor-Critic - Main Server

Hosts actor-critic networks and acts as their scheduler: every /step call
sets the inputs, then advances the network a given number of ticks.

Networks are kept in named slots ("default" unless told otherwise).
Requests are handled one at a time per slot; the engine itself does no
locking.
"""

import logging
import threading
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from actorcritic import (
    ActorCritic,
    ActorCriticConfig,
    EpsilonGreedyPolicy,
    GreedyPolicy,
    RandomExplorationPolicy,
    SoftmaxPolicy,
    TopologyError,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("actorcritic.server")

app = FastAPI(title="Actor-Critic TD Network API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Simulation State ---
networks: Dict[str, ActorCritic] = {}
lock = threading.Lock()


# --- Data Models ---
class ExplorationParams(BaseModel):
    kind: str = "random"  # random | greedy | epsilon_greedy | softmax
    epsilon: float = 0.1
    temperature: float = 1.0
    seed: Optional[int] = None


class CreateParams(BaseModel):
    state_units: int = 2
    actor_units: int = 2
    train: bool = True
    absorb_reward: bool = True
    actor_learning_rate: float = 1.0
    critic_learning_rate: float = 1.0
    gamma: float = 1.0
    seed: Optional[int] = None
    exploration: Optional[ExplorationParams] = None


class StepParams(BaseModel):
    state_inputs: Optional[List[float]] = None
    reward: Optional[float] = None
    ticks: int = 1


class ConfigPatch(BaseModel):
    train: Optional[bool] = None
    absorb_reward: Optional[bool] = None
    actor_learning_rate: Optional[float] = None
    critic_learning_rate: Optional[float] = None
    gamma: Optional[float] = None
    exploration: Optional[ExplorationParams] = None


def make_policy(params: ExplorationParams):
    if params.kind == "random":
        return RandomExplorationPolicy(params.seed)
    if params.kind == "greedy":
        return GreedyPolicy()
    try:
        if params.kind == "epsilon_greedy":
            return EpsilonGreedyPolicy(params.epsilon, params.seed)
        if params.kind == "softmax":
            return SoftmaxPolicy(params.temperature, params.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    raise HTTPException(status_code=400, detail=f"Unknown exploration policy: {params.kind}")


def get_network(name: str) -> ActorCritic:
    if name not in networks:
        raise HTTPException(status_code=404, detail=f"No network named '{name}'")
    return networks[name]


def describe(name: str, net: ActorCritic) -> Dict:
    state = net.get_state()
    state["name"] = name
    state["critic_weights"] = net.critic_weights().tolist()
    state["actor_weights"] = net.actor_weights().tolist()
    return state


# --- Endpoints ---

@app.get("/")
def read_root():
    return {"status": "Actor-Critic Online", "networks": sorted(networks)}


@app.post("/networks/{name}")
def create_network(name: str, params: CreateParams):
    config = ActorCriticConfig(
        train=params.train,
        absorb_reward=params.absorb_reward,
        actor_learning_rate=params.actor_learning_rate,
        critic_learning_rate=params.critic_learning_rate,
        gamma=params.gamma,
        seed=params.seed,
    )
    policy = make_policy(params.exploration) if params.exploration else None
    try:
        net = ActorCritic(params.state_units, params.actor_units,
                          config=config, exploration_policy=policy)
    except TopologyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    with lock:
        networks[name] = net
    logger.info("Created network '%s' (S=%d A=%d)", name, params.state_units, params.actor_units)
    return describe(name, net)


@app.get("/networks/{name}")
def read_network(name: str):
    return describe(name, get_network(name))


@app.post("/networks/{name}/step")
def step_network(name: str, params: StepParams):
    net = get_network(name)
    if params.ticks < 1:
        raise HTTPException(status_code=400, detail="ticks must be >= 1")
    with lock:
        if params.state_inputs is not None:
            try:
                net.set_state_inputs(params.state_inputs)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
        if params.reward is not None:
            net.set_reward(params.reward)
        actions = []
        deltas = []
        for _ in range(params.ticks):
            net.update()
            actions.append(net.current_action())
            deltas.append(net.last_delta)
    return {"actions": actions, "deltas": deltas, "network": describe(name, net)}


@app.post("/networks/{name}/reset")
def reset_network(name: str):
    net = get_network(name)
    with lock:
        net.reset()
    return describe(name, net)


@app.post("/networks/{name}/randomize")
def randomize_network(name: str):
    net = get_network(name)
    with lock:
        net.randomize()
    return describe(name, net)


@app.post("/networks/{name}/duplicate/{target}")
def duplicate_network(name: str, target: str):
    net = get_network(name)
    with lock:
        networks[target] = net.duplicate()
    return describe(target, networks[target])


@app.patch("/networks/{name}/config")
def patch_config(name: str, patch: ConfigPatch):
    net = get_network(name)
    # build the policy first so a rejected patch changes nothing
    policy = make_policy(patch.exploration) if patch.exploration is not None else None
    with lock:
        for field in ("train", "absorb_reward", "actor_learning_rate",
                      "critic_learning_rate", "gamma"):
            value = getattr(patch, field)
            if value is not None:
                setattr(net, field, value)
        if policy is not None:
            net.exploration_policy = policy
    return describe(name, net)


@app.delete("/networks/{name}")
def delete_network(name: str):
    get_network(name)
    with lock:
        del networks[name]
    return {"deleted": name}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8002)
