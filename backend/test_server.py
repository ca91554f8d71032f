"""
Server Test - host endpoints driving actor-critic networks
"""

from fastapi.testclient import TestClient

import main

client = TestClient(main.app)


def setup_function():
    main.networks.clear()


def create(name="agent", **params):
    body = {"state_units": 2, "actor_units": 3, "seed": 1}
    body.update(params)
    return client.post(f"/networks/{name}", json=body)


def test_create_and_read():
    res = create()
    assert res.status_code == 200
    data = res.json()
    assert data["name"] == "agent"
    assert len(data["state"]) == 2
    assert len(data["actions"]) == 3
    assert len(data["critic"]) == 2
    assert data["critic_weights"] == [0.0, 0.0]
    assert len(data["actor_weights"]) == 2

    assert client.get("/").json()["networks"] == ["agent"]
    assert client.get("/networks/agent").json()["time"] == 0


def test_create_rejects_negative_counts():
    res = create(state_units=-1)
    assert res.status_code == 400


def test_step_and_reset():
    print("Testing /step and /reset...")
    create(exploration={"kind": "greedy"})
    res = client.post("/networks/agent/step",
                      json={"state_inputs": [1.0, 0.0], "reward": 2.0, "ticks": 3})
    assert res.status_code == 200
    data = res.json()
    assert len(data["actions"]) == 3
    assert all(0 <= a < 3 for a in data["actions"])
    assert data["network"]["time"] == 3

    data = client.post("/networks/agent/reset").json()
    assert data["state"] == [0.0, 0.0]
    assert data["critic"][1] == 0.0
    print("  [PASS]")


def test_step_validation():
    create()
    assert client.post("/networks/agent/step", json={"state_inputs": [1.0]}).status_code == 400
    assert client.post("/networks/agent/step", json={"ticks": 0}).status_code == 400
    assert client.post("/networks/missing/step", json={}).status_code == 404


def test_duplicate_and_patch():
    create()
    res = client.post("/networks/agent/duplicate/copy")
    assert res.status_code == 200
    assert main.networks["copy"].exploration_policy is main.networks["agent"].exploration_policy

    res = client.patch("/networks/copy/config",
                       json={"gamma": 0.5, "train": False,
                             "exploration": {"kind": "epsilon_greedy", "epsilon": 0.2}})
    assert res.status_code == 200
    assert res.json()["config"]["gamma"] == 0.5
    assert main.networks["agent"].gamma == 1.0
    assert main.networks["copy"].train is False

    bad = client.patch("/networks/copy/config", json={"exploration": {"kind": "nope"}})
    assert bad.status_code == 400


def test_bad_policy_parameters_rejected():
    res = create(exploration={"kind": "epsilon_greedy", "epsilon": 2.0})
    assert res.status_code == 400
    assert "agent" not in main.networks

    create()
    res = client.patch("/networks/agent/config",
                       json={"gamma": 0.5, "exploration": {"kind": "softmax", "temperature": 0}})
    assert res.status_code == 400
    # a rejected patch leaves every field alone
    assert main.networks["agent"].gamma == 1.0


def test_randomize_and_delete():
    create()
    weights = client.post("/networks/agent/randomize").json()["actor_weights"]
    assert all(-10.0 <= w <= 10.0 for row in weights for w in row)
    assert client.delete("/networks/agent").json() == {"deleted": "agent"}
    assert client.get("/networks/agent").status_code == 404


if __name__ == "__main__":
    for test in (test_create_and_read, test_create_rejects_negative_counts,
                 test_step_and_reset, test_step_validation,
                 test_duplicate_and_patch, test_bad_policy_parameters_rejected,
                 test_randomize_and_delete):
        setup_function()
        test()
    print("\nALL TESTS PASSED")
