"""Tests for FastAPI endpoints."""

from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_root():
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Valveflow Core"
    assert data["status"] == "running"
    assert data["defaults"]["start"] == "AA"
    assert data["defaults"]["time_budget"] == 30
    assert "/api/solve" in data["endpoints"]


def test_solve(sample_lines):
    resp = client.post("/api/solve", json={"lines": sample_lines})
    assert resp.status_code == 200
    data = resp.json()
    assert data["pressure"] == 1651
    assert data["path"][0] == ["AA", 30]
    assert data["reduced_node_count"] == 7


def test_solve_shorter_budget(sample_lines):
    full = client.post("/api/solve", json={"lines": sample_lines}).json()
    short = client.post(
        "/api/solve", json={"lines": sample_lines, "time_budget": 10, "strategy": "dfs"}
    ).json()
    assert short["pressure"] < full["pressure"]
    assert short["time_budget"] == 10


def test_solve_bad_line():
    resp = client.post("/api/solve", json={"lines": ["Valve ?? leaks"]})
    assert resp.status_code == 400
    assert "Line 1" in resp.json()["detail"]


def test_solve_invalid_budget(sample_lines):
    resp = client.post("/api/solve", json={"lines": sample_lines, "time_budget": 0})
    assert resp.status_code == 422


def test_reduce(sample_lines):
    resp = client.post("/api/reduce", json={"lines": sample_lines})
    assert resp.status_code == 200
    valves = resp.json()["valves"]
    assert sorted(valves) == ["AA", "BB", "CC", "DD", "EE", "HH", "JJ"]
    assert valves["HH"] == {"flow_rate": 22, "tunnels": {"EE": 3}}


def test_distances(sample_lines):
    resp = client.post("/api/distances", json={"lines": sample_lines})
    assert resp.status_code == 200
    data = resp.json()
    n = len(data["valves"])
    matrix = data["matrix"]
    assert n == 7
    for i in range(n):
        assert matrix[i][i] == 0
        for j in range(n):
            assert matrix[i][j] == matrix[j][i]


def test_distances_disconnected():
    lines = [
        "Valve AA has flow rate=0; tunnel leads to valve BB",
        "Valve BB has flow rate=4; tunnel leads to valve AA",
        "Valve CC has flow rate=6; tunnel leads to valve DD",
        "Valve DD has flow rate=2; tunnel leads to valve CC",
    ]
    resp = client.post("/api/distances", json={"lines": lines})
    assert resp.status_code == 400
