"""Tests for the Flask app: pages, JSON API and error mapping."""

import threading

import pytest

from algoviz.app import create_app
from algoviz.session import VisualizerSession


@pytest.fixture()
def app(session):
    app = create_app(session=session)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


class TestPages:
    @pytest.mark.parametrize(
        "path, title",
        [
            ("/sorting", "Sorting Visualizer"),
            ("/searching", "Searching Visualizer"),
            ("/search", "Searching Visualizer"),
            ("/graph", "Graph Algorithm Visualizer"),
        ],
    )
    def test_view_pages(self, client, path, title):
        resp = client.get(path)
        assert resp.status_code == 200
        body = resp.get_data(as_text=True)
        assert title in body
        assert "<svg" in body

    def test_home_links_every_view(self, client):
        body = client.get("/").get_data(as_text=True)
        for href in ("/sorting", "/searching", "/graph"):
            assert f'href="{href}"' in body


class TestState:
    def test_default_view_is_sorting(self, client, session):
        data = client.get("/api/state").get_json()
        assert data["view"] == "sorting"
        assert data["state"]["values"] == session.array
        assert set(data["panels"]) == {"controls", "playback", "narration", "info", "analytics"}
        assert data["svg"].startswith("<svg")

    def test_graph_state(self, client, session):
        data = client.get("/api/state?view=graph").get_json()
        assert data["start_node"] == "A"
        assert len(data["graph"]["nodes"]) == session.graph.node_count()

    def test_unknown_view_is_bad_request(self, client):
        resp = client.get("/api/state?view=audio")
        assert resp.status_code == 400
        assert "Unknown view" in resp.get_json()["error"]


class TestInputs:
    def test_generate_array(self, client):
        data = client.post("/api/array/generate", json={"size": 8}).get_json()
        assert len(data["state"]["values"]) == 8

    def test_custom_array(self, client):
        data = client.post("/api/array/custom", json={"text": "9, 4, 7"}).get_json()
        assert data["accepted"] is True
        assert data["state"]["values"] == [9, 4, 7]

    def test_invalid_custom_array_is_not_accepted(self, client, session):
        before = list(session.array)
        data = client.post("/api/array/custom", json={"text": "nope"}).get_json()
        assert data["accepted"] is False
        assert data["state"]["values"] == before

    def test_target(self, client):
        data = client.post("/api/search/target", json={"view": "searching", "target": "17"}).get_json()
        assert data["accepted"] is True
        assert data["target"] == 17

    def test_new_search_array_is_sorted(self, client):
        values = client.post("/api/search/generate").get_json()["state"]["values"]
        assert values == sorted(values)

    def test_generate_graph(self, client):
        data = client.post("/api/graph/generate", json={"nodes": 5, "seed": 3}).get_json()
        assert data["accepted"] is True
        assert len(data["graph"]["nodes"]) == 5

    def test_start_node(self, client):
        data = client.post("/api/config/start", json={"start": "C"}).get_json()
        assert data["start_node"] == "C"

    def test_unknown_start_node(self, client):
        assert client.post("/api/config/start", json={"start": "Z"}).status_code == 400


class TestConfiguration:
    def test_select_algorithm(self, client):
        data = client.post("/api/config/algo", json={"view": "searching", "algo_key": "binary"}).get_json()
        assert data["accepted"] is True
        assert data["algo_key"] == "binary"

    def test_algorithm_from_other_family(self, client):
        resp = client.post("/api/config/algo", json={"view": "graph", "algo_key": "merge"})
        assert resp.status_code == 400

    def test_delay_is_clamped(self, client):
        assert client.post("/api/config/delay", json={"delay_ms": 5}).get_json() == {"delay_ms": 10}

    def test_delay_must_be_numeric(self, client):
        assert client.post("/api/config/delay", json={"delay_ms": "fast"}).status_code == 400


class TestPlayback:
    def test_run_sorting(self, client, session):
        session.set_custom_array("3, 2, 1")
        data = client.post("/api/run", json={"view": "sorting"}).get_json()
        assert data["status"] == "completed"
        assert data["state"]["values"] == [1, 2, 3]
        assert "Comparisons" in data["panels"]["analytics"]

    def test_run_search_without_target(self, client):
        resp = client.post("/api/run", json={"view": "searching"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Enter a target value first"

    def test_run_graph(self, client):
        data = client.post("/api/run", json={"view": "graph"}).get_json()
        assert data["state"]["finished"] is True
        assert "Visited Order:" in data["panels"]["info"]

    def test_pause_when_idle(self, client):
        assert client.post("/api/pause").get_json() == {"status": "idle"}

    def test_reset(self, client, session):
        session.set_custom_array("2, 1")
        client.post("/api/run", json={"view": "sorting"})
        data = client.post("/api/reset", json={"view": "sorting"}).get_json()
        assert data["state"]["values"] == [2, 1]
        assert data["status"] == "idle"


class TestBusyBackgroundSession:
    @pytest.fixture()
    def gate(self):
        return threading.Event()

    @pytest.fixture()
    def client(self, config, gate):
        session = VisualizerSession(config, sleep=lambda seconds: gate.wait(5))
        app = create_app(session=session)
        yield app.test_client()
        gate.set()
        session.reset()

    def test_second_run_conflicts(self, client):
        assert client.post("/api/run", json={"view": "sorting"}).status_code == 200
        resp = client.post("/api/run", json={"view": "graph"})
        assert resp.status_code == 409
        assert resp.get_json() == {"error": "A playback is already active"}

    def test_pause_and_cancel(self, client, gate):
        client.post("/api/run", json={"view": "sorting"})
        assert client.post("/api/pause").get_json() == {"status": "paused"}
        assert client.get("/api/state?view=sorting").get_json()["busy"] is True
        client.post("/api/cancel")
        gate.set()
        client.application.extensions["algoviz"].driver.join(5)
        assert client.get("/api/state?view=sorting").get_json()["status"] == "cancelled"

    def test_inputs_disabled_while_busy(self, client):
        client.post("/api/run", json={"view": "sorting"})
        data = client.post("/api/array/custom", json={"text": "1, 2"}).get_json()
        assert data["accepted"] is False
        assert '<select id="algo-selector" disabled>' in data["panels"]["controls"]
