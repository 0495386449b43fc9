"""Shared test fixtures for algoviz tests."""

import pytest

from algoviz.config import Config
from algoviz.graph import Graph
from algoviz.session import VisualizerSession


@pytest.fixture()
def cycle_graph():
    """A-B-C-D-A, every weight 1."""
    g = Graph()
    for nid in "ABCD":
        g.create_node(nid)
    g.create_edge("A", "B", 1)
    g.create_edge("B", "C", 1)
    g.create_edge("C", "D", 1)
    g.create_edge("D", "A", 1)
    return g


@pytest.fixture()
def weighted_graph():
    """Small graph where the direct edge is not the shortest path.

        A --4-- B
        |       |
        1       1
        |       |
        C --1-- D      E (isolated)
    """
    g = Graph()
    for nid in "ABCDE":
        g.create_node(nid)
    g.create_edge("A", "B", 4)
    g.create_edge("A", "C", 1)
    g.create_edge("C", "D", 1)
    g.create_edge("D", "B", 1)
    return g


@pytest.fixture()
def recording_sleep():
    """A sleep function that records its calls instead of waiting."""
    calls = []

    def sleep(seconds):
        calls.append(seconds)

    sleep.calls = calls
    return sleep


@pytest.fixture()
def config():
    return Config(seed=1234)


@pytest.fixture()
def session(config, recording_sleep):
    """Session whose playbacks run inline, without real waiting."""
    return VisualizerSession(config, background=False, sleep=recording_sleep)
