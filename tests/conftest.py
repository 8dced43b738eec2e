from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")

import pytest

from mcsalign.network import Network, Node

NetworkFactory = Callable[..., Network]


def build(name: str, labels: Sequence[str], edges: Sequence[Tuple[str, str]],
          edge_labels: Optional[Sequence[str]] = None) -> Network:
    network = Network(name=name)
    for label in labels:
        network.add_vertex(Node(label))
    for i, (source, target) in enumerate(edges):
        label = edge_labels[i] if edge_labels else None
        network.add_edge(network.get_vertex(source), network.get_vertex(target), label=label)
    return network


@pytest.fixture
def make_network() -> NetworkFactory:
    return build


@pytest.fixture
def triangles() -> List[Network]:
    """Two identical triangles; identity alignment matches them node for node."""
    return [
        build("A", ["a1", "a2", "a3"], [("a1", "a2"), ("a2", "a3"), ("a3", "a1")]),
        build("B", ["b1", "b2", "b3"], [("b1", "b2"), ("b2", "b3"), ("b3", "b1")]),
    ]


@pytest.fixture
def paths() -> List[Network]:
    """Two paths over four nodes sharing two of their three edges under the identity alignment."""
    return [
        build("A", ["a1", "a2", "a3", "a4"], [("a1", "a2"), ("a2", "a3"), ("a3", "a4")]),
        build("B", ["b1", "b2", "b3", "b4"], [("b1", "b2"), ("b2", "b3"), ("b1", "b4")]),
    ]
