from __future__ import annotations

import pytest

from mcsalign.network import Edge, Network, Node


def test_vertices_and_edges_keep_insertion_order() -> None:
    network = Network(name="n")
    nodes = [Node(label) for label in ("x", "y", "z")]
    for node in nodes:
        assert network.add_vertex(node)
    e1 = network.add_edge(nodes[0], nodes[1], label="xy")
    e2 = network.add_edge(nodes[1], nodes[2], label="yz")

    assert network.vertices() == nodes
    assert network.edges() == [e1, e2]
    # restartable
    assert network.edges() == [e1, e2]
    assert network.number_of_vertices() == 3
    assert network.number_of_edges() == 2
    assert len(network) == 3
    assert nodes[0] in network


def test_degree_counts_parallel_edges_and_self_loops() -> None:
    network = Network()
    u, v = Node("u"), Node("v")
    network.add_vertex(u)
    network.add_vertex(v)
    network.add_edge(u, v)
    network.add_edge(u, v)
    network.add_edge(v, v)

    assert network.degree_of(u) == 2
    assert network.degree_of(v) == 4
    assert len(network.edges_between(u, v)) == 2
    assert set(network.neighbors(v)) == {u, v}


def test_isolated_vertex_has_degree_zero() -> None:
    network = Network()
    node = Node("alone")
    network.add_vertex(node)
    assert network.degree_of(node) == 0
    assert network.edges_of(node) == []


def test_edge_to_missing_vertex_fails_fast() -> None:
    network = Network(name="n")
    u = Node("u")
    network.add_vertex(u)
    with pytest.raises(ValueError, match="not a vertex"):
        network.add_edge(u, Node("ghost"))
    assert network.number_of_edges() == 0


def test_edge_object_must_match_endpoints() -> None:
    network = Network()
    u, v, w = Node("u"), Node("v"), Node("w")
    for node in (u, v, w):
        network.add_vertex(node)
    with pytest.raises(ValueError):
        network.add_edge(u, v, Edge(u, w))
    edge = Edge(v, u, "vu")
    assert network.add_edge(u, v, edge) is edge
    assert network.get_edge(u, v) is edge


def test_duplicate_labels_are_rejected() -> None:
    network = Network(name="n")
    node = Node("u")
    assert network.add_vertex(node)
    assert not network.add_vertex(node)
    with pytest.raises(ValueError, match="already has a vertex labeled"):
        network.add_vertex(Node("u"))


def test_non_unique_network_allows_duplicate_labels() -> None:
    network = Network(unique_labels=False)
    first, second = Node("x"), Node("x")
    network.add_vertex(first)
    network.add_vertex(second)
    assert network.number_of_vertices() == 2
    assert network.get_vertex("x") is first
    network.remove_vertex(first)
    assert network.get_vertex("x") is second


def test_remove_vertex_drops_incident_edges() -> None:
    network = Network()
    u, v, w = Node("u"), Node("v"), Node("w")
    for node in (u, v, w):
        network.add_vertex(node)
    network.add_edge(u, v)
    network.add_edge(v, w)

    network.remove_vertex(v)

    assert network.vertices() == [u, w]
    assert network.number_of_edges() == 0
    assert network.get_vertex("v") is None
    assert network.get_edge(u, v) is None


def test_connected_component() -> None:
    network = Network()
    nodes = [Node(str(i)) for i in range(4)]
    for node in nodes:
        network.add_vertex(node)
    network.add_edge(nodes[0], nodes[1])
    network.add_edge(nodes[2], nodes[3])
    assert network.connected_component(nodes[1]) == {nodes[0], nodes[1]}


def test_node_name_defaults_to_label() -> None:
    assert Node("P12345").name == "P12345"
    assert Node("P12345", name="CDC28").name == "CDC28"
