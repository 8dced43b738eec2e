from typing import Any, Dict, Iterator, List, Optional, Set

import networkx as nx


class Node:
    """
    A vertex of a Network.

    The label is the stable identifier of the node inside its network, the name
    is what gets displayed (it defaults to the label). Consensus vertices also
    remember the alignment column they were built from in ``position``.
    """

    __slots__ = ("label", "name", "position")

    def __init__(self, label: str, name: Optional[str] = None, position: Optional[int] = None) -> None:
        self.label = label
        self.name = label if name is None else name
        self.position = position

    def __repr__(self) -> str:
        if self.position is None:
            return f"Node({self.label!r})"
        return f"Node({self.label!r}, position={self.position})"


class Edge:
    """
    An undirected edge between two nodes of the same network.

    Input edges keep the default conservation of 1. Edges of a consensus
    network carry the number of input networks sharing the adjacency and the
    number of networks missing it.
    """

    __slots__ = ("source", "target", "label", "conservation", "exceptions")

    def __init__(self, source: Node, target: Node, label: Optional[str] = None,
                 conservation: int = 1, exceptions: int = 0) -> None:
        self.source = source
        self.target = target
        self.label = label
        self.conservation = conservation
        self.exceptions = exceptions

    def connects(self, u: Node, v: Node) -> bool:
        return (self.source is u and self.target is v) or (self.source is v and self.target is u)

    def __repr__(self) -> str:
        return f"Edge({self.source.label!r}, {self.target.label!r}, label={self.label!r}, conservation={self.conservation})"


class Network:
    """
    Labeled undirected multigraph backed by networkx.MultiGraph.

    Vertices are Node objects, each edge is stored as the ``edge`` attribute
    of a networkx edge. Parallel edges and self-loops are allowed. Input
    networks require unique vertex labels; a consensus network does not,
    since unaligned nodes of different networks may share a label.
    """

    def __init__(self, name: Optional[str] = None, unique_labels: bool = True) -> None:
        self.name = name
        self.unique_labels = unique_labels
        self._graph = nx.MultiGraph()
        self._labels: Dict[str, Node] = {}

    @property
    def graph(self) -> nx.MultiGraph:
        return self._graph

    def add_vertex(self, node: Node) -> bool:
        if node in self._graph:
            return False
        if node.label in self._labels:
            if self.unique_labels:
                raise ValueError(f"Network {self.name!r} already has a vertex labeled {node.label!r}")
        else:
            self._labels[node.label] = node
        self._graph.add_node(node)
        return True

    def add_edge(self, source: Node, target: Node, edge: Optional[Edge] = None,
                 label: Optional[str] = None) -> Edge:
        for endpoint in (source, target):
            if endpoint not in self._graph:
                raise ValueError(f"Edge endpoint {endpoint!r} is not a vertex of network {self.name!r}")
        if edge is None:
            edge = Edge(source, target, label)
        elif not edge.connects(source, target):
            raise ValueError(f"{edge!r} does not connect {source!r} and {target!r}")
        self._graph.add_edge(source, target, edge=edge)
        return edge

    def remove_vertex(self, node: Node) -> None:
        self._graph.remove_node(node)
        if self._labels.get(node.label) is not node:
            return
        del self._labels[node.label]
        if not self.unique_labels:
            for other in self._graph.nodes:
                if other.label == node.label:
                    self._labels[node.label] = other
                    break

    def contains_vertex(self, node: Node) -> bool:
        return node in self._graph

    def get_vertex(self, label: str) -> Optional[Node]:
        return self._labels.get(label)

    def degree_of(self, node: Node) -> int:
        return self._graph.degree(node)

    def vertices(self) -> List[Node]:
        return list(self._graph.nodes)

    def edges(self) -> List[Edge]:
        return [data["edge"] for _, _, data in self._graph.edges(data=True)]

    def edges_of(self, node: Node) -> List[Edge]:
        return [data["edge"] for _, _, data in self._graph.edges(node, data=True)]

    def edges_between(self, u: Node, v: Node) -> List[Edge]:
        data: Optional[Dict[Any, Dict[str, Any]]] = self._graph.get_edge_data(u, v)
        if not data:
            return []
        return [attributes["edge"] for attributes in data.values()]

    def get_edge(self, u: Node, v: Node) -> Optional[Edge]:
        edges = self.edges_between(u, v)
        return edges[0] if edges else None

    def neighbors(self, node: Node) -> Iterator[Node]:
        return iter(self._graph.neighbors(node))

    def connected_component(self, node: Node) -> Set[Node]:
        return nx.node_connected_component(self._graph, node)

    def number_of_vertices(self) -> int:
        return self._graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self._graph.number_of_edges()

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node: object) -> bool:
        return node in self._graph

    def __repr__(self) -> str:
        return f"Network({self.name!r}, vertices={self.number_of_vertices()}, edges={self.number_of_edges()})"
