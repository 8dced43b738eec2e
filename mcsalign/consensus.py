import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .alignment import Alignment, Column, ColumnPair
from .network import Edge, Network, Node

logger = logging.getLogger(__name__)


# ----------------- Consensus Network -----------------
def column_vertex(column: Column, position: int) -> Node:
    """
    Create the consensus vertex of a column. Gaps contribute nothing to the
    label or the name.
    """
    real = [node for node in column if node is not None]
    return Node(
        ",".join(node.label for node in real),
        name=",".join(node.name for node in real),
        position=position,
    )


def _edge_label(alignment: Alignment, a: int, b: int) -> Optional[str]:
    for network, u, v in zip(alignment.networks, alignment.column(a), alignment.column(b)):
        if u is None or v is None:
            continue
        edge = network.get_edge(u, v)
        if edge is not None:
            return edge.label
    return None


def _is_exception_leaf(network: Network, vertex: Node) -> bool:
    if network.degree_of(vertex) != 1:
        return False
    return network.edges_of(vertex)[0].exceptions > 0


def prune_leaf_exceptions(network: Network) -> int:
    """
    Remove vertices of degree 1 whose only edge has exceptions, until no such
    vertex is left. Every round removes at least one vertex, so this
    terminates. Returns the number of removed vertices.
    """
    removed = 0
    leaves = [vertex for vertex in network.vertices() if _is_exception_leaf(network, vertex)]
    while leaves:
        for leaf in leaves:
            if network.contains_vertex(leaf) and _is_exception_leaf(network, leaf):
                network.remove_vertex(leaf)
                removed += 1
        leaves = [vertex for vertex in network.vertices() if _is_exception_leaf(network, vertex)]
    logger.debug(f"Pruned {removed} exception leaves")
    return removed


def remove_isolated(network: Network) -> int:
    isolated = [vertex for vertex in network.vertices() if network.degree_of(vertex) == 0]
    for vertex in isolated:
        network.remove_vertex(vertex)
    return len(isolated)


def keep_largest_component(network: Network) -> None:
    """
    Reduce the network to its largest connected component. Components are
    discovered in vertex order and the first one wins ties.
    """
    seen: Set[Node] = set()
    largest: Set[Node] = set()
    for vertex in network.vertices():
        if vertex in seen:
            continue
        component = network.connected_component(vertex)
        seen |= component
        if len(component) > len(largest):
            largest = component
    for vertex in network.vertices():
        if vertex not in largest:
            network.remove_vertex(vertex)


def build_network(alignment: Alignment, exceptions_limit: int = 0, require_connected: bool = False,
                  remove_leaf_exceptions: bool = False) -> Network:
    """
    Build the consensus network induced by an alignment.

    Every column pair adjacent in at least one input network becomes a
    consensus edge if no more than ``exceptions_limit`` networks lack the
    adjacency. Columns without a surviving edge do not become vertices. Leaf
    pruning, then the connectivity restriction are applied afterwards, and
    vertices left isolated by them are dropped. The alignment is not modified.
    """
    k = alignment.k
    kept: List[Tuple[ColumnPair, int]] = [
        (pair, conservation) for pair, conservation in alignment.adjacencies()
        if k - conservation <= exceptions_limit
    ]
    positions = sorted({p for (a, b), _ in kept for p in (a, b)})

    network = Network(name="consensus", unique_labels=False)
    vertices: Dict[int, Node] = {}
    for p in positions:
        vertices[p] = column_vertex(alignment.column(p), p)
        network.add_vertex(vertices[p])
    for (a, b), conservation in kept:
        edge = Edge(vertices[a], vertices[b], _edge_label(alignment, a, b),
                    conservation=conservation, exceptions=k - conservation)
        network.add_edge(vertices[a], vertices[b], edge)
    logger.debug(f"Consensus before filtering: {network.number_of_vertices()} vertices, "
                 f"{network.number_of_edges()} edges (exceptions limit {exceptions_limit})")

    if remove_leaf_exceptions:
        prune_leaf_exceptions(network)
    remove_isolated(network)
    if require_connected:
        keep_largest_component(network)
    remove_isolated(network)

    logger.info(f"Consensus network: {network.number_of_vertices()} vertices, {network.number_of_edges()} edges")
    return network


# ----------------- Provenance -----------------
def network_columns(names: Sequence[str]) -> List[str]:
    """
    Make network names usable as distinct provenance columns.

    The first occurrence of a name is kept as is, later occurrences get the
    lowest counter suffix not used by any other column or input name:
    ["a", "a", "a"] -> ["a", "a_1", "a_2"], ["a", "a", "a_1"] -> ["a", "a_2", "a_1"].
    """
    taken = set(names)
    seen: Set[str] = set()
    counters: Dict[str, int] = {}
    columns = []
    for name in names:
        column = name
        if name in seen:
            count = counters.get(name, 1)
            while f"{name}_{count}" in taken:
                count += 1
            counters[name] = count + 1
            column = f"{name}_{count}"
            taken.add(column)
        seen.add(name)
        columns.append(column)
    return columns


def node_provenance(alignment: Alignment, vertex: Node) -> Column:
    if vertex.position is None:
        raise ValueError(f"{vertex!r} is not a consensus vertex")
    return alignment.column(vertex.position)


def edge_provenance(alignment: Alignment, edge: Edge) -> List[Optional[Edge]]:
    """For every input network, the edge behind a consensus edge, or None."""
    sources = node_provenance(alignment, edge.source)
    targets = node_provenance(alignment, edge.target)
    provenance: List[Optional[Edge]] = []
    for network, u, v in zip(alignment.networks, sources, targets):
        if u is None or v is None:
            provenance.append(None)
        else:
            provenance.append(network.get_edge(u, v))
    return provenance


def consensus_records(consensus: Network, alignment: Alignment,
                      names: Sequence[str]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Flatten a consensus network into node and edge records for a host
    application. Vertices are identified by their alignment column. Node
    records carry, per input network, the name of the aligned node; gaps
    leave the key out.
    """
    if len(names) != alignment.k:
        raise ValueError(f"Expected {alignment.k} network names, got {len(names)}")
    columns = network_columns(names)

    node_records: List[Dict[str, Any]] = []
    known: Set[int] = set()
    for vertex in consensus.vertices():
        record: Dict[str, Any] = {"id": vertex.position, "label": vertex.label, "name": vertex.name}
        for column, node in zip(columns, node_provenance(alignment, vertex)):
            if node is not None:
                record[column] = node.name
        node_records.append(record)
        known.add(vertex.position)

    edge_records: List[Dict[str, Any]] = []
    for edge in consensus.edges():
        if edge.source.position not in known or edge.target.position not in known:
            raise RuntimeError("Edge connected to missing node.")
        edge_records.append({
            "source": edge.source.position,
            "target": edge.target.position,
            "label": edge.label,
            "conservation": edge.conservation,
            "exceptions": edge.exceptions,
        })
    return node_records, edge_records
