import logging
import random
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .network import Network, Node

logger = logging.getLogger(__name__)

Column = Tuple[Optional[Node], ...]
ColumnPair = Tuple[int, int]


class _Topology:
    """
    Read-only adjacency of the input networks, shared by every copy of an alignment.

    Parallel edges are collapsed: two nodes are adjacent in a network if at
    least one edge connects them. A self-loop makes a node adjacent to itself.
    """

    __slots__ = ("adjacency", "total")

    def __init__(self, networks: Sequence[Network]) -> None:
        self.adjacency: List[Dict[Node, Set[Node]]] = []
        self.total = 0
        for network in networks:
            neighbors: Dict[Node, Set[Node]] = {node: set() for node in network.vertices()}
            for edge in network.edges():
                neighbors[edge.source].add(edge.target)
                neighbors[edge.target].add(edge.source)
            self.total += sum(
                len(adj) + (1 if node in adj else 0) for node, adj in neighbors.items()
            ) // 2
            self.adjacency.append(neighbors)


class Alignment:
    """
    Global alignment of k networks as an ordered sequence of columns.

    Column ``p`` holds, for every network ``i``, either a node of network ``i``
    or None (a gap). Every node of every network sits in exactly one column.
    The alignment keeps track of how many networks induce each adjacency
    between two columns, which gives the conserved-edge objective in constant
    time and lets a swap report its effect on the objective.
    """

    def __init__(self, networks: Sequence[Network],
                 rows: Optional[Sequence[Sequence[Optional[Node]]]] = None) -> None:
        if not networks:
            raise ValueError("An alignment needs at least one network")
        self.networks: Tuple[Network, ...] = tuple(networks)
        self._topology = _Topology(self.networks)
        self._rows, self.size = self._seed_rows(rows)
        self._positions: List[Dict[Node, int]] = [
            {node: p for p, node in enumerate(row) if node is not None} for row in self._rows
        ]
        self._column_adjacency: List[Dict[int, int]] = [{} for _ in range(self.size)]
        self._distinct = 0
        for index, position in enumerate(self._positions):
            for u, v in self._adjacent_pairs(index):
                self._link(position[u], position[v])
        logger.debug(f"Seeded alignment of {self.k} networks with {self.size} columns, objective {self.objective}")

    @classmethod
    def shuffled(cls, networks: Sequence[Network], rng: Optional[random.Random] = None) -> "Alignment":
        rng = rng or random.Random()
        rows = []
        for network in networks:
            row: List[Optional[Node]] = list(network.vertices())
            rng.shuffle(row)
            rows.append(row)
        return cls(networks, rows)

    def _seed_rows(self, rows: Optional[Sequence[Sequence[Optional[Node]]]]) -> Tuple[List[List[Optional[Node]]], int]:
        if rows is None:
            rows = [network.vertices() for network in self.networks]
        if len(rows) != len(self.networks):
            raise ValueError(f"Expected {len(self.networks)} rows, got {len(rows)}")

        seeded: List[List[Optional[Node]]] = []
        for index, (network, row) in enumerate(zip(self.networks, rows)):
            placed: Set[Node] = set()
            for node in row:
                if node is None:
                    continue
                if not network.contains_vertex(node):
                    raise ValueError(f"{node!r} in row {index} is not a vertex of network {network.name!r}")
                if node in placed:
                    raise ValueError(f"{node!r} is placed twice in row {index}")
                placed.add(node)
            seeded.append(list(row))

        # Drop columns that are gaps in every row.
        width = max(len(row) for row in seeded)
        for row in seeded:
            row.extend([None] * (width - len(row)))
        keep = [p for p in range(width) if any(row[p] is not None for row in seeded)]
        seeded = [[row[p] for p in keep] for row in seeded]

        # Nodes left out of the seed fill the gaps of their row, then new columns.
        size = max([len(keep)] + [len(network) for network in self.networks])
        for network, row in zip(self.networks, seeded):
            row.extend([None] * (size - len(row)))
            placed = {node for node in row if node is not None}
            missing = [node for node in network.vertices() if node not in placed]
            gaps = (p for p, node in enumerate(row) if node is None)
            for node, p in zip(missing, gaps):
                row[p] = node
        return seeded, size

    def _adjacent_pairs(self, index: int) -> List[Tuple[Node, Node]]:
        pairs = []
        seen: Set[Node] = set()
        for node, adj in self._topology.adjacency[index].items():
            seen.add(node)
            pairs.extend((node, other) for other in adj if other is node or other not in seen)
        return pairs

    # ----------------- Column adjacency bookkeeping -----------------
    def _link(self, a: int, b: int) -> None:
        count = self._column_adjacency[a].get(b, 0)
        if count == 0:
            self._distinct += 1
        self._column_adjacency[a][b] = count + 1
        self._column_adjacency[b][a] = count + 1

    def _unlink(self, a: int, b: int) -> None:
        count = self._column_adjacency[a][b] - 1
        if count == 0:
            self._distinct -= 1
            del self._column_adjacency[a][b]
            self._column_adjacency[b].pop(a, None)
        else:
            self._column_adjacency[a][b] = count
            self._column_adjacency[b][a] = count

    # ----------------- Queries -----------------
    @property
    def k(self) -> int:
        return len(self.networks)

    @property
    def objective(self) -> int:
        """
        Conserved-edge score: the sum over adjacent column pairs of
        (conservation - 1). With two networks this is the number of edges
        present in both.
        """
        return self._topology.total - self._distinct

    def columns(self) -> List[Column]:
        return [self.column(p) for p in range(self.size)]

    def column(self, position: int) -> Column:
        return tuple(row[position] for row in self._rows)

    def row(self, index: int) -> List[Optional[Node]]:
        return list(self._rows[index])

    def node_at(self, index: int, position: int) -> Optional[Node]:
        return self._rows[index][position]

    def position_of(self, index: int, node: Node) -> int:
        return self._positions[index][node]

    def neighbors(self, index: int, node: Node) -> Set[Node]:
        """Distinct neighbors of ``node`` in network ``index``."""
        return self._topology.adjacency[index][node]

    def adjacent_columns(self, position: int) -> List[int]:
        return list(self._column_adjacency[position])

    def conservation(self, a: int, b: int) -> int:
        return self._column_adjacency[a].get(b, 0)

    def adjacencies(self) -> List[Tuple[ColumnPair, int]]:
        return sorted(
            ((a, b), count)
            for a, adj in enumerate(self._column_adjacency)
            for b, count in adj.items()
            if a <= b
        )

    # ----------------- Moves -----------------
    def swap(self, index: int, p: int, q: int) -> int:
        """
        Exchange the entries of network ``index`` at columns p and q.

        Returns the change of the objective. Swapping the same columns again
        restores the previous state.
        """
        if p == q:
            return 0
        row = self._rows[index]
        u, v = row[p], row[q]
        if u is None and v is None:
            return 0

        adjacency = self._topology.adjacency[index]
        position = self._positions[index]
        incident: List[Tuple[Node, Node]] = []
        if u is not None:
            incident.extend((u, w) for w in adjacency[u])
        if v is not None:
            incident.extend((v, w) for w in adjacency[v] if w is not u)

        before = self._distinct
        for x, w in incident:
            self._unlink(position[x], position[w])
        row[p], row[q] = v, u
        if u is not None:
            position[u] = q
        if v is not None:
            position[v] = p
        for x, w in incident:
            self._link(position[x], position[w])
        return before - self._distinct

    def copy(self) -> "Alignment":
        clone = Alignment.__new__(Alignment)
        clone.networks = self.networks
        clone._topology = self._topology
        clone.size = self.size
        clone._rows = [list(row) for row in self._rows]
        clone._positions = [dict(position) for position in self._positions]
        clone._column_adjacency = [dict(adj) for adj in self._column_adjacency]
        clone._distinct = self._distinct
        return clone

    def build_network(self, exceptions_limit: int = 0, require_connected: bool = False,
                      remove_leaf_exceptions: bool = False) -> Network:
        from .consensus import build_network

        return build_network(self, exceptions_limit, require_connected, remove_leaf_exceptions)

    def __repr__(self) -> str:
        return f"Alignment(k={self.k}, size={self.size}, objective={self.objective})"
