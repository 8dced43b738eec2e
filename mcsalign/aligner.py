import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Set, Tuple

from .alignment import Alignment
from .network import Network, Node

logger = logging.getLogger(__name__)


class Aligner(ABC):
    """
    Search strategy over alignments of a fixed list of networks.

    A caller drives the search one ``step`` at a time and decides itself when
    to stop.
    """

    @abstractmethod
    def step(self) -> bool:
        """Run one unit of search; True iff a strictly better alignment was found."""

    @abstractmethod
    def best_objective(self) -> int:
        ...

    @abstractmethod
    def best_alignment(self) -> Alignment:
        ...


class IteratedLocalSearch(Aligner):
    """
    Iterated local search maximizing the conserved-edge objective.

    Each step descends from the current alignment by moving nodes to their best
    columns until a local optimum is reached or ``max_local_moves`` moves were
    made. It records the result if it beats the best so far, then perturbs the
    current alignment with random swaps. The search keeps drifting from the
    perturbed state; it never jumps back to the best.

    A swap exchanges the columns of two entries of one network. Candidate
    target columns for a node are the columns adjacent to the column of one
    of its neighbors, i.e. the places where one of its edges could be
    conserved.
    """

    def __init__(self, networks: Sequence[Network], perturbation: float = 0.2,
                 alignment: Optional[Alignment] = None, seed: Optional[int] = None,
                 max_local_moves: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.networks = tuple(networks)
        self.perturbation = perturbation
        self.max_local_moves = max_local_moves
        self.local_moves = 0
        self._rng = rng if rng is not None else random.Random(seed)
        if alignment is not None and alignment.networks != self.networks:
            raise ValueError("The seed alignment was built for different networks")
        self._current = alignment if alignment is not None else Alignment(self.networks)
        self._best = self._current.copy()
        self._best_objective = self._best.objective
        logger.debug(f"Initial alignment: {self._current}")

    def best_objective(self) -> int:
        return self._best_objective

    def best_alignment(self) -> Alignment:
        return self._best

    def current_alignment(self) -> Alignment:
        return self._current

    def step(self) -> bool:
        self.local_moves = self._local_search()
        objective = self._current.objective
        improved = objective > self._best_objective
        logger.debug(f"Local search made {self.local_moves} moves, objective {objective} (best {self._best_objective})")
        if improved:
            self._best = self._current.copy()
            self._best_objective = objective
        self._perturb()
        return improved

    # ----------------- Local search -----------------
    def _candidate_columns(self, index: int, p: int) -> Set[int]:
        current = self._current
        node = current.node_at(index, p)
        candidates: Set[int] = set()
        for neighbor in current.neighbors(index, node):
            candidates.update(current.adjacent_columns(current.position_of(index, neighbor)))
        candidates.discard(p)
        return candidates

    def _improve_node(self, index: int, node: Node) -> bool:
        """Apply the best improving swap of ``node``, if it has one."""
        current = self._current
        p = current.position_of(index, node)
        best_delta = 0
        best_q: Optional[int] = None
        for q in sorted(self._candidate_columns(index, p)):
            delta = current.swap(index, p, q)
            current.swap(index, p, q)
            if delta > best_delta:
                best_delta, best_q = delta, q
        if best_q is None:
            return False
        current.swap(index, p, best_q)
        return True

    def _local_search(self) -> int:
        """
        Sweep all nodes in random order, moving each one to its best column,
        until a whole sweep makes no move or the move budget is spent. Every
        move strictly raises the objective, so the sweeps terminate.
        """
        order: List[Tuple[int, Node]] = [
            (index, node) for index, network in enumerate(self.networks) for node in network.vertices()
        ]
        moves = 0
        moved = True
        while moved:
            moved = False
            self._rng.shuffle(order)
            for index, node in order:
                if self.max_local_moves is not None and moves >= self.max_local_moves:
                    return moves
                if self._improve_node(index, node):
                    moves += 1
                    moved = True
        return moves

    # ----------------- Perturbation -----------------
    def _perturb(self) -> None:
        size = self._current.size
        if self.perturbation <= 0 or size < 2:
            return
        count = max(1, int(round(self.perturbation * size)))
        columns: List[int] = list(range(size))
        for index in range(1, self._current.k):
            for _ in range(count):
                p, q = self._rng.sample(columns, 2)
                self._current.swap(index, p, q)
        logger.debug(f"Perturbed {count} columns per network, objective {self._current.objective}")
