import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .aligner import Aligner, IteratedLocalSearch
from .alignment import Alignment
from .network import Network
from .params import Parameters

logger = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]
ProgressCallback = Callable[[int, int], None]


@dataclass
class AlignmentResult:
    alignment: Alignment
    objective: int
    iterations: int
    cancelled: bool = False

    def build_network(self, params: Parameters) -> Network:
        return self.alignment.build_network(params.exceptions, params.connected, params.remove_leaf_exceptions)


def validate_networks(networks: Sequence[Network]) -> None:
    if len(networks) < 2:
        raise ValueError("At least two networks needed for finding MCS.")
    for index, network in enumerate(networks):
        if network.number_of_vertices() == 0:
            raise ValueError(f"Network {index} ({network.name!r}) has no nodes.")


def run_aligner(aligner: Aligner, max_nonimproving: int, cancelled: Optional[CancelCheck] = None,
                progress: Optional[ProgressCallback] = None) -> int:
    """
    Step an aligner until ``max_nonimproving`` consecutive steps brought no
    improvement or ``cancelled`` returns True. Cancellation is only checked
    between steps. Returns the number of steps taken.
    """
    iteration = 0
    nonimproving = 0
    while nonimproving < max_nonimproving and not (cancelled is not None and cancelled()):
        iteration += 1
        nonimproving += 1
        logger.debug(f"iteration: {iteration}")
        if aligner.step():
            nonimproving = 0
        if progress is not None:
            progress(iteration, aligner.best_objective())
    return iteration


def align_networks(networks: Sequence[Network], params: Optional[Parameters] = None,
                   cancelled: Optional[CancelCheck] = None,
                   progress: Optional[ProgressCallback] = None) -> AlignmentResult:
    """
    Align networks with iterated local search.

    With several restarts every run owns its own optimizer and random
    generator; the alignment with the highest objective wins, the earliest run
    on ties. Input networks are only read.
    """
    params = params or Parameters()
    validate_networks(networks)
    logger.info(f"Selected networks: {', '.join(str(network.name) for network in networks)}")

    best: Optional[AlignmentResult] = None
    total = 0
    for restart in range(params.restarts):
        seed = None if params.seed is None else params.seed + restart
        logger.info(f"Creating aligner (run {restart + 1} of {params.restarts})")
        aligner = IteratedLocalSearch(networks, params.perturbation, seed=seed,
                                      max_local_moves=params.max_local_moves)
        iterations = run_aligner(aligner, params.max_nonimproving, cancelled, progress)
        total += iterations
        logger.info(f"Run {restart + 1} finished after {iterations} iterations. "
                    f"Conserved edges: {aligner.best_objective()}.")
        if best is None or aligner.best_objective() > best.objective:
            best = AlignmentResult(aligner.best_alignment(), aligner.best_objective(), 0)
        if cancelled is not None and cancelled():
            logger.info("Alignment cancelled")
            best.cancelled = True
            break

    if best is None:
        raise RuntimeError(f"No alignment run was performed (restarts={params.restarts})")
    best.iterations = total
    return best
