import argparse
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_LOCAL_MOVES = 1000


@dataclass
class Parameters:
    """
    Options of an alignment run.

    perturbation: fraction of the columns randomly reassigned per network when
        the search escapes a local optimum (0 disables perturbation).
    max_nonimproving: number of consecutive steps without a new best after
        which the driver stops.
    exceptions: maximum number of networks allowed to lack an edge for it to
        still appear in the consensus network.
    connected: keep only the largest connected component of the consensus.
    remove_leaf_exceptions: prune leaves whose only edge has exceptions.
    max_local_moves: bound on the moves of one local search phase; None
        descends until a local optimum.
    seed: seed of the random generator; None for a fresh one.
    restarts: number of independent optimizer runs.
    """

    perturbation: float = 0.2
    max_nonimproving: int = 20
    exceptions: int = 0
    connected: bool = False
    remove_leaf_exceptions: bool = False
    max_local_moves: Optional[int] = DEFAULT_MAX_LOCAL_MOVES
    seed: Optional[int] = None
    restarts: int = 1

    def __post_init__(self) -> None:
        if not 0.0 <= self.perturbation <= 1.0:
            raise ValueError(f"perturbation must be between 0 and 1, got {self.perturbation}")
        if self.max_nonimproving < 0:
            raise ValueError(f"max_nonimproving must be non-negative, got {self.max_nonimproving}")
        if self.exceptions < 0:
            raise ValueError(f"exceptions must be non-negative, got {self.exceptions}")
        if self.max_local_moves is not None and self.max_local_moves < 1:
            raise ValueError(f"max_local_moves must be positive, got {self.max_local_moves}")
        if self.restarts < 1:
            raise ValueError(f"restarts must be at least 1, got {self.restarts}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Parameters":
        return cls(
            perturbation=args.perturbation,
            max_nonimproving=args.max_nonimproving,
            exceptions=args.exceptions,
            connected=args.connected,
            remove_leaf_exceptions=args.remove_leaf_exceptions,
            max_local_moves=args.max_local_moves,
            seed=args.seed,
            restarts=args.restarts,
        )


def add_alignment_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--perturbation", type=float, default=0.2,
                        help="Fraction of columns reassigned when escaping a local optimum. Default is 0.2.")
    parser.add_argument("--max-nonimproving", type=int, default=20,
                        help="Stop after this many iterations without improvement. Default is 20.")
    parser.add_argument("--exceptions", type=int, default=0,
                        help="Maximum number of networks allowed to miss a consensus edge. Default is 0.")
    parser.add_argument("--connected", action="store_true",
                        help="Keep only the largest connected component of the consensus network.")
    parser.add_argument("--remove-leaf-exceptions", action="store_true",
                        help="Prune leaves whose only edge is missing from some network.")
    parser.add_argument("--max-local-moves", type=int, default=DEFAULT_MAX_LOCAL_MOVES,
                        help=f"Bound on the moves of a local search phase. Default is {DEFAULT_MAX_LOCAL_MOVES}.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed of the random generator.")
    parser.add_argument("--restarts", type=int, default=1,
                        help="Number of independent alignment runs. Default is 1.")
