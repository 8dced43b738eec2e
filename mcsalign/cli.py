import argparse
import logging
from typing import Any, Dict, List, Optional

from .consensus import consensus_records
from .driver import align_networks
from .loader import load_networks_from_json, networks_from_data
from .params import Parameters, add_alignment_arguments

logger = logging.getLogger(__name__)

DEMO_DATA: Dict[str, Any] = {
    "networks": [
        {
            "name": "yeast",
            "nodes": ["y1", "y2", "y3", "y4", "y5"],
            "edges": [
                {"source": "y1", "target": "y2", "label": "pp"},
                {"source": "y2", "target": "y3", "label": "pp"},
                {"source": "y3", "target": "y1", "label": "pp"},
                {"source": "y3", "target": "y4", "label": "pd"},
                {"source": "y4", "target": "y5", "label": "pp"}
            ]
        },
        {
            "name": "fly",
            "nodes": ["f1", "f2", "f3", "f4", "f5", "f6"],
            "edges": [
                {"source": "f6", "target": "f4", "label": "pp"},
                {"source": "f4", "target": "f2", "label": "pp"},
                {"source": "f2", "target": "f6", "label": "pp"},
                {"source": "f2", "target": "f1", "label": "pd"},
                {"source": "f1", "target": "f3", "label": "pp"},
                {"source": "f3", "target": "f5", "label": "pp"}
            ]
        },
        {
            "name": "worm",
            "nodes": ["w1", "w2", "w3", "w4"],
            "edges": [
                {"source": "w1", "target": "w2", "label": "pp"},
                {"source": "w2", "target": "w3", "label": "pp"},
                {"source": "w3", "target": "w4", "label": "pp"},
                {"source": "w4", "target": "w1", "label": "pp"}
            ]
        }
    ]
}


# ----------------- Logging Configuration -----------------
def configure_logging(log_level: str, log_file: Optional[str] = None) -> None:
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format="%(levelname)s: %(message)s",
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Align multiple networks and build their consensus network.")
    parser.add_argument("--log-level", type=str, default="info",
                        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default is INFO.")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Optional file to output logs.")
    parser.add_argument("--input", type=str, default=None,
                        help="Path to JSON file containing a 'networks' list.")
    parser.add_argument("--draw", type=str, default=None,
                        help="Optional image file for a drawing of the consensus network.")
    add_alignment_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level, args.log_file)
    except ValueError as e:
        logger.error(f"Invalid parameters: {e}")
        return 1

    try:
        params = Parameters.from_args(args)
    except ValueError as e:
        logger.error(f"Invalid parameters: {e}")
        return 1

    if args.input:
        try:
            names, networks = load_networks_from_json(args.input)
            logger.info(f"Loaded input from {args.input}")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load input data: {e}")
            return 1
    else:
        names, networks = networks_from_data(DEMO_DATA)
        logger.info("No input file provided. Using default test data.")

    def report(iteration: int, objective: int) -> None:
        logger.info(f"Iteration: {iteration}. Conserved edges: {objective}.")

    try:
        result = align_networks(networks, params, progress=report)
    except ValueError as e:
        logger.error(f"Alignment failed: {e}")
        return 1

    consensus = result.build_network(params)
    node_records, edge_records = consensus_records(consensus, result.alignment, names)

    logger.info(f"Final conserved-edge score: {result.objective} after {result.iterations} iterations")
    logger.info("Consensus nodes:")
    for record in node_records:
        logger.info(f"  {record}")
    logger.info("Consensus edges:")
    for record in edge_records:
        logger.info(f"  {record}")

    if args.draw:
        from .plot import draw_network

        draw_network(consensus, args.draw)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
