from .aligner import Aligner, IteratedLocalSearch
from .alignment import Alignment
from .consensus import build_network, consensus_records, edge_provenance, network_columns, node_provenance
from .driver import AlignmentResult, align_networks, run_aligner, validate_networks
from .network import Edge, Network, Node
from .params import Parameters

__version__ = "0.1.0"
