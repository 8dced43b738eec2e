import json
import logging
from typing import Any, Dict, List, Tuple

from .network import Network, Node

logger = logging.getLogger(__name__)


def _node_entry(entry: Any, i: int) -> Tuple[str, str]:
    if isinstance(entry, str):
        return entry, entry
    if isinstance(entry, dict) and isinstance(entry.get("id"), str):
        name = entry.get("name")
        return entry["id"], entry["id"] if name is None else str(name)
    raise ValueError(
        f"In network {i}, each node must be a string or a dictionary with a string 'id'. Found: {entry}"
    )


def network_from_data(data: Dict[str, Any], i: int = 0) -> Network:
    """
    Build a Network from one entry of the ``networks`` list.

    Nodes may be strings or {"id", "name"} dictionaries. Without a ``nodes``
    list the nodes are created from the edge endpoints in order of appearance.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Network {i} should be a dictionary. Found: {data}")
    name = data.get("name", f"network_{i + 1}")
    nodes = data.get("nodes")
    edges = data.get("edges", [])
    if nodes is not None and not isinstance(nodes, list):
        raise ValueError(f"In network {i}, 'nodes' should be a list")
    if not isinstance(edges, list):
        raise ValueError(f"In network {i}, 'edges' should be a list")

    network = Network(name=str(name))
    for entry in nodes or []:
        label, node_name = _node_entry(entry, i)
        try:
            network.add_vertex(Node(label, name=node_name))
        except ValueError:
            raise ValueError(f"In network {i}, node '{label}' appears more than once") from None

    for edge in edges:
        if not isinstance(edge, dict) or "source" not in edge or "target" not in edge:
            raise ValueError(
                f"In network {i}, each edge must be a dictionary with keys 'source' and 'target'. Found: {edge}"
            )
        endpoints = []
        for key in ("source", "target"):
            label = str(edge[key])
            node = network.get_vertex(label)
            if node is None:
                if nodes is not None:
                    raise ValueError(f"In network {i}, edge {edge} references unknown node '{label}'")
                node = Node(label)
                network.add_vertex(node)
            endpoints.append(node)
        label = edge.get("label")
        network.add_edge(endpoints[0], endpoints[1], label=None if label is None else str(label))

    logger.debug(f"Loaded {network}")
    return network


def networks_from_data(data: Dict[str, Any]) -> Tuple[List[str], List[Network]]:
    if not isinstance(data, dict):
        raise ValueError("Input should be a dictionary with a 'networks' list")
    entries = data.get("networks", [])
    if not isinstance(entries, list):
        raise ValueError("networks should be a list")
    networks = [network_from_data(entry, i) for i, entry in enumerate(entries)]
    return [network.name for network in networks], networks


def load_networks_from_json(file_path: str) -> Tuple[List[str], List[Network]]:
    with open(file_path, 'r') as f:
        data = json.load(f)
    return networks_from_data(data)
