import logging
from typing import Optional

import matplotlib.pyplot as plt
import networkx as nx

from .network import Network

logger = logging.getLogger(__name__)


def draw_network(network: Network, path: Optional[str] = None, show: bool = False, seed: int = 0) -> plt.Figure:
    """
    Draw a network with a spring layout.

    Edges are colored by their number of exceptions, darkest for edges present
    in every network. Vertices are labeled with their display names. The
    figure is saved to ``path`` when given and shown in a window with
    ``show``.
    """
    graph = network.graph
    fig, ax = plt.subplots(figsize=(8, 8))
    ax.axis("off")
    if graph.number_of_nodes() == 0:
        logger.info("Nothing to draw: the network is empty")
    else:
        layout = nx.spring_layout(graph, seed=seed)
        exceptions = [data["edge"].exceptions for _, _, data in graph.edges(data=True)]
        nx.draw_networkx_nodes(graph, layout, ax=ax, node_size=300, node_color="#c6dbef")
        nx.draw_networkx_labels(graph, layout, labels={node: node.name for node in graph.nodes}, ax=ax, font_size=8)
        if exceptions:
            nx.draw_networkx_edges(graph, layout, ax=ax, edge_color=exceptions, edge_cmap=plt.cm.Greys_r,
                                   edge_vmin=0, edge_vmax=max(exceptions) + 1, width=2)

    if path:
        fig.savefig(path, bbox_inches="tight")
        logger.info(f"Saved drawing to {path}")
    if show:
        plt.show()
    return fig
