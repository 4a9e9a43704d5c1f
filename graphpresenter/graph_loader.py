import json
import logging
import os
from xml.etree.ElementTree import ParseError

import networkx as nx

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".graphml", ".json", ".gexf")


class GraphLoadError(Exception):
    """Raised when a graph file cannot be read."""

    def __init__(self, path, reason):
        super().__init__(f"Cannot load graph from '{os.path.basename(path)}': {reason}")
        self.path = path
        self.reason = reason


def load_graph(path):
    """Reads a GraphML, GEXF or node-link JSON file into a networkx graph."""
    ext = os.path.splitext(path)[1].lower()
    try:
        if ext == ".graphml":
            graph = nx.read_graphml(path)
        elif ext == ".gexf":
            graph = nx.read_gexf(path)
        elif ext == ".json":
            with open(path, 'r') as f:
                data = json.load(f)
            # Accept both "links" (networkx default) and "edges" keyed files
            edges = "links" if "links" in data else "edges"
            graph = nx.node_link_graph(data, edges=edges)
        else:
            raise GraphLoadError(path, f"unsupported file type '{ext}'")
    except GraphLoadError:
        raise
    except (OSError, ValueError, KeyError, ParseError, nx.NetworkXError) as e:
        raise GraphLoadError(path, str(e)) from e

    logger.info("Loaded %s: %d nodes, %d edges", os.path.basename(path),
                graph.number_of_nodes(), graph.number_of_edges())
    return graph


def layout_positions(graph, width, height, seed=42):
    """Spring layout of `graph` centred on a width x height surface."""
    if graph.number_of_nodes() == 0:
        return {}
    scale = min(width, height) / 3
    pos = nx.spring_layout(graph, scale=scale, center=(width / 2, height / 2), iterations=50, seed=seed)
    return {key: (float(p[0]), float(p[1])) for key, p in pos.items()}
