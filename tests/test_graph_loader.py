import json

import networkx as nx
import pytest

from graphpresenter.graph_loader import GraphLoadError, layout_positions, load_graph


def _sample_graph():
    graph = nx.Graph()
    graph.add_node("a", label="Alpha")
    graph.add_node("b", label="Beta")
    graph.add_edge("a", "b")
    return graph


def test_load_graphml(tmp_path) -> None:
    path = tmp_path / "graph.graphml"
    nx.write_graphml(_sample_graph(), path)

    graph = load_graph(str(path))

    assert set(graph.nodes) == {"a", "b"}
    assert graph.nodes["a"]["label"] == "Alpha"
    assert graph.number_of_edges() == 1


def test_load_gexf(tmp_path) -> None:
    path = tmp_path / "graph.gexf"
    nx.write_gexf(_sample_graph(), path)

    graph = load_graph(str(path))

    assert graph.number_of_nodes() == 2
    assert graph.number_of_edges() == 1


@pytest.mark.parametrize("edges_key", ["links", "edges"])
def test_load_node_link_json(tmp_path, edges_key) -> None:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({
        "directed": False,
        "multigraph": False,
        "graph": {},
        "nodes": [{"id": "a", "label": "Alpha"}, {"id": "b"}],
        edges_key: [{"source": "a", "target": "b"}],
    }))

    graph = load_graph(str(path))

    assert graph.nodes["a"]["label"] == "Alpha"
    assert list(graph.edges) == [("a", "b")]


def test_unsupported_extension(tmp_path) -> None:
    path = tmp_path / "graph.csv"
    path.write_text("a,b\n")

    with pytest.raises(GraphLoadError, match="unsupported file type"):
        load_graph(str(path))


def test_malformed_json(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(GraphLoadError) as info:
        load_graph(str(path))
    assert info.value.path == str(path)
    assert "broken.json" in str(info.value)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(GraphLoadError):
        load_graph(str(tmp_path / "missing.graphml"))


def test_layout_positions_fill_the_surface() -> None:
    positions = layout_positions(nx.path_graph(5), 800, 600)

    assert set(positions) == set(range(5))
    for x, y in positions.values():
        assert 0 <= x <= 800
        assert 0 <= y <= 600


def test_layout_of_empty_graph() -> None:
    assert layout_positions(nx.Graph(), 800, 600) == {}
