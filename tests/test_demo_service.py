import networkx as nx

from graphpresenter.common import ClickTarget
from graphpresenter.demo_service import DemoGraphService


def _start(service):
    return next(iter(service.nodes.values()))


def test_starts_with_one_centred_node() -> None:
    service = DemoGraphService(800, 600)
    start = _start(service)

    assert list(service.nodes) == ["1"]
    assert (start.x, start.y) == (400, 300)
    assert service.links == {}


def test_insert_related_nodes() -> None:
    service = DemoGraphService(800, 600)
    start = _start(service)

    created = service.insert_related_nodes(start, 0, -50)

    assert [n.id for n in created] == ["2", "3", "4"]
    assert [(n.x, n.y) for n in created] == [(400, 250), (410, 260), (420, 270)]
    assert len(service.links) == 3
    assert all(link.source is start for link in service.links.values())
    assert [link.target for link in service.links.values()] == created


def test_expand_uses_click_direction() -> None:
    service = DemoGraphService(800, 600)
    start = _start(service)

    left = service.expand(start, ClickTarget.LEFT)
    assert (left[0].x, left[0].y) == (350, 300)
    assert service.expand(start, ClickTarget.CENTER) == []


def test_demo_nodes_support_directional_clicks_only() -> None:
    start = _start(DemoGraphService())
    assert ClickTarget.UP in start.supported_click_targets
    assert ClickTarget.CENTER not in start.supported_click_targets


def test_style_tags_cycle() -> None:
    service = DemoGraphService()
    created = service.insert_related_nodes(_start(service), 0, 50, count=4)
    assert len({tuple(n.style_tags) for n in created}) == 4
    assert all(tag.startswith("fill-") for n in created for tag in n.style_tags)


def test_clear_keeps_pinned_nodes_and_their_links() -> None:
    service = DemoGraphService()
    start = _start(service)
    first, second, third = service.insert_related_nodes(start, 0, 50)
    start.pin_at(0, 0)
    first.pin_at(10, 10)

    service.clear(keep_pinned=True)

    assert set(service.nodes) == {start.id, first.id}
    assert [(link.source_id, link.target_id) for link in service.links.values()] == [(start.id, first.id)]


def test_clear_reseeds_the_graph() -> None:
    service = DemoGraphService()
    service.insert_related_nodes(_start(service), 0, 50)

    service.clear()

    assert list(service.nodes) == ["5"]
    assert service.links == {}


def test_remove_node_drops_its_links() -> None:
    service = DemoGraphService()
    start = _start(service)
    created = service.insert_related_nodes(start, 0, 50)

    service.remove_node(created[0])

    assert len(service.links) == 2
    assert not any(link.is_broken for link in service.links.values())


def test_removing_the_last_node_reseeds() -> None:
    service = DemoGraphService()
    service.remove_node(_start(service))
    assert list(service.nodes) == ["2"]


def test_import_graph() -> None:
    graph = nx.Graph()
    graph.add_node("x", label="Server")
    graph.add_node("y")
    graph.add_edge("x", "y", label="talks to")
    service = DemoGraphService()

    service.import_graph(graph, {"x": (1, 2), "y": (3, 4)})

    nodes = list(service.nodes.values())
    assert [n.label for n in nodes] == ["Server", "y"]
    assert [(n.x, n.y) for n in nodes] == [(1.0, 2.0), (3.0, 4.0)]
    link, = service.links.values()
    assert link.label == "talks to"
    assert (link.source, link.target) == (nodes[0], nodes[1])


def test_import_empty_graph_keeps_a_start_node() -> None:
    service = DemoGraphService()
    service.import_graph(nx.Graph())
    assert len(service.nodes) == 1
