from graphpresenter.common import ClickTarget
from graphpresenter.events import GraphEvents

from conftest import make_node


def test_node_click_reaches_subscriber() -> None:
    events = GraphEvents()
    received = []
    events.subscribe_to_node_clicks(received.append)
    node = make_node("a")

    events.publish_node_click(node, True, ClickTarget.UP)

    assert len(received) == 1
    assert received[0].node is node
    assert received[0].click_target == ClickTarget.UP
    assert received[0].is_double_click is True


def test_unsupported_click_target_is_dropped() -> None:
    events = GraphEvents()
    received = []
    events.subscribe_to_node_clicks(received.append)
    node = make_node("a", targets=[ClickTarget.UP])

    events.publish_node_click(node, False, ClickTarget.DOWN)
    events.publish_node_click(node, False, ClickTarget.CENTER)

    assert received == []


def test_link_clicks_are_not_filtered() -> None:
    events = GraphEvents()
    received = []
    events.subscribe_to_link_clicks(received.append)

    events.publish_link_click("link", False)

    assert [(e.link, e.is_double_click) for e in received] == [("link", False)]


def test_every_subscriber_receives_each_event() -> None:
    events = GraphEvents()
    first, second = [], []
    events.subscribe_to_node_clicks(first.append)
    events.subscribe_to_node_clicks(second.append)

    events.publish_node_click(make_node("a"), False, ClickTarget.CENTER)

    assert len(first) == 1
    assert len(second) == 1


def test_dispose_detaches_only_that_subscription() -> None:
    events = GraphEvents()
    received = []
    dispose = events.subscribe_to_node_clicks(received.append)
    events.subscribe_to_node_clicks(received.append)

    dispose()
    dispose() # second call is a no-op
    events.publish_node_click(make_node("a"), False, ClickTarget.CENTER)

    assert len(received) == 1
