import json

import pytest
from PyQt6.QtWidgets import QMessageBox

from graphpresenter.common import ClickTarget, NodeClickEvent
from graphpresenter.config import Settings
from graphpresenter.main import MainWindow
from graphpresenter.ui.preferences import PreferencesDialog


@pytest.fixture
def window(qapp):
    w = MainWindow(Settings())
    w.graph_widget.timer.stop()
    yield w
    w.close()


def test_starts_with_the_demo_graph(window) -> None:
    assert len(window.graph_widget.node_renderer.views) == 1


def test_directional_click_expands_the_graph(window) -> None:
    start = next(iter(window.service.nodes.values()))

    window.graph_widget.events.publish_node_click(start, False, ClickTarget.RIGHT)

    assert len(window.graph_widget.node_renderer.views) == 4
    assert len(window.graph_widget.link_renderer.views) == 3


def test_centre_click_shows_details(window) -> None:
    start = next(iter(window.service.nodes.values()))
    window.on_node_clicked(NodeClickEvent(start, ClickTarget.CENTER, False))
    assert window.info_label.text() == start.details


def test_remove_unpinned_nodes(window) -> None:
    start = next(iter(window.service.nodes.values()))
    window.service.expand(start, ClickTarget.UP)
    start.pin_at(400, 300)

    window.clear_graph(True)

    assert list(window.graph_widget.node_renderer.views) == [start.id]


def test_load_graph_file(window, tmp_path) -> None:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({
        "directed": False, "multigraph": False, "graph": {},
        "nodes": [{"id": "a"}, {"id": "b"}, {"id": "c"}],
        "links": [{"source": "a", "target": "b"}, {"source": "b", "target": "c"}],
    }))

    window.load_graph_file(str(path))

    assert len(window.graph_widget.node_renderer.views) == 3
    assert len(window.graph_widget.link_renderer.views) == 2


def test_load_error_is_reported(window, tmp_path, monkeypatch) -> None:
    shown = []
    monkeypatch.setattr(QMessageBox, "critical", lambda *args: shown.append(args[2]))
    path = tmp_path / "broken.graphml"
    path.write_text("<graphml")

    window.load_graph_file(str(path))

    assert len(shown) == 1
    assert "broken.graphml" in shown[0]
    assert len(window.graph_widget.node_renderer.views) == 1


def test_apply_preferences_switches_theme(window) -> None:
    window.apply_preferences("Light")
    assert window.current_theme == "Light"
    assert window.graph_widget.theme.name == "Light"


def test_preferences_dialog_emits_theme(qapp) -> None:
    dialog = PreferencesDialog(current_theme="Dark")
    applied = []
    dialog.settings_applied.connect(applied.append)

    dialog.theme_combo.setCurrentText("Light")
    dialog.on_save()

    assert applied == ["Light"]
