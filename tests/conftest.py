import os

# Widgets need a platform plugin; tests never open a real window
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from graphpresenter.common import ClickTarget, GraphNode


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def make_node(uid, x=None, y=None, targets=tuple(ClickTarget), label=None, tags=None):
    node = GraphNode(uid, icon="f013", label=label or f"Node {uid}", details=f"Details of {uid}",
                     supported_click_targets=targets, style_tags=tags)
    node.x = x
    node.y = y
    return node
