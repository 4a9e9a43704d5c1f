import logging

from PyQt6.QtCore import QObject, pyqtSignal

from graphpresenter.common import LinkClickEvent, NodeClickEvent

logger = logging.getLogger(__name__)


class GraphEvents(QObject):
    """Click events raised by one graph surface.

    Each GraphWidget owns its own channel; consumers subscribe through
    the `subscribe_*` helpers and keep the returned disposer.
    """
    node_clicked = pyqtSignal(object) # NodeClickEvent
    link_clicked = pyqtSignal(object) # LinkClickEvent

    def publish_link_click(self, link, is_double_click):
        self.link_clicked.emit(LinkClickEvent(link, is_double_click))

    def publish_node_click(self, node, is_double_click, click_target):
        if click_target not in node.supported_click_targets:
            logger.debug("Node %s does not support %s clicks", node.id, click_target.name)
            return
        self.node_clicked.emit(NodeClickEvent(node, click_target, is_double_click))

    def subscribe_to_link_clicks(self, handler):
        return self._subscribe(self.link_clicked, handler)

    def subscribe_to_node_clicks(self, handler):
        return self._subscribe(self.node_clicked, handler)

    def _subscribe(self, signal, handler):
        # Wrap so the same callable can be subscribed twice and detached independently
        def slot(event):
            handler(event)

        signal.connect(slot)
        state = {'connected': True}

        def dispose():
            if state['connected']:
                signal.disconnect(slot)
                state['connected'] = False

        return dispose
