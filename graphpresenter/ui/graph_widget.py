import logging

from PyQt6.QtWidgets import QApplication, QToolTip, QWidget
from PyQt6.QtCore import QPointF, QTimer, Qt
from PyQt6.QtGui import QFont, QFontMetricsF, QPainter

from graphpresenter.events import GraphEvents
from graphpresenter.graph_engine import CenterForce, CollideForce, GraphEngine, LinkForce, ManyBodyForce
from graphpresenter.ui.link_renderer import LinkRenderer
from graphpresenter.ui.node_renderer import NodeRenderer
from graphpresenter.ui.theme import get_theme
from graphpresenter.ui.viewport import ViewportController

logger = logging.getLogger(__name__)


class GraphWidget(QWidget):
    """Drawing surface that lays out and renders a graph and reports clicks.

    Links are drawn below nodes. Feed it data with `update_graph`; listen
    to `events` for node and link clicks.
    """

    def __init__(self, parent=None, size=None, frame_ms=16, theme="Dark"):
        super().__init__(parent)
        if size is not None:
            self.resize(*size)
        width = self.width()
        height = self.height()

        self.theme = get_theme(theme)
        self.events = GraphEvents(self)

        # Some of these forces may need tuning depending on the nature of the graph
        self.engine = GraphEngine()
        self.engine.force("charge", ManyBodyForce())
        self.engine.force("center", CenterForce(width / 2, height / 2, strength=0.3))
        self.engine.force("link", LinkForce(distance=100, strength=0.5, iterations=1))
        self.engine.force("collide", CollideForce(radius=25, strength=1, iterations=1))

        label_font = QFont()
        label_font.setPixelSize(8)
        self._label_metrics = QFontMetricsF(label_font)

        self.link_renderer = LinkRenderer(self.engine, self.events, self._label_metrics.horizontalAdvance)
        self.node_renderer = NodeRenderer(self.engine, self.events)
        self.viewport = ViewportController(width, height, self)
        self.viewport.changed.connect(self.update)

        self.engine.on_tick(self.on_tick)

        # Update energy and how long it takes to cool down again
        self.update_alpha_target = 0.2
        self.cool_down_ms = 500
        self._cool_down_timer = QTimer(self)
        self._cool_down_timer.setSingleShot(True)
        self._cool_down_timer.timeout.connect(self._cool_down)

        # Interaction
        self.drag_threshold = QApplication.startDragDistance()
        self._press = None # (screen pos, node id, click target, link id)
        self._dragging_node = None
        self._panning = False
        self._last_mouse_pos = QPointF()
        self._hovered_node = None
        self._pending_click = None
        self._click_timer = QTimer(self)
        self._click_timer.setSingleShot(True)
        self._click_timer.timeout.connect(self._fire_pending_click)

        # Physics Timer
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.physics_loop)
        self.timer.start(frame_ms)

        self.setMouseTracking(True)

    def update_graph(self, graph_data):
        # Links go first so none of them points at a node that is already gone
        self.link_renderer.update_links(graph_data.links)
        self.node_renderer.update_nodes(graph_data.nodes)
        if self._hovered_node not in self.node_renderer.views:
            self._hovered_node = None

        self.engine.set_alpha_target(self.update_alpha_target).restart()
        self._cool_down_timer.start(self.cool_down_ms)
        logger.info("Graph updated: %d nodes, %d links", len(graph_data.nodes), len(graph_data.links))

    def _cool_down(self):
        self.engine.set_alpha_target(0).restart()

    def physics_loop(self):
        self.engine.tick()

    def on_tick(self):
        self.node_renderer.tick_nodes()
        self.link_renderer.tick_links()
        self.update()

    def set_theme(self, name):
        self.theme = get_theme(name)
        self.update()

    def reset_view(self):
        self.viewport.reset()

    def resizeEvent(self, event):
        center = self.engine.force("center")
        center.x = self.width() / 2
        center.y = self.height() / 2
        self.viewport.resize(self.width(), self.height())
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)

        painter.fillRect(self.rect(), self.theme.background)

        painter.setTransform(self.viewport.qtransform())
        self.link_renderer.paint(painter, self.theme)
        self.node_renderer.paint(painter, self.theme)

        self.viewport.paint_buttons(painter, self.theme)
        painter.end()

    # --- Mouse ---

    def mousePressEvent(self, event):
        mouse_pos = event.position()
        if event.button() != Qt.MouseButton.LeftButton:
            return

        button = self.viewport.button_at(mouse_pos)
        if button is not None:
            self.viewport.press_button(button)
            return

        scene_pos = self.viewport.to_scene(mouse_pos)
        hit = self.node_renderer.hit_test(scene_pos.x(), scene_pos.y())
        if hit is not None:
            node_id, target = hit
            self._press = (mouse_pos, node_id, target, None)
            return

        link_id = self.link_renderer.hit_test(scene_pos.x(), scene_pos.y())
        if link_id is not None:
            self._press = (mouse_pos, None, None, link_id)
            return

        self._panning = True
        self._last_mouse_pos = mouse_pos
        self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event):
        mouse_pos = event.position()

        if self._panning:
            delta = mouse_pos - self._last_mouse_pos
            self.viewport.pan_by(delta.x(), delta.y())
            self._last_mouse_pos = mouse_pos
            return

        scene_pos = self.viewport.to_scene(mouse_pos)

        if self._dragging_node is not None:
            self.node_renderer.drag(self._dragging_node, scene_pos.x(), scene_pos.y())
            self.update()
            return

        if self._press is not None:
            press_pos, node_id, target, _ = self._press
            moved = (mouse_pos - press_pos).manhattanLength()
            if node_id is not None and target is None and moved >= self.drag_threshold:
                start = self.viewport.to_scene(press_pos)
                if self.node_renderer.drag_start(node_id, start.x(), start.y(), on_outline=True):
                    self._dragging_node = node_id
                    self.setCursor(Qt.CursorShape.PointingHandCursor)
                    self.node_renderer.drag(node_id, scene_pos.x(), scene_pos.y())
                    self.update()
            return

        self._update_hover(scene_pos)

    def mouseReleaseEvent(self, event):
        if self._panning:
            self._panning = False
            self.setCursor(Qt.CursorShape.ArrowCursor)
            return

        if self._dragging_node is not None:
            self.node_renderer.drag_end(self._dragging_node)
            self._dragging_node = None
            self._press = None
            self.setCursor(Qt.CursorShape.ArrowCursor)
            return

        if self._press is not None:
            # An earlier click still waiting belongs to another gesture
            self._fire_pending_click()
            # Held back until we know this is not the first half of a double-click
            self._pending_click = self._press[1:]
            self._press = None
            self._click_timer.start(QApplication.doubleClickInterval())

    def mouseDoubleClickEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._click_timer.stop()
        self._pending_click = None
        self._press = None

        mouse_pos = event.position()
        button = self.viewport.button_at(mouse_pos)
        if button is not None:
            # Second press on a zoom button
            self.viewport.press_button(button)
            return

        scene_pos = self.viewport.to_scene(mouse_pos)
        hit = self.node_renderer.hit_test(scene_pos.x(), scene_pos.y())
        if hit is not None:
            self.dispatch_click(hit[0], hit[1], None, is_double_click=True)
            return

        link_id = self.link_renderer.hit_test(scene_pos.x(), scene_pos.y())
        if link_id is not None:
            self.dispatch_click(None, None, link_id, is_double_click=True)
        # No double-click zoom on empty space

    def _fire_pending_click(self):
        if self._pending_click is None:
            return
        node_id, target, link_id = self._pending_click
        self._pending_click = None
        self.dispatch_click(node_id, target, link_id, is_double_click=False)

    def dispatch_click(self, node_id, target, link_id, is_double_click):
        """Routes one completed click to the renderer that owns the hit element."""
        if node_id is not None:
            if target is not None:
                self.node_renderer.click_affordance(node_id, target, is_double_click)
            elif is_double_click:
                self.node_renderer.double_click(node_id)
            else:
                self.node_renderer.click(node_id)
        elif link_id is not None:
            if is_double_click:
                self.link_renderer.double_click(link_id)
            else:
                self.link_renderer.click(link_id)
        self.update()

    def _update_hover(self, scene_pos):
        x, y = scene_pos.x(), scene_pos.y()
        renderer = self.node_renderer

        if self._hovered_node is not None:
            # Still inside the node or one of its affordances
            if renderer.node_at(x, y, renderer.action_radius) == self._hovered_node:
                self._update_tooltip(x, y)
                return
            renderer.hover_leave(self._hovered_node)
            self._hovered_node = None
            self.update()

        node_id = renderer.node_at(x, y)
        if node_id is not None:
            renderer.hover_enter(node_id)
            self._hovered_node = node_id
            self.update()
        self._update_tooltip(x, y)

    def _update_tooltip(self, x, y):
        text = self.node_renderer.tooltip_at(x, y) or self.link_renderer.tooltip_at(x, y)
        if text:
            self.setToolTip(text)
        else:
            self.setToolTip("")
            QToolTip.hideText()

    def wheelEvent(self, event):
        # Zoom about the cursor
        self.viewport.wheel(event.angleDelta().y(), event.position())

    def leaveEvent(self, event):
        if self._hovered_node is not None:
            self.node_renderer.hover_leave(self._hovered_node)
            self._hovered_node = None
            self.update()
        super().leaveEvent(event)
