import logging
import math
import re

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QFont, QPen

from graphpresenter.common import ClickTarget, reconcile
from graphpresenter.geometry import Point, describe_wedge_path, wedge_contains
from graphpresenter.ui.paths import to_painter_path
from graphpresenter.ui.theme import ICON_FONT_FAMILY

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\s*-\s*")

# target -> (angle clockwise from up, unit offset of the wedge centre, icon, title)
AFFORDANCES = {
    ClickTarget.UP: (0, Point(0, -1), "f0d8", "Expand Up"),
    ClickTarget.DOWN: (180, Point(0, 1), "f0d7", "Expand Down"),
    ClickTarget.RIGHT: (90, Point(1, 0), "f0da", "Expand Right"),
    ClickTarget.LEFT: (270, Point(-1, 0), "f0d9", "Expand Left"),
}


def wrap_and_truncate(text, max_width):
    """Splits `text` into lines of at most `max_width` characters.

    Lines break at the last hyphen inside the window, which is dropped;
    surrounding spaces stay with their line. A window without a hyphen is
    cut hard at `max_width`.
    """
    lines = []
    while len(text) > max_width:
        for i in range(max_width - 1, -1, -1):
            if LINE_BREAK.match(text[i]):
                lines.append(text[:i])
                text = text[i + 1:]
                break
        else:
            lines.append(text[:max_width])
            text = text[max_width:]

    lines.append(text)
    return lines


class Affordance:
    """Wedge shown around a hovered node to expand it in one direction."""

    def __init__(self, target, disabled, radius, icon_distance):
        angle, offset, icon, title = AFFORDANCES[target]
        self.target = target
        self.disabled = disabled
        self.icon = icon
        self.title = title

        # Nudge the centre so the seam between two wedges looks straight
        self.center = Point(offset.x / 2, offset.y / 2)
        self.radius = radius
        self.start_angle = angle - 44.75
        self.end_angle = angle + 44.75
        self.path = describe_wedge_path(self.center.x, self.center.y, radius, self.start_angle, self.end_angle)
        self.icon_position = Point(offset.x * icon_distance, offset.y * icon_distance + 4.4)

    @property
    def icon_glyph(self):
        return chr(int(self.icon, 16))

    def contains(self, x, y):
        """(x, y) relative to the node centre."""
        return wedge_contains(self.center.x, self.center.y, self.radius,
                              self.start_angle, self.end_angle, x, y)


class NodeView:
    """What is currently drawn for one node."""

    def __init__(self, node, label_lines):
        self.node = node
        self.style_tags = list(node.style_tags)
        self.fixed = node.is_pinned
        self.hovered = False
        self.affordances = {} # ClickTarget -> Affordance, only while hovered
        self.label_lines = label_lines[:2]
        # A single line sits lower to stay centred below the icon
        self.label_offsets = [4, 11] if len(label_lines) > 1 else [7]
        self.x = node.x
        self.y = node.y


class NodeRenderer:
    """Keeps node views in step with the nodes and turns gestures into events."""

    def __init__(self, engine, events):
        self.engine = engine
        self.events = events
        self.views = {} # node id -> NodeView, in drawing order

        # Rendering settings
        self.node_radius = 17
        self.ring_radius = 21
        self.action_radius = 32
        self.action_icon_distance = 22
        self.label_width = 11
        self.icon_font_size = 9
        self.label_font_size = 6
        self.action_icon_font_size = 13

        # Energy raised while any drag is in progress
        self.drag_alpha_target = 0.3
        self._active_drags = 0

    def update_nodes(self, nodes):
        changes = reconcile(list(self.views), nodes)
        views = {}
        for node in nodes:
            if node.id in self.views:
                view = self.views[node.id]
                if view.node is not node:
                    self._carry_state(view.node, node)
                    view.node = node
                view.style_tags = list(node.style_tags)
            else:
                view = NodeView(node, wrap_and_truncate(node.label, self.label_width))
            views[node.id] = view
        self.views = views

        self.engine.nodes(nodes)
        self.tick_nodes()

        logger.debug("Nodes: %d added, %d retained, %d removed",
                     len(changes.added), len(changes.retained), len(changes.removed))
        return changes

    def _carry_state(self, old, new):
        # Same id means the same node; keep where it is and how it moves
        if new.x is None or new.y is None:
            new.x, new.y = old.x, old.y
            new.vx, new.vy = old.vx, old.vy
            if not new.is_pinned:
                new.pin = old.pin

    def tick_nodes(self):
        for view in self.views.values():
            view.x = view.node.x
            view.y = view.node.y

    # --- Interaction ---

    def drag_start(self, node_id, x, y, on_outline=True):
        """Starts dragging a node; only the outline circle is a drag handle."""
        view = self.views.get(node_id)
        if view is None or not on_outline:
            return False

        if self._active_drags == 0:
            self.engine.set_alpha_target(self.drag_alpha_target).restart()
        self._active_drags += 1

        view.fixed = True
        self._hold(view.node, x, y)
        return True

    def drag(self, node_id, x, y):
        view = self.views.get(node_id)
        if view is None or not view.node.is_pinned:
            return
        self._hold(view.node, x, y)

    def drag_end(self, node_id):
        if self._active_drags > 0:
            self._active_drags -= 1
            if self._active_drags == 0:
                self.engine.set_alpha_target(0)

        view = self.views.get(node_id)
        if view is None or not view.node.is_pinned:
            return

        node = view.node
        node.pin_at(node.x, node.y)
        logger.debug("Pinned node %s at (%.1f, %.1f)", node.id, node.x, node.y)

    def _hold(self, node, x, y):
        node.pin_at(x, y)
        node.x = x
        node.y = y
        node.vx = 0.0
        node.vy = 0.0

    def click(self, node_id):
        """Plain click on the node body: release the pin and report a centre click."""
        view = self.views.get(node_id)
        if view is None:
            return
        view.fixed = False
        view.node.unpin()
        self.events.publish_node_click(view.node, False, ClickTarget.CENTER)

    def double_click(self, node_id):
        view = self.views.get(node_id)
        if view is None:
            return
        self.events.publish_node_click(view.node, True, ClickTarget.CENTER)

    def click_affordance(self, node_id, target, is_double_click=False):
        view = self.views.get(node_id)
        if view is None or target not in view.affordances:
            return
        # Disabled affordances stay clickable; the event channel drops unsupported targets
        self.events.publish_node_click(view.node, is_double_click, target)

    def hover_enter(self, node_id):
        view = self.views.get(node_id)
        if view is None:
            return
        view.hovered = True
        supported = view.node.supported_click_targets
        view.affordances = {
            target: Affordance(target, target not in supported, self.action_radius, self.action_icon_distance)
            for target in AFFORDANCES
        }

    def hover_leave(self, node_id):
        view = self.views.get(node_id)
        if view is None:
            return
        view.hovered = False
        view.affordances = {}

    # --- Hit testing ---

    def hit_test(self, x, y):
        """Returns (node_id, target) for the top-most node under the scene point.

        `target` is None for the node body and the ClickTarget of the
        affordance otherwise. Returns None when nothing is hit.
        """
        for node_id, view in reversed(list(self.views.items())):
            if view.x is None or view.y is None:
                continue
            dx = x - view.x
            dy = y - view.y
            if dx*dx + dy*dy <= self.node_radius * self.node_radius:
                return node_id, None
            for target, affordance in view.affordances.items():
                if affordance.contains(dx, dy):
                    return node_id, target
        return None

    def node_at(self, x, y, radius=None):
        """Id of the top-most node whose circle of `radius` holds the point."""
        radius = self.ring_radius if radius is None else radius
        for node_id, view in reversed(list(self.views.items())):
            if view.x is None or view.y is None:
                continue
            if math.hypot(x - view.x, y - view.y) <= radius:
                return node_id
        return None

    def tooltip_at(self, x, y):
        hit = self.hit_test(x, y)
        if hit is None:
            return None
        node_id, target = hit
        if target is None:
            return self.views[node_id].node.details
        return self.views[node_id].affordances[target].title

    # --- Painting ---

    def paint(self, painter, theme):
        icon_font = QFont(ICON_FONT_FAMILY)
        icon_font.setPixelSize(self.icon_font_size)
        icon_font.setWeight(QFont.Weight.Black)
        action_font = QFont(icon_font)
        action_font.setPixelSize(self.action_icon_font_size)
        label_font = QFont()
        label_font.setPixelSize(self.label_font_size)

        for view in self.views.values():
            if view.x is None or view.y is None:
                continue

            painter.save()
            painter.translate(view.x, view.y)

            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(theme.ring_hover if view.hovered else theme.ring))
            painter.drawEllipse(QPointF(0, 0), self.ring_radius, self.ring_radius)

            for affordance in view.affordances.values():
                color = theme.action_disabled if affordance.disabled else theme.action
                painter.setPen(Qt.PenStyle.NoPen)
                painter.setBrush(QBrush(color))
                painter.drawPath(to_painter_path(affordance.path))

            # Outline doubles as hit target and pinned indicator
            border = theme.fixed_border if view.fixed else theme.node_border
            painter.setPen(QPen(border, 2 if view.fixed else 1))
            painter.setBrush(QBrush(theme.node_color(view.style_tags)))
            painter.drawEllipse(QPointF(0, 0), self.node_radius, self.node_radius)

            painter.setPen(theme.text)
            painter.setFont(icon_font)
            self._draw_centered(painter, view.node.icon_glyph, 0, -4)

            painter.setFont(label_font)
            for line, offset in zip(view.label_lines, view.label_offsets):
                self._draw_centered(painter, line, 0, offset)

            painter.setFont(action_font)
            for affordance in view.affordances.values():
                painter.setPen(theme.action_disabled if affordance.disabled else theme.text)
                self._draw_centered(painter, affordance.icon_glyph, affordance.icon_position.x, affordance.icon_position.y)

            painter.restore()

    def _draw_centered(self, painter, text, x, baseline):
        # Horizontally centred on x, like text-anchor="middle"
        width = painter.fontMetrics().horizontalAdvance(text)
        painter.drawText(QPointF(x - width / 2, baseline), text)
