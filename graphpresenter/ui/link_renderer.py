import logging
import math

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QBrush, QFont

from graphpresenter.common import reconcile
from graphpresenter.geometry import (
    NAN_POINT, ORIGIN, Point, is_finite_path, polygon_contains, rotate, rotation,
    unit_normal_vector, unit_vector,
)
from graphpresenter.ui.paths import to_painter_path

logger = logging.getLogger(__name__)


def _add(*points):
    return Point(sum(p.x for p in points), sum(p.y for p in points))


def _scale(p, k):
    return Point(p.x * k, p.y * k)


def _polygon(points):
    return [("M",) + tuple(points[0])] + [("L",) + tuple(p) for p in points[1:]] + [("Z",)]


class LinkView:
    """What is currently drawn for one link.

    Shapes are kept in the link's own frame (source at the origin, target
    on the positive x-axis); `translate` and `angle` place that frame in
    the scene.
    """

    def __init__(self, link):
        self.link = link
        self.style_tags = list(link.style_tags)
        self.label = link.label
        self.translate = NAN_POINT
        self.angle = math.nan
        self.outline = []
        self.overlay = []
        self.overlay_points = []
        self.label_position = NAN_POINT
        self.label_rotation = 0

    @property
    def is_drawable(self):
        return (math.isfinite(self.angle) and math.isfinite(self.translate.x) and math.isfinite(self.translate.y)
                and is_finite_path(self.outline))

    def clear_geometry(self):
        self.translate = NAN_POINT
        self.angle = math.nan
        self.outline = []
        self.overlay = []
        self.overlay_points = []
        self.label_position = NAN_POINT


class LinkRenderer:
    """Keeps link views in step with the links and lays them out every tick."""

    def __init__(self, engine, events, measure_text=None):
        self.engine = engine
        self.events = events
        self.views = {} # link id -> LinkView, in drawing order
        self.measure_text = measure_text or self._estimate_text_width

        # Rendering settings
        self.node_radius = 17
        self.arrow_size = 4
        self.text_padding = 5
        self.overlay_width = 50 # squared half-width of the hit region
        self.label_font_size = 8

        self._reported_broken = set()

    def _estimate_text_width(self, text):
        return len(text) * self.label_font_size * 0.55

    def update_links(self, links):
        self.engine.links(links)

        changes = reconcile(list(self.views), links)
        views = {}
        for link in links:
            view = self.views.get(link.id)
            if view is None:
                view = LinkView(link)
            else:
                view.link = link
                view.style_tags = list(link.style_tags)
            views[link.id] = view
        self.views = views
        self._reported_broken &= set(views)

        logger.debug("Links: %d added, %d retained, %d removed",
                     len(changes.added), len(changes.retained), len(changes.removed))
        return changes

    def tick_links(self):
        for view in self.views.values():
            source = view.link.source
            target = view.link.target
            if source is None or target is None or None in (source.x, source.y, target.x, target.y):
                if view.link.id not in self._reported_broken:
                    logger.warning("Link %s has an unresolved endpoint", view.link.id)
                    self._reported_broken.add(view.link.id)
                view.clear_geometry()
                continue
            self._layout(view, source, target)

    def _layout(self, view, source, target):
        angle = rotation(source, target)
        length = math.hypot(target.x - source.x, target.y - source.y)

        # Canonical frame: the target sits at `end`
        end = Point(length, 0.0)
        u = unit_vector(ORIGIN, end)
        n = unit_normal_vector(ORIGIN, end)

        view.translate = Point(source.x, source.y)
        view.angle = angle
        view.overlay_points = self._overlay(end, n)
        view.overlay = _polygon(view.overlay_points)
        view.outline = self._outline(view, end, u, n)

        mirror = 90 < (angle + 360) % 360 < 270
        weight = 2 if mirror else -3
        view.label_position = _add(_scale(end, 0.5), _scale(n, weight))
        view.label_rotation = 180 if mirror else 0

    def _overlay(self, end, n):
        wide = unit_normal_vector(ORIGIN, end, self.overlay_width)
        return [
            _scale(wide, -1),
            _add(end, _scale(wide, -1)),
            _add(end, wide, _scale(n, -1)),
            _add(wide, _scale(n, -1)),
        ]

    def _outline(self, view, end, u, n):
        """Stub at the source and arrow-tipped body at the target, split around the label."""
        text_width = 0
        padding = 0
        if view.label:
            text_width = self.measure_text(view.label)
            padding = self.text_padding

        margin = _scale(_add(end, _scale(u, -(text_width + padding))), 0.5)
        rim = _scale(u, self.node_radius + 1)
        tip = _add(end, _scale(rim, -1))
        back = _scale(u, -self.arrow_size)
        arrow = self.arrow_size

        stub = [
            _add(rim, _scale(n, -1)),
            _add(margin, _scale(n, -1)),
            margin,
            rim,
        ]
        body = [
            _add(end, _scale(margin, -1), _scale(n, -1)),
            _add(tip, _scale(n, -1), back),
            _add(tip, _scale(n, -1), _scale(_add(n, _scale(u, -1)), arrow)),
            tip,
            _add(tip, _scale(_add(_scale(n, -1), _scale(u, -1)), arrow)),
            _add(tip, back),
            _add(end, _scale(margin, -1)),
        ]
        return _polygon(stub) + _polygon(body)

    # --- Interaction ---

    def click(self, link_id):
        view = self.views.get(link_id)
        if view is not None:
            self.events.publish_link_click(view.link, False)

    def double_click(self, link_id):
        view = self.views.get(link_id)
        if view is not None:
            self.events.publish_link_click(view.link, True)

    def hit_test(self, x, y):
        """Id of the top-most link whose overlay holds the scene point, or None."""
        for link_id, view in reversed(list(self.views.items())):
            if not view.is_drawable:
                continue
            local = rotate(0, 0, x - view.translate.x, y - view.translate.y, view.angle)
            if polygon_contains(view.overlay_points, local.x, local.y):
                return link_id
        return None

    def tooltip_at(self, x, y):
        link_id = self.hit_test(x, y)
        if link_id is None:
            return None
        return self.views[link_id].link.details

    # --- Painting ---

    def paint(self, painter, theme):
        font = QFont()
        font.setPixelSize(self.label_font_size)
        painter.setFont(font)

        for view in self.views.values():
            if not view.is_drawable:
                continue

            painter.save()
            painter.translate(view.translate.x, view.translate.y)
            painter.rotate(view.angle)

            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(theme.link_color(view.style_tags)))
            painter.drawPath(to_painter_path(view.outline))

            if view.label:
                painter.translate(view.label_position.x, view.label_position.y)
                painter.rotate(view.label_rotation)
                painter.setPen(theme.link_label)
                width = painter.fontMetrics().horizontalAdvance(view.label)
                painter.drawText(QPointF(-width / 2, 0), view.label)

            painter.restore()
