import logging

from PyQt6.QtCore import QAbstractAnimation, QCoreApplication, QEasingCurve, QObject, QPointF, QRectF, QVariantAnimation, pyqtSignal
from PyQt6.QtGui import QTransform

logger = logging.getLogger(__name__)


class ViewportController(QObject):
    """Pan/zoom of the scene: screen = scene * scale + (tx, ty).

    Scale is kept within [min_scale, max_scale] and the translation is
    constrained so the surface extent stays in view, like d3-zoom with a
    translate extent equal to the surface.
    """
    changed = pyqtSignal()

    def __init__(self, width, height, parent=None):
        super().__init__(parent)
        self.width = width
        self.height = height

        # Camera
        self.scale = 1.0
        self.tx = 0.0
        self.ty = 0.0
        self.min_scale = 0.25
        self.max_scale = 10.0

        # Zoom buttons
        self.zoom_in_factor = 1.5
        self.zoom_out_factor = 0.5
        self.wheel_in_factor = 1.1
        self.wheel_out_factor = 0.9
        self.transition_ms = 250
        self.button_size = 22
        self.button_margin = 27

        self.animation = None

    def resize(self, width, height):
        self.width = width
        self.height = height
        self._constrain()
        self.changed.emit()

    def clamp_scale(self, scale):
        return max(self.min_scale, min(scale, self.max_scale))

    def to_scene(self, point):
        return QPointF((point.x() - self.tx) / self.scale, (point.y() - self.ty) / self.scale)

    def to_screen(self, point):
        return QPointF(point.x() * self.scale + self.tx, point.y() * self.scale + self.ty)

    def qtransform(self):
        return QTransform(self.scale, 0, 0, self.scale, self.tx, self.ty)

    def pan_by(self, dx, dy):
        self.tx += dx
        self.ty += dy
        self._constrain()
        self.changed.emit()

    def zoom_at(self, factor, anchor):
        self.set_scale(self.scale * factor, anchor)

    def set_scale(self, scale, anchor=None):
        """Sets the scale keeping the scene point under `anchor` (screen) fixed."""
        if anchor is None:
            anchor = QPointF(self.width / 2, self.height / 2)
        fixed = self.to_scene(anchor)
        self.scale = self.clamp_scale(scale)
        self.tx = anchor.x() - fixed.x() * self.scale
        self.ty = anchor.y() - fixed.y() * self.scale
        self._constrain()
        self.changed.emit()

    def scale_by(self, factor, duration=None):
        """Zooms about the surface centre; animated when an event loop can drive it."""
        duration = self.transition_ms if duration is None else duration
        base = self.scale
        if self.animation is not None:
            if self.animation.state() == QAbstractAnimation.State.Running:
                # Chain on the scale the running transition was heading for
                base = self.animation.endValue()
            self.animation.stop()
            self.animation = None
        target = self.clamp_scale(base * factor)

        if duration <= 0 or QCoreApplication.instance() is None:
            self.set_scale(target)
            return target

        self.animation = QVariantAnimation(self)
        self.animation.setDuration(duration)
        self.animation.setStartValue(float(self.scale))
        self.animation.setEndValue(float(target))
        self.animation.setEasingCurve(QEasingCurve.Type.InOutCubic)
        self.animation.valueChanged.connect(lambda value: self.set_scale(value))
        self.animation.start()
        return target

    def zoom_in(self, duration=None):
        return self.scale_by(self.zoom_in_factor, duration)

    def zoom_out(self, duration=None):
        return self.scale_by(self.zoom_out_factor, duration)

    def wheel(self, angle_delta, anchor):
        factor = self.wheel_in_factor if angle_delta > 0 else self.wheel_out_factor
        self.zoom_at(factor, anchor)

    def reset(self):
        if self.animation is not None:
            self.animation.stop()
            self.animation = None
        self.scale = 1.0
        self.tx = 0.0
        self.ty = 0.0
        self.changed.emit()

    def _constrain(self):
        # Visible scene rectangle compared with the extent [0, width] x [0, height]
        dx0 = (0 - self.tx) / self.scale
        dx1 = (self.width - self.tx) / self.scale - self.width
        dy0 = (0 - self.ty) / self.scale
        dy1 = (self.height - self.ty) / self.scale - self.height

        shift_x = (dx0 + dx1) / 2 if dx1 > dx0 else (min(0, dx0) or max(0, dx1))
        shift_y = (dy0 + dy1) / 2 if dy1 > dy0 else (min(0, dy0) or max(0, dy1))
        self.tx += shift_x * self.scale
        self.ty += shift_y * self.scale

    # --- Buttons ---

    def zoom_in_rect(self):
        return QRectF(self.width - self.button_margin, 4, self.button_size, self.button_size)

    def zoom_out_rect(self):
        return QRectF(self.width - self.button_margin, 28, self.button_size, self.button_size)

    def button_at(self, point):
        if self.zoom_in_rect().contains(point):
            return "zoom_in"
        if self.zoom_out_rect().contains(point):
            return "zoom_out"
        return None

    def press_button(self, name):
        logger.debug("Zoom button %s", name)
        if name == "zoom_in":
            return self.zoom_in()
        if name == "zoom_out":
            return self.zoom_out()
        return None

    def paint_buttons(self, painter, theme):
        painter.save()
        painter.resetTransform()
        for rect, plus in ((self.zoom_in_rect(), True), (self.zoom_out_rect(), False)):
            painter.fillRect(rect, theme.button_background)
            cx = rect.center().x()
            cy = rect.center().y()
            painter.fillRect(QRectF(cx - 6, cy - 1, 12, 2), theme.button_text)
            if plus:
                painter.fillRect(QRectF(cx - 1, cy - 6, 2, 12), theme.button_text)
        painter.restore()
