import pytest
from PyQt6.QtCore import QPointF

from graphpresenter.ui.viewport import ViewportController


@pytest.fixture
def viewport():
    return ViewportController(800, 600)


def test_zoom_buttons_step_and_clamp(viewport) -> None:
    assert viewport.zoom_in(duration=0) == pytest.approx(1.5)
    assert viewport.scale == pytest.approx(1.5)
    for _ in range(10):
        viewport.zoom_in(duration=0)
    assert viewport.scale == 10

    viewport.reset()
    assert viewport.zoom_out(duration=0) == pytest.approx(0.5)
    viewport.zoom_out(duration=0)
    viewport.zoom_out(duration=0)
    assert viewport.scale == 0.25


def test_button_zoom_keeps_the_centre_fixed(viewport) -> None:
    center = QPointF(400, 300)
    viewport.zoom_in(duration=0)
    scene = viewport.to_scene(center)
    assert (scene.x(), scene.y()) == pytest.approx((400, 300))


def test_wheel_zooms_about_the_cursor(viewport) -> None:
    anchor = QPointF(200, 150)
    before = viewport.to_scene(anchor)

    viewport.wheel(120, anchor)
    assert viewport.scale == pytest.approx(1.1)
    after = viewport.to_scene(anchor)
    assert (after.x(), after.y()) == pytest.approx((before.x(), before.y()))

    viewport.wheel(-120, anchor)
    assert viewport.scale == pytest.approx(1.1 * 0.9)


def test_pan_is_constrained_to_the_surface(viewport) -> None:
    viewport.pan_by(100, 50)
    assert (viewport.tx, viewport.ty) == (0, 0)

    viewport.set_scale(2)
    assert viewport.tx == pytest.approx(-400)
    viewport.pan_by(100, 0)
    assert viewport.tx == pytest.approx(-300)
    viewport.pan_by(1000, 0)
    assert viewport.tx == pytest.approx(0)


def test_transforms_are_inverse(viewport) -> None:
    viewport.set_scale(3, QPointF(100, 100))
    p = QPointF(123, 45)
    back = viewport.to_screen(viewport.to_scene(p))
    assert (back.x(), back.y()) == pytest.approx((123, 45))


def test_changed_is_emitted(viewport) -> None:
    calls = []
    viewport.changed.connect(lambda: calls.append(1))
    viewport.pan_by(1, 1)
    viewport.reset()
    assert len(calls) == 2


def test_button_hit_areas(viewport) -> None:
    assert viewport.button_at(QPointF(780, 10)) == "zoom_in"
    assert viewport.button_at(QPointF(780, 35)) == "zoom_out"
    assert viewport.button_at(QPointF(10, 10)) is None


def test_reset(viewport) -> None:
    viewport.set_scale(4)
    viewport.pan_by(-50, -50)
    viewport.reset()
    assert (viewport.scale, viewport.tx, viewport.ty) == (1.0, 0.0, 0.0)


def test_animated_zooms_chain_on_the_pending_target(qapp) -> None:
    viewport = ViewportController(800, 600)

    assert viewport.zoom_in() == pytest.approx(1.5)
    assert viewport.zoom_in() == pytest.approx(2.25)
    viewport.animation.stop()
