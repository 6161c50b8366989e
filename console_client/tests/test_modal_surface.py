from __future__ import annotations

import os

import pytest
from PyQt6.QtCore import QPoint, QPointF, Qt, QThread
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import QApplication, QWidget

from console_client.modal_surface import QtScheduler, StatusModalSurface
from console_client.status_modal import (
    HIDDEN_VISUAL,
    SEVERITY_STYLES,
    SHOWN_VISUAL,
    OverlayController,
    OverlayPhase,
    OverlayRequest,
    Severity,
)


@pytest.fixture
def qt_app(monkeypatch):
    monkeypatch.setenv("QT_QPA_PLATFORM", os.getenv("QT_QPA_PLATFORM", "offscreen"))
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def host(qt_app):
    widget = QWidget()
    widget.resize(800, 600)
    yield widget
    widget.close()


def _press(surface: StatusModalSurface, point: QPoint) -> None:
    event = QMouseEvent(
        QMouseEvent.Type.MouseButtonPress,
        QPointF(point),
        QPointF(surface.mapToGlobal(point)),
        Qt.MouseButton.LeftButton,
        Qt.MouseButton.LeftButton,
        Qt.KeyboardModifier.NoModifier,
    )
    surface.mousePressEvent(event)


@pytest.mark.pyqt_required
def test_set_content_applies_text_and_icon_tokens(host):
    surface = StatusModalSurface(host)

    surface.set_content(OverlayRequest("Saved", "Client saved", Severity.ERROR), SEVERITY_STYLES[Severity.ERROR])

    assert surface.title_text() == "Saved"
    assert surface.message_text() == "Client saved"
    assert surface.icon_tokens() == ("fa-times-circle", "text-red-500")


@pytest.mark.pyqt_required
def test_hidden_flag_toggles_visibility_and_fills_parent(host):
    host.show()
    surface = StatusModalSurface(host)
    assert surface.isHidden()

    surface.set_hidden(False)
    assert not surface.isHidden()
    assert surface.geometry() == host.rect()

    surface.set_hidden(True)
    assert surface.isHidden()


@pytest.mark.pyqt_required
def test_immediate_visual_state_positions_panel(host):
    surface = StatusModalSurface(host)
    surface.set_hidden(False)

    surface.apply_visual_state(SHOWN_VISUAL, 0)
    shown = surface.panel.geometry()
    surface.apply_visual_state(HIDDEN_VISUAL, 0)
    hidden = surface.panel.geometry()

    assert surface.visual_state == HIDDEN_VISUAL
    assert hidden.width() < shown.width()
    assert hidden.center().y() == shown.center().y() + HIDDEN_VISUAL.offset_y


@pytest.mark.pyqt_required
def test_panel_contains_uses_widget_ancestry(host):
    surface = StatusModalSurface(host)
    inner_label = surface.panel.findChild(QWidget, "modalTitle")

    assert surface.panel_contains(surface.panel) is True
    assert surface.panel_contains(inner_label) is True
    assert surface.panel_contains(surface.backdrop) is False
    assert surface.panel_contains(surface) is False
    assert surface.panel_contains(object()) is False


@pytest.mark.pyqt_required
def test_outside_press_dismisses_and_inside_press_does_not(host):
    host.show()
    surface = StatusModalSurface(host)
    closes: list[str] = []
    harness: list = []
    controller = OverlayController(
        surface,
        after=lambda ms, cb: harness.append(cb) or len(harness),
        after_cancel=lambda handle: None,
    )
    original_close = controller.close

    def _counting_close() -> None:
        closes.append("close")
        original_close()

    controller.close = _counting_close  # type: ignore[method-assign]
    surface.pointer_pressed.connect(controller.handle_pointer_press)

    controller.open("Saved", "Client saved", "success")
    harness.pop(0)()
    assert controller.phase is OverlayPhase.OPEN

    _press(surface, surface.panel.geometry().center())
    assert closes == []

    _press(surface, QPoint(2, 2))
    assert closes == ["close"]
    assert controller.phase is OverlayPhase.CLOSING


@pytest.mark.pyqt_required
def test_qt_scheduler_cancel_prevents_callback(qt_app):
    scheduler = QtScheduler()
    fired: list[str] = []

    handle = scheduler.after(5, lambda: fired.append("cancelled"))
    scheduler.after(5, lambda: fired.append("kept"))
    scheduler.cancel(handle)
    assert scheduler.pending() == 1

    deadline = 50
    while scheduler.pending() and deadline:
        qt_app.processEvents()
        QThread.msleep(5)
        deadline -= 1

    assert fired == ["kept"]
