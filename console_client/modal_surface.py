"""PyQt6 surface for the status modal plus the Qt timer adapter used to drive it."""
from __future__ import annotations

from typing import Callable, Optional, Set

from PyQt6.QtCore import QEasingCurve, QObject, QPropertyAnimation, QRect, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QFont, QMouseEvent, QResizeEvent
from PyQt6.QtWidgets import (
    QFrame,
    QGraphicsOpacityEffect,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from console_client.status_modal import HIDDEN_VISUAL, IconStyle, OverlayRequest, VisualState

PANEL_MAX_WIDTH = 420
PANEL_MARGIN = 16


class QtScheduler:
    """Cancellable single-shot timers matching the ``after``/``after_cancel`` contract."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._timers: Set[QTimer] = set()

    def after(self, delay_ms: int, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)

        def _fire() -> None:
            self._release(timer)
            callback()

        timer.timeout.connect(_fire)
        self._timers.add(timer)
        timer.start(max(0, int(delay_ms)))
        return timer

    def cancel(self, handle: object) -> None:
        if isinstance(handle, QTimer):
            handle.stop()
            self._release(handle)

    def pending(self) -> int:
        return len(self._timers)

    def _release(self, timer: QTimer) -> None:
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()


class StatusModalSurface(QWidget):
    """Full-window overlay with a dimmed backdrop and a centred content panel."""

    pointer_pressed = pyqtSignal(object)
    dismiss_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("statusModal")
        self._visual = HIDDEN_VISUAL

        self._backdrop = QWidget(self)
        self._backdrop.setObjectName("modalBackdrop")
        self._backdrop.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._backdrop.setStyleSheet("#modalBackdrop { background-color: rgba(17, 24, 39, 150); }")
        self._backdrop_effect = QGraphicsOpacityEffect(self._backdrop)
        self._backdrop.setGraphicsEffect(self._backdrop_effect)

        self._panel = QFrame(self)
        self._panel.setObjectName("modalPanel")
        self._panel.setStyleSheet("#modalPanel { background-color: #ffffff; border-radius: 8px; }")
        self._panel_effect = QGraphicsOpacityEffect(self._panel)
        self._panel.setGraphicsEffect(self._panel_effect)

        self._icon = QLabel(self._panel)
        self._icon.setObjectName("modalIcon")
        self._icon.setAlignment(Qt.AlignmentFlag.AlignCenter)
        icon_font = QFont()
        icon_font.setPointSize(48)
        self._icon.setFont(icon_font)
        self._title = QLabel(self._panel)
        self._title.setObjectName("modalTitle")
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        self._title.setFont(title_font)
        self._message = QLabel(self._panel)
        self._message.setObjectName("modalMessage")
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message.setWordWrap(True)
        self._button = QPushButton("OK", self._panel)
        self._button.setObjectName("modalButton")
        self._button.clicked.connect(self.dismiss_requested.emit)

        layout = QVBoxLayout(self._panel)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)
        layout.addWidget(self._icon)
        layout.addWidget(self._title)
        layout.addWidget(self._message)
        layout.addWidget(self._button, alignment=Qt.AlignmentFlag.AlignCenter)

        self._panel_animation = QPropertyAnimation(self._panel_effect, b"opacity", self)
        self._backdrop_animation = QPropertyAnimation(self._backdrop_effect, b"opacity", self)
        self._geometry_animation = QPropertyAnimation(self._panel, b"geometry", self)
        for animation in (self._panel_animation, self._backdrop_animation, self._geometry_animation):
            animation.setEasingCurve(QEasingCurve.Type.OutCubic)

        self._apply_immediate(HIDDEN_VISUAL)
        self.hide()

    @property
    def panel(self) -> QFrame:
        return self._panel

    @property
    def backdrop(self) -> QWidget:
        return self._backdrop

    @property
    def visual_state(self) -> VisualState:
        return self._visual

    def title_text(self) -> str:
        return self._title.text()

    def message_text(self) -> str:
        return self._message.text()

    def icon_tokens(self) -> tuple[str, str]:
        return (
            str(self._icon.property("glyphToken") or ""),
            str(self._icon.property("colorToken") or ""),
        )

    # ModalSurface -------------------------------------------------------

    def set_content(self, request: OverlayRequest, style: IconStyle) -> None:
        self._title.setText(request.title)
        self._message.setText(request.message)
        self._icon.setText(style.glyph)
        self._icon.setStyleSheet(f"color: {style.color};")
        self._icon.setProperty("glyphToken", style.glyph_token)
        self._icon.setProperty("colorToken", style.color_token)
        self._layout_children()

    def set_hidden(self, hidden: bool) -> None:
        if hidden:
            self.hide()
            return
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.show()
        self.raise_()

    def apply_visual_state(self, state: VisualState, duration_ms: int) -> None:
        self._visual = state
        if duration_ms <= 0:
            self._apply_immediate(state)
            return
        self._animate(self._panel_animation, self._panel_effect.opacity(), state.opacity, duration_ms)
        self._animate(self._backdrop_animation, self._backdrop_effect.opacity(), state.opacity, duration_ms)
        self._animate(self._geometry_animation, self._panel.geometry(), self._panel_rect(state), duration_ms)

    def panel_contains(self, target: object) -> bool:
        if target is self._panel:
            return True
        return isinstance(target, QWidget) and self._panel.isAncestorOf(target)

    # Qt events ----------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802 - Qt override
        target = self.childAt(event.position().toPoint()) or self
        self.pointer_pressed.emit(target)
        event.accept()

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self._layout_children()

    # Helpers ------------------------------------------------------------

    def _layout_children(self) -> None:
        self._backdrop.setGeometry(self.rect())
        if self._geometry_animation.state() != QPropertyAnimation.State.Running:
            self._panel.setGeometry(self._panel_rect(self._visual))

    def _resting_rect(self) -> QRect:
        width = max(1, min(PANEL_MAX_WIDTH, self.width() - 2 * PANEL_MARGIN))
        height = max(1, min(self._panel.sizeHint().height(), self.height() - 2 * PANEL_MARGIN))
        x = (self.width() - width) // 2
        y = (self.height() - height) // 2
        return QRect(x, y, width, height)

    def _panel_rect(self, state: VisualState) -> QRect:
        rest = self._resting_rect()
        width = max(1, int(round(rest.width() * state.scale)))
        height = max(1, int(round(rest.height() * state.scale)))
        centre = rest.center()
        rect = QRect(0, 0, width, height)
        rect.moveCenter(centre)
        rect.translate(0, state.offset_y)
        return rect

    def _apply_immediate(self, state: VisualState) -> None:
        for animation in (self._panel_animation, self._backdrop_animation, self._geometry_animation):
            animation.stop()
        self._panel_effect.setOpacity(state.opacity)
        self._backdrop_effect.setOpacity(state.opacity)
        self._backdrop.setGeometry(self.rect())
        self._panel.setGeometry(self._panel_rect(state))

    @staticmethod
    def _animate(animation: QPropertyAnimation, start: object, end: object, duration_ms: int) -> None:
        animation.stop()
        animation.setDuration(duration_ms)
        animation.setStartValue(start)
        animation.setEndValue(end)
        animation.start()
