"""Top-level console window wiring the status modal and nav logo to Qt."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QPropertyAnimation, Qt
from PyQt6.QtGui import QPixmap, QResizeEvent, QShowEvent
from PyQt6.QtWidgets import QGraphicsOpacityEffect, QLabel, QVBoxLayout, QWidget

from console_client.client_config import ConsoleSettings
from console_client.logo_crossfader import LogoCrossfader
from console_client.modal_surface import QtScheduler, StatusModalSurface
from console_client.status_modal import OverlayController, OverlayRequest, Severity
from console_client.storage import KeyValueStore

ASSETS_DIR = Path(__file__).resolve().parent / "assets"
NAV_LOGO_HEIGHT = 48


class ConsoleWindow(QWidget):
    """Console shell: nav logo, content area and the singleton status modal."""

    def __init__(
        self,
        settings: ConsoleSettings,
        persistent_store: KeyValueStore,
        *,
        logger: Optional[logging.Logger] = None,
        assets_dir: Path = ASSETS_DIR,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Admin Console")
        self.resize(960, 640)
        self._logger = logger or logging.getLogger("AdminConsole.Client")
        self._assets_dir = assets_dir
        self._logo_ran = False
        self._scheduler = QtScheduler(self)

        self._nav_logo = QLabel(self)
        self._nav_logo.setObjectName("navLogo")
        self._nav_logo.setFixedHeight(NAV_LOGO_HEIGHT)
        self._logo_effect = QGraphicsOpacityEffect(self._nav_logo)
        self._nav_logo.setGraphicsEffect(self._logo_effect)
        self._logo_animation = QPropertyAnimation(self._logo_effect, b"opacity", self)
        self._content = QWidget(self)
        self._content.setObjectName("consoleContent")

        layout = QVBoxLayout(self)
        layout.addWidget(self._nav_logo, alignment=Qt.AlignmentFlag.AlignLeft)
        layout.addWidget(self._content, stretch=1)

        self._modal_surface = StatusModalSurface(self)
        self._overlay = OverlayController(
            self._modal_surface,
            after=self._scheduler.after,
            after_cancel=self._scheduler.cancel,
            open_delay_ms=settings.modal_open_delay_ms,
            close_duration_ms=settings.modal_close_duration_ms,
            log_fn=self._logger.debug,
        )
        self._modal_surface.pointer_pressed.connect(self._overlay.handle_pointer_press)
        self._modal_surface.dismiss_requested.connect(self._overlay.close)

        self._logo_fader = LogoCrossfader(
            persistent_store,
            set_source=self._set_logo_source,
            set_opacity=self._set_logo_opacity,
            after=self._scheduler.after,
            half_step_ms=settings.logo_half_step_ms,
            log_fn=self._logger.debug,
        )
        self._logo_half_step_ms = settings.logo_half_step_ms

    @property
    def overlay(self) -> OverlayController:
        return self._overlay

    @property
    def modal_surface(self) -> StatusModalSurface:
        return self._modal_surface

    @property
    def nav_logo(self) -> QLabel:
        return self._nav_logo

    def open_overlay(self, title: str, message: str, severity: object = Severity.INFO) -> OverlayRequest:
        return self._overlay.open(title, message, severity)

    def close_overlay(self) -> None:
        self._overlay.close()

    def run_logo_crossfade(self) -> str:
        self._logo_ran = True
        return self._logo_fader.run()

    def showEvent(self, event: QShowEvent) -> None:  # noqa: N802 - Qt override
        super().showEvent(event)
        if not self._logo_ran:
            self.run_logo_crossfade()

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        if self._modal_surface.isVisible():
            self._modal_surface.setGeometry(self.rect())

    def _set_logo_source(self, source: str) -> None:
        self._nav_logo.setProperty("logoSource", source)
        pixmap = QPixmap(str(self._assets_dir / source))
        if pixmap.isNull():
            self._logger.debug("Nav logo asset %s not found; showing text label", source)
            self._nav_logo.setText("Admin Console")
            return
        self._nav_logo.setPixmap(
            pixmap.scaledToHeight(NAV_LOGO_HEIGHT, Qt.TransformationMode.SmoothTransformation)
        )

    def _set_logo_opacity(self, opacity: float) -> None:
        self._logo_animation.stop()
        if self._logo_half_step_ms <= 0:
            self._logo_effect.setOpacity(opacity)
            return
        self._logo_animation.setDuration(self._logo_half_step_ms)
        self._logo_animation.setStartValue(self._logo_effect.opacity())
        self._logo_animation.setEndValue(float(opacity))
        self._logo_animation.start()
