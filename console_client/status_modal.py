"""Status modal lifecycle controller.

This module stays free of Qt types; the surface and the timer functions are
injected so the state machine can be driven by a test harness or by
``modal_surface``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]
LogFn = Callable[..., None]

DEFAULT_OPEN_DELAY_MS = 10
DEFAULT_CLOSE_DURATION_MS = 300


def _noop_log(message: str, *args: object) -> None:
    return None


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class IconStyle:
    glyph_token: str
    color_token: str
    glyph: str
    color: str


SEVERITY_STYLES: Dict[Severity, IconStyle] = {
    Severity.SUCCESS: IconStyle("fa-check-circle", "text-green-500", "✔", "#22c55e"),
    Severity.ERROR: IconStyle("fa-times-circle", "text-red-500", "✖", "#ef4444"),
    Severity.INFO: IconStyle("fa-info-circle", "text-blue-500", "ℹ", "#3b82f6"),
}


def resolve_severity(value: object) -> Severity:
    """Map caller input onto a Severity, falling back to INFO for anything unknown."""
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        for severity in Severity:
            if severity.value == token:
                return severity
    return Severity.INFO


def icon_style_for(severity: object) -> IconStyle:
    return SEVERITY_STYLES[resolve_severity(severity)]


@dataclass(frozen=True)
class OverlayRequest:
    title: str
    message: str
    severity: Severity = Severity.INFO


class OverlayPhase(Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


@dataclass(frozen=True)
class VisualState:
    opacity: float
    offset_y: int
    scale: float


HIDDEN_VISUAL = VisualState(opacity=0.0, offset_y=16, scale=0.95)
SHOWN_VISUAL = VisualState(opacity=1.0, offset_y=0, scale=1.0)


class ModalSurface(Protocol):
    def set_content(self, request: OverlayRequest, style: IconStyle) -> None: ...

    def set_hidden(self, hidden: bool) -> None: ...

    def apply_visual_state(self, state: VisualState, duration_ms: int) -> None: ...

    def panel_contains(self, target: object) -> bool: ...


class OverlaySurfaceMissing(RuntimeError):
    """Raised when the controller is driven before a surface is bound."""


class OverlayController:
    """Owns the open/close state of a single modal surface and its transition timers.

    Every ``open``/``close`` cancels the pending transition timer before
    scheduling its own, so the phase always converges on the latest request.
    """

    def __init__(
        self,
        surface: Optional[ModalSurface] = None,
        *,
        after: AfterFn,
        after_cancel: AfterCancelFn,
        open_delay_ms: int = DEFAULT_OPEN_DELAY_MS,
        close_duration_ms: int = DEFAULT_CLOSE_DURATION_MS,
        log_fn: Optional[LogFn] = None,
    ) -> None:
        self._surface = surface
        self._after = after
        self._after_cancel = after_cancel
        self._open_delay_ms = max(0, int(open_delay_ms))
        self._close_duration_ms = max(0, int(close_duration_ms))
        self._log = log_fn or _noop_log
        self._phase = OverlayPhase.CLOSED
        self._current: Optional[OverlayRequest] = None
        self._pending: object | None = None

    @property
    def phase(self) -> OverlayPhase:
        return self._phase

    @property
    def current(self) -> Optional[OverlayRequest]:
        return self._current

    @property
    def is_visible(self) -> bool:
        return self._phase is not OverlayPhase.CLOSED

    @property
    def open_delay_ms(self) -> int:
        return self._open_delay_ms

    @property
    def close_duration_ms(self) -> int:
        return self._close_duration_ms

    def bind_surface(self, surface: ModalSurface) -> None:
        self._surface = surface

    def open(self, title: str, message: str, severity: object = Severity.INFO) -> OverlayRequest:
        surface = self._require_surface("open")
        if not title or not message:
            raise ValueError("Status modal requires a non-empty title and message")
        request = OverlayRequest(str(title), str(message), resolve_severity(severity))
        self._cancel_pending()
        previous = self._phase
        self._current = request
        surface.set_content(request, SEVERITY_STYLES[request.severity])
        if previous is OverlayPhase.OPEN:
            self._log("Status modal content replaced while open (severity=%s)", request.severity.value)
            return request
        surface.set_hidden(False)
        # Start state must be committed before the end state lands on a later callback.
        surface.apply_visual_state(HIDDEN_VISUAL, 0)
        self._phase = OverlayPhase.OPENING
        self._pending = self._after(self._open_delay_ms, self._finish_open)
        self._log(
            "Status modal opening (severity=%s previous=%s delay=%dms)",
            request.severity.value,
            previous.value,
            self._open_delay_ms,
        )
        return request

    def close(self) -> None:
        surface = self._require_surface("close")
        if self._phase in (OverlayPhase.CLOSED, OverlayPhase.CLOSING):
            return
        previous = self._phase
        self._cancel_pending()
        surface.apply_visual_state(HIDDEN_VISUAL, self._close_duration_ms)
        self._phase = OverlayPhase.CLOSING
        self._pending = self._after(self._close_duration_ms, self._finish_close)
        self._log("Status modal closing (previous=%s duration=%dms)", previous.value, self._close_duration_ms)

    def handle_pointer_press(self, target: object) -> bool:
        """Dismiss when a press lands on the surface but outside the inner panel."""
        surface = self._require_surface("handle_pointer_press")
        if self._phase in (OverlayPhase.CLOSED, OverlayPhase.CLOSING):
            return False
        if surface.panel_contains(target):
            return False
        self._log("Status modal dismissed by outside press")
        self.close()
        return True

    def _finish_open(self) -> None:
        self._pending = None
        if self._phase is not OverlayPhase.OPENING:
            return
        surface = self._require_surface("finish_open")
        surface.apply_visual_state(SHOWN_VISUAL, self._close_duration_ms)
        self._phase = OverlayPhase.OPEN

    def _finish_close(self) -> None:
        self._pending = None
        if self._phase is not OverlayPhase.CLOSING:
            return
        surface = self._require_surface("finish_close")
        surface.set_hidden(True)
        self._current = None
        self._phase = OverlayPhase.CLOSED
        self._log("Status modal closed")

    def _cancel_pending(self) -> None:
        handle = self._pending
        self._pending = None
        if handle is not None:
            self._after_cancel(handle)

    def _require_surface(self, operation: str) -> ModalSurface:
        if self._surface is None:
            raise OverlaySurfaceMissing(f"Status modal surface is not bound (operation={operation})")
        return self._surface
