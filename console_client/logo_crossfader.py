from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from console_client.storage import KeyValueStore

AfterFn = Callable[[int, Callable[[], None]], object]

LOGO_STATE_KEY = "lastLogo"
LOGO_CIRCLE = "circle"
LOGO_NORMAL = "normal"
DEFAULT_HALF_STEP_MS = 100


def _noop_log(message: str, *args: object) -> None:
    return None


@dataclass(frozen=True)
class LogoAssets:
    normal: str = "img/logo.png"
    circle: str = "img/logo-circle.png"


class LogoCrossfader:
    """Alternates the nav logo between its two variants on every page load."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        set_source: Callable[[str], None],
        set_opacity: Callable[[float], None],
        after: AfterFn,
        half_step_ms: int = DEFAULT_HALF_STEP_MS,
        assets: LogoAssets = LogoAssets(),
        log_fn: Optional[Callable[..., None]] = None,
    ) -> None:
        self._store = store
        self._set_source = set_source
        self._set_opacity = set_opacity
        self._after = after
        self._half_step_ms = max(0, int(half_step_ms))
        self._assets = assets
        self._log = log_fn or _noop_log

    def last_state(self) -> str:
        return self._store.get_item(LOGO_STATE_KEY) or LOGO_CIRCLE

    def run(self) -> str:
        last = self.last_state()
        if last == LOGO_CIRCLE:
            source, next_state = self._assets.normal, LOGO_NORMAL
        else:
            source, next_state = self._assets.circle, LOGO_CIRCLE
        self._set_opacity(0.0)

        def _swap() -> None:
            self._set_source(source)
            self._set_opacity(1.0)
            self._store.set_item(LOGO_STATE_KEY, next_state)
            self._log("Nav logo swapped to %s (next=%s)", source, next_state)

        self._after(self._half_step_ms, _swap)
        return source
