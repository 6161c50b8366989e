from __future__ import annotations

from console_client.logo_crossfader import LOGO_STATE_KEY, LogoAssets, LogoCrossfader
from console_client.storage import JsonFileStore, MemoryStore


class _LogoStub:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []
        self.scheduled: list[tuple[int, object]] = []

    def set_source(self, source: str) -> None:
        self.events.append(("source", source))

    def set_opacity(self, opacity: float) -> None:
        self.events.append(("opacity", opacity))

    def after(self, ms: int, cb) -> None:
        self.scheduled.append((ms, cb))

    def flush(self) -> None:
        pending, self.scheduled = self.scheduled, []
        for _ms, cb in pending:
            cb()


def _fader(store, stub: _LogoStub, **kwargs) -> LogoCrossfader:
    return LogoCrossfader(
        store,
        set_source=stub.set_source,
        set_opacity=stub.set_opacity,
        after=stub.after,
        **kwargs,
    )


def test_first_load_defaults_to_circle_and_shows_normal_logo():
    store = MemoryStore()
    stub = _LogoStub()

    source = _fader(store, stub).run()

    assert source == "img/logo.png"
    # Fade out happens immediately; swap waits for the half step.
    assert stub.events == [("opacity", 0.0)]
    assert stub.scheduled[0][0] == 100
    assert store.get_item(LOGO_STATE_KEY) is None

    stub.flush()

    assert stub.events == [("opacity", 0.0), ("source", "img/logo.png"), ("opacity", 1.0)]
    assert store.get_item(LOGO_STATE_KEY) == "normal"


def test_flag_alternates_across_loads(tmp_path):
    path = tmp_path / "storage.json"
    flags = []
    sources = []
    for _ in range(3):
        store = JsonFileStore(path)
        stub = _LogoStub()
        sources.append(_fader(store, stub).run())
        stub.flush()
        flags.append(JsonFileStore(path).get_item(LOGO_STATE_KEY))

    assert flags == ["normal", "circle", "normal"]
    assert sources == ["img/logo.png", "img/logo-circle.png", "img/logo.png"]


def test_unknown_flag_is_treated_as_normal():
    store = MemoryStore({LOGO_STATE_KEY: "something-else"})
    stub = _LogoStub()

    source = _fader(store, stub, assets=LogoAssets(normal="a.png", circle="b.png"), half_step_ms=40).run()
    stub.flush()

    assert source == "b.png"
    assert store.get_item(LOGO_STATE_KEY) == "circle"
