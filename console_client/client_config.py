"""Configuration helpers for the admin console client."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

SETTINGS_FILENAME = "console_settings.json"
API_URL_ENV_VAR = "ADMIN_CONSOLE_API_URL"
DEV_API_URL = "http://localhost:8080/api/v1"
PROD_API_URL = "https://ajfses-api.pssoft.xyz/api/v1"
_DEV_HOSTNAMES = frozenset({"", "localhost", "127.0.0.1"})


@dataclass
class ConsoleSettings:
    """Values used to bootstrap the console window and its components."""

    modal_open_delay_ms: int = 10
    modal_close_duration_ms: int = 300
    logo_half_step_ms: int = 100
    client_log_retention: int = 5
    storage_dir: Optional[Path] = None


def _int(value: Any, fallback: int, *, minimum: int) -> int:
    if value is None:
        return fallback
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    return max(minimum, numeric)


def settings_from_mapping(data: Mapping[str, Any]) -> ConsoleSettings:
    defaults = ConsoleSettings()
    storage_dir: Optional[Path] = None
    raw_dir = data.get("storage_dir")
    if isinstance(raw_dir, str) and raw_dir.strip():
        storage_dir = Path(raw_dir.strip()).expanduser()
    return ConsoleSettings(
        modal_open_delay_ms=_int(data.get("modal_open_delay_ms"), defaults.modal_open_delay_ms, minimum=0),
        modal_close_duration_ms=_int(data.get("modal_close_duration_ms"), defaults.modal_close_duration_ms, minimum=0),
        logo_half_step_ms=_int(data.get("logo_half_step_ms"), defaults.logo_half_step_ms, minimum=0),
        client_log_retention=_int(data.get("client_log_retention"), defaults.client_log_retention, minimum=1),
        storage_dir=storage_dir,
    )


def load_console_settings(settings_path: Path) -> ConsoleSettings:
    """Read bootstrap values from console_settings.json if it exists."""
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return ConsoleSettings()

    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError:
        return ConsoleSettings()
    if not isinstance(data, dict):
        return ConsoleSettings()
    return settings_from_mapping(data)


def resolve_api_url(hostname: Optional[str], env: Optional[Mapping[str, str]] = None) -> str:
    """Pick the API base URL for the host the console is served from."""
    environ = os.environ if env is None else env
    override = (environ.get(API_URL_ENV_VAR) or "").strip()
    if override:
        return override
    host = (hostname or "").strip().lower()
    if host in _DEV_HOSTNAMES:
        return DEV_API_URL
    return PROD_API_URL
