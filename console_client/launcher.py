from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from console_client.client_config import SETTINGS_FILENAME, load_console_settings, resolve_api_url
from console_client.console_window import ConsoleWindow
from console_client.logging_utils import configure_client_logger
from console_client.session_presence import SessionPresenceCheck
from console_client.status_modal import Severity
from console_client.storage import JsonFileStore, MemoryStore, resolve_storage_path

CLIENT_DIR = Path(__file__).resolve().parent


def resolve_settings_path(args_settings: Optional[str]) -> Path:
    if args_settings:
        return Path(args_settings).expanduser().resolve()
    env_override = os.getenv("ADMIN_CONSOLE_SETTINGS_FILE")
    if env_override:
        return Path(env_override).expanduser().resolve()
    return (CLIENT_DIR / SETTINGS_FILENAME).resolve()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Admin console client")
    parser.add_argument("--settings", help="Path to console_settings.json")
    parser.add_argument("--hostname", help="Host the console is served from (selects the API base URL)")
    parser.add_argument("--title", help="Title of a status modal shown at startup")
    parser.add_argument("--message", help="Message of a status modal shown at startup")
    parser.add_argument(
        "--severity",
        default=Severity.INFO.value,
        help="Severity of the startup modal (success, error, info)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings_path = resolve_settings_path(args.settings)
    settings = load_console_settings(settings_path)
    logger = configure_client_logger(debug_enabled=args.debug, retention=settings.client_log_retention)

    hostname = args.hostname if args.hostname is not None else os.getenv("ADMIN_CONSOLE_HOSTNAME", "")
    api_url = resolve_api_url(hostname)
    persistent_store = JsonFileStore(resolve_storage_path(settings.storage_dir), logger=logger)
    session_store = MemoryStore()
    presence = SessionPresenceCheck([persistent_store, session_store])

    logger.info("Starting admin console client (pid=%s)", os.getpid())
    logger.debug(
        "Loaded settings from %s: open_delay=%dms close_duration=%dms logo_step=%dms retention=%d",
        settings_path,
        settings.modal_open_delay_ms,
        settings.modal_close_duration_ms,
        settings.logo_half_step_ms,
        settings.client_log_retention,
    )
    logger.info("API base URL resolved to %s (hostname=%r)", api_url, hostname)
    logger.info(
        "Cached session %s (user=%s)",
        "present" if presence.is_authenticated() else "absent",
        presence.current_user() or "none",
    )

    app = QApplication(sys.argv)
    window = ConsoleWindow(settings, persistent_store, logger=logger)
    window.show()
    if args.title and args.message:
        window.open_overlay(args.title, args.message, args.severity)

    exit_code = app.exec()
    logger.info("Admin console client exiting with code %s", exit_code)
    return int(exit_code)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
