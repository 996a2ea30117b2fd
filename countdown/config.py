"""Paths, runtime options and log setup."""
from __future__ import annotations

import argparse
import logging
import os
import platform
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

APP_NAME = "countdown"
EVENTS_FILE_NAME = "events.json"
LOG_FILE_NAME = "countdown.log"

ENV_CONFIG_DIR = "COUNTDOWN_CONFIG_DIR"
ENV_OFFLINE = "COUNTDOWN_OFFLINE"
ENV_LOG_LEVEL = "COUNTDOWN_LOG_LEVEL"


def get_user_config_dir() -> Path:
    """Per-OS base directory for application config."""
    system = platform.system().lower()
    if system == "darwin":
        return Path.home() / "Library" / "Application Support"
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def get_config_dir() -> Path:
    override = os.environ.get(ENV_CONFIG_DIR)
    if override:
        return Path(override)
    return get_user_config_dir() / APP_NAME


def get_events_path() -> Path:
    return get_config_dir() / EVENTS_FILE_NAME


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    config_dir: Path
    log_level: str = "WARNING"
    fetch_history: bool = True
    fetch_timeout: float = 10.0
    tick_interval: float = 1.0

    @property
    def events_path(self) -> Path:
        return self.config_dir / EVENTS_FILE_NAME

    @property
    def log_path(self) -> Path:
        return self.config_dir / LOG_FILE_NAME


def parse_args(argv=None, version: str = ""):
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Terminal countdowns for the events you care about",
        epilog="Keys: + add, - remove, e edit, tab/shift+tab move, enter confirm, esc back, q quit.",
    )
    parser.add_argument("--config-dir", type=Path, help="directory holding events.json")
    parser.add_argument("--offline", action="store_true", help="skip the 'on this day' fetch")
    parser.add_argument("--log-level", help="file log level (default WARNING)")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {version}")
    return parser.parse_args(argv)


def load_config(args=None) -> Config:
    """Merge CLI options over environment variables over defaults."""
    config_dir = getattr(args, "config_dir", None) or get_config_dir()
    offline = bool(getattr(args, "offline", False)) or _env_flag(ENV_OFFLINE)
    log_level = getattr(args, "log_level", None) or os.environ.get(ENV_LOG_LEVEL) or "WARNING"
    return Config(
        config_dir=Path(config_dir),
        log_level=log_level.upper(),
        fetch_history=not offline,
    )


def setup_logging(config: Config) -> logging.Logger:
    """File logging only; the terminal belongs to the TUI."""
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    config.config_dir.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(config.log_path, maxBytes=1_000_000, backupCount=2, encoding="utf-8")
    fh.setLevel(getattr(logging, config.log_level, logging.WARNING))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(fh)
    return logger
