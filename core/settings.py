"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
import logging
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``."""

    platform_id = (platform or sys.platform).lower()
    environ = dict(env or os.environ)
    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = Path(environ.get("APPDATA") or home_dir / "Library" / "Application Support")
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return (base.expanduser() / sanitized)


APP_NAME = "Task Calendar"
API_URL_ENV = "TASK_CALENDAR_API_URL"


DATA_DIR = get_default_data_dir(APP_NAME)
LOG_DIR = DATA_DIR / "logs"

CONFIG_PATH = DATA_DIR / "config.json"
LOG_PATH = LOG_DIR / "calendar.log"

# date.weekday() indices
MONDAY = 0
SUNDAY = 6


@dataclass(frozen=True)
class ThemeColors:
    task_event: str = "#4caf50"
    schedule_event: str = "#2196f3"
    event_text: str = "#FFFFFF"
    outline: str = "#E5E7EB"
    text_subtle: str = "#6B7280"
    today_bg: str = "#EEF2FF"
    outside_month_bg: str = "#F8FAFC"
    safe_surface_bg: str = "#F1F5F9"


@dataclass(frozen=True)
class CalendarSettings:
    lookahead_days: int = 14
    first_weekday: int = SUNDAY
    default_view: str = "month"
    month_cell_height: int = 110
    week_cell_height: int = 420
    max_chips_per_cell: int = 4
    dialog_width: int = 460


@dataclass(frozen=True)
class AutoRefreshSettings:
    enabled: bool = True
    interval_sec: int = 60


@dataclass(frozen=True)
class UISettings:
    app_title: str = APP_NAME
    theme_mode: str = "system"
    color_scheme_seed: str = "#4F46E5"
    window_min_width: int = 900
    window_min_height: int = 600
    theme: ThemeColors = field(default_factory=ThemeColors)
    auto_refresh: AutoRefreshSettings = field(default_factory=AutoRefreshSettings)


UI = UISettings()
CALENDAR = CalendarSettings()


@dataclass(frozen=True)
class ApiSettings:
    base_url: str = "http://localhost:3000"
    tasks_path: str = "/tasks"
    schedules_path: str = "/schedules"
    timeout_sec: float = 10.0


API = ApiSettings()


@dataclass(frozen=True)
class LogSettings:
    path: Path = LOG_PATH
    level: int = logging.INFO
    max_bytes: int = 1_000_000
    backup_count: int = 3


LOGGING = LogSettings()


__all__ = [
    "APP_NAME",
    "API_URL_ENV",
    "DATA_DIR",
    "LOG_DIR",
    "CONFIG_PATH",
    "LOG_PATH",
    "MONDAY",
    "SUNDAY",
    "UI",
    "CALENDAR",
    "API",
    "LOGGING",
    "get_default_data_dir",
]
