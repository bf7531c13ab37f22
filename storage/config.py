"""Simple JSON-backed configuration store."""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.settings import API, API_URL_ENV, CALENDAR, CONFIG_PATH


@dataclass
class AppConfig:
    """User preferences persisted to ``config.json``."""

    api_base_url: Optional[str] = None
    default_view: str = CALENDAR.default_view


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _load_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_config(path: Optional[Path] = None) -> AppConfig:
    target = path or CONFIG_PATH
    data = _load_raw(target)
    return AppConfig(
        api_base_url=data.get("api_base_url") or None,
        default_view=data.get("default_view") or CALENDAR.default_view,
    )


def save_config(config: AppConfig, path: Optional[Path] = None) -> None:
    target = path or CONFIG_PATH
    _ensure_parent(target)
    payload = json.dumps(asdict(config), ensure_ascii=False, indent=2, sort_keys=True)
    tmp = target.with_suffix(".tmp")
    try:
        tmp.write_text(payload, encoding="utf-8")
        tmp.replace(target)
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass


def update_config(path: Optional[Path] = None, **changes: Any) -> AppConfig:
    target = path or CONFIG_PATH
    cfg = load_config(target)
    for key, value in changes.items():
        if hasattr(cfg, key):
            setattr(cfg, key, value)
    save_config(cfg, target)
    return cfg


def resolve_api_base_url(
    config: Optional[AppConfig] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """Environment variable first, then ``config.json``, then the built-in default."""

    environ = os.environ if env is None else env
    from_env = (environ.get(API_URL_ENV) or "").strip()
    if from_env:
        return from_env
    if config is not None and config.api_base_url:
        return config.api_base_url
    return API.base_url


__all__ = ["AppConfig", "load_config", "save_config", "update_config", "resolve_api_base_url"]
