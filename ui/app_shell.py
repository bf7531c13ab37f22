# ui/app_shell.py
from __future__ import annotations

import asyncio
from typing import Optional

import flet as ft

from core.log import get_logger
from core.settings import UI
from services.api_client import ApiClient
from services.calendar_model import CalendarModel
from services.selection import DetailsClosed, Selected, SelectionController
from services.sources import schedule_source, task_source
from storage.config import AppConfig, load_config, resolve_api_base_url

from .pages.calendar import CalendarPage

logger = get_logger("ui.shell")


class AppShell:
    def __init__(
        self,
        page: ft.Page,
        *,
        config: Optional[AppConfig] = None,
        client: Optional[ApiClient] = None,
    ):
        self.page = page

        self.page.title = UI.app_title
        self.page.horizontal_alignment = ft.CrossAxisAlignment.STRETCH
        self.page.vertical_alignment = ft.MainAxisAlignment.START

        self.config = config or load_config()
        self.client = client or ApiClient(resolve_api_base_url(self.config))
        logger.info("Using task API at %s", self.client.base_url)

        self.model = CalendarModel(task_source(self.client), schedule_source(self.client))
        self.selection = SelectionController()

        self._calendar = CalendarPage(self)
        self.content = ft.Container(self._calendar.view, expand=True)

        self._auto_task = None
        self.page.on_keyboard_event = self._on_key

    # ---------- selection ----------
    def close_details(self):
        self.selection.dispatch(DetailsClosed())

    def _on_key(self, e: ft.KeyboardEvent):
        if e.key == "Escape":
            self.close_details()

    # ---------- data ----------
    def refresh(self):
        """Refetch both sources; the calendar redraws on every state change."""
        self.page.run_task(self._refresh_safely)

    async def _refresh_safely(self):
        try:
            await self.model.refresh()
        except Exception:
            logger.exception("Calendar refresh failed")

    def _start_auto_refresh(self):
        self._stop_auto_refresh()
        interval = UI.auto_refresh.interval_sec

        async def _loop():
            await self._refresh_safely()
            if not UI.auto_refresh.enabled:
                return
            while True:
                await asyncio.sleep(interval)
                # keep the open detail dialog stable
                if isinstance(self.selection.state, Selected):
                    continue
                await self._refresh_safely()

        self._auto_task = self.page.run_task(_loop)

    def _stop_auto_refresh(self):
        if self._auto_task is not None:
            self._auto_task.cancel()
        self._auto_task = None

    # ---------- mount ----------
    def mount(self):
        self.page.controls.clear()
        self.page.add(self.content)
        self._calendar.load()
        self._start_auto_refresh()
