# ui/pages/calendar.py
from __future__ import annotations

from datetime import date, datetime, time as dt_time, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

import flet as ft

from core.log import get_logger
from core.settings import CALENDAR, UI
from helpers.datetime_utils import (
    WEEKDAY_NAMES,
    date_range,
    is_date_only,
    parse_local_datetime,
    start_of_week,
)
from models.event import Event
from services.calendar_model import CalendarModel
from services.pipeline import SourcePhase
from services.selection import EventClicked, Selected, SelectionState
from storage.config import update_config
from ui.dialogs import build_task_detail_dialog, close_alert_dialog, open_alert_dialog

logger = get_logger("ui.calendar")

THEME = UI.theme

VIEWS = ("month", "week", "day")
VIEW_LABELS = {"month": "Month", "week": "Week", "day": "Day"}

MONTH_WEEKS = 6
CHIPS_SPACING = 3

LOADING_TEXT = "Loading..."
RELOADING_TEXT = "Reloading data..."


# ===== layout helpers (no flet involved) =====
def visible_range(view: str, anchor: date, *, first_weekday: int = CALENDAR.first_weekday) -> List[date]:
    if view == "day":
        return [anchor]
    if view == "week":
        return date_range(start_of_week(anchor, first_weekday=first_weekday), 7)
    first = anchor.replace(day=1)
    return date_range(start_of_week(first, first_weekday=first_weekday), MONTH_WEEKS * 7)


def shift_anchor(view: str, anchor: date, step: int) -> date:
    if view == "day":
        return anchor + timedelta(days=step)
    if view == "week":
        return anchor + timedelta(days=7 * step)
    month_index = anchor.year * 12 + (anchor.month - 1) + step
    return date(month_index // 12, month_index % 12 + 1, 1)


def range_title(view: str, anchor: date, *, first_weekday: int = CALENDAR.first_weekday) -> str:
    if view == "day":
        return anchor.strftime("%A, %d %B %Y")
    if view == "week":
        days = visible_range("week", anchor, first_weekday=first_weekday)
        return f"{days[0].strftime('%d %b')} - {days[-1].strftime('%d %b %Y')}"
    return anchor.strftime("%B %Y")


def weekday_headers(first_weekday: int = CALENDAR.first_weekday) -> List[str]:
    return [WEEKDAY_NAMES[(first_weekday + i) % 7][:3] for i in range(7)]


def _local_naive(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def event_days(event: Event) -> Optional[tuple]:
    """First and last calendar day covered by ``event``; ``None`` if its start is unreadable.

    An end at midnight is exclusive, so a task ending ``2024-01-05`` covers up to the 4th.
    """

    start = parse_local_datetime(event.start)
    if start is None:
        return None
    start = _local_naive(start)
    end = parse_local_datetime(event.end)
    if end is None:
        return start.date(), start.date()
    end = _local_naive(end)
    last = end.date()
    if end.time() == dt_time.min and last > start.date():
        last -= timedelta(days=1)
    if last < start.date():
        last = start.date()
    return start.date(), last


def events_by_day(events: Iterable[Event], days: Sequence[date]) -> Dict[date, List[Event]]:
    grouped: Dict[date, List[Event]] = {d: [] for d in days}
    if not days:
        return grouped
    lo, hi = min(days), max(days)
    for event in events:
        span = event_days(event)
        if span is None:
            logger.debug("Skipping event %s with unreadable start %r", event.id, event.start)
            continue
        first, last = span
        cursor = max(first, lo)
        while cursor <= min(last, hi):
            if cursor in grouped:
                grouped[cursor].append(event)
            cursor += timedelta(days=1)
    return grouped


def chip_label(event: Event) -> str:
    title = event.title or "(untitled)"
    if is_date_only(event.start):
        return title
    start = parse_local_datetime(event.start)
    if start is None:
        return title
    return f"{_local_naive(start).strftime('%H:%M')} {title}"


class CalendarPage:
    """
    - Month / week / day grids, navigation prev / today / next.
    - Nothing is drawn from the model while a source is loading or refreshing.
    - Clicks go to the selection controller; the dialog follows its state.
    """

    def __init__(self, app):
        self.app = app
        self.model: CalendarModel = app.model
        self.selection = app.selection

        configured = getattr(app.config, "default_view", CALENDAR.default_view)
        self.view_name: str = configured if configured in VIEWS else CALENDAR.default_view
        self.anchor: date = date.today()
        self._dialog: Optional[ft.AlertDialog] = None

        # ---------- header ----------
        self.title_text = ft.Text("", size=24, weight=ft.FontWeight.BOLD)
        self.prev_btn = ft.IconButton(icon=ft.Icons.CHEVRON_LEFT, tooltip="Previous", on_click=lambda e: self.shift(-1))
        self.today_btn = ft.TextButton("Today", on_click=lambda e: self.go_today())
        self.next_btn = ft.IconButton(icon=ft.Icons.CHEVRON_RIGHT, tooltip="Next", on_click=lambda e: self.shift(1))
        self.view_buttons = {
            name: ft.TextButton(VIEW_LABELS[name], on_click=lambda e, n=name: self.set_view(n))
            for name in VIEWS
        }

        header = ft.Row(
            controls=[
                ft.Row([self.prev_btn, self.next_btn, self.today_btn], spacing=6),
                self.title_text,
                ft.Row(list(self.view_buttons.values()), spacing=4),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )

        self.status_text = ft.Text("", color=ft.Colors.RED_400, size=12, visible=False)
        self.body = ft.Container(expand=True)

        self.view = ft.Container(
            content=ft.Column(
                [header, self.status_text, ft.Divider(height=1), self.body],
                spacing=12, expand=True),
            expand=True, padding=20,
        )

        self.model.subscribe(lambda _model: self.load())
        self.selection.subscribe(self._on_selection_changed)

    # ===== navigation =====
    def shift(self, step: int):
        self.anchor = shift_anchor(self.view_name, self.anchor, step)
        self.load()

    def go_today(self):
        self.anchor = date.today()
        self.load()

    def set_view(self, name: str):
        if name not in VIEWS or name == self.view_name:
            return
        self.view_name = name
        try:
            self.app.config = update_config(default_view=name)
        except OSError as exc:
            logger.warning("Could not remember calendar view: %s", exc)
        self.load()

    # ===== rendering =====
    def load(self):
        self.title_text.value = range_title(self.view_name, self.anchor)
        for name, btn in self.view_buttons.items():
            btn.style = ft.ButtonStyle(bgcolor=THEME.today_bg if name == self.view_name else None)

        errors = self.model.errors()
        self.status_text.value = "; ".join(errors)
        self.status_text.visible = bool(errors)

        pending = self.model.pending
        if pending is not None:
            text = LOADING_TEXT if pending.phase == SourcePhase.LOADING else RELOADING_TEXT
            self.body.content = ft.Container(
                content=ft.Text(text, size=20, weight=ft.FontWeight.W_500),
                alignment=ft.alignment.center,
                padding=40,
            )
        else:
            self.body.content = self._build_grid(self.model.events or [])
        self._update()

    def _update(self):
        page = getattr(self.app, "page", None)
        if page is not None:
            page.update()

    def _build_grid(self, events: List[Event]) -> ft.Control:
        days = visible_range(self.view_name, self.anchor)
        grouped = events_by_day(events, days)

        if self.view_name == "day":
            cell = self._day_cell(days[0], grouped[days[0]], height=CALENDAR.week_cell_height, max_chips=None)
            return ft.Column([cell], expand=True)

        header = ft.Row(
            [ft.Container(ft.Text(name, color=THEME.text_subtle, weight=ft.FontWeight.W_600), expand=True)
             for name in weekday_headers()],
            spacing=0,
        )
        rows: List[ft.Control] = [header]
        if self.view_name == "week":
            rows.append(ft.Row(
                [self._day_cell(d, grouped[d], height=CALENDAR.week_cell_height, max_chips=None) for d in days],
                spacing=0,
            ))
        else:
            for i in range(0, len(days), 7):
                week = days[i:i + 7]
                rows.append(ft.Row(
                    [self._day_cell(d, grouped[d], height=CALENDAR.month_cell_height,
                                    max_chips=CALENDAR.max_chips_per_cell,
                                    outside=d.month != self.anchor.month)
                     for d in week],
                    spacing=0,
                ))
        return ft.Column(rows, spacing=0, expand=True)

    def _day_cell(
        self,
        day: date,
        events: List[Event],
        *,
        height: int,
        max_chips: Optional[int],
        outside: bool = False,
    ) -> ft.Control:
        shown = events if max_chips is None else events[:max_chips]
        controls: List[ft.Control] = [
            ft.Text(
                str(day.day),
                size=12,
                weight=ft.FontWeight.BOLD if day == date.today() else ft.FontWeight.NORMAL,
                color=THEME.text_subtle if outside else None,
            )
        ]
        controls.extend(self._chip(ev) for ev in shown)
        hidden = len(events) - len(shown)
        if hidden > 0:
            controls.append(ft.Text(f"+{hidden} more", size=11, color=THEME.text_subtle))

        if day == date.today():
            bgcolor = THEME.today_bg
        elif outside:
            bgcolor = THEME.outside_month_bg
        else:
            bgcolor = None
        return ft.Container(
            content=ft.Column(controls, spacing=CHIPS_SPACING, tight=True),
            height=height,
            expand=True,
            padding=4,
            bgcolor=bgcolor,
            border=ft.border.all(0.5, THEME.outline),
        )

    def _chip(self, event: Event) -> ft.Control:
        return ft.Container(
            content=ft.Text(
                chip_label(event),
                size=12,
                color=THEME.event_text,
                max_lines=1,
                overflow=ft.TextOverflow.ELLIPSIS,
            ),
            bgcolor=event.background_color,
            border_radius=4,
            padding=ft.padding.symmetric(horizontal=6, vertical=2),
            tooltip=event.title,
            on_click=lambda e, ev=event: self.selection.dispatch(EventClicked(ev)),
        )

    # ===== detail dialog =====
    def _on_selection_changed(self, state: SelectionState):
        page = self.app.page
        if self._dialog is not None:
            close_alert_dialog(page, self._dialog)
            self._dialog = None
        if isinstance(state, Selected):
            self._dialog = build_task_detail_dialog(
                state.detail,
                on_close=self.app.close_details,
                width=CALENDAR.dialog_width,
            )
            open_alert_dialog(page, self._dialog)


__all__ = [
    "CalendarPage",
    "VIEWS",
    "chip_label",
    "event_days",
    "events_by_day",
    "range_title",
    "shift_anchor",
    "visible_range",
    "weekday_headers",
]
