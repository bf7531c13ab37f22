from __future__ import annotations

from typing import Any, Callable, List, Optional

import flet as ft

from core.settings import UI
from services.selection import TaskDetail


def open_alert_dialog(page: ft.Page, dlg: ft.AlertDialog) -> ft.AlertDialog:
    if dlg not in page.overlay:
        page.overlay.append(dlg)
    dlg.open = True
    page.update()
    return dlg


def close_alert_dialog(page: ft.Page, dlg: Optional[ft.AlertDialog]) -> None:
    if dlg is None:
        return
    dlg.open = False
    try:
        page.overlay.remove(dlg)
    except ValueError:
        pass
    page.update()


def subtask_label(subtask: Any) -> str:
    if isinstance(subtask, dict):
        for key in ("title", "subtask_name", "name", "task_name"):
            if subtask.get(key):
                return str(subtask[key])
    return str(subtask)


def _row(label: str, value: Any) -> ft.Control:
    return ft.Row(
        [
            ft.Text(label, width=110, color=UI.theme.text_subtle),
            ft.Text("-" if value in (None, "") else str(value), selectable=True, expand=True),
        ],
        vertical_alignment=ft.CrossAxisAlignment.START,
    )


def build_task_detail_dialog(
    detail: TaskDetail,
    *,
    on_close: Callable[[], None],
    width: int = 460,
) -> ft.AlertDialog:
    rows: List[ft.Control] = [
        _row("Description", detail.description),
        _row("Status", detail.status),
        _row("Priority", detail.priority),
        _row("Start", detail.start),
        _row("End", detail.end),
    ]
    if detail.extend_date:
        rows.append(_row("Extended to", detail.extend_date))
    if detail.subtasks:
        rows.append(ft.Text("Subtasks", weight=ft.FontWeight.W_600))
        rows.extend(ft.Text(f"• {subtask_label(s)}") for s in detail.subtasks)

    dlg = ft.AlertDialog(
        modal=False,
        title=ft.Text(detail.title or "(untitled)"),
        content=ft.Container(ft.Column(rows, tight=True, spacing=8, scroll=ft.ScrollMode.AUTO), width=width),
        actions=[ft.TextButton("Close", on_click=lambda e: on_close())],
        actions_alignment=ft.MainAxisAlignment.END,
    )
    dlg.on_dismiss = lambda e: on_close()
    return dlg


__all__ = ["build_task_detail_dialog", "close_alert_dialog", "open_alert_dialog", "subtask_label"]
