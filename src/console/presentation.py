"""Plain-text rendering of controller state for the terminal console."""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from src.console.controllers.base import ViewStatus
from src.console.controllers.detail_controller import DetailState
from src.console.controllers.form_controller import FormState
from src.console.controllers.list_controller import ListState
from src.console.schemas import EntityView, cell_value

_ALERT_PREFIX = {"error": "[error]", "success": "[ok]", "info": "[info]", "warning": "[warn]"}


def render_alert(kind: str, message: str) -> str:
    return f"{_ALERT_PREFIX.get(kind, '[info]')} {message}"


def render_table(view: EntityView, rows: Sequence[Any]) -> str:
    headers = ["ID"] + [label for _, label in view.columns]
    body: List[List[str]] = [
        [str(getattr(row, "id", ""))] + [cell_value(row, attr) for attr, _ in view.columns]
        for row in rows
    ]
    widths = [len(h) for h in headers]
    for line in body:
        widths = [max(w, len(cell)) for w, cell in zip(widths, line)]

    def fmt(cells: Iterable[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    out = [fmt(headers), "-+-".join("-" * w for w in widths)]
    out.extend(fmt(line) for line in body)
    return "\n".join(out)


def render_pager(state: ListState) -> str:
    if state.total_pages == 0:
        return "Page 0 of 0"
    first = "<<" if state.can_go_previous else "  "
    prev = "<" if state.can_go_previous else " "
    nxt = ">" if state.can_go_next else " "
    last = ">>" if state.can_go_next else "  "
    arrow = "asc" if state.sort_direction.value == "asc" else "desc"
    return (
        f"{first} {prev} Page {state.page + 1} of {state.total_pages} {nxt} {last}"
        f"  ({state.total_elements} total, {state.size} per page, sorted by {state.sort_field} {arrow})"
    )


def render_list(view: EntityView, state: ListState) -> str:
    parts = [view.title]
    if state.status is ViewStatus.LOADING:
        parts.append("Loading...")
        return "\n".join(parts)
    if state.error:
        parts.append(render_alert("error", state.error))
    if state.status is ViewStatus.LOADED:
        if not state.items:
            parts.append(view.empty_message())
        else:
            parts.append(render_table(view, state.items))
            parts.append(render_pager(state))
    return "\n".join(parts)


def render_detail(view: EntityView, state: DetailState, owned_view: EntityView = None) -> str:
    if state.entity is None:
        return render_alert("error", state.error or f"{view.singular.capitalize()} not found.")
    parts = [f"{view.singular.capitalize()} #{state.entity.id}"]
    if state.error:
        parts.append(render_alert("error", state.error))
    for attr, label in view.columns:
        parts.append(f"  {label}: {cell_value(state.entity, attr)}")
    if owned_view is not None:
        parts.append(f"\n{owned_view.title}")
        if state.related_error:
            parts.append(render_alert("error", state.related_error))
        elif not state.related:
            parts.append(f"No {owned_view.plural} linked to this {view.singular}.")
        else:
            parts.append(render_table(owned_view, state.related))
    return "\n".join(parts)


def render_form_errors(state: FormState) -> str:
    lines = []
    if state.error:
        lines.append(render_alert("error", state.error))
    for name, message in sorted(state.field_errors.items()):
        lines.append(f"  {name}: {message}")
    return "\n".join(lines)
