from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .models import RotaDay, RotaRole

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@dataclass
class WidgetView:
    date: str
    rows: list[RotaRole] = field(default_factory=list)
    url: str = ""
    invalid_parameter: bool = False
    update_available: bool = False


def build_widget(
    day: RotaDay,
    *,
    url: str = "",
    invalid_parameter: bool = False,
    update_available: bool = False,
) -> WidgetView:
    return WidgetView(
        date=day.date,
        rows=list(day.roles),
        url=url,
        invalid_parameter=invalid_parameter,
        update_available=update_available,
    )


def render_text(view: WidgetView) -> str:
    """Plain-text card for terminals; the web app renders templates/widget.html."""
    lines = [view.date, ""]
    for row in view.rows:
        lines.append(row.title)
        lines.append(f"  {row.name}")
    markers = []
    if view.invalid_parameter:
        markers.append("⚠️")
    if view.update_available:
        markers.append("⬇️")
    if markers:
        lines.extend(["", " ".join(markers)])
    return "\n".join(lines)
