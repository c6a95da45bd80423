from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from widgetdeck.core.state import CatalogStatus
from widgetdeck.core.widget import Widget

CODE_LANGUAGE = "lua"
SHOW_CODE_LABEL = "Show code"
HIDE_CODE_LABEL = "Hide code"

# Order in which the summary row lists metadata.
SUMMARY_FIELDS = (
    ("author", "Author"),
    ("date", "Date"),
    ("version", "Version"),
)


@dataclass(frozen=True)
class CodeBlock:
    text: str
    language: str


@dataclass(frozen=True)
class CardModel:
    identifier: str
    title: str
    details: tuple[tuple[str, str], ...]
    description: Optional[str]
    installed: Optional[bool]
    toggle_label: str
    code: Optional[CodeBlock]


def describe_card(widget: Widget, visible: bool, language: str = CODE_LANGUAGE) -> CardModel:
    info = widget.metadata
    title = (info.name if info and info.name else None) or widget.identifier

    details: list[tuple[str, str]] = []
    if info is not None:
        for attr, label in SUMMARY_FIELDS:
            value = getattr(info, attr)
            if value:
                details.append((label, value))

    description = info.description if info and info.description else None

    return CardModel(
        identifier=widget.identifier,
        title=title,
        details=tuple(details),
        description=description,
        installed=widget.installed,
        toggle_label=HIDE_CODE_LABEL if visible else SHOW_CODE_LABEL,
        code=CodeBlock(text=widget.source_text, language=language) if visible else None,
    )


def status_text(status: CatalogStatus, reason: str, widget_count: int) -> str:
    """One-line summary for the window status bar."""
    if status == CatalogStatus.LOADING:
        return "LOADING WIDGETS..."
    if status == CatalogStatus.FAILED:
        suffix = f" (showing {widget_count} cached)" if widget_count else ""
        return f"REFRESH FAILED: {reason}{suffix}"
    if status == CatalogStatus.LOADED:
        return f"{widget_count} WIDGET{'S' if widget_count != 1 else ''}"
    return "NOT LOADED"
