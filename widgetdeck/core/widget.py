from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True)
class WidgetInfo:
    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class Widget:
    """
    Canonical widget as every component past the normalizer sees it.

    installed is tri-state: True/False when the host reported it,
    None when the record shape carries no install flag.
    """
    identifier: str
    source_text: str
    metadata: Optional[WidgetInfo] = None
    installed: Optional[bool] = None
