from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, Optional

from widgetdeck.core.widget import Widget, WidgetInfo


class RecordShape(Enum):
    WITH_INFO = "WITH_INFO"        # {filename, body, info}
    BARE = "BARE"                  # {filename, body}
    INSTALLED = "INSTALLED"        # {fileName, text, isInstalled}
    UNKNOWN = "UNKNOWN"


# Checked in order; first fingerprint whose keys are all present wins.
# Classification feeds diagnostics only. normalize() resolves each field
# through its own fallback chain so partial records still yield a widget.
SHAPE_FINGERPRINTS: tuple[tuple[RecordShape, frozenset[str]], ...] = (
    (RecordShape.WITH_INFO, frozenset({"filename", "body", "info"})),
    (RecordShape.BARE, frozenset({"filename", "body"})),
    (RecordShape.INSTALLED, frozenset({"fileName", "text", "isInstalled"})),
)

IDENTIFIER_KEYS = ("filename", "fileName")
SOURCE_TEXT_KEYS = ("body", "text")
INSTALLED_KEY = "isInstalled"
INFO_KEY = "info"
PLACEHOLDER_PREFIX = "unknown-"


def detect_shape(raw: Any) -> RecordShape:
    if not isinstance(raw, Mapping):
        return RecordShape.UNKNOWN
    keys = set(raw.keys())
    for shape, required in SHAPE_FINGERPRINTS:
        if required <= keys:
            return shape
    return RecordShape.UNKNOWN


def _first_string(raw: Mapping, keys: Iterable[str], allow_empty: bool) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and (allow_empty or value):
            return value
    return None


def _resolve_info(raw: Mapping) -> Optional[WidgetInfo]:
    info = raw.get(INFO_KEY)
    if not isinstance(info, Mapping):
        return None
    known = {
        name: info[name]
        for name in WidgetInfo.field_names()
        if isinstance(info.get(name), str)
    }
    return WidgetInfo(**known)


def _resolve_installed(raw: Mapping) -> Optional[bool]:
    value = raw.get(INSTALLED_KEY)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def normalize(raw: Any, index: int = 0) -> Widget:
    """
    Convert one untrusted host record into a canonical Widget.

    Never raises. Anything that is not a mapping, or a mapping that matches
    no known shape, still yields a displayable widget named after its
    position in the response.
    """
    if not isinstance(raw, Mapping):
        return Widget(identifier=f"{PLACEHOLDER_PREFIX}{index}", source_text="")

    identifier = _first_string(raw, IDENTIFIER_KEYS, allow_empty=False)
    source_text = _first_string(raw, SOURCE_TEXT_KEYS, allow_empty=True)

    return Widget(
        identifier=identifier or f"{PLACEHOLDER_PREFIX}{index}",
        source_text=source_text or "",
        metadata=_resolve_info(raw),
        installed=_resolve_installed(raw),
    )


def normalize_all(records: Iterable[Any]) -> list[Widget]:
    """
    Normalize a whole host response, keeping host order.

    Duplicate identifiers collapse to one entry: the later record's data
    replaces the earlier one in the earlier one's position.
    """
    by_identifier: dict[str, Widget] = {}
    for index, raw in enumerate(records):
        widget = normalize(raw, index)
        by_identifier[widget.identifier] = widget
    return list(by_identifier.values())


def count_unrecognized(records: Iterable[Any]) -> int:
    return sum(1 for raw in records if detect_shape(raw) is RecordShape.UNKNOWN)
