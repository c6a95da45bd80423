from widgetdeck.core.presentation import (
    HIDE_CODE_LABEL,
    SHOW_CODE_LABEL,
    CodeBlock,
    describe_card,
    status_text,
)
from widgetdeck.core.state import CatalogStatus
from widgetdeck.core.widget import Widget, WidgetInfo


def test_title_falls_back_to_identifier():
    card = describe_card(Widget(identifier="a.lua", source_text="print(1)"), False)
    assert card.title == "a.lua"
    assert card.details == ()
    assert card.description is None


def test_title_uses_metadata_name():
    widget = Widget(identifier="a.lua", source_text="", metadata=WidgetInfo(name="Auto Group"))
    assert describe_card(widget, False).title == "Auto Group"


def test_empty_name_falls_back_to_identifier():
    widget = Widget(identifier="a.lua", source_text="", metadata=WidgetInfo(name=""))
    assert describe_card(widget, False).title == "a.lua"


def test_only_present_fields_are_listed():
    info = WidgetInfo(author="zxbc", version="2.1")
    card = describe_card(Widget(identifier="a.lua", source_text="", metadata=info), False)
    assert card.details == (("Author", "zxbc"), ("Version", "2.1"))


def test_all_fields_in_display_order():
    info = WidgetInfo(name="N", description="Groups units", author="A", date="2023", version="1")
    card = describe_card(Widget(identifier="a.lua", source_text="", metadata=info), False)
    assert card.details == (("Author", "A"), ("Date", "2023"), ("Version", "1"))
    assert card.description == "Groups units"


def test_hidden_card_has_no_code():
    card = describe_card(Widget(identifier="a.lua", source_text="print(1)"), False)
    assert card.code is None
    assert card.toggle_label == SHOW_CODE_LABEL


def test_visible_card_carries_lua_code_verbatim():
    source = "-- hi\nprint(1)\n"
    card = describe_card(Widget(identifier="a.lua", source_text=source), True)
    assert card.code == CodeBlock(text=source, language="lua")
    assert card.toggle_label == HIDE_CODE_LABEL


def test_visible_card_with_empty_source():
    card = describe_card(Widget(identifier="a.lua", source_text=""), True)
    assert card.code == CodeBlock(text="", language="lua")


def test_installed_flag_passes_through():
    assert describe_card(Widget(identifier="a", source_text="", installed=True), False).installed is True
    assert describe_card(Widget(identifier="a", source_text=""), False).installed is None


def test_status_text():
    assert status_text(CatalogStatus.NOT_LOADED, "", 0) == "NOT LOADED"
    assert status_text(CatalogStatus.LOADING, "", 3) == "LOADING WIDGETS..."
    assert status_text(CatalogStatus.LOADED, "", 1) == "1 WIDGET"
    assert status_text(CatalogStatus.LOADED, "", 4) == "4 WIDGETS"
    assert status_text(CatalogStatus.FAILED, "offline", 0) == "REFRESH FAILED: offline"
    assert status_text(CatalogStatus.FAILED, "offline", 2) == "REFRESH FAILED: offline (showing 2 cached)"
