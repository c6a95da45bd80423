# ======================
# THEME: ZINC / MATERIAL DARK
# ======================
BG_MAIN = "#18181b"       # Window background
BG_BAR = "#111113"        # Top bar background
BG_CARD = "#3f3f46"       # Widget card background
BG_CODE = "#2f2f2f"       # Code block background

BORDER_DARK = "#27272a"   # Subtle borders
BORDER_LIGHT = "#52525b"  # Highlight borders

FG_TEXT = "#eeffff"       # Main text
FG_DIM = "#a1a1aa"        # Dim text / Labels
FG_ACCENT = "#c3e88d"     # Loaded / installed green
FG_ERROR = "#ff5370"      # Error red
FG_WARN = "#ffcb6b"       # Loading yellow


# Syntax colours (material dark)
SYN_KEYWORD = "#c792ea"
SYN_BUILTIN = "#82aaff"
SYN_STRING = "#c3e88d"
SYN_NUMBER = "#f78c6c"
SYN_COMMENT = "#546e7a"
SYN_OPERATOR = "#89ddff"

SCROLLBAR_STYLE = f"""
QScrollBar:vertical {{
    background: {BG_MAIN};
    width: 10px;
    margin: 0px;
    border: 1px solid {BORDER_DARK};
}}
QScrollBar::handle:vertical {{
    background: {BORDER_LIGHT};
    min-height: 24px;
    border-radius: 2px;
}}
QScrollBar::add-line:vertical,
QScrollBar::sub-line:vertical {{
    height: 0px;
    width: 0px;
}}
QScrollBar:horizontal {{
    background: {BG_MAIN};
    height: 10px;
    margin: 0px;
    border: 1px solid {BORDER_DARK};
}}
QScrollBar::handle:horizontal {{
    background: {BORDER_LIGHT};
    min-width: 24px;
    border-radius: 2px;
}}
QScrollBar::add-line:horizontal,
QScrollBar::sub-line:horizontal {{
    height: 0px;
    width: 0px;
}}
"""
