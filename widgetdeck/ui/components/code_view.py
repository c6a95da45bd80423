from bisect import bisect_right

from PySide6.QtWidgets import QPlainTextEdit, QFrame
from PySide6.QtGui import QSyntaxHighlighter, QTextCharFormat, QColor, QFont, QFontDatabase
from PySide6.QtCore import Qt
from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String
from pygments.util import ClassNotFound

from widgetdeck.core.style import (
    BG_CODE, FG_TEXT, SCROLLBAR_STYLE,
    SYN_KEYWORD, SYN_BUILTIN, SYN_STRING, SYN_NUMBER, SYN_COMMENT, SYN_OPERATOR,
)


def _fmt(color, bold=False, italic=False):
    f = QTextCharFormat()
    f.setForeground(QColor(color))
    if bold:
        f.setFontWeight(QFont.Bold)
    if italic:
        f.setFontItalic(True)
    return f


def lexer_for(language):
    try:
        return get_lexer_by_name(language.lower())
    except ClassNotFound:
        return None


class PygmentsHighlighter(QSyntaxHighlighter):
    """
    Paints a document with the token stream of a Pygments lexer.

    The whole text is lexed at once so strings and comments that span
    lines (long brackets, block comments) are classified correctly; each
    block then takes the slice of spans that overlaps it.
    """

    def __init__(self, document, lexer):
        super().__init__(document)
        self.lexer = lexer
        self.formats = {
            Keyword: _fmt(SYN_KEYWORD, bold=True),
            Name.Builtin: _fmt(SYN_BUILTIN),
            String: _fmt(SYN_STRING),
            Number: _fmt(SYN_NUMBER),
            Comment: _fmt(SYN_COMMENT, italic=True),
            Operator: _fmt(SYN_OPERATOR),
            Punctuation: _fmt(SYN_OPERATOR),
        }
        self._source = None
        self._starts = []
        self._spans = []

    def _format_for(self, ttype):
        while ttype is not None:
            fmt = self.formats.get(ttype)
            if fmt is not None:
                return fmt
            ttype = ttype.parent
        return None

    def set_source(self, text):
        self._source = text
        self._spans = []
        for index, ttype, value in self.lexer.get_tokens_unprocessed(text):
            fmt = self._format_for(ttype)
            if fmt is not None and value:
                self._spans.append((index, index + len(value), fmt))
        self._spans.sort(key=lambda span: span[0])
        self._starts = [span[0] for span in self._spans]

    def highlightBlock(self, text):
        doc = self.document()
        # the document may hold text we were not told about (CRLF folding, edits)
        if self._source is None or len(self._source) != doc.characterCount() - 1:
            self.set_source(doc.toPlainText())

        block_start = self.currentBlock().position()
        block_end = block_start + len(text)
        i = max(bisect_right(self._starts, block_start) - 1, 0)
        while i < len(self._spans):
            start, end, fmt = self._spans[i]
            if start >= block_end:
                break
            lo, hi = max(start, block_start), min(end, block_end)
            if hi > lo:
                self.setFormat(lo - block_start, hi - lo, fmt)
            i += 1


class CodeView(QPlainTextEdit):
    """Read-only, syntax-highlighted source block. Unknown languages stay plain."""

    def __init__(self, text, language, max_height=384, parent=None):
        super().__init__(parent)
        self.language = language
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.setFrameShape(QFrame.NoFrame)
        self.setTextInteractionFlags(Qt.TextSelectableByMouse | Qt.TextSelectableByKeyboard)
        self.setMaximumHeight(max_height)

        font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
        font.setPointSize(10)
        self.setFont(font)
        self.setStyleSheet(f"""
            QPlainTextEdit {{
                background: {BG_CODE}; color: {FG_TEXT};
                border-radius: 6px; padding: 8px;
            }}
        """ + SCROLLBAR_STYLE)

        lexer = lexer_for(language)
        self.highlighter = PygmentsHighlighter(self.document(), lexer) if lexer else None
        if self.highlighter is not None:
            self.highlighter.set_source(text)
        self.setPlainText(text)
