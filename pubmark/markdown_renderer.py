"""
Article markup to HTML rendering.

This module drives a single pass over the document, one line at a time.
Exactly one block context is open at any moment; opening a new block
closes ("flushes") the current one first. Text inside blocks goes through
the inline formatter, except inside fenced code, which is escaped only.

The output is an HTML fragment that is safe to embed without further
sanitizing.
"""

import enum
import io
import logging
import re
from typing import Optional, TextIO

from pubmark.config import RenderOptions
from pubmark.fences import close_fence, escape_code_line, fence_language, is_fence, open_fence
from pubmark.inline import ImageCounter, format_inline
from pubmark.tables import is_table_separator, parse_table_cells

logger = logging.getLogger("pubmark.renderer")

RE_ORDERED_LIST = re.compile(r"^(\d+)\.\s", re.ASCII)


class BlockContext(enum.Enum):
    NONE = "none"
    PARAGRAPH = "paragraph"
    LIST = "list"
    ORDERED_LIST = "ordered_list"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    CODE = "code"


_CLOSERS = {
    BlockContext.PARAGRAPH: "</p>",
    BlockContext.LIST: "</ul>",
    BlockContext.ORDERED_LIST: "</ol>",
    BlockContext.BLOCKQUOTE: "</blockquote>",
}

_HEADINGS = (("### ", "h3"), ("## ", "h2"), ("# ", "h1"))


class _BlockScanner:
    """
    State for one render call. Never shared between calls.
    """

    def __init__(self, buf: TextIO, options: RenderOptions):
        self.buf = buf
        self.options = options
        self.counter = ImageCounter()
        self.context = BlockContext.NONE
        self.table_header_done = False
        self.code_has_badge = False

    def _inline(self, text: str) -> str:
        return format_inline(text, self.counter, self.options)

    def flush(self) -> None:
        """Close whatever block is open. A no-op when nothing is."""
        ctx = self.context
        if ctx is BlockContext.NONE:
            return
        if ctx is BlockContext.TABLE:
            if self.table_header_done:
                self.buf.write("</tbody>")
            self.buf.write("</table>")
            self.table_header_done = False
        elif ctx is BlockContext.CODE:
            self.buf.write(close_fence(self.code_has_badge))
            self.code_has_badge = False
        else:
            self.buf.write(_CLOSERS[ctx])
        self.context = BlockContext.NONE

    def enter(self, ctx: BlockContext, opener: str) -> bool:
        """
        Make ctx the open block, writing opener if it was not open already.

        Returns True when a new block was opened.
        """
        if self.context is ctx:
            return False
        self.flush()
        self.buf.write(opener)
        self.context = ctx
        return True

    def feed(self, raw: str) -> None:
        line = raw.rstrip("\r")

        if is_fence(line):
            closing = self.context is BlockContext.CODE
            self.flush()
            if not closing:
                lang = fence_language(line)
                self.buf.write(open_fence(lang))
                self.code_has_badge = bool(lang)
                self.context = BlockContext.CODE
            return

        if self.context is BlockContext.CODE:
            self.buf.write(escape_code_line(line))
            return

        if not line.strip():
            self.flush()
            return

        if line.startswith("---"):
            self.flush()
            self.buf.write("<hr/>")
            return

        for prefix, tag in _HEADINGS:
            if line.startswith(prefix):
                self.flush()
                self.buf.write(f"<{tag}>{self._inline(line[len(prefix):].strip())}</{tag}>")
                return

        if line.startswith("|"):
            self._table_row(line)
        elif line.startswith("- "):
            self.enter(BlockContext.LIST, "<ul>")
            self.buf.write(f"<li>{self._inline(line[2:].strip())}</li>")
        elif RE_ORDERED_LIST.match(line):
            self.enter(BlockContext.ORDERED_LIST, "<ol>")
            content = RE_ORDERED_LIST.sub("", line, count=1)
            self.buf.write(f"<li>{self._inline(content.strip())}</li>")
        elif line.startswith("> "):
            self.enter(BlockContext.BLOCKQUOTE, "<blockquote>")
            self.buf.write(self._inline(line[2:].strip()))
        else:
            if not self.enter(BlockContext.PARAGRAPH, "<p>"):
                self.buf.write(" ")
            self.buf.write(self._inline(line.strip()) + "\n")

    def _table_row(self, line: str) -> None:
        cells = parse_table_cells(line)
        if self.enter(BlockContext.TABLE, "<table>"):
            header = "".join(f"<th>{self._inline(cell)}</th>" for cell in cells)
            self.buf.write(f"<thead><tr>{header}</tr></thead>")
            return

        if not self.table_header_done:
            self.buf.write("<tbody>")
            self.table_header_done = True
        if is_table_separator(line):
            return
        row = "".join(f"<td>{self._inline(cell)}</td>" for cell in cells)
        self.buf.write(f"<tr>{row}</tr>")

    def finish(self) -> None:
        if self.context is BlockContext.CODE:
            logger.debug("Unterminated code fence closed at end of document")
        self.flush()


def render_into(buf: TextIO, content: Optional[str], options: Optional[RenderOptions] = None) -> None:
    """
    Render article markup, writing the HTML fragment into buf.

    Args:
        buf: Any text stream with a write(str) method
        content: Raw article markup
        options: Markup options; defaults give the canonical output
    """
    if not content:
        return
    scanner = _BlockScanner(buf, options or RenderOptions())
    lines = content.split("\n")
    for raw in lines:
        scanner.feed(raw)
    scanner.finish()
    logger.debug(f"Rendered {len(lines)} lines, {scanner.counter.count} images")


def render_markdown(content: Optional[str], options: Optional[RenderOptions] = None) -> str:
    """
    Convert article markup to a sanitized HTML fragment.

    Args:
        content: Raw article markup

    Returns:
        HTML fragment (no <html>/<body>); "" for empty input

    Example:
        >>> render_markdown("# Hello\\n\\n- one\\n- two")
        '<h1>Hello</h1><ul><li>one</li><li>two</li></ul>'
    """
    buf = io.StringIO()
    render_into(buf, content, options)
    return buf.getvalue()

