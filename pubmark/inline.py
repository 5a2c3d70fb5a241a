"""
Inline formatting for a single run of article text.

The pipeline order matters and must not be rearranged:

    1. HTML-escape the raw text
    2. images   ![alt](url){style} / ![alt](url){style|W|H}
    3. links    [text](url) / [text](url)^, outside of any tag
    4. inline code is swapped out for placeholders, outside of any tag
    5. bold, then italic, outside of any tag
    6. placeholders are swapped back for <code> spans

Escaping first means nothing the author typed can become markup; only the
substitutions below produce tags.
"""

import html
import re
from typing import Callable, List, Optional

from pubmark.config import RenderOptions
from pubmark.urls import safe_url

RE_BOLD = re.compile(r"\*\*(.+?)\*\*")
RE_BOLD_UNDERSCORE = re.compile(r"__(.+?)__")
RE_ITALIC = re.compile(r"\*([^*]+)\*")
RE_ITALIC_UNDERSCORE = re.compile(r"_([^_]+)_")
RE_INLINE_CODE = re.compile(r"`([^`]+)`")
# No class crosses a bracket, so a failed match never rescans the line.
RE_LINK = re.compile(r"\[([^\[\]\n]*)\]\(([^()\[\]\s]*)\)(\^)?")
RE_IMG = re.compile(
    r"!\[([^\[\]\n]*)\]\(([^()\[\]\s]*)\)\{([^|{}\n]*?)(?:\|(\d+)\|(\d+))?\}"
)

# NUL never survives into the formatted text, so it can frame placeholders.
_PLACEHOLDER = "\x00IC{}\x00"
RE_PLACEHOLDER = re.compile(r"\x00IC(\d+)\x00")

_DEFAULT_OPTIONS = RenderOptions()


class ImageCounter:
    """Counts images emitted during one render call."""

    def __init__(self):
        self.count = 0

    def take(self) -> int:
        """Return the number of images seen so far, then count one more."""
        seen = self.count
        self.count += 1
        return seen


def apply_outside_tags(s: str, fn: Callable[[str], str]) -> str:
    """
    Apply fn only to the text between HTML tags.

    Tag bodies (attribute values such as href and src) are copied through
    untouched. An unterminated '<' ends processing; the rest is copied as-is.
    """
    out = []
    pos = 0
    while pos < len(s):
        lt = s.find("<", pos)
        if lt < 0:
            out.append(fn(s[pos:]))
            break
        if lt > pos:
            out.append(fn(s[pos:lt]))
        gt = s.find(">", lt)
        if gt < 0:
            out.append(s[lt:])
            break
        out.append(s[lt:gt + 1])
        pos = gt + 1
    return "".join(out)


def _emphasis(segment: str) -> str:
    segment = RE_BOLD.sub(r"<strong>\1</strong>", segment)
    segment = RE_BOLD_UNDERSCORE.sub(r"<strong>\1</strong>", segment)
    segment = RE_ITALIC.sub(r"<em>\1</em>", segment)
    segment = RE_ITALIC_UNDERSCORE.sub(r"<em>\1</em>", segment)
    return segment


def format_inline(
    text: str,
    counter: Optional[ImageCounter] = None,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Convert one run of raw text into safe inline HTML.

    Args:
        text: Raw author text (one line, heading body or table cell)
        counter: Image counter owned by the current render call
        options: Markup options; defaults give the canonical output

    Returns:
        HTML fragment with every author character escaped
    """
    if counter is None:
        counter = ImageCounter()
    if options is None:
        options = _DEFAULT_OPTIONS

    escaped = html.escape(text.replace("\x00", "\ufffd"))

    def replace_image(match: re.Match) -> str:
        alt, url, style, width, height = match.groups()
        src = safe_url(url)
        if not src:
            return alt
        if not (width and height):
            width = str(options.default_image_width)
            height = str(options.default_image_height)
        if counter.take() == 0:
            load_attr = 'fetchpriority="high"'
        else:
            load_attr = 'loading="eager"'
        return (
            f'<img {load_attr} width="{width}" height="{height}" alt="{alt}" '
            f'src="{src}" style="{style}" decoding="async"/>'
        )

    def replace_link(match: re.Match) -> str:
        label, url, new_tab = match.groups()
        href = safe_url(url)
        if not href:
            return label
        attrs = f'class="{html.escape(options.link_class)}"'
        if new_tab:
            attrs += ' target="_blank" rel="noopener noreferrer"'
        return f'<a href="{href}" {attrs}>{label}</a>'

    escaped = RE_IMG.sub(replace_image, escaped)
    escaped = apply_outside_tags(escaped, lambda seg: RE_LINK.sub(replace_link, seg))

    code_spans: List[str] = []

    def stash_code(match: re.Match) -> str:
        code_spans.append(f"<code>{match.group(1)}</code>")
        return _PLACEHOLDER.format(len(code_spans) - 1)

    escaped = apply_outside_tags(escaped, lambda seg: RE_INLINE_CODE.sub(stash_code, seg))
    escaped = apply_outside_tags(escaped, _emphasis)

    if code_spans:
        escaped = RE_PLACEHOLDER.sub(lambda m: code_spans[int(m.group(1))], escaped)
    return escaped
