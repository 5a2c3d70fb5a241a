"""
Fenced code blocks.

Lines between fences are escaped and nothing else; the inline formatter
never sees them.
"""

import html

FENCE = "```"


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE)


def fence_language(line: str) -> str:
    """Return the language tag after an opening fence, or ''."""
    return line.strip()[len(FENCE):].strip()


def open_fence(lang: str) -> str:
    """
    Markup that opens a code block.

    With a language the block is wrapped in a div carrying a visible badge
    and the <code> element gets a `language-<tag>` class.
    """
    if not lang:
        return '<pre class="code-block"><code>'
    lang = html.escape(lang)
    return (
        f'<div class="code-block-wrapper"><span class="code-lang code-lang-{lang}">{lang}</span>'
        f'<pre class="code-block"><code class="language-{lang}">'
    )


def close_fence(has_badge: bool) -> str:
    if has_badge:
        return "</code></pre></div>"
    return "</code></pre>"


def escape_code_line(line: str) -> str:
    return html.escape(line) + "\n"
