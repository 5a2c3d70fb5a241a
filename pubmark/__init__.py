from pubmark.config import RenderOptions
from pubmark.inline import ImageCounter, apply_outside_tags, format_inline
from pubmark.markdown_renderer import (
    BlockContext,
    render_into,
    render_markdown,
)
from pubmark.urls import safe_url

__all__ = [
    "BlockContext",
    "ImageCounter",
    "RenderOptions",
    "apply_outside_tags",
    "format_inline",
    "render_into",
    "render_markdown",
    "safe_url",
]
