import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from pubmark.config import load_settings
from pubmark.inline import format_inline
from pubmark.markdown_renderer import render_markdown

settings = load_settings()

# Configure Logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("pubmark")

app = FastAPI()


class RenderRequest(BaseModel):
    text: str


class RenderResponse(BaseModel):
    """Response model for render endpoints."""
    content: str
    format: str


def _check_size(text: str) -> None:
    if len(text) > settings.max_content_chars:
        logger.warning(f"Rejected {len(text)} chars (limit {settings.max_content_chars})")
        raise HTTPException(
            status_code=413,
            detail=f"Content exceeds {settings.max_content_chars} characters"
        )

# -------------------------------------------------------------------------
# Render Endpoints
# -------------------------------------------------------------------------

@app.post("/api/render/preview")
def render_preview(req: RenderRequest) -> RenderResponse:
    """
    Render an article body as an HTML fragment without saving it.

    Args:
        req: RenderRequest with the raw markup

    Returns:
        RenderResponse with HTML content
    """
    logger.info(f"RENDER PREVIEW Request: {len(req.text)} chars")
    _check_size(req.text)

    html = render_markdown(req.text, settings.render_options())

    return RenderResponse(content=html, format="html")


@app.post("/api/render/inline")
def render_inline(req: RenderRequest) -> RenderResponse:
    """
    Format a single run of text (a title, a caption) with inline markup only.
    """
    logger.info(f"RENDER INLINE Request: {len(req.text)} chars")
    _check_size(req.text)

    html = format_inline(req.text, options=settings.render_options())

    return RenderResponse(content=html, format="html")
