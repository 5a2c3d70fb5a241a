import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger("pubmark")

DEFAULT_LINK_CLASS = "underline decoration-2 underline-offset-4"
DEFAULT_MAX_CONTENT_CHARS = 200_000


class RenderOptions(BaseModel):
    """
    Knobs for the markup emitted by the renderer.
    The defaults produce the canonical article markup.
    """
    link_class: str = Field(default=DEFAULT_LINK_CLASS, description="CSS classes placed on every rendered <a>")
    default_image_width: int = Field(default=1024, description="Image width when the {style|W|H} suffix is absent")
    default_image_height: int = Field(default=768, description="Image height when the {style|W|H} suffix is absent")


class Settings(BaseModel):
    """
    Runtime settings for the preview service, read from the environment.
    """
    log_level: str = Field(default="INFO", description="Root log level, e.g. 'DEBUG'")
    max_content_chars: int = Field(default=DEFAULT_MAX_CONTENT_CHARS, description="Largest body the service will render")
    link_class: Optional[str] = Field(default=None, description="Overrides RenderOptions.link_class when set")

    def render_options(self) -> RenderOptions:
        if self.link_class is None:
            return RenderOptions()
        return RenderOptions(link_class=self.link_class)


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def load_settings() -> Settings:
    """
    Build Settings from environment variables (and a .env file, if present).

    Recognised variables:
        PUBMARK_LOG_LEVEL, PUBMARK_MAX_CONTENT_CHARS, PUBMARK_LINK_CLASS
    """
    load_dotenv()
    return Settings(
        log_level=os.getenv("PUBMARK_LOG_LEVEL", "INFO").upper(),
        max_content_chars=_int_from_env("PUBMARK_MAX_CONTENT_CHARS", DEFAULT_MAX_CONTENT_CHARS),
        link_class=os.getenv("PUBMARK_LINK_CLASS"),
    )
