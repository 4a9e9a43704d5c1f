import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

APP_NAME = "GraphPresenter"
THEMES = ("Dark", "Light")

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_THEME = "Dark"
DEFAULT_FRAME_MS = 16 # ~60 FPS


@dataclass
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    theme: str = DEFAULT_THEME
    frame_ms: int = DEFAULT_FRAME_MS

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ

        log_level = environ.get("GRAPHPRESENTER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning("Unknown log level %r, using %s", log_level, DEFAULT_LOG_LEVEL)
            log_level = DEFAULT_LOG_LEVEL

        theme = environ.get("GRAPHPRESENTER_THEME", DEFAULT_THEME).capitalize()
        if theme not in THEMES:
            logger.warning("Unknown theme %r, using %s", theme, DEFAULT_THEME)
            theme = DEFAULT_THEME

        try:
            frame_ms = int(environ.get("GRAPHPRESENTER_FRAME_MS", DEFAULT_FRAME_MS))
        except ValueError:
            logger.warning("GRAPHPRESENTER_FRAME_MS must be an integer, using %d", DEFAULT_FRAME_MS)
            frame_ms = DEFAULT_FRAME_MS
        frame_ms = max(1, frame_ms)

        return cls(log_level=log_level, theme=theme, frame_ms=frame_ms)
