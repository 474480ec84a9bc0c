from __future__ import annotations

import logging

from jobly.config import get_settings


_LOG_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; ``level`` overrides ``Settings.log_level``."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = get_settings()
    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOG_CONFIGURED = True
