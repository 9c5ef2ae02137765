import logging

from .config import Settings, get_settings

# Third-party loggers that are too chatty at DEBUG
_NOISY_LOGGERS = {
    "uvicorn.access": logging.INFO,
    "sqlalchemy.engine": logging.INFO,
    "aiosqlite": logging.WARNING,
}


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure root logging based on settings.logging.

    - Sets root level according to settings.logging.level
    - Applies a consistent format from settings.logging.format
    - Avoids reconfiguration if handlers already exist (idempotent)
    """
    settings = settings or get_settings()
    level_name = (settings.logging.level or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(level=level, format=settings.logging.format)

    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)


__all__ = ["setup_logging"]
