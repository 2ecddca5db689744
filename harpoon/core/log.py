"""Package-wide logger."""

from __future__ import annotations

import logging

logger = logging.getLogger("harpoon")
logger.addHandler(logging.NullHandler())


def enable_console_logging(level: int = logging.DEBUG) -> None:
    """Attach a stderr handler so ``--verbose`` runs show debug output."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
