from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logger(*, name: str = "blockfall_rl", level: str = "info", show_time: bool = True) -> logging.Logger:
    """Attach a rich console handler to `name` and return that logger.

    Module loggers under the package (`blockfall_rl.game.core`, ...) propagate
    here, so drivers call this once at startup.
    """
    logger = logging.getLogger(str(name))
    logger.handlers.clear()
    logger.propagate = False

    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(lvl)

    handler = RichHandler(
        rich_tracebacks=True,
        show_time=show_time,
        show_level=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["setup_logger"]
