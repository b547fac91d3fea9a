from __future__ import annotations

from typing import Iterable
import logging

# Both emit per-chunk / per-font DEBUG records while previews are exported.
NOISY_LOGGERS = ("matplotlib", "PIL")


def setup_default_logging(level: int | str = "INFO", quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """
    Configure console logging for the driver scripts, once.

    Left alone when the root logger already has handlers. Loggers named in
    `quiet` are held at WARNING so --log-level DEBUG shows only pipeline records.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    lvl = level if isinstance(level, int) else logging.getLevelName(str(level).upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(level=lvl, format="%(levelname)s %(name)s: %(message)s")
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
