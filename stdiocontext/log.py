from __future__ import annotations

import logging
import pprint
import re
import sys
from typing import TextIO

import stdiocontext.color.message
from stdiocontext import config

logger = logging.getLogger("stdiocontext")

debug_log = config.add_param(
    "debug-log",
    False,
    "whether to print stdiocontext debug messages to stderr",
    env="STDIOCONTEXT_DEBUG",
)

_handler: logging.Handler | None = None


class ColorFormatter(logging.Formatter):
    log_funcs = {
        logging.DEBUG: stdiocontext.color.message.debug,
        logging.INFO: stdiocontext.color.message.info,
        logging.WARNING: stdiocontext.color.message.warn,
        logging.ERROR: stdiocontext.color.message.error,
        logging.CRITICAL: stdiocontext.color.message.critical,
    }

    def format(self, record):
        log_func = self.log_funcs.get(record.levelno, str)
        formatter = logging.Formatter(log_func("%(name)s: %(message)s"))
        return formatter.format(record)


def debug_inspect(obj: object) -> str:
    """
    Single line representation of ``obj`` for debug messages.  Returns an
    empty string without formatting anything when debug logging is off.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return ""
    return re.sub(r"\s*\n\s*", " ", pprint.pformat(obj, depth=2, compact=True))


def setup(level: int = logging.DEBUG, stream: TextIO | None = None) -> logging.Handler:
    """Prints stdiocontext log records to ``stream``.

    The stream is fixed when the handler is created, so debug output keeps
    going to the real stderr while a context has replaced ``sys.stderr``.
    """
    global _handler

    if _handler is None:
        _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        _handler.setFormatter(ColorFormatter())
        logger.addHandler(_handler)
    logger.setLevel(level)
    return _handler


def teardown() -> None:
    global _handler

    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)


@config.trigger(debug_log)
def update_debug_log() -> None:
    if debug_log:
        setup()
    else:
        teardown()


if debug_log:
    setup()
