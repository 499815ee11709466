import logging
import sys

from colorlog import ColoredFormatter

LOGGER_NAME = "lambda_builder"

LOG_COLORS = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "red,bg_white",
}


class _BelowErrorFilter(logging.Filter):
    def filter(self, record):
        return record.levelno < logging.ERROR


def setup_logger(debug_mode=False, color=True):
    """
    Configure the package logger.

    Module loggers are created with logging.getLogger(__name__) and propagate
    here. Records below ERROR go to stdout, ERROR and above to stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    if not logger.handlers:
        out_handler = logging.StreamHandler(sys.stdout)
        out_handler.addFilter(_BelowErrorFilter())
        logger.addHandler(out_handler)
        logger.addHandler(logging.StreamHandler(sys.stderr))

    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors=LOG_COLORS,
        no_color=not color,
    )
    for handler in logger.handlers:
        # stdout/stderr may have been replaced since the handler was created
        if any(isinstance(f, _BelowErrorFilter) for f in handler.filters):
            handler.setStream(sys.stdout)
            handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
        else:
            handler.setStream(sys.stderr)
            handler.setLevel(logging.ERROR)
        handler.setFormatter(formatter)

    return logger
