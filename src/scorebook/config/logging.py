import logging
from pathlib import Path
from datetime import datetime
from typing import Union

import colorlog

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)-8s - %(message)s'
CONSOLE_FORMAT = (
    "%(green)s%(asctime)s%(reset)s - %(purple)s%(name)s - "
    "%(log_color)s%(levelname)s%(reset)s - %(message)s"
)
LEVEL_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'blue',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

# chatty at DEBUG, and the side-channel writes on every dispatch
QUIET_LOGGERS = ('sqlalchemy.engine', 'filelock')


def _handler(handler: logging.Handler, formatter: logging.Formatter, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_dir: Union[str, Path] = 'logs', level: int = logging.INFO) -> Path:
    """
    Send every scorebook logger to a coloured console and to a fresh
    `scorebook_<timestamp>.log` file under `log_dir`. Returns the log file path.
    Calling it again replaces the handlers instead of stacking them.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"scorebook_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [
        # plain text, .log files can't handle colors
        _handler(logging.FileHandler(log_file), logging.Formatter(FILE_FORMAT), level),
        _handler(
            colorlog.StreamHandler(),
            colorlog.ColoredFormatter(CONSOLE_FORMAT, log_colors=LEVEL_COLORS, style='%'),
            level,
        ),
    ]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return log_file
