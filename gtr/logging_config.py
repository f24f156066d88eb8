"""Logging configuration for gtr"""
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

PACKAGE_LOGGER = 'gtr'
# GitPython logs each command line it runs at DEBUG under this name
GIT_LOGGER = 'git'
LOG_FILE_NAME = 'gtr.log'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
# Same "gtr: ..." prefix the CLI uses for errors
CONSOLE_FORMAT = 'gtr: %(levelname)s: %(message)s'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when the stream is a terminal."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, stream=None, lowercase_levels: bool = False):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.stream = stream
        self.lowercase_levels = lowercase_levels

    def format(self, record):
        # Work on a copy: other handlers (the log file) see the same record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        levelname = record.levelname.lower() if self.lowercase_levels else record.levelname
        stream = self.stream or sys.stderr
        if color and stream.isatty():
            levelname = f"{color}{levelname}{self.RESET}"
        record.levelname = levelname
        return super().format(record)


def default_log_file(env: Optional[Mapping[str, str]] = None) -> Path:
    """Debug log location: ``$XDG_STATE_HOME/gtr/gtr.log`` or ``~/.local/state/gtr/gtr.log``."""
    env = os.environ if env is None else env
    state_home = env.get('XDG_STATE_HOME') or os.path.join(os.path.expanduser('~'), '.local', 'state')
    return Path(state_home) / PACKAGE_LOGGER / LOG_FILE_NAME


def setup_logging(verbose: bool = False, debug: bool = False,
                  log_file: Optional[Path] = None) -> Optional[Path]:
    """
    Configure the gtr and GitPython loggers.

    Only those two logger trees get handlers; the root logger is left alone.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages (git command lines included)
            and also write a log file, overwritten each run
        log_file: Where the debug log goes (default: default_log_file())

    Returns:
        Path of the debug log file, or None when not writing one
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handlers = []
    written_to = None

    if debug:
        written_to = log_file or default_log_file()
        written_to.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(written_to, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    else:
        console_handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, lowercase_levels=True))
    handlers.append(console_handler)

    for name in (PACKAGE_LOGGER, GIT_LOGGER):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        # GitPython's own INFO chatter stays hidden unless debugging
        logger.setLevel(level if name == PACKAGE_LOGGER or debug else logging.WARNING)
        for handler in handlers:
            logger.addHandler(handler)

    return written_to


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the gtr namespace.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance that setup_logging() reaches
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
