"""
Logging for deplock.

Every invocation builds its own ``DeplockLogger`` with ``setup_logging`` and
hands it to the components that log. Besides the standard levels the logger
has methods for the levels below, from most to least important:

    RESULT      35  outcome of a command
    STATUS      25  lock files written, resolution progress
    VERBOSE     19  per-configuration detail (``--verbose``)
    VERBOSER    18  per-file detail
    RIDICULOUS   7  full resolution dumps
"""

import logging

CRITICAL = logging.CRITICAL
ERROR = logging.ERROR
RESULT = 35
WARNING = logging.WARNING
STATUS = 25
INFO = logging.INFO
VERBOSE = 19
VERBOSER = 18
DEBUG = logging.DEBUG
RIDICULOUS = 7

DEFAULT_STREAM_LOG_LEVEL = INFO

custom_levels = {
    'RESULT': RESULT,
    'STATUS': STATUS,
    'VERBOSE': VERBOSE,
    'VERBOSER': VERBOSER,
    'RIDICULOUS': RIDICULOUS,
}

RESET = "\033[0m"
LEVEL_COLORS = {
    CRITICAL: "\033[1;31m",
    ERROR: "\033[1;31m",
    WARNING: "\033[0;33m",
    RESULT: "\033[0;32m",
    STATUS: "\033[1;34m",
}


class DeplockLogger(logging.Logger):
    pass


def _level_method(level):
    def log_at_level(self, message, *args, **kwargs):
        if self.isEnabledFor(level):
            # Report the caller of this helper, not the helper itself
            kwargs.setdefault("stacklevel", 2)
            self._log(level, message, args, **kwargs)
    return log_at_level


for _name, _level in custom_levels.items():
    logging.addLevelName(_level, _name)
    setattr(DeplockLogger, _name.lower(), _level_method(_level))


class ColoredFormatter(logging.Formatter):
    """``time|LEVEL: message``, colored by level.

    With ``show_location`` the source module and line follow the level name.
    """

    def __init__(self, show_location=False):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.show_location = show_location

    def format(self, record):
        prefix = f"{self.formatTime(record, self.datefmt)}|{record.levelname}:"
        if self.show_location:
            prefix += f"{record.module}:{record.lineno}:"
        color = LEVEL_COLORS.get(record.levelno, RESET)
        return f"{color}{prefix} {record.getMessage()}{RESET}"


def setup_logging(name="deplock", stream_log_level=DEFAULT_STREAM_LOG_LEVEL, stream=None):
    """Create a standalone logger for one deplock invocation.

    The logger is not registered with ``logging.getLogger`` so separate
    builds in one process never share handlers; callers pass it to each
    component explicitly.
    """
    if isinstance(stream_log_level, str):
        stream_log_level = logging.getLevelName(stream_log_level.upper())

    _logger = DeplockLogger(name)
    _logger.setLevel(RIDICULOUS)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColoredFormatter())
    handler.setLevel(stream_log_level)
    _logger.addHandler(handler)
    return _logger


def apply_logging_options(_logger, args):
    """Apply ``--verbose``, ``--debug`` and ``--stream-log-level``.

    An explicit stream level wins; otherwise ``--debug`` and ``--verbose``
    only ever lower the handler level.
    """
    if args is None:
        return

    debug = getattr(args, "debug", False)
    explicit = getattr(args, "stream_log_level", None)
    if explicit:
        level = logging.getLevelName(explicit.upper())
    elif debug:
        level = DEBUG
    elif getattr(args, "verbose", False):
        level = VERBOSE
    else:
        level = None

    for handler in _logger.handlers:
        if debug:
            handler.setFormatter(ColoredFormatter(show_location=True))
        if level is not None and (explicit or handler.level > level):
            handler.setLevel(level)
