"""
Logging of cadence.

Schedules never log, they are called once per iteration. The only messages of the library come from `Scheduler`,
at debug level, when it starts to drive a new param group and when its counters are restored. Everything goes
through one shared `Logger`, see `get_global_logger()`.
"""
import sys
from datetime import datetime
from typing import Any, Callable, List

from rich import print as rich_print

V_DEBUG = 10
V_INFO = 20
V_WARN = 30

logger = None


def get_global_logger():
    global logger
    if logger is None:
        logger = Logger()
    return logger


def set_global_logger(logger_):
    global logger
    logger = logger_
    return logger


class Logger:
    """
    A singleton logger writing `sep`-joined, dated lines.

    Messages under `Logger.VERBOSE` are dropped. Listeners receive every emitted line with its level, even when
    stdout is toggled off.

    Examples:
        >>> log = get_global_logger()
        ... log.set_verbose(Logger.V_DEBUG)  # show when the Scheduler picks up a param group
        ... log.info(CosAnneal(0.1, 0.8, 10))
    """
    VERBOSE = V_INFO
    V_DEBUG = V_DEBUG
    V_INFO = V_INFO
    V_WARN = V_WARN
    _instance = None

    def __new__(cls, *args, **kwargs) -> Any:
        if Logger._instance is not None:
            return Logger._instance
        return super().__new__(cls)

    def __init__(self, datefmt: str = '%y-%m-%d %H:%M:%S', sep: str = " | ", use_stdout: bool = True,
                 try_rich=False):
        if Logger._instance is not None:
            return

        self.datefmt = datefmt
        self.sep = sep
        self.use_stdout = use_stdout
        self.try_rich = try_rich
        self.listener: List[Callable[[str, int], Any]] = []
        Logger._instance = self

    def format(self, *values, raw=False) -> str:
        """Join `values` with `sep`, prefixed by the current date unless `raw`."""
        values = [str(i) for i in values]
        values = [i for i in values if len(i.strip()) != 0]
        if not raw:
            values.insert(0, datetime.now().strftime(self.datefmt))
        return "{}\n".format(self.sep.join(values))

    def log(self, *values, raw=False, level=V_INFO):
        if level < Logger.VERBOSE:
            return
        logstr = self.format(*values, raw=raw)
        for listener in self.listener:
            listener(logstr, level)

        if not self.use_stdout:
            return
        file = sys.stderr if level > V_INFO else sys.stdout
        if self.try_rich:
            rich_print(logstr, end='', file=file)
        else:
            print(logstr, end='', flush=True, file=file)

    def info(self, *values):
        """Log a message with severity 'INFO'"""
        self.log(*values, level=V_INFO)

    def raw(self, *values, level=V_INFO):
        """Log a message without the date prefix"""
        self.log(*values, raw=True, level=level)

    def debug(self, *values):
        """Log a message with severity 'DEBUG'"""
        self.log("DEBUG", *values, level=V_DEBUG)

    def warn(self, *values):
        """Log a message with severity 'WARN'"""
        self.log("WARN", *values, level=V_WARN)

    def toggle_stdout(self, val: bool = None):
        """False will stop write on stdout"""
        if val is None:
            val = not self.use_stdout
        self.use_stdout = val

    def add_log_listener(self, func: Callable[[str, int], Any]):
        """add a handler called with `(logstr, level)` for every emitted line"""
        self.listener.append(func)

    def remove_log_listener(self, func: Callable[[str, int], Any]):
        self.listener.remove(func)

    def set_verbose(self, verbose=V_INFO):
        """set log verbose, default level is `INFO`"""
        Logger.VERBOSE = verbose
