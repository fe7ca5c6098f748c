# wgsim/logsettings.py

"""
Loguru configuration for the mode solver.

Library modules only emit records (logger.debug / logger.trace); this module
decides where they go. The standard-output level is read from the
WGSIM_STD_LOGLEVEL environment variable on import of the package.
"""

import importlib
import os
import platform
import sys
from pathlib import Path
from typing import Literal

from loguru import logger

packages = ["torch", "numpy", "scipy", "matplotlib"]

ENV_STD_LOGLEVEL = "WGSIM_STD_LOGLEVEL"
ENV_FILE_LOGLEVEL = "WGSIM_FILE_LOGLEVEL"
DEFAULT_LOGLEVEL = "WARNING"


def get_version(pkg_name):
    try:
        module = importlib.import_module(pkg_name)
        return getattr(module, "__version__", "unknown")
    except ImportError:
        return "not installed"


############################################################
#                          FORMATS                         #
############################################################

TRACE_FORMAT = (
    "{time:YY/MM/DD HH:mm:ss.SSSS} {level:<7} {name}:{line:>4}: "
    "{message}"
)

SHORT_FORMAT = (
    "<green>{elapsed}</green>  <level>{level:<7}</level>: "
    "<level>{message}</level>"
)

FORMAT_DICT = {
    'TRACE': TRACE_FORMAT,
    'DEBUG': SHORT_FORMAT,
    'INFO': SHORT_FORMAT,
    'WARNING': SHORT_FORMAT,
    'ERROR': SHORT_FORMAT,
}

LLTYPE = Literal['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR']


############################################################
#                      LOG CONTROLLER                     #
############################################################

class LogController:

    def __init__(self):
        self.std_handlers: list[int] = []
        self.file_handlers: list[int] = []
        self.level: str = DEFAULT_LOGLEVEL
        self.file_level: str = 'TRACE'

    def set_default(self):
        value = os.getenv(ENV_STD_LOGLEVEL, default=DEFAULT_LOGLEVEL)
        self.set_std_loglevel(value.upper())

    def set_std_loglevel(self, loglevel: LLTYPE):
        """
        Replace every handler with a single stderr handler at the given level.
        File handlers added earlier are dropped as well.
        """
        if loglevel not in FORMAT_DICT:
            raise ValueError(f"Unknown log level {loglevel!r}; expected one of {list(FORMAT_DICT)}")
        handler = {"sink": sys.stderr,
                   "level": loglevel,
                   "format": FORMAT_DICT[loglevel]}
        self.std_handlers = logger.configure(handlers=[handler])
        self.file_handlers = []
        self.level = loglevel
        os.environ[ENV_STD_LOGLEVEL] = loglevel

    def set_write_file(self, path: Path, loglevel: LLTYPE = 'TRACE') -> Path:
        """
        Additionally write records to <path>/wgsim.log. Returns the log file path.
        """
        logfile = Path(path) / 'wgsim.log'
        handler_id = logger.add(str(logfile), mode='w', level=loglevel,
                                format=TRACE_FORMAT, colorize=False)
        self.file_handlers.append(handler_id)
        self.file_level = loglevel
        os.environ[ENV_FILE_LOGLEVEL] = loglevel
        self.sys_info()
        return logfile

    def remove_file_handlers(self):
        for handler_id in self.file_handlers:
            logger.remove(handler_id)
        self.file_handlers = []

    def sys_info(self) -> None:
        for pkg in packages:
            logger.trace(f" (!) {pkg} version: {get_version(pkg)}")
        logger.trace(f" (!) OS: {platform.system()} {platform.release()}")
        logger.trace(f" (!) Python version: {platform.python_version()}")


############################################################
#                        SINGLETONS                       #
############################################################

LOG_CONTROLLER = LogController()
