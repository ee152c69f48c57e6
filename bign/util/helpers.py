"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""

import json
import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
import sys
import traceback
from typing import Any, Dict, Optional, Union


def formatTraceback(err: Exception) -> str:
    """
    Render the error and its traceback as text for the logs.

    Args:
        err: The error the traceback is extracted from.

    Returns:
        The __str__() of the error, followed by the standard formatting
            of the traceback on the following lines.
    """
    return "".join(traceback.format_exception(None, err, err.__traceback__))


def mkdir(path: Union[Path, str]) -> bool:
    """
    Ensure the directory exists, creating parents as needed.

    Args:
        path: The directory path.

    Returns:
        False if a regular file is in the way, otherwise True.
    """
    if os.path.isdir(path):
        return True
    if os.path.isfile(path):
        return False
    os.makedirs(path)
    return True


class LogSettings:
    """
    Logging state shared by prepareLogging and getLogger.
    """

    root = logging.getLogger("bign")
    formatter = logging.Formatter(
        "%(asctime)s %(module)s %(levelname)s %(funcName)s(%(lineno)d) %(message)s"
    )
    maxBytes = 5 * 1024 * 1024
    defaultLevel = logging.INFO
    moduleLevels: Dict[str, int] = {}
    loggers: Dict[str, Logger] = {}


LogSettings.root.setLevel(logging.NOTSET)


def _installHandler(handler: logging.Handler) -> None:
    handler.setFormatter(LogSettings.formatter)
    LogSettings.root.addHandler(handler)


def _hasFileHandler(filepath: Union[Path, str]) -> bool:
    target = os.path.abspath(os.fspath(filepath))
    return any(
        isinstance(h, RotatingFileHandler) and h.baseFilename == target
        for h in LogSettings.root.handlers
    )


def _hasStdoutHandler() -> bool:
    # RotatingFileHandler is a StreamHandler too, so match the exact type.
    return any(type(h) is logging.StreamHandler for h in LogSettings.root.handlers)


def prepareLogging(
    filepath: Union[Path, str, None] = None,
    logLvl: int = logging.INFO,
    lvlMap: Optional[Dict[str, int]] = None,
) -> None:
    """
    Set the levels of the bign loggers and attach the output handlers. Output
    goes to stdout and, if filepath is given, to a rotating log file. Calling
    again updates the levels of existing and future loggers, and never
    attaches a second handler for the same destination.

    Args:
        filepath: The base name for the rotating log file.
        logLvl: The level of every logger without an entry in lvlMap.
        lvlMap: Per-logger levels, merged into the ones already registered.
    """
    LogSettings.defaultLevel = logLvl
    if lvlMap:
        LogSettings.moduleLevels.update(lvlMap)
    for name, logger in LogSettings.loggers.items():
        logger.setLevel(LogSettings.moduleLevels.get(name, logLvl))

    if filepath and not _hasFileHandler(filepath):
        _installHandler(
            RotatingFileHandler(filepath, maxBytes=LogSettings.maxBytes, backupCount=2)
        )
    # pythonw on Windows has no stdout.
    if not sys.executable.endswith("pythonw.exe") and not _hasStdoutHandler():
        _installHandler(logging.StreamHandler())


def getLogger(name: str) -> Logger:
    """
    A child of the bign logger, at the level prepareLogging registered for
    name or the default level.

    Args:
        name: The logger name, e.g. "EDS".
    """
    l = LogSettings.root.getChild(name)
    l.setLevel(LogSettings.moduleLevels.get(name, LogSettings.defaultLevel))
    LogSettings.loggers[name] = l
    return l


def logLevel(name: Union[str, int]) -> int:
    """
    Translate a level name such as "debug" or "WARNING" into the logging
    constant. Integers pass through.

    Args:
        name: The level name or number.

    Returns:
        The numeric level.

    Raises:
        ValueError if the name is not a known level.
    """
    if isinstance(name, int):
        return name
    lvl = logging.getLevelName(str(name).upper())
    if not isinstance(lvl, int):
        raise ValueError(f"unknown log level {name!r}")
    return lvl


def fetchSettingsFile(filepath: Union[Path, str]) -> Dict[str, Any]:
    """
    Fetches the JSON settings file, creating an empty json object if necessary.

    Args:
        filepath: The settings file path.

    Returns:
        The decoded settings.
    """
    if not os.path.isfile(filepath):
        mkdir(os.path.dirname(os.path.abspath(filepath)))
        with open(filepath, "w+") as f:
            f.write("{}")
    with open(filepath) as f:
        return json.load(f)


def saveJSON(filepath: Union[Path, str], thing: Any, **kwargs: Any) -> None:
    """
    Save a JSON-encodable object to a file. The file is written to a temporary
    sibling first and moved into place.

    Args:
        filepath: The file path.
        thing: The object to encode.
        **kwargs: Passed on to json.dump.
    """
    tmpPath = str(filepath) + ".tmp"
    with open(tmpPath, "w") as f:
        json.dump(thing, f, **kwargs)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmpPath, filepath)
