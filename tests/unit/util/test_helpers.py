"""
Copyright (c) 2025, the bign developers
See LICENSE for details
"""

import json
import logging
from logging.handlers import RotatingFileHandler
import os

import pytest

from bign import BignError
from bign.util import helpers


def test_formatTraceback():
    # Cannot actually raise an error because pytest intercepts it.
    assert "errmsg" in helpers.formatTraceback(BignError("errmsg"))


def test_mkdir(tmp_path):
    fpath = tmp_path / "test_file"
    f = open(fpath, "w")
    f.close()
    assert not helpers.mkdir(fpath)
    dpath = tmp_path / "test_dir"
    assert helpers.mkdir(dpath)
    assert os.path.isdir(dpath)
    assert helpers.mkdir(dpath)


def test_prepareLogging(tmp_path):
    path = tmp_path / "test.log"
    helpers.prepareLogging(filepath=path)
    logger = helpers.getLogger("1")
    logger1 = logger
    assert logger.getEffectiveLevel() == logging.INFO

    logger.info("something")
    assert path.is_file()

    helpers.prepareLogging(filepath=path, logLvl=logging.DEBUG)
    logger = helpers.getLogger("2")
    assert logger.getEffectiveLevel() == logging.DEBUG

    helpers.prepareLogging(
        filepath=path,
        logLvl=logging.INFO,
        lvlMap={"1": logging.NOTSET, "3": logging.WARNING},
    )
    logger = helpers.getLogger("3")
    assert logger.getEffectiveLevel() == logging.WARNING
    assert logger1.level == logging.NOTSET
    assert logger.name == "bign.3"


def test_logLevel():
    assert helpers.logLevel("debug") == logging.DEBUG
    assert helpers.logLevel("WARNING") == logging.WARNING
    assert helpers.logLevel(5) == 5
    with pytest.raises(ValueError):
        helpers.logLevel("loud")


def test_settings_file(tmp_path):
    path = tmp_path / "sub" / "settings.json"
    assert helpers.fetchSettingsFile(path) == {}
    assert path.is_file()

    helpers.saveJSON(path, {"a": [1, 2]}, indent=4)
    assert helpers.fetchSettingsFile(path) == {"a": [1, 2]}
    assert not os.path.exists(str(path) + ".tmp")
    with open(path) as f:
        assert json.load(f) == {"a": [1, 2]}


def test_prepareLogging_handlers(tmp_path):
    root = helpers.LogSettings.root

    def count(kind):
        return len([h for h in root.handlers if type(h) is kind])

    path = tmp_path / "handlers.log"
    for _ in range(3):
        helpers.prepareLogging()
        helpers.prepareLogging(filepath=path)
        helpers.prepareLogging(filepath=str(path))
    assert count(logging.StreamHandler) == 1
    fileHandlers = [h for h in root.handlers if type(h) is RotatingFileHandler]
    assert [h.baseFilename for h in fileHandlers].count(str(path)) == 1

    # A different file gets a handler of its own.
    helpers.prepareLogging(filepath=tmp_path / "other.log")
    assert count(RotatingFileHandler) == len(fileHandlers) + 1
    assert count(logging.StreamHandler) == 1
