"""
Copyright (c) 2025, the symhd developers
See LICENSE for details
"""

import logging
import os

import pytest

from symhd import config
from symhd.config import CmdArgs, parseLogLevels


def test_parseLogLevels():
    assert parseLogLevels("debug") == (logging.DEBUG, {})
    assert parseLogLevels("WARNING") == (logging.WARNING, {})
    assert parseLogLevels("0") == (logging.NOTSET, {})
    level, modules = parseLogLevels("A:Warning,B:deBug,C:Critical,D:0")
    assert level is None
    assert modules == {
        "A": logging.WARNING,
        "B": logging.DEBUG,
        "C": logging.CRITICAL,
        "D": logging.NOTSET,
    }
    with pytest.raises(KeyError):
        parseLogLevels("loud")


def test_CmdArgs(tmp_path):
    missing = str(tmp_path / "missing.conf")

    cfg = CmdArgs(["--config", missing])
    assert cfg.logLevel == logging.WARNING
    assert cfg.moduleLevels == {}
    assert cfg.logFile is None
    assert cfg.remaining == []

    cfg = CmdArgs(["--config", missing, "--loglevel", "debug", "derive", "s", "m/0"])
    assert cfg.logLevel == logging.DEBUG
    assert cfg.remaining == ["derive", "s", "m/0"]

    cfg = CmdArgs(["--config", missing, "--loglevel", "HDKEY:debug,CLI:error"])
    assert cfg.logLevel == logging.WARNING
    assert cfg.moduleLevels == {"HDKEY": logging.DEBUG, "CLI": logging.ERROR}

    with pytest.raises(SystemExit):
        CmdArgs(["--config", missing, "--loglevel", ",:"])
    with pytest.raises(SystemExit):
        CmdArgs(["--config", missing, "--loglevel", "loud"])


def test_CmdArgs_file(tmp_path):
    cfgPath = tmp_path / "symhd.conf"
    logPath = str(tmp_path / "symhd.log")
    cfgPath.write_text(f"loglevel=info\nlogfile={logPath}\n")

    cfg = CmdArgs(["--config", str(cfgPath), "new"])
    assert cfg.logLevel == logging.INFO
    assert cfg.logFile == logPath
    assert cfg.remaining == ["new"]

    # The command line overrides the file.
    cfg = CmdArgs(["--config", str(cfgPath), "--loglevel", "error", "--logfile", "x"])
    assert cfg.logLevel == logging.ERROR
    assert cfg.logFile == "x"

    cfgPath.write_text("loglevel=HDKEY:debug\n")
    cfg = CmdArgs(["--config", str(cfgPath), "--loglevel", "CLI:info"])
    assert cfg.moduleLevels == {"HDKEY": logging.DEBUG, "CLI": logging.INFO}

    cfgPath.write_text("loglevel=loud\n")
    with pytest.raises(SystemExit):
        CmdArgs(["--config", str(cfgPath)])


def test_CmdArgs_prepareLogging(tmp_path):
    logPath = tmp_path / "symhd.log"
    cfg = CmdArgs(
        [
            "--config",
            str(tmp_path / "missing.conf"),
            "--loglevel",
            "info",
            "--logfile",
            str(logPath),
        ]
    )
    cfg.prepareLogging()
    logger = config.helpers.getLogger("CONFIGTEST")
    assert logger.getEffectiveLevel() == logging.INFO
    logger.info("written")
    assert logPath.is_file()


def test_defaults():
    assert config.CONFIG_PATH.endswith(config.CONFIG_NAME)
    assert os.path.dirname(config.CONFIG_PATH) == config.CONFIG_DIR
