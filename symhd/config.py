"""
Copyright (c) 2025, the symhd developers
See LICENSE for details

Configuration settings for the symhd command line tool. Settings are read
from an optional INI-style file in an OS-appropriate location, then
overridden by command-line options.
"""

import argparse
import logging
import os
import sys

from appdirs import AppDirs

from symhd.util import helpers


# Set the configuration directory in a OS-appropriate location.
_ad = AppDirs("symhd", False)
CONFIG_DIR = _ad.user_config_dir

# The configuration file name.
CONFIG_NAME = "symhd.conf"
CONFIG_PATH = os.path.join(CONFIG_DIR, CONFIG_NAME)

# Keys recognized in the configuration file.
FILE_KEYS = ("loglevel", "logfile")

logLevelMap = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "notset": logging.NOTSET,
    "0": logging.NOTSET,
}


def logLvl(s):
    """
    Get the log level from the map.

    Args:
        s (str): A string which is a key for the logLevelMap. Case-insensitive.
    """
    return logLevelMap[s.lower()]


def parseLogLevels(spec):
    """
    Parse a log level specifier. The specifier is either a single level name,
    which sets the default level, or comma-separated MODULE:level pairs.

    Args:
        spec (str): The specifier.

    Returns:
        int or None: The default level, if one was specified.
        dict: Module name to level.

    Raises:
        KeyError, ValueError: If the specifier is malformed.
    """
    if any(ch in spec for ch in (",", ":")):
        pairs = (s.split(":") for s in spec.split(","))
        return None, {k: logLvl(v) for k, v in pairs}
    return logLvl(spec), {}


def readConfigFile(path):
    """
    Read the recognized settings from the configuration file. A missing file
    yields no settings.

    Args:
        path (str): The file path.

    Returns:
        dict: The discovered settings.
    """
    if not os.path.isfile(path):
        return {}
    return helpers.readINI(path, FILE_KEYS)


class CmdArgs:
    """
    CmdArgs are the logging options shared by every symhd command. Arguments
    that are not configuration options are left in `remaining` for the
    command parser.
    """

    def __init__(self, argv=None):
        """
        Args:
            argv (list(str)): Command-line arguments, without the program
                name. Defaults to sys.argv[1:].
        """
        self.logLevel = logging.WARNING
        self.moduleLevels = {}
        self.logFile = None
        parser = argparse.ArgumentParser(add_help=False)
        parser.add_argument("--config", default=CONFIG_PATH)
        parser.add_argument("--loglevel")
        parser.add_argument("--logfile")
        args, self.remaining = parser.parse_known_args(
            sys.argv[1:] if argv is None else argv
        )
        self.configPath = args.config

        fileCfg = readConfigFile(self.configPath)
        for source, levels, logFile in (
            (self.configPath, fileCfg.get("loglevel"), fileCfg.get("logfile")),
            ("--loglevel", args.loglevel, args.logfile),
        ):
            if levels:
                try:
                    defaultLevel, moduleLevels = parseLogLevels(levels)
                except Exception:
                    sys.exit(f"malformed loglevel specifier in {source}: {levels}")
                if defaultLevel is not None:
                    self.logLevel = defaultLevel
                self.moduleLevels.update(moduleLevels)
            if logFile:
                self.logFile = logFile

    def prepareLogging(self):
        """
        Apply the logging settings.
        """
        helpers.prepareLogging(
            filepath=self.logFile, logLvl=self.logLevel, lvlMap=self.moduleLevels
        )
