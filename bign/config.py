"""
Copyright (c) 2025, the bign developers
See LICENSE for details

Configuration settings for bign. Settings are read once at startup from a JSON
file in an OS-appropriate location, optionally overridden on the command line,
and installed as process-wide defaults with apply.
"""

import argparse
import os

from appdirs import AppDirs

from bign.crypto.ec import scalar
from bign.util import helpers


# Set the data directory in a OS-appropriate location.
_ad = AppDirs("Bign", False)
DATA_DIR = _ad.user_data_dir

# The master configuration file name.
CONFIG_NAME = "bign.conf"
CONFIG_PATH = os.path.join(DATA_DIR, CONFIG_NAME)

DEFAULTS = {
    "multiplier": scalar.DEFAULT_METHOD,
    "window": scalar.DEFAULT_WINDOW,
    "logLevel": "INFO",
    "logFile": None,
}

log = helpers.getLogger("CONFIG")


class BignConfig:
    """
    BignConfig is configuration settings. The configuration file is JSON
    formatted.
    """

    def __init__(self, path=None, args=None):
        """
        Args:
            path (str): optional. The settings file. Default CONFIG_PATH.
            args (list(str)): optional. Command line arguments. Default
                sys.argv.
        """
        self.path = path or CONFIG_PATH
        try:
            self.file = helpers.fetchSettingsFile(self.path)
        except ValueError as e:
            log.error(
                f"unreadable settings file {self.path}, using defaults: "
                f"{helpers.formatTraceback(e)}"
            )
            self.file = {}
        parser = argparse.ArgumentParser()
        parser.add_argument(
            "--multiplier", choices=sorted(scalar.MULTIPLIERS), help="scalar multiplier"
        )
        parser.add_argument("--window", type=int, help="window width")
        parser.add_argument("--loglevel", help="logging level")
        parsed, unknown = parser.parse_known_args(args)
        if unknown:
            log.warning(f"ignoring unknown arguments: {unknown!r}")
        if parsed.multiplier:
            self.file["multiplier"] = parsed.multiplier
        if parsed.window is not None:
            self.file["window"] = parsed.window
        if parsed.loglevel:
            self.file["logLevel"] = parsed.loglevel
        self.normalize()

    def set(self, k, v):
        """
        Set the configuration option. The configuration is not saved, so `save`
        should be called separately.

        Args:
            k (str): The setting key.
            v (JSON-encodable): The value.
        """
        self.file[k] = v

    def get(self, *keys):
        """
        Retrieve the setting at the provided key path. Multiple keys can be
        provided, with each successive key being retrieved from the previous
        key's value.

        Args:
            *keys (str): Recursive key list.

        Returns:
            mixed: The configuration value.
        """
        d = self.file
        rVal = None
        for k in keys:
            if not isinstance(d, dict) or k not in d:
                return None
            rVal = d[k]
            d = rVal
        return rVal

    def normalize(self):
        """
        Fill in missing settings and replace invalid ones with the defaults.
        """
        file = self.file
        for k, v in DEFAULTS.items():
            file.setdefault(k, v)
        if file["multiplier"] not in scalar.MULTIPLIERS:
            log.warning(f"unknown multiplier {file['multiplier']!r}, using default")
            file["multiplier"] = DEFAULTS["multiplier"]
        window = file["window"]
        if not isinstance(window, int) or isinstance(window, bool) or window < 1:
            log.warning(f"invalid window {window!r}, using default")
            file["window"] = DEFAULTS["window"]
        try:
            helpers.logLevel(file["logLevel"])
        except ValueError:
            log.warning(f"unknown log level {file['logLevel']!r}, using default")
            file["logLevel"] = DEFAULTS["logLevel"]

    def apply(self):
        """
        Prepare logging and install the multiplier defaults.
        """
        helpers.prepareLogging(
            self.get("logFile"), logLvl=helpers.logLevel(self.get("logLevel"))
        )
        scalar.setDefaults(self.get("multiplier"), self.get("window"))
        method, window = scalar.getDefaults()
        log.debug(f"using the {method} multiplier, window {window}")

    def save(self):
        """
        Save the file.
        """
        helpers.saveJSON(self.path, self.file, indent=4, sort_keys=True)


bignConfig = None


def load(args=None):
    """
    Load, apply and return the current configuration.

    The configuration is only loaded once. Successive calls to the modular `load`
    function will return the same instance.

    Returns:
        BignConfig: The current configuration.
    """
    global bignConfig
    if not bignConfig:
        bignConfig = BignConfig(args=args)
        bignConfig.apply()
    return bignConfig
