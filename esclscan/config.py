"helper functions to read and write config"

import os
import json
import logging
from helpers import slurp

DEFAULTS = {
    "resolution": 300,
    "source": None,
    "log level": "WARNING",
}
logger = logging.getLogger(__name__)


def read_config(filename):
    "read the config"
    config = {}
    logger.info("Reading config from %s", filename)
    if not os.access(filename, os.R_OK):
        with open(filename, "w", encoding="utf-8") as fh:
            fh.write("")

    configstr = slurp(filename)
    if len(configstr) > 0:
        try:
            config = json.loads(configstr)
        except json.decoder.JSONDecodeError:
            logger.error(
                "Error: unable to load settings.\nBacking up settings\nReverting to defaults"
            )
            os.rename(filename, f"{filename}.old")

    # a resolution may have been hand-edited as a string
    if "resolution" in config and isinstance(config["resolution"], str):
        try:
            config["resolution"] = int(config["resolution"])
        except ValueError:
            logger.warning("Ignoring invalid resolution '%s'", config["resolution"])
            del config["resolution"]

    logger.debug(config)
    return config


def add_defaults(config):
    "add defaults"

    # remove unused settings
    for k in list(config.keys()):
        if k not in DEFAULTS:
            del config[k]

    # add default settings
    for k, v in DEFAULTS.items():
        if k not in config:
            config[k] = v


def write_config(rc, config):
    "write config"
    with open(rc, "w", encoding="utf-8") as fh:
        fh.write(json.dumps(config, sort_keys=True, indent=4))
    logger.info("Wrote config to %s", rc)
