"Various helper functions"

import logging

logger = logging.getLogger(__name__)


def slurp(file):
    "slurp a text file into a string"
    with open(file, "r", encoding="utf-8") as fhd:
        return fhd.read()


def slurp_bytes(file):
    "slurp a file into bytes, e.g. XML with its own encoding declaration"
    logger.debug("Reading %s", file)
    with open(file, "rb") as fhd:
        return fhd.read()
