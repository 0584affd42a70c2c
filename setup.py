"""
To install esclscan, run "pip install ." (note the dot).

https://blog.ganssle.io/articles/2021/10/setup-py-deprecated.html
"""

from pathlib import Path
import sys

from setuptools import setup


REPO = Path(__file__).resolve().parent
sys.path.insert(0, str(REPO / "esclscan"))

import const  # pylint: disable=wrong-import-position


parameters = {
    "name": "esclscan",
    "version": const.VERSION,
    "description": "Parse eSCL scanner capabilities for a SANE driver",
    "long_description": """esclscan reads the ScannerCapabilities document of an
eSCL (AirScan) network scanner and turns it into an immutable model of the
device's input sources: flatbed, ADF simplex and ADF duplex.

For each source it reports the colour modes, document formats, physical
window size and supported resolutions, either as a discrete list or as a
range, and chooses the supported resolution closest to the one requested.

JPEG and PNG scan results can be decoded line by line for the driver.""",
    "author": const.AUTHOR,
    "author_email": const.AUTHOR_EMAIL,
    "maintainer": const.AUTHOR,
    "maintainer_email": const.AUTHOR_EMAIL,
    "url": const.URL,
    "license": "GPL-3.0-only",
    "keywords": "scan, escl, airscan, sane",
    "python_requires": ">=3.8",
    "install_requires": [
        "Pillow",
        "python-sane",
    ],
    "extras_require": {
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    "entry_points": {
        "console_scripts": [
            "esclscan-caps = esclscan.app:main",
        ],
    },
    "packages": [
        "esclscan",
        "esclscan.decoder",
        "esclscan.frontend",
    ],
    "include_package_data": True,
}


if __name__ == "__main__":
    setup(**parameters)
