"constants shared between modules and setup.py"

VERSION = "0.9.0"
PROG_NAME = "esclscan"
AUTHOR = "esclscan developers"
AUTHOR_EMAIL = None
URL = None

# eSCL XML namespaces
NAMESPACES = {
    "scan": "http://schemas.hp.com/imaging/escl/2011/05/03",
    "pwg": "http://www.pwg.org/schemas/2010/12/sm",
}

MM_PER_INCH = 25.4

# eSCL expresses MinWidth etc. in 1/300 inch
ESCL_UNITS_PER_INCH = 300

# SANE_Fixed has 16 fractional bits
SANE_FIXED_SCALE_SHIFT = 16

# values of the SANE "source" option
OPTVAL_SOURCE_PLATEN = "Flatbed"
OPTVAL_SOURCE_ADF_SIMPLEX = "ADF"
OPTVAL_SOURCE_ADF_DUPLEX = "ADF Duplex"
