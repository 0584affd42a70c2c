"Provide _() for the messages shown by the command line tool"

import gettext
import os
from const import PROG_NAME

# catalogues are looked up beside the modules, untranslated text otherwise
LOCALE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "locale")
_ = gettext.translation(PROG_NAME, LOCALE_DIR, fallback=True).gettext
