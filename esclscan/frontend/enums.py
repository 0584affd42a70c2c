""" inject enums from sane dynamically to avoid linter warnings in each module
    from which they are imported"""
import sane

# Seed enums to avoid no-member warnings from pylint
FRAME_GRAY = None
FRAME_RGB = None

for symbol in [
    "FRAME_GRAY",
    "FRAME_RGB",
]:
    locals()[symbol] = getattr(sane._sane, symbol)  # pylint: disable=protected-access
