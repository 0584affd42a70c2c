"Some helper functions to reduce boilerplate"

import io
import pytest
from PIL import Image

CAPS_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<scan:ScannerCapabilities
    xmlns:pwg="http://www.pwg.org/schemas/2010/12/sm"
    xmlns:scan="http://schemas.hp.com/imaging/escl/2011/05/03">
  <pwg:Version>2.63</pwg:Version>
"""
CAPS_FOOTER = "</scan:ScannerCapabilities>\n"


def discrete_resolutions(*pairs):
    "XML for a DiscreteResolutions block from (x, y) pairs"
    xml = "<scan:DiscreteResolutions>"
    for x, y in pairs:
        xml += (
            "<scan:DiscreteResolution>"
            f"<scan:XResolution>{x}</scan:XResolution>"
            f"<scan:YResolution>{y}</scan:YResolution>"
            "</scan:DiscreteResolution>"
        )
    return xml + "</scan:DiscreteResolutions>"


def resolution_range(x=None, y=None):
    "XML for a ResolutionRange block from (min, max, step) tuples"
    xml = "<scan:ResolutionRange>"
    for tag, axis in (("XResolution", x), ("YResolution", y)):
        if axis is not None:
            xml += f"<scan:{tag}>"
            for field, value in zip(("Min", "Max", "Step"), axis):
                if value is not None:
                    xml += f"<scan:{field}>{value}</scan:{field}>"
            xml += f"</scan:{tag}>"
    return xml + "</scan:ResolutionRange>"


def input_caps(
    tag="PlatenInputCaps",
    resolutions=None,
    color_modes=("BlackAndWhite1", "Grayscale8", "RGB24"),
    formats=("image/jpeg", "application/pdf"),
    size=(16, 2550, 16, 3508),
):
    "XML for an input source block"
    if resolutions is None:
        resolutions = discrete_resolutions((75, 75), (150, 150), (300, 300))
    xml = f"<scan:{tag}>"
    if size is not None:
        for field, value in zip(("MinWidth", "MaxWidth", "MinHeight", "MaxHeight"), size):
            if value is not None:
                xml += f"<scan:{field}>{value}</scan:{field}>"
    xml += "<scan:SettingProfiles><scan:SettingProfile><scan:ColorModes>"
    for mode in color_modes:
        xml += f"<scan:ColorMode>{mode}</scan:ColorMode>"
    xml += "</scan:ColorModes><scan:DocumentFormats>"
    for fmt in formats:
        xml += f"<pwg:DocumentFormat>{fmt}</pwg:DocumentFormat>"
    xml += "</scan:DocumentFormats>"
    if resolutions:
        xml += f"<scan:SupportedResolutions>{resolutions}</scan:SupportedResolutions>"
    xml += "</scan:SettingProfile></scan:SettingProfiles>"
    return xml + f"</scan:{tag}>"


def caps_document(*blocks, model="Model X", make_and_model="Acme Model X"):
    "XML for a whole ScannerCapabilities document"
    xml = CAPS_HEADER
    if model is not None:
        xml += f"  <pwg:ModelName>{model}</pwg:ModelName>\n"
    if make_and_model is not None:
        xml += f"  <pwg:MakeAndModel>{make_and_model}</pwg:MakeAndModel>\n"
    for block in blocks:
        xml += f"  {block}\n"
    return xml + CAPS_FOOTER


@pytest.fixture
def platen():
    "a Platen element with discrete resolutions 75, 150, 300"
    return f"<scan:Platen>{input_caps()}</scan:Platen>"


@pytest.fixture
def adf():
    "an Adf element with simplex and duplex sources"
    simplex = input_caps(
        "AdfSimplexInputCaps",
        resolutions=resolution_range((50, 600, 1), (50, 600, 1)),
    )
    duplex = input_caps(
        "AdfDuplexInputCaps", resolutions=discrete_resolutions((200, 200))
    )
    return f"<scan:Adf>{simplex}{duplex}</scan:Adf>"


@pytest.fixture
def image_data():
    "return an image of the given format, mode and size as bytes"

    def anonymous(fmt, mode="RGB", size=(4, 3), color=None):
        image = Image.new(mode, size, color)
        buf = io.BytesIO()
        image.save(buf, format=fmt)
        return buf.getvalue()

    return anonymous
