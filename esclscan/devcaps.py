"""Parse the eSCL ScannerCapabilities document into an immutable model of the
device's input sources, and choose supported resolutions from it"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union
from const import (
    ESCL_UNITS_PER_INCH,
    MM_PER_INCH,
    OPTVAL_SOURCE_ADF_DUPLEX,
    OPTVAL_SOURCE_ADF_SIMPLEX,
    OPTVAL_SOURCE_PLATEN,
)
from helpers import slurp_bytes
from mathutil import Range, range_fit, range_merge, sane_fix
from xmlcursor import XmlCursor, XmlError

logger = logging.getLogger(__name__)


class DevCapsError(ValueError):
    "Raised if the capabilities document cannot be parsed"


class SourceKind(Enum):
    "Input sources, valued by their SANE source option names"

    PLATEN = OPTVAL_SOURCE_PLATEN
    ADF_SIMPLEX = OPTVAL_SOURCE_ADF_SIMPLEX
    ADF_DUPLEX = OPTVAL_SOURCE_ADF_DUPLEX


class ColorMode(Enum):
    "eSCL colour modes"

    BW1 = "BlackAndWhite1"
    GRAYSCALE8 = "Grayscale8"
    RGB24 = "RGB24"


class DocumentFormat(Enum):
    "Supported image formats, valued by MIME type"

    JPEG = "image/jpeg"
    PNG = "image/png"
    PDF = "application/pdf"


@dataclass(frozen=True)
class DiscreteResolutions:
    "a sorted list of supported resolutions"

    values: Tuple[int, ...]

    @property
    def constraint(self):
        "the resolutions as a SANE word list"
        return list(self.values)

    def choose(self, wanted):
        """Return the value closest to wanted. On a tie the smaller value wins,
        as it is seen first."""
        res = self.values[0]
        delta = abs(wanted - res)
        for res2 in self.values[1:]:
            delta2 = abs(wanted - res2)
            if delta2 < delta:
                res, delta = res2, delta2
        return res


@dataclass(frozen=True)
class RangeResolutions:
    "independent x and y ranges, and the single range valid for both"

    x: Range
    y: Range
    merged: Range

    @property
    def constraint(self):
        "the merged range as a SANE (min, max, quant) tuple"
        return tuple(self.merged)

    def choose(self, wanted):
        "clamp wanted into the range, rounding to the step if there is one"
        return range_fit(self.merged, wanted)


ResolutionSpec = Union[DiscreteResolutions, RangeResolutions]


def select_resolution(spec, wanted):
    "return the supported resolution best matching the wanted one"
    return spec.choose(wanted)


@dataclass(frozen=True)
class SourceCaps:  # pylint: disable=too-many-instance-attributes
    "Capabilities of one input source"

    resolution: ResolutionSpec
    color_modes: frozenset = frozenset()
    formats: frozenset = frozenset()
    min_width: Optional[int] = None
    max_width: Optional[int] = None
    min_height: Optional[int] = None
    max_height: Optional[int] = None
    win_x_range: Optional[Range] = None
    win_y_range: Optional[Range] = None

    @property
    def has_size(self):
        "whether the physical window size is known"
        return self.win_x_range is not None and self.win_y_range is not None

    def choose_resolution(self, wanted):
        "return the supported resolution best matching the wanted one"
        return self.resolution.choose(wanted)


@dataclass(frozen=True)
class DeviceCaps:
    "Device capabilities"

    vendor: str
    model: Optional[str]
    sources: Tuple[SourceKind, ...]
    platen: Optional[SourceCaps] = None
    adf_simplex: Optional[SourceCaps] = None
    adf_duplex: Optional[SourceCaps] = None

    def source(self, kind):
        "return the capabilities of the given source kind, or None"
        return {
            SourceKind.PLATEN: self.platen,
            SourceKind.ADF_SIMPLEX: self.adf_simplex,
            SourceKind.ADF_DUPLEX: self.adf_duplex,
        }[SourceKind(kind)]

    @classmethod
    def from_xml(cls, data):
        "parse the capabilities from a string or bytes of XML"
        try:
            root = ET.fromstring(data)
        except ET.ParseError as err:
            logger.info("Unable to parse capabilities XML: %s", err)
            raise DevCapsError(f"XML: {err}") from err
        return parse(root)

    @classmethod
    def from_file(cls, filename):
        "parse the capabilities from an XML file"
        return cls.from_xml(slurp_bytes(filename))


def _pixels_to_mm(pixels):
    return sane_fix(pixels * MM_PER_INCH / ESCL_UNITS_PER_INCH)


class _SourceBuilder:  # pylint: disable=too-many-instance-attributes
    "collects the fields of one source while its block is being read"

    def __init__(self):
        self.min_width = None
        self.max_width = None
        self.min_height = None
        self.max_height = None
        self.color_modes = set()
        self.formats = set()
        self.discrete = []
        self.range = None

    def resolution(self):
        "discrete resolutions take precedence over a range"
        if self.discrete:
            return DiscreteResolutions(tuple(sorted(self.discrete)))
        return self.range

    def build(self):
        "validate the collected fields and return SourceCaps"
        resolution = self.resolution()
        if resolution is None:
            raise DevCapsError("Source resolutions are not defined")

        win_x_range, win_y_range = None, None
        if self.max_width and self.max_height:
            if (self.min_width or 0) >= self.max_width:
                raise DevCapsError("Invalid scan:MinWidth or scan:MaxWidth")
            if (self.min_height or 0) >= self.max_height:
                raise DevCapsError("Invalid scan:MinHeight or scan:MaxHeight")
            win_x_range = Range(
                _pixels_to_mm(self.min_width or 0), _pixels_to_mm(self.max_width), 0
            )
            win_y_range = Range(
                _pixels_to_mm(self.min_height or 0), _pixels_to_mm(self.max_height), 0
            )

        return SourceCaps(
            resolution=resolution,
            color_modes=frozenset(self.color_modes),
            formats=frozenset(self.formats),
            min_width=self.min_width,
            max_width=self.max_width,
            min_height=self.min_height,
            max_height=self.max_height,
            win_x_range=win_x_range,
            win_y_range=win_y_range,
        )


def _parse_color_modes(cursor, src):
    for _ in cursor.each_child():
        if cursor.match("scan:ColorMode"):
            try:
                src.color_modes.add(ColorMode(cursor.value()))
            except ValueError:
                logger.debug("Ignoring unknown colour mode '%s'", cursor.value())


def _parse_document_formats(cursor, src):
    for _ in cursor.each_child():
        if cursor.match("pwg:DocumentFormat") or cursor.match(
            "scan:DocumentFormatExt"
        ):
            try:
                src.formats.add(DocumentFormat(cursor.value().lower()))
            except ValueError:
                logger.debug("Ignoring unknown document format '%s'", cursor.value())


def _parse_discrete_resolutions(cursor, src):
    for _ in cursor.each_child():
        if cursor.match("scan:DiscreteResolution"):
            x, y = 0, 0
            for _ in cursor.each_child():
                if cursor.match("scan:XResolution"):
                    x = cursor.value_uint()
                elif cursor.match("scan:YResolution"):
                    y = cursor.value_uint()

            # only square pixels are supported
            if x and y and x == y:
                src.discrete.append(x)


def _parse_axis_range(cursor):
    rmin, rmax, quant = 0, 0, 0
    for _ in cursor.each_child():
        if cursor.match("scan:Min"):
            rmin = cursor.value_uint()
        elif cursor.match("scan:Max"):
            rmax = cursor.value_uint()
        elif cursor.match("scan:Step"):
            quant = cursor.value_uint()

    # SANE uses 0 rather than 1 for no quantisation
    if quant == 1:
        quant = 0
    return Range(rmin, rmax, quant)


def _parse_resolutions_range(cursor, src):
    range_x, range_y = None, None
    for _ in cursor.each_child():
        if cursor.match("scan:XResolution"):
            range_x = _parse_axis_range(cursor)
        elif cursor.match("scan:YResolution"):
            range_y = _parse_axis_range(cursor)

    if range_x is None and range_y is None:
        return
    if range_x is None:
        range_x = range_y
    elif range_y is None:
        range_y = range_x

    if range_x.min > range_x.max:
        raise DevCapsError("Invalid scan:XResolution range")
    if range_y.min > range_y.max:
        raise DevCapsError("Invalid scan:YResolution range")

    merged = range_merge(range_x, range_y)
    if merged is None:
        raise DevCapsError(
            "Incompatible scan:XResolution and scan:YResolution ranges"
        )
    src.range = RangeResolutions(range_x, range_y, merged)


def _parse_resolutions(cursor, src):
    for _ in cursor.each_child():
        if cursor.match("scan:DiscreteResolutions"):
            _parse_discrete_resolutions(cursor, src)
        elif cursor.match("scan:ResolutionRange"):
            _parse_resolutions_range(cursor, src)

    if src.resolution() is None:
        raise DevCapsError("Source resolutions are not defined")


def _parse_setting_profiles(cursor, src):
    for _ in cursor.each_child():
        if cursor.match("scan:SettingProfile"):
            for _ in cursor.each_child():
                if cursor.match("scan:ColorModes"):
                    _parse_color_modes(cursor, src)
                elif cursor.match("scan:DocumentFormats"):
                    _parse_document_formats(cursor, src)
                elif cursor.match("scan:SupportedResolutions"):
                    _parse_resolutions(cursor, src)


def parse_source(cursor):
    "parse the input source block at the cursor into SourceCaps"
    src = _SourceBuilder()
    for _ in cursor.each_child():
        if cursor.match("scan:MinWidth"):
            src.min_width = cursor.value_uint()
        elif cursor.match("scan:MaxWidth"):
            src.max_width = cursor.value_uint()
        elif cursor.match("scan:MinHeight"):
            src.min_height = cursor.value_uint()
        elif cursor.match("scan:MaxHeight"):
            src.max_height = cursor.value_uint()
        elif cursor.match("scan:SettingProfiles"):
            _parse_setting_profiles(cursor, src)
    return src.build()


def _guess_vendor(model, make_and_model):
    if (
        model
        and make_and_model
        and len(make_and_model) > len(model)
        and make_and_model.endswith(model)
    ):
        vendor = make_and_model[: -len(model)].rstrip()
        if vendor:
            return vendor
    return "Unknown"


def _parse_inputs(cursor, found, inputs):
    "parse the input caps blocks of a Platen or Adf element"
    for _ in cursor.each_child():
        for name, kind in inputs.items():
            if cursor.match(name):
                logger.debug("Parsing %s", name)
                src = parse_source(cursor)

                # keep the first of any duplicates
                if kind in found:
                    logger.debug("Ignoring duplicate %s", name)
                else:
                    found[kind] = src


def parse(root):
    "parse the ScannerCapabilities element into DeviceCaps"
    cursor = XmlCursor(root)
    try:
        return _parse_caps(cursor)
    except XmlError as err:
        logger.info("Error parsing device capabilities: %s", err)
        raise DevCapsError(str(err)) from err
    except DevCapsError as err:
        logger.info("Error parsing device capabilities: %s", err)
        raise


def _parse_caps(cursor):
    if not cursor.match("scan:ScannerCapabilities"):
        raise DevCapsError("XML: missed scan:ScannerCapabilities")

    model, make_and_model = None, None
    found = {}
    for _ in cursor.each_child():
        if cursor.match("pwg:ModelName"):
            model = cursor.value()
        elif cursor.match("pwg:MakeAndModel"):
            make_and_model = cursor.value()
        elif cursor.match("scan:Platen"):
            _parse_inputs(cursor, found, {"scan:PlatenInputCaps": SourceKind.PLATEN})
        elif cursor.match("scan:Adf"):
            _parse_inputs(
                cursor,
                found,
                {
                    "scan:AdfSimplexInputCaps": SourceKind.ADF_SIMPLEX,
                    "scan:AdfDuplexInputCaps": SourceKind.ADF_DUPLEX,
                },
            )

    if not found:
        raise DevCapsError("no input sources defined")

    caps = DeviceCaps(
        vendor=_guess_vendor(model, make_and_model),
        model=model if model is not None else make_and_model,
        sources=tuple(kind for kind in SourceKind if kind in found),
        platen=found.get(SourceKind.PLATEN),
        adf_simplex=found.get(SourceKind.ADF_SIMPLEX),
        adf_duplex=found.get(SourceKind.ADF_DUPLEX),
    )
    logger.debug(
        "Parsed capabilities: vendor '%s', model '%s', sources %s",
        caps.vendor,
        caps.model,
        [kind.value for kind in caps.sources],
    )
    return caps
