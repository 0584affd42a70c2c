"report the scan parameters described by an eSCL capabilities document"

import argparse
import logging
import os
import sys
from config import read_config, add_defaults
from const import PROG_NAME, VERSION
from devcaps import DeviceCaps, DevCapsError, SourceKind, RangeResolutions
from i18n import _
from mathutil import sane_unfix

logger = logging.getLogger(__name__)


def _parse_arguments(argv=None):
    "parse the command line and set up logging"
    parser = argparse.ArgumentParser(
        prog=f"{PROG_NAME}-caps",
        description=_("Show the scan parameters supported by an eSCL device"),
    )
    parser.add_argument("caps", help=_("ScannerCapabilities XML file"))
    parser.add_argument("--config", help=_("JSON settings file"))
    parser.add_argument("--debug", action="store_true", help=_("debug output"))
    parser.add_argument("--log", help=_("log to file"))
    parser.add_argument(
        "--source",
        choices=[kind.value for kind in SourceKind],
        help=_("input source"),
    )
    parser.add_argument("--resolution", type=int, help=_("wanted resolution"))
    parser.add_argument("--version", action="version", version=VERSION)
    args = parser.parse_args(argv)

    args.log_level = logging.DEBUG if args.debug or args.log else logging.WARNING
    if args.log:
        logging.basicConfig(
            filename=os.path.abspath(args.log), level=args.log_level
        )
    else:
        logging.basicConfig(level=args.log_level)
    logger.info("%s %s", PROG_NAME, VERSION)
    return args


def _choose_source(caps, name):
    "return the named source kind if available, else the first one"
    if name is not None:
        try:
            kind = SourceKind(name)
        except ValueError:
            kind = None
        if kind in caps.sources:
            return kind
        logger.warning(
            "Source '%s' not available, using '%s'", name, caps.sources[0].value
        )
    return caps.sources[0]


def _format_resolution(spec):
    if isinstance(spec, RangeResolutions):
        rmin, rmax, quant = spec.constraint
        text = f"{rmin}..{rmax}dpi"
        if quant:
            text += f" (in steps of {quant})"
        return text
    return "|".join(str(res) for res in spec.constraint) + "dpi"


def describe(caps, kind, wanted):
    "return a list of lines describing the given source"
    src = caps.source(kind)
    lines = [
        f"{_('Vendor')}: {caps.vendor}",
        f"{_('Model')}: {caps.model}",
        f"{_('Sources')}: " + ", ".join(source.value for source in caps.sources),
        f"{_('Source')}: {kind.value}",
        f"{_('Colour modes')}: "
        + ", ".join(sorted(mode.value for mode in src.color_modes)),
        f"{_('Formats')}: " + ", ".join(sorted(fmt.value for fmt in src.formats)),
        f"{_('Resolutions')}: {_format_resolution(src.resolution)}",
    ]
    if src.has_size:
        lines.append(
            f"{_('Width')}: {sane_unfix(src.win_x_range.min):.1f}.."
            f"{sane_unfix(src.win_x_range.max):.1f}mm"
        )
        lines.append(
            f"{_('Height')}: {sane_unfix(src.win_y_range.min):.1f}.."
            f"{sane_unfix(src.win_y_range.max):.1f}mm"
        )
    lines.append(
        f"{_('Resolution')}: {wanted} -> {src.choose_resolution(wanted)}dpi"
    )
    return lines


def main(argv=None):
    "main"
    args = _parse_arguments(argv)
    config = {}
    if args.config is not None:
        config = read_config(args.config)
    add_defaults(config)
    if not (args.debug or args.log):
        logging.getLogger().setLevel(config["log level"])

    try:
        caps = DeviceCaps.from_file(args.caps)
    except OSError as err:
        print(_("Error reading %s: %s") % (args.caps, err), file=sys.stderr)
        return 1
    except DevCapsError as err:
        print(_("Error parsing %s: %s") % (args.caps, err), file=sys.stderr)
        return 1

    kind = _choose_source(
        caps, args.source if args.source is not None else config["source"]
    )
    wanted = args.resolution if args.resolution is not None else config["resolution"]
    for line in describe(caps, kind, wanted):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
