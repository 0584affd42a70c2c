"choose an image decoder for a document format"

from decoder.base import DecoderError
from decoder.jpeg import JpegDecoder
from decoder.png import PngDecoder
from devcaps import DocumentFormat

DECODERS = {
    DocumentFormat.JPEG: JpegDecoder,
    DocumentFormat.PNG: PngDecoder,
}


def new_decoder(fmt):
    "return a new decoder for the given DocumentFormat or MIME type"
    if isinstance(fmt, str):
        fmt = fmt.lower()
    try:
        fmt = DocumentFormat(fmt)
    except ValueError as err:
        raise DecoderError(f"unknown document format '{fmt}'") from err
    if fmt not in DECODERS:
        raise DecoderError(f"no decoder for {fmt.value}")
    return DECODERS[fmt]()
