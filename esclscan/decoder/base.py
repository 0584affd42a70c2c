"image decoder interface, with the line-by-line reading shared by all formats"

import io
import logging
from collections import namedtuple
from PIL import Image
from frontend import enums

logger = logging.getLogger(__name__)

BITS_PER_CHANNEL = 8
GRAY_MODES = ("1", "L", "LA")
# 16-bit gray, scaled down to 8 bits
WIDE_GRAY_MODES = ("I", "I;16")

# mirrors SANE_Parameters
Parameters = namedtuple(
    "Parameters",
    ["format", "last_frame", "bytes_per_line", "pixels_per_line", "lines", "depth"],
)
ImageWindow = namedtuple("ImageWindow", ["x_off", "y_off", "wid", "hei"])


class DecoderError(ValueError):
    "Raised if an image cannot be decoded"


class ImageDecoder:
    """Decode a complete image from memory, then hand it out one line at a
    time as 8-bit gray or RGB.
    Subclasses set content_type, and name the Pillow plugin in pil_format"""

    content_type = None
    pil_format = None
    label = None

    def __init__(self):
        self._pixels = None
        self._width = 0
        self._height = 0
        self._bytes_per_pixel = 0
        self._num_lines = 0

    def __str__(self):
        return f"{type(self).__name__}({self.content_type})"

    def begin(self, data):
        "start decoding the given image"
        self.reset()
        try:
            with Image.open(io.BytesIO(data), formats=[self.pil_format]) as image:
                image.load()
                if image.mode in WIDE_GRAY_MODES:
                    image = image.convert("I").point(lambda v: v * (1 / 256))
                if image.mode in GRAY_MODES + WIDE_GRAY_MODES:
                    image = image.convert("L")
                    self._bytes_per_pixel = 1
                else:
                    image = image.convert("RGB")
                    self._bytes_per_pixel = 3
                self._width, self._height = image.size
                self._pixels = image.tobytes()
        except (OSError, SyntaxError, ValueError) as err:
            logger.info("%s: unable to decode image: %s", self.label, err)
            raise DecoderError(f"{self.label}: invalid image: {err}") from err
        self._num_lines = self._height
        logger.debug(
            "%s: decoding %dx%d image, %d bytes per pixel",
            self.label,
            self._width,
            self._height,
            self._bytes_per_pixel,
        )

    def _check_begun(self):
        if self._pixels is None:
            raise DecoderError(f"{self.label}: no image")

    def reset(self):
        "forget the current image"
        self._pixels = None
        self._width, self._height = 0, 0
        self._bytes_per_pixel = 0
        self._num_lines = 0

    def free(self):
        "release the decoder"
        self.reset()

    def get_bytes_per_pixel(self):
        "bytes per pixel of the decoded lines"
        self._check_begun()
        return self._bytes_per_pixel

    def get_params(self):
        "return the image parameters"
        self._check_begun()
        return Parameters(
            format=enums.FRAME_GRAY if self._bytes_per_pixel == 1 else enums.FRAME_RGB,
            last_frame=True,
            bytes_per_line=self._width * self._bytes_per_pixel,
            pixels_per_line=self._width,
            lines=self._height,
            depth=BITS_PER_CHANNEL,
        )

    def set_window(self, _win):
        """Clipping is not supported. Return the window updated to cover the
        whole image"""
        self._check_begun()
        return ImageWindow(0, 0, self._width, self._height)

    def read_line(self):
        "return the next line of the image as bytes"
        self._check_begun()
        if not self._num_lines:
            raise DecoderError(f"{self.label}: end of file")
        stride = self._width * self._bytes_per_pixel
        start = (self._height - self._num_lines) * stride
        self._num_lines -= 1
        return self._pixels[start : start + stride]
