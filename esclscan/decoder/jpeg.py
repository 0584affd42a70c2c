"JPEG image decoder"

from decoder.base import ImageDecoder


class JpegDecoder(ImageDecoder):
    "JPEG image decoder. Multi-component images are decoded as RGB"

    content_type = "image/jpeg"
    pil_format = "JPEG"
    label = "JPEG"
