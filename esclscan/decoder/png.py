"PNG image decoder"

from decoder.base import ImageDecoder


class PngDecoder(ImageDecoder):
    "PNG image decoder. Palette and alpha images are decoded as RGB"

    content_type = "image/png"
    pil_format = "PNG"
    label = "PNG"
