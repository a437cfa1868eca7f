"""Game Boy 2bpp converter.

This module converts images into the Game Boy's planar 2 bits-per-pixel tile
format. It can be invoked through the CLI (``python -m gb2bpp``) or imported
to encode a single image or grayscale buffer into bytes.
"""

from .converter import (
    BYTES_PER_TILE,
    TILE_SIZE,
    ConversionError,
    GrayscaleBuffer,
    InvalidDimensionsError,
    convert_image_to_2bpp,
    convert_png_to_2bpp,
    encode_2bpp,
    encode_row,
    expected_size,
    shade_for_luminance,
)

__all__ = [
    "BYTES_PER_TILE",
    "TILE_SIZE",
    "ConversionError",
    "GrayscaleBuffer",
    "InvalidDimensionsError",
    "convert_image_to_2bpp",
    "convert_png_to_2bpp",
    "encode_2bpp",
    "encode_row",
    "expected_size",
    "shade_for_luminance",
]
