"""Core conversion logic for the Game Boy 2bpp converter."""

# Reference: Game Boy tile data (2bpp)
# Unit          | Size      | Notes
# --------------|-----------|-----------------------------------------------------
# Tile          | 16 bytes  | 8×8 dots, 8 rows × 2 bytes
# Tile row      | 2 bytes   | byte 1 = low bitplane, byte 2 = high bitplane
# Bit order     | MSB first | bit 7 is the leftmost dot, bit 0 the rightmost
# Shade         | 2 bits    | 0 = white, 1 = light gray, 2 = dark gray, 3 = black
#
# Tiles are emitted left to right, then top to bottom. The file carries no
# header and no dimensions.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

from PIL import Image

TILE_SIZE = 8
BYTES_PER_TILE = TILE_SIZE * 2

# (lowest luminance, highest luminance, shade), both ends inclusive.
SHADE_THRESHOLDS: Tuple[Tuple[int, int, int], ...] = (
    (0, 63, 3),
    (64, 127, 2),
    (128, 191, 1),
    (192, 255, 0),
)


class ConversionError(Exception):
    """Custom exception for conversion errors."""


class InvalidDimensionsError(ConversionError, ValueError):
    """Raised when an image is not made of whole 8×8 tiles."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(
            f"Image dimensions must be a multiple of {TILE_SIZE} (got {width}x{height})"
        )


@dataclass(frozen=True)
class GrayscaleBuffer:
    """Row-major 8-bit luminance values of a decoded image."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ConversionError("Image dimensions must not be negative")
        if isinstance(self.pixels, (int, str)):
            raise ConversionError(
                f"Pixels must be a sequence of byte values, not {type(self.pixels).__name__}"
            )
        try:
            data = bytes(self.pixels)
        except (TypeError, ValueError) as exc:
            raise ConversionError("Luminance values must be between 0 and 255") from exc
        if len(data) != self.width * self.height:
            raise ConversionError(
                f"Expected {self.width * self.height} pixels for "
                f"{self.width}x{self.height}, got {len(data)}"
            )
        object.__setattr__(self, "pixels", data)

    @classmethod
    def from_image(cls, image: Image.Image) -> "GrayscaleBuffer":
        if image.mode == "I" or image.mode.startswith("I;16"):
            # 16-bit luminance: keep the high byte, convert("L") would clip.
            image = image.convert("I").point(lambda v: v * (1 / 256))
        gray = image.convert("L")
        width, height = gray.size
        return cls(width, height, gray.tobytes())

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]


def shade_for_luminance(value: int) -> int:
    """Map a luminance value (0-255) to a shade, 0 being the lightest."""
    for low, high, shade in SHADE_THRESHOLDS:
        if low <= value <= high:
            return shade
    raise ConversionError(f"Luminance out of range: {value}")


def encode_row(luminances: Sequence[int]) -> Tuple[int, int]:
    """Pack eight luminance values into the low and high bitplane bytes."""

    if len(luminances) != TILE_SIZE:
        raise ConversionError(f"A tile row needs {TILE_SIZE} pixels, got {len(luminances)}")
    low = 0
    high = 0
    for col, value in enumerate(luminances):
        shade = shade_for_luminance(value)
        bit = 7 - col
        low |= (shade & 1) << bit
        high |= ((shade >> 1) & 1) << bit
    return low, high


def _check_dimensions(width: int, height: int) -> None:
    if width % TILE_SIZE or height % TILE_SIZE:
        raise InvalidDimensionsError(width, height)


def expected_size(width: int, height: int) -> int:
    _check_dimensions(width, height)
    return (width // TILE_SIZE) * (height // TILE_SIZE) * BYTES_PER_TILE


def encode_2bpp(buffer: GrayscaleBuffer) -> bytes:
    """
    Encode a grayscale buffer as Game Boy 2bpp tile data.
    Tiles are visited row by row (all tiles of the top band first). Each
    tile contributes its eight rows top to bottom, every row as the low
    bitplane byte followed by the high bitplane byte.
    """

    width, height = buffer.width, buffer.height
    _check_dimensions(width, height)

    out = bytearray()
    pixels = buffer.pixels
    for tile_y in range(height // TILE_SIZE):
        for tile_x in range(width // TILE_SIZE):
            for row in range(TILE_SIZE):
                start = (tile_y * TILE_SIZE + row) * width + tile_x * TILE_SIZE
                out.extend(encode_row(pixels[start : start + TILE_SIZE]))
    return bytes(out)


def convert_image_to_2bpp(image: Image.Image) -> bytes:
    """Convert an in-memory image to 2bpp bytes."""

    return encode_2bpp(GrayscaleBuffer.from_image(image))


def convert_png_to_2bpp(path: str | Path) -> bytes:
    path = Path(path)
    try:
        with Image.open(path) as img:
            buffer = GrayscaleBuffer.from_image(img)
    except FileNotFoundError as exc:
        raise ConversionError(f"Input file not found: {path}") from exc
    except (OSError, Image.DecompressionBombError) as exc:
        raise ConversionError(f"Failed to read image: {path}") from exc
    return encode_2bpp(buffer)
