"""Byte and float raster images, with PNM, PNG, JPEG and TIFF file support."""

from __future__ import annotations

import enum
import os
import re
from collections.abc import Iterable
from typing import Union

from PIL import Image

PathLike = Union[str, "os.PathLike[str]"]

# Whether PNM output uses the binary (raw) or the ASCII variant by default.
will_write_raw_pnm = True

# JPEG quality on a 0--100 scale.
jpeg_output_quality = 100


class ImageType(enum.IntEnum):
    """Supported image file formats."""

    PNM = 0
    PNG = 1
    TIFF = 2
    JPEG = 3


_TYPE_NAMES = {
    ImageType.PNM: "PPM",
    ImageType.PNG: "PNG",
    ImageType.TIFF: "TIFF",
    ImageType.JPEG: "JPEG",
}
_TYPE_EXTS = {
    ImageType.PNM: "ppm",
    ImageType.PNG: "png",
    ImageType.TIFF: "tif",
    ImageType.JPEG: "jpg",
}
_ALTERNATE_EXTS = {"tiff": ImageType.TIFF}


def _check_shape(width: int, height: int, channels: int) -> None:
    if width < 0 or height < 0:
        raise ValueError("raster dimensions must be non-negative")
    if channels < 1:
        raise ValueError("a raster needs at least one channel")


class ByteRaster:
    """An image of ``width`` x ``height`` pixels with 8-bit channels, stored row by row."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        width: int,
        height: int,
        channels: int,
        data: bytes | bytearray | Iterable[int] | None = None,
    ) -> None:
        _check_shape(width, height, channels)
        self.width = width
        self.height = height
        self.channels = channels
        size = width * height * channels
        if data is None:
            self.data = bytearray(size)
        else:
            self.data = bytearray(data)
            if len(self.data) != size:
                raise ValueError(
                    f"expected {size} bytes of pixel data, got {len(self.data)}"
                )

    @classmethod
    def from_float(cls, img: FloatRaster) -> ByteRaster:
        """Convert a float raster with values in [0, 1] to bytes."""
        return cls(
            img.width,
            img.height,
            img.channels,
            (max(0, min(255, int(255.0 * v))) for v in img.data),
        )

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __setitem__(self, index, value) -> None:
        self.data[index] = value

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return (y * self.width + x) * self.channels

    def pixel(self, x: int, y: int) -> memoryview:
        """Return a writable view of the channels of the pixel at column x, row y."""
        start = self._offset(x, y)
        return memoryview(self.data)[start:start + self.channels]

    def _rows(self) -> list[bytes]:
        stride = self.width * self.channels
        return [bytes(self.data[r * stride:(r + 1) * stride]) for r in range(self.height)]

    def vflip(self) -> ByteRaster:
        """Reverse the order of the rows in place and return the raster."""
        self.data[:] = b"".join(reversed(self._rows()))
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, ByteRaster):
            return NotImplemented
        return (
            (self.width, self.height, self.channels)
            == (other.width, other.height, other.channels)
            and self.data == other.data
        )

    def __repr__(self) -> str:
        return f"ByteRaster({self.width}x{self.height}x{self.channels})"


class FloatRaster:
    """An image whose channels are floats, nominally in [0, 1]."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        width: int,
        height: int,
        channels: int,
        data: Iterable[float] | None = None,
    ) -> None:
        _check_shape(width, height, channels)
        self.width = width
        self.height = height
        self.channels = channels
        size = width * height * channels
        if data is None:
            self.data = [0.0] * size
        else:
            self.data = [float(v) for v in data]
            if len(self.data) != size:
                raise ValueError(
                    f"expected {size} values of pixel data, got {len(self.data)}"
                )

    @classmethod
    def from_bytes(cls, img: ByteRaster) -> FloatRaster:
        """Convert a byte raster to floats in [0, 1]."""
        return cls(img.width, img.height, img.channels, (b / 255.0 for b in img.data))

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __setitem__(self, index, value) -> None:
        self.data[index] = float(value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FloatRaster):
            return NotImplemented
        return (
            (self.width, self.height, self.channels)
            == (other.width, other.height, other.channels)
            and self.data == other.data
        )

    def __repr__(self) -> str:
        return f"FloatRaster({self.width}x{self.height}x{self.channels})"


# Format table


def _as_type(kind) -> ImageType:
    try:
        return ImageType(kind)
    except ValueError:
        raise ValueError(f"unknown image type: {kind!r}") from None


def image_type_name(kind) -> str:
    """Return the display name of an image type."""
    return _TYPE_NAMES[_as_type(kind)]


def image_type_ext(kind) -> str:
    """Return the usual file extension of an image type."""
    return _TYPE_EXTS[_as_type(kind)]


def infer_image_type(filename: PathLike) -> ImageType | None:
    """Guess the image type from the file name's extension, or return None."""
    name = os.fspath(filename)
    dot = name.rfind(".")
    if dot < 0:
        return None
    ext = name[dot + 1:].lower()
    for kind, known in _TYPE_EXTS.items():
        if ext == known:
            return kind
    return _ALTERNATE_EXTS.get(ext)


# PNM


def write_pnm_image(filename: PathLike, img: ByteRaster, raw: bool | None = None) -> None:
    """Write a PGM (one channel) or PPM (three or more channels, extra ones dropped)."""
    if raw is None:
        raw = will_write_raw_pnm
    if img.channels == 1:
        magic = "5" if raw else "2"
        used = 1
    elif img.channels < 3:
        raise ValueError(f"PNM cannot store {img.channels}-channel images")
    else:
        magic = "6" if raw else "3"
        used = 3

    header = f"P{magic} {img.width} {img.height} 255\n".encode("ascii")
    step = img.channels
    pixels = [img.data[i:i + used] for i in range(0, len(img.data), step)]
    if raw:
        body = bytes(img.data) if step == used else b"".join(bytes(p) for p in pixels)
    else:
        body = "".join(" ".join(str(v) for v in p) + "\n" for p in pixels).encode("ascii")

    with open(filename, "wb") as out:
        out.write(header)
        out.write(body)


_PNM_WS = b" \t\n\r\v\f"
_INT_PATTERN = re.compile(rb"[+-]?\d+")
_FLOAT_PATTERN = re.compile(rb"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class _PnmScanner:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def _skip_ws(self) -> None:
        while self.pos < len(self.data) and self.data[self.pos] in _PNM_WS:
            self.pos += 1

    def skip(self) -> None:
        """Skip whitespace and '#' comments."""
        while True:
            self._skip_ws()
            if self.data[self.pos:self.pos + 1] != b"#":
                return
            newline = self.data.find(b"\n", self.pos)
            self.pos = len(self.data) if newline < 0 else newline + 1

    def char(self) -> int:
        self._skip_ws()
        if self.pos >= len(self.data):
            raise ValueError("unexpected end of PNM data")
        c = self.data[self.pos]
        self.pos += 1
        return c

    def _scan(self, pattern: re.Pattern) -> bytes:
        self.skip()
        match = pattern.match(self.data, self.pos)
        if match is None:
            raise ValueError(f"malformed PNM number at byte {self.pos}")
        self.pos = match.end()
        return match.group()

    def integer(self) -> int:
        return int(self._scan(_INT_PATTERN))

    def number(self) -> float:
        return float(self._scan(_FLOAT_PATTERN))


def read_pnm_image(filename: PathLike) -> ByteRaster:
    """Read a PGM or PPM file in either raw or ASCII form."""
    with open(filename, "rb") as f:
        scanner = _PnmScanner(f.read())

    if scanner.char() != ord("P"):
        raise ValueError("not a PNM file")
    magic = scanner.char() - ord("0")
    if not 1 <= magic <= 6:
        raise ValueError(f"unsupported PNM variant P{chr(magic + ord('0'))}")
    width = scanner.integer()
    height = scanner.integer()
    maxval = scanner.integer()
    if maxval <= 0:
        raise ValueError(f"invalid PNM maximum value {maxval}")

    channels = 3 if magic in (3, 6) else 1
    img = ByteRaster(width, height, channels)
    size = len(img.data)

    if magic > 3:
        if maxval > 255:
            raise ValueError("raw PNM with more than 8 bits per sample is unsupported")
        # Scaling implied by maxval < 255 is not applied to raw data.
        start = scanner.pos + 1
        body = scanner.data[start:start + size]
        if len(body) != size:
            raise ValueError("PNM pixel data is truncated")
        img.data[:] = body
    elif maxval == 255:
        img.data[:] = bytes(scanner.integer() & 0xFF for _ in range(size))
    else:
        scale = 255.0 / maxval
        img.data[:] = bytes(
            max(0, min(255, int(scanner.number() * scale))) for _ in range(size)
        )
    return img


# Formats handled through Pillow

_MODES_BY_CHANNELS = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}


def _normalise_mode(im: Image.Image) -> Image.Image:
    mode = im.mode
    if mode == "P":
        return im.convert("RGBA" if "transparency" in im.info else "RGB")
    if mode == "PA":
        return im.convert("RGBA")
    if mode == "1":
        return im.convert("L")
    if mode.startswith("I;16") or mode == "I":
        # Keep the top eight bits of each sample.
        return im.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    if mode in ("L", "RGB") and "transparency" in im.info:
        return im.convert("LA" if mode == "L" else "RGBA")
    if mode in _MODES_BY_CHANNELS.values():
        return im
    return im.convert("RGB")


def _read_with_pillow(filename: PathLike) -> ByteRaster:
    with Image.open(filename) as im:
        im.load()
        im = _normalise_mode(im)
        width, height = im.size
        return ByteRaster(width, height, len(im.getbands()), im.tobytes())


def _to_pillow(img: ByteRaster, allowed: Iterable[int], fmt: str) -> Image.Image:
    if img.channels not in allowed:
        raise ValueError(f"{fmt} cannot store {img.channels}-channel images")
    mode = _MODES_BY_CHANNELS[img.channels]
    return Image.frombytes(mode, (img.width, img.height), bytes(img.data))


def write_png_image(filename: PathLike, img: ByteRaster) -> None:
    """Write a PNG with 8 bits per channel."""
    _to_pillow(img, (1, 2, 3, 4), "PNG").save(filename, format="PNG")


def read_png_image(filename: PathLike) -> ByteRaster:
    """Read a PNG, expanding palettes and transparency and reducing 16-bit samples."""
    return _read_with_pillow(filename)


def write_jpeg_image(
    filename: PathLike, img: ByteRaster, quality: int | None = None
) -> None:
    """Write a greyscale or RGB JPEG at the given quality (0--100)."""
    if quality is None:
        quality = jpeg_output_quality
    _to_pillow(img, (1, 3), "JPEG").save(filename, format="JPEG", quality=quality)


def read_jpeg_image(filename: PathLike) -> ByteRaster:
    """Read a JPEG file."""
    return _read_with_pillow(filename)


def write_tiff_image(filename: PathLike, img: ByteRaster) -> None:
    """Write an uncompressed TIFF with 8 bits per sample."""
    _to_pillow(img, (1, 2, 3, 4), "TIFF").save(filename, format="TIFF")


def read_tiff_image(filename: PathLike) -> ByteRaster:
    """Read a TIFF file with its origin in the upper left corner."""
    return _read_with_pillow(filename)


# Dispatch

_WRITERS = {
    ImageType.PNM: write_pnm_image,
    ImageType.PNG: write_png_image,
    ImageType.TIFF: write_tiff_image,
    ImageType.JPEG: write_jpeg_image,
}
_READERS = {
    ImageType.PNM: read_pnm_image,
    ImageType.PNG: read_png_image,
    ImageType.TIFF: read_tiff_image,
    ImageType.JPEG: read_jpeg_image,
}


def _resolve_type(filename: PathLike, kind) -> ImageType:
    if kind is None:
        inferred = infer_image_type(filename)
        if inferred is None:
            raise ValueError(f"cannot infer image type of {os.fspath(filename)!r}")
        return inferred
    return _as_type(kind)


def write_image(filename: PathLike, img: ByteRaster, kind=None) -> None:
    """Write ``img`` in the given format, or the one its extension names."""
    _WRITERS[_resolve_type(filename, kind)](filename, img)


def read_image(filename: PathLike, kind=None) -> ByteRaster:
    """Read an image in the given format, or the one its extension names."""
    return _READERS[_resolve_type(filename, kind)](filename)