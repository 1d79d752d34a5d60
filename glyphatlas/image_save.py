"""Writing bitmaps to files in simple raw and text formats."""

from __future__ import annotations

import os
from enum import Enum
from typing import Union

import numpy as np

PathLike = Union[str, "os.PathLike[str]"]


class ImageFormat(Enum):
    """Output image formats."""

    PNG = "png"
    BMP = "bmp"
    TIFF = "tiff"
    RGBA = "rgba"
    FL32 = "fl32"
    TEXT = "text"
    TEXT_FLOAT = "textfloat"
    BINARY = "bin"
    BINARY_FLOAT = "binfloat"
    BINARY_FLOAT_BE = "binfloatbe"


class ImageSaveError(ValueError):
    """Raised when a bitmap cannot be saved in the requested format."""


def _rows(bitmap: np.ndarray) -> np.ndarray:
    if bitmap.ndim == 2:
        return bitmap
    if bitmap.ndim == 3:
        return bitmap.reshape(bitmap.shape[0], -1)
    raise ImageSaveError("bitmap must be two- or three-dimensional")


def _save_text(rows: np.ndarray, filename: PathLike, fmt: str) -> None:
    with open(filename, "w", encoding="ascii", newline="\n") as f:
        for row in rows:
            f.write(" ".join(fmt % value for value in row.tolist()))
            f.write("\n")


def _save_binary(rows: np.ndarray, filename: PathLike, dtype: str) -> None:
    with open(filename, "wb") as f:
        f.write(np.ascontiguousarray(rows, dtype=dtype).tobytes())


def save_image(bitmap: np.ndarray, image_format: ImageFormat, filename: PathLike) -> None:
    """Save a byte (uint8) or float bitmap in the given format.

    Rows are written in the bitmap's own row order. Raises ImageSaveError when
    the format does not suit the pixel type, and OSError if the file cannot be written.
    """
    bitmap = np.asarray(bitmap)
    image_format = ImageFormat(image_format)
    rows = _rows(bitmap)
    if bitmap.dtype == np.uint8:
        if image_format is ImageFormat.TEXT:
            _save_text(rows, filename, "%02X")
            return
        if image_format is ImageFormat.BINARY:
            _save_binary(rows, filename, "u1")
            return
    elif np.issubdtype(bitmap.dtype, np.floating):
        single = rows.astype(np.float32)
        if image_format is ImageFormat.TEXT_FLOAT:
            _save_text(single, filename, "%g")
            return
        if image_format is ImageFormat.BINARY_FLOAT:
            _save_binary(single, filename, "<f4")
            return
        if image_format is ImageFormat.BINARY_FLOAT_BE:
            _save_binary(single, filename, ">f4")
            return
    else:
        raise ImageSaveError(f"unsupported pixel type {bitmap.dtype}")
    raise ImageSaveError(
        f"cannot save a {bitmap.dtype} bitmap as {image_format.name}"
    )