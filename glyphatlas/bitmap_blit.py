"""Copying rectangular sections between bitmaps.

Bitmaps are numpy arrays of shape (height, width) or (height, width, channels),
holding either ``uint8`` or floating-point pixels. A float bitmap may be copied
into a byte bitmap; its values are then clamped to [0, 1] and quantized.
"""

from __future__ import annotations

import numpy as np

_CHANNEL_COUNTS = (1, 3, 4)


def _as_channels(bitmap: np.ndarray, role: str) -> np.ndarray:
    if bitmap.ndim == 2:
        bitmap = bitmap[:, :, np.newaxis]
    elif bitmap.ndim != 3:
        raise ValueError(f"{role} bitmap must be two- or three-dimensional")
    if bitmap.shape[2] not in _CHANNEL_COUNTS:
        raise ValueError(f"{role} bitmap has unsupported channel count {bitmap.shape[2]}")
    return bitmap


def _is_float(bitmap: np.ndarray, role: str) -> bool:
    if bitmap.dtype == np.uint8:
        return False
    if np.issubdtype(bitmap.dtype, np.floating):
        return True
    raise TypeError(f"{role} bitmap has unsupported pixel type {bitmap.dtype}")


def _float_to_byte(pixels: np.ndarray) -> np.ndarray:
    x = np.nan_to_num(np.clip(pixels.astype(np.float32), 0.0, 1.0), nan=0.0)
    levels = np.floor(np.float32(255.5) - np.float32(255.0) * x)
    return (255 - levels).astype(np.uint8)


def _prepare(dst: np.ndarray, src: np.ndarray) -> tuple[np.ndarray, np.ndarray, bool]:
    if not isinstance(dst, np.ndarray):
        raise TypeError("destination bitmap must be a numpy array")
    src = np.asarray(src)
    dst3 = _as_channels(dst, "destination")
    src3 = _as_channels(src, "source")
    if dst3.shape[2] != src3.shape[2]:
        raise ValueError(
            f"channel counts differ: destination {dst3.shape[2]}, source {src3.shape[2]}"
        )
    dst_float = _is_float(dst3, "destination")
    src_float = _is_float(src3, "source")
    if dst_float and not src_float:
        raise TypeError("cannot copy a byte bitmap into a float bitmap")
    return dst3, src3, src_float and not dst_float


def _copy(dst: np.ndarray, src: np.ndarray, convert: bool) -> None:
    dst[...] = _float_to_byte(src) if convert else src


def blit(dst: np.ndarray, src: np.ndarray) -> None:
    """Copy the overlapping top-left area of the source into the destination."""
    dst3, src3, convert = _prepare(dst, src)
    height = min(dst3.shape[0], src3.shape[0])
    width = min(dst3.shape[1], src3.shape[1])
    _copy(dst3[:height, :width], src3[:height, :width], convert)


def blit_section(
    dst: np.ndarray,
    src: np.ndarray,
    dx: int,
    dy: int,
    sx: int,
    sy: int,
    w: int,
    h: int,
) -> None:
    """Copy a w by h section at (sx, sy) of the source to (dx, dy) of the destination.

    The section is trimmed so that no pixel outside either bitmap is touched.
    """
    dst3, src3, convert = _prepare(dst, src)
    if dx < 0:
        w, sx, dx = w + dx, sx - dx, 0
    if dy < 0:
        h, sy, dy = h + dy, sy - dy, 0
    if sx < 0:
        w, dx, sx = w + sx, dx - sx, 0
    if sy < 0:
        h, dy, sy = h + sy, dy - sy, 0
    w = max(0, min(w, dst3.shape[1] - dx, src3.shape[1] - sx))
    h = max(0, min(h, dst3.shape[0] - dy, src3.shape[0] - sy))
    if w and h:
        _copy(dst3[dy : dy + h, dx : dx + w], src3[sy : sy + h, sx : sx + w], convert)