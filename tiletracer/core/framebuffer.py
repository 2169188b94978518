# FILE: tiletracer/core/framebuffer.py
"""
Fixed-size packed-color pixel storage
"""
import numpy as np


def pack_color(color) -> int:
    """Pack an RGB vector in [0, 1] into an opaque 0xAARRGGBB integer"""
    r, g, b = (np.clip(np.asarray(color, dtype=np.float64), 0.0, 1.0) * 255.0).astype(np.uint32)
    return 0xff000000 | (int(r) << 16) | (int(g) << 8) | int(b)


def unpack_color(packed: int) -> np.ndarray:
    """Inverse of pack_color, returns RGB floats in [0, 1] (alpha dropped)"""
    packed = int(packed)
    return np.array([
        (packed >> 16) & 0xff,
        (packed >> 8) & 0xff,
        packed & 0xff,
    ], dtype=np.float64) / 255.0


class Framebuffer:
    """2D grid of packed 0xAARRGGBB pixels, indexed as (x, y)"""

    def __init__(self, size_x: int, size_y: int):
        if size_x <= 0 or size_y <= 0:
            raise ValueError(f"Framebuffer size must be positive, got {size_x}x{size_y}")
        self._size_x = int(size_x)
        self._size_y = int(size_y)
        self._data = np.zeros((self._size_y, self._size_x), dtype=np.uint32)

    @property
    def size_x(self) -> int:
        return self._size_x

    @property
    def size_y(self) -> int:
        return self._size_y

    def fill_color(self, packed: int):
        self._data.fill(packed)

    def set_pixel(self, x: int, y: int, packed: int):
        self._data[y, x] = packed

    def get_pixel(self, x: int, y: int) -> int:
        return int(self._data[y, x])

    def get_data(self) -> np.ndarray:
        """Raw (size_y, size_x) uint32 array, row-major from the top-left"""
        return self._data

    def to_rgb(self) -> np.ndarray:
        """Float RGB image of shape (size_y, size_x, 3) in [0, 1]"""
        rgb = np.empty((self._size_y, self._size_x, 3), dtype=np.float32)
        rgb[..., 0] = (self._data >> 16) & 0xff
        rgb[..., 1] = (self._data >> 8) & 0xff
        rgb[..., 2] = self._data & 0xff
        return rgb / 255.0
