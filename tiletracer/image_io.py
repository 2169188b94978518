"""
Image file output for packed 0xAARRGGBB framebuffers
"""
import os
import logging
import numpy as np
import cv2

from .errors import ImageWriteError

logger = logging.getLogger(__name__)


def packed_to_bgra(raw_data: np.ndarray, width: int, height: int) -> np.ndarray:
    """Split packed pixels into an (height, width, 4) uint8 BGRA image"""
    packed = np.asarray(raw_data, dtype=np.uint32).reshape((height, width))
    bgra = np.empty((height, width, 4), dtype=np.uint8)
    bgra[..., 0] = packed & 0xff
    bgra[..., 1] = (packed >> 8) & 0xff
    bgra[..., 2] = (packed >> 16) & 0xff
    bgra[..., 3] = (packed >> 24) & 0xff
    return bgra


def write_image(path: str, raw_data: np.ndarray, width: int, height: int):
    """
    Write a framebuffer snapshot to disk

    The format follows the file extension (png, bmp, jpg, tiff, ...).
    Formats without alpha get the BGR channels only.

    Raises:
        ImageWriteError: OpenCV does not know the extension or the write failed
    """
    image = packed_to_bgra(raw_data, width, height)

    extension = os.path.splitext(path)[1].lower()
    if extension not in ('.png', '.tif', '.tiff', '.webp'):
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

    try:
        ok = cv2.imwrite(path, image)
    except cv2.error as e:
        raise ImageWriteError(f"Could not write image to {path}: {e}") from e

    if not ok:
        raise ImageWriteError(f"Could not write image to {path}")

    logger.debug(f"Wrote {width}x{height} image to {path}")
