# FILE: tiletracer/core/camera.py
"""
Pinhole camera turning pixel coordinates into world-space rays
"""
import numpy as np
import math

from .scene import Ray


def _normalize(v: np.ndarray) -> np.ndarray:
    length = np.linalg.norm(v)
    if length > 1e-12:
        return v / length
    return np.array([0.0, 0.0, 1.0])


class Camera:
    """
    Perspective pinhole camera bound to a fixed image resolution.

    Rays go through pixel centers, so get_ray() is a pure function of the
    pixel coordinates and the camera state.
    """

    def __init__(self,
                 width: int,
                 height: int,
                 position=None,
                 target=None,
                 up=None,
                 fov: float = 45.0):
        if width <= 0 or height <= 0:
            raise ValueError(f"Camera resolution must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)
        self.aspect_ratio = self.width / self.height

        # Camera transform
        self.position = np.array(position if position is not None else (0.0, 0.0, 0.0), dtype=np.float64)
        self.target = np.array(target if target is not None else (0.0, 0.0, -1.0), dtype=np.float64)
        self.up = np.array(up if up is not None else (0.0, 1.0, 0.0), dtype=np.float64)

        self.fov = max(1.0, min(179.0, fov))  # Vertical field of view in degrees
        self._tan_half_fov = math.tan(math.radians(self.fov / 2))
        self._update_coordinate_system()

    def _update_coordinate_system(self):
        """Update camera coordinate system based on position, target, and up"""
        self.forward = _normalize(self.target - self.position)
        self.right = _normalize(np.cross(self.forward, self.up))
        # Recompute up vector to ensure orthonormal basis
        self.up = _normalize(np.cross(self.right, self.forward))

    def look_at(self, position, target, up=None):
        """Convenience method to set camera look-at parameters"""
        self.position = np.array(position, dtype=np.float64)
        self.target = np.array(target, dtype=np.float64)
        if up is not None:
            self.up = np.array(up, dtype=np.float64)
        self._update_coordinate_system()

    def set_fov(self, fov: float):
        """Set field of view and update precomputed values"""
        self.fov = max(1.0, min(179.0, fov))
        self._tan_half_fov = math.tan(math.radians(self.fov / 2))

    def get_ray(self, pixel_x: int, pixel_y: int) -> Ray:
        """
        Generate the ray through the center of a pixel

        Args:
            pixel_x: Column, 0 = left
            pixel_y: Row, 0 = top

        Returns:
            Ray: World-space camera ray with unit direction
        """
        u = (pixel_x + 0.5) / self.width
        v = (pixel_y + 0.5) / self.height

        screen_x = (2.0 * u - 1.0) * self._tan_half_fov * self.aspect_ratio
        screen_y = (1.0 - 2.0 * v) * self._tan_half_fov

        direction = self.forward + self.right * screen_x + self.up * screen_y
        return Ray(self.position.copy(), _normalize(direction))
