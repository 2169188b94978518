"""Pytest configuration for renderer tests.

Shared fixtures and small stand-ins for the ray source and scene objects,
so the sampling and orchestration logic can be tested without real
geometry.
"""

import threading

import numpy as np
import pytest

from tiletracer.core.materials import Material
from tiletracer.core.scene import HitRecord, Ray, SceneObject


class FixedRayCamera:
    """Ray source that returns the same ray for every pixel and counts calls."""

    def __init__(self, origin=(0.0, 0.0, 0.0), direction=(0.0, 0.0, -1.0)):
        self.origin = np.array(origin, dtype=np.float64)
        self.direction = np.array(direction, dtype=np.float64)
        self.calls = 0
        self._lock = threading.Lock()

    def get_ray(self, pixel_x, pixel_y):
        with self._lock:
            self.calls += 1
        return Ray(self.origin.copy(), self.direction.copy())


class ConstantHitObject(SceneObject):
    """Reports the same hit for every ray."""

    def __init__(self, material, distance=1.0, normal=(0.0, 0.0, 1.0)):
        super().__init__(material)
        self.distance = distance
        self.normal = None if normal is None else np.array(normal, dtype=np.float64)

    def trace(self, ray):
        return HitRecord(self.distance, ray.at(self.distance), self.normal, self.material, self.object_id)


class AlternatingColorObject(SceneObject):
    """Hit whose material color flips between two values on every trace."""

    def __init__(self, first, second):
        super().__init__(Material(first))
        self.materials = [Material(first), Material(second)]
        self.calls = 0

    def trace(self, ray):
        material = self.materials[self.calls % 2]
        self.calls += 1
        # Normal faces the light head-on so the color is not scaled down
        normal = np.array([1.0, 1.0, -1.0]) / np.sqrt(3.0)
        return HitRecord(1.0, ray.at(1.0), normal, material, self.object_id)


class MissingObject(SceneObject):
    """Never hit."""

    def __init__(self):
        super().__init__(Material())

    def trace(self, ray):
        return None


@pytest.fixture
def red_material():
    return Material((0.9, 0.1, 0.1), name="red")


@pytest.fixture
def fixed_camera():
    return FixedRayCamera()
