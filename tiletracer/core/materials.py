# FILE: tiletracer/core/materials.py
"""
Flat-color materials for the direct lighting shader
"""
import numpy as np


class Material:
    """Surface material carrying a single RGB color in [0, 1]"""

    __slots__ = ['color', 'name']

    def __init__(self, color=None, name: str = ""):
        if color is None:
            color = (0.8, 0.8, 0.8)
        self.color = np.clip(np.asarray(color, dtype=np.float64), 0.0, 1.0)
        if self.color.shape != (3,):
            raise ValueError(f"Material color must have 3 components, got shape {self.color.shape}")
        self.name = name

    def __repr__(self) -> str:
        r, g, b = self.color
        return f"Material({self.name!r}, color=({r:.3f}, {g:.3f}, {b:.3f}))"


class MaterialLibrary:
    """Predefined material library for common colors"""

    @staticmethod
    def red() -> Material:
        return Material((0.9, 0.1, 0.1), name="red")

    @staticmethod
    def white() -> Material:
        return Material((1.0, 1.0, 1.0), name="white")

    @staticmethod
    def ground() -> Material:
        return Material((0.8, 0.8, 0.8), name="ground")
