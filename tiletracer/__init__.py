"""
Tile-parallel CPU ray tracer with adaptive per-pixel sampling
"""
from .core import Camera, Framebuffer, Material, Renderer, Scene, Sphere, TriangleMesh

__version__ = "1.0.0"

__all__ = [
    "Camera",
    "Framebuffer",
    "Material",
    "Renderer",
    "Scene",
    "Sphere",
    "TriangleMesh",
]
