from .camera import Camera
from .framebuffer import Framebuffer, pack_color, unpack_color
from .materials import Material, MaterialLibrary
from .raytracer import RenderBounds, Renderer, partition, tile_bounds
from .scene import HitRecord, Ray, Scene, SceneObject, Sphere, TriangleMesh
from .shading import closest_hit, shade

__all__ = [
    "Camera",
    "Framebuffer",
    "HitRecord",
    "Material",
    "MaterialLibrary",
    "Ray",
    "RenderBounds",
    "Renderer",
    "Scene",
    "SceneObject",
    "Sphere",
    "TriangleMesh",
    "closest_hit",
    "pack_color",
    "partition",
    "shade",
    "tile_bounds",
    "unpack_color",
]
