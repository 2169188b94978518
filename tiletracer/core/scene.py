# FILE: tiletracer/core/scene.py
"""
Scene objects and the intersection records they report
"""
import sys
import numpy as np
from typing import List, Optional
from dataclasses import dataclass
from .materials import Material

# Sentinel distance meaning "nothing hit yet"
NO_HIT = sys.float_info.max

T_MIN = 1e-4


@dataclass
class Ray:
    origin: np.ndarray  # [3]
    direction: np.ndarray  # [3]

    def at(self, t: float) -> np.ndarray:
        return self.origin + self.direction * t


@dataclass
class HitRecord:
    distance: float
    point: np.ndarray  # [3]
    normal: np.ndarray  # [3]
    material: Material
    object_id: int = -1

    def is_valid(self) -> bool:
        return bool(np.isfinite(self.distance)) and self.distance < NO_HIT


class SceneObject:
    """Base class for all intersectable scene objects"""
    def __init__(self, material: Material, object_id: int = -1):
        self.material = material
        self.object_id = object_id

    def trace(self, ray: Ray) -> Optional[HitRecord]:
        raise NotImplementedError


class Sphere(SceneObject):
    """Sphere object with analytic intersection"""

    def __init__(self, center, radius: float, material: Material, object_id: int = -1):
        super().__init__(material, object_id)
        self.center = np.array(center, dtype=np.float64)
        self.radius = float(radius)
        if self.radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")

    def trace(self, ray: Ray) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = np.dot(ray.direction, ray.direction)
        half_b = np.dot(oc, ray.direction)
        c = np.dot(oc, oc) - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrt_d = np.sqrt(discriminant)
        t1 = (-half_b - sqrt_d) / a
        t2 = (-half_b + sqrt_d) / a

        t = t1 if t1 > T_MIN else (t2 if t2 > T_MIN else None)
        if t is None:
            return None

        point = ray.at(t)
        normal = (point - self.center) / self.radius

        return HitRecord(float(t), point, normal, self.material, self.object_id)


class TriangleMesh(SceneObject):
    """Triangle mesh with flat per-face normals"""

    def __init__(self, vertices, triangles, material: Material, object_id: int = -1):
        super().__init__(material, object_id)
        self.vertices = np.array(vertices, dtype=np.float64)
        self.triangles = np.array(triangles, dtype=np.int32)
        self.normals = self._compute_normals()

    def _compute_normals(self):
        normals = []
        for tri in self.triangles:
            v0, v1, v2 = self.vertices[tri]
            normal = np.cross(v1 - v0, v2 - v0)
            normal = normal / (np.linalg.norm(normal) + 1e-12)
            normals.append(normal)
        return np.array(normals, dtype=np.float64).reshape(-1, 3)

    def trace(self, ray: Ray) -> Optional[HitRecord]:
        closest_hit = None
        min_t = NO_HIT

        for i, tri in enumerate(self.triangles):
            hit = self._intersect_triangle(ray, tri, i)
            if hit and hit.distance < min_t:
                closest_hit = hit
                min_t = hit.distance

        return closest_hit

    def _intersect_triangle(self, ray: Ray, triangle: np.ndarray, tri_index: int) -> Optional[HitRecord]:
        # Möller–Trumbore intersection algorithm
        v0, v1, v2 = self.vertices[triangle]

        edge1 = v1 - v0
        edge2 = v2 - v0
        h = np.cross(ray.direction, edge2)

        a = np.dot(edge1, h)
        if abs(a) < 1e-12:
            return None

        f = 1.0 / a
        s = ray.origin - v0
        u = f * np.dot(s, h)
        if u < 0.0 or u > 1.0:
            return None

        q = np.cross(s, edge1)
        v = f * np.dot(ray.direction, q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * np.dot(edge2, q)
        if t <= T_MIN:
            return None

        normal = self.normals[tri_index]
        # Face the normal against the incoming ray so both sides get lit
        if np.dot(normal, ray.direction) > 0:
            normal = -normal
        return HitRecord(float(t), ray.at(t), normal, self.material, self.object_id)


class Scene:
    """Ordered container of scene objects"""
    def __init__(self):
        self.objects: List[SceneObject] = []
        self._object_counter = 0

    def add_object(self, obj: SceneObject) -> int:
        obj.object_id = self._object_counter
        self.objects.append(obj)
        self._object_counter += 1
        return obj.object_id

    def add_sphere(self, center, radius, material) -> int:
        return self.add_object(Sphere(center, radius, material))

    def add_triangle_mesh(self, vertices, triangles, material) -> int:
        return self.add_object(TriangleMesh(vertices, triangles, material))

    def __len__(self) -> int:
        return len(self.objects)
