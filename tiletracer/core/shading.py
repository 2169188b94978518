# FILE: tiletracer/core/shading.py
"""
Direct lighting for a single ray: closest hit plus one directional light.

The model is deliberately minimal. There are no shadow rays, no secondary
bounces and no specular term; a surface's brightness only depends on the
angle between its normal and the fixed light direction, lifted by a small
ambient term and clamped to 1.
"""
import numpy as np
from typing import Iterable, Optional

from ..config import SHADING_SETTINGS
from ..errors import SceneContractError
from .scene import NO_HIT, HitRecord, Ray, SceneObject

AMBIENT = float(SHADING_SETTINGS['ambient'])


def normalize_light(direction) -> np.ndarray:
    direction = np.asarray(direction, dtype=np.float64)
    length = np.linalg.norm(direction)
    if length < 1e-12:
        raise ValueError("Light direction must be a non-zero vector")
    return direction / length


# Unit vector, computed once at import
LIGHT_DIRECTION = normalize_light(SHADING_SETTINGS['light_direction'])


def closest_hit(ray: Ray, renderables: Iterable[SceneObject]) -> Optional[HitRecord]:
    """Query every object in order and keep the nearest valid hit"""
    closest = None
    closest_distance = NO_HIT

    for renderable in renderables:
        hit = renderable.trace(ray)
        if hit is None or not hit.is_valid():
            continue
        if hit.distance < closest_distance:
            closest = hit
            closest_distance = hit.distance

    return closest


def lambert(normal: np.ndarray, light_direction: np.ndarray, ambient: float) -> float:
    """Light value in [0, 1] for a unit normal and a unit light direction"""
    n_dot_l = max(0.0, float(np.dot(normal, -light_direction)))
    return min(1.0, n_dot_l + ambient)


def shade(ray: Ray,
          renderables: Iterable[SceneObject],
          light_direction: np.ndarray = LIGHT_DIRECTION,
          ambient: float = AMBIENT) -> np.ndarray:
    """
    Color seen along a ray

    Returns black (the background) when nothing is hit, otherwise the hit
    material's color scaled by the Lambertian light value. light_direction
    must already be a unit vector, see normalize_light.

    Raises:
        SceneContractError: The closest hit carries no material, no material
            color or no normal.
    """
    hit = closest_hit(ray, renderables)
    if hit is None:
        return np.zeros(3)

    if hit.normal is None:
        raise SceneContractError(f"Object {hit.object_id} reported a hit without a surface normal")
    color = getattr(hit.material, 'color', None)
    if color is None:
        raise SceneContractError(f"Object {hit.object_id} reported a hit without a material color")

    light_value = lambert(hit.normal, light_direction, ambient)
    return np.asarray(color, dtype=np.float64) * light_value
