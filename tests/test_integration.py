"""End-to-end rendering scenarios.

Tests cover:
- A single sphere centered in a 64x64 view: hit pixels are lit, the rest
  stay exactly background
- Zero registered objects: the whole image is the background color
- Adaptive and exhaustive sampling agree on a deterministic scene
"""

import numpy as np
import pytest

from tiletracer.core.camera import Camera
from tiletracer.core.framebuffer import unpack_color
from tiletracer.core.materials import Material
from tiletracer.core.raytracer import Renderer
from tiletracer.core.scene import Sphere

SIZE = 64


@pytest.fixture
def sphere_setup():
    material = Material((0.9, 0.6, 0.3))
    sphere = Sphere((0.0, 0.0, -5.0), 1.0, material)
    camera = Camera(SIZE, SIZE, position=(0, 0, 0), target=(0, 0, -5), fov=45.0)
    return sphere, camera, material


def silhouette(sphere, camera):
    mask = np.zeros((SIZE, SIZE), dtype=bool)
    for y in range(SIZE):
        for x in range(SIZE):
            mask[y, x] = sphere.trace(camera.get_ray(x, y)) is not None
    return mask


class TestSingleSphere:
    """64x64 image, 4x4 tiles, one sphere, 8 spp, adaptive on."""

    def test_sphere_pixels_lit_and_rest_background(self, sphere_setup):
        sphere, camera, material = sphere_setup
        renderer = Renderer(SIZE, SIZE, samples_per_pixel=8, adaptive_sampling=True, tiles_per_row=4)
        renderer.add_renderable(sphere)

        renderer.render(camera)

        data = renderer.color_buffer.get_data()
        mask = silhouette(sphere, camera)
        assert mask.any() and not mask.all()
        assert mask[SIZE // 2, SIZE // 2]

        assert np.all(data[~mask] == 0xff000000)
        assert np.all(data[mask] != 0xff000000)

        for packed in data[mask]:
            rgb = unpack_color(packed)
            assert np.all(rgb <= material.color + 1e-9)
            assert rgb[0] > 0.0

    def test_lit_side_faces_the_light(self, sphere_setup):
        """The brightest pixel sits on the side of the sphere facing the light."""
        sphere, camera, _ = sphere_setup
        renderer = Renderer(SIZE, SIZE, samples_per_pixel=8, tiles_per_row=4)
        renderer.add_renderable(sphere)
        renderer.render(camera)

        image = renderer.get_image()
        # Light comes from (-1, -1, 1): the upper-right half of the sphere is brighter
        # than the lower-left, and the brightest pixel lies in the upper-right quadrant.
        luminance = image.sum(axis=2)
        y, x = np.unravel_index(np.argmax(luminance), luminance.shape)
        assert x >= SIZE // 2
        assert y < SIZE // 2

    def test_adaptive_matches_exhaustive(self, sphere_setup):
        sphere, camera, _ = sphere_setup
        images = []
        for adaptive in (True, False):
            renderer = Renderer(SIZE, SIZE, samples_per_pixel=8, adaptive_sampling=adaptive, tiles_per_row=4)
            renderer.add_renderable(sphere)
            renderer.render(camera)
            images.append(renderer.color_buffer.get_data().copy())
        assert np.array_equal(images[0], images[1])


class TestEmptyScene:
    """Zero renderables registered."""

    def test_every_pixel_is_background(self):
        renderer = Renderer(SIZE, SIZE, samples_per_pixel=8, tiles_per_row=4)
        renderer.render(Camera(SIZE, SIZE))
        assert np.all(renderer.color_buffer.get_data() == 0xff000000)
