# FILE: tiletracer/core/raytracer.py
"""
Tile-parallel CPU renderer with adaptive per-pixel sampling
"""
import numpy as np
import time
import threading
import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..config import RENDER_SETTINGS, SHADING_SETTINGS
from ..errors import ConfigurationError, RenderCancelled
from ..image_io import write_image
from ..utils import ProgressCallback, TileProgress
from .framebuffer import Framebuffer, pack_color
from .scene import Scene, SceneObject
from .shading import AMBIENT, LIGHT_DIRECTION, shade

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = SHADING_SETTINGS['background_color']

# Samples always taken before the convergence check
INITIAL_SAMPLES = 2

# Max distance between the two initial samples for a pixel to count as converged
CONVERGENCE_EPSILON = 1e-4


@dataclass(frozen=True)
class RenderBounds:
    """Half-open pixel rectangle [min_x, max_x) x [min_y, max_y)"""
    min_x: int = 0
    min_y: int = 0
    max_x: int = 0
    max_y: int = 0

    @property
    def width(self) -> int:
        return max(0, self.max_x - self.min_x)

    @property
    def height(self) -> int:
        return max(0, self.max_y - self.min_y)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def tile_bounds(tile_id: int, width: int, height: int, tiles_per_row: int) -> RenderBounds:
    """
    Bounds of one tile in a tiles_per_row x tiles_per_row grid

    Tiles are laid out row by row. When the image size is a multiple of
    tiles_per_row every tile is width / tiles_per_row wide. Otherwise each
    edge is placed proportionally, so the leftover pixels are spread over
    the grid and the last tile of each row and column ends on the image edge.
    """
    tile_y = tile_id // tiles_per_row
    tile_x = tile_id - tile_y * tiles_per_row

    min_x = tile_x * width // tiles_per_row
    min_y = tile_y * height // tiles_per_row
    max_x = (tile_x + 1) * width // tiles_per_row
    max_y = (tile_y + 1) * height // tiles_per_row

    return RenderBounds(min_x, min_y, max_x, max_y)


def partition(width: int, height: int, tiles_per_row: int) -> List[RenderBounds]:
    """All tile bounds for an image, in tile-id order"""
    return [tile_bounds(tile_id, width, height, tiles_per_row)
            for tile_id in range(tiles_per_row * tiles_per_row)]


def _require_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


class Renderer:
    """
    Renders registered scene objects into a packed-color framebuffer.

    The image is split into tiles_per_row^2 tiles that run on a thread pool.
    Each pixel is sampled outside any lock; only the framebuffer write goes
    through the single lock shared by every tile.
    """

    def __init__(self, size_x: int, size_y: int,
                 samples_per_pixel: Optional[int] = None,
                 adaptive_sampling: Optional[bool] = None,
                 tiles_per_row: Optional[int] = None,
                 max_workers: Optional[int] = None):
        size_x = _require_positive_int("size_x", size_x)
        size_y = _require_positive_int("size_y", size_y)

        self.color_buffer = Framebuffer(size_x, size_y)
        self.renderables: List[SceneObject] = []
        self._color_buffer_lock = threading.Lock()
        self._cancel_event = threading.Event()

        self.samples_per_pixel = (samples_per_pixel if samples_per_pixel is not None
                                  else RENDER_SETTINGS['samples_per_pixel'])
        self.adaptive_sampling = (adaptive_sampling if adaptive_sampling is not None
                                  else RENDER_SETTINGS['adaptive_sampling'])
        self.tiles_per_row = (tiles_per_row if tiles_per_row is not None
                              else RENDER_SETTINGS['tiles_per_row'])
        self.max_workers = max_workers if max_workers is not None else RENDER_SETTINGS['max_workers']

        self.light_direction = LIGHT_DIRECTION.copy()
        self.ambient = AMBIENT

        logger.info(f"Renderer initialized: {size_x}x{size_y}, spp: {self.samples_per_pixel}, "
                    f"adaptive: {self.adaptive_sampling}, tiles: {self.tiles_per_row}^2")

    # -- configuration ----------------------------------------------------

    @property
    def samples_per_pixel(self) -> int:
        return self._samples_per_pixel

    @samples_per_pixel.setter
    def samples_per_pixel(self, value: int):
        self._samples_per_pixel = _require_positive_int("samples_per_pixel", value)

    @property
    def adaptive_sampling(self) -> bool:
        return self._adaptive_sampling

    @adaptive_sampling.setter
    def adaptive_sampling(self, value: bool):
        self._adaptive_sampling = bool(value)

    @property
    def tiles_per_row(self) -> int:
        return self._tiles_per_row

    @tiles_per_row.setter
    def tiles_per_row(self, value: int):
        self._tiles_per_row = _require_positive_int("tiles_per_row", value)

    @property
    def max_workers(self) -> Optional[int]:
        return self._max_workers

    @max_workers.setter
    def max_workers(self, value: Optional[int]):
        self._max_workers = None if value is None else _require_positive_int("max_workers", value)

    @property
    def size_x(self) -> int:
        return self.color_buffer.size_x

    @property
    def size_y(self) -> int:
        return self.color_buffer.size_y

    # -- scene ----------------------------------------------------------------

    def add_renderable(self, renderable: SceneObject):
        """Register one scene object. Not safe to call while render() runs."""
        self.renderables.append(renderable)

    def add_scene(self, scene: Scene):
        for obj in scene.objects:
            self.add_renderable(obj)

    def clear_renderables(self):
        self.renderables.clear()

    # -- rendering ------------------------------------------------------------

    def cancel(self):
        """Ask a running render() to skip the tiles that have not started yet"""
        self._cancel_event.set()

    def render(self, camera, progress_callback: Optional[ProgressCallback] = None):
        """
        Run one full render pass and block until every tile is done

        Args:
            camera: Ray source with a get_ray(pixel_x, pixel_y) method
            progress_callback: Called with (finished_tiles, total_tiles)
                after each tile

        Raises:
            RenderCancelled: cancel() was called during the pass
            SceneContractError: A scene object broke the intersection contract
        """
        self._cancel_event.clear()
        self.color_buffer.fill_color(BACKGROUND_COLOR)

        tiles = partition(self.size_x, self.size_y, self.tiles_per_row)
        progress = TileProgress(len(tiles), progress_callback)
        renderables = tuple(self.renderables)

        start_time = time.time()

        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix="tiletracer") as executor:
            futures = [executor.submit(self._run_tile, camera, renderables, bounds, progress)
                       for bounds in tiles]
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)

            for future in done:
                error = future.exception()
                if error is not None:
                    self._cancel_event.set()
                    for pending in not_done:
                        pending.cancel()
                    logger.error(f"Render pass aborted: {error}")
                    raise error

        # A cancel that arrives after the last tile leaves a complete image
        if self._cancel_event.is_set() and progress.finished < len(tiles):
            logger.info(f"Render cancelled after {progress.finished}/{len(tiles)} tiles")
            raise RenderCancelled(f"Render cancelled after {progress.finished}/{len(tiles)} tiles")

        render_time = time.time() - start_time
        logger.info(f"Rendered {self.size_x}x{self.size_y} in {render_time:.3f}s")

    def _run_tile(self, camera, renderables: Tuple[SceneObject, ...],
                  bounds: RenderBounds, progress: TileProgress):
        if self._cancel_event.is_set():
            return

        self._render_tile(camera, renderables, bounds)

        _, percent = progress.advance()
        logger.info(f"Progress: {percent:.1f}%")

    def _render_tile(self, camera, renderables: Tuple[SceneObject, ...], bounds: RenderBounds) -> int:
        """Sample and write every pixel of one tile, returns the samples taken"""
        samples = np.zeros((self.samples_per_pixel, 3), dtype=np.float64)
        total_samples = 0

        for i in range(bounds.min_y, bounds.max_y):
            for j in range(bounds.min_x, bounds.max_x):
                color, num_samples = self._sample_pixel(camera, renderables, j, i, samples)
                total_samples += num_samples
                packed = pack_color(color)

                with self._color_buffer_lock:
                    self.color_buffer.set_pixel(j, i, packed)

        logger.debug(f"Tile {bounds} done, {total_samples} samples for {bounds.pixel_count} pixels")
        return total_samples

    def sample_pixel(self, camera, x: int, y: int) -> Tuple[np.ndarray, int]:
        """Sample one pixel against the registered objects without touching the framebuffer"""
        samples = np.zeros((self.samples_per_pixel, 3), dtype=np.float64)
        return self._sample_pixel(camera, tuple(self.renderables), x, y, samples)

    def _sample_pixel(self, camera, renderables: Iterable[SceneObject],
                      x: int, y: int, samples: np.ndarray) -> Tuple[np.ndarray, int]:
        """
        Average of the samples taken for one pixel

        Two samples are always taken. The rest are only taken when adaptive
        sampling is off or the first two differ by more than
        CONVERGENCE_EPSILON. Comparing two samples is a coarse stand-in for
        the pixel variance, not a statistical estimate.

        Returns:
            (mean color, number of samples taken)
        """
        samples.fill(0.0)
        capacity = samples.shape[0]
        initial = min(INITIAL_SAMPLES, capacity)

        num_samples = 0
        for sample_id in range(initial):
            samples[sample_id] = self._shade_sample(camera, renderables, x, y)
            num_samples += 1

        if num_samples == INITIAL_SAMPLES and (
                not self.adaptive_sampling
                or np.linalg.norm(samples[0] - samples[1]) > CONVERGENCE_EPSILON):
            for sample_id in range(INITIAL_SAMPLES, capacity):
                samples[sample_id] = self._shade_sample(camera, renderables, x, y)
                num_samples += 1

        return samples[:num_samples].sum(axis=0) / num_samples, num_samples

    def _shade_sample(self, camera, renderables: Iterable[SceneObject], x: int, y: int) -> np.ndarray:
        ray = camera.get_ray(x, y)
        return shade(ray, renderables, self.light_direction, self.ambient)

    # -- output ---------------------------------------------------------------

    def get_image(self) -> np.ndarray:
        """Current framebuffer as a float RGB array of shape (size_y, size_x, 3)"""
        return self.color_buffer.to_rgb()

    def save(self, path: str):
        """Write the current framebuffer, format picked from the file extension"""
        write_image(path, self.color_buffer.get_data(), self.size_x, self.size_y)
        logger.info(f"Saved {self.size_x}x{self.size_y} image to {path}")
