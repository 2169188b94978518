#!/usr/bin/env python3
"""
Render the demo scene from the command line

Usage:
    tiletracer --width 256 --height 256 --spp 8 --tiles 8 --output render.png
"""
import sys
import argparse
import logging
from typing import List, Optional, Tuple

from .config import OUTPUT_SETTINGS, RENDER_SETTINGS
from .core.camera import Camera
from .core.materials import MaterialLibrary
from .core.raytracer import Renderer
from .core.scene import Scene
from .errors import TiletracerError

logger = logging.getLogger(__name__)


def create_demo_scene(width: int, height: int) -> Tuple[Scene, Camera]:
    """One red sphere in the middle of the view, resting above a large ground sphere"""
    scene = Scene()
    scene.add_sphere((0.0, 0.0, -5.0), 1.0, MaterialLibrary.red())
    scene.add_sphere((0.0, -101.0, -5.0), 100.0, MaterialLibrary.ground())

    camera = Camera(width, height, position=(0.0, 0.0, 0.0), target=(0.0, 0.0, -5.0), fov=45.0)
    return scene, camera


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the demo scene with the tile renderer.")
    parser.add_argument("--width", type=int, default=RENDER_SETTINGS['width'],
                        help="Image width in pixels")
    parser.add_argument("--height", type=int, default=RENDER_SETTINGS['height'],
                        help="Image height in pixels")
    parser.add_argument("--spp", type=int, default=RENDER_SETTINGS['samples_per_pixel'],
                        help="Samples per pixel")
    parser.add_argument("--tiles", type=int, default=RENDER_SETTINGS['tiles_per_row'],
                        help="Tiles per row (the image is split into tiles^2 tiles)")
    parser.add_argument("--no-adaptive", action="store_true",
                        help="Always take every sample instead of stopping early on converged pixels")
    parser.add_argument("--workers", type=int, default=RENDER_SETTINGS['max_workers'],
                        help="Worker threads (default: executor default)")
    parser.add_argument("--output", type=str, default=OUTPUT_SETTINGS['path'],
                        help="Output image path, format follows the extension")
    parser.add_argument("--show", action="store_true",
                        help="Display the result with matplotlib after saving")
    parser.add_argument("--log-level", type=str, default=OUTPUT_SETTINGS['log_level'],
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")
    return parser.parse_args(argv)


def show_image(renderer: Renderer, title: str = "tiletracer"):
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    ax.imshow(renderer.get_image())
    ax.set_title(title)
    ax.axis('off')
    plt.show()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        renderer = Renderer(args.width, args.height,
                            samples_per_pixel=args.spp,
                            adaptive_sampling=not args.no_adaptive,
                            tiles_per_row=args.tiles,
                            max_workers=args.workers)
        scene, camera = create_demo_scene(args.width, args.height)
        renderer.add_scene(scene)

        renderer.render(camera)
        renderer.save(args.output)
    except TiletracerError as e:
        logger.error(f"Render failed: {e}")
        return 1

    if args.show:
        show_image(renderer, title=args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
