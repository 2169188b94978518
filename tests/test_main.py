"""Tests for the command-line entry point."""

import cv2
import numpy as np

from tiletracer.main import create_demo_scene, main, parse_args


class TestCommandLine:
    """Tests for main()."""

    def test_parse_defaults(self):
        args = parse_args([])
        assert args.width == 512
        assert args.spp == 8
        assert args.tiles == 8
        assert args.no_adaptive is False
        assert args.show is False

    def test_renders_and_saves(self, tmp_path):
        path = tmp_path / "demo.png"
        code = main(["--width", "32", "--height", "24", "--spp", "4", "--tiles", "4",
                     "--output", str(path), "--log-level", "WARNING"])

        assert code == 0
        image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        assert image.shape == (24, 32, 4)
        # The demo sphere sits in the middle of the frame
        assert np.any(image[12, 16, :3] > 0)

    def test_bad_configuration_returns_error_code(self, tmp_path):
        code = main(["--width", "16", "--height", "16", "--tiles", "0",
                     "--output", str(tmp_path / "x.png")])
        assert code == 1


class TestDemoScene:
    """Tests for create_demo_scene."""

    def test_contents(self):
        scene, camera = create_demo_scene(40, 30)
        assert len(scene) == 2
        assert (camera.width, camera.height) == (40, 30)
