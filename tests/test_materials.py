"""Unit tests for flat-color materials."""

import numpy as np
import pytest

from tiletracer.core.materials import Material, MaterialLibrary


class TestMaterial:
    """Tests for Material."""

    def test_default_color(self):
        assert np.allclose(Material().color, [0.8, 0.8, 0.8])

    def test_color_is_clamped(self):
        assert np.allclose(Material((1.5, -0.2, 0.5)).color, [1.0, 0.0, 0.5])

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            Material((1.0, 0.0))

    def test_library(self):
        assert np.allclose(MaterialLibrary.red().color, [0.9, 0.1, 0.1])
        assert np.allclose(MaterialLibrary.white().color, [1.0, 1.0, 1.0])
        assert MaterialLibrary.ground().name == "ground"
