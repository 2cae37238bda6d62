"""
Unit tests for CompositorConfig.
"""

import pytest

from pairframe.compositor import CompositorConfig


class TestCompositorConfig:
    def test_init_when_defaults_then_1080p_canvas(self):
        # Act
        config = CompositorConfig()

        # Assert
        assert config.canvas_size == (1920, 1080)
        assert config.half_width == 960
        assert config.jpeg_quality == 0.9
        assert config.pillow_quality == 90
        assert config.text_margin == 20
        assert config.name_marker == "_01"

    def test_init_when_quality_out_of_range_then_raises(self):
        with pytest.raises(ValueError, match="jpeg_quality"):
            CompositorConfig(jpeg_quality=1.5)

    def test_init_when_quality_zero_then_raises(self):
        with pytest.raises(ValueError, match="jpeg_quality"):
            CompositorConfig(jpeg_quality=0)

    def test_init_when_odd_width_then_raises(self):
        with pytest.raises(ValueError, match="canvas_width"):
            CompositorConfig(canvas_width=1921)

    def test_init_when_negative_yield_then_raises(self):
        with pytest.raises(ValueError, match="yield_interval_s"):
            CompositorConfig(yield_interval_s=-1)

    def test_init_when_empty_marker_then_raises(self):
        with pytest.raises(ValueError, match="name_marker"):
            CompositorConfig(name_marker="")
