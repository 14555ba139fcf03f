"""Tests for alpha border classification."""
import numpy as np

from mooretrace.sampler import PixelSampler, is_border
from mooretrace.types import PixelBuffer


def single_pixel_buffer(alpha, rgb=(0, 0, 0)):
    rgba = np.zeros((1, 1, 4), dtype=np.uint8)
    rgba[0, 0] = list(rgb) + [alpha]
    return PixelBuffer.from_array(rgba)


class TestIsBorder:
    """Test is_border classification."""

    def test_threshold_is_strict(self):
        assert not is_border(single_pixel_buffer(8), 0, 0, threshold=8)
        assert is_border(single_pixel_buffer(9), 0, 0, threshold=8)

    def test_default_threshold(self):
        assert not is_border(single_pixel_buffer(8), 0, 0)
        assert is_border(single_pixel_buffer(9), 0, 0)

    def test_zero_threshold(self):
        assert not is_border(single_pixel_buffer(0), 0, 0, threshold=0)
        assert is_border(single_pixel_buffer(1), 0, 0, threshold=0)

    def test_rgb_ignored(self):
        """Bright but transparent is background; black but opaque is shape."""
        assert not is_border(single_pixel_buffer(0, (255, 255, 255)), 0, 0)
        assert is_border(single_pixel_buffer(255, (0, 0, 0)), 0, 0)

    def test_out_of_bounds_is_background(self):
        buffer = single_pixel_buffer(255)
        assert is_border(buffer, 0, 0)
        for x, y in [(-1, 0), (0, -1), (1, 0), (0, 1), (-5, -5)]:
            assert not is_border(buffer, x, y)

    def test_truncated_data(self):
        """Alpha byte past the end of the data reads as background."""
        buffer = PixelBuffer(width=2, height=1, stride=8, data=bytes([0, 0, 0, 255, 0, 0, 0]))
        assert is_border(buffer, 0, 0)
        assert not is_border(buffer, 1, 0)


class TestPixelSampler:
    """Test the buffer-bound sampler."""

    def test_mask_matches_is_border(self):
        rgba = np.zeros((4, 5, 4), dtype=np.uint8)
        rgba[..., 3] = np.arange(20, dtype=np.uint8).reshape(4, 5)
        buffer = PixelBuffer.from_array(rgba)
        sampler = PixelSampler(buffer, threshold=8)

        mask = sampler.border_mask()

        assert mask.shape == (4, 5)
        for y in range(4):
            for x in range(5):
                assert mask[y, x] == sampler.is_border(x, y)
        assert mask.sum() == 11
