"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from mooretrace.types import PixelBuffer


def mask_to_rgba(mask: np.ndarray, alpha: int = 255) -> np.ndarray:
    """Opaque white wherever mask is True, fully transparent elsewhere."""
    mask = np.asarray(mask, dtype=bool)
    rgba = np.zeros(mask.shape + (4,), dtype=np.uint8)
    rgba[mask] = [255, 255, 255, alpha]
    return rgba


def mask_to_buffer(mask: np.ndarray, alpha: int = 255) -> PixelBuffer:
    return PixelBuffer.from_array(mask_to_rgba(mask, alpha))


@pytest.fixture
def make_buffer():
    """Factory turning a bool mask into a PixelBuffer."""
    return mask_to_buffer


@pytest.fixture
def rect_buffer():
    """4x3 opaque rectangle at (1, 1) in a 6x5 buffer."""
    mask = np.zeros((5, 6), dtype=bool)
    mask[1:4, 1:5] = True
    return mask_to_buffer(mask)


@pytest.fixture
def disk_rgba():
    """Opaque disk of radius 30 centred in a 100x80 transparent image."""
    yy, xx = np.mgrid[0:80, 0:100]
    mask = (xx - 50) ** 2 + (yy - 40) ** 2 <= 30 ** 2
    return mask_to_rgba(mask)
