"""Downscale, pad and blur an RGBA image into a traceable PixelBuffer.

Downscaling trades accuracy for fewer pixels to scan and walk. Blurring
closes tiny alpha gaps that would otherwise split the outline. The
transparent padding keeps the shape off the buffer edge, which the tracer
requires.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from PIL import Image
from scipy import ndimage

from mooretrace.types import IngestError, PixelBuffer, PreprocessConfig

logger = logging.getLogger(__name__)


@dataclass
class PreparedBuffer:
    """Buffer ready for tracing plus the mapping from source pixels into it."""
    buffer: PixelBuffer
    scale: Tuple[float, float]  # buffer_px / source_px, per axis
    offset: Tuple[int, int]  # padding added after scaling


def downscale(rgba: np.ndarray, scale: float) -> np.ndarray:
    """
    Resize an RGBA image by a factor.

    Args:
        rgba: (H, W, 4) uint8 image
        scale: Factor in (0, 1]; 1 returns the input unchanged

    Returns:
        Resized (h, w, 4) uint8 image, each side at least 1 pixel
    """
    if scale == 1:
        return rgba

    height, width = rgba.shape[:2]
    new_size = (max(1, int(round(width * scale))), max(1, int(round(height * scale))))
    img = Image.fromarray(rgba).resize(new_size, Image.LANCZOS)
    return np.array(img, dtype=np.uint8)


def pad_transparent(rgba: np.ndarray, padding: int) -> np.ndarray:
    """Surround the image with `padding` fully transparent pixels."""
    if padding <= 0:
        return rgba
    return np.pad(
        rgba,
        ((padding, padding), (padding, padding), (0, 0)),
        mode='constant',
        constant_values=0
    )


def blur(rgba: np.ndarray, radius: float) -> np.ndarray:
    """
    Gaussian blur over the spatial axes of every channel.

    Args:
        rgba: (H, W, 4) uint8 image
        radius: Gaussian sigma in pixels; <= 0 returns the input

    Returns:
        Blurred (H, W, 4) uint8 image
    """
    if radius <= 0:
        return rgba

    blurred = ndimage.gaussian_filter(
        rgba.astype(np.float32),
        sigma=(radius, radius, 0),
        mode='constant',
        cval=0.0
    )
    return np.clip(np.round(blurred), 0, 255).astype(np.uint8)


def prepare_buffer(
    rgba: np.ndarray,
    config: Optional[PreprocessConfig] = None
) -> PreparedBuffer:
    """
    Run the downscale -> pad -> blur chain.

    A blurred buffer gets one more transparent ring, so the outer edge is
    always fully transparent whatever padding was configured.

    Args:
        rgba: (H, W, 4) uint8 source image
        config: Preprocessing parameters. Uses defaults if None.

    Returns:
        PreparedBuffer with the pixel buffer and source-to-buffer mapping
    """
    config = config or PreprocessConfig()

    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise IngestError(f"Expected (H, W, 4) RGBA array, got shape {rgba.shape}")

    height, width = rgba.shape[:2]
    scaled = downscale(rgba, config.scale)
    scaled_h, scaled_w = scaled.shape[:2]

    padding = config.effective_padding
    padded = pad_transparent(scaled, padding)
    blurred = blur(padded, config.blur_radius)
    if config.blur_radius > 0:
        # Blur can bleed onto the edge when padding is narrower than its reach
        blurred = pad_transparent(blurred, 1)
        padding += 1

    logger.debug(
        f"Prepared {width}x{height} -> {scaled_w}x{scaled_h} "
        f"(+{padding}px padding, blur {config.blur_radius})"
    )

    return PreparedBuffer(
        buffer=PixelBuffer.from_array(blurred),
        scale=(scaled_w / width, scaled_h / height),
        offset=(padding, padding)
    )
