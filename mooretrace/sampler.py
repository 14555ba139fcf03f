"""Alpha-channel pixel classification."""
import numpy as np

from mooretrace.types import ALPHA_OFFSET, DEFAULT_ALPHA_THRESHOLD, PixelBuffer


def is_border(
    buffer: PixelBuffer,
    x: int,
    y: int,
    threshold: int = DEFAULT_ALPHA_THRESHOLD
) -> bool:
    """
    Test whether a pixel belongs to the opaque shape.

    Pixels outside the buffer count as transparent. Only alpha is
    considered; RGB does not affect the classification.

    Args:
        buffer: Pixel buffer
        x: Column
        y: Row
        threshold: Alpha must be strictly greater than this

    Returns:
        True if the pixel's alpha exceeds threshold
    """
    if x < 0 or y < 0 or x > buffer.width - 1 or y > buffer.height - 1:
        return False

    alpha_index = buffer.offset(x, y) + ALPHA_OFFSET
    if alpha_index >= len(buffer.data):
        return False

    return buffer.data[alpha_index] > threshold


class PixelSampler:
    """Border classification bound to one buffer and threshold."""

    def __init__(self, buffer: PixelBuffer, threshold: int = DEFAULT_ALPHA_THRESHOLD):
        self.buffer = buffer
        self.threshold = threshold

    def is_border(self, x: int, y: int) -> bool:
        return is_border(self.buffer, x, y, self.threshold)

    def border_mask(self) -> np.ndarray:
        """(H, W) bool array, True wherever is_border would be."""
        return self.buffer.alpha_plane() > self.threshold
