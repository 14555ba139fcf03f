"""Raster image ingestion into RGBA8 arrays."""
import logging
from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image
from PIL import ImageOps

from mooretrace.types import IngestError

logger = logging.getLogger(__name__)


def ingest(path: Union[str, Path]) -> np.ndarray:
    """
    Ingest a raster image file.

    Args:
        path: Path to image file

    Returns:
        (H, W, 4) uint8 RGBA array

    Raises:
        FileNotFoundError: If file doesn't exist
        IngestError: If file cannot be loaded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise IngestError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            # Apply EXIF orientation transformation to handle rotation
            img = ImageOps.exif_transpose(img)

            if img.mode != 'RGBA':
                logger.debug(f"Converting {path.name} from {img.mode} to RGBA")
                img = img.convert('RGBA')

            rgba = np.array(img, dtype=np.uint8)

    except (IOError, OSError) as e:
        raise IngestError(f"Failed to load image {path}: {e}") from e

    logger.info(f"Loaded {path.name}: {rgba.shape[1]}x{rgba.shape[0]}")
    return rgba


def ingest_from_array(image: np.ndarray) -> np.ndarray:
    """
    Normalize an array to (H, W, 4) uint8 RGBA.

    Args:
        image: (H, W, 4) RGBA, (H, W, 3) RGB (made opaque) or (H, W) alpha
            mask. Floats are taken to be in [0, 1].

    Returns:
        (H, W, 4) uint8 RGBA array

    Raises:
        IngestError: If the shape or dtype is unsupported
    """
    image = np.asarray(image)

    if image.dtype == np.bool_:
        image = image.astype(np.uint8) * 255
    elif np.issubdtype(image.dtype, np.floating):
        image = np.clip(np.round(image * 255.0), 0, 255).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise IngestError(f"Unsupported dtype {image.dtype}")

    if image.ndim == 2:
        # Alpha mask - white shape
        rgba = np.full(image.shape + (4,), 255, dtype=np.uint8)
        rgba[..., 3] = image
        return rgba

    if image.ndim != 3:
        raise IngestError(f"Expected 2D or 3D array, got {image.ndim}D")

    if image.shape[2] == 4:
        return np.ascontiguousarray(image)
    elif image.shape[2] == 3:
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        return np.concatenate([image, alpha], axis=2)
    else:
        raise IngestError(f"Expected 3 or 4 channels, got {image.shape[2]}")
