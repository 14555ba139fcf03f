"""Core types for silhouette tracing."""
import math
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Tuple
import numpy as np


BYTES_PER_PIXEL = 4
ALPHA_OFFSET = 3
DEFAULT_ALPHA_THRESHOLD = 8


class TraceError(Exception):
    """Base exception for tracing errors."""
    pass


class NoBorderFoundError(TraceError):
    """No pixel in the buffer has alpha above the threshold."""
    pass


class InvalidBufferError(TraceError):
    """Buffer dimensions, stride or length are inconsistent."""
    pass


class ConfigError(TraceError):
    """A configuration value is out of range."""
    pass


class DegenerateAdjacencyError(TraceError):
    """A heading was requested between two points that are not 8-adjacent."""
    pass


class StepLimitExceededError(TraceError):
    """The boundary walk ran past its configured step limit."""
    pass


class IngestError(TraceError):
    """An image source could not be turned into RGBA pixels."""
    pass


class Coordinate(NamedTuple):
    """Integer pixel position: x is the column, y the row."""
    x: int
    y: int


@dataclass(frozen=True)
class PixelBuffer:
    """Read-only RGBA8 pixels in row-major order."""
    width: int
    height: int
    stride: int  # Bytes per row
    data: bytes

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelBuffer":
        """
        Wrap an (H, W, 4) uint8 array.

        Args:
            rgba: RGBA image array

        Returns:
            Tightly packed PixelBuffer

        Raises:
            InvalidBufferError: If the array is not (H, W, 4)
        """
        if rgba.ndim != 3 or rgba.shape[2] != BYTES_PER_PIXEL:
            raise InvalidBufferError(f"Expected (H, W, 4) array, got shape {rgba.shape}")

        rgba = np.ascontiguousarray(rgba, dtype=np.uint8)
        height, width = rgba.shape[:2]
        return cls(
            width=width,
            height=height,
            stride=width * BYTES_PER_PIXEL,
            data=rgba.tobytes()
        )

    def validate(self) -> None:
        """Raise InvalidBufferError unless every pixel lies within the data."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidBufferError(
                f"Buffer must be non-empty, got {self.width}x{self.height}"
            )
        if self.stride < self.width * BYTES_PER_PIXEL:
            raise InvalidBufferError(
                f"Stride {self.stride} too small for width {self.width}"
            )
        required = self.stride * (self.height - 1) + self.width * BYTES_PER_PIXEL
        if len(self.data) < required:
            raise InvalidBufferError(
                f"Buffer holds {len(self.data)} bytes, "
                f"{self.width}x{self.height} with stride {self.stride} needs {required}"
            )

    def offset(self, x: int, y: int) -> int:
        return y * self.stride + x * BYTES_PER_PIXEL

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the (r, g, b, a) bytes of an in-bounds pixel."""
        i = self.offset(x, y)
        return tuple(self.data[i:i + BYTES_PER_PIXEL])

    def _rows(self) -> np.ndarray:
        """Data as (H, stride) bytes; the last row may be short of a full stride."""
        raw = np.frombuffer(self.data, dtype=np.uint8)
        total = self.stride * self.height
        if raw.size < total:
            raw = np.concatenate([raw, np.zeros(total - raw.size, dtype=np.uint8)])
        return raw[:total].reshape(self.height, self.stride)

    def alpha_plane(self) -> np.ndarray:
        """Alpha channel as an (H, W) uint8 array."""
        end = self.width * BYTES_PER_PIXEL
        return self._rows()[:, ALPHA_OFFSET:end:BYTES_PER_PIXEL]

    def to_array(self) -> np.ndarray:
        """Copy pixels out as an (H, W, 4) uint8 array."""
        end = self.width * BYTES_PER_PIXEL
        return self._rows()[:, :end].reshape(
            self.height, self.width, BYTES_PER_PIXEL
        ).copy()


@dataclass
class Contour:
    """Closed outline; the last point joins back to the first implicitly."""
    points: List[Coordinate]
    closed: bool = True

    def __post_init__(self):
        if not self.points:
            raise ValueError("Contour needs at least one point")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    @property
    def start(self) -> Coordinate:
        return self.points[0]

    def as_array(self) -> np.ndarray:
        """Points as an (N, 2) int array of (x, y)."""
        return np.array(self.points, dtype=np.int64).reshape(-1, 2)

    def scaled(
        self,
        scale: Tuple[float, float],
        offset: Tuple[float, float] = (0.0, 0.0)
    ) -> List[Tuple[float, float]]:
        """
        Map points into another coordinate space.

        Each point becomes ((x - offset_x) / scale_x, (y - offset_y) / scale_y),
        which undoes a pad-then-downscale applied before tracing.

        Args:
            scale: (scale_x, scale_y) applied to the source image
            offset: (x, y) padding added after scaling

        Returns:
            List of float (x, y) points
        """
        sx, sy = scale
        ox, oy = offset
        return [((p.x - ox) / sx, (p.y - oy) / sy) for p in self.points]


@dataclass
class TraceConfig:
    """Configuration for the boundary tracer."""
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD
    max_steps: Optional[int] = None  # None = unbounded

    def __post_init__(self):
        if not 0 <= self.alpha_threshold <= 255:
            raise ConfigError(
                f"alpha_threshold must be in 0..255, got {self.alpha_threshold}"
            )
        if self.max_steps is not None and self.max_steps <= 0:
            raise ConfigError(f"max_steps must be positive, got {self.max_steps}")


@dataclass
class PreprocessConfig:
    """Configuration for the downscale / pad / blur stage."""
    scale: float = 0.1
    blur_radius: float = 2.0
    padding: Optional[int] = None  # None = derived from blur_radius

    def __post_init__(self):
        if not 0 < self.scale <= 1:
            raise ConfigError(f"scale must be in (0, 1], got {self.scale}")
        if self.blur_radius < 0:
            raise ConfigError(f"blur_radius must be >= 0, got {self.blur_radius}")
        if self.padding is not None and self.padding < 1:
            raise ConfigError(f"padding must be >= 1, got {self.padding}")

    @property
    def effective_padding(self) -> int:
        """Transparent border wide enough that the blur never reaches the edge."""
        if self.padding is not None:
            return self.padding
        return int(math.ceil(3 * self.blur_radius)) + 1
