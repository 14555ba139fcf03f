"""mooretrace: silhouette extraction by Moore-neighbourhood tracing."""
from mooretrace.types import (
    ConfigError,
    Contour,
    Coordinate,
    DegenerateAdjacencyError,
    IngestError,
    InvalidBufferError,
    NoBorderFoundError,
    PixelBuffer,
    PreprocessConfig,
    StepLimitExceededError,
    TraceConfig,
    TraceError,
)
from mooretrace.directions import Direction
from mooretrace.sampler import PixelSampler, is_border
from mooretrace.tracer import MooreTracer, trace
from mooretrace.pipeline import TracePipeline, TraceResult

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Contour",
    "Coordinate",
    "DegenerateAdjacencyError",
    "Direction",
    "IngestError",
    "InvalidBufferError",
    "MooreTracer",
    "NoBorderFoundError",
    "PixelBuffer",
    "PixelSampler",
    "PreprocessConfig",
    "StepLimitExceededError",
    "TraceConfig",
    "TraceError",
    "TracePipeline",
    "TraceResult",
    "is_border",
    "trace",
]
