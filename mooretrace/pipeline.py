"""Pipeline orchestrator: image -> prepared buffer -> contour -> source coordinates."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from mooretrace.preprocess import prepare_buffer
from mooretrace.raster_ingest import ingest, ingest_from_array
from mooretrace.tracer import MooreTracer
from mooretrace.types import Contour, PreprocessConfig, TraceConfig

logger = logging.getLogger(__name__)


@dataclass
class TraceResult:
    """Outline of a traced image."""
    contour: Contour  # In prepared-buffer pixels
    points: List[Tuple[float, float]]  # In source image pixels
    width: int
    height: int
    buffer_width: int
    buffer_height: int


class TracePipeline:
    """Traces the silhouette of an image file or array."""

    def __init__(
        self,
        trace_config: Optional[TraceConfig] = None,
        preprocess_config: Optional[PreprocessConfig] = None
    ):
        """Initialize pipeline with configuration.

        Args:
            trace_config: Tracer settings. Uses defaults if None.
            preprocess_config: Downscale/blur settings. Uses defaults if None.
        """
        self.trace_config = trace_config or TraceConfig()
        self.preprocess_config = preprocess_config or PreprocessConfig()
        self.tracer = MooreTracer(self.trace_config)

    def process(self, image_path: Union[str, Path]) -> TraceResult:
        """
        Trace an image file.

        Raises:
            FileNotFoundError: If input file doesn't exist
            TraceError: If loading or tracing fails
        """
        rgba = ingest(image_path)
        return self._run(rgba)

    def process_array(self, image: np.ndarray) -> TraceResult:
        """Trace an in-memory image (see ingest_from_array for accepted shapes)."""
        return self._run(ingest_from_array(image))

    def _run(self, rgba: np.ndarray) -> TraceResult:
        height, width = rgba.shape[:2]

        prepared = prepare_buffer(rgba, self.preprocess_config)
        buffer = prepared.buffer
        logger.info(f"Tracing {buffer.width}x{buffer.height} buffer")

        contour = self.tracer.trace(buffer)
        points = contour.scaled(prepared.scale, prepared.offset)
        logger.info(f"Contour has {len(contour)} points")

        return TraceResult(
            contour=contour,
            points=points,
            width=width,
            height=height,
            buffer_width=buffer.width,
            buffer_height=buffer.height
        )
