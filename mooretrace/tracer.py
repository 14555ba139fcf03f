"""Moore-neighbourhood boundary tracing with Jacob's stopping criterion.

The tracer assumes the shape is surrounded by at least one pixel of
transparent padding. A seed pixel on the buffer edge has no background
predecessor to backtrack to and is reported as DegenerateAdjacencyError.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from mooretrace.directions import Direction, heading_between, neighbor, next_clockwise
from mooretrace.sampler import PixelSampler
from mooretrace.types import (
    DEFAULT_ALPHA_THRESHOLD,
    Contour,
    Coordinate,
    DegenerateAdjacencyError,
    NoBorderFoundError,
    PixelBuffer,
    StepLimitExceededError,
    TraceConfig,
)

logger = logging.getLogger(__name__)


@dataclass
class TraceState:
    """Walk state; lives only inside one trace call."""
    start_pixel: Coordinate
    before_start_pixel: Coordinate
    current_pixel: Coordinate
    current_direction: Direction
    steps: int = 0


def find_seed(sampler: PixelSampler) -> Tuple[Coordinate, Coordinate]:
    """
    Raster-scan for the first border pixel.

    Args:
        sampler: Sampler over the buffer to scan

    Returns:
        (start_pixel, before_start_pixel) where before_start_pixel is the
        coordinate scanned just before the seed, or (0, 0) if the seed is
        the very first pixel

    Raises:
        NoBorderFoundError: If no pixel is above the threshold
    """
    hits = np.flatnonzero(sampler.border_mask())
    if hits.size == 0:
        raise NoBorderFoundError(
            f"No pixel with alpha > {sampler.threshold} in "
            f"{sampler.buffer.width}x{sampler.buffer.height} buffer"
        )

    width = sampler.buffer.width
    index = int(hits[0])
    y, x = divmod(index, width)
    start = Coordinate(x, y)

    if index == 0:
        before = Coordinate(0, 0)
    else:
        by, bx = divmod(index - 1, width)
        before = Coordinate(bx, by)

    return start, before


class MooreTracer:
    """Traces the outer boundary of the first shape found in a buffer."""

    def __init__(self, config: Optional[TraceConfig] = None):
        self.config = config or TraceConfig()

    def trace(self, buffer: PixelBuffer) -> Contour:
        """
        Trace the silhouette of the shape in buffer.

        Args:
            buffer: RGBA8 pixels with a transparent border around the shape

        Returns:
            Closed contour starting at the row-major-first border pixel

        Raises:
            InvalidBufferError: If the buffer is malformed
            NoBorderFoundError: If the buffer is fully transparent
            DegenerateAdjacencyError: If the seed has no adjacent predecessor
            StepLimitExceededError: If the walk exceeds config.max_steps
        """
        buffer.validate()
        sampler = PixelSampler(buffer, self.config.alpha_threshold)

        start, before = find_seed(sampler)
        logger.debug(
            f"Seed pixel {tuple(start)} RGBA={buffer.pixel(*start)}, "
            f"predecessor {tuple(before)}"
        )

        start_direction = heading_between(before, start)
        if start_direction is None:
            raise DegenerateAdjacencyError(
                f"Seed {tuple(start)} is not adjacent to predecessor {tuple(before)}; "
                "the shape must not touch the buffer edge"
            )

        state = TraceState(
            start_pixel=start,
            before_start_pixel=before,
            current_pixel=start,
            current_direction=next_clockwise(start_direction),
        )
        points = [start]

        self._walk(state, sampler, points)

        # The walk re-enters the seed before the stop fires; the closing
        # edge stands in for that last point.
        if len(points) > 1 and points[-1] == start:
            points.pop()

        logger.debug(f"Traced {len(points)} points in {state.steps} steps")
        return Contour(points=points, closed=True)

    def _walk(self, state: TraceState, sampler: PixelSampler, points: list) -> None:
        width = sampler.buffer.width
        height = sampler.buffer.height
        max_steps = self.config.max_steps

        while True:
            state.steps += 1
            if max_steps is not None and state.steps > max_steps:
                raise StepLimitExceededError(
                    f"Walk did not close within {max_steps} steps "
                    f"(at {tuple(state.current_pixel)}, {len(points)} points)"
                )

            candidate = neighbor(state.current_pixel, state.current_direction, width, height)
            if candidate is None:
                state.current_direction = next_clockwise(state.current_direction)
                continue

            # Jacob's stopping criterion
            if (candidate == state.before_start_pixel
                    and state.current_pixel == state.start_pixel):
                return

            if sampler.is_border(candidate.x, candidate.y):
                points.append(candidate)
                heading = heading_between(state.current_pixel, candidate)
                if heading is None:
                    raise DegenerateAdjacencyError(
                        f"{tuple(candidate)} is not adjacent to {tuple(state.current_pixel)}"
                    )
                state.current_direction = next_clockwise(heading)
                state.current_pixel = candidate
            else:
                state.current_direction = next_clockwise(state.current_direction)


def trace(
    buffer: PixelBuffer,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
    max_steps: Optional[int] = None
) -> Contour:
    """Trace buffer with a fresh MooreTracer. See MooreTracer.trace."""
    config = TraceConfig(alpha_threshold=alpha_threshold, max_steps=max_steps)
    return MooreTracer(config).trace(buffer)
