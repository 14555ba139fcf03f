"""Eight-connected compass directions for Moore-neighbourhood tracing."""
from enum import Enum
from typing import Optional, Tuple

from mooretrace.types import Coordinate


class Direction(Enum):
    """Compass directions, declared in clockwise order starting at north."""
    N = (0, -1)
    NE = (1, -1)
    E = (1, 0)
    SE = (1, 1)
    S = (0, 1)
    SW = (-1, 1)
    W = (-1, 0)
    NW = (-1, -1)


_CLOCKWISE = list(Direction)
_BY_DELTA = {d.value: d for d in Direction}


def delta(direction: Direction) -> Tuple[int, int]:
    """Return the (dx, dy) step for a direction; y grows downward."""
    return direction.value


def next_clockwise(direction: Direction) -> Direction:
    """N -> NE -> E -> SE -> S -> SW -> W -> NW -> N."""
    i = _CLOCKWISE.index(direction)
    return _CLOCKWISE[(i + 1) % len(_CLOCKWISE)]


def neighbor(
    point: Coordinate,
    direction: Direction,
    width: int,
    height: int
) -> Optional[Coordinate]:
    """
    Step one pixel from point in the given direction.

    Args:
        point: Current pixel
        direction: Direction to step
        width: Buffer width
        height: Buffer height

    Returns:
        The neighbouring coordinate, or None if it falls outside the buffer
    """
    dx, dy = direction.value
    x = point[0] + dx
    y = point[1] + dy
    if x < 0 or y < 0 or x > width - 1 or y > height - 1:
        return None
    return Coordinate(x, y)


def heading_between(from_: Coordinate, to: Coordinate) -> Optional[Direction]:
    """
    Direction of the vector from_ - to.

    This is the direction that points from `to` back at `from_`, i.e. the
    backtrack direction after stepping from `from_` onto `to`. The clockwise
    sweep around `to` starts just after it.

    Returns:
        The direction, or None if the points are not 8-adjacent
    """
    return _BY_DELTA.get((from_[0] - to[0], from_[1] - to[1]))
