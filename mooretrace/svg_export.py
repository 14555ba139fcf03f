"""SVG and JSON export for traced outlines."""
import json
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

Point2D = Tuple[float, float]


def format_number(x: float, precision: int) -> str:
    """
    Format number with given precision.

    Args:
        x: Number to format
        precision: Decimal places

    Returns:
        Formatted string
    """
    formatted = f"{x:.{precision}f}"
    # Remove trailing zeros and decimal point if not needed
    if '.' in formatted:
        formatted = formatted.rstrip('0').rstrip('.')
    if formatted == '-0':
        formatted = '0'
    return formatted


def points_to_path_data(
    points: Sequence[Point2D],
    precision: int = 2,
    closed: bool = True
) -> str:
    """
    Convert an outline to SVG path data.

    Uses an absolute M for the first point, L for the rest, and Z to close.

    Args:
        points: Ordered (x, y) points
        precision: Decimal precision
        closed: Append Z

    Returns:
        Path data string, empty for no points
    """
    if len(points) == 0:
        return ""

    fmt = lambda v: format_number(v, precision)

    x0, y0 = points[0]
    cmds = [f"M{fmt(x0)},{fmt(y0)}"]
    for x, y in points[1:]:
        cmds.append(f"L{fmt(x)},{fmt(y)}")
    if closed:
        cmds.append("Z")

    return " ".join(cmds)


def generate_svg(
    points: Sequence[Point2D],
    width: int,
    height: int,
    fill: str = "#000",
    stroke: Optional[str] = None,
    precision: int = 2
) -> str:
    """
    Generate a standalone SVG document with the outline as one path.

    Args:
        points: Ordered (x, y) points in image pixels
        width: Image width
        height: Image height
        fill: Fill colour
        stroke: Optional stroke colour
        precision: Decimal precision

    Returns:
        SVG string
    """
    attrs = [f'd="{points_to_path_data(points, precision)}"', f'fill="{fill}"']
    if stroke:
        attrs.append(f'stroke="{stroke}"')

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width} {height}" width="{width}" height="{height}">',
        f'<path {" ".join(attrs)}/>',
        '</svg>',
    ]
    return "\n".join(lines)


def points_to_json(points: Iterable[Point2D], closed: bool = True) -> str:
    """Serialize points as {"closed": ..., "points": [[x, y], ...]}."""
    return json.dumps({
        "closed": closed,
        "points": [[float(x), float(y)] for x, y in points],
    })


def save_document(document: str, path: Union[str, Path]) -> None:
    """Write a text document (SVG or JSON) to path."""
    Path(path).write_text(document, encoding="utf-8")
