"""Command line interface for mooretrace."""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from mooretrace.pipeline import TracePipeline
from mooretrace.svg_export import generate_svg, points_to_json, save_document
from mooretrace.types import PreprocessConfig, TraceConfig, TraceError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='mooretrace',
        description='Trace the outline of an opaque shape on a transparent image',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mooretrace sprite.png
  mooretrace sprite.png -o outline.json --format json
  mooretrace sprite.png --scale 1 --blur 0 --threshold 0
        """,
    )

    parser.add_argument(
        'input',
        type=str,
        help='Input image path'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=None,
        help='Output path (default: input name with .svg or .json extension)'
    )

    parser.add_argument(
        '--format',
        choices=['svg', 'json'],
        default='svg',
        help='Output format (default: svg)'
    )

    parser.add_argument(
        '--scale',
        type=float,
        default=0.1,
        help='Downscale factor applied before tracing (default: 0.1)'
    )

    parser.add_argument(
        '--blur',
        type=float,
        default=2.0,
        help='Gaussian blur sigma in downscaled pixels, 0 disables (default: 2.0)'
    )

    parser.add_argument(
        '--padding',
        type=int,
        default=None,
        help='Transparent border in pixels (default: derived from --blur)'
    )

    parser.add_argument(
        '--threshold',
        type=int,
        default=8,
        help='Alpha values above this count as shape (default: 8)'
    )

    parser.add_argument(
        '--max-steps',
        type=int,
        default=None,
        help='Abort the boundary walk after this many steps'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s'
    )

    input_path = Path(parsed.input)
    if parsed.output:
        output_path = Path(parsed.output)
    else:
        output_path = input_path.with_suffix(f'.{parsed.format}')

    try:
        trace_config = TraceConfig(
            alpha_threshold=parsed.threshold,
            max_steps=parsed.max_steps
        )
        preprocess_config = PreprocessConfig(
            scale=parsed.scale,
            blur_radius=parsed.blur,
            padding=parsed.padding
        )

        print(f"Processing: {input_path}")
        result = TracePipeline(trace_config, preprocess_config).process(input_path)

        if parsed.format == 'json':
            document = points_to_json(result.points)
        else:
            document = generate_svg(result.points, result.width, result.height)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_document(document, output_path)

        print(f"  Points: {len(result.points)}")
        print(f"  Output saved: {output_path}")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except TraceError as e:
        print(f"Error tracing image: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
