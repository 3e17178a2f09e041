"""Command line entry point: render a ``.rt`` scene file to a PPM image."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Union

from .lexing import ParseError
from .parser import parse_scene
from .renderer import FrameBuffer, render
from .scene import WINDOW_HEIGHT, WINDOW_WIDTH


def render_file(
    path: Union[str, "os.PathLike[str]"],
    output: Union[str, "os.PathLike[str]"],
    res: int = 100,
) -> FrameBuffer:
    """Parse ``path``, render it at ``res`` percent and write a PPM to ``output``."""
    scene = parse_scene(path)
    scene.create_viewport()
    framebuffer = render(scene, FrameBuffer(WINDOW_WIDTH, WINDOW_HEIGHT), res)
    Path(output).write_bytes(framebuffer.to_ppm())
    return framebuffer


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinyrt", description="Render a .rt scene file to a PPM image."
    )
    parser.add_argument("scene", help="scene description file (.rt)")
    parser.add_argument(
        "-o", "--output", help="output image (default: scene name with .ppm)"
    )
    parser.add_argument(
        "--res", type=int, default=100, help="resolution in percent (default: 100)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    output = args.output or str(Path(args.scene).with_suffix(".ppm"))
    try:
        render_file(args.scene, output, args.res)
    except ParseError as exc:
        print(f"Error:\n{exc} Exit!", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"Error:\n{exc}", file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())