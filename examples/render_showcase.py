#!/usr/bin/env python3
"""Render the showcase scene.

This script demonstrates end-to-end rendering with the Whitted ray tracer.
It builds the showcase scene (or loads a scene description from JSON),
renders it and saves the result as a PNG.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 800)
    --height HEIGHT     Image height in pixels (default: 600)
    --depth DEPTH       Maximum reflection depth (default: 3)
    --output OUTPUT     Output file path (default: showcase.png)
    --scene SCENE       JSON scene description (default: built-in showcase)
    --alpha             Save RGBA instead of RGB
    --cpu               Force the CPU backend
    --quiet             Only log warnings and errors

Example:
    python -m examples.render_showcase --width 400 --height 300 --depth 5
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import taichi as ti

logger = logging.getLogger("render_showcase")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Maximum reflection depth (default: 3)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.png",
        help="Output file path (default: showcase.png)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (default: built-in showcase)",
    )
    parser.add_argument(
        "--alpha",
        action="store_true",
        help="Save RGBA instead of RGB",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser.parse_args()


def render_showcase(
    width: int = 800,
    height: int = 600,
    max_depth: int = 3,
    output_path: str = "showcase.png",
    scene_path: str | None = None,
    alpha: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Maximum reflection depth.
        output_path: Output file path (PNG).
        scene_path: Optional JSON scene description. Its width and height
            are overridden by the arguments.
        alpha: If True, save RGBA.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raytracer.core.config import RenderConfig
    from raytracer.core.renderer import Renderer
    from raytracer.preview.export import save_png
    from raytracer.scene.manager import SceneManager
    from raytracer.scene.showcase import create_showcase_manager

    if scene_path is None:
        manager = create_showcase_manager(width=width, height=height)
    else:
        manager = SceneManager()
        manager.from_dict(json.loads(Path(scene_path).read_text()))
        manager.width = width
        manager.height = height

    logger.info("Scene: %r", manager)
    renderer = Renderer(manager.build(), RenderConfig(max_depth=max_depth))
    image = renderer.render()

    return save_png(image, output_path, alpha=alpha)


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    ti.init(arch=ti.cpu if args.cpu else ti.gpu)

    try:
        output_file = render_showcase(
            width=args.width,
            height=args.height,
            max_depth=args.depth,
            output_path=args.output,
            scene_path=args.scene,
            alpha=args.alpha,
        )
    except (OSError, ValueError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Saved to: %s", output_file.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
