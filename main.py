#!/usr/bin/env python3
"""
PathForge - A Python Monte-Carlo Path Tracer

Main entry point for rendering the demo scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

from pathforge import ppm
from pathforge.renderer import Renderer, RenderSettings
from pathforge.scenes import SCENES

logger = logging.getLogger("pathforge")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='PathForge - A Python Monte-Carlo Path Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene cornell --output cornell.ppm
  python main.py --scene random --width 200 --samples 20 --seed 7 --output - > random.ppm
  python main.py --scene earth --texture earthmap.jpg --output earth.png
        '''
    )

    parser.add_argument('--scene', type=str, default='cornell', choices=sorted(SCENES),
                        help='Scene to render (default: cornell)')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: per scene)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: per scene)')
    parser.add_argument('--depth', type=int, default=50, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible render')
    parser.add_argument('--texture', type=str, default='earthmap.jpg',
                        help='Image used by the earth scene (default: earthmap.jpg)')
    parser.add_argument('--output', type=str, default='output/render.ppm',
                        help="Output filename, or '-' for PPM on stdout")
    parser.add_argument('--verbose', action='store_true', help='Log per-tile progress')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    rng = np.random.default_rng(args.seed)
    if args.scene == 'earth':
        preset = SCENES[args.scene](rng, args.texture)
    else:
        preset = SCENES[args.scene](rng)

    width = args.width if args.width else preset.width
    settings = RenderSettings.from_aspect(
        width,
        preset.aspect_ratio,
        samples_per_pixel=args.samples if args.samples else preset.samples_per_pixel,
        max_depth=args.depth,
        num_threads=args.threads,
        background=preset.background,
        seed=args.seed
    )
    camera = preset.make_camera(settings.width / settings.height)
    logger.info("Scene %s: %d objects", args.scene, len(preset.world))

    renderer = Renderer(settings)
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct >= last_progress[0] + 10:
            last_progress[0] = pct
            logger.info("Rendering: %d%%", pct)

    renderer.set_progress_callback(progress_callback)

    start_time = time.time()
    image = renderer.render(preset.world, camera)
    elapsed = time.time() - start_time
    logger.info("Render completed in %.2f seconds", elapsed)

    if args.output == '-':
        ppm.write_ppm(renderer.to_ldr(image), sys.stdout)
    else:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        renderer.save_image(image, output_path)

    return 0


if __name__ == '__main__':
    sys.exit(main())
