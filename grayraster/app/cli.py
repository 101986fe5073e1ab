from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..errors import ImageError
from ..instrumentation import init as init_instrumentation
from .pipeline import ImagePipeline, ToolSettings

COMMAND_HELP = """commands (run left to right over a stack of images):
  open PATH            load an image (.pgm, or any Pillow format) and push it
  new W,H,MAXVAL       push a new black image
  save PATH            save the top image
  info                 print size, maxval and min/max levels of the top image
  neg | thr T | bri F  point-wise transforms of the top image
  blur DX,DY           mean filter of the top image
  rotate | mirror      replace the top image by its rotated/mirrored copy
  crop X,Y,W,H         replace the top image by a rectangle of it
  paste X,Y            pop the top image and paste it into the next one
  blend X,Y,ALPHA      pop the top image and blend it into the next one
  locate               pop the top image and search for it in the next one
  tic | toc            reset / print pixel access counters and time

options such as -v may appear anywhere among the commands
"""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="grayraster",
        description="grayraster: 8-bit grayscale image processing.",
        epilog=COMMAND_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("commands", nargs="*", help="Commands to run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_intermixed_args(argv)


def configure_logging(settings: ToolSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(ToolSettings.from_env(args.verbose))
    if not args.commands:
        print("Missing commands. Use --help for usage.", file=sys.stderr)
        return 1
    init_instrumentation()
    pipeline = ImagePipeline(out=sys.stdout)
    try:
        pipeline.run(args.commands)
    except ImageError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    finally:
        pipeline.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
