"""Manual demo: ``python -m pfp`` lists flags, optionally renders an effect."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pfp.adapters.api import create_pfp_client
from pfp.core.config import settings
from pfp.core.errors import PfPError
from pfp.core.logging import configure_logging

logger = logging.getLogger("pfp.demo")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m pfp", description=__doc__)
    parser.add_argument("--image", type=Path, help="Local image to decorate")
    parser.add_argument("--flag", default="pride", help="Flag identifier")
    parser.add_argument("--type", dest="effect_type", default="circle")
    parser.add_argument("--style", dest="effect_style", default="solid")
    parser.add_argument("--format", dest="output_format", default="png")
    parser.add_argument("--alpha", type=float, default=None)
    parser.add_argument("--animated", action="store_true", help="Render an animated effect")
    parser.add_argument("--output", type=Path, default=Path("pfp-output"))
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> None:
    async with create_pfp_client() as client:
        descriptors = await client.get_flag_descriptors()
        for key, descriptor in sorted(descriptors.items()):
            print(f"{key:<12} alpha={descriptor.default_alpha:<5} {descriptor.tooltip}")

        if args.image is None:
            return

        if args.animated:
            data = await client.create_animated_effect(
                args.image, args.flag, args.effect_type, alpha=args.alpha
            )
            suffix = ".gif"
        else:
            data = await client.create_static_effect(
                args.image,
                args.flag,
                args.effect_type,
                args.effect_style,
                args.output_format,
                alpha=args.alpha,
            )
            suffix = f".{args.output_format}"

        output = args.output.with_suffix(suffix)
        output.write_bytes(data)
        logger.info("demo.written", extra={"path": str(output), "size": len(data)})


def main(argv: list[str] | None = None) -> int:
    configure_logging(settings.log)
    args = _parse_args(argv)
    try:
        asyncio.run(_run(args))
    except PfPError as exc:
        logger.error("demo.failed", extra={"error_code": exc.code, "error_message": exc.message})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
