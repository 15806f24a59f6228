"""Command line interface: download and merge Instagram live streams."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .download import DownloadConfig, DownloadSegments, download
from .merge import merge


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iglive",
        description="Download Instagram live streams, including past segments",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    dl = commands.add_parser("download", help="Download a live stream")
    dl.add_argument("mpd_url", help="URL of .mpd file")
    dl.add_argument("-o", "--output", type=Path, default=None, help="Output directory")
    dl.add_argument(
        "-n",
        "--no-merge",
        action="store_true",
        help="Don't merge into one video file after download",
    )
    dl.add_argument(
        "-l",
        "--live-only",
        action="store_true",
        help="Don't download past segments",
    )

    mg = commands.add_parser(
        "merge", help="Merge an already downloaded live stream into one file"
    )
    mg.add_argument("directory", type=Path, help="Directory to merge")
    return parser


async def run(args: argparse.Namespace) -> None:
    """Carry out the parsed command."""
    if args.command == "download":
        if args.live_only:
            segments = DownloadSegments.LIVE
        else:
            segments = DownloadSegments.LIVE | DownloadSegments.PAST
        config = DownloadConfig(dir=args.output, segments=segments)
        output_dir = await download(args.mpd_url, config)
        if not args.no_merge:
            await merge(output_dir)
    else:
        await merge(args.directory)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(run(args))
    except Exception as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0