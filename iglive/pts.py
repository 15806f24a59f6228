"""Presentation timestamp probing with ffprobe."""

from __future__ import annotations

import asyncio

_FFPROBE_ARGS = (
    "-v",
    "0",
    "-show_entries",
    "stream=start_pts,duration_ts",
    "-of",
    "compact=p=0:nk=1",
    "-",
)


def _to_uint(text: str) -> int:
    value = int(text.strip())
    if value < 0:
        raise ValueError(f"negative timestamp: {text!r}")
    return value


def parse_pts_output(text: str) -> tuple[int, int]:
    """Parse ffprobe's ``start|duration`` output into a pair of integers."""
    head, sep, tail = text.partition("|")
    if not sep:
        raise ValueError(f"unexpected ffprobe output: {text!r}")
    return _to_uint(head), _to_uint(tail)


async def get_pts(data: bytes) -> tuple[int, int]:
    """Return the start PTS and duration of the media in ``data``."""
    process = await asyncio.create_subprocess_exec(
        "ffprobe",
        *_FFPROBE_ARGS,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
    )
    stdout, _ = await process.communicate(bytes(data))
    if process.returncode != 0:
        raise RuntimeError("ffprobe failed")
    return parse_pts_output(stdout.decode("utf-8"))