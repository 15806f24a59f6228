"""Merging downloaded video and audio segments into one file."""

from __future__ import annotations

import asyncio
import os
import re
import sys
from collections.abc import Iterable
from pathlib import Path

from .errors import FfmpegFailError
from .pts import get_pts

_CHUNKS = re.compile(r"(\d+)")


def natural_key(path) -> tuple:
    """Sort key ordering embedded numbers by value ("seg-9" before "seg-10")."""
    key = []
    for chunk in _CHUNKS.split(str(path)):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append(("0", int(chunk)))
        else:
            key.append((chunk, 0))
    return tuple(key)


async def merge_segments(segments: Iterable, path) -> None:
    """Concatenate ``segments`` into ``path``, warning about gaps in their PTS."""
    expected: int | None = None
    with open(path, "wb") as output:
        for segment in segments:
            data = Path(segment).read_bytes()
            start, end = await get_pts(data)
            if expected is not None and expected != start:
                print(f"WARNING: Missing segment at PTS={expected}", file=sys.stderr)
            expected = end
            output.write(data)


async def merge(dir) -> Path:
    """Merge the segments downloaded into ``dir`` into ``dir/<name>.mp4``.

    ``ffmpeg`` and ``ffprobe`` must be on ``PATH``. Returns the output path.
    """
    directory = Path(dir)
    print("Merging video file")

    video_segments: list[Path] = []
    audio_segments: list[Path] = []
    with os.scandir(directory / "segments") as entries:
        for entry in entries:
            if entry.is_dir():
                continue
            if entry.name.endswith(".m4v"):
                video_segments.append(Path(entry.path))
            elif entry.name.endswith(".m4a"):
                audio_segments.append(Path(entry.path))

    video_segments.sort(key=natural_key)
    audio_segments.sort(key=natural_key)

    base_name = directory.name or directory.resolve().name
    video_concat = directory / (base_name + "video.tmp")
    audio_concat = directory / (base_name + "audio.tmp")
    output_path = directory / (base_name + ".mp4")

    try:
        await asyncio.gather(
            merge_segments(video_segments, video_concat),
            merge_segments(audio_segments, audio_concat),
        )
        process = await asyncio.create_subprocess_exec(
            "ffmpeg",
            "-i",
            str(video_concat),
            "-i",
            str(audio_concat),
            "-c",
            "copy",
            "-movflags",
            "+faststart",
            "-y",
            str(output_path),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        await process.communicate()
    finally:
        video_concat.unlink(missing_ok=True)
        audio_concat.unlink(missing_ok=True)

    if process.returncode != 0:
        raise FfmpegFailError()
    print(f"Merged video written to {output_path}")
    return output_path