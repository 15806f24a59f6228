"""Downloading an Instagram live stream: initialization, current, live and past segments."""

from __future__ import annotations

import asyncio
import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from .backwards import download_reps_backwards
from .forwards import download_forwards
from .initialization import download_reps_init
from .mpd import Representation, fetch_mpd
from .progress import Spinner
from .segments import download_rep
from .state import State

_TIMEOUT_SECONDS = 5.0


class DownloadSegments(enum.Flag):
    """Which kinds of segments to download."""

    LIVE = 0b01
    PAST = 0b10


@dataclass
class DownloadConfig:
    """Options for :func:`download`.

    ``dir`` is where the downloaded segments go; when ``None`` a directory
    named after the live stream ID is used.
    """

    dir: Path | None = None
    segments: DownloadSegments = field(
        default=DownloadSegments.LIVE | DownloadSegments.PAST
    )


async def download_reps(
    state: State,
    client: httpx.AsyncClient,
    url_base,
    reps: Iterable[Representation],
    dir,
    pb: Spinner | None = None,
) -> None:
    """Download the segments currently listed for all ``reps`` concurrently."""
    if pb is not None:
        pb.set_message("Downloading")

    await asyncio.gather(
        *(download_rep(state, client, rep, url_base, dir) for rep in reps)
    )

    if pb is not None:
        pb.finish("Finished")


async def download(mpd_url, config: DownloadConfig | None = None) -> Path:
    """Download a live stream from its ``.mpd`` manifest URL.

    Returns the output directory; segments are placed in its ``segments``
    subdirectory.
    """
    if config is None:
        config = DownloadConfig()
    url_base = str(mpd_url)

    async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS) as client:
        manifest = await fetch_mpd(client, url_base)
        video_rep, audio_rep = manifest.best_media()

        base_dir = Path(config.dir) if config.dir is not None else Path(manifest.id)
        segments_dir = base_dir / "segments"
        segments_dir.mkdir(parents=True, exist_ok=True)

        state = State()

        await download_reps_init(
            state, client, url_base, [video_rep, audio_rep], Spinner("      Init")
        )
        await download_reps(
            state,
            client,
            url_base,
            [video_rep, audio_rep],
            segments_dir,
            Spinner("   Current"),
        )

        jobs = []
        if DownloadSegments.LIVE in config.segments:
            jobs.append(
                download_forwards(
                    state, client, url_base, segments_dir, Spinner("      Live")
                )
            )
        if DownloadSegments.PAST in config.segments:
            jobs.append(
                download_reps_backwards(
                    state,
                    client,
                    url_base,
                    [
                        (video_rep, Spinner("Past video")),
                        (audio_rep, Spinner("Past audio")),
                    ],
                    manifest.start_frame,
                    segments_dir,
                )
            )
        await asyncio.gather(*jobs)

    return base_dir