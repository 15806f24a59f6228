"""Following a live stream as new segments appear."""

from __future__ import annotations

import asyncio

import httpx

from .mpd import MediaType, Representation, fetch_mpd
from .progress import Spinner
from .segments import download_rep
from .state import State

_POLL_INTERVAL = 1.0


def check_overlap(rep: Representation, latest_t: int, pb: Spinner) -> None:
    """Warn when the previously newest segment is no longer in the timeline."""
    timeline = rep.segment_template.segment_timeline.segments
    if not any(segment.t == latest_t for segment in timeline):
        pb.println(f"Possible missed live segment t={latest_t}")


async def download_forwards(
    state: State,
    client: httpx.AsyncClient,
    url_base,
    dir,
    pb: Spinner,
) -> None:
    """Poll the manifest and download new segments until the stream ends."""
    loop = asyncio.get_running_loop()
    next_tick = loop.time()

    while True:
        delay = next_tick - loop.time()
        if delay > 0:
            await asyncio.sleep(delay)
        next_tick = max(next_tick, loop.time()) + _POLL_INTERVAL

        manifest = await fetch_mpd(client, url_base)
        video_rep, audio_rep = manifest.best_media()

        latest_video_t = max(state.downloaded_segs[MediaType.VIDEO])
        latest_audio_t = max(state.downloaded_segs[MediaType.AUDIO])

        await asyncio.gather(
            *(
                download_rep(state, client, rep, url_base, dir)
                for rep in (video_rep, audio_rep)
            )
        )

        check_overlap(video_rep, latest_video_t, pb)
        check_overlap(audio_rep, latest_audio_t, pb)

        pb.set_message(
            f"Downloaded video segment {latest_video_t}, "
            f"audio segment {latest_audio_t}"
        )

        if manifest.finished:
            break

    pb.finish("Finished")