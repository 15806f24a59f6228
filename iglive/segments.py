"""Downloading individual media segments."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

import httpx

from .errors import InvalidUrlError, PtsTooEarlyError, StatusError, StatusNotFoundError
from .mpd import MediaType, Representation
from .pts import get_pts
from .state import State


def segment_filename(url, dir) -> Path:
    """Path in ``dir`` named after the last path segment of ``url``."""
    parts = urlsplit(str(url))
    if not parts.scheme or (not parts.netloc and not parts.path.startswith("/")):
        raise InvalidUrlError()
    name = parts.path.rsplit("/", 1)[-1]
    if not name:
        raise InvalidUrlError()
    return Path(dir) / name


async def download_file(
    state: State,
    client: httpx.AsyncClient,
    media_type: MediaType,
    check_pts: bool,
    url,
    path,
) -> None:
    """Download one segment, prefix it with its init data and save it.

    With ``check_pts`` the segment must end where the earliest known segment
    starts, otherwise PtsTooEarlyError is raised (after the file is written).
    """
    response = await client.get(str(url))
    if response.status_code == 404:
        raise StatusNotFoundError()
    if not response.is_success:
        raise StatusError(response.status_code, str(url))

    buffer = state.downloaded_init[media_type] + response.content
    Path(path).write_bytes(buffer)

    start, end = await get_pts(buffer)
    if check_pts:
        target = state.back_pts[media_type]
        if abs(target - end) > 1:
            raise PtsTooEarlyError()

    current = state.back_pts.get(media_type)
    state.back_pts[media_type] = start if current is None else min(current, start)


async def download_rep(
    state: State,
    client: httpx.AsyncClient,
    rep: Representation,
    url_base,
    dir,
) -> None:
    """Download every segment of ``rep``'s timeline not yet downloaded."""
    media_type = rep.media_type()
    for segment in rep.segment_template.segment_timeline.segments:
        t = segment.t
        if t in state.downloaded_segs[media_type]:
            continue
        url = rep.download_url(url_base, t)
        await download_file(
            state, client, media_type, False, url, segment_filename(url, dir)
        )
        state.downloaded_segs[media_type].add(t)