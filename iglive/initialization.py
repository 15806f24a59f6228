"""Downloading the initialization data of representations."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from urllib.parse import urljoin

import httpx

from .errors import StatusError, StatusNotFoundError
from .mpd import Representation
from .progress import Spinner
from .state import State


async def download_init(
    state: State,
    client: httpx.AsyncClient,
    url_base,
    rep: Representation,
) -> None:
    """Fetch ``rep``'s initialization data unless it is already known."""
    media_type = rep.media_type()
    if media_type in state.downloaded_init:
        return

    url = urljoin(str(url_base), rep.segment_template.initialization_path)
    response = await client.get(url)
    if response.status_code == 404:
        raise StatusNotFoundError()
    if not response.is_success:
        raise StatusError(response.status_code, url)

    state.downloaded_init[media_type] = response.content


async def download_reps_init(
    state: State,
    client: httpx.AsyncClient,
    url_base,
    reps: Iterable[Representation],
    pb: Spinner | None = None,
) -> None:
    """Fetch the initialization data of all ``reps`` concurrently."""
    if pb is not None:
        pb.set_message("Downloading")

    await asyncio.gather(
        *(download_init(state, client, url_base, rep) for rep in reps)
    )

    if pb is not None:
        pb.finish("Finished")