"""Searching for and downloading past segments."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Iterator

import httpx

from .errors import IgLiveError, PtsTooEarlyError, StatusNotFoundError
from .mpd import Representation
from .progress import Spinner
from .segments import download_file, segment_filename
from .state import State

_MAX_OFFSET = 10


class OffsetRange:
    """Candidate time deltas: every seed value, then each seed shifted by
    +1, -1, +2, -2, ... up to ``max_diff``, skipping repeats and values <= 0.
    """

    def __init__(self, max_diff: int, seed: Iterable[int]) -> None:
        self.max_diff = max_diff
        self.seed = list(seed)
        self._values = self._generate()

    def _offsets(self) -> Iterator[int]:
        yield 0
        for offset in range(1, self.max_diff + 1):
            yield offset
            yield -offset

    def _generate(self) -> Iterator[int]:
        visited: set[int] = set()
        for offset in self._offsets():
            for base in self.seed:
                value = base + offset
                if value > 0 and value not in visited:
                    visited.add(value)
                    yield value

    def __iter__(self) -> OffsetRange:
        return self

    def __next__(self) -> int:
        return next(self._values)


async def download_backwards(
    state: State,
    client: httpx.AsyncClient,
    url_base,
    rep: Representation,
    start_frame: int,
    dir,
    pb: Spinner,
) -> None:
    """Download past segments of ``rep`` back to ``start_frame``.

    Only the latest segments are listed in the manifest, so earlier segment
    times are guessed: the most successful time deltas are tried first,
    then deltas close to them.
    """
    media_type = rep.media_type()
    deltas = dict(state.deltas[media_type])
    latest_t = min(state.downloaded_segs[media_type])

    while latest_t > start_frame:
        ranked = sorted(deltas.items(), key=lambda item: item[1], reverse=True)
        seed = [delta for delta, _ in ranked]
        lower_bound = 0

        for x in OffsetRange(_MAX_OFFSET, seed):
            t = latest_t - x
            if t < lower_bound:
                continue

            pb.set_message(f"Downloaded segment {latest_t}, checking {t}")

            url = rep.download_url(url_base, t)
            filename = segment_filename(url, dir)
            try:
                await download_file(state, client, media_type, True, url, filename)
            except StatusNotFoundError:
                continue
            except PtsTooEarlyError:
                pb.println("Info: PTS too early, continuing search")
                lower_bound = t
                continue
            except IgLiveError as exc:
                pb.println(f"Download failed: {exc!r}")
                break
            except (httpx.HTTPError, OSError):
                continue

            latest_t = t
            deltas[x] = deltas.get(x, 0) + 1
            shared = state.deltas[media_type]
            shared[x] = shared.get(x, 0) + 1
            break

    pb.finish("Finished")


async def download_reps_backwards(
    state: State,
    client: httpx.AsyncClient,
    url_base,
    reps: Iterable[tuple[Representation, Spinner]],
    start_frame: int,
    dir,
) -> None:
    """Run :func:`download_backwards` for each (representation, spinner) pair."""
    await asyncio.gather(
        *(
            download_backwards(state, client, url_base, rep, start_frame, dir, pb)
            for rep, pb in reps
        )
    )