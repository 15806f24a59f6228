"""Shared download state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .mpd import MediaType

_MEDIA_TYPES = (MediaType.VIDEO, MediaType.AUDIO)


def default_deltas() -> dict[int, int]:
    """Initial weights of the time deltas tried when searching past segments."""
    deltas: dict[int, int] = {}
    for x in range(10, 41):
        deltas[x * 100] = 1
        deltas[x * 100 + 33] = 1
        deltas[x * 100 + 67] = 1
    deltas[2000] = 10
    deltas[100] = 5
    return deltas


@dataclass
class State:
    """What has been downloaded so far, per media type."""

    downloaded_init: dict[MediaType, bytes] = field(default_factory=dict)
    downloaded_segs: dict[MediaType, set[int]] = field(
        default_factory=lambda: {t: set() for t in _MEDIA_TYPES}
    )
    deltas: dict[MediaType, dict[int, int]] = field(
        default_factory=lambda: {t: default_deltas() for t in _MEDIA_TYPES}
    )
    back_pts: dict[MediaType, int] = field(default_factory=dict)