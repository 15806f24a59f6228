"""DASH manifest model and parsing."""

from __future__ import annotations

import enum
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from urllib.parse import urljoin

import httpx

BROADCAST_ENDED_HEADER = "x-fb-video-broadcast-ended"


class MediaType(enum.Enum):
    """Kind of media carried by a representation."""

    VIDEO = "video"
    AUDIO = "audio"
    UNKNOWN = "unknown"


@dataclass
class Segment:
    """One entry of a segment timeline: start time and duration."""

    t: int
    d: int


@dataclass
class SegmentTimeline:
    segments: list[Segment] = field(default_factory=list)


@dataclass
class SegmentTemplate:
    segment_timeline: SegmentTimeline
    initialization_path: str
    media_path: str


@dataclass
class Representation:
    segment_template: SegmentTemplate
    mime_type: str
    bandwidth: int
    width: int | None = None
    height: int | None = None
    frame_rate: int | None = None

    def media_type(self) -> MediaType:
        if self.mime_type.startswith("video/"):
            return MediaType.VIDEO
        if self.mime_type.startswith("audio/"):
            return MediaType.AUDIO
        return MediaType.UNKNOWN

    def download_url(self, url_base, t) -> str:
        """URL of the segment starting at time ``t``, relative to ``url_base``."""
        path = self.segment_template.media_path.replace("$Time$", str(t))
        return urljoin(str(url_base), path)


@dataclass
class AdaptationSet:
    representations: list[Representation] = field(default_factory=list)
    max_width: int | None = None
    max_height: int | None = None
    max_frame_rate: int | None = None


@dataclass
class Period:
    adaptation_sets: list[AdaptationSet] = field(default_factory=list)


@dataclass
class Mpd:
    period: Period
    id: str
    start_frame: int
    finished: bool = False

    def best_media(self) -> tuple[Representation, Representation]:
        """The video and audio representations with the highest bandwidth."""
        video: Representation | None = None
        audio: Representation | None = None
        video_bandwidth = 0
        audio_bandwidth = 0
        for adaptation_set in self.period.adaptation_sets:
            for rep in adaptation_set.representations:
                if rep.mime_type.startswith("video") and rep.bandwidth > video_bandwidth:
                    video_bandwidth = rep.bandwidth
                    video = rep
                if rep.mime_type.startswith("audio") and rep.bandwidth > audio_bandwidth:
                    audio_bandwidth = rep.bandwidth
                    audio = rep
        if video is None:
            raise ValueError("manifest has no video representation")
        if audio is None:
            raise ValueError("manifest has no audio representation")
        return video, audio


def _local(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local(child.tag) == name]


def _child(element: ET.Element, name: str) -> ET.Element:
    found = _children(element, name)
    if not found:
        raise ValueError(f"missing <{name}> in <{_local(element.tag)}>")
    return found[0]


def _attr(element: ET.Element, name: str) -> str | None:
    for key, value in element.attrib.items():
        if _local(key) == name:
            return value
    return None


def _required_str(element: ET.Element, name: str) -> str:
    value = _attr(element, name)
    if value is None:
        raise ValueError(f"missing attribute {name!r} in <{_local(element.tag)}>")
    return value


def _to_uint(value: str, name: str) -> int:
    try:
        number = int(value.strip())
    except ValueError:
        raise ValueError(f"attribute {name!r} is not an integer: {value!r}") from None
    if number < 0:
        raise ValueError(f"attribute {name!r} is negative: {value!r}")
    return number


def _required_int(element: ET.Element, name: str) -> int:
    return _to_uint(_required_str(element, name), name)


def _optional_int(element: ET.Element, name: str) -> int | None:
    value = _attr(element, name)
    return None if value is None else _to_uint(value, name)


def _parse_template(element: ET.Element) -> SegmentTemplate:
    timeline = _child(element, "SegmentTimeline")
    segments = [
        Segment(t=_required_int(s, "t"), d=_required_int(s, "d"))
        for s in _children(timeline, "S")
    ]
    return SegmentTemplate(
        segment_timeline=SegmentTimeline(segments),
        initialization_path=_required_str(element, "initialization"),
        media_path=_required_str(element, "media"),
    )


def _parse_representation(element: ET.Element) -> Representation:
    return Representation(
        segment_template=_parse_template(_child(element, "SegmentTemplate")),
        mime_type=_required_str(element, "mimeType"),
        bandwidth=_required_int(element, "bandwidth"),
        width=_optional_int(element, "width"),
        height=_optional_int(element, "height"),
        frame_rate=_optional_int(element, "frameRate"),
    )


def _parse_adaptation_set(element: ET.Element) -> AdaptationSet:
    return AdaptationSet(
        representations=[
            _parse_representation(r) for r in _children(element, "Representation")
        ],
        max_width=_optional_int(element, "maxWidth"),
        max_height=_optional_int(element, "maxHeight"),
        max_frame_rate=_optional_int(element, "maxFrameRate"),
    )


def parse_mpd(text: str, finished: bool = False) -> Mpd:
    """Parse a manifest document; raises ValueError when it is malformed."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"invalid manifest XML: {exc}") from exc
    period = _child(root, "Period")
    return Mpd(
        period=Period(
            [_parse_adaptation_set(a) for a in _children(period, "AdaptationSet")]
        ),
        id=_required_str(root, "loapStreamId"),
        start_frame=_required_int(root, "publishFrameTime"),
        finished=finished,
    )


async def fetch_mpd(client: httpx.AsyncClient, url) -> Mpd:
    """Download and parse the manifest at ``url``."""
    response = await client.get(str(url))
    finished = response.headers.get(BROADCAST_ENDED_HEADER) == "1"
    return parse_mpd(response.text, finished)