import asyncio
import io

import httpx
import pytest
import respx

from iglive.download import (
    DownloadConfig,
    DownloadSegments,
    download,
    download_reps,
)
from iglive.errors import StatusNotFoundError
from iglive.mpd import MediaType, parse_mpd
from iglive.progress import Spinner
from iglive.state import State

BASE = "https://live.example.com/live/"
MPD_URL = BASE + "dash.mpd"
INIT = b"0"
SEGMENT = b"|5"

MANIFEST = """<?xml version="1.0"?>
<MPD loapStreamId="12345" publishFrameTime="1000">
  <Period>
    <AdaptationSet>
      <Representation mimeType="video/mp4" bandwidth="1000" width="720" height="1280">
        <SegmentTemplate initialization="init-v.m4v" media="v-$Time$.m4v">
          <SegmentTimeline><S t="1000" d="2000"/><S t="3000" d="2000"/></SegmentTimeline>
        </SegmentTemplate>
      </Representation>
    </AdaptationSet>
    <AdaptationSet>
      <Representation mimeType="audio/mp4" bandwidth="100">
        <SegmentTemplate initialization="init-a.m4a" media="a-$Time$.m4a">
          <SegmentTimeline><S t="1000" d="2000"/><S t="3000" d="2000"/></SegmentTimeline>
        </SegmentTemplate>
      </Representation>
    </AdaptationSet>
  </Period>
</MPD>
"""


class _FakeProcess:
    def __init__(self, program):
        self.program = program
        self.returncode = 0

    async def communicate(self, input=None):
        if self.program == "ffprobe":
            return (input or b"", b"")
        return (b"", b"")


def _fake_exec(calls):
    async def _exec(program, *args, **kwargs):
        calls.append((program, args))
        return _FakeProcess(program)

    return _exec


def _route_segments(router):
    for name in ("v-1000.m4v", "v-3000.m4v", "a-1000.m4a", "a-3000.m4a"):
        router.get(BASE + name).mock(return_value=httpx.Response(200, content=SEGMENT))


def _route_all(router, init_status=200, finished=True):
    headers = {"x-fb-video-broadcast-ended": "1"} if finished else {}
    router.get(MPD_URL).mock(
        return_value=httpx.Response(200, text=MANIFEST, headers=headers)
    )
    for name in ("init-v.m4v", "init-a.m4a"):
        router.get(BASE + name).mock(
            return_value=httpx.Response(init_status, content=INIT)
        )
    _route_segments(router)


def test_default_config_downloads_everything():
    config = DownloadConfig()
    assert config.dir is None
    assert DownloadSegments.LIVE in config.segments
    assert DownloadSegments.PAST in config.segments


def test_segment_flags_combine():
    config = DownloadConfig(segments=DownloadSegments.LIVE)
    assert DownloadSegments.LIVE in config.segments
    assert DownloadSegments.PAST not in config.segments
    assert DownloadSegments(1) == DownloadSegments.LIVE
    assert DownloadSegments(2) == DownloadSegments.PAST
    assert DownloadSegments(3) == DownloadSegments.LIVE | DownloadSegments.PAST


@pytest.mark.asyncio
async def test_download_reps_downloads_timeline(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(asyncio, "create_subprocess_exec", _fake_exec(calls))
    video, audio = parse_mpd(MANIFEST).best_media()
    state = State()
    state.downloaded_init[MediaType.VIDEO] = INIT
    state.downloaded_init[MediaType.AUDIO] = INIT
    stream = io.StringIO()
    pb = Spinner("Current", stream)

    with respx.mock(assert_all_called=False) as router:
        _route_segments(router)
        async with httpx.AsyncClient() as client:
            await download_reps(state, client, MPD_URL, [video, audio], tmp_path, pb)

    assert state.downloaded_segs[MediaType.VIDEO] == {1000, 3000}
    assert state.downloaded_segs[MediaType.AUDIO] == {1000, 3000}
    assert (tmp_path / "v-1000.m4v").read_bytes() == INIT + SEGMENT
    assert (tmp_path / "a-3000.m4a").read_bytes() == INIT + SEGMENT
    assert stream.getvalue().endswith("Current Finished\n")
    assert all(program == "ffprobe" for program, _ in calls)


@pytest.mark.asyncio
async def test_download_into_given_directory(tmp_path, monkeypatch):
    monkeypatch.setattr(asyncio, "create_subprocess_exec", _fake_exec([]))
    out = tmp_path / "out"
    with respx.mock(assert_all_called=False) as router:
        _route_all(router)
        result = await download(MPD_URL, DownloadConfig(dir=out))

    assert result == out
    segments = out / "segments"
    names = sorted(p.name for p in segments.iterdir())
    assert names == ["a-1000.m4a", "a-3000.m4a", "v-1000.m4v", "v-3000.m4v"]
    assert (segments / "v-3000.m4v").read_bytes() == INIT + SEGMENT


@pytest.mark.asyncio
async def test_download_defaults_to_stream_id(tmp_path, monkeypatch):
    monkeypatch.setattr(asyncio, "create_subprocess_exec", _fake_exec([]))
    monkeypatch.chdir(tmp_path)
    with respx.mock(assert_all_called=False) as router:
        _route_all(router)
        result = await download(
            MPD_URL, DownloadConfig(segments=DownloadSegments.LIVE)
        )

    assert str(result) == "12345"
    assert (tmp_path / "12345" / "segments" / "a-1000.m4a").is_file()


@pytest.mark.asyncio
async def test_download_past_only_stops_at_start_frame(tmp_path, monkeypatch):
    monkeypatch.setattr(asyncio, "create_subprocess_exec", _fake_exec([]))
    out = tmp_path / "past"
    with respx.mock(assert_all_called=False) as router:
        _route_all(router, finished=False)
        result = await download(
            MPD_URL, DownloadConfig(dir=out, segments=DownloadSegments.PAST)
        )

    assert result == out
    assert (out / "segments" / "v-1000.m4v").read_bytes() == INIT + SEGMENT


@pytest.mark.asyncio
async def test_download_missing_init_raises(tmp_path, monkeypatch):
    monkeypatch.setattr(asyncio, "create_subprocess_exec", _fake_exec([]))
    with respx.mock(assert_all_called=False) as router:
        _route_all(router, init_status=404)
        with pytest.raises(StatusNotFoundError):
            await download(MPD_URL, DownloadConfig(dir=tmp_path / "x"))