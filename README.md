# iglive

An experimental Instagram live stream downloader.

New segments are fetched while the stream goes on. At the same time, past
segments are recovered by guessing their timestamps. The guesses try the time
gaps that have worked most often first, then gaps close to them. Together
these two parts let a whole live stream be saved, not only the part after you
started.

A stream can also be downloaded for a short while after it has ended, as long
as you still have a valid `.mpd` manifest link for it.

## Requirements

- Python 3.10 or newer
- `ffmpeg` and `ffprobe` on your `PATH`. `ffprobe` reads segment timestamps
  and `ffmpeg` muxes the final video.

## Installation

```
pip install .
```

## Usage

Download a live stream by its `.mpd` manifest URL:

```
iglive download "<mpd url>"
```

Segments are written to `<stream id>/segments/`. Video segments end in `.m4v`
and audio segments in `.m4a`, each saved with its initialization data in
front. When the stream has ended and the past segments have been found, the
segments are merged into `<stream id>/<stream id>.mp4`.

Options for `download`:

- `-o`, `--output DIR`: write into `DIR` instead of a directory named after
  the stream id. The merged file is then `DIR/<name of DIR>.mp4`.
- `-n`, `--no-merge`: keep the segments and skip the final merge.
- `-l`, `--live-only`: only download live segments, not past ones.

Merge a directory that was downloaded earlier:

```
iglive merge DIR
```

This concatenates the segments in `DIR/segments` in natural order, so
`seg-9` comes before `seg-10`. If two consecutive segments do not join up,
`WARNING: Missing segment at PTS=<pts>` is printed to standard error. The
result is written to `DIR/<name of DIR>.mp4`.

Progress is shown on standard error. On a terminal each task has a spinner
line that is redrawn in place. Elsewhere, only notices and each task's final
line are written. If a command fails, its error message is printed and the
exit status is 1.

## Use from Python

```python
import asyncio

from iglive.download import DownloadConfig, DownloadSegments, download
from iglive.merge import merge


async def fetch(url: str) -> None:
    config = DownloadConfig(dir=None, segments=DownloadSegments.LIVE | DownloadSegments.PAST)
    output_dir = await download(url, config)
    video_path = await merge(output_dir)
    print(video_path)


asyncio.run(fetch("<mpd url>"))
```

`download` returns the output directory and `merge` returns the path of the
merged `.mp4`. `DownloadConfig()` with no arguments downloads both live and
past segments into a directory named after the stream id.

Other parts can be used on their own:

- `iglive.mpd.parse_mpd` parses a manifest document.
- `iglive.mpd.fetch_mpd` downloads and parses a manifest.
- `iglive.pts.get_pts` returns the start PTS and duration of a segment.
- `iglive.merge.natural_key` is the sort key used for segment file names.

## Errors

- HTTP failures raise subclasses of `iglive.errors.IgLiveError`: a 404 raises
  `StatusNotFoundError` and other unsuccessful statuses raise `StatusError`.
- A failed `ffmpeg` run during a merge raises `FfmpegFailError`.
- A malformed manifest raises `ValueError`.
- An `ffprobe` failure raises `RuntimeError`.
- Network errors from `httpx` are passed through unchanged.

## What it does not do

iglive does not find the `.mpd` URL of a stream for you and does not log in to
Instagram. You must supply the manifest link yourself.