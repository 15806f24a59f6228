"""Download Instagram live streams, including past segments, and merge them with ffmpeg."""

__version__ = "0.1.6"