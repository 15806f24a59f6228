"""Errors raised while downloading and merging live streams."""


class IgLiveError(Exception):
    """Base class for all errors raised by this package."""

    default_message = "Live stream error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidUrlError(IgLiveError):
    """A URL has no usable path to derive a file name from."""

    default_message = "Invalid URL"


class StatusNotFoundError(IgLiveError):
    """The server answered 404: the requested segment does not exist."""

    default_message = "Received status code 404"


class StatusError(IgLiveError):
    """The server answered with an unsuccessful status other than 404."""

    def __init__(self, status: int, url: str) -> None:
        self.status = status
        self.url = url
        super().__init__(f"Received status code {status}, url: {url}")


class FfmpegFailError(IgLiveError):
    """ffmpeg exited unsuccessfully."""

    default_message = "Missing init"


class PtsTooEarlyError(IgLiveError):
    """A segment exists but its timestamps do not line up with the next one."""

    default_message = "PTS too early"