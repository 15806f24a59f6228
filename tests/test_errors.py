import pytest

from iglive.errors import (
    FfmpegFailError,
    IgLiveError,
    InvalidUrlError,
    PtsTooEarlyError,
    StatusError,
    StatusNotFoundError,
)


@pytest.mark.parametrize(
    "cls, fragment",
    [
        (InvalidUrlError, "Invalid URL"),
        (StatusNotFoundError, "404"),
        (FfmpegFailError, "Missing init"),
        (PtsTooEarlyError, "PTS too early"),
    ],
)
def test_subclasses_share_base(cls, fragment):
    with pytest.raises(IgLiveError) as info:
        raise cls()
    assert type(info.value) is cls
    assert fragment in str(info.value)


def test_default_messages():
    assert str(InvalidUrlError()) == "Invalid URL"
    assert str(PtsTooEarlyError()) == "PTS too early"
    assert str(FfmpegFailError()) == "Missing init"


def test_custom_message_overrides_default():
    assert str(PtsTooEarlyError("later")) == "later"


def test_status_error_keeps_status_and_url():
    err = StatusError(503, "https://example.com/seg.m4v")
    assert err.status == 503
    assert err.url == "https://example.com/seg.m4v"
    assert str(err) == "Received status code 503, url: https://example.com/seg.m4v"


def test_status_error_is_iglive_error():
    err = StatusError(500, "https://example.com/x")
    with pytest.raises(IgLiveError) as info:
        raise err
    assert info.value is err
    assert info.value.status == 500
    assert info.value.url == "https://example.com/x"
    assert str(info.value) == "Received status code 500, url: https://example.com/x"