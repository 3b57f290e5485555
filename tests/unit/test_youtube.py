import pytest

from portfolio.utils.youtube import derive_thumbnail_url, extract_video_id


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        "https://youtu.be/dQw4w9WgXcQ",
        "youtu.be/dQw4w9WgXcQ?si=abc",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://m.youtube.com/shorts/dQw4w9WgXcQ",
    ],
)
def test_extract_video_id(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize(
    "url",
    [None, "", "https://vimeo.com/12345", "https://www.youtube.com/watch", "https://www.youtube.com/channel/x"],
)
def test_unrecognized_urls(url):
    assert extract_video_id(url) is None
    assert derive_thumbnail_url(url) is None


def test_derive_thumbnail_url():
    assert (
        derive_thumbnail_url("https://youtu.be/abc123")
        == "https://img.youtube.com/vi/abc123/hqdefault.jpg"
    )
