"""YouTube URL helpers used to fill in missing video thumbnails."""

from typing import Optional
from urllib.parse import parse_qs, urlparse

THUMBNAIL_TEMPLATE = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"

_YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"}
_SHORT_HOSTS = {"youtu.be", "www.youtu.be"}
_PATH_PREFIXES = ("/embed/", "/shorts/", "/live/", "/v/")


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """Return the video id from a YouTube watch/short/embed URL, or None."""
    if not url:
        return None
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"https://{candidate}"
    parsed = urlparse(candidate)
    host = (parsed.hostname or "").lower()

    if host in _SHORT_HOSTS:
        video_id = parsed.path.lstrip("/").split("/", 1)[0]
        return video_id or None

    if host in _YOUTUBE_HOSTS:
        if parsed.path == "/watch":
            values = parse_qs(parsed.query).get("v") or []
            return values[0] if values and values[0] else None
        for prefix in _PATH_PREFIXES:
            if parsed.path.startswith(prefix):
                video_id = parsed.path[len(prefix):].split("/", 1)[0]
                return video_id or None
    return None


def derive_thumbnail_url(video_url: Optional[str]) -> Optional[str]:
    video_id = extract_video_id(video_url)
    if not video_id:
        return None
    return THUMBNAIL_TEMPLATE.format(video_id=video_id)
