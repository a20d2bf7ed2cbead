"""YouTube URL helpers."""

from urllib.parse import parse_qs, urlparse


def extract_youtube_id(url: str | None) -> str | None:
    """Extract the video id from a YouTube URL.

    Supports ``youtube.com/watch?v=<id>`` (any subdomain) and
    ``youtu.be/<id>``. Returns None for empty, unparseable or foreign URLs.

    Examples:
        extract_youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") -> "dQw4w9WgXcQ"
        extract_youtube_id("https://youtu.be/dQw4w9WgXcQ") -> "dQw4w9WgXcQ"
    """
    if not url:
        return None

    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    hostname = parsed.hostname or ""
    if "youtube.com" in hostname:
        values = parse_qs(parsed.query).get("v")
        return values[0] if values else None
    if "youtu.be" in hostname:
        video_id = parsed.path[1:]
        return video_id or None
    return None
