"""
Direct audio stream resolution via yt-dlp

Songs returned by browse and search carry only a video id. Playback needs a
direct media URL, which yt-dlp extracts from the watch page without
downloading anything.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yt_dlp

from ..exceptions import StreamResolveError
from ..utils.logger import get_logger


logger = get_logger(__name__)

WATCH_URL = "https://music.youtube.com/watch?v={video_id}"
AUDIO_FORMAT = "bestaudio"


def _ydl_options(cookie_file: Optional[Union[str, Path]]) -> Dict[str, Any]:
    options = {
        'format': AUDIO_FORMAT,
        'quiet': True,
        'no_warnings': True,
        'noplaylist': True,
        'nocheckcertificate': True,
    }
    if cookie_file:
        options['cookiefile'] = str(cookie_file)
    return options


def _pick_url(info: Dict[str, Any]) -> Optional[str]:
    url = info.get('url')
    if url:
        return url
    # Merged selections expose the chosen formats separately
    for fmt in info.get('requested_formats') or []:
        if fmt.get('url'):
            return fmt['url']
    return None


def resolve_stream_url(video_id: str, cookie_file: Optional[Union[str, Path]] = None) -> str:
    """
    Resolve the best audio-only stream URL for a video

    Args:
        video_id: YouTube video id
        cookie_file: Optional cookies.txt for age- or region-restricted videos

    Returns:
        Direct, time-limited media URL

    Raises:
        StreamResolveError: If extraction fails or yields no URL
    """
    url = WATCH_URL.format(video_id=video_id)
    logger.debug(f"Resolving stream for {video_id}")

    try:
        with yt_dlp.YoutubeDL(_ydl_options(cookie_file)) as ydl:
            info = ydl.extract_info(url, download=False)
    except yt_dlp.utils.DownloadError as e:
        raise StreamResolveError(
            f"Could not resolve stream for {video_id}: {e}",
            details={'video_id': video_id, 'original_error': str(e)}
        )

    stream_url = _pick_url(info or {})
    if not stream_url:
        raise StreamResolveError(
            f"No playable audio stream for {video_id}",
            details={'video_id': video_id}
        )
    return stream_url
