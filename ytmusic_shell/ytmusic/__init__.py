"""
YouTube Music integration package for ytmusic-shell

Modules:

1. **Models (models.py)**: normalized MediaItem, Shelf and PlaylistDetail
2. **Parser (parser.py)**: converts raw renderer trees into models, tolerating
   the several container shapes the service returns for the same data
3. **Client (client.py)**: SAPISIDHASH-signed JSON POSTs to the browse and
   search endpoints
4. **Service (service.py)**: logged-in facade that re-resolves cookies per call
   and reports failures as result values
5. **Stream (stream.py)**: direct audio URL resolution through yt-dlp

Usage:
    from ytmusic_shell.ytmusic import YTMusicService

    service = YTMusicService()
    result = service.search("barış manço")
    if result.ok:
        for item in result.data:
            print(item.title, item.video_id)
"""

from .models import ItemKind, MediaItem, Shelf, PlaylistDetail
from .parser import ParserOptions, ResponseParser, infer_item_kind, select_thumbnail
from .client import (
    ClientRequestContext,
    YTMusicClient,
    compute_sapisid_hash,
    get_ytmusic_client,
    reset_ytmusic_client
)
from .service import NOT_LOGGED_IN, AuthStatus, ServiceResult, YTMusicService
from .stream import resolve_stream_url

__all__ = [
    # Models
    'ItemKind',
    'MediaItem',
    'Shelf',
    'PlaylistDetail',

    # Parsing
    'ParserOptions',
    'ResponseParser',
    'infer_item_kind',
    'select_thumbnail',

    # Client
    'ClientRequestContext',
    'YTMusicClient',
    'compute_sapisid_hash',
    'get_ytmusic_client',
    'reset_ytmusic_client',

    # Service
    'NOT_LOGGED_IN',
    'AuthStatus',
    'ServiceResult',
    'YTMusicService',

    # Streams
    'resolve_stream_url'
]
