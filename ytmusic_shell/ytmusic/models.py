"""
Data models for YouTube Music browse and search results

This module defines the normalized schema every response parser produces.
Whatever renderer shape the service returned, callers only ever see these
types:

- ItemKind: Classification of a media item (song, album, playlist)
- MediaItem: A single playable or browsable result
- Shelf: A titled, ordered group of items on the home feed
- PlaylistDetail: Header information and track list of a playlist or album

All models are frozen dataclasses produced fresh per call. Sequences are
stored as tuples so that instances are hashable and compare structurally.

Identifier semantics:
- video_id present: the item is directly streamable/downloadable
- browse_id or playlist_id present without video_id: the item must be
  browsed (its contents fetched) before playback
- playlist_id together with video_id: an auto-playing mix, classified as
  a playlist
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# Browse targets for raw playlist ids are formed by prefixing this marker
VIDEO_PLAYLIST_BROWSE_PREFIX = "VL"


class ItemKind(Enum):
    """
    Classification of a normalized media item

    Values:
        SONG: A single track, playable through its video id
        ALBUM: An album, EP or single release, browsable
        PLAYLIST: A curated or user playlist, or an auto-playing mix
    """
    SONG = "song"
    ALBUM = "album"
    PLAYLIST = "playlist"


@dataclass(frozen=True)
class MediaItem:
    """
    Normalized media result unit

    Attributes:
        title: Display title (never empty for songs)
        subtitle: Joined descriptive runs, e.g. "Artist • Album • 2021"
        thumbnail_url: Selected thumbnail URL, empty string when none
        video_id: Direct playback identifier
        playlist_id: Playlist identifier (raw, without browse prefix)
        browse_id: Browse endpoint identifier
        kind: Inferred classification
    """
    title: str
    subtitle: str = ""
    thumbnail_url: str = ""
    video_id: Optional[str] = None
    playlist_id: Optional[str] = None
    browse_id: Optional[str] = None
    kind: ItemKind = ItemKind.SONG

    @property
    def is_streamable(self) -> bool:
        """True if the item can be played or downloaded directly"""
        return bool(self.video_id)

    @property
    def needs_browse(self) -> bool:
        """True if the item's contents must be fetched before playback"""
        return not self.video_id and bool(self.browse_id or self.playlist_id)

    @property
    def browse_target(self) -> Optional[str]:
        """
        Browse id to pass to get_playlist_or_album()

        Uses the native browse id when present, otherwise derives one from
        the raw playlist id with the video-playlist marker.
        """
        if self.browse_id:
            return self.browse_id
        if self.playlist_id:
            return VIDEO_PLAYLIST_BROWSE_PREFIX + self.playlist_id
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the dictionary shape consumed by the UI layer"""
        return {
            'title': self.title,
            'subtitle': self.subtitle,
            'thumbnail': self.thumbnail_url,
            'videoId': self.video_id,
            'playlistId': self.playlist_id,
            'browseId': self.browse_id,
            'type': self.kind.value,
        }


@dataclass(frozen=True)
class Shelf:
    """
    Titled horizontal collection on the home feed

    Attributes:
        title: Shelf heading
        items: Items in display order
    """
    title: str
    items: Tuple[MediaItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'items': [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class PlaylistDetail:
    """
    Header and tracks of a playlist or album

    Attributes:
        title: Collection title
        subtitle: Joined descriptive runs from the header
        thumbnail_url: Selected header thumbnail, empty string when none
        tracks: Tracks in order, all of kind SONG
        error: Set when the response could not be interpreted at all
    """
    title: str = ""
    subtitle: str = ""
    thumbnail_url: str = ""
    tracks: Tuple[MediaItem, ...] = field(default_factory=tuple)
    error: Optional[str] = None

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'title': self.title,
            'subtitle': self.subtitle,
            'thumbnail': self.thumbnail_url,
            'tracks': [track.to_dict() for track in self.tracks],
        }
        if self.error:
            result['error'] = self.error
        return result
