"""
Shape-tolerant response parsing for the YouTube Music internal API

The service publishes no schema. The same logical data is nested under
different container paths depending on the response variant, and the same
logical entity (a media item) is represented by different renderers. This
module turns those trees into the normalized models in ``models.py``.

Parsing policy:
- Every lookup goes through ``nav()``; a missing or reshaped field becomes
  an empty or omitted value instead of an exception.
- Where several container shapes are known, each shape has its own small
  extractor returning an optional result, and the extractors are tried in a
  fixed priority order.
- Item renderers form a tagged union at this boundary: the renderer key is
  detected and dispatched to the matching extractor, and both shapes come
  out as ``MediaItem``. Raw renderer dictionaries never leave this module.
- A failure of a whole parse is caught and logged; the call still returns
  an empty result (home, search) or an error-tagged detail (playlist).

Item classification and thumbnail selection are exposed as plain functions
(``infer_item_kind``, ``select_thumbnail``) so they can be reused and tested
on their own.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .models import ItemKind, MediaItem, PlaylistDetail, Shelf
from ..config.settings import Settings
from ..utils.helpers import first_present, join_runs, nav, nav_list
from ..utils.logger import get_logger


logger = get_logger(__name__)

# Item renderer keys (the two members of the item union)
TWO_ROW_ITEM_RENDERER = "musicTwoRowItemRenderer"
LIST_ITEM_RENDERER = "musicResponsiveListItemRenderer"

DEFAULT_ALBUM_TERMS: Tuple[str, ...] = ("albüm", "album", "single", "ep")
DEFAULT_PLAYLIST_TERMS: Tuple[str, ...] = ("çalma listesi", "playlist", "mix")
DEFAULT_ALBUM_PREFIXES: Tuple[str, ...] = ("MPREb_", "OLAK")
DEFAULT_THUMBNAIL_BAND: Tuple[int, int] = (200, 400)

# Path from a tab list to its section contents
_TAB_SECTIONS = [0, "tabRenderer", "content", "sectionListRenderer", "contents"]


@dataclass(frozen=True)
class ParserOptions:
    """
    Tunable vocabulary and thresholds for response interpretation

    Attributes:
        album_terms: Lower-case subtitle fragments that mark an album/EP/single
        playlist_terms: Lower-case subtitle fragments that mark a playlist/mix
        album_browse_prefixes: Browse id prefixes that identify albums
        thumbnail_band: Preferred (min, max) thumbnail width, inclusive
        home_shelf_fallback_title: Title for home shelves without a header
    """
    album_terms: Tuple[str, ...] = DEFAULT_ALBUM_TERMS
    playlist_terms: Tuple[str, ...] = DEFAULT_PLAYLIST_TERMS
    album_browse_prefixes: Tuple[str, ...] = DEFAULT_ALBUM_PREFIXES
    thumbnail_band: Tuple[int, int] = DEFAULT_THUMBNAIL_BAND
    home_shelf_fallback_title: str = "Öneriler"

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ParserOptions':
        """Build options from the ``ytmusic`` settings section"""
        config = settings.ytmusic
        return cls(
            album_terms=tuple(term.lower() for term in config.album_terms),
            playlist_terms=tuple(term.lower() for term in config.playlist_terms),
            album_browse_prefixes=tuple(config.album_browse_prefixes),
            thumbnail_band=settings.get_thumbnail_band(),
            home_shelf_fallback_title=config.home_shelf_fallback_title,
        )


def _width(thumbnail: Dict[str, Any]) -> int:
    width = thumbnail.get("width")
    return width if isinstance(width, (int, float)) else 0


def select_thumbnail(
    thumbnails: Any,
    band: Tuple[int, int] = DEFAULT_THUMBNAIL_BAND
) -> str:
    """
    Pick the thumbnail URL best suited to a card-sized element

    Prefers the largest candidate whose width lies within ``band``
    (inclusive). If none qualifies, falls back to the widest candidate.
    Candidates without a width count as width 0.

    Args:
        thumbnails: List of ``{"url", "width", "height"}`` dictionaries
        band: Preferred (min, max) width

    Returns:
        Selected URL, or empty string when there are no candidates

    Example:
        widths [120, 226, 512] -> the 226 URL
        widths [120, 800] -> the 800 URL
    """
    if not isinstance(thumbnails, list):
        return ""
    candidates = [thumb for thumb in thumbnails if isinstance(thumb, dict)]
    if not candidates:
        return ""

    low, high = band
    ranked = sorted(candidates, key=_width, reverse=True)
    in_band = next((thumb for thumb in ranked if low <= _width(thumb) <= high), None)
    chosen = in_band or ranked[0]
    url = chosen.get("url")
    return url if isinstance(url, str) else ""


def infer_item_kind(
    subtitle: str,
    video_id: Optional[str] = None,
    playlist_id: Optional[str] = None,
    browse_id: Optional[str] = None,
    options: Optional[ParserOptions] = None
) -> ItemKind:
    """
    Classify an ambiguous item as song, album or playlist

    Rules are evaluated in this exact order, first match wins:
        1. browse id with an album prefix -> ALBUM
        2. subtitle contains album vocabulary -> ALBUM
        3. subtitle contains playlist vocabulary -> PLAYLIST
        4. playlist id without video id -> PLAYLIST
        5. any browse id -> PLAYLIST
        6. playlist id with video id (auto-playing mix) -> PLAYLIST
        7. otherwise -> SONG

    Vocabulary matching is a case-insensitive substring test.

    Args:
        subtitle: Joined subtitle text of the item
        video_id: Direct playback id, if any
        playlist_id: Playlist id, if any
        browse_id: Browse id, if any
        options: Vocabulary and prefixes, defaults when omitted

    Returns:
        The inferred ItemKind
    """
    options = options or ParserOptions()
    subtitle_lower = (subtitle or "").lower()

    if browse_id and browse_id.startswith(tuple(options.album_browse_prefixes)):
        return ItemKind.ALBUM
    if any(term in subtitle_lower for term in options.album_terms):
        return ItemKind.ALBUM
    if any(term in subtitle_lower for term in options.playlist_terms):
        return ItemKind.PLAYLIST
    if playlist_id and not video_id:
        return ItemKind.PLAYLIST
    if browse_id:
        return ItemKind.PLAYLIST
    if playlist_id and video_id:
        return ItemKind.PLAYLIST
    return ItemKind.SONG


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass
class _ItemIds:
    video_id: Optional[str] = None
    playlist_id: Optional[str] = None
    browse_id: Optional[str] = None


def _two_row_ids(renderer: Dict[str, Any]) -> _ItemIds:
    """Collect identifiers from a two-row card's navigation endpoints"""
    ids = _ItemIds()
    endpoint = nav(renderer, ["navigationEndpoint"])

    watch = nav(endpoint, ["watchEndpoint"])
    if isinstance(watch, dict):
        ids.video_id = _string_or_none(watch.get("videoId"))
        ids.playlist_id = _string_or_none(watch.get("playlistId"))

    if ids.playlist_id is None:
        ids.playlist_id = _string_or_none(nav(endpoint, ["watchPlaylistEndpoint", "playlistId"]))

    ids.browse_id = _string_or_none(nav(endpoint, ["browseEndpoint", "browseId"]))

    # Cards that play on click often expose their collection only in the menu
    if ids.browse_id is None:
        for menu_item in nav_list(renderer, ["menu", "menuRenderer", "items"]):
            browse_id = _string_or_none(nav(menu_item, [
                "menuNavigationItemRenderer", "navigationEndpoint", "browseEndpoint", "browseId"
            ]))
            if browse_id:
                ids.browse_id = browse_id
                break

    return ids


# Header container shapes of a playlist/album browse response, in priority order

def _header_immersive(data: Any) -> Optional[Dict[str, Any]]:
    return nav(data, ["header", "musicImmersiveHeaderRenderer"])


def _header_detail(data: Any) -> Optional[Dict[str, Any]]:
    return nav(data, ["header", "musicDetailHeaderRenderer"])


def _header_editable_playlist(data: Any) -> Optional[Dict[str, Any]]:
    return nav(data, [
        "header", "musicEditablePlaylistDetailHeaderRenderer", "header", "musicDetailHeaderRenderer"
    ])


def _header_visual(data: Any) -> Optional[Dict[str, Any]]:
    return nav(data, ["header", "musicVisualHeaderRenderer"])


def _header_responsive(data: Any) -> Optional[Dict[str, Any]]:
    return nav(data, ["header", "musicResponsiveHeaderRenderer"])


def _header_two_column_responsive(data: Any) -> Optional[Dict[str, Any]]:
    # Newer layouts move the responsive header into the first tab section
    return nav(data, [
        "contents", "twoColumnBrowseResultsRenderer", "tabs", *_TAB_SECTIONS,
        0, "musicResponsiveHeaderRenderer"
    ])


HEADER_EXTRACTORS: Sequence[Callable[[Any], Optional[Dict[str, Any]]]] = (
    _header_immersive,
    _header_detail,
    _header_editable_playlist,
    _header_visual,
    _header_responsive,
    _header_two_column_responsive,
)


# Track container shapes of a playlist/album browse response, in priority order

def _sections_single_column(data: Any) -> List[Any]:
    return nav_list(data, ["contents", "singleColumnBrowseResultsRenderer", "tabs", *_TAB_SECTIONS])


def _sections_two_column_secondary(data: Any) -> List[Any]:
    return nav_list(data, [
        "contents", "twoColumnBrowseResultsRenderer", "secondaryContents",
        "sectionListRenderer", "contents"
    ])


def _sections_two_column_tab(data: Any) -> List[Any]:
    return nav_list(data, ["contents", "twoColumnBrowseResultsRenderer", "tabs", *_TAB_SECTIONS])


TRACK_SECTION_EXTRACTORS: Sequence[Callable[[Any], List[Any]]] = (
    _sections_single_column,
    _sections_two_column_secondary,
    _sections_two_column_tab,
)


class ResponseParser:
    """
    Converts raw browse/search responses into normalized models

    One parser instance holds the classification vocabulary and thumbnail
    band; it keeps no per-response state and can be shared freely.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """
        Initialize parser

        Args:
            options: Interpretation options, defaults when omitted
        """
        self.options = options or ParserOptions()
        self._item_extractors: Dict[str, Callable[[Dict[str, Any]], Optional[MediaItem]]] = {
            TWO_ROW_ITEM_RENDERER: self.parse_two_row_item,
            LIST_ITEM_RENDERER: self.parse_list_item,
        }

    # --- Items ---

    def parse_item(self, item: Any) -> Optional[MediaItem]:
        """
        Normalize one entry of a shelf's contents

        Detects which renderer the entry carries and dispatches to the
        matching extractor.

        Args:
            item: Raw shelf entry

        Returns:
            MediaItem, or None for unknown renderers and unusable entries
        """
        if not isinstance(item, dict):
            return None
        for renderer_key, extractor in self._item_extractors.items():
            renderer = item.get(renderer_key)
            if isinstance(renderer, dict):
                return extractor(renderer)
        return None

    def parse_two_row_item(self, renderer: Dict[str, Any]) -> Optional[MediaItem]:
        """
        Normalize a two-row card (albums, playlists, mixes, some songs)

        Args:
            renderer: Content of a ``musicTwoRowItemRenderer``

        Returns:
            MediaItem, or None for an untitled card that would be a song
        """
        title = _string_or_none(nav(renderer, ["title", "runs", 0, "text"])) or ""
        subtitle = join_runs(nav(renderer, ["subtitle", "runs"]))
        thumbnails = nav(renderer, [
            "thumbnailRenderer", "musicThumbnailRenderer", "thumbnail", "thumbnails"
        ])
        ids = _two_row_ids(renderer)
        kind = infer_item_kind(subtitle, ids.video_id, ids.playlist_id, ids.browse_id, self.options)

        # Songs must carry a title; collections stay browsable without one
        if not title and kind == ItemKind.SONG:
            return None

        return MediaItem(
            title=title,
            subtitle=subtitle,
            thumbnail_url=select_thumbnail(thumbnails, self.options.thumbnail_band),
            video_id=ids.video_id,
            playlist_id=ids.playlist_id,
            browse_id=ids.browse_id,
            kind=kind,
        )

    def parse_list_item(self, renderer: Any) -> Optional[MediaItem]:
        """
        Normalize a list row (songs in search results and track lists)

        Args:
            renderer: Content of a ``musicResponsiveListItemRenderer``

        Returns:
            MediaItem of kind SONG, or None when the row has no title
        """
        if not isinstance(renderer, dict):
            return None

        columns = nav_list(renderer, ["flexColumns"])
        title = nav(columns, [0, "musicResponsiveListItemFlexColumnRenderer", "text", "runs", 0, "text"])
        if not isinstance(title, str) or not title:
            return None

        subtitle = join_runs(nav(columns, [1, "musicResponsiveListItemFlexColumnRenderer", "text", "runs"]))
        thumbnails = nav(renderer, ["thumbnail", "musicThumbnailRenderer", "thumbnail", "thumbnails"])

        video_id = _string_or_none(nav(renderer, [
            "overlay", "musicItemThumbnailOverlayRenderer", "content", "musicPlayButtonRenderer",
            "playNavigationEndpoint", "watchEndpoint", "videoId"
        ]))
        if video_id is None:
            video_id = _string_or_none(nav(renderer, ["playlistItemData", "videoId"]))

        return MediaItem(
            title=title,
            subtitle=subtitle,
            thumbnail_url=select_thumbnail(thumbnails, self.options.thumbnail_band),
            video_id=video_id,
            kind=ItemKind.SONG,
        )

    def _parse_list_rows(self, contents: Any) -> List[MediaItem]:
        rows = []
        for entry in contents if isinstance(contents, list) else []:
            parsed = self.parse_list_item(nav(entry, [LIST_ITEM_RENDERER]))
            if parsed:
                rows.append(parsed)
        return rows

    # --- Home ---

    def parse_home(self, data: Any) -> List[Shelf]:
        """
        Parse a home feed browse response into shelves

        Shelves without any usable item are dropped; order is preserved.

        Args:
            data: Decoded JSON response

        Returns:
            List of Shelf, empty when the expected container is missing
        """
        try:
            return self._parse_home(data)
        except Exception as e:
            logger.error(f"Parse home error: {e}", exc_info=True)
            return []

    def _parse_home(self, data: Any) -> List[Shelf]:
        shelves = []
        sections = nav_list(data, ["contents", "singleColumnBrowseResultsRenderer", "tabs", *_TAB_SECTIONS])

        for section in sections:
            shelf = nav(section, ["musicCarouselShelfRenderer"])
            if not isinstance(shelf, dict):
                continue

            title = nav(shelf, ["header", "musicCarouselShelfBasicHeaderRenderer", "title", "runs", 0, "text"])
            if not isinstance(title, str) or not title:
                title = self.options.home_shelf_fallback_title

            items = []
            for entry in nav_list(shelf, ["contents"]):
                parsed = self.parse_item(entry)
                if parsed:
                    items.append(parsed)

            if items:
                shelves.append(Shelf(title=title, items=tuple(items)))

        logger.debug(f"Parsed {len(shelves)} home shelves")
        return shelves

    # --- Search ---

    def parse_search(self, data: Any) -> List[MediaItem]:
        """
        Parse a search response into a flat list of songs

        Args:
            data: Decoded JSON response

        Returns:
            List of MediaItem in result order, empty on shape mismatch
        """
        try:
            return self._parse_search(data)
        except Exception as e:
            logger.error(f"Parse search error: {e}", exc_info=True)
            return []

    def _parse_search(self, data: Any) -> List[MediaItem]:
        results = []
        sections = nav_list(data, ["contents", "tabbedSearchResultsRenderer", "tabs", *_TAB_SECTIONS])

        for section in sections:
            shelf = nav(section, ["musicShelfRenderer"])
            if not isinstance(shelf, dict):
                continue
            results.extend(self._parse_list_rows(shelf.get("contents")))

        logger.debug(f"Parsed {len(results)} search results")
        return results

    # --- Playlist / album ---

    def parse_playlist(self, data: Any) -> PlaylistDetail:
        """
        Parse a playlist or album browse response

        Header and track containers are located by trying each known shape
        in priority order (see HEADER_EXTRACTORS, TRACK_SECTION_EXTRACTORS).

        Args:
            data: Decoded JSON response

        Returns:
            PlaylistDetail; on a failed parse, an error-tagged empty detail
        """
        try:
            return self._parse_playlist(data)
        except Exception as e:
            logger.error(f"Parse playlist error: {e}", exc_info=True)
            return PlaylistDetail(error=f"Parse playlist error: {e}")

    def find_header(self, data: Any) -> Optional[Dict[str, Any]]:
        """Return the first known header renderer present in the response"""
        for extractor in HEADER_EXTRACTORS:
            header = extractor(data)
            if isinstance(header, dict):
                return header
        return None

    def find_tracks(self, data: Any) -> List[MediaItem]:
        """Return the tracks of the first known container shape that has any"""
        for extractor in TRACK_SECTION_EXTRACTORS:
            tracks = []
            for section in extractor(data):
                shelf = first_present(section, (["musicShelfRenderer"], ["musicPlaylistShelfRenderer"]))
                if isinstance(shelf, dict):
                    tracks.extend(self._parse_list_rows(shelf.get("contents")))
            if tracks:
                return tracks
        return []

    def _parse_playlist(self, data: Any) -> PlaylistDetail:
        title = subtitle = thumbnail_url = ""

        header = self.find_header(data)
        if header is not None:
            header_title = nav(header, ["title", "runs", 0, "text"])
            title = header_title if isinstance(header_title, str) else ""
            subtitle = join_runs(first_present(header, (
                ["subtitle", "runs"],
                ["straplineTextOne", "runs"],
            )))
            thumbnail_url = select_thumbnail(first_present(header, (
                ["thumbnail", "musicThumbnailRenderer", "thumbnail", "thumbnails"],
                ["thumbnail", "croppedSquareThumbnailRenderer", "thumbnail", "thumbnails"],
                ["thumbnail", "thumbnails"],
            )), self.options.thumbnail_band)
        else:
            logger.debug("No known header shape in playlist response")

        tracks = self.find_tracks(data)
        logger.debug(f"Parsed playlist '{title}' with {len(tracks)} tracks")

        return PlaylistDetail(
            title=title,
            subtitle=subtitle,
            thumbnail_url=thumbnail_url,
            tracks=tuple(tracks),
        )
