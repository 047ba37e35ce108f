"""
Logged-in service facade over the YouTube Music client

This is the boundary a UI (or the CLI) talks to. Every call:

1. re-resolves authentication from the live cookie store,
2. refuses privileged calls with ``NOT_LOGGED_IN`` when no signing key exists,
3. runs the client operation and converts any ytmusic-shell error into an
   error-carrying result instead of raising.

Results are plain data objects that serialize with ``to_dict()`` into the
``{"data": ...}`` / ``{"error": ...}`` envelope expected by presentation code.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .client import YTMusicClient, get_ytmusic_client
from .models import MediaItem
from ..config.auth import AuthContext, SessionCookieStore
from ..exceptions import YTMusicShellError
from ..utils.logger import get_logger


NOT_LOGGED_IN = "not_logged_in"
NOTHING_TO_BROWSE = "Item has no browse target"


@dataclass(frozen=True)
class AuthStatus:
    """
    Login state of the current cookie set

    Attributes:
        is_authenticated: True iff a signing-key cookie is present
        error: Reason the cookies could not be inspected, if any
    """
    is_authenticated: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'isLoggedIn': self.is_authenticated}
        if self.error:
            result['error'] = self.error
        return result


@dataclass(frozen=True)
class ServiceResult:
    """
    Outcome of a facade call

    Exactly one of ``data`` or ``error`` is meaningful: ``error`` set means
    the call failed and ``data`` must be ignored.
    """
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.error:
            return {'error': self.error}
        return {'data': _serialize(self.data)}


def _serialize(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(entry) for entry in value]
    return value


class YTMusicService:
    """Authenticated entry point for home, search and playlist browsing"""

    def __init__(
        self,
        cookie_store: Optional[SessionCookieStore] = None,
        client: Optional[YTMusicClient] = None
    ):
        """
        Initialize service

        Args:
            cookie_store: Live cookie source, from settings when omitted
            client: API client, the shared instance when omitted
        """
        self.cookie_store = cookie_store or SessionCookieStore.from_settings()
        self.client = client or get_ytmusic_client()
        self.logger = get_logger(__name__)

    def _resolve_auth(self) -> AuthContext:
        return self.cookie_store.resolve()

    def check_auth(self) -> AuthStatus:
        """
        Report whether the current cookies look logged in

        No request is made; see ``resolve_auth`` for the heuristic.
        """
        try:
            auth = self._resolve_auth()
        except YTMusicShellError as e:
            self.logger.warning(f"Cannot inspect session cookies: {e}")
            return AuthStatus(is_authenticated=False, error=e.message)
        return AuthStatus(is_authenticated=auth.is_authenticated)

    def _call(self, operation_name: str, operation, *args) -> ServiceResult:
        try:
            auth = self._resolve_auth()
            if not auth.is_authenticated:
                self.logger.info(f"{operation_name} refused: not logged in")
                return ServiceResult(error=NOT_LOGGED_IN)
            return ServiceResult(data=operation(*args, auth))
        except YTMusicShellError as e:
            self.logger.error(f"{operation_name} failed: {e}")
            return ServiceResult(error=e.message)

    def get_home(self) -> ServiceResult:
        """Home feed shelves, or an error"""
        return self._call("Home", self.client.get_home)

    def search(self, query: str) -> ServiceResult:
        """Song search results for ``query``, or an error"""
        return self._call("Search", self.client.search, query)

    def get_playlist_or_album(self, browse_id: str) -> ServiceResult:
        """
        Playlist or album detail, or an error

        A parse failure inside the response is reported through the
        detail's own ``error`` field and also surfaced as the result error.
        """
        result = self._call("Playlist", self.client.get_playlist_or_album, browse_id)
        if result.ok and result.data.error:
            return ServiceResult(error=result.data.error)
        return result

    def browse(self, item: MediaItem) -> ServiceResult:
        """
        Open a browsable item (album, playlist or mix)

        Args:
            item: Item from a shelf or search result

        Returns:
            Result carrying the PlaylistDetail of ``item.browse_target``
        """
        target = item.browse_target
        if not target:
            return ServiceResult(error=NOTHING_TO_BROWSE)
        return self.get_playlist_or_album(target)
