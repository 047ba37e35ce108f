"""Test the logged-in service facade"""

import pytest
from unittest.mock import Mock

from ytmusic_shell.config.auth import AuthContext
from ytmusic_shell.exceptions import AuthUnavailableError, RequestTimeoutError, ResponseParseError
from ytmusic_shell.ytmusic.models import ItemKind, MediaItem, PlaylistDetail, Shelf
from ytmusic_shell.ytmusic.service import NOT_LOGGED_IN, ServiceResult, YTMusicService


LOGGED_IN = AuthContext(cookie_header="SAPISID=k", signing_key="k", is_authenticated=True)
LOGGED_OUT = AuthContext(cookie_header="SID=x")


@pytest.fixture
def cookie_store():
    store = Mock()
    store.resolve.return_value = LOGGED_IN
    return store


@pytest.fixture
def client():
    return Mock()


@pytest.fixture
def service(cookie_store, client):
    return YTMusicService(cookie_store=cookie_store, client=client)


class TestAuthGate:
    """Test login checks"""

    def test_check_auth(self, service):
        assert service.check_auth().is_authenticated

    def test_check_auth_logged_out(self, service, cookie_store):
        cookie_store.resolve.return_value = LOGGED_OUT
        status = service.check_auth()
        assert not status.is_authenticated
        assert status.error is None

    def test_check_auth_unreadable_cookies(self, service, cookie_store):
        cookie_store.resolve.side_effect = AuthUnavailableError("Cookie file not found: x")
        status = service.check_auth()
        assert not status.is_authenticated
        assert status.to_dict() == {'isLoggedIn': False, 'error': "Cookie file not found: x"}

    @pytest.mark.parametrize("call", [
        lambda s: s.get_home(),
        lambda s: s.search("q"),
        lambda s: s.get_playlist_or_album("MPREb_x"),
    ])
    def test_refused_when_logged_out(self, service, cookie_store, client, call):
        """No request is made without a signing key"""
        cookie_store.resolve.return_value = LOGGED_OUT
        result = call(service)

        assert result.error == NOT_LOGGED_IN
        assert result.to_dict() == {'error': NOT_LOGGED_IN}
        assert not client.method_calls

    def test_auth_resolved_per_call(self, service, cookie_store, client):
        """Logging out between calls is noticed on the next call"""
        client.get_home.return_value = []
        assert service.get_home().ok

        cookie_store.resolve.return_value = LOGGED_OUT
        assert service.get_home().error == NOT_LOGGED_IN
        assert cookie_store.resolve.call_count == 2


class TestOperations:
    """Test delegation and error conversion"""

    def test_get_home(self, service, client):
        shelf = Shelf(title="Quick picks", items=(MediaItem(title="A", video_id="v"),))
        client.get_home.return_value = [shelf]

        result = service.get_home()

        client.get_home.assert_called_once_with(LOGGED_IN)
        assert result.ok
        assert result.to_dict() == {'data': [shelf.to_dict()]}

    def test_search(self, service, client):
        client.search.return_value = []
        result = service.search("barış manço")
        client.search.assert_called_once_with("barış manço", LOGGED_IN)
        assert result.to_dict() == {'data': []}

    def test_transport_error_returned(self, service, client):
        client.search.side_effect = RequestTimeoutError("Request timeout")
        assert service.search("q").to_dict() == {'error': "Request timeout"}

    def test_parse_error_returned(self, service, client):
        client.get_home.side_effect = ResponseParseError("JSON parse error: <html>")
        assert service.get_home().error == "JSON parse error: <html>"

    def test_playlist(self, service, client):
        client.get_playlist_or_album.return_value = PlaylistDetail(title="Karma")
        result = service.get_playlist_or_album("MPREb_x")
        client.get_playlist_or_album.assert_called_once_with("MPREb_x", LOGGED_IN)
        assert result.data.title == "Karma"

    def test_playlist_parse_failure(self, service, client):
        client.get_playlist_or_album.return_value = PlaylistDetail(error="Parse playlist error: x")
        assert service.get_playlist_or_album("MPREb_x").error == "Parse playlist error: x"


class TestBrowse:
    """Test browsing items from shelves and results"""

    def test_browse_album(self, service, client):
        client.get_playlist_or_album.return_value = PlaylistDetail()
        service.browse(MediaItem(title="A", browse_id="MPREb_x", kind=ItemKind.ALBUM))
        client.get_playlist_or_album.assert_called_once_with("MPREb_x", LOGGED_IN)

    def test_browse_raw_playlist(self, service, client):
        """Raw playlist ids get the VL prefix"""
        client.get_playlist_or_album.return_value = PlaylistDetail()
        service.browse(MediaItem(title="P", playlist_id="PL123", kind=ItemKind.PLAYLIST))
        client.get_playlist_or_album.assert_called_once_with("VLPL123", LOGGED_IN)

    def test_browse_song(self, service, client):
        result = service.browse(MediaItem(title="S", video_id="v"))
        assert not result.ok
        assert not client.method_calls


class TestServiceResult:
    def test_to_dict_serializes_models(self):
        detail = PlaylistDetail(title="T", tracks=(MediaItem(title="x", video_id="v"),))
        data = ServiceResult(data=detail).to_dict()['data']
        assert data['title'] == "T"
        assert data['tracks'][0] == {
            'title': "x", 'subtitle': "", 'thumbnail': "", 'videoId': "v",
            'playlistId': None, 'browseId': None, 'type': "song",
        }
