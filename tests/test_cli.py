"""Test the command-line interface"""

import json
from unittest.mock import Mock, patch

from click.testing import CliRunner

from ytmusic_shell import __version__
from ytmusic_shell.config.settings import Settings
from ytmusic_shell.main import cli
from ytmusic_shell.ytmusic.models import ItemKind, MediaItem, PlaylistDetail, Shelf
from ytmusic_shell.ytmusic.service import NOT_LOGGED_IN, AuthStatus, ServiceResult


SONG = MediaItem(title="Kış Güneşi", subtitle="Tarkan • Karma", video_id="vid00000003")
ALBUM = MediaItem(title="Karma", browse_id="MPREb_abc", kind=ItemKind.ALBUM)


def run(args, service=None):
    with patch('ytmusic_shell.main.get_service', return_value=service or Mock()):
        return CliRunner().invoke(cli, args)


class TestCli:
    """Test CLI commands"""

    def test_version(self):
        result = CliRunner().invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_command(self):
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert 'search' in result.output

    def test_home(self):
        service = Mock()
        service.get_home.return_value = ServiceResult(data=[Shelf(title="Quick picks", items=(SONG, ALBUM))])

        result = run(['home'], service)

        assert result.exit_code == 0
        assert "Quick picks" in result.output
        assert "Kış Güneşi" in result.output
        assert "[album]" in result.output
        assert "MPREb_abc" in result.output

    def test_search_json(self):
        service = Mock()
        service.search.return_value = ServiceResult(data=[SONG])

        result = run(['search', 'tarkan', '--json'], service)

        assert result.exit_code == 0
        service.search.assert_called_once_with('tarkan')
        payload = json.loads(result.output)
        assert payload['data'][0]['videoId'] == "vid00000003"
        assert payload['data'][0]['type'] == "song"

    def test_search_invalid_query(self):
        service = Mock()
        result = run(['search', '   '], service)
        assert result.exit_code == 1
        service.search.assert_not_called()

    def test_not_logged_in(self):
        service = Mock()
        service.get_home.return_value = ServiceResult(error=NOT_LOGGED_IN)
        result = run(['home'], service)
        assert result.exit_code == 1
        assert "Not logged in" in result.output

    def test_error_json(self):
        service = Mock()
        service.get_home.return_value = ServiceResult(error="Request timeout")
        result = run(['home', '--json'], service)
        assert result.exit_code == 1
        assert json.loads(result.output) == {'error': "Request timeout"}

    def test_playlist(self):
        service = Mock()
        service.get_playlist_or_album.return_value = ServiceResult(
            data=PlaylistDetail(title="Karma", subtitle="Albüm • Tarkan", tracks=(SONG,))
        )
        result = run(['playlist', 'MPREb_abc'], service)

        assert result.exit_code == 0
        service.get_playlist_or_album.assert_called_once_with('MPREb_abc')
        assert "Tracks: 1" in result.output

    def test_playlist_invalid_id(self):
        result = run(['playlist', 'not valid'])
        assert result.exit_code == 1

    @patch('ytmusic_shell.main.resolve_stream_url', return_value='https://rr1.googlevideo.com/a')
    def test_stream(self, mock_resolve):
        result = CliRunner().invoke(cli, ['stream', 'dQw4w9WgXcQ'])
        assert result.exit_code == 0
        assert 'https://rr1.googlevideo.com/a' in result.output

    def test_auth_status(self):
        service = Mock()
        service.check_auth.return_value = AuthStatus(is_authenticated=True)
        result = run(['auth', 'status'], service)
        assert result.exit_code == 0
        assert "Logged in" in result.output

    def test_auth_status_logged_out(self):
        service = Mock()
        service.check_auth.return_value = AuthStatus(is_authenticated=False)
        result = run(['auth', 'status'], service)
        assert "Not logged in" in result.output

    def test_config_show(self):
        result = CliRunner().invoke(cli, ['config', 'show'])
        assert result.exit_code == 0
        assert "WEB_REMIX" in result.output
        assert "Validation:" in result.output
        assert "OK" in result.output


class TestConfigValidation:
    """Test that unusable settings stop data commands"""

    def invalid_settings(self, temp_dir):
        settings = Settings(str(temp_dir / 'missing.yaml'))
        settings.ytmusic.thumbnail_min_width = 500
        settings.ytmusic.thumbnail_max_width = 100
        return settings

    def test_data_command_refused(self, temp_dir):
        service = Mock()
        with patch('ytmusic_shell.main.get_settings', return_value=self.invalid_settings(temp_dir)):
            result = run(['home'], service)

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        service.get_home.assert_not_called()

    def test_config_show_reports_errors(self, temp_dir):
        with patch('ytmusic_shell.main.get_settings', return_value=self.invalid_settings(temp_dir)):
            result = CliRunner().invoke(cli, ['config', 'show'])

        assert result.exit_code == 0
        assert "Invalid thumbnail band: 500-100" in result.output
